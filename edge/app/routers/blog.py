from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from loguru import logger

from edge.app.constants import Table
from edge.app.core import SERVICE_NAME
from edge.app.ports.baas_client import BaasError
from edge.app.routers.utils import baas_from, error_response
from edge.app.schemas.blog import BlogLikeRequest, BlogViewRequest
from edge.app.services.fallback_content import sample_blog_posts

BLOG_POST_COLUMNS = "*,blog_likes:blog_likes(count),blog_views:blog_views(count)"

blog_router = APIRouter(prefix="/blog", tags=["Blog"])


@blog_router.get(
    "/posts",
    summary="Published blog posts",
    description="Newest first. Falls back to built-in sample posts when the datastore is unavailable.",
)
async def list_posts(request: Request) -> JSONResponse:
    baas = baas_from(request)
    if baas is None:
        return JSONResponse(content={"posts": sample_blog_posts()})

    try:
        posts = await baas.select(
            Table.BLOG_POSTS,
            BLOG_POST_COLUMNS,
            filters={"published": "eq.true"},
            order="created_at.desc",
        )
    except BaasError as exc:
        logger.bind(service_name=SERVICE_NAME, event="blog_posts_fallback", error=str(exc)).warning("")
        posts = sample_blog_posts()
    return JSONResponse(content={"posts": posts})


@blog_router.post(
    "/{post_id}/like",
    summary="Like a blog post",
    responses={500: {"description": "Like not stored."}, 503: {"description": "BaaS unavailable."}},
)
async def like_post(request: Request, post_id: str, body: BlogLikeRequest | None = None) -> JSONResponse:
    baas = baas_from(request)
    if baas is None:
        return error_response(503, "Service not available")

    details = body or BlogLikeRequest()
    try:
        await baas.insert(Table.BLOG_LIKES, {"post_id": post_id, **details.model_dump()})
    except BaasError as exc:
        logger.bind(service_name=SERVICE_NAME, event="blog_like_failed", post_id=post_id, error=str(exc)).warning("")
        return error_response(500, "Failed to like post")
    return JSONResponse(content={"message": "Post liked successfully"})


@blog_router.post(
    "/{post_id}/view",
    summary="Record a blog post view",
    description="Always acknowledged; a view that cannot be stored is only logged.",
)
async def view_post(request: Request, post_id: str, body: BlogViewRequest | None = None) -> JSONResponse:
    baas = baas_from(request)
    details = body or BlogViewRequest()
    if baas is not None:
        try:
            await baas.insert(Table.BLOG_VIEWS, {"post_id": post_id, **details.model_dump()})
        except BaasError as exc:
            logger.bind(service_name=SERVICE_NAME, event="blog_view_failed", post_id=post_id, error=str(exc)).warning("")
    return JSONResponse(content={"message": "View tracked"})
