from pydantic import BaseModel


class BlogLikeRequest(BaseModel):
    ip_address: str | None = None
    user_agent: str | None = None


class BlogViewRequest(BlogLikeRequest):
    referrer: str | None = None
    device_type: str | None = None
