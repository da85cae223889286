import json

import httpx
import pytest

from edge.app.infrastructure.baas.httpx_baas_client import HttpxBaasClient
from edge.app.ports.baas_client import BaasError

BASE_URL = "https://project.supabase.co"
SERVICE_KEY = "service-role-key"


def _client(handler) -> HttpxBaasClient:
    transport = httpx.MockTransport(handler)
    return HttpxBaasClient(httpx.AsyncClient(transport=transport, base_url=BASE_URL), service_key=SERVICE_KEY)


@pytest.mark.asyncio
async def test_rpc_posts_with_service_key():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    client = _client(handler)
    result = await client.rpc("initialize_complete_schema")
    await client.close()

    assert result is None
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/rest/v1/rpc/initialize_complete_schema"
    assert request.headers["apikey"] == SERVICE_KEY
    assert request.headers["Authorization"] == f"Bearer {SERVICE_KEY}"


@pytest.mark.asyncio
async def test_select_builds_postgrest_query():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[{"id": "s-1"}])

    client = _client(handler)
    rows = await client.select("services", "id", filters={"slug": "eq.backup"}, order="created_at", limit=1, offset=5)

    assert rows == [{"id": "s-1"}]
    params = seen[0].url.params
    assert seen[0].url.path == "/rest/v1/services"
    assert params["select"] == "id"
    assert params["slug"] == "eq.backup"
    assert params["order"] == "created_at"
    assert params["limit"] == "1"
    assert params["offset"] == "5"


@pytest.mark.asyncio
async def test_select_one_returns_none_for_empty_result():
    client = _client(lambda request: httpx.Response(200, json=[]))
    assert await client.select_one("user_profiles", "role", filters={"user_id": "eq.u1"}) is None


@pytest.mark.asyncio
async def test_error_response_becomes_baas_error():
    client = _client(lambda request: httpx.Response(404, json={"message": 'relation "blog_posts" does not exist'}))
    with pytest.raises(BaasError) as exc_info:
        await client.select("blog_posts")
    assert exc_info.value.status_code == 404
    assert "does not exist" in str(exc_info.value)


@pytest.mark.asyncio
async def test_timeout_becomes_baas_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    client = _client(handler)
    with pytest.raises(BaasError) as exc_info:
        await client.rpc("seed_services_and_packages")
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_insert_asks_for_representation():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json=[{"id": "c-9", **json.loads(request.content)}])

    client = _client(handler)
    row = await client.insert("contact_forms", {"name": "Jane", "status": "new"})

    assert row == {"id": "c-9", "name": "Jane", "status": "new"}
    assert seen[0].headers["Prefer"] == "return=representation"


@pytest.mark.asyncio
async def test_count_reads_content_range():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, headers={"content-range": "0-0/42"})

    client = _client(handler)
    assert await client.count("user_profiles") == 42
    assert seen[0].method == "HEAD"
    assert seen[0].headers["Prefer"] == "count=exact"


@pytest.mark.asyncio
async def test_get_user_sends_user_token():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": "u-1", "email": "jane@example.com"})

    client = _client(handler)
    user = await client.get_user("user-jwt")

    assert user == {"id": "u-1", "email": "jane@example.com"}
    assert seen[0].url.path == "/auth/v1/user"
    assert seen[0].headers["Authorization"] == "Bearer user-jwt"
    assert seen[0].headers["apikey"] == SERVICE_KEY


@pytest.mark.asyncio
async def test_get_user_rejected_token_raises():
    client = _client(lambda request: httpx.Response(401, json={"msg": "invalid JWT"}))
    with pytest.raises(BaasError) as exc_info:
        await client.get_user("bad-token")
    assert exc_info.value.status_code == 401
    assert str(exc_info.value) == "invalid JWT"


@pytest.mark.asyncio
async def test_create_user_confirms_email():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json={"id": "u-2", "email": "new@example.com"})

    client = _client(handler)
    user = await client.create_user(email="new@example.com", password="secret", user_metadata={"firstName": "New"})

    assert user["id"] == "u-2"
    assert seen[0]["email_confirm"] is True
    assert seen[0]["user_metadata"] == {"firstName": "New"}


@pytest.mark.asyncio
async def test_upsert_merges_on_conflict_column():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json=[{"id": "n-1", "email": "reader@example.com"}])

    client = _client(handler)
    row = await client.upsert("newsletters", {"email": "reader@example.com"}, on_conflict="email")

    assert row["id"] == "n-1"
    assert seen[0].url.params["on_conflict"] == "email"
    assert "resolution=merge-duplicates" in seen[0].headers["Prefer"]
