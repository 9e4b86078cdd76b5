import httpx
import pytest

from docflow.core.errors import ApiError
from docflow.core.storage import CookieJar, LocalStore, Navigator, TOKEN_KEY, TokenStorage
from docflow.services.api_client import ApiClient
from docflow.models.enums import Role
from docflow.schemas.request import RequestCreate
from docflow.schemas.user import UserCreate
from docflow.services.api_gateway import DocflowApi


@pytest.fixture
def tokens():
    store = LocalStore("sqlite://")
    yield TokenStorage(store, CookieJar())
    store.dispose()


def make_client(tokens, handler, navigator=None):
    return ApiClient(
        tokens,
        navigator,
        base_url="http://backend.test",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_bearer_token_attached_at_send_time(tokens):
    seen = []

    def handler(request):
        seen.append(request.headers.get("Authorization"))
        return httpx.Response(200, json={"success": True})

    async with make_client(tokens, handler) as client:
        await client.get("/api/users")
        tokens.set_token("abc")
        await client.get("/api/users")

    assert seen == [None, "Bearer abc"]


@pytest.mark.asyncio
async def test_none_params_are_dropped(tokens):
    seen = []

    def handler(request):
        seen.append(dict(request.url.params))
        return httpx.Response(200, json={"success": True, "files": []})

    async with make_client(tokens, handler) as client:
        await DocflowApi(client).list_files(status="draft")

    assert seen == [{"status": "draft"}]


@pytest.mark.asyncio
async def test_success_false_envelope_is_not_raised_by_transport(tokens):
    def handler(request):
        return httpx.Response(200, json={"success": False, "error": "Quota exceeded"})

    async with make_client(tokens, handler) as client:
        response = await client.post("/api/requests", {"title": "x"})
        assert response.success is False
        assert response.error == "Quota exceeded"

        # the gateway treats it exactly like a thrown error
        with pytest.raises(ApiError, match="Quota exceeded"):
            await DocflowApi(client).list_requests()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body, expected",
    [
        ({"message": "Department code taken", "error": "conflict"}, "Department code taken"),
        ({"error": "conflict"}, "conflict"),
        ({}, "Conflict"),
    ],
)
async def test_error_message_precedence(tokens, body, expected):
    def handler(request):
        return httpx.Response(409, json=body)

    async with make_client(tokens, handler) as client:
        with pytest.raises(ApiError) as exc:
            await client.post("/api/departments", {"name": "Finance"})

    assert exc.value.status == 409
    assert exc.value.message == expected


@pytest.mark.asyncio
async def test_unauthorized_clears_session_and_redirects(tokens):
    tokens.set_token("expired")
    tokens.set_role("admin")
    navigator = Navigator("/dashboard")

    def handler(request):
        return httpx.Response(401, json={"message": "jwt expired"})

    async with make_client(tokens, handler, navigator) as client:
        with pytest.raises(ApiError) as exc:
            await client.get("/api/users")

    assert exc.value.status == 401
    assert tokens.get_token() is None
    assert tokens.cookies.get(TOKEN_KEY) is None
    assert tokens.get_role() is None
    assert navigator.location == "/login"


@pytest.mark.asyncio
async def test_network_failure_becomes_api_error(tokens):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(tokens, handler) as client:
        with pytest.raises(ApiError, match="connection refused"):
            await client.get("/api/users")


@pytest.mark.asyncio
async def test_upload_sends_multipart(tokens):
    seen = {}

    def handler(request):
        seen["content_type"] = request.headers["Content-Type"]
        seen["body"] = request.content
        return httpx.Response(201, json={"success": True, "file": {"_id": "f-9", "title": "Plan"}})

    async with make_client(tokens, handler) as client:
        file = await DocflowApi(client).upload_file({"title": "Plan"}, "plan.pdf", b"%PDF-1.4", "application/pdf")

    assert file.id == "f-9"
    assert seen["content_type"].startswith("multipart/form-data")
    assert b"plan.pdf" in seen["body"]


@pytest.mark.asyncio
async def test_create_user_routes_by_role(tokens):
    paths = []

    def handler(request):
        paths.append(request.url.path)
        return httpx.Response(201, json={"success": True, "user": {
            "_id": "u-1", "email": "x@example.com", "role": "director",
        }})

    async with make_client(tokens, handler) as client:
        api = DocflowApi(client)
        for role in (Role.Admin, Role.Director, Role.Department):
            await api.create_user(UserCreate(
                first_name="A", last_name="B", email="x@example.com", password="secret1", role=role,
            ))

    assert paths == [
        "/api/auth/register",
        "/api/auth/register-director",
        "/api/auth/department/register",
    ]


@pytest.mark.asyncio
async def test_gateway_requests_and_notifications(tokens):
    seen = []

    def handler(request):
        seen.append((request.method, request.url.path))
        if request.url.path == "/api/requests":
            return httpx.Response(201, json={"success": True, "request": {
                "_id": "r-7", "title": "New laptop", "targetDepartment": {"_id": "d-2"},
            }})
        if request.url.path == "/api/notifications":
            return httpx.Response(200, json={"success": True, "notifications": [{"_id": "n-1"}]})
        return httpx.Response(200, json={"success": True})

    async with make_client(tokens, handler) as client:
        api = DocflowApi(client)
        created = await api.create_request(RequestCreate(title="New laptop", target_department="d-2"))
        notifications = await api.list_notifications()
        await api.mark_notification_read("n-1")
        await api.mark_all_notifications_read()
        await api.delete_file("f-1")

    assert created.id == "r-7"
    assert created.target_department == "d-2"
    assert [n.id for n in notifications] == ["n-1"]
    assert seen == [
        ("POST", "/api/requests"),
        ("GET", "/api/notifications"),
        ("PUT", "/api/notifications/n-1/read"),
        ("GET", "/api/notifications/read-all"),
        ("DELETE", "/api/structure/file/f-1"),
    ]


@pytest.mark.asyncio
async def test_download_returns_raw_bytes(tokens):
    def handler(request):
        return httpx.Response(200, content=b"%PDF-1.4", headers={"Content-Type": "application/pdf"})

    async with make_client(tokens, handler) as client:
        assert await client.download("/api/structure/file/f-1/download") == b"%PDF-1.4"


@pytest.mark.asyncio
async def test_bare_success_envelope_yields_no_entity(tokens):
    def handler(request):
        return httpx.Response(200, json={"success": True, "message": "Saved"})

    async with make_client(tokens, handler) as client:
        api = DocflowApi(client)
        created = await api.create_request(RequestCreate(title="Chairs", target_department="d-2"))
        user = await api.create_user(UserCreate(
            first_name="Ada", last_name="Admin", email="ada@example.com", password="secret1", role="admin",
        ))
        folder = await api.create_folder({"name": "Invoices"})
        profile = await api.update_profile({"firstName": "Ada"})

    assert created is None
    assert user is None
    assert folder is None
    assert profile is None
