import json
from typing import Any, Callable, Optional, Union

import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from docflow.core.storage import CookieJar, LocalStore, Navigator
from docflow.services.runtime import ClientRuntime

BACKEND_URL = "http://backend.test"

Body = Union[dict, list, Callable[[httpx.Request], Any], None]


# ------------------------------------------------------------------
# Fake document/workflow backend behind httpx.MockTransport.
# Routes are (method, path) -> (status, body); every request is kept
# so tests can assert that no call was made.
# ------------------------------------------------------------------
class FakeBackend:
    def __init__(self):
        self.routes: dict[tuple[str, str], tuple[int, Body]] = {}
        self.calls: list[httpx.Request] = []

    def on(self, method: str, path: str, body: Body = None, status: int = 200) -> None:
        self.routes[(method.upper(), path)] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"success": False, "message": "Not found"})
        status, body = route
        if callable(body):
            body = body(request)
        return httpx.Response(status, json=body)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls_to(self, method: str, path: str) -> list[httpx.Request]:
        return [c for c in self.calls if c.method == method.upper() and c.url.path == path]

    def last_json(self, method: str, path: str) -> Optional[dict]:
        calls = self.calls_to(method, path)
        return json.loads(calls[-1].content) if calls else None


def make_user(role: str = "department", **overrides) -> dict:
    user = {
        "_id": f"u-{role}",
        "firstName": role.capitalize(),
        "lastName": "User",
        "email": f"{role}@example.com",
        "role": role,
        "department": {"_id": "d-1", "name": "Finance"} if role != "admin" else None,
        "isActive": True,
    }
    user.update(overrides)
    return user


def make_request(request_id: str = "r-1", status: str = "pending", **overrides) -> dict:
    request = {
        "_id": request_id,
        "title": f"Budget request {request_id}",
        "description": "Q3 budget",
        "targetDepartment": {"_id": "d-1", "name": "Finance"},
        "priority": "high",
        "status": status,
        "createdBy": {"firstName": "Ana", "lastName": "Lee", "email": "ana@example.com"},
        "attachments": [],
    }
    request.update(overrides)
    return request


def make_file(file_id: str = "f-1", status: str = "draft", **overrides) -> dict:
    file = {
        "_id": file_id,
        "title": f"Document {file_id}",
        "status": status,
        "attachment": {"name": f"{file_id}.pdf", "url": f"/uploads/{file_id}.pdf", "size": 2048},
        "sharedWith": [],
    }
    file.update(overrides)
    return file


def make_department(dept_id: str = "d-1", name: str = "Finance", **overrides) -> dict:
    department = {"_id": dept_id, "name": name, "code": name[:3].upper(), "isActive": True}
    department.update(overrides)
    return department


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def store(tmp_path):
    local = LocalStore(f"sqlite:///{tmp_path / 'store.db'}")
    yield local
    local.dispose()


@pytest_asyncio.fixture
async def runtime(store, backend):
    rt = ClientRuntime(
        store=store,
        cookies=CookieJar(),
        navigator=Navigator("/"),
        base_url=BACKEND_URL,
        transport=backend.transport(),
    )
    yield rt
    await rt.close()


@pytest.fixture
def login_as(runtime, backend):
    """Signs the runtime in as the given role through the fake backend."""

    async def _login(role: str = "department", **overrides):
        user = make_user(role, **overrides)
        backend.on("POST", "/api/auth/login", {"success": True, "token": f"tok-{role}", "user": user})
        backend.on("GET", "/api/auth/me", {"success": True, "user": user})
        return await runtime.session.login(user["email"], "secret123")

    return _login


@pytest_asyncio.fixture
async def client():
    from docflow.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac
