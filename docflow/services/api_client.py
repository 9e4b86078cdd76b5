# docflow/services/api_client.py

from typing import Any, Callable, Optional

import httpx
from loguru import logger

from docflow.core.config import settings
from docflow.core.errors import ApiError
from docflow.core.storage import Navigator, TokenStorage
from docflow.schemas.envelope import ApiResponse


def _error_message(response: Optional[httpx.Response], fallback: str) -> str:
    """Server message first, then server error, then the transport reason."""
    if response is not None:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            for key in ("message", "error", "detail"):
                if isinstance(body.get(key), str) and body[key]:
                    return body[key]
    return fallback


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class ApiClient:
    """
    Thin transport over httpx: attaches the bearer token at send time,
    wraps successful bodies into the uniform envelope and converts every
    failure into ApiError. A 401 tears the stored session down and sends
    the user back to the login page; on_unauthorized lets the session
    owner drop its in-memory state at the same moment. No retries.
    """

    def __init__(
        self,
        tokens: TokenStorage,
        navigator: Optional[Navigator] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
        on_unauthorized: Optional[Callable[[], None]] = None,
    ):
        self.tokens = tokens
        self.navigator = navigator
        self.on_unauthorized = on_unauthorized
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            timeout=timeout or settings.API_TIMEOUT_SECONDS,
            transport=transport,
        )

    # ------------------------------------------------------------
    # Interceptors
    # ------------------------------------------------------------
    def _auth_headers(self) -> dict[str, str]:
        token = self.tokens.get_token()
        return {"Authorization": f"Bearer {token}"} if token else {}

    def _handle_unauthorized(self) -> None:
        logger.warning("Backend answered 401; clearing session")
        self.tokens.clear()
        if self.on_unauthorized is not None:
            self.on_unauthorized()
        if self.navigator is not None:
            self.navigator.navigate(settings.LOGIN_PATH)

    # ------------------------------------------------------------
    # Generic request handler
    # ------------------------------------------------------------
    async def request(
        self,
        method: str,
        endpoint: str,
        json: Any = None,
        params: Optional[dict] = None,
        files: Any = None,
        data: Optional[dict] = None,
        timeout: Optional[float] = None,
        fallback_error: str = "An error occurred",
    ) -> ApiResponse:
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        kwargs: dict[str, Any] = {"params": params or None, "headers": self._auth_headers()}
        if files is not None or data is not None:
            # multipart: httpx sets the boundary content-type itself
            kwargs["files"] = files
            kwargs["data"] = data
        elif json is not None:
            kwargs["json"] = json
        if timeout is not None:
            kwargs["timeout"] = timeout

        try:
            response = await self._client.request(method, endpoint, **kwargs)
        except httpx.HTTPError as exc:
            logger.error(f"API Error: {method} {endpoint} -> {exc!r}")
            raise ApiError(str(exc) or fallback_error) from exc

        if response.status_code == 401:
            self._handle_unauthorized()
            raise ApiError("Unauthorized access", 401, _json_or_none(response))

        if response.is_error:
            message = _error_message(response, response.reason_phrase or fallback_error)
            logger.error(f"API Error: {method} {endpoint} -> {response.status_code} {message}")
            raise ApiError(message, response.status_code, _json_or_none(response))

        body = _json_or_none(response)
        if isinstance(body, dict) and body.get("success") is False:
            return ApiResponse(
                success=False,
                data=body.get("data"),
                error=body.get("error") or body.get("message"),
                message=body.get("message"),
            )
        return ApiResponse(success=True, data=body if body is not None else response.content)

    # ------------------------------------------------------------
    # CRUD methods
    # ------------------------------------------------------------
    async def get(self, endpoint: str, params: Optional[dict] = None) -> ApiResponse:
        return await self.request("GET", endpoint, params=params)

    async def post(self, endpoint: str, data: Any = None) -> ApiResponse:
        return await self.request("POST", endpoint, json=data)

    async def put(self, endpoint: str, data: Any = None) -> ApiResponse:
        return await self.request("PUT", endpoint, json=data)

    async def delete(self, endpoint: str) -> ApiResponse:
        return await self.request("DELETE", endpoint)

    async def upload_form(self, endpoint: str, fields: dict, files: dict) -> ApiResponse:
        logger.info(f"Uploading form data to {endpoint} ({', '.join(files)})")
        return await self.request(
            "POST",
            endpoint,
            data=fields,
            files=files,
            timeout=settings.UPLOAD_TIMEOUT_SECONDS,
            fallback_error="Upload failed",
        )

    async def download(self, endpoint: str, params: Optional[dict] = None) -> bytes:
        response = await self.request("GET", endpoint, params=params)
        if isinstance(response.data, (bytes, bytearray)):
            return bytes(response.data)
        raise ApiError("Expected a binary download")

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
