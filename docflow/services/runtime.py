# docflow/services/runtime.py

from typing import Optional

import httpx

from docflow.core.storage import CookieJar, LocalStore, Navigator, TokenStorage
from docflow.services.api_client import ApiClient
from docflow.services.api_gateway import DocflowApi
from docflow.services.notification_service import Notifier
from docflow.services.preferences_service import PreferencesStore
from docflow.services.session_service import SessionManager


class ClientRuntime:
    """
    Application root: builds the stores, the API client and the session
    once and hands the same instances to every view.
    """

    def __init__(
        self,
        store: Optional[LocalStore] = None,
        cookies: Optional[CookieJar] = None,
        navigator: Optional[Navigator] = None,
        notifier: Optional[Notifier] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.store = store or LocalStore()
        self.cookies = cookies or CookieJar()
        self.navigator = navigator or Navigator()
        self.notifier = notifier or Notifier()
        self.tokens = TokenStorage(self.store, self.cookies)
        self.client = ApiClient(self.tokens, self.navigator, base_url=base_url, transport=transport)
        self.api = DocflowApi(self.client)
        self.session = SessionManager(self.api, self.tokens, self.navigator)
        self.client.on_unauthorized = self.session.expire
        self.preferences = PreferencesStore(self.store)

    async def start(self) -> "ClientRuntime":
        await self.session.initialize()
        return self

    async def close(self) -> None:
        await self.client.aclose()
        self.store.dispose()

    async def __aenter__(self) -> "ClientRuntime":
        return await self.start()

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
