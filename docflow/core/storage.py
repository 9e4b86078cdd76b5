# docflow/core/storage.py

import json
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from loguru import logger
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine, select

from docflow.core.config import settings
from docflow.models.store import StoredItem

TOKEN_KEY = "token"
ROLE_KEY = "userRole"


# ----------------------------------------------------
# Script-accessible key/value store (SQLite backed)
# ----------------------------------------------------
class LocalStore:
    def __init__(self, url: Optional[str] = None):
        self.url = url or settings.STORE_URL
        connect_args = {"check_same_thread": False} if self.url.startswith("sqlite") else {}
        engine_kwargs = {}
        # in-memory databases vanish per connection unless the pool is shared
        if self.url in ("sqlite://", "sqlite:///:memory:"):
            engine_kwargs["poolclass"] = StaticPool
        self.engine = create_engine(self.url, echo=False, connect_args=connect_args, **engine_kwargs)
        SQLModel.metadata.create_all(self.engine, tables=[StoredItem.__table__])

    def get_item(self, key: str) -> Optional[str]:
        with Session(self.engine) as session:
            item = session.get(StoredItem, key)
            return item.value if item else None

    def set_item(self, key: str, value: str) -> None:
        with Session(self.engine) as session:
            item = session.get(StoredItem, key)
            if item is None:
                item = StoredItem(key=key, value=value)
            else:
                item.value = value
            session.add(item)
            session.commit()

    def remove_item(self, key: str) -> None:
        with Session(self.engine) as session:
            item = session.get(StoredItem, key)
            if item is not None:
                session.delete(item)
                session.commit()

    def keys(self) -> list[str]:
        with Session(self.engine) as session:
            return list(session.exec(select(StoredItem.key)).all())

    def get_json(self, key: str) -> Any:
        raw = self.get_item(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Discarding unreadable value stored under '{key}'")
            return None

    def set_json(self, key: str, value: Any) -> None:
        self.set_item(key, json.dumps(value))

    def dispose(self) -> None:
        self.engine.dispose()


# ----------------------------------------------------
# HTTP-readable cookies (path + max-age semantics)
# ----------------------------------------------------
@dataclass
class _CookieEntry:
    value: str
    path: str
    expires_at: Optional[float]


class CookieJar:
    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._entries: dict[str, _CookieEntry] = {}
        self.set_cookie_log: list[str] = []

    def set(self, name: str, value: str, max_age: Optional[int] = None, path: str = "/") -> str:
        header = f"{name}={value}; path={path}"
        if max_age is not None:
            header += f"; max-age={max_age}"

        if max_age is not None and max_age <= 0:
            self._entries.pop(name, None)
        else:
            expires_at = self._clock() + max_age if max_age is not None else None
            self._entries[name] = _CookieEntry(value=value, path=path, expires_at=expires_at)

        self.set_cookie_log.append(header)
        return header

    def get(self, name: str) -> Optional[str]:
        entry = self._entries.get(name)
        if entry is None:
            return None
        if entry.expires_at is not None and entry.expires_at <= self._clock():
            del self._entries[name]
            return None
        return entry.value

    def delete(self, name: str, path: str = "/") -> str:
        return self.set(name, "", max_age=0, path=path)

    def as_dict(self) -> dict[str, str]:
        values = {}
        for name in list(self._entries):
            value = self.get(name)
            if value is not None:
                values[name] = value
        return values

    def header(self) -> str:
        return "; ".join(f"{name}={value}" for name, value in self.as_dict().items())


# ----------------------------------------------------
# Token + cached role, mirrored into both stores
# ----------------------------------------------------
class TokenStorage:
    def __init__(self, store: LocalStore, cookies: CookieJar, max_age: Optional[int] = None):
        self.store = store
        self.cookies = cookies
        self.max_age = max_age if max_age is not None else settings.TOKEN_COOKIE_MAX_AGE

    def set_token(self, token: str) -> None:
        self.store.set_item(TOKEN_KEY, token)
        self.cookies.set(TOKEN_KEY, token, max_age=self.max_age)

    def get_token(self) -> Optional[str]:
        # script store first, cookie as fallback
        return self.store.get_item(TOKEN_KEY) or self.cookies.get(TOKEN_KEY)

    def set_role(self, role: str) -> None:
        self.store.set_item(ROLE_KEY, role)
        self.cookies.set(ROLE_KEY, role, max_age=self.max_age)

    def get_role(self) -> Optional[str]:
        return self.store.get_item(ROLE_KEY) or self.cookies.get(ROLE_KEY)

    def clear(self) -> None:
        for key in (TOKEN_KEY, ROLE_KEY):
            self.store.remove_item(key)
            if self.cookies.get(key) is not None:
                self.cookies.delete(key)


# ----------------------------------------------------
# Navigation (full page loads only)
# ----------------------------------------------------
class Navigator:
    def __init__(self, start: Optional[str] = None):
        self.location = start or settings.HOME_PATH
        self.history: list[str] = [self.location]

    def navigate(self, path: str) -> None:
        logger.debug(f"Navigating to {path}")
        self.location = path
        self.history.append(path)
