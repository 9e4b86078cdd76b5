# docflow/views/base.py

from typing import Iterable

from loguru import logger

from docflow.core.errors import ApiError
from docflow.core.rbac import evaluate_access
from docflow.core.roles import ALL_ROLES
from docflow.models.enums import Role
from docflow.services.runtime import ClientRuntime
from docflow.services.scope import ScopeClosed, ViewScope


class View:
    """
    Page controller. mount() runs the authorization gate before anything
    else: a denied view navigates away and never issues a fetch.
    """

    name: str = "view"
    required_roles: Iterable[Role] = ALL_ROLES
    load_error: str = "Failed to load data"

    def __init__(self, runtime: ClientRuntime):
        self.runtime = runtime
        self.api = runtime.api
        self.session = runtime.session
        self.notifier = runtime.notifier
        self.navigator = runtime.navigator
        self.scope = ViewScope(self.name)
        self.loading = False
        self.mounted = False

    async def mount(self) -> bool:
        decision = evaluate_access(self.session, self.required_roles)
        if not decision.allow:
            logger.info(f"{self.name}: access denied, redirecting to {decision.redirect_target}")
            self.navigator.navigate(decision.redirect_target)
            return False

        self.mounted = True
        await self.refresh()
        return True

    async def refresh(self) -> None:
        self.loading = True
        try:
            await self.scope.run(self.load())
        except ScopeClosed:
            logger.debug(f"{self.name}: closed before load finished")
        except ApiError as exc:
            self.notifier.error("Error", exc.message or self.load_error)
        finally:
            self.loading = False

    async def load(self) -> None:
        """Fetch the view's working set. Runs inside the view's scope."""

    def close(self) -> None:
        self.mounted = False
        self.scope.close()
