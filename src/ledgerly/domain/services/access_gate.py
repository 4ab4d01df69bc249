"""Access gates for dashboard pages and individual controls.

A PageGate guards a whole dashboard route. It starts in LOADING while the
permission snapshot is fetched, then settles on GRANTED or DENIED. Settling
on DENIED fires the redirect callback exactly once; a settled gate never
transitions again. A failed snapshot fetch settles on DENIED.

A ControlGate guards one interactive control (e.g., a "Create Invoice"
button) and renders it only when the required access level is satisfied.
"""

from collections.abc import Awaitable, Callable, Mapping
from enum import Enum
from typing import Any

from ledgerly.core.logging import get_logger
from ledgerly.domain.entities.access_level import AccessLevel
from ledgerly.domain.entities.feature import DEFAULT_SAFE_PATH
from ledgerly.domain.entities.permission import DENIED, AccessDecision
from ledgerly.domain.services.permission_resolver import resolve_access

logger = get_logger(__name__)

READ_ONLY_NOTICE = "You have view-only access"

SnapshotFetcher = Callable[[], Awaitable[Mapping[str, AccessLevel | str]]]
RedirectCallback = Callable[[str], Any]


class GateState(str, Enum):
    LOADING = "loading"
    GRANTED = "granted"
    DENIED = "denied"


class PageGate:
    """Page-level gate for one mounted dashboard route."""

    def __init__(
        self,
        role: str,
        page_path: str,
        on_redirect: RedirectCallback | None = None,
        safe_path: str = DEFAULT_SAFE_PATH,
    ) -> None:
        """Initialize the gate in the LOADING state.

        Args:
            role: Role of the session user.
            page_path: Path of the guarded page.
            on_redirect: Called with the safe path when the gate denies access.
            safe_path: Where a denied user is sent.
        """
        self.role = role
        self.page_path = page_path
        self.safe_path = safe_path
        self._on_redirect = on_redirect
        self._state = GateState.LOADING
        self._decision: AccessDecision | None = None
        self._redirected = False

    @property
    def state(self) -> GateState:
        return self._state

    @property
    def decision(self) -> AccessDecision:
        """Current decision; DENIED until the gate is granted."""
        return self._decision or DENIED

    @property
    def redirected(self) -> bool:
        return self._redirected

    @property
    def is_settled(self) -> bool:
        return self._state is not GateState.LOADING

    def should_render(self) -> bool:
        """Whether the page's sensitive content may be rendered."""
        return self._state is GateState.GRANTED

    async def load(self, fetch_snapshot: SnapshotFetcher) -> GateState:
        """Fetch the snapshot and settle the gate.

        Calling load on a settled gate is a no-op.

        Args:
            fetch_snapshot: Coroutine factory returning the role's snapshot.

        Returns:
            The settled state.
        """
        if self.is_settled:
            return self._state

        try:
            snapshot = await fetch_snapshot()
        except Exception as e:
            logger.warning(
                "Permission fetch failed, denying page",
                role=self.role,
                page_path=self.page_path,
                error=str(e),
            )
            self._deny()
            return self._state

        return self.evaluate(snapshot)

    def evaluate(self, snapshot: Mapping[str, AccessLevel | str]) -> GateState:
        """Settle the gate from an already-fetched snapshot."""
        if self.is_settled:
            return self._state

        decision = resolve_access(self.role, self.page_path, snapshot)
        if decision.has_access:
            self._decision = decision
            self._state = GateState.GRANTED
        else:
            self._deny()
        return self._state

    def _deny(self) -> None:
        self._state = GateState.DENIED
        self._decision = DENIED
        if self._redirected:
            return
        self._redirected = True
        logger.info(
            "Page access denied, redirecting",
            role=self.role,
            page_path=self.page_path,
            redirect_to=self.safe_path,
        )
        if self._on_redirect is not None:
            self._on_redirect(self.safe_path)


class ControlGate:
    """Control-level gate rendering a child only when access suffices.

    Example:
        gate = ControlGate(session.check("/dashboard/invoices"), AccessLevel.EDIT)
        button = gate.render("Create Invoice")
    """

    def __init__(
        self,
        decision: AccessDecision,
        required: AccessLevel = AccessLevel.VIEW,
    ) -> None:
        self.decision = decision
        self.required = required

    @property
    def allowed(self) -> bool:
        return self.decision.satisfies(self.required)

    def render(self, child: Any, fallback: Any = None) -> Any:
        """Return the child when allowed, otherwise the fallback."""
        return child if self.allowed else fallback

    @property
    def read_only_notice(self) -> str | None:
        """Banner text for users who may view but not edit."""
        if self.decision.can_view and not self.decision.can_edit:
            return READ_ONLY_NOTICE
        return None
