"""Keep a tab's session state in line with the other tabs and the server.

``SessionSync`` listens for auth changes written by other tabs and, on
window focus, asks the server who is signed in. Either signal leads to the
same reconciliation: adopt the new user, and when nobody is signed in any
more, drop the corporation selection and every cached resource list so
that no data from the previous session stays visible.
"""

import logging

import httpx

from procurement.client.api import ApiClient, ApiError
from procurement.client.storage import StorageEvent, TabStorage
from procurement.client.stores import (
    AUTH_STORAGE_KEY,
    AuthStore,
    CorporationStore,
    Record,
    ResourceStore,
    parse_auth_value,
)

logger = logging.getLogger(__name__)


class SessionSync:
    def __init__(
        self,
        storage: TabStorage,
        auth: AuthStore,
        corporations: CorporationStore,
        api: ApiClient,
        stores: list[ResourceStore] | None = None,
    ) -> None:
        self.storage = storage
        self.auth = auth
        self.corporations = corporations
        self.api = api
        self.stores: list[ResourceStore] = list(stores or [])
        self._attached = False

    def register(self, store: ResourceStore) -> None:
        self.stores.append(store)

    def attach(self) -> None:
        if not self._attached:
            self.storage.add_listener(self.on_storage)
            self._attached = True

    def detach(self) -> None:
        if self._attached:
            self.storage.remove_listener(self.on_storage)
            self._attached = False

    def on_storage(self, event: StorageEvent) -> None:
        if event.key != AUTH_STORAGE_KEY:
            return
        if self._reconcile(parse_auth_value(event.new_value)):
            logger.info("Auth state changed in another tab")

    async def on_focus(self) -> bool:
        """Re-check the server session; returns True when local state changed."""
        try:
            session = await self.api.get("/api/auth/session")
        except (ApiError, httpx.TransportError) as exc:
            logger.warning("Could not refresh session on focus: %s", exc)
            return False

        user = (session or {}).get("user")
        changed = self._reconcile(user)
        if changed:
            # Persist what the server said so the other tabs follow
            self.auth.set_user(user)
        return changed

    def _reconcile(self, user: Record | None) -> bool:
        new_id = user.get("id") if user else None
        if new_id == self.auth.user_id:
            return False

        self.auth.sync_auth_state(user)
        if user is None:
            self.corporations.clear_selection()
            for store in self.stores:
                store.clear()
        return True
