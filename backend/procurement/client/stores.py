"""Client-side caches of fetched API data.

A ``ResourceStore`` keeps one list per scope (usually a corporation uuid)
and only goes to the API when that scope has not been fetched yet or the
caller forces a refresh. Mutations go through the API first and are then
merged into every cached list the record belongs to.
"""

import json
import logging
from typing import Any, Iterable

from procurement.client.api import ApiClient, ApiError
from procurement.client.storage import TabStorage

logger = logging.getLogger(__name__)

AUTH_STORAGE_KEY = "auth"
CORPORATION_STORAGE_KEY = "corporations"

Record = dict[str, Any]


class ResourceStore:
    path: str = ""
    scope_param: str | None = "corporation_uuid"
    # Lists for a scope also contain global rows (corporation_uuid null)
    includes_global: bool = False
    active_field: str = "status"

    def __init__(self, api: ApiClient) -> None:
        self.api = api
        self.loading = False
        self.error: str | None = None
        self._cache: dict[str | None, list[Record]] = {}

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def items(self, scope: str | None = None) -> tuple[Record, ...]:
        return tuple(self._cache.get(scope, ()))

    def active(self, scope: str | None = None) -> tuple[Record, ...]:
        return tuple(r for r in self.items(scope) if self._is_active(r))

    def find(self, uuid: str) -> Record | None:
        for records in self._cache.values():
            for record in records:
                if record.get("uuid") == uuid:
                    return record
        return None

    def is_cached(self, scope: str | None = None) -> bool:
        return scope in self._cache

    def _is_active(self, record: Record) -> bool:
        value = record.get(self.active_field)
        if self.active_field == "status":
            return value == "ACTIVE"
        return bool(value)

    async def fetch(self, scope: str | None = None, force: bool = False) -> tuple[Record, ...]:
        if not force and scope in self._cache:
            return self.items(scope)

        params = {self.scope_param: scope} if self.scope_param and scope else None
        self.loading = True
        self.error = None
        try:
            data = await self.api.get(self.path, params=params)
        except ApiError as exc:
            self.error = exc.message
            raise
        finally:
            self.loading = False

        self._cache[scope] = list(data or [])
        return self.items(scope)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, payload: Record) -> Record:
        record = await self._mutate(self.api.post(self.path, json=payload))
        for records in self._lists_for(record):
            records.append(record)
        return record

    async def update(self, uuid: str, payload: Record) -> Record:
        record = await self._mutate(self.api.put(f"{self.path}/{uuid}", json=payload))
        for records in self._cache.values():
            for index, existing in enumerate(records):
                if existing.get("uuid") == uuid:
                    records[index] = record
        return record

    async def remove(self, uuid: str) -> None:
        await self._mutate(self.api.delete(f"{self.path}/{uuid}"))
        for scope, records in self._cache.items():
            self._cache[scope] = [r for r in records if r.get("uuid") != uuid]

    def clear(self) -> None:
        self._cache.clear()
        self.error = None

    async def _mutate(self, call) -> Any:
        self.loading = True
        self.error = None
        try:
            return await call
        except ApiError as exc:
            self.error = exc.message
            raise
        finally:
            self.loading = False

    def _lists_for(self, record: Record) -> Iterable[list[Record]]:
        if self.scope_param is None:
            return [self._cache[None]] if None in self._cache else []
        scope = record.get(self.scope_param)
        if scope is None and self.includes_global:
            return list(self._cache.values())
        return [self._cache[scope]] if scope in self._cache else []


# ---------------------------------------------------------------------------
# Concrete stores
# ---------------------------------------------------------------------------


class ChargesStore(ResourceStore):
    path = "/api/charges"
    includes_global = True


class SalesTaxStore(ResourceStore):
    path = "/api/sales-taxes"
    includes_global = True


class UOMStore(ResourceStore):
    path = "/api/uom"


class ShipViaStore(ResourceStore):
    path = "/api/ship-via"
    scope_param = None
    active_field = "active"


class POInstructionsStore(ResourceStore):
    path = "/api/po-instructions"


class TermsAndConditionsStore(ResourceStore):
    path = "/api/terms-and-conditions"
    scope_param = None
    active_field = "is_active"


class ProjectTypesStore(ResourceStore):
    path = "/api/project-types"
    active_field = "is_active"


class ServiceTypesStore(ResourceStore):
    path = "/api/service-types"
    active_field = "is_active"


class LocationsStore(ResourceStore):
    path = "/api/locations"
    scope_param = None
    active_field = "active"


class CostCodeDivisionsStore(ResourceStore):
    path = "/api/cost-code-divisions"
    active_field = "is_active"


class CostCodeConfigurationsStore(ResourceStore):
    path = "/api/cost-code-configurations"
    active_field = "is_active"


class ProjectsStore(ResourceStore):
    path = "/api/projects"
    active_field = "is_active"


class ItemTypesStore(ResourceStore):
    path = "/api/item-types"
    active_field = "is_active"

    def for_project(self, scope: str, project_uuid: str) -> tuple[Record, ...]:
        return tuple(r for r in self.items(scope) if r.get("project_uuid") == project_uuid)


# ---------------------------------------------------------------------------
# Persisted session state
# ---------------------------------------------------------------------------


class AuthStore:
    """The signed-in user, persisted under ``AUTH_STORAGE_KEY``."""

    def __init__(self, storage: TabStorage) -> None:
        self.storage = storage
        self.user: Record | None = None
        self.initialized = False
        self.load()

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def user_id(self) -> str | None:
        return self.user.get("id") if self.user else None

    def load(self) -> None:
        raw = self.storage.get_item(AUTH_STORAGE_KEY)
        self.user = parse_auth_value(raw)
        self.initialized = raw is not None

    def set_user(self, user: Record | None) -> None:
        """Change the user and persist it, which notifies the other tabs."""
        self.user = user
        self.initialized = True
        if user is None:
            self.storage.remove_item(AUTH_STORAGE_KEY)
        else:
            self.storage.set_item(AUTH_STORAGE_KEY, json.dumps({"user": user}))

    def sync_auth_state(self, user: Record | None) -> None:
        """Adopt a user announced by another tab without writing it back."""
        self.user = user
        self.initialized = True

    async def login(self, api: ApiClient, email: str, password: str) -> Record:
        tokens = await api.post("/api/auth/login", json={"email": email, "password": password})
        api.token = tokens["access_token"]
        user = await api.get("/api/auth/me")
        self.set_user(user)
        return user

    async def logout(self, api: ApiClient) -> None:
        try:
            await api.post("/api/auth/logout")
        finally:
            api.token = None
            self.set_user(None)

    async def restore_session(self, api: ApiClient) -> Record | None:
        session = await api.get("/api/auth/session")
        user = (session or {}).get("user")
        self.set_user(user)
        return user


def parse_auth_value(raw: str | None) -> Record | None:
    """Read the user out of a persisted auth value; malformed values mean signed out."""
    if not raw:
        return None
    try:
        value = json.loads(raw)
    except ValueError:
        logger.warning("Ignoring malformed auth state in storage")
        return None
    if not isinstance(value, dict):
        return None
    user = value.get("user")
    return user if isinstance(user, dict) else None


class CorporationStore:
    """Accessible corporations plus the one the user is working in."""

    def __init__(self, storage: TabStorage) -> None:
        self.storage = storage
        self.corporations: list[Record] = []
        self.selected_corporation_uuid: str | None = None
        self.load()

    def load(self) -> None:
        raw = self.storage.get_item(CORPORATION_STORAGE_KEY)
        if not raw:
            return
        try:
            value = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring malformed corporation state in storage")
            return
        if isinstance(value, dict):
            self.selected_corporation_uuid = value.get("selected_corporation_uuid")

    def _persist(self) -> None:
        if self.selected_corporation_uuid is None:
            self.storage.remove_item(CORPORATION_STORAGE_KEY)
        else:
            self.storage.set_item(
                CORPORATION_STORAGE_KEY,
                json.dumps({"selected_corporation_uuid": self.selected_corporation_uuid}),
            )

    @property
    def selected_corporation(self) -> Record | None:
        for corporation in self.corporations:
            if corporation.get("uuid") == self.selected_corporation_uuid:
                return corporation
        return None

    def select(self, corporation_uuid: str) -> None:
        self.selected_corporation_uuid = corporation_uuid
        self._persist()

    def clear_selection(self) -> None:
        self.selected_corporation_uuid = None
        self._persist()

    def clear(self) -> None:
        self.corporations = []
        self.clear_selection()

    async def fetch(self, api: ApiClient) -> list[Record]:
        self.corporations = list(await api.get("/api/corporations") or [])
        known = {c.get("uuid") for c in self.corporations}
        if self.selected_corporation_uuid not in known:
            self.selected_corporation_uuid = (
                self.corporations[0]["uuid"] if self.corporations else None
            )
            self._persist()
        return self.corporations
