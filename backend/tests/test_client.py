import json

import httpx
import pytest
from httpx import ASGITransport

from procurement.client.api import ApiClient, ApiError
from procurement.client.links import PrintLinks
from procurement.client.session import SessionSync
from procurement.client.storage import BrowserStorage, StorageEvent
from procurement.client.stores import (
    AUTH_STORAGE_KEY,
    CORPORATION_STORAGE_KEY,
    AuthStore,
    ChargesStore,
    CorporationStore,
    ShipViaStore,
    parse_auth_value,
)
from procurement.client.theme import THEME_STORAGE_KEY, ThemePreference

from conftest import PASSWORD


@pytest.fixture
async def api(app, admin):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with ApiClient(
        "http://test", token=admin["tokens"]["access_token"], transport=transport
    ) as client:
        yield client


@pytest.fixture
async def anonymous_api(app):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with ApiClient("http://test", transport=transport) as client:
        yield client


class TestBrowserStorage:
    def test_other_tabs_are_notified(self):
        storage = BrowserStorage()
        first, second = storage.open_tab(), storage.open_tab()
        seen_first: list[StorageEvent] = []
        seen_second: list[StorageEvent] = []
        first.add_listener(seen_first.append)
        second.add_listener(seen_second.append)

        first.set_item("auth", "a")
        assert second.get_item("auth") == "a"
        assert seen_first == []
        assert seen_second == [StorageEvent(key="auth", old_value=None, new_value="a")]

    def test_unchanged_value_is_silent(self):
        storage = BrowserStorage()
        first, second = storage.open_tab(), storage.open_tab()
        seen: list[StorageEvent] = []
        second.add_listener(seen.append)

        first.set_item("theme", "dark")
        first.set_item("theme", "dark")
        first.remove_item("missing")
        assert len(seen) == 1

    def test_closed_tab_stops_listening(self):
        storage = BrowserStorage()
        first, second = storage.open_tab(), storage.open_tab()
        seen: list[StorageEvent] = []
        second.add_listener(seen.append)
        storage.close_tab(second)

        first.set_item("auth", "a")
        assert seen == []


class TestAuthState:
    def test_parse_auth_value(self):
        assert parse_auth_value(None) is None
        assert parse_auth_value("{not json") is None
        assert parse_auth_value(json.dumps(["x"])) is None
        assert parse_auth_value(json.dumps({"user": None})) is None
        assert parse_auth_value(json.dumps({"user": {"id": "u1"}})) == {"id": "u1"}

    def test_set_user_persists_and_clears(self):
        tab = BrowserStorage().open_tab()
        auth = AuthStore(tab)
        assert auth.initialized is False

        auth.set_user({"id": "u1", "email": "a@example.com"})
        assert json.loads(tab.get_item(AUTH_STORAGE_KEY)) == {"user": {"id": "u1", "email": "a@example.com"}}
        assert AuthStore(tab).user_id == "u1"

        auth.set_user(None)
        assert tab.get_item(AUTH_STORAGE_KEY) is None
        assert auth.is_authenticated is False

    def test_corporation_selection_persists(self):
        tab = BrowserStorage().open_tab()
        corporations = CorporationStore(tab)
        corporations.select("c1")
        assert CorporationStore(tab).selected_corporation_uuid == "c1"

        corporations.clear_selection()
        assert tab.get_item(CORPORATION_STORAGE_KEY) is None

    async def test_login_and_logout(self, anonymous_api, admin):
        tab = BrowserStorage().open_tab()
        auth = AuthStore(tab)

        user = await auth.login(anonymous_api, "admin@example.com", PASSWORD)
        assert user["id"] == admin["user"]["id"]
        assert anonymous_api.token is not None
        assert parse_auth_value(tab.get_item(AUTH_STORAGE_KEY))["id"] == admin["user"]["id"]

        await auth.logout(anonymous_api)
        assert anonymous_api.token is None
        assert auth.user is None

    async def test_restore_session(self, api, admin):
        auth = AuthStore(BrowserStorage().open_tab())
        user = await auth.restore_session(api)
        assert user["id"] == admin["user"]["id"]

    async def test_fetch_corporations_picks_first(self, api, corporation):
        corporations = CorporationStore(BrowserStorage().open_tab())
        corporations.select("stale")
        await corporations.fetch(api)
        assert corporations.selected_corporation_uuid == corporation["uuid"]
        assert corporations.selected_corporation["corporation_name"] == "Acme Builders"


def open_session(storage: BrowserStorage, api, stores=None):
    tab = storage.open_tab()
    auth = AuthStore(tab)
    corporations = CorporationStore(tab)
    sync = SessionSync(tab, auth, corporations, api, stores)
    sync.attach()
    return tab, auth, corporations, sync


class TestSessionSync:
    async def test_sign_out_in_another_tab_clears_scoped_state(self, anonymous_api):
        storage = BrowserStorage()
        charges = ChargesStore(anonymous_api)
        charges._cache["c1"] = [{"uuid": "x", "status": "ACTIVE"}]

        _, first_auth, _, _ = open_session(storage, anonymous_api)
        _, second_auth, second_corporations, _ = open_session(storage, anonymous_api, [charges])

        first_auth.set_user({"id": "u1"})
        assert second_auth.user_id == "u1"
        second_corporations.select("c1")

        first_auth.set_user(None)
        assert second_auth.user is None
        assert second_corporations.selected_corporation_uuid is None
        assert charges.is_cached("c1") is False

    async def test_switching_user_keeps_selection(self, anonymous_api):
        storage = BrowserStorage()
        _, first_auth, _, _ = open_session(storage, anonymous_api)
        _, second_auth, second_corporations, _ = open_session(storage, anonymous_api)

        first_auth.set_user({"id": "u1"})
        second_corporations.select("c1")
        first_auth.set_user({"id": "u2"})

        assert second_auth.user_id == "u2"
        assert second_corporations.selected_corporation_uuid == "c1"

    async def test_other_keys_and_same_user_are_ignored(self, anonymous_api):
        storage = BrowserStorage()
        tab, auth, corporations, sync = open_session(storage, anonymous_api)
        auth.sync_auth_state({"id": "u1"})
        corporations.selected_corporation_uuid = "c1"

        sync.on_storage(StorageEvent(key=THEME_STORAGE_KEY, old_value=None, new_value="dark"))
        sync.on_storage(
            StorageEvent(key=AUTH_STORAGE_KEY, old_value=None, new_value=json.dumps({"user": {"id": "u1", "x": 1}}))
        )
        assert auth.user == {"id": "u1"}
        assert corporations.selected_corporation_uuid == "c1"

    async def test_detached_tab_does_not_follow(self, anonymous_api):
        storage = BrowserStorage()
        _, first_auth, _, _ = open_session(storage, anonymous_api)
        _, second_auth, _, second_sync = open_session(storage, anonymous_api)
        second_sync.detach()

        first_auth.set_user({"id": "u1"})
        assert second_auth.user is None

    async def test_focus_adopts_server_session(self, api, admin):
        storage = BrowserStorage()
        _, auth, _, sync = open_session(storage, api)
        observer = storage.open_tab()

        assert await sync.on_focus() is True
        assert auth.user_id == admin["user"]["id"]
        # Persisted so the other tabs follow
        assert parse_auth_value(observer.get_item(AUTH_STORAGE_KEY))["id"] == admin["user"]["id"]

        assert await sync.on_focus() is False

    async def test_focus_with_expired_session_clears(self, anonymous_api):
        storage = BrowserStorage()
        tab, auth, corporations, sync = open_session(storage, anonymous_api)
        auth.set_user({"id": "u1"})
        corporations.select("c1")

        assert await sync.on_focus() is True
        assert auth.user is None
        assert corporations.selected_corporation_uuid is None
        assert tab.get_item(AUTH_STORAGE_KEY) is None

    async def test_focus_survives_network_errors(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with ApiClient("http://test", transport=httpx.MockTransport(refuse)) as offline:
            _, auth, _, sync = open_session(BrowserStorage(), offline)
            auth.set_user({"id": "u1"})
            assert await sync.on_focus() is False
            assert auth.user_id == "u1"


class TestResourceStores:
    async def test_fetch_is_cached_per_scope(self, api, admin_headers, client, corporation):
        store = ChargesStore(api)
        scope = corporation["uuid"]
        assert await store.fetch(scope) == ()
        assert store.is_cached(scope)

        await client.post(
            "/api/charges",
            json={"corporation_uuid": scope, "charge_name": "Freight", "charge_type": "FREIGHT"},
            headers=admin_headers,
        )
        assert await store.fetch(scope) == ()
        assert len(await store.fetch(scope, force=True)) == 1

    async def test_global_record_joins_every_cached_scope(self, api, corporation, other_corporation):
        store = ChargesStore(api)
        await store.fetch(corporation["uuid"])
        await store.fetch(other_corporation["uuid"])

        record = await store.create({"charge_name": "Duties", "charge_type": "CUSTOM_DUTIES"})
        assert store.items(corporation["uuid"]) == (record,)
        assert store.items(other_corporation["uuid"]) == (record,)

        updated = await store.update(record["uuid"], {**record, "status": "INACTIVE"})
        assert store.find(record["uuid"]) == updated
        assert store.active(corporation["uuid"]) == ()

        await store.remove(record["uuid"])
        assert store.items(corporation["uuid"]) == ()

    async def test_unscoped_store(self, api):
        store = ShipViaStore(api)
        await store.fetch()
        record = await store.create({"ship_via": "DHL"})
        assert store.items() == (record,)
        assert store.active() == (record,)

    async def test_api_errors_are_kept(self, api):
        store = ShipViaStore(api)
        with pytest.raises(ApiError) as exc_info:
            await store.create({"ship_via": ""})
        assert exc_info.value.status_code == 400
        assert exc_info.value.code == "VALIDATION_ERROR"
        assert store.error == "Ship Via is required"
        assert store.loading is False

    async def test_missing_scope_reported(self, api):
        store = ChargesStore(api)
        with pytest.raises(ApiError):
            await store.fetch("not-a-uuid")
        assert store.error == "Corporation UUID must be a valid UUID"
        assert store.is_cached("not-a-uuid") is False


class TestThemePreference:
    def test_initialized_from_system_preference(self):
        tab = BrowserStorage().open_tab()
        theme = ThemePreference(tab, prefers_dark=lambda: True)
        assert theme.initialize() == "dark"
        assert tab.get_item(THEME_STORAGE_KEY) == "dark"

    def test_stored_value_wins(self):
        tab = BrowserStorage().open_tab()
        tab.set_item(THEME_STORAGE_KEY, "light")
        assert ThemePreference(tab, prefers_dark=lambda: True).initialize() == "light"

    def test_toggle(self):
        theme = ThemePreference(BrowserStorage().open_tab())
        theme.initialize()
        assert theme.is_dark is False
        assert theme.toggle() == "dark"
        assert theme.is_dark is True

    def test_rejects_unknown_theme(self):
        with pytest.raises(ValueError):
            ThemePreference(BrowserStorage().open_tab()).set_theme("sepia")


class TestPrintLinks:
    def test_named_route(self):
        links = PrintLinks("http://app.test/")
        assert links.resolve("purchase-order-print", uuid="po-1") == (
            "http://app.test/purchase-orders/po-1/print"
        )

    def test_raw_path_with_query(self):
        links = PrintLinks("http://app.test")
        assert links.resolve("/reports/aging", {"as_of": "2026-01-31"}) == (
            "http://app.test/reports/aging?as_of=2026-01-31"
        )

    def test_falls_back_to_target(self, caplog):
        links = PrintLinks("http://app.test")
        with caplog.at_level("WARNING", logger="procurement.client.links"):
            assert links.resolve("purchase-order-print") == "purchase-order-print"
        assert "missing parameter 'uuid'" in caplog.text
        assert links.resolve("no-such-route") == "no-such-route"

    def test_without_base_url_returns_path(self):
        links = PrintLinks(None)
        assert links.resolve("/estimates/1/print") == "/estimates/1/print"
        assert links.resolve("estimate-print", uuid="e-1") == "/estimates/e-1/print"

    def test_open_uses_opener(self):
        opened: list[str] = []
        links = PrintLinks("http://app.test", opener=opened.append)
        url = links.open("estimate-print", uuid="e-9")
        assert opened == [url] == ["http://app.test/estimates/e-9/print"]
