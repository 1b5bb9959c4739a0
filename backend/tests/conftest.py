import pytest
from httpx import ASGITransport, AsyncClient

from procurement.config import Settings
from procurement.database import Base, build_engine, build_session_factory
from procurement.main import create_app

PASSWORD = "correct-horse-battery"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'procurement.db'}",
        secret_key="test-secret",
        app_base_url="http://app.test",
        smtp_host="",
    )


@pytest.fixture
async def app(settings):
    # ASGITransport does not run the lifespan, so the database is wired up here
    application = create_app(settings)
    engine = build_engine(settings.database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    application.state.engine = engine
    application.state.session_factory = build_session_factory(engine)
    yield application
    await engine.dispose()


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


async def signup(client: AsyncClient, email: str, full_name: str = "Test User") -> dict:
    """Register and log in; returns the user and bearer headers.

    Login also sets session cookies on the client. They are dropped so each
    request authenticates only through the headers it passes.
    """
    response = await client.post(
        "/api/auth/register",
        json={"email": email, "password": PASSWORD, "full_name": full_name},
    )
    assert response.status_code == 201, response.text
    user = response.json()["data"]

    response = await client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
    assert response.status_code == 200, response.text
    tokens = response.json()["data"]
    client.cookies.clear()
    return {
        "user": user,
        "tokens": tokens,
        "headers": {"Authorization": f"Bearer {tokens['access_token']}"},
    }


@pytest.fixture
async def admin(client):
    # The first account registered becomes the admin
    account = await signup(client, "admin@example.com", "Admin User")
    assert account["user"]["role"] == "admin"
    return account


@pytest.fixture
def admin_headers(admin):
    return admin["headers"]


@pytest.fixture
def make_user(client, admin_headers):
    async def factory(email: str, role: str | None = None) -> dict:
        account = await signup(client, email)
        if role is not None:
            response = await client.put(
                f"/api/auth/users/{account['user']['id']}/role",
                json={"role": role},
                headers=admin_headers,
            )
            assert response.status_code == 200, response.text
            account["user"] = response.json()["data"]
        return account

    return factory


@pytest.fixture
async def viewer(make_user):
    return await make_user("viewer@example.com")


@pytest.fixture
async def accountant(make_user):
    return await make_user("accountant@example.com", role="accountant")


@pytest.fixture
async def corporation(client, admin_headers):
    response = await client.post(
        "/api/corporations",
        json={"corporation_name": "Acme Builders", "country": "US"},
        headers=admin_headers,
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]


@pytest.fixture
async def other_corporation(client, admin_headers):
    response = await client.post(
        "/api/corporations",
        json={"corporation_name": "Globex Construction"},
        headers=admin_headers,
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]


async def create_project(
    client: AsyncClient, headers: dict, corporation_uuid: str, project_id: str, **extra
) -> dict:
    response = await client.post(
        "/api/projects",
        json={
            "corporation_uuid": corporation_uuid,
            "project_name": f"Project {project_id}",
            "project_id": project_id,
            **extra,
        },
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()["data"]


@pytest.fixture
async def project(client, admin_headers, corporation):
    return await create_project(client, admin_headers, corporation["uuid"], "P-100")
