import httpx
import pytest

from config.config import settings
from literasi.services.catalog_client import CatalogClient
from literasi.services.http_client import ApiHTTPClient
from literasi.session import AdminSession, SessionStore
from literasi.user import Role
from tests.stub_backend import StubBackend


@pytest.fixture
def backend():
    stub = StubBackend()
    stub.add_user("admin-1", "Sari Admin", role="ADMIN")
    stub.add_user("user-1", "Budi")
    return stub


@pytest.fixture
def make_client(backend):
    """Factory for clients wired to the in-memory backend (no retry delay)."""
    def factory() -> CatalogClient:
        transport = httpx.ASGITransport(app=backend.app)
        http = ApiHTTPClient(base_url="http://testserver", retries=1, backoff=0, transport=transport)
        return CatalogClient(http)
    return factory


@pytest.fixture
def admin_session():
    return AdminSession(user_id="admin-1", role=Role.ADMIN, name="Sari Admin")


@pytest.fixture
def session_file(tmp_path, monkeypatch):
    # Every SessionStore() created during the test points at a per-test file
    path = tmp_path / "session.json"
    monkeypatch.setattr(settings, "session_file", str(path))
    return path


@pytest.fixture
def logged_in(session_file, admin_session):
    SessionStore().save(admin_session)
    return admin_session
