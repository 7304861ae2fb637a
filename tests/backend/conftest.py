import os

os.environ.setdefault('DATABASE_URL', 'sqlite://')
os.environ.setdefault('BCRYPT_ROUNDS', '4')
os.environ.setdefault('SESSION_STORE_BACKEND', 'memory')
os.environ.setdefault('SESSION_SECRET', 'test-cookie-signing-secret-0123456789abcdef')
os.environ.setdefault('SESSION_STORE_SECRET', 'test-store-sealing-secret-0123456789abcdef')

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from backend.auth.credentials import CredentialStore  # noqa: E402
from backend.auth.session_store import SqlSessionStore  # noqa: E402
from backend.auth.sessions import SessionManager  # noqa: E402
from backend.database import Base  # noqa: E402
from backend.main import create_app  # noqa: E402
from backend.models.session import StoredSession  # noqa: E402
from backend.models.user import Role, User  # noqa: E402


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session_factory():
    engine = create_engine('sqlite://', connect_args={'check_same_thread': False}, poolclass=StaticPool)
    tables = [User.__table__, StoredSession.__table__]
    Base.metadata.create_all(bind=engine, tables=tables)
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        Base.metadata.drop_all(bind=engine, tables=tables)
        engine.dispose()


@pytest.fixture
def broken_session_factory():
    engine = create_engine('sqlite:////nonexistent-directory/members.db')
    try:
        yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    finally:
        engine.dispose()


@pytest.fixture
def credential_store(session_factory):
    return CredentialStore(session_factory)


@pytest.fixture
def session_manager(session_factory):
    return SessionManager(SqlSessionStore(session_factory))


@pytest.fixture
def app(credential_store, session_manager):
    return create_app(credential_store=credential_store, session_manager=session_manager)


@pytest.fixture
def make_client(app):
    def _make_client() -> TestClient:
        return TestClient(app)

    return _make_client


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def register():
    def _register(client: TestClient, name: str, email: str, password: str = 'secret1'):
        return client.post(
            '/signup',
            data={'name': name, 'email': email, 'password': password},
            follow_redirects=False,
        )

    return _register


@pytest.fixture
def admin_client(make_client, register, credential_store):
    client = make_client()
    register(client, 'Boss', 'boss@x.com', 'bosspass')
    credential_store.set_role('boss@x.com', Role.ADMIN)
    client.post('/login', data={'email': 'boss@x.com', 'password': 'bosspass'}, follow_redirects=False)
    return client
