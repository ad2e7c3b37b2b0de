import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend.auth.jwt_handler import TokenIssuer
from backend.auth.passwords import PasswordHasher
from backend.auth.service import AuthService
from backend.auth.store import InMemoryCredentialStore, SqlAlchemyCredentialStore
from backend.database import Base, create_schema

TEST_SECRET = 'test-secret-key-with-enough-length-for-hs256'


@pytest.fixture
def hasher() -> PasswordHasher:
    # Minimum bcrypt cost keeps the suite fast.
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens() -> TokenIssuer:
    return TokenIssuer(secret_key=TEST_SECRET, algorithm='HS256', expires_minutes=60 * 24)


@pytest.fixture
def memory_store() -> InMemoryCredentialStore:
    return InMemoryCredentialStore()


@pytest.fixture
def auth_service(memory_store, hasher, tokens) -> AuthService:
    return AuthService(store=memory_store, hasher=hasher, tokens=tokens)


@pytest.fixture
def sql_engine():
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    create_schema(engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def sql_session_factory(sql_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=sql_engine)


@pytest.fixture
def sql_store(sql_session_factory) -> SqlAlchemyCredentialStore:
    return SqlAlchemyCredentialStore(sql_session_factory)
