import os

# Settings are read on import; point them at a throwaway database first
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ["LOG_TO_FILE"] = "false"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["COOKIE_SECURE"] = "false"

from collections.abc import Callable, Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402

import partnerfinder.models  # noqa: E402, F401
from partnerfinder.api.deps import get_db  # noqa: E402
from partnerfinder.core import security  # noqa: E402
from partnerfinder.main import app  # noqa: E402
from partnerfinder.models.user import User  # noqa: E402

from fixtures.factories import *  # noqa: E402, F403


@pytest.fixture(scope="function")
def db_engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function", autouse=True)
def db_transaction(db_engine: Engine) -> Generator[Session, None, None]:
    session = Session(db_engine)

    def override_get_db() -> Generator[Session, None, None]:
        yield session

    app.dependency_overrides[get_db] = override_get_db

    yield session

    session.close()
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers() -> Callable[[User], dict[str, str]]:
    def headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {security.create_access_token(user.id)}"}

    return headers
