import os

from sqlalchemy.engine import Engine, make_url
from sqlmodel import SQLModel, create_engine

from partnerfinder.core.config import settings


def make_engine(url: str) -> Engine:
    """
    Create an engine for the given database URL.

    SQLite connections are shared across the worker threads FastAPI runs
    sync endpoints in, so same-thread checking is disabled for them.
    """
    connect_args = {}
    if make_url(url).get_backend_name() == "sqlite":
        connect_args["check_same_thread"] = False
    return create_engine(url, connect_args=connect_args)


engine = make_engine(settings.SQLALCHEMY_DATABASE_URI)


def init_db(db_engine: Engine = engine) -> None:
    # Tables are registered on SQLModel.metadata when the models are imported
    import partnerfinder.models  # noqa: F401

    url = db_engine.url
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        os.makedirs(os.path.dirname(os.path.abspath(url.database)), exist_ok=True)

    SQLModel.metadata.create_all(db_engine)
