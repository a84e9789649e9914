from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from shared.config import SQLALCHEMY_DATABASE_URL, SQLALCHEMY_ECHO

Base = declarative_base()


def get_engine(database_url: str = SQLALCHEMY_DATABASE_URL):
    """
    Create the SQLAlchemy engine.

    For SQLite, foreign keys are switched on for every connection and the
    in-memory database uses StaticPool so every session sees the same data.
    """
    is_sqlite = database_url.startswith("sqlite")

    engine_kwargs = {"echo": SQLALCHEMY_ECHO}

    if is_sqlite:
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            engine_kwargs["poolclass"] = StaticPool

    new_engine = create_engine(database_url, **engine_kwargs)

    if is_sqlite:
        @event.listens_for(new_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return new_engine


engine = get_engine()

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def init_db() -> None:
    # noinspection PyUnresolvedReferences
    import members.models  # noqa: F401
    # noinspection PyUnresolvedReferences
    import teams.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def drop_db() -> None:
    Base.metadata.drop_all(bind=engine)
