from logging.config import fileConfig

from sqlalchemy import engine_from_config
from sqlalchemy import pool

from alembic import context

import os

config = context.config

# callers that already configured logging (the tests) set configure_logger=False
if config.config_file_name is not None and config.attributes.get("configure_logger", True):
    fileConfig(config.config_file_name, disable_existing_loggers=False)

# every model must be imported so Base.metadata knows its table
# noinspection PyUnresolvedReferences
from members.models.member import Member
# noinspection PyUnresolvedReferences
from teams.models.teams import Team
# noinspection PyUnresolvedReferences
from teams.models.team_member import TeamMember

from shared.database import Base

target_metadata = Base.metadata


# The database URL comes from the same variable the application reads, so
# migrations always target the database the service talks to.
ACTUAL_DATABASE_URL_FOR_ALEMBIC_ENV = os.getenv("SQLALCHEMY_DATABASE_URL")

if not ACTUAL_DATABASE_URL_FOR_ALEMBIC_ENV:
    raise ValueError(
        "ALEMBIC ENV.PY ERROR: SQLALCHEMY_DATABASE_URL is not set or empty. "
        "Export it before running alembic, e.g. SQLALCHEMY_DATABASE_URL=sqlite:///./members.db"
    )


def run_migrations_offline() -> None:
    """Emit the migration SQL against a bare URL, without connecting."""
    url = ACTUAL_DATABASE_URL_FOR_ALEMBIC_ENV
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=url.startswith("sqlite"),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Connect to SQLALCHEMY_DATABASE_URL and apply the migrations."""
    alembic_ini_config_section = config.get_section(config.config_ini_section, {})

    # the environment variable always wins over sqlalchemy.url from alembic.ini
    alembic_ini_config_section['sqlalchemy.url'] = ACTUAL_DATABASE_URL_FOR_ALEMBIC_ENV

    connectable = engine_from_config(
        alembic_ini_config_section,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
