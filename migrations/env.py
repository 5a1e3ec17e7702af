"""
Alembic environment for the personnel records schema.

The database URL comes from the application Settings, not from
alembic.ini, so migrations always target the same database as
the running service.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from personnel_records.config import get_settings
from personnel_records.models import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# users, records and audit_log are all registered on Base.metadata
# through personnel_records.models
target_metadata = Base.metadata

config.set_main_option("sqlalchemy.url", get_settings().DATABASE_URL)


def run_migrations_offline() -> None:
    """Emit the migration SQL as a script instead of applying it."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        compare_type=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations over a live connection."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
