from pathlib import Path
from logging.config import fileConfig

from sqlalchemy import engine_from_config
from sqlalchemy import pool

from alembic import context
from caderninho.core.settings import settings
from caderninho.db import Base
import caderninho.models  # noqa: F401  registra as tabelas no metadata

config = context.config


# migrations usam o MESMO DATABASE_URL do app; sqlite relativo é resolvido a partir de backend/
def _resolve_sqlite_url(url: str) -> str:
    prefix = "sqlite:///./"
    if not url.startswith(prefix):
        return url
    db_file = (Path(__file__).resolve().parents[1] / url[len(prefix):]).resolve()
    return "sqlite:///" + db_file.as_posix()


config.set_main_option("sqlalchemy.url", _resolve_sqlite_url(settings.DATABASE_URL))

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Gera o SQL sem conectar no banco (alembic upgrade --sql)."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        # batch mode: sqlite não suporta ALTER de colunas
        context.configure(connection=connection, target_metadata=target_metadata, render_as_batch=True)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
