import logging
from datetime import datetime, timezone

from sqlalchemy import create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, ORMExecuteState, Session, sessionmaker, with_loader_criteria
from sqlalchemy.pool import StaticPool

from caderninho.core.settings import settings

logger = logging.getLogger(__name__)

_is_sqlite = settings.DATABASE_URL.startswith("sqlite")
# sqlite em memória: uma única conexão compartilhada, senão cada sessão vê um banco vazio
_is_memory = _is_sqlite and settings.DATABASE_URL in ("sqlite://", "sqlite:///:memory:")

engine = create_engine(
    settings.DATABASE_URL,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
    **({"poolclass": StaticPool} if _is_memory else {}),
)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)

class Base(DeclarativeBase):
    pass


def utcnow() -> datetime:
    # backend usa datetimes naive em UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(dt: datetime | None) -> datetime | None:
    if dt is None or dt.tzinfo is None:
        return dt
    return dt.astimezone(timezone.utc).replace(tzinfo=None)


@event.listens_for(Session, "do_orm_execute")
def _soft_delete_filter(state: ORMExecuteState) -> None:
    """
    Filtro global de soft delete: todo SELECT do ORM que envolve uma entidade
    com is_deleted ganha `is_deleted = false`, inclusive carga de relacionamento.
    Use .execution_options(include_deleted=True) para enxergar as excluídas.
    """
    from caderninho.models.base import BaseEntity

    if (
        state.is_select
        and not state.is_column_load
        and not state.execution_options.get("include_deleted", False)
    ):
        state.statement = state.statement.options(
            with_loader_criteria(
                BaseEntity,
                lambda cls: cls.is_deleted.is_(False),
                include_aliases=True,
            )
        )


@event.listens_for(Session, "before_flush")
def _update_timestamps(session: Session, flush_context, instances) -> None:
    from caderninho.models.base import BaseEntity

    now = utcnow()
    for obj in session.new:
        if isinstance(obj, BaseEntity):
            obj.created_at = now
            obj.updated_at = now
    for obj in session.dirty:
        if isinstance(obj, BaseEntity) and session.is_modified(obj, include_collections=False):
            obj.updated_at = now


def init_db() -> None:
    """Cria o schema (equivalente a um EnsureCreated). Falha aqui é fatal."""
    import caderninho.models  # noqa: F401  registra as tabelas no metadata

    try:
        logger.info("Inicializando banco de dados (%s)...", engine.url.render_as_string(hide_password=True))
        Base.metadata.create_all(bind=engine)
        logger.info("Banco de dados inicializado com sucesso.")
    except SQLAlchemyError:
        logger.exception("Erro ao inicializar o banco de dados")
        raise


# dependency padrão FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
