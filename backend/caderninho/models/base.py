from datetime import datetime

from sqlalchemy import Boolean, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from caderninho.db import utcnow


class BaseEntity:
    """
    Campos comuns a todas as entidades.
    created_at/updated_at são preenchidos no flush (ver db._update_timestamps);
    is_deleted marca exclusão lógica e some das consultas pelo filtro global.
    """

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, server_default="0", nullable=False, index=True)
