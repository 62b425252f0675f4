from enum import IntEnum

from sqlalchemy import Integer
from sqlalchemy.types import TypeDecorator


class IntEnumType(TypeDecorator):
    """Persiste um IntEnum como inteiro (mesma numeração da API)."""

    impl = Integer
    cache_ok = True

    def __init__(self, enum_cls: type[IntEnum], *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._enum_cls = enum_cls

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return int(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return self._enum_cls(value)
