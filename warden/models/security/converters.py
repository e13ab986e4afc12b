"""
Enum-to-column converters.

``CodeEnum`` persists a ``CodedEnum`` member as its code in a VARCHAR column
and rehydrates the member when the row is loaded.
"""

from typing import Any

from sqlalchemy import String
from sqlalchemy.types import TypeDecorator

from .enums import CodedEnum


class CodeEnum(TypeDecorator):
    impl = String
    cache_ok = True

    def __init__(self, enum_class: type[CodedEnum], length: int = 50, **kwargs: Any):
        super().__init__(length, **kwargs)
        self.enum_class = enum_class

    def process_bind_param(self, value: Any, dialect) -> str | None:
        if value is None:
            return None
        if isinstance(value, self.enum_class):
            return value.code
        # Raw codes are accepted as well as members.
        return self.enum_class.from_code(value).code

    def process_result_value(self, value: str | None, dialect) -> CodedEnum | None:
        if value is None:
            return None
        return self.enum_class.from_code(value)

    @property
    def python_type(self) -> type:
        return self.enum_class
