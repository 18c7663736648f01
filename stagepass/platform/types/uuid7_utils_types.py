"""
Reservation numbers are uuid_utils UUID7 values. pydantic knows nothing about
uuid_utils.UUID, so UtilsUUID7 teaches it to parse them from path segments
and JSON strings and to write them back as the canonical string.
"""

from typing import Any

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema
from uuid_utils import UUID


class UtilsUUID7(UUID):
    @staticmethod
    def parse(value: Any) -> UUID:
        if isinstance(value, UUID):
            return value
        if not isinstance(value, str):
            raise ValueError('reservation number must be a string')
        try:
            return UUID(value.strip())
        except (TypeError, ValueError):
            raise ValueError(f'{value!r} is not a valid reservation number') from None

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls.parse,
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, return_schema=core_schema.str_schema()
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {'type': 'string', 'format': 'uuid', 'description': 'Reservation number (UUID7)'}
