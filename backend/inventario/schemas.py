# backend/inventario/schemas.py

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema for the public API.

    Python attributes are snake_case; the JSON payloads the web client sends
    and receives are camelCase (`creadoPor`, `fechaCreacion`, ...). Both
    spellings are accepted on input.
    """

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel


def dump(obj, schema: type[CamelModel]) -> dict:
    """Serialise an ORM row through `schema` using the camelCase keys."""
    return schema.model_validate(obj).model_dump(by_alias=True)


def dump_all(rows, schema: type[CamelModel]) -> list[dict]:
    return [dump(row, schema) for row in rows]
