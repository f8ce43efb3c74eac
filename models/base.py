"""Shared model plumbing: camelCase JSON keys and tolerant enum spellings."""

import re
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def normalize_enum_spelling(value: str) -> str:
    """Turn ``SetFlag``, ``set-flag`` or ``SET_FLAG`` into ``set_flag``."""
    value = _CAMEL_BOUNDARY.sub("_", value.strip())
    return value.replace("-", "_").replace(" ", "_").lower()


def normalize_type_key(data):
    """Copy of ``data`` with a string ``type`` value in snake_case."""
    if isinstance(data, dict) and isinstance(data.get("type"), str):
        data = dict(data)
        data["type"] = normalize_enum_spelling(data["type"])
    return data


class SnakeCaseEnum(str, Enum):
    """String enum stored as snake_case that also accepts older spellings."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            normalized = normalize_enum_spelling(value)
            for member in cls:
                if member.value == normalized:
                    return member
        return None


class EditorModel(BaseModel):
    """Base for every persisted editor model.

    Python attributes stay snake_case; the JSON document uses camelCase keys.
    Either spelling is accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json_dict(self) -> dict:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
