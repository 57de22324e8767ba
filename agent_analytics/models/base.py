"""Shared base for records exported from the datastore."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class RecordModel(BaseModel):
    """Tolerant record: camelCase keys on the wire, unknown fields kept."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        frozen=True,
    )


class OutputModel(BaseModel):
    """Analytics output serialized with camelCase keys."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def as_id_list(value: Any) -> list[str]:
    """Reference lists: absent, null or non-list values become empty; non-id entries are dropped."""
    if not isinstance(value, list):
        return []
    ids = []
    for item in value:
        if isinstance(item, bool):
            continue
        if isinstance(item, (str, int)):
            ids.append(str(item))
    return ids


def as_text_list(value: Any) -> list[Optional[str]]:
    """Free-text lists: non-string entries become None, so the entry count is preserved."""
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else None for item in value]
