from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel


class DbRecord(BaseModel):
    """
    One document of the backing collection:
      { "key": "<namespace>", "value": <any JSON-like structure> }
    """

    key: str
    value: Any = None

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "DbRecord":
        return cls(key=doc["key"], value=doc.get("value"))

    def to_document(self) -> dict[str, Any]:
        return {"key": self.key, "value": self.value}
