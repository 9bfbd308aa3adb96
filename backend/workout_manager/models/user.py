from __future__ import annotations
from dataclasses import dataclass
from typing import Any

from bson import ObjectId

@dataclass(slots=True)
class User:
    username: str
    # Whatever the caller hands over; the HTTP layer passes a bcrypt hash
    password: str
    id: str | None = None

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {"username": self.username, "password": self.password}
        if self.id is not None:
            doc["_id"] = ObjectId(self.id)
        return doc

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> User:
        return cls(id=str(doc["_id"]), username=doc["username"], password=doc["password"])
