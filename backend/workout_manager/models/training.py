from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from bson import ObjectId

PULL_UP = "Pull up"
PUSH_UP = "Push up"

_MICROSECOND = timedelta(microseconds=1)


def _encode_duration(value: timedelta | None) -> int | None:
    # Stored as int64 nanoseconds, the layout existing training documents use
    return None if value is None else value // _MICROSECOND * 1000


def _decode_duration(value: Any) -> timedelta | None:
    if value is None:
        return None
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"duration must be an integer, got {type(value).__name__}")
    return timedelta(microseconds=value // 1000)


def _as_utc(value: datetime) -> datetime:
    if not isinstance(value, datetime):
        raise TypeError(f"date must be a datetime, got {type(value).__name__}")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _put_optional(doc: dict[str, Any], key: str, value: Any) -> None:
    # Unset optionals are left out of the document entirely
    if value is not None:
        doc[key] = value


@dataclass(slots=True)
class Exercise:
    """One movement inside a training; has no identity of its own."""
    type: str
    count: int
    weight: float
    duration_workout: timedelta | None = None
    duration_rest: timedelta | None = None

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {"type": self.type, "count": self.count, "weight": self.weight}
        _put_optional(doc, "duration_workout", _encode_duration(self.duration_workout))
        _put_optional(doc, "duration_rest", _encode_duration(self.duration_rest))
        return doc

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> Exercise:
        return cls(
            type=doc["type"],
            count=int(doc["count"]),
            weight=float(doc["weight"]),
            duration_workout=_decode_duration(doc.get("duration_workout")),
            duration_rest=_decode_duration(doc.get("duration_rest")),
        )


@dataclass(slots=True)
class Training:
    username: str
    date: datetime
    tonnage: float
    number: int
    exercises: list[Exercise] = field(default_factory=list)
    total_workout_time: timedelta | None = None
    total_rest_time: timedelta | None = None
    feedback: str | None = None
    like: bool | None = None
    id: str | None = None

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "username": self.username,
            "date": _as_utc(self.date),
            "tonnage": self.tonnage,
            "number": self.number,
            "exercises": [e.to_document() for e in self.exercises],
        }
        if self.id is not None:
            doc["_id"] = ObjectId(self.id)
        _put_optional(doc, "total_workout_time", _encode_duration(self.total_workout_time))
        _put_optional(doc, "total_rest_time", _encode_duration(self.total_rest_time))
        _put_optional(doc, "feedback", self.feedback)
        _put_optional(doc, "like", self.like)
        return doc

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> Training:
        """Raises KeyError/TypeError/ValueError when the document is malformed."""
        exercises = doc.get("exercises") or []
        if not isinstance(exercises, list):
            raise TypeError("exercises must be an array")
        return cls(
            id=str(doc["_id"]),
            username=doc["username"],
            date=_as_utc(doc["date"]),
            tonnage=float(doc["tonnage"]),
            number=int(doc["number"]),
            exercises=[Exercise.from_document(e) for e in exercises],
            total_workout_time=_decode_duration(doc.get("total_workout_time")),
            total_rest_time=_decode_duration(doc.get("total_rest_time")),
            feedback=doc.get("feedback"),
            like=doc.get("like"),
        )
