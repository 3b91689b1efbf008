# models.py

from dataclasses import dataclass, replace
from typing import Any, Dict, Mapping, Optional

from errors import DataError


def _as_int(payload: Mapping[str, Any], key: str, default: Optional[int] = None) -> int:
    value = payload.get(key, default)
    if value is None:
        raise DataError(f"Missing field '{key}'")
    if isinstance(value, bool):
        raise DataError(f"Field '{key}' must be a number, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise DataError(f"Field '{key}' must be a number, got {value!r}") from None
    if number < 0:
        raise DataError(f"Field '{key}' must not be negative, got {number}")
    return number


@dataclass(frozen=True)
class Film:
    id: str
    title: str
    poster: str
    description: str
    runtime: int
    showtime: str
    capacity: int
    tickets_sold: int

    @property
    def available(self) -> int:
        return self.capacity - self.tickets_sold

    @property
    def sold_out(self) -> bool:
        return self.available <= 0

    def with_tickets_sold(self, tickets_sold: int) -> "Film":
        return replace(self, tickets_sold=tickets_sold)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Film":
        """
        Builds a film from a JSON mapping.

        json-server documents frequently carry numbers as strings
        ("runtime": "108"), so numeric strings are accepted.
        """
        if not isinstance(payload, Mapping):
            raise DataError(f"Expected a film object, got {type(payload).__name__}")
        if payload.get("id") in (None, ""):
            raise DataError("Film without an id")
        if not payload.get("title"):
            raise DataError(f"Film {payload.get('id')} has no title")

        return cls(
            id=str(payload["id"]),
            title=str(payload["title"]),
            poster=str(payload.get("poster") or ""),
            description=str(payload.get("description") or ""),
            runtime=_as_int(payload, "runtime", 0),
            showtime=str(payload.get("showtime") or ""),
            capacity=_as_int(payload, "capacity"),
            tickets_sold=_as_int(payload, "tickets_sold", 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "poster": self.poster,
            "description": self.description,
            "runtime": self.runtime,
            "showtime": self.showtime,
            "capacity": self.capacity,
            "tickets_sold": self.tickets_sold,
        }


@dataclass(frozen=True)
class Ticket:
    film_id: str
    number_of_tickets: int = 1
    id: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Ticket":
        if not isinstance(payload, Mapping):
            raise DataError(f"Expected a ticket object, got {type(payload).__name__}")
        if payload.get("film_id") in (None, ""):
            raise DataError("Ticket without a film_id")
        count = _as_int(payload, "number_of_tickets", 1)
        if count < 1:
            raise DataError("A ticket must be for at least one seat")
        ticket_id = payload.get("id")
        return cls(
            film_id=str(payload["film_id"]),
            number_of_tickets=count,
            id=None if ticket_id in (None, "") else str(ticket_id),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {"film_id": self.film_id, "number_of_tickets": self.number_of_tickets}
