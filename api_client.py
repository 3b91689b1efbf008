# api_client.py

import logging
from http import HTTPStatus
from typing import Any, List, Optional

import requests
from requests.exceptions import RequestException, Timeout

from errors import (
    DataError,
    FilmNotFoundError,
    ResponseStatusError,
    TransportError,
)
from models import Film, Ticket

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_TIMEOUT = 10.0


class HttpFilmSource:
    """
    Film source talking to a REST-like backend (json-server layout):

        GET    /films            -> [film, ...]
        GET    /films/{id}       -> film | 404
        PATCH  /films/{id}       {"tickets_sold": n} -> film
        POST   /tickets          {"film_id", "number_of_tickets"} -> ticket
        DELETE /films/{id}
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def __repr__(self) -> str:
        return f"HttpFilmSource({self.base_url!r})"

    def close(self) -> None:
        self.session.close()

    def _request(self, method: str, path: str, film_id: Optional[str] = None, **kwargs) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except Timeout as e:
            logger.warning("%s %s timed out after %ss", method, url, self.timeout)
            raise TransportError(f"The server did not answer within {self.timeout:g}s") from e
        except RequestException as e:
            logger.warning("%s %s failed: %s", method, url, e)
            raise TransportError(f"Could not reach {self.base_url}") from e

        logger.debug("%s %s -> %s", method, url, resp.status_code)

        if resp.status_code == HTTPStatus.NOT_FOUND and film_id is not None:
            raise FilmNotFoundError(film_id)
        if not 200 <= resp.status_code < 300:
            raise ResponseStatusError(
                resp.status_code,
                f"{method} {path} failed with status {resp.status_code}",
            )

        if resp.status_code == HTTPStatus.NO_CONTENT or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise DataError(f"{method} {path} returned invalid JSON") from e

    # ----------------- FILMS -----------------

    def list_films(self) -> List[Film]:
        payload = self._request("GET", "/films")
        if not isinstance(payload, list):
            raise DataError("GET /films did not return a list")
        return [Film.from_dict(item) for item in payload]

    def get_film(self, film_id: str) -> Film:
        film_id = str(film_id)
        return Film.from_dict(self._request("GET", f"/films/{film_id}", film_id=film_id))

    def update_tickets_sold(self, film_id: str, tickets_sold: int) -> Film:
        film_id = str(film_id)
        payload = self._request(
            "PATCH",
            f"/films/{film_id}",
            film_id=film_id,
            json={"tickets_sold": tickets_sold},
        )
        return Film.from_dict(payload)

    def delete_film(self, film_id: str) -> None:
        film_id = str(film_id)
        self._request("DELETE", f"/films/{film_id}", film_id=film_id)

    # ----------------- TICKETS -----------------

    def create_ticket(self, ticket: Ticket) -> Ticket:
        payload = self._request("POST", "/tickets", json=ticket.to_payload())
        if payload is None:
            return ticket
        return Ticket.from_dict(payload)
