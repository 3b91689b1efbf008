# errors.py

from typing import Optional


class CatalogError(Exception):
    """Base class for everything the client reports to the user."""


class TransportError(CatalogError):
    """Network failure or timeout while talking to the data source."""


class ResponseStatusError(CatalogError):
    def __init__(self, status: int, message: str = ""):
        super().__init__(message or f"Unexpected response status {status}")
        self.status = status


class FilmNotFoundError(CatalogError):
    def __init__(self, film_id: str):
        super().__init__(f"Film {film_id} was not found")
        self.film_id = film_id


class DataError(CatalogError):
    """Payload from the data source could not be turned into a film/ticket."""


class StorageError(CatalogError):
    """Local store failure (sqlite, seed document)."""


class ConfigError(CatalogError):
    pass


# ----------------- PRECONDITIONS -----------------


class NoSelectionError(CatalogError):
    def __init__(self, message: str = "No film is selected"):
        super().__init__(message)


class SoldOutError(CatalogError):
    def __init__(self, title: Optional[str] = None):
        super().__init__(f"Sorry, {title or 'this showing'} is sold out!")
        self.title = title


class ActionInFlightError(CatalogError):
    def __init__(self, film_id: str):
        super().__init__("Please wait, the previous request is still running")
        self.film_id = film_id
