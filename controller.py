# controller.py

import enum
import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from errors import (
    ActionInFlightError,
    CatalogError,
    FilmNotFoundError,
    NoSelectionError,
    SoldOutError,
)
from models import Film, Ticket
from state import (
    CatalogState,
    action_finished,
    action_started,
    catalog_loaded,
    film_deleted,
    film_selected,
    loading_changed,
    query_changed,
    ticket_purchased,
)

logger = logging.getLogger(__name__)


# ----------------- EVENTS -----------------


@dataclass(frozen=True)
class StateChanged:
    state: CatalogState


@dataclass(frozen=True)
class Notice:
    message: str
    level: str = "info"  # info | warning | error

    @property
    def is_error(self) -> bool:
        return self.level == "error"


@dataclass(frozen=True)
class TicketIssued:
    film: Film
    ticket: Ticket


CatalogEvent = Union[StateChanged, Notice, TicketIssued]
Listener = Callable[[CatalogEvent], None]


# ----------------- COMMANDS -----------------


class ActionKind(enum.Enum):
    PURCHASE = "purchase"
    DELETE = "delete"


class Decision(enum.Enum):
    CONFIRM = "confirm"
    CANCEL = "cancel"


@dataclass(frozen=True)
class PendingAction:
    """An action waiting for the user's yes/no."""

    kind: ActionKind
    film_id: str
    title: str

    @property
    def prompt(self) -> str:
        if self.kind is ActionKind.PURCHASE:
            return f'Buy a ticket for "{self.title}"?'
        return f'Are you sure you want to delete "{self.title}"?'


class CatalogController:
    """
    Owns the catalog state and the data source.

    Widgets never change the state directly: they call the operations
    below and redraw from the ``StateChanged`` events they receive. Purchase
    and delete are two-step: ``request_purchase``/``request_delete`` return a
    ``PendingAction`` to show to the user, ``apply`` runs it once the user
    has confirmed.

    Operations may be called from worker threads; state replacement and
    event delivery are serialized.
    """

    def __init__(self, source, state: Optional[CatalogState] = None):
        self.source = source
        self._state = state or CatalogState()
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()

    @property
    def state(self) -> CatalogState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def close(self) -> None:
        self._listeners.clear()
        self.source.close()

    # ---------- helpers ----------

    def _emit(self, event: CatalogEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    def _commit(self, transition: Callable[[CatalogState], CatalogState]) -> CatalogState:
        with self._lock:
            self._state = transition(self._state)
            self._emit(StateChanged(self._state))
            return self._state

    def _notify(self, message: str, level: str = "info") -> None:
        with self._lock:
            self._emit(Notice(message, level))

    def _report(self, what: str, error: CatalogError) -> None:
        logger.warning("%s: %s", what, error)
        self._notify(f"{what}: {error}", "error")

    def _begin(self, film_id: str, needs_seat: bool = False) -> Film:
        """Marks the film pending and returns its latest copy, atomically."""
        with self._lock:
            film = self._state.find(film_id)
            if film is None:
                raise FilmNotFoundError(film_id)
            if film_id in self._state.pending:
                raise ActionInFlightError(film_id)
            if needs_seat and film.sold_out:
                raise SoldOutError(film.title)
            self._commit(lambda s: action_started(s, film_id))
            return film

    # ---------- LOAD / SELECT ----------

    def load_catalog(self) -> bool:
        self._commit(lambda s: loading_changed(s, True))
        try:
            films = self.source.list_films()
        except CatalogError as e:
            self._commit(lambda s: loading_changed(s, False))
            self._report("Failed to load films", e)
            return False

        state = self._commit(lambda s: catalog_loaded(s, films))
        logger.info("Loaded %d films from %r", len(state.films), self.source)
        return True

    def select_film(self, film_id: str) -> bool:
        film_id = str(film_id)
        self._commit(lambda s: loading_changed(s, True))
        try:
            film = self.source.get_film(film_id)
        except CatalogError as e:
            self._commit(lambda s: loading_changed(s, False))
            self._report("Failed to load film details", e)
            return False

        with self._lock:
            # the film may have been deleted while the request was running
            known = self._state.find(film.id) is not None
            self._commit(lambda s: loading_changed(film_selected(s, film), False))
        if not known:
            self._report("Failed to load film details", FilmNotFoundError(film.id))
            return False
        return True

    # ---------- FILTER ----------

    def filter_list(self, query: str) -> None:
        self._commit(lambda s: query_changed(s, query or ""))

    # ---------- CONFIRMATION ----------

    def request_purchase(self) -> Optional[PendingAction]:
        """
        Returns the action to confirm, or ``None`` after a warning notice
        when there is no selection, the film is sold out or a request for
        it is still running.
        """
        film = self._state.current
        try:
            if film is None:
                raise NoSelectionError()
            if film.sold_out:
                raise SoldOutError(film.title)
            if film.id in self._state.pending:
                raise ActionInFlightError(film.id)
        except CatalogError as e:
            self._notify(str(e), "warning")
            return None
        return PendingAction(ActionKind.PURCHASE, film.id, film.title)

    def request_delete(self, film_id: str) -> Optional[PendingAction]:
        film_id = str(film_id)
        film = self._state.find(film_id)
        try:
            if film is None:
                raise FilmNotFoundError(film_id)
            if film_id in self._state.pending:
                raise ActionInFlightError(film_id)
        except CatalogError as e:
            self._notify(str(e), "warning")
            return None
        return PendingAction(ActionKind.DELETE, film.id, film.title)

    def apply(self, action: PendingAction, decision: Decision) -> bool:
        if decision is not Decision.CONFIRM:
            logger.debug("User declined %s of film %s", action.kind.value, action.film_id)
            return False
        if action.kind is ActionKind.PURCHASE:
            return self._purchase(action.film_id)
        return self._delete(action.film_id)

    # ---------- PURCHASE ----------

    def purchase_ticket(self) -> bool:
        """Purchase for the current film without asking; used by scripts and tests."""
        action = self.request_purchase()
        if action is None:
            return False
        return self.apply(action, Decision.CONFIRM)

    def _purchase(self, film_id: str) -> bool:
        # re-check against the latest state, things may have moved while
        # the confirmation was open
        try:
            film = self._begin(film_id, needs_seat=True)
        except CatalogError as e:
            self._notify(str(e), "warning")
            return False

        try:
            updated = self.source.update_tickets_sold(film_id, film.tickets_sold + 1)
        except CatalogError as e:
            self._commit(lambda s: action_finished(s, film_id))
            self._report("Failed to update ticket count", e)
            return False

        self._commit(lambda s: action_finished(ticket_purchased(s, updated), film_id))
        logger.info(
            "Sold ticket for %s (%d/%d)", updated.title, updated.tickets_sold, updated.capacity
        )

        try:
            ticket = self.source.create_ticket(Ticket(film_id=film_id, number_of_tickets=1))
        except CatalogError as e:
            logger.warning("Ticket record for film %s was not saved: %s", film_id, e)
            self._notify("Ticket purchased, but the ticket record could not be saved", "warning")
            return True

        self._notify("Ticket purchased successfully!")
        with self._lock:
            self._emit(TicketIssued(updated, ticket))
        return True

    # ---------- DELETE ----------

    def delete_film(self, film_id: str) -> bool:
        """Delete without asking; used by scripts and tests."""
        action = self.request_delete(film_id)
        if action is None:
            return False
        return self.apply(action, Decision.CONFIRM)

    def _delete(self, film_id: str) -> bool:
        try:
            self._begin(film_id)
        except CatalogError as e:
            self._notify(str(e), "warning")
            return False

        try:
            self.source.delete_film(film_id)
        except CatalogError as e:
            self._commit(lambda s: action_finished(s, film_id))
            self._report("Failed to delete film", e)
            return False

        self._commit(lambda s: film_deleted(s, film_id))
        logger.info("Deleted film %s", film_id)
        self._notify("Film deleted successfully!")
        return True
