# state.py
"""
Pure state transitions for the film catalog.

Every function here takes the current ``CatalogState`` and returns a new
one; nothing touches the data source or the widgets. The window draws
``list_items`` and ``detail_view`` of whatever state the controller hands
it.
"""

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, List, Optional, Tuple

from models import Film

BUY_LABEL = "Buy Ticket"
SOLD_OUT_LABEL = "Sold Out"


@dataclass(frozen=True)
class CatalogState:
    films: Tuple[Film, ...] = ()
    current: Optional[Film] = None
    query: str = ""
    pending: FrozenSet[str] = field(default_factory=frozenset)
    loading: bool = False

    def find(self, film_id: str) -> Optional[Film]:
        for film in self.films:
            if film.id == film_id:
                return film
        return None


def _replace_film(films: Tuple[Film, ...], updated: Film) -> Tuple[Film, ...]:
    return tuple(updated if f.id == updated.id else f for f in films)


# ----------------- TRANSITIONS -----------------


def catalog_loaded(state: CatalogState, films: Iterable[Film]) -> CatalogState:
    films = tuple(films)
    current = None
    if state.current is not None:
        current = next((f for f in films if f.id == state.current.id), None)
    if current is None and films:
        current = films[0]
    return replace(state, films=films, current=current, loading=False)


def film_selected(state: CatalogState, film: Film) -> CatalogState:
    # a film that is no longer in the catalog cannot become the selection
    if state.find(film.id) is None:
        return state
    return replace(state, films=_replace_film(state.films, film), current=film)


def ticket_purchased(state: CatalogState, film: Film) -> CatalogState:
    # list and detail panel change in the same step
    current = state.current
    if current is not None and current.id == film.id:
        current = film
    return replace(state, films=_replace_film(state.films, film), current=current)


def film_deleted(state: CatalogState, film_id: str) -> CatalogState:
    films = tuple(f for f in state.films if f.id != film_id)
    current = state.current
    if current is not None and current.id == film_id:
        current = films[0] if films else None
    return replace(
        state,
        films=films,
        current=current,
        pending=state.pending - {film_id},
    )


def query_changed(state: CatalogState, query: str) -> CatalogState:
    return replace(state, query=query)


def action_started(state: CatalogState, film_id: str) -> CatalogState:
    return replace(state, pending=state.pending | {film_id})


def action_finished(state: CatalogState, film_id: str) -> CatalogState:
    return replace(state, pending=state.pending - {film_id})


def loading_changed(state: CatalogState, loading: bool) -> CatalogState:
    return replace(state, loading=loading)


# ----------------- VIEWS -----------------


@dataclass(frozen=True)
class ListItem:
    film_id: str
    title: str
    sold_out: bool
    selected: bool
    pending: bool


@dataclass(frozen=True)
class DetailView:
    poster: str = ""
    title: str = ""
    description: str = ""
    runtime: str = ""
    showtime: str = ""
    available: str = ""
    buy_enabled: bool = False
    buy_label: str = BUY_LABEL

    @property
    def is_empty(self) -> bool:
        return not self.title


def matches(film: Film, query: str) -> bool:
    return query.lower() in film.title.lower()


def visible_films(state: CatalogState) -> List[Film]:
    if not state.query:
        return list(state.films)
    return [f for f in state.films if matches(f, state.query)]


def list_items(state: CatalogState) -> List[ListItem]:
    current_id = state.current.id if state.current else None
    return [
        ListItem(
            film_id=f.id,
            title=f.title,
            sold_out=f.sold_out,
            selected=f.id == current_id,
            pending=f.id in state.pending,
        )
        for f in visible_films(state)
    ]


def detail_view(state: CatalogState) -> DetailView:
    film = state.current
    if film is None:
        return DetailView()

    available = max(film.available, 0)
    return DetailView(
        poster=film.poster,
        title=film.title,
        description=film.description,
        runtime=f"{film.runtime} minutes",
        showtime=film.showtime,
        available=str(available),
        buy_enabled=not film.sold_out and film.id not in state.pending,
        buy_label=SOLD_OUT_LABEL if film.sold_out else BUY_LABEL,
    )
