import typing

import pytest

from controller import CatalogController, Notice, StateChanged
from errors import CatalogError, FilmNotFoundError, TransportError
from models import Film, Ticket


def make_film(film_id='1', title='Film', capacity=10, tickets_sold=0, **extra) -> Film:
    data = {
        'id': film_id,
        'title': title,
        'poster': f'https://example.test/{film_id}.jpg',
        'description': f'About {title}',
        'runtime': 90,
        'showtime': '07:00PM',
        'capacity': capacity,
        'tickets_sold': tickets_sold,
    }
    data.update(extra)
    return Film.from_dict(data)


class FakeSource:
    """In-memory film source; set ``fail_on`` to make an operation raise."""

    def __init__(self, films: typing.Iterable[Film] = ()):
        self.films = {f.id: f for f in films}
        self.tickets: typing.List[Ticket] = []
        self.fail_on: typing.Dict[str, CatalogError] = {}
        self.calls: typing.List[str] = []
        self.closed = False

    def close(self):
        self.closed = True

    def _maybe_fail(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise self.fail_on[name]

    def list_films(self):
        self._maybe_fail('list_films')
        return list(self.films.values())

    def get_film(self, film_id):
        self._maybe_fail('get_film')
        if film_id not in self.films:
            raise FilmNotFoundError(film_id)
        return self.films[film_id]

    def update_tickets_sold(self, film_id, tickets_sold):
        self._maybe_fail('update_tickets_sold')
        if film_id not in self.films:
            raise FilmNotFoundError(film_id)
        self.films[film_id] = self.films[film_id].with_tickets_sold(tickets_sold)
        return self.films[film_id]

    def create_ticket(self, ticket):
        self._maybe_fail('create_ticket')
        saved = Ticket(ticket.film_id, ticket.number_of_tickets, id=str(len(self.tickets) + 1))
        self.tickets.append(saved)
        return saved

    def delete_film(self, film_id):
        self._maybe_fail('delete_film')
        if film_id not in self.films:
            raise FilmNotFoundError(film_id)
        del self.films[film_id]


@pytest.fixture
def films() -> typing.List[Film]:
    return [
        make_film('1', 'Alien', capacity=5, tickets_sold=5),
        make_film('2', 'Brazil', capacity=3, tickets_sold=2),
        make_film('3', 'Casablanca', capacity=40, tickets_sold=10),
    ]


@pytest.fixture
def source(films) -> FakeSource:
    return FakeSource(films)


@pytest.fixture
def events() -> typing.List[object]:
    return []


@pytest.fixture
def controller(source, events) -> CatalogController:
    ctrl = CatalogController(source)
    ctrl.subscribe(events.append)
    return ctrl


@pytest.fixture
def loaded(controller) -> CatalogController:
    assert controller.load_catalog()
    return controller


def notices(events) -> typing.List[Notice]:
    return [e for e in events if isinstance(e, Notice)]


def states(events):
    return [e.state for e in events if isinstance(e, StateChanged)]


def network_down() -> TransportError:
    return TransportError('Could not reach http://localhost:3000')
