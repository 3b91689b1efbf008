import json

import pytest

from controller import CatalogController
from data import FILMS, load_films_document
from errors import FilmNotFoundError, StorageError
from models import Ticket
from storage import LocalFilmSource


@pytest.fixture
def store(tmp_path) -> LocalFilmSource:
    return LocalFilmSource(tmp_path / 'films.db')


def test_seeds_bundled_films_in_order(store):
    films = store.list_films()

    assert [f.id for f in films] == [f['id'] for f in FILMS]
    assert films[0].title == 'The Giant Gila Monster'


def test_seed_runs_only_once(tmp_path, store):
    store.delete_film('1')

    reopened = LocalFilmSource(tmp_path / 'films.db')

    assert '1' not in [f.id for f in reopened.list_films()]


def test_get_film_and_not_found(store):
    assert store.get_film('2').title == 'Manos: The Hands Of Fate'

    with pytest.raises(FilmNotFoundError):
        store.get_film('missing')


def test_update_tickets_sold_persists(tmp_path, store):
    film = store.update_tickets_sold('3', 32)

    assert film.tickets_sold == 32
    assert LocalFilmSource(tmp_path / 'films.db').get_film('3').tickets_sold == 32


def test_update_unknown_film(store):
    with pytest.raises(FilmNotFoundError):
        store.update_tickets_sold('missing', 1)


def test_delete_film(store):
    store.delete_film('2')

    assert '2' not in [f.id for f in store.list_films()]
    with pytest.raises(FilmNotFoundError):
        store.delete_film('2')


def test_create_ticket_assigns_id(store):
    first = store.create_ticket(Ticket(film_id='1'))
    second = store.create_ticket(Ticket(film_id='1'))

    assert first.id == '1'
    assert second.id == '2'
    assert store.count_tickets('1') == 2
    assert store.count_tickets('2') == 0


def test_seed_from_json_server_document(tmp_path):
    document = tmp_path / 'db.json'
    document.write_text(json.dumps({
        'films': [{'id': 7, 'title': 'Seven', 'capacity': '9', 'tickets_sold': '1'}],
        'tickets': [],
    }), encoding='utf-8')

    store = LocalFilmSource(tmp_path / 'films.db', seed=load_films_document(document))

    films = store.list_films()
    assert [(f.id, f.capacity, f.available) for f in films] == [('7', 9, 8)]


def test_broken_seed_document(tmp_path):
    document = tmp_path / 'db.json'
    document.write_text('{not json', encoding='utf-8')

    with pytest.raises(StorageError):
        load_films_document(document)


def test_invalid_seed_film(tmp_path):
    with pytest.raises(StorageError):
        LocalFilmSource(tmp_path / 'films.db', seed=[{'id': 1, 'title': 'No capacity'}])


def test_controller_over_local_store(store):
    ctrl = CatalogController(store)
    ctrl.load_catalog()
    ctrl.select_film('5')

    assert ctrl.purchase_ticket()
    assert ctrl.delete_film('5')

    assert store.count_tickets('5') == 1
    assert ctrl.state.current.id == '1'
    assert '5' not in [f.id for f in store.list_films()]


def test_close_keeps_store_usable(store):
    store.close()

    assert store.get_film('1').id == '1'
