import pytest

from errors import DataError
from models import Film, Ticket


def test_film_from_json_server_payload_with_string_numbers():
    film = Film.from_dict({
        'id': 1,
        'title': 'The Giant Gila Monster',
        'runtime': '108',
        'capacity': 30,
        'showtime': '04:00PM',
        'tickets_sold': '27',
        'description': 'A giant lizard',
        'poster': 'https://example.test/p.jpg',
    })

    assert film.id == '1'
    assert film.runtime == 108
    assert film.tickets_sold == 27
    assert film.available == 3
    assert film.sold_out is False


@pytest.mark.parametrize(
    ('capacity', 'sold', 'expected_available', 'expected_sold_out'),
    [(5, 5, 0, True), (3, 2, 1, False), (0, 0, 0, True), (4, 6, -2, True)],
)
def test_available_and_sold_out(capacity, sold, expected_available, expected_sold_out):
    film = Film.from_dict({'id': 'x', 'title': 'X', 'capacity': capacity, 'tickets_sold': sold})

    assert film.available == expected_available
    assert film.sold_out is expected_sold_out


def test_film_without_capacity_is_rejected():
    with pytest.raises(DataError):
        Film.from_dict({'id': 1, 'title': 'No seats'})


def test_film_with_negative_runtime_is_rejected():
    with pytest.raises(DataError):
        Film.from_dict({'id': 1, 'title': 'Odd', 'capacity': 3, 'runtime': -1})


def test_film_with_non_numeric_capacity_is_rejected():
    with pytest.raises(DataError):
        Film.from_dict({'id': 1, 'title': 'Odd', 'capacity': 'many'})


def test_film_must_be_an_object():
    with pytest.raises(DataError):
        Film.from_dict(['not', 'a', 'film'])


def test_film_to_dict_keeps_all_fields():
    payload = {
        'id': '7', 'title': 'T', 'poster': 'p', 'description': 'd',
        'runtime': 80, 'showtime': '9PM', 'capacity': 4, 'tickets_sold': 1,
    }

    assert Film.from_dict(payload).to_dict() == payload


def test_ticket_payload_and_parse():
    ticket = Ticket(film_id='3')

    assert ticket.to_payload() == {'film_id': '3', 'number_of_tickets': 1}

    saved = Ticket.from_dict({'id': 12, 'film_id': 3, 'number_of_tickets': 1})
    assert saved == Ticket(film_id='3', number_of_tickets=1, id='12')


def test_ticket_for_zero_seats_is_rejected():
    with pytest.raises(DataError):
        Ticket.from_dict({'film_id': 3, 'number_of_tickets': 0})
