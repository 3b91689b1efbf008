import threading

from conftest import FakeSource, make_film, network_down, notices, states

from controller import ActionKind, CatalogController, Decision, TicketIssued
from errors import ResponseStatusError
from state import SOLD_OUT_LABEL, detail_view, list_items


def test_load_then_buy_last_seat_scenario(loaded, source):
    # A(5/5) is selected on load and sold out
    view = detail_view(loaded.state)
    assert view.title == 'Alien'
    assert view.buy_label == SOLD_OUT_LABEL
    assert view.buy_enabled is False

    assert loaded.select_film('2')
    view = detail_view(loaded.state)
    assert view.available == '1'
    assert view.buy_enabled is True

    assert loaded.purchase_ticket()

    view = detail_view(loaded.state)
    assert view.available == '0'
    assert view.buy_label == SOLD_OUT_LABEL
    assert view.buy_enabled is False
    assert source.films['2'].tickets_sold == 3
    assert len(source.tickets) == 1


def test_load_failure_keeps_state_and_reports(controller, source, events):
    source.fail_on['list_films'] = network_down()

    assert controller.load_catalog() is False

    assert controller.state.films == ()
    assert controller.state.loading is False
    assert notices(events)[-1].is_error


def test_reload_failure_keeps_previous_films(loaded, source, films):
    source.fail_on['list_films'] = ResponseStatusError(500)

    assert loaded.load_catalog() is False

    assert loaded.state.films == tuple(films)


def test_select_unknown_film_reports_not_found(loaded, events, films):
    assert loaded.select_film('404') is False

    assert loaded.state.current == films[0]
    assert 'not found' in notices(events)[-1].message


def test_purchase_requires_confirmation(loaded, source):
    loaded.select_film('3')

    action = loaded.request_purchase()

    assert action.kind is ActionKind.PURCHASE
    assert action.prompt == 'Buy a ticket for "Casablanca"?'
    assert loaded.apply(action, Decision.CANCEL) is False
    assert source.films['3'].tickets_sold == 10
    assert 'update_tickets_sold' not in source.calls


def test_purchase_on_sold_out_film_is_rejected(loaded, source, events):
    assert loaded.request_purchase() is None

    assert 'sold out' in notices(events)[-1].message
    assert 'update_tickets_sold' not in source.calls


def test_purchase_without_selection_is_rejected(controller, events):
    assert controller.request_purchase() is None
    assert notices(events)[-1].level == 'warning'


def test_failed_purchase_leaves_local_state_untouched(loaded, source, events):
    loaded.select_film('3')
    source.fail_on['update_tickets_sold'] = network_down()

    assert loaded.purchase_ticket() is False

    assert loaded.state.current.tickets_sold == 10
    assert loaded.state.find('3').tickets_sold == 10
    assert loaded.state.pending == frozenset()
    assert notices(events)[-1].is_error
    assert source.tickets == []


def test_ticket_record_failure_is_a_warning_only(loaded, source, events):
    loaded.select_film('3')
    source.fail_on['create_ticket'] = network_down()

    assert loaded.purchase_ticket() is True

    assert loaded.state.current.tickets_sold == 11
    assert notices(events)[-1].level == 'warning'
    assert not any(isinstance(e, TicketIssued) for e in events)


def test_successful_purchase_issues_ticket(loaded, events):
    loaded.select_film('3')

    loaded.purchase_ticket()

    issued = [e for e in events if isinstance(e, TicketIssued)]
    assert len(issued) == 1
    assert issued[0].film.tickets_sold == 11
    assert issued[0].ticket.film_id == '3'
    assert notices(events)[-1].message == 'Ticket purchased successfully!'


def test_purchase_marks_film_pending_while_in_flight(loaded, source, events):
    loaded.select_film('3')
    seen = []
    original = source.update_tickets_sold

    def slow_update(film_id, tickets_sold):
        seen.append(loaded.state.pending)
        seen.append(detail_view(loaded.state).buy_enabled)
        # a second purchase for the same film is refused meanwhile
        seen.append(loaded.request_purchase())
        return original(film_id, tickets_sold)

    source.update_tickets_sold = slow_update

    assert loaded.purchase_ticket()

    assert seen[0] == frozenset({'3'})
    assert seen[1] is False
    assert seen[2] is None
    assert loaded.state.pending == frozenset()
    assert source.films['3'].tickets_sold == 11


def test_purchase_never_exceeds_capacity():
    source = FakeSource([make_film('1', 'Tiny', capacity=2, tickets_sold=0)])
    ctrl = CatalogController(source)
    ctrl.load_catalog()

    results = [ctrl.purchase_ticket() for _ in range(4)]

    assert results == [True, True, False, False]
    assert source.films['1'].tickets_sold == 2
    assert ctrl.state.current.available == 0


def test_state_changes_are_published(loaded, events):
    loaded.filter_list('bra')

    assert states(events)[-1].query == 'bra'
    assert [i.title for i in list_items(states(events)[-1])] == ['Brazil']


def test_filter_does_not_touch_films_or_selection(loaded, films):
    loaded.filter_list('casa')
    loaded.filter_list('')

    assert loaded.state.films == tuple(films)
    assert loaded.state.current == films[0]


def test_delete_requires_confirmation(loaded, source):
    action = loaded.request_delete('2')

    assert action.kind is ActionKind.DELETE
    assert action.prompt == 'Are you sure you want to delete "Brazil"?'
    assert loaded.apply(action, Decision.CANCEL) is False
    assert '2' in source.films


def test_delete_current_selects_next(loaded, source, films):
    assert loaded.delete_film('1')

    assert '1' not in source.films
    assert loaded.state.current == films[1]
    assert [i.film_id for i in list_items(loaded.state)] == ['2', '3']


def test_delete_only_film_clears_detail_panel():
    source = FakeSource([make_film('1', 'Solo')])
    ctrl = CatalogController(source)
    ctrl.load_catalog()

    assert ctrl.delete_film('1')

    view = detail_view(ctrl.state)
    assert ctrl.state.current is None
    assert view.title == ''
    assert view.available == ''
    assert view.buy_enabled is False


def test_failed_delete_keeps_film(loaded, source, events, films):
    source.fail_on['delete_film'] = ResponseStatusError(500)

    assert loaded.delete_film('1') is False

    assert loaded.state.films == tuple(films)
    assert loaded.state.current == films[0]
    assert loaded.state.pending == frozenset()
    assert notices(events)[-1].message.startswith('Failed to delete film')


def test_delete_unknown_film_is_rejected(loaded, source):
    assert loaded.request_delete('99') is None
    assert 'delete_film' not in source.calls


def test_unsubscribe_stops_events(controller, source):
    received = []
    unsubscribe = controller.subscribe(received.append)
    unsubscribe()

    controller.load_catalog()

    assert received == []


def test_film_deleted_while_its_details_load_is_not_shown(loaded, source, events, films):
    original = source.get_film

    def get_then_deleted(film_id):
        film = original(film_id)
        assert loaded.delete_film(film_id)
        return film

    source.get_film = get_then_deleted

    assert loaded.select_film('2') is False

    assert [f.id for f in loaded.state.films] == ['1', '3']
    assert loaded.state.current == films[0]
    assert loaded.state.loading is False
    assert detail_view(loaded.state).title == 'Alien'
    assert 'not found' in notices(events)[-1].message


def test_concurrent_purchase_of_same_film_counts_every_ticket(loaded, source):
    loaded.select_film('3')
    action = loaded.request_purchase()
    in_patch = threading.Event()
    release = threading.Event()
    original = source.update_tickets_sold

    def held_update(film_id, tickets_sold):
        in_patch.set()
        release.wait(5)
        return original(film_id, tickets_sold)

    source.update_tickets_sold = held_update
    results = []
    first = threading.Thread(target=lambda: results.append(loaded.apply(action, Decision.CONFIRM)))
    first.start()
    assert in_patch.wait(5)

    # the same film is still being sold, a second purchase is refused
    assert loaded.apply(action, Decision.CONFIRM) is False

    release.set()
    first.join(5)
    assert results == [True]

    # a stale confirmation applied afterwards builds on the fresh count
    assert loaded.apply(action, Decision.CONFIRM) is True
    assert source.films['3'].tickets_sold == 12
    assert len(source.tickets) == 2


def test_close_releases_source_and_listeners(controller, source, events):
    controller.close()
    controller.filter_list('x')

    assert source.closed is True
    assert events == []
