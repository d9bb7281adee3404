from decimal import Decimal

from core.models.entities import Category


def test_repository_writes_publish_events(feed, panchayath_service, local_admin):
    events = []
    feed.subscribe('panchayaths', events.append)

    created = panchayath_service.create_panchayath(local_admin, 'Tirur', 'Malappuram')
    panchayath_service.update_panchayath(local_admin, created.id, {'district': 'Kozhikode'})
    panchayath_service.delete_panchayath(local_admin, created.id, confirmed=True)

    assert [e.action for e in events] == ['INSERT', 'UPDATE', 'DELETE']
    assert [e.version for e in events] == [1, 2, 3]
    assert events[0].record_id == created.id
    assert feed.version('panchayaths') == 3


def test_subscriber_refetch_sees_new_row(registration_service, registration_form):
    seen = []
    registration_service.subscribe(lambda event: seen.append(len(registration_service.list_registrations())))

    registration_service.register(registration_form, Category(name='Farmelife', offer_fee=Decimal('599')))
    assert seen == [1]


def test_events_are_per_table(feed, panchayath_service, local_admin):
    category_events = []
    feed.subscribe('categories', category_events.append)
    panchayath_service.create_panchayath(local_admin, 'Tirur', 'Malappuram')

    assert category_events == []
    assert feed.snapshot(['categories', 'panchayaths']) == {'categories': 0, 'panchayaths': 1}


def test_unsubscribe(feed):
    events = []
    unsubscribe = feed.subscribe('registrations', events.append)
    feed.publish('registrations', 'INSERT', 1)
    unsubscribe()
    feed.publish('registrations', 'INSERT', 2)
    assert len(events) == 1


def test_failing_listener_does_not_block_others(feed):
    events = []

    def broken(event):
        raise RuntimeError("listener bug")

    feed.subscribe('registrations', broken)
    feed.subscribe('registrations', events.append)
    event = feed.publish('registrations', 'UPDATE', 7)

    assert events == [event]
