from decimal import Decimal

import pytest

from core.models.entities import Category, Registration, RegistrationStatus
from core.models.roles import Action
from core.services.registration_service import RegistrationFilter, filter_registrations
from utils.exceptions import (
    AuthorizationException, DuplicateRegistrationException, InvalidStatusTransitionException,
    NotFoundException, ValidationException
)

FARMELIFE = Category(id='farmelife', name='Farmelife', actual_fee=Decimal('800'), offer_fee=Decimal('599'))


def test_register_creates_pending_registration(registration_service, registration_form, db):
    registration = registration_service.register(registration_form, FARMELIFE)

    assert registration.id == 1
    assert registration.customer_id == "ESEP9876543210A"
    assert registration.status is RegistrationStatus.PENDING
    assert registration.fee_amount == Decimal('599')
    assert registration.agent_details is None

    stored = db.tables['registrations'][0]
    assert stored['category'] == 'Farmelife'
    assert stored['status'] == 'pending'
    assert 'agent_details' not in stored


def test_duplicate_mobile_is_rejected(registration_service, registration_form, db):
    registration_service.register(registration_form, FARMELIFE)
    again = dict(registration_form, name='Someone Else')

    with pytest.raises(DuplicateRegistrationException) as exc:
        registration_service.register(again, FARMELIFE)

    assert exc.value.message == "A registration with this mobile number already exists."
    assert len(db.tables['registrations']) == 1


def test_missing_fields_reported_together(registration_service, registration_form):
    form = dict(registration_form, name='  ', ward='')
    with pytest.raises(ValidationException) as exc:
        registration_service.validate_submission(form)
    assert "Full Name" in exc.value.message
    assert "Ward" in exc.value.message


def test_invalid_mobile(registration_service, registration_form):
    with pytest.raises(ValidationException):
        registration_service.register(dict(registration_form, mobile='12345'), FARMELIFE)


def test_category_required(registration_service, registration_form):
    with pytest.raises(ValidationException):
        registration_service.register(registration_form, None)


def test_agent_details_kept_when_given(registration_service, registration_form):
    form = dict(registration_form, agent_details='  Agent Ravi ')
    registration = registration_service.register(form, FARMELIFE)
    assert registration.agent_details == 'Agent Ravi'


def test_list_is_newest_first(registration_service, registration_form):
    registration_service.register(registration_form, FARMELIFE)
    registration_service.register(dict(registration_form, mobile='9000000001', name='Bina'), FARMELIFE)
    names = [r.name for r in registration_service.list_registrations()]
    assert names == ['Bina', 'anita']


def test_filter_combines_search_and_category():
    registrations = [
        Registration(id=1, name='anita', mobile='9876543210', customer_id='ESEP9876543210A',
                     panchayath='Kottakkal', category='Farmelife'),
        Registration(id=2, name='Anita K', mobile='9000000001', customer_id='ESEP9000000001A',
                     panchayath='Tirur', category='Foodelif'),
        Registration(id=3, name='Bina', mobile='9000000002', customer_id='ESEP9000000002B',
                     panchayath='Kottakkal', category='Farmelife'),
    ]
    criteria = RegistrationFilter(search='ANITA', category='Farmelife')
    assert [r.id for r in filter_registrations(registrations, criteria)] == [1]

    assert [r.id for r in filter_registrations(registrations, RegistrationFilter(search='kottakkal'))] == [1, 3]
    assert [r.id for r in filter_registrations(registrations, RegistrationFilter(search='ESEP9000'))] == [2, 3]
    assert len(filter_registrations(registrations, RegistrationFilter())) == 3
    assert [r.id for r in filter_registrations(registrations, RegistrationFilter(panchayath='Tirur'))] == [2]


def test_status_transitions(registration_service, registration_form, local_admin, db):
    registration = registration_service.register(registration_form, FARMELIFE)

    approved = registration_service.set_status(local_admin, registration.id, 'approved')
    assert approved.status is RegistrationStatus.APPROVED
    assert db.tables['registrations'][0]['status'] == 'approved'

    with pytest.raises(InvalidStatusTransitionException):
        registration_service.set_status(local_admin, registration.id, RegistrationStatus.REJECTED)
    with pytest.raises(InvalidStatusTransitionException):
        registration_service.set_status(local_admin, registration.id, RegistrationStatus.PENDING)


def test_unknown_status_value(registration_service, registration_form, local_admin):
    registration = registration_service.register(registration_form, FARMELIFE)
    with pytest.raises(ValidationException):
        registration_service.set_status(local_admin, registration.id, "on_hold")
    assert registration_service.get_registration(registration.id).status is RegistrationStatus.PENDING


def test_user_admin_cannot_mutate(registration_service, registration_form, user_admin, db):
    registration = registration_service.register(registration_form, FARMELIFE)

    with pytest.raises(AuthorizationException):
        registration_service.set_status(user_admin, registration.id, 'approved')
    with pytest.raises(AuthorizationException):
        registration_service.delete_registration(user_admin, registration.id, confirmed=True)
    with pytest.raises(AuthorizationException):
        registration_service.update_registration(user_admin, registration.id, {'ward': '8'})

    assert db.tables['registrations'][0]['status'] == 'pending'
    assert registration_service.row_actions(user_admin, registration) == frozenset()
    assert registration_service.status_options(user_admin, registration) == []


def test_row_actions_follow_status(registration_service, registration_form, local_admin):
    registration = registration_service.register(registration_form, FARMELIFE)
    assert registration_service.row_actions(local_admin, registration) == {
        Action.UPDATE, Action.DELETE, Action.SET_STATUS
    }
    assert registration_service.status_options(local_admin, registration) == [
        RegistrationStatus.APPROVED, RegistrationStatus.REJECTED
    ]

    approved = registration_service.set_status(local_admin, registration.id, 'approved')
    assert Action.SET_STATUS not in registration_service.row_actions(local_admin, approved)


def test_update_recomputes_customer_id(registration_service, registration_form, local_admin, db):
    registration = registration_service.register(registration_form, FARMELIFE)

    updated = registration_service.update_registration(
        local_admin, registration.id, {'name': 'Meera', 'mobile': '9123456789'}
    )
    assert updated.customer_id == 'ESEP9123456789M'
    assert db.tables['registrations'][0]['customer_id'] == 'ESEP9123456789M'


def test_update_ward_keeps_customer_id(registration_service, registration_form, local_admin, db):
    registration = registration_service.register(registration_form, FARMELIFE)
    updated = registration_service.update_registration(local_admin, registration.id, {'ward': '9'})
    assert updated.customer_id == registration.customer_id
    assert db.tables['registrations'][0]['ward'] == '9'


def test_update_to_taken_mobile_rejected(registration_service, registration_form, local_admin):
    registration_service.register(registration_form, FARMELIFE)
    second = registration_service.register(dict(registration_form, mobile='9000000001'), FARMELIFE)
    with pytest.raises(DuplicateRegistrationException):
        registration_service.update_registration(local_admin, second.id, {'mobile': '9876543210'})


def test_update_unknown_field(registration_service, registration_form, local_admin):
    registration = registration_service.register(registration_form, FARMELIFE)
    with pytest.raises(ValidationException):
        registration_service.update_registration(local_admin, registration.id, {'status': 'approved'})


def test_delete_requires_confirmation(registration_service, registration_form, super_admin, db):
    registration = registration_service.register(registration_form, FARMELIFE)

    with pytest.raises(ValidationException):
        registration_service.delete_registration(super_admin, registration.id)
    assert len(db.tables['registrations']) == 1

    registration_service.delete_registration(super_admin, registration.id, confirmed=True)
    assert db.tables['registrations'] == []

    with pytest.raises(NotFoundException):
        registration_service.get_registration(registration.id)


def test_update_normalizes_name_and_logs(registration_service, registration_form, local_admin, db, caplog):
    registration = registration_service.register(registration_form, FARMELIFE)

    with caplog.at_level("INFO", logger="utils.helpers"):
        updated = registration_service.update_registration(
            local_admin, registration.id, {'name': '  Anita   Kumari '}
        )

    assert updated.name == 'Anita Kumari'
    assert db.tables['registrations'][0]['name'] == 'Anita Kumari'
    events = [r for r in caplog.records if getattr(r, 'event_type', None) == 'registration_updated']
    assert len(events) == 1
    assert events[0].username == 'localadmin'
    assert events[0].details == {'fields': ['customer_id', 'name']}
