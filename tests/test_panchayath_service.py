import pytest

from core.models.roles import Action
from utils.exceptions import AuthorizationException, NotFoundException, ValidationException


def test_create_and_list_sorted(panchayath_service, local_admin):
    panchayath_service.create_panchayath(local_admin, 'Tirur', 'Malappuram')
    created = panchayath_service.create_panchayath(local_admin, '  Kottakkal  ', ' Malappuram ')

    assert created.id == 2
    assert created.name == 'Kottakkal'
    assert [p.name for p in panchayath_service.list_panchayaths()] == ['Kottakkal', 'Tirur']


def test_names_need_not_be_unique(panchayath_service, local_admin):
    panchayath_service.create_panchayath(local_admin, 'Edakkara', 'Malappuram')
    panchayath_service.create_panchayath(local_admin, 'Edakkara', 'Malappuram')
    assert len(panchayath_service.list_panchayaths()) == 2


def test_create_requires_both_fields(panchayath_service, local_admin):
    with pytest.raises(ValidationException):
        panchayath_service.create_panchayath(local_admin, 'Tirur', '')


def test_user_admin_cannot_create(panchayath_service, user_admin, db):
    with pytest.raises(AuthorizationException):
        panchayath_service.create_panchayath(user_admin, 'Tirur', 'Malappuram')
    assert db.tables['panchayaths'] == []


def test_update(panchayath_service, local_admin, db):
    created = panchayath_service.create_panchayath(local_admin, 'Tirur', 'Malappuram')
    panchayath_service.update_panchayath(local_admin, created.id, {'district': 'Kozhikode'})
    assert db.tables['panchayaths'][0]['district'] == 'Kozhikode'

    with pytest.raises(ValidationException):
        panchayath_service.update_panchayath(local_admin, created.id, {'population': 5})
    with pytest.raises(NotFoundException):
        panchayath_service.update_panchayath(local_admin, 99, {'name': 'X'})


def test_delete_requires_confirmation(panchayath_service, super_admin, db):
    created = panchayath_service.create_panchayath(super_admin, 'Tirur', 'Malappuram')

    with pytest.raises(ValidationException):
        panchayath_service.delete_panchayath(super_admin, created.id)
    panchayath_service.delete_panchayath(super_admin, created.id, confirmed=True)
    assert db.tables['panchayaths'] == []


def test_row_actions(panchayath_service, local_admin, user_admin):
    created = panchayath_service.create_panchayath(local_admin, 'Tirur', 'Malappuram')
    assert panchayath_service.row_actions(local_admin, created) == {Action.UPDATE, Action.DELETE}
    assert panchayath_service.row_actions(user_admin, created) == frozenset()


def test_update_is_logged(panchayath_service, local_admin, caplog):
    created = panchayath_service.create_panchayath(local_admin, 'Tirur', 'Malappuram')
    with caplog.at_level("INFO", logger="utils.helpers"):
        panchayath_service.update_panchayath(local_admin, created.id, {'name': 'Tirur  North'})
    events = [r for r in caplog.records if getattr(r, 'event_type', None) == 'panchayath_updated']
    assert events[0].details == {'fields': ['name']}
