"""
Registration Service - Public registration submission and admin management of registrations.

Registrations store the panchayath and category by name rather than by id; every
place that writes those two columns goes through this service.
"""
from dataclasses import dataclass, replace
from typing import List, Dict, Any, Optional, Iterable

from core.models.entities import Category, Registration, RegistrationStatus
from core.models.roles import Action
from core.repositories.registration_repository import RegistrationRepository
from utils.exceptions import (
    ValidationException, DuplicateRegistrationException, NotFoundException,
    InvalidStatusTransitionException
)
from utils.validators import PortalValidator
from utils.helpers import LoggingUtils, StringUtils

REQUIRED_FIELDS = {
    'name': 'Full Name',
    'address': 'Address',
    'mobile': 'Mobile Number',
    'panchayath': 'Panchayath',
    'ward': 'Ward',
}

EDITABLE_FIELDS = ('name', 'address', 'mobile', 'panchayath', 'ward', 'category', 'agent_details')


@dataclass(frozen=True)
class RegistrationFilter:
    """Admin table filters; empty values match everything"""
    search: str = ''
    category: Optional[str] = None
    panchayath: Optional[str] = None

    def matches(self, registration: Registration) -> bool:
        term = (self.search or '').strip().lower()
        if term and not any(term in (value or '').lower() for value in (
                registration.name, registration.mobile,
                registration.customer_id, registration.panchayath)):
            return False
        if self.category and registration.category != self.category:
            return False
        if self.panchayath and registration.panchayath != self.panchayath:
            return False
        return True


def filter_registrations(registrations: Iterable[Registration],
                         criteria: RegistrationFilter) -> List[Registration]:
    return [r for r in registrations if criteria.matches(r)]


class RegistrationService:
    def __init__(self, registration_repo: RegistrationRepository = None):
        self.registration_repo = registration_repo or RegistrationRepository()

    # ── Public flow ────────────────────────────────────────────────────────────
    def validate_submission(self, form: Dict[str, Any]) -> Dict[str, Any]:
        """Check required fields, mobile format and duplicates before asking the user to confirm"""
        fields = PortalValidator.validate_required_fields(form, REQUIRED_FIELDS)
        fields['name'] = StringUtils.clean_string(fields['name'])
        PortalValidator.validate_mobile(fields['mobile'])

        if self.registration_repo.mobile_exists(fields['mobile']):
            raise DuplicateRegistrationException(
                "A registration with this mobile number already exists."
            )

        agent = (form.get('agent_details') or '').strip()
        fields['agent_details'] = agent or None
        return fields

    def register(self, form: Dict[str, Any], category: Category) -> Registration:
        """Submit a registration for a category; returns the stored registration."""
        if category is None or not category.name:
            raise ValidationException("Please select a category")

        fields = self.validate_submission(form)
        registration = Registration(
            customer_id=StringUtils.generate_customer_id(fields['mobile'], fields['name']),
            name=fields['name'],
            address=fields['address'],
            mobile=fields['mobile'],
            panchayath=fields['panchayath'],
            ward=fields['ward'],
            category=category.name,
            agent_details=fields['agent_details'],
            status=RegistrationStatus.PENDING,
            fee_amount=category.offer_fee,
        )
        registration.id = self.registration_repo.create_registration(registration)

        LoggingUtils.log_business_event(
            "registration_submitted", "registration", registration.id,
            details={'customer_id': registration.customer_id, 'category': registration.category}
        )
        return registration

    # ── Admin management ───────────────────────────────────────────────────────
    def list_registrations(self, criteria: RegistrationFilter = None) -> List[Registration]:
        registrations = self.registration_repo.get_all()
        if criteria is None:
            return registrations
        return filter_registrations(registrations, criteria)

    def get_registration(self, registration_id: int) -> Registration:
        registration = self.registration_repo.find_registration_by_id(registration_id)
        if not registration:
            raise NotFoundException(f"Registration {registration_id} not found")
        return registration

    def update_registration(self, session, registration_id: int, changes: Dict[str, Any]) -> Registration:
        session.require(Action.UPDATE)
        current = self.get_registration(registration_id)

        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationException(f"Unknown registration fields: {', '.join(sorted(unknown))}")

        clean = {}
        for key, value in changes.items():
            if key == 'agent_details':
                clean[key] = (value or '').strip()
            else:
                label = REQUIRED_FIELDS.get(key, 'Category')
                clean[key] = PortalValidator.validate_required(value, label)

        if 'name' in clean:
            clean['name'] = StringUtils.clean_string(clean['name'])

        if 'mobile' in clean and clean['mobile'] != current.mobile:
            PortalValidator.validate_mobile(clean['mobile'])
            if self.registration_repo.mobile_exists(clean['mobile']):
                raise DuplicateRegistrationException(
                    "A registration with this mobile number already exists."
                )

        updated = replace(current, **clean)
        if updated.mobile != current.mobile or updated.name != current.name:
            clean['customer_id'] = StringUtils.generate_customer_id(updated.mobile, updated.name)
            updated = replace(updated, customer_id=clean['customer_id'])

        if clean:
            self.registration_repo.update(registration_id, clean)
            LoggingUtils.log_business_event(
                "registration_updated", "registration", registration_id,
                username=session.username, details={'fields': sorted(clean)}
            )
        return updated

    def set_status(self, session, registration_id: int, new_status) -> Registration:
        """Move a pending registration to approved or rejected"""
        session.require(Action.SET_STATUS)
        registration = self.get_registration(registration_id)
        try:
            target = RegistrationStatus(new_status)
        except ValueError:
            raise ValidationException(f"Unknown registration status: {new_status}")

        if target not in registration.allowed_transitions():
            raise InvalidStatusTransitionException(
                f"Cannot change status from {registration.status.value} to {target.value}"
            )

        self.registration_repo.update_status(registration_id, target)
        LoggingUtils.log_business_event(
            "registration_status_changed", "registration", registration_id,
            username=session.username,
            details={'from': registration.status.value, 'to': target.value}
        )
        return replace(registration, status=target)

    def delete_registration(self, session, registration_id: int, confirmed: bool = False):
        """Delete a registration; the caller must have asked the user to confirm."""
        session.require(Action.DELETE)
        if not confirmed:
            raise ValidationException("Please confirm the deletion")
        registration = self.get_registration(registration_id)

        self.registration_repo.delete(registration_id)
        LoggingUtils.log_business_event(
            "registration_deleted", "registration", registration_id,
            username=session.username, details={'customer_id': registration.customer_id}
        )

    def row_actions(self, session, registration: Registration) -> frozenset:
        actions = {a for a in (Action.UPDATE, Action.DELETE) if session.can(a)}
        if session.can(Action.SET_STATUS) and registration.allowed_transitions():
            actions.add(Action.SET_STATUS)
        return frozenset(actions)

    def status_options(self, session, registration: Registration) -> List[RegistrationStatus]:
        """Statuses an admin may move this registration to"""
        if not session.can(Action.SET_STATUS):
            return []
        return sorted(registration.allowed_transitions(), key=lambda s: s.value)

    def subscribe(self, callback):
        return self.registration_repo.subscribe(callback)
