"""
Panchayath Service - Manage the panchayath/district list used by the registration form.
"""
from typing import List, Dict, Any

from core.models.entities import Panchayath
from core.models.roles import Action
from core.repositories.panchayath_repository import PanchayathRepository
from utils.exceptions import ValidationException, NotFoundException
from utils.validators import PortalValidator
from utils.helpers import LoggingUtils, StringUtils


class PanchayathService:
    def __init__(self, panchayath_repo: PanchayathRepository = None):
        self.panchayath_repo = panchayath_repo or PanchayathRepository()

    def list_panchayaths(self) -> List[Panchayath]:
        return self.panchayath_repo.get_all()

    def create_panchayath(self, session, name: str, district: str) -> Panchayath:
        session.require(Action.CREATE)
        fields = PortalValidator.validate_required_fields(
            {'name': name, 'district': district},
            {'name': 'Panchayath Name', 'district': 'District'}
        )
        name = StringUtils.clean_string(fields['name'])
        district = StringUtils.clean_string(fields['district'])

        panchayath = Panchayath(name=name, district=district)
        panchayath.id = self.panchayath_repo.create_panchayath(panchayath)
        LoggingUtils.log_business_event("panchayath_created", "panchayath", panchayath.id,
                                        username=session.username)
        return panchayath

    def update_panchayath(self, session, panchayath_id: int, changes: Dict[str, Any]):
        session.require(Action.UPDATE)
        self._get_or_raise(panchayath_id)

        labels = {'name': 'Panchayath Name', 'district': 'District'}
        clean = {}
        for key, value in changes.items():
            if key not in labels:
                raise ValidationException(f"Unknown panchayath field: {key}")
            clean[key] = StringUtils.clean_string(PortalValidator.validate_required(value, labels[key]))

        if clean:
            self.panchayath_repo.update(panchayath_id, clean)
            LoggingUtils.log_business_event("panchayath_updated", "panchayath", panchayath_id,
                                            username=session.username, details={'fields': sorted(clean)})

    def delete_panchayath(self, session, panchayath_id: int, confirmed: bool = False):
        """Delete a panchayath; the caller must have asked the user to confirm."""
        session.require(Action.DELETE)
        if not confirmed:
            raise ValidationException("Please confirm the deletion")
        panchayath = self._get_or_raise(panchayath_id)

        self.panchayath_repo.delete(panchayath_id)
        LoggingUtils.log_business_event("panchayath_deleted", "panchayath", panchayath_id,
                                        username=session.username, details={'name': panchayath.name})

    def row_actions(self, session, panchayath: Panchayath) -> frozenset:
        return frozenset(a for a in (Action.UPDATE, Action.DELETE) if session.can(a))

    def subscribe(self, callback):
        return self.panchayath_repo.subscribe(callback)

    def _get_or_raise(self, panchayath_id: int) -> Panchayath:
        panchayath = self.panchayath_repo.find_panchayath_by_id(panchayath_id)
        if not panchayath:
            raise NotFoundException(f"Panchayath {panchayath_id} not found")
        return panchayath
