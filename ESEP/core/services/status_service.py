"""
Status Service - Public registration status lookup.
"""
from core.models.entities import LookupMode, Registration
from core.repositories.registration_repository import RegistrationRepository
from utils.exceptions import ValidationException, NotFoundException


class StatusService:
    def __init__(self, registration_repo: RegistrationRepository = None):
        self.registration_repo = registration_repo or RegistrationRepository()

    def find_registration(self, query: str, mode=LookupMode.MOBILE) -> Registration:
        """Exact-match lookup by mobile number or customer ID.

        Anything other than exactly one matching row is reported as not found.
        """
        query = (query or '').strip()
        if not query:
            raise ValidationException("Please enter a mobile number or customer ID")

        try:
            mode = LookupMode(mode)
        except ValueError:
            raise ValidationException(f"Unknown lookup mode: {mode}")
        if mode == LookupMode.MOBILE:
            matches = self.registration_repo.find_by_mobile(query)
        else:
            matches = self.registration_repo.find_by_customer_id(query)

        if len(matches) != 1:
            raise NotFoundException("No registration found with the provided details")
        return matches[0]
