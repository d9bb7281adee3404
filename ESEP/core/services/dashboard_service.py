"""
Dashboard Service - Registration counts for the admin overview.
"""
from collections import Counter
from typing import Iterable, List

from core.models.entities import DashboardStats, Panchayath, Registration
from core.repositories.panchayath_repository import PanchayathRepository
from core.repositories.registration_repository import RegistrationRepository


def compute_stats(registrations: Iterable[Registration], panchayaths: Iterable[Panchayath]) -> DashboardStats:
    """Totals per category, per panchayath and per status.

    by_panchayath follows the given panchayath order and lists every panchayath,
    including those with no registrations. by_category only holds categories that
    occur in the data.
    """
    registrations = list(registrations)
    by_category = Counter(r.category for r in registrations)
    per_panchayath = Counter(r.panchayath for r in registrations)
    by_status = Counter(r.status.value for r in registrations)

    return DashboardStats(
        total=len(registrations),
        by_category=dict(by_category),
        by_panchayath=[(p.name, per_panchayath.get(p.name, 0)) for p in panchayaths],
        by_status=dict(by_status),
    )


class DashboardService:
    def __init__(self, registration_repo: RegistrationRepository = None,
                 panchayath_repo: PanchayathRepository = None):
        self.registration_repo = registration_repo or RegistrationRepository()
        self.panchayath_repo = panchayath_repo or PanchayathRepository()

    def get_stats(self) -> DashboardStats:
        return compute_stats(self.registration_repo.get_all(), self.panchayath_repo.get_all())

    def recent_registrations(self, count: int = 5) -> List[Registration]:
        return self.registration_repo.get_all()[:count]
