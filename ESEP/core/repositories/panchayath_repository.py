"""
Panchayath Repository
Handles database operations for panchayaths table
"""

from typing import Optional, List

from core.repositories.base_repository import BaseRepository
from core.models.entities import Panchayath

class PanchayathRepository(BaseRepository):
    """Repository for panchayaths table operations"""

    def __init__(self, db=None, feed=None):
        super().__init__('panchayaths', 'id', db=db, feed=feed)

    def create_panchayath(self, panchayath: Panchayath) -> int:
        return self.create({'name': panchayath.name, 'district': panchayath.district})

    def find_panchayath_by_id(self, panchayath_id: int) -> Optional[Panchayath]:
        data = self.find_by_id(panchayath_id)
        return self._dict_to_panchayath(data) if data else None

    def get_all(self) -> List[Panchayath]:
        """All panchayaths ordered by name"""
        return [self._dict_to_panchayath(row) for row in self.find_all(order_by='name')]

    def _dict_to_panchayath(self, data: dict) -> Panchayath:
        return Panchayath(id=data['id'], name=data['name'], district=data['district'])
