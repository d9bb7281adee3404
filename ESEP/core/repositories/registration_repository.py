"""
Registration Repository
Handles database operations for registrations table
"""

from decimal import Decimal
from typing import Optional, List

from core.repositories.base_repository import BaseRepository
from core.models.entities import Registration, RegistrationStatus

class RegistrationRepository(BaseRepository):
    """Repository for registrations table operations"""

    def __init__(self, db=None, feed=None):
        super().__init__('registrations', 'id', db=db, feed=feed)

    def create_registration(self, registration: Registration) -> int:
        return self.create({
            'customer_id': registration.customer_id,
            'name': registration.name,
            'address': registration.address,
            'mobile': registration.mobile,
            'panchayath': registration.panchayath,
            'ward': registration.ward,
            'category': registration.category,
            'agent_details': registration.agent_details,
            'status': registration.status.value,
            'fee_amount': registration.fee_amount,
        })

    def find_registration_by_id(self, registration_id: int) -> Optional[Registration]:
        data = self.find_by_id(registration_id)
        return self._dict_to_registration(data) if data else None

    def find_by_mobile(self, mobile: str) -> List[Registration]:
        return self._exact_matches('mobile', mobile)

    def find_by_customer_id(self, customer_id: str) -> List[Registration]:
        return self._exact_matches('customer_id', customer_id)

    def mobile_exists(self, mobile: str) -> bool:
        return len(self.find_by_field('mobile', mobile)) > 0

    def get_all(self) -> List[Registration]:
        """All registrations, newest first"""
        rows = self.find_all(order_by='created_at', descending=True)
        return [self._dict_to_registration(row) for row in rows]

    def update_status(self, registration_id: int, status: RegistrationStatus) -> bool:
        return self.update(registration_id, {'status': status.value})

    def _exact_matches(self, field_name: str, value: str) -> List[Registration]:
        """Rows equal to value character for character; SQL comparison ignores case and trailing spaces"""
        rows = self.find_by_field(field_name, value)
        return [self._dict_to_registration(row) for row in rows if row[field_name] == value]

    def _dict_to_registration(self, data: dict) -> Registration:
        """Convert dictionary to Registration object"""
        return Registration(
            id=data['id'],
            customer_id=data['customer_id'],
            name=data['name'],
            address=data.get('address') or '',
            mobile=data['mobile'],
            panchayath=data.get('panchayath') or '',
            ward=data.get('ward') or '',
            category=data.get('category') or '',
            agent_details=data.get('agent_details') or None,
            status=RegistrationStatus(data.get('status') or 'pending'),
            fee_amount=Decimal(str(data.get('fee_amount') or 0)),
            created_at=data.get('created_at')
        )
