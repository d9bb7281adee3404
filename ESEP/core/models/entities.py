"""
Data Models for the ESEP Registration Portal
Dataclasses representing database entities
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, List
from enum import Enum

# Enums for database constraints
class AdminStatus(Enum):
    ACTIVE = 'active'
    INACTIVE = 'inactive'

class RegistrationStatus(Enum):
    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'

class LookupMode(Enum):
    MOBILE = 'mobile'
    CUSTOMER_ID = 'customer_id'

# Allowed registration status edges; approved and rejected are terminal
STATUS_TRANSITIONS = {
    RegistrationStatus.PENDING: frozenset({RegistrationStatus.APPROVED, RegistrationStatus.REJECTED}),
    RegistrationStatus.APPROVED: frozenset(),
    RegistrationStatus.REJECTED: frozenset(),
}

@dataclass
class AdminUser:
    """Administrator account used for panel login"""
    id: Optional[int] = None
    username: str = ""
    password: str = ""
    role: str = "User Admin"
    permissions: str = ""
    status: AdminStatus = AdminStatus.ACTIVE
    created_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == AdminStatus.ACTIVE

@dataclass
class Panchayath:
    """Local administrative division"""
    id: Optional[int] = None
    name: str = ""
    district: str = ""

@dataclass
class Category:
    """Self-employment category with actual and offer fee"""
    id: str = ""
    name: str = ""
    description: str = ""
    actual_fee: Decimal = Decimal('0.00')
    offer_fee: Decimal = Decimal('0.00')
    image: Optional[str] = None
    features: List[str] = field(default_factory=list)
    is_active: bool = True

    @property
    def discount_percent(self) -> int:
        if self.actual_fee <= 0:
            return 0
        return int(round((self.actual_fee - self.offer_fee) / self.actual_fee * 100))

    @property
    def is_free(self) -> bool:
        return self.offer_fee == 0

@dataclass
class Registration:
    """Registration entity; panchayath and category are stored by name"""
    id: Optional[int] = None
    customer_id: str = ""
    name: str = ""
    address: str = ""
    mobile: str = ""
    panchayath: str = ""
    ward: str = ""
    category: str = ""
    agent_details: Optional[str] = None
    status: RegistrationStatus = RegistrationStatus.PENDING
    fee_amount: Decimal = Decimal('0.00')
    created_at: Optional[datetime] = None

    def allowed_transitions(self) -> frozenset:
        return STATUS_TRANSITIONS[self.status]

@dataclass
class DashboardStats:
    """Aggregated registration counts for the admin dashboard"""
    total: int = 0
    by_category: dict = field(default_factory=dict)
    by_panchayath: list = field(default_factory=list)
    by_status: dict = field(default_factory=dict)
