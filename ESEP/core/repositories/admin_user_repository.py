"""
Admin User Repository
Handles database operations for admin_users table
"""

from typing import Optional, List

from core.repositories.base_repository import BaseRepository
from core.models.entities import AdminUser, AdminStatus
from core.models.roles import AdminRole
from utils.exceptions import AuthenticationException, ValidationException

class AdminUserRepository(BaseRepository):
    """Repository for admin_users table operations"""

    def __init__(self, db=None, feed=None):
        super().__init__('admin_users', 'id', db=db, feed=feed)

    def create_admin(self, admin: AdminUser) -> int:
        """Create a new admin account"""
        if not admin.username or not admin.password:
            raise ValidationException("Username and password are required")

        return self.create({
            'username': admin.username,
            'password': admin.password,
            'role': AdminRole.parse(admin.role).value,
            'permissions': admin.permissions,
            'status': admin.status.value if isinstance(admin.status, AdminStatus) else admin.status,
        })

    def find_admin_by_id(self, admin_id: int) -> Optional[AdminUser]:
        data = self.find_by_id(admin_id)
        return self._dict_to_admin(data) if data else None

    def find_by_username(self, username: str) -> Optional[AdminUser]:
        """Find admin by username"""
        if not username:
            return None

        admins = self.find_by_field('username', username)
        if not admins:
            return None
        return self._dict_to_admin(admins[0])

    def authenticate(self, username: str, password: str) -> AdminUser:
        """Match exactly one row on username and password.

        Passwords are stored and compared as plain text. Rows are fetched by
        username, then both values are compared exactly whatever the column
        collation.
        """
        matches = [row for row in self.find_by_field('username', username)
                   if row['username'] == username and row['password'] == password]
        if len(matches) != 1:
            raise AuthenticationException("Invalid username or password")
        return self._dict_to_admin(matches[0])

    def get_all(self) -> List[AdminUser]:
        """Get all admins, oldest account first"""
        return [self._dict_to_admin(row) for row in self.find_all(order_by='created_at')]

    def set_status(self, admin_id: int, status: AdminStatus) -> bool:
        return self.update(admin_id, {'status': status.value})

    def _dict_to_admin(self, data: dict) -> AdminUser:
        """Convert dictionary to AdminUser object"""
        return AdminUser(
            id=data['id'],
            username=data['username'],
            password=data.get('password', ''),
            role=AdminRole.parse(data['role']).value,
            permissions=data.get('permissions') or '',
            status=AdminStatus(data.get('status') or 'active'),
            created_at=data.get('created_at')
        )
