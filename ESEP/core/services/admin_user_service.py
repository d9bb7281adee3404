"""
Admin User Service - Role management for administrator accounts (Super Admin only).
"""
from dataclasses import replace
from typing import List, Dict, Any

from core.models.entities import AdminUser, AdminStatus
from core.models.roles import Action, AdminRole, ROLE_DESCRIPTIONS
from core.repositories.admin_user_repository import AdminUserRepository
from utils.exceptions import (
    ValidationException, NotFoundException, DuplicateRecordException, AuthorizationException
)
from utils.validators import PortalValidator
from utils.helpers import LoggingUtils


class AdminUserService:
    def __init__(self, admin_repo: AdminUserRepository = None):
        self.admin_repo = admin_repo or AdminUserRepository()

    def list_admins(self, session) -> List[AdminUser]:
        """All admin accounts, passwords blanked"""
        session.require(Action.MANAGE_ADMINS)
        return [replace(admin, password='') for admin in self.admin_repo.get_all()]

    def create_admin(self, session, username: str, password: str, role: str,
                     permissions: str = '') -> AdminUser:
        session.require(Action.MANAGE_ADMINS)
        username = PortalValidator.validate_required(username, 'Username')
        password = PortalValidator.validate_required(password, 'Password')
        resolved = self._parse_role(role)

        if self.admin_repo.find_by_username(username):
            raise DuplicateRecordException(f"Username '{username}' is already taken")

        admin = AdminUser(
            username=username,
            password=password,
            role=resolved.value,
            permissions=(permissions or '').strip() or ROLE_DESCRIPTIONS[resolved],
            status=AdminStatus.ACTIVE,
        )
        admin.id = self.admin_repo.create_admin(admin)
        LoggingUtils.log_business_event("admin_created", "admin_user", admin.id,
                                        username=session.username, details={'role': resolved.value})
        return replace(admin, password='')

    def update_admin(self, session, admin_id: int, changes: Dict[str, Any]):
        """Edit role or permissions text of a non Super Admin account"""
        session.require(Action.MANAGE_ADMINS)
        target = self._get_manageable(admin_id)

        clean = {}
        for key, value in changes.items():
            if key == 'permissions':
                clean[key] = (value or '').strip()
            elif key == 'role':
                clean[key] = self._parse_role(value).value
            else:
                raise ValidationException(f"Unknown admin field: {key}")

        if clean:
            self.admin_repo.update(target.id, clean)
            LoggingUtils.log_business_event("admin_updated", "admin_user", admin_id,
                                            username=session.username, details={'fields': sorted(clean)})

    def toggle_status(self, session, admin_id: int) -> AdminStatus:
        """Activate or deactivate an admin; Super Admin accounts cannot be deactivated"""
        session.require(Action.MANAGE_ADMINS)
        target = self._get_manageable(admin_id)

        new_status = AdminStatus.INACTIVE if target.is_active else AdminStatus.ACTIVE
        self.admin_repo.set_status(admin_id, new_status)
        LoggingUtils.log_business_event("admin_status_changed", "admin_user", admin_id,
                                        username=session.username,
                                        details={'status': new_status.value})
        return new_status

    def delete_admin(self, session, admin_id: int):
        session.require(Action.MANAGE_ADMINS)
        target = self._get_manageable(admin_id)
        self.admin_repo.delete(target.id)
        LoggingUtils.log_business_event("admin_deleted", "admin_user", admin_id,
                                        username=session.username)

    def row_actions(self, session, admin: AdminUser) -> frozenset:
        if not session.can(Action.MANAGE_ADMINS) or AdminRole.parse(admin.role) == AdminRole.SUPER_ADMIN:
            return frozenset()
        return frozenset({Action.UPDATE, Action.DELETE, Action.SET_STATUS})

    def subscribe(self, callback):
        return self.admin_repo.subscribe(callback)

    def _get_manageable(self, admin_id: int) -> AdminUser:
        target = self.admin_repo.find_admin_by_id(admin_id)
        if not target:
            raise NotFoundException(f"Admin user {admin_id} not found")
        if AdminRole.parse(target.role) == AdminRole.SUPER_ADMIN:
            raise AuthorizationException("Super Admin accounts cannot be modified")
        return target

    @staticmethod
    def _parse_role(value) -> AdminRole:
        try:
            return value if isinstance(value, AdminRole) else AdminRole(value)
        except ValueError:
            raise ValidationException(f"Unknown role: {value}")
