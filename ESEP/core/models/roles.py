"""
Role policy for the admin panel.
Maps each admin role to the actions it may perform and the sections it may open.
"""

from dataclasses import dataclass
from enum import Enum


class AdminRole(Enum):
    SUPER_ADMIN = 'Super Admin'
    LOCAL_ADMIN = 'Local Admin'
    USER_ADMIN = 'User Admin'

    @classmethod
    def parse(cls, value) -> "AdminRole":
        """Resolve a stored role value; unknown values get the read-only role."""
        if isinstance(value, cls):
            return value
        for role in cls:
            if role.value == value:
                return role
        return cls.USER_ADMIN


class Action(Enum):
    VIEW = 'view'
    EXPORT = 'export'
    CREATE = 'create'
    UPDATE = 'update'
    DELETE = 'delete'
    SET_STATUS = 'set_status'
    MANAGE_ADMINS = 'manage_admins'


class Section(Enum):
    DASHBOARD = 'dashboard'
    REGISTRATIONS = 'registrations'
    PANCHAYATH = 'panchayath'
    CATEGORIES = 'categories'
    ADMINS = 'admins'


MUTATING_ACTIONS = frozenset({Action.CREATE, Action.UPDATE, Action.DELETE, Action.SET_STATUS})

_READ_ONLY = frozenset({Action.VIEW, Action.EXPORT})

ROLE_ACTIONS = {
    AdminRole.SUPER_ADMIN: _READ_ONLY | MUTATING_ACTIONS | {Action.MANAGE_ADMINS},
    AdminRole.LOCAL_ADMIN: _READ_ONLY | MUTATING_ACTIONS,
    AdminRole.USER_ADMIN: _READ_ONLY,
}

ROLE_SECTIONS = {
    AdminRole.SUPER_ADMIN: frozenset(Section),
    AdminRole.LOCAL_ADMIN: frozenset({Section.DASHBOARD, Section.REGISTRATIONS,
                                      Section.PANCHAYATH, Section.CATEGORIES}),
    AdminRole.USER_ADMIN: frozenset({Section.DASHBOARD, Section.REGISTRATIONS}),
}

ROLE_DESCRIPTIONS = {
    AdminRole.SUPER_ADMIN: "Full access to all features including role management",
    AdminRole.LOCAL_ADMIN: "Can view, add, edit, and delete registrations, panchayaths and categories",
    AdminRole.USER_ADMIN: "Read-only access to dashboard and registrations",
}


def can_mutate(role) -> bool:
    return MUTATING_ACTIONS <= ROLE_ACTIONS[AdminRole.parse(role)]


def can_access_section(role, section) -> bool:
    if not isinstance(section, Section):
        try:
            section = Section(section)
        except ValueError:
            return False
    return section in ROLE_SECTIONS[AdminRole.parse(role)]


@dataclass(frozen=True)
class Capabilities:
    """Role capabilities resolved once per page load"""
    role: AdminRole
    actions: frozenset
    sections: frozenset

    @classmethod
    def for_role(cls, role) -> "Capabilities":
        resolved = AdminRole.parse(role)
        return cls(role=resolved, actions=ROLE_ACTIONS[resolved], sections=ROLE_SECTIONS[resolved])

    def allows(self, action: Action) -> bool:
        return action in self.actions

    def can_open(self, section: Section) -> bool:
        return section in self.sections

    @property
    def can_mutate(self) -> bool:
        return MUTATING_ACTIONS <= self.actions
