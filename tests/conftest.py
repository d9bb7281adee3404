"""
Shared fixtures: an in-memory stand-in for DatabaseManager that understands the
statements BaseRepository builds, plus repositories, services and admin sessions
wired to it.
"""

import re
from collections import defaultdict
from datetime import datetime, timedelta

import pytest
from mysql.connector import Error

from core.models.entities import AdminUser
from core.repositories.admin_user_repository import AdminUserRepository
from core.repositories.category_repository import CategoryRepository
from core.repositories.panchayath_repository import PanchayathRepository
from core.repositories.registration_repository import RegistrationRepository
from core.services.admin_user_service import AdminUserService
from core.services.authentication_service import AdminSession, AuthenticationService
from core.services.category_service import CategoryService
from core.services.dashboard_service import DashboardService
from core.services.panchayath_service import PanchayathService
from core.services.registration_service import RegistrationService
from core.services.status_service import StatusService
from db.change_feed import ChangeFeed

INSERT_RE = re.compile(r"^INSERT INTO (\w+) \(([^)]*)\) VALUES \(([^)]*)\)$")
SELECT_RE = re.compile(r"^SELECT \* FROM (\w+)(?: WHERE (.+?))?(?: ORDER BY (\w+) (ASC|DESC))?$")
UPDATE_RE = re.compile(r"^UPDATE (\w+) SET (.+) WHERE (\w+) = %s$")
DELETE_RE = re.compile(r"^DELETE FROM (\w+) WHERE (\w+) = %s$")
COLUMN_RE = re.compile(r"(\w+) = %s")

AUTO_INCREMENT_TABLES = {'admin_users', 'panchayaths', 'registrations'}


def collation_equal(stored, value):
    """WHERE equality under utf8mb4_unicode_ci: case-insensitive, trailing spaces ignored"""
    if isinstance(stored, str) and isinstance(value, str):
        return stored.rstrip(' ').casefold() == value.rstrip(' ').casefold()
    return stored == value


class FakeDatabase:
    """Dict-backed tables answering BaseRepository's SQL"""

    def __init__(self):
        self.tables = defaultdict(list)
        self.queries = []
        self.fail_with = None
        self._next_id = defaultdict(int)
        self._clock = datetime(2026, 1, 1, 9, 0, 0)

    def _tick(self):
        self._clock += timedelta(minutes=1)
        return self._clock

    def execute_query(self, query, params=None, fetch_one=False, fetch_all=False):
        params = tuple(params or ())
        self.queries.append((query, params))
        if self.fail_with:
            raise Error(msg=self.fail_with)

        match = INSERT_RE.match(query)
        if match:
            table, columns = match.group(1), [c.strip() for c in match.group(2).split(',')]
            row = dict(zip(columns, params))
            lastrowid = 0
            if table in AUTO_INCREMENT_TABLES:
                self._next_id[table] += 1
                lastrowid = row['id'] = self._next_id[table]
            row.setdefault('created_at', self._tick())
            self.tables[table].append(row)
            return lastrowid

        match = SELECT_RE.match(query)
        if match:
            table, where, order_by, direction = match.groups()
            criteria = dict(zip(COLUMN_RE.findall(where or ''), params))
            rows = [dict(r) for r in self.tables[table]
                    if all(collation_equal(r.get(k), v) for k, v in criteria.items())]
            if order_by:
                rows.sort(key=lambda r: r.get(order_by), reverse=(direction == 'DESC'))
            if fetch_one:
                return rows[0] if rows else None
            return rows

        match = UPDATE_RE.match(query)
        if match:
            table, set_clause, pk = match.groups()
            changes = dict(zip(COLUMN_RE.findall(set_clause), params[:-1]))
            for row in self.tables[table]:
                if row.get(pk) == params[-1]:
                    row.update(changes)
            return 0

        match = DELETE_RE.match(query)
        if match:
            table, pk = match.groups()
            self.tables[table] = [r for r in self.tables[table] if r.get(pk) != params[0]]
            return 0

        raise AssertionError(f"Unexpected query: {query}")


def make_session(role, username=None, admin_id=1):
    user = AdminUser(id=admin_id, username=username or role.lower().replace(' ', '_'), role=role)
    return AdminSession.start(user)


@pytest.fixture
def db():
    return FakeDatabase()


@pytest.fixture
def feed():
    return ChangeFeed()


@pytest.fixture
def admin_repo(db, feed):
    return AdminUserRepository(db=db, feed=feed)


@pytest.fixture
def panchayath_repo(db, feed):
    return PanchayathRepository(db=db, feed=feed)


@pytest.fixture
def category_repo(db, feed):
    return CategoryRepository(db=db, feed=feed)


@pytest.fixture
def registration_repo(db, feed):
    return RegistrationRepository(db=db, feed=feed)


@pytest.fixture
def auth_service(admin_repo):
    return AuthenticationService(admin_repo=admin_repo)


@pytest.fixture
def admin_service(admin_repo):
    return AdminUserService(admin_repo=admin_repo)


@pytest.fixture
def panchayath_service(panchayath_repo):
    return PanchayathService(panchayath_repo=panchayath_repo)


@pytest.fixture
def category_service(category_repo):
    return CategoryService(category_repo=category_repo)


@pytest.fixture
def registration_service(registration_repo):
    return RegistrationService(registration_repo=registration_repo)


@pytest.fixture
def status_service(registration_repo):
    return StatusService(registration_repo=registration_repo)


@pytest.fixture
def dashboard_service(registration_repo, panchayath_repo):
    return DashboardService(registration_repo=registration_repo, panchayath_repo=panchayath_repo)


@pytest.fixture
def super_admin():
    return make_session('Super Admin', 'superadmin')


@pytest.fixture
def local_admin():
    return make_session('Local Admin', 'localadmin', admin_id=2)


@pytest.fixture
def user_admin():
    return make_session('User Admin', 'viewer', admin_id=3)


@pytest.fixture
def registration_form():
    return {
        'name': 'anita',
        'address': 'Near Temple Road, Kottakkal',
        'mobile': '9876543210',
        'panchayath': 'Kottakkal',
        'ward': '7',
        'agent_details': '',
    }
