# inzozi/test/conftest.py

"""
Shared fixtures.

Everything runs in memory: the credential store is a dict-backed fake,
the session cache is InMemorySessionCache driven by a FrozenClock and the
mailer only records what it was asked to send.
"""

import uuid
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from inzozi.adapters.inbound.api import deps
from inzozi.adapters.outbound.cache.memory_session_cache import InMemorySessionCache
from inzozi.adapters.outbound.clock.system_clock import FrozenClock
from inzozi.adapters.outbound.persistence.database import get_db
from inzozi.adapters.outbound.persistence.models import Role, User
from inzozi.adapters.outbound.security.jwt_token_service import JWTTokenService
from inzozi.adapters.outbound.security.password_manager import PasswordManager
from inzozi.application.ports.outbound import IMailer, IUserRepository
from inzozi.domain.exceptions import ResourceAlreadyExistsException
from inzozi.domain.models.role import ROLE_DESCRIPTIONS, RoleName
from inzozi.main import app

TEST_PASSWORD = "Passw0rd!"
TEST_PASSWORD_HASH = PasswordManager.hash_password_sync(TEST_PASSWORD)
TEST_SECRET = "test-secret"

SCHOOL_A = uuid.UUID("11111111-1111-1111-1111-111111111111")
SCHOOL_B = uuid.UUID("22222222-2222-2222-2222-222222222222")


def _as_uuid(value: Any) -> Optional[uuid.UUID]:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


class RecordingMailer(IMailer):
    """Keeps every message; ``fail=True`` simulates a provider outage."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: List[Dict[str, str]] = []

    async def send(self, to_address: str, subject: str, body_html: str) -> bool:
        if self.fail:
            return False
        self.sent.append({"to": to_address, "subject": subject, "html": body_html})
        return True


class FakeUserRepository(IUserRepository):
    """Dict-backed credential store with the same soft-delete rules as the SQL one."""

    def __init__(self, clock: FrozenClock):
        self.clock = clock
        self.roles: Dict[RoleName, Role] = {
            name: Role(id=uuid.uuid4(), name=name.value, description=ROLE_DESCRIPTIONS[name])
            for name in RoleName
        }
        self.users: Dict[uuid.UUID, User] = {}

    def _role_by_id(self, role_id: Any) -> Optional[Role]:
        role_id = _as_uuid(role_id)
        return next((r for r in self.roles.values() if r.id == role_id), None)

    def add_user(
            self,
            role: RoleName,
            email: str,
            school_id: Optional[uuid.UUID] = None,
            password: Optional[str] = TEST_PASSWORD_HASH,
            first_name: str = "Test",
            last_name: str = "User",
    ) -> User:
        user = User(
            id=uuid.uuid4(),
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=password,
            role_id=self.roles[role].id,
            school_id=school_id,
            created_at=self.clock.now(),
        )
        user.role = self.roles[role]
        self.users[user.id] = user
        self.clock.advance(seconds=1)
        return user

    # ─── IUserRepository ───

    async def get_by_email(self, db, email):
        return next(
            (u for u in self.users.values() if u.email.lower() == email.lower() and u.deleted_at is None),
            None,
        )

    async def get_by_id(self, db, user_id):
        user = self.users.get(_as_uuid(user_id))
        return user if user is not None and user.deleted_at is None else None

    async def get_role_by_name(self, db, name):
        return self.roles.get(RoleName(name))

    async def get_role_by_id(self, db, role_id):
        return self._role_by_id(role_id)

    async def create_user(self, db, data):
        if any(u.email.lower() == data["email"].lower() for u in self.users.values()):
            raise ResourceAlreadyExistsException(detail=f"Email '{data['email']}' already exists.")
        user = User(id=uuid.uuid4(), created_at=self.clock.now(), **data)
        user.role = self._role_by_id(data.get("role_id"))
        self.users[user.id] = user
        return user

    async def update_password(self, db, user_id, password_hash):
        user = await self.get_by_id(db, user_id)
        if user is None:
            return False
        user.password = password_hash
        return True

    async def update_fields(self, db, user, patch):
        if "email" in patch and patch["email"].lower() != user.email.lower():
            if any(u.email.lower() == patch["email"].lower() for u in self.users.values()):
                raise ResourceAlreadyExistsException(detail="Email already in use.")
        for field, value in patch.items():
            setattr(user, field, value)
        if "role_id" in patch:
            user.role = self._role_by_id(patch["role_id"])
        user.updated_at = self.clock.now()
        return user

    async def soft_delete(self, db, user):
        user.deleted_at = self.clock.now()

    def _managed(self, roles: Iterable[RoleName], school_id: Any) -> List[User]:
        names = {RoleName(r) for r in roles}
        return [
            u for u in self.users.values()
            if u.deleted_at is None
            and u.role_name in names
            and (school_id is None or str(u.school_id) == str(school_id))
        ]

    async def list_managed(self, db, *, roles, school_id=None, search=None, offset=0, limit=10) -> Tuple[list, int]:
        found = self._managed(roles, school_id)
        if search:
            needle = search.strip().lower()
            found = [
                u for u in found
                if any(needle in (v or "").lower() for v in (u.first_name, u.last_name, u.email, u.phone))
            ]
        found.sort(key=lambda u: u.created_at, reverse=True)
        return found[offset:offset + limit], len(found)

    async def count_by_role(self, db, *, roles, school_id=None):
        counts = {RoleName(r).value: 0 for r in roles}
        for user in self._managed(roles, school_id):
            counts[user.role_name.value] += 1
        return counts


# ─────────────────────────────────────────────────────────────
# Fixtures

@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def cache(clock):
    return InMemorySessionCache(clock)


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def user_repo(clock):
    return FakeUserRepository(clock)


@pytest.fixture
def token_service(cache, clock):
    return JWTTokenService(
        cache=cache,
        clock=clock,
        secret=TEST_SECRET,
        session_ttl_seconds=12 * 60 * 60,
        fallback_blacklist_ttl_seconds=24 * 60 * 60,
    )


@pytest.fixture
def system_admin(user_repo):
    return user_repo.add_user(RoleName.SYSTEM_ADMIN, "admin@inzozi.rw", first_name="Grace")


@pytest.fixture
def school_manager(user_repo):
    return user_repo.add_user(RoleName.SCHOOL_MANAGER, "manager@school-a.rw", school_id=SCHOOL_A,
                              first_name="Eric")


@pytest.fixture
def other_school_manager(user_repo):
    return user_repo.add_user(RoleName.SCHOOL_MANAGER, "manager@school-b.rw", school_id=SCHOOL_B)


@pytest.fixture
def inspector(user_repo):
    return user_repo.add_user(RoleName.INSPECTOR, "inspector@inzozi.rw", first_name="Alice")


@pytest.fixture
def admission_manager(user_repo):
    return user_repo.add_user(RoleName.ADMISSION_MANAGER, "admissions@school-a.rw", school_id=SCHOOL_A,
                              first_name="Aline")


@pytest_asyncio.fixture
async def async_client(cache, clock, mailer, user_repo):
    """HTTP client with every outbound collaborator replaced by an in-memory fake."""

    async def override_get_db():
        yield None

    def override_token_service():
        return JWTTokenService(cache=cache, clock=clock, secret=TEST_SECRET)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[deps.get_session_cache] = lambda: cache
    app.dependency_overrides[deps.get_clock] = lambda: clock
    app.dependency_overrides[deps.get_mailer] = lambda: mailer
    app.dependency_overrides[deps.get_user_repository] = lambda: user_repo
    app.dependency_overrides[deps.get_token_service] = override_token_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client

    app.dependency_overrides.clear()


async def login(client: AsyncClient, email: str, password: str = TEST_PASSWORD) -> str:
    response = await client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, f"Login failed: {response.text}"
    return response.json()["data"]["token"]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
