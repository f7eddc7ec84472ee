import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from typing import AsyncGenerator
from datetime import date
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from worklogix.api.dependencies import get_email_service
from worklogix.auth.jwt_handler import create_access_token
from worklogix.core.database import get_async_session
from worklogix.models import AttendanceLog, Company, User
from worklogix.models.base import Base
from worklogix.models.shared.enums import AttendanceStatus, UserRole
from worklogix.services.attendance.reward_service import RewardService

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FakeEmailService:
    """Records notifications instead of delivering them"""

    def __init__(self):
        self.sent = []
        self.fail_for_company = None

    async def send_daily_summary(self, to_email, display_name, log, reward):
        self.sent.append(("daily", to_email, {"log": log, "reward": reward}))
        return True

    async def send_weekly_summary(self, to_email, company_name, start_date, end_date,
                                  attendance_rate, total_records, top_performers):
        if company_name == self.fail_for_company:
            raise RuntimeError("SMTP connection refused")
        self.sent.append(("weekly", to_email, {
            "company_name": company_name,
            "start_date": start_date,
            "end_date": end_date,
            "attendance_rate": attendance_rate,
            "total_records": total_records,
            "top_performers": top_performers,
        }))
        return True

    async def send_monthly_achievement(self, to_email, display_name, report, badges,
                                       bonus_points=0, month_label=None):
        self.sent.append(("monthly", to_email, {
            "report": report,
            "badges": badges,
            "bonus_points": bonus_points,
        }))
        return True

    def of_kind(self, kind):
        return [entry for entry in self.sent if entry[0] == kind]


@pytest.fixture
async def engine():
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
async def badges(db):
    await RewardService(db).initialize_badges()


@pytest.fixture
def make_company(db):
    async def _make_company(name="Acme Corp", email=None, work_start_time="09:00", work_end_time="18:00", is_active=True):
        company = Company(
            name=name,
            email=email or f"{name.lower().replace(' ', '.')}@example.com",
            work_start_time=work_start_time,
            work_end_time=work_end_time,
            is_active=is_active,
        )
        db.add(company)
        await db.commit()
        await db.refresh(company)
        return company
    return _make_company


@pytest.fixture
async def company(make_company):
    return await make_company()


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    async def _make_user(company, role=UserRole.COMPANY_MEMBER, display_name=None, is_active=True):
        counter["n"] += 1
        user = User(
            email=f"user{counter['n']}@example.com",
            display_name=display_name or f"User {counter['n']}",
            role=role,
            company_id=company.id if company else None,
            is_active=is_active,
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)
        return user
    return _make_user


@pytest.fixture
async def member(make_user, company):
    return await make_user(company, display_name="Maya Member")


@pytest.fixture
async def admin(make_user, company):
    return await make_user(company, role=UserRole.COMPANY_ADMIN, display_name="Ada Admin")


@pytest.fixture
async def super_admin(make_user):
    return await make_user(None, role=UserRole.SUPER_ADMIN, display_name="Root")


@pytest.fixture
def make_log(db):
    async def _make_log(user, day: date, status=AttendanceStatus.ON_TIME, login_time=None, logout_time=None, **fields):
        log = AttendanceLog(
            user_id=user.id,
            company_id=user.company_id,
            date=day,
            status=status,
            login_time=login_time,
            logout_time=logout_time,
            **fields,
        )
        db.add(log)
        await db.commit()
        await db.refresh(log)
        return log
    return _make_log


@pytest.fixture
def email_service():
    return FakeEmailService()


@pytest.fixture
async def client(session_maker, email_service) -> AsyncGenerator[AsyncClient, None]:
    """Create test client"""
    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = override_get_db
    app.dependency_overrides[get_email_service] = lambda: email_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _auth_headers(user) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}
    return _auth_headers
