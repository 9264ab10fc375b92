from __future__ import annotations

from datetime import date

import pytest

from attendance_client.core.enums import Role
from attendance_client.users.model import UserRecord


# Make anyio run on asyncio so async tests share the event loop model of the client
@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def fixed_today():
    return date(2024, 2, 20)


@pytest.fixture
def sample_roster():
    return [
        UserRecord(name="Asha", roll_number="A1", role=Role.STUDENT, enrolled_class="X"),
        UserRecord(name="Bala", roll_number="A2", role=Role.STUDENT, enrolled_class="X"),
        UserRecord(name="Chitra", roll_number="A3", role=Role.STUDENT, enrolled_class="Y"),
    ]
