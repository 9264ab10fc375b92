from __future__ import annotations

import httpx
import pytest

from attendance_client.container import build_container
from attendance_client.core.enums import Affordance
from attendance_client.core.exceptions import ConfigurationError


def test_build_container_wires_gate_to_session():
    container = build_container(
        api_config={"base_url": "http://testserver"},
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"success": True})),
    )

    assert not container.permission_gate.is_enabled(Affordance.SAVE_PROFILE)
    container.session.apply_user_payload({"name": "Asha", "rollNumber": "A1", "role": "student"})
    assert container.permission_gate.is_enabled(Affordance.SAVE_PROFILE)
    assert container.student_attendance_service.configured_range is None


def test_configured_range_is_parsed():
    container = build_container(
        api_config={"base_url": "http://testserver", "range_start": "2024-01-01", "range_end": "2024-03-31"}
    )

    r = container.student_attendance_service.configured_range
    assert (r.start.isoformat(), r.end.isoformat()) == ("2024-01-01", "2024-03-31")


@pytest.mark.parametrize(
    "api_config",
    [
        {},
        {"base_url": ""},
        {"base_url": "http://testserver", "timeout": 0},
        {"base_url": "http://testserver", "range_start": "2024-01-01"},
        {"base_url": "http://testserver", "range_start": "2024-03-01", "range_end": "2024-01-01"},
    ],
)
def test_bad_settings_are_rejected(api_config):
    with pytest.raises(ConfigurationError):
        build_container(api_config=api_config)


def test_create_client_uses_testing_settings(monkeypatch):
    from attendance_client.main import create_client

    monkeypatch.setenv("APP_ENV", "testing")

    container = create_client(token="t0k3n")

    assert container.api.is_authenticated
    assert container.attendance_editor.phase.value == "IDLE"
