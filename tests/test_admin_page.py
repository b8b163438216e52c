import pytest
from unittest.mock import patch
from streamlit.testing.v1 import AppTest
from app.models.api_models import CurrentUser
from app.models.dashboard_models import Booking, RestrictionsRecord
from app.services.api_client import AdminApiClient

APP_PATH = "../admin.py"

BOOKINGS = [
    Booking(id="1", user_name="Eva", user_email="eva@example.com", service_type="Gardening",
            preferred_date="2024-06-10T08:00:00", duration=120, cost="80", status="pending",
            covid_restrictions="medium"),
    Booking(id="2", user_name="Karel", user_email="karel@example.com", service_type="Plumbing",
            preferred_date="2024-06-11T09:00:00", duration=60, cost="55", status="accepted",
            covid_restrictions="medium", details="Leaking kitchen tap"),
    Booking(id="3", user_name="Ivana", user_email="ivana@example.com", service_type="Cleaning",
            preferred_date="2024-06-12T10:00:00", duration=90, cost="40", status="pending",
            covid_restrictions="low"),
]

RESTRICTIONS = RestrictionsRecord(level="high", density_limits="1 per 10sqm", mask_required=True,
                                  quarantine_required=True, message="Remote services only")

def mock_backend(role="admin"):
    """Patch the blocking client calls; the async wrappers run them in a thread."""
    return {
        "fetch_current_user": patch.object(AdminApiClient, "fetch_current_user", return_value=CurrentUser(role=role)),
        "fetch_bookings": patch.object(AdminApiClient, "fetch_bookings", return_value=list(BOOKINGS)),
        "fetch_restrictions": patch.object(AdminApiClient, "fetch_restrictions", return_value=RESTRICTIONS),
        "decide_booking": patch.object(AdminApiClient, "decide_booking", return_value=None),
    }

@pytest.fixture
def backend():
    patchers = mock_backend()
    mocks = {name: p.start() for name, p in patchers.items()}
    yield mocks
    for p in patchers.values():
        p.stop()

def test_non_admin_is_sent_away_without_fetching():
    patchers = mock_backend(role="user")
    mocks = {name: p.start() for name, p in patchers.items()}
    try:
        at = AppTest.from_file(APP_PATH, default_timeout=30)
        at.run()

        assert not at.exception
        assert "administrators" in at.warning[0].value
        assert len(at.metric) == 0
        mocks["fetch_bookings"].assert_not_called()
        mocks["fetch_restrictions"].assert_not_called()
    finally:
        for p in patchers.values():
            p.stop()

def test_admin_sees_stats_and_decision_controls(backend):
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.run()

    assert not at.exception
    values = {m.label: m.value for m in at.metric}
    assert values == {"Total Requests": "3", "Pending": "2", "Accepted": "1", "Declined": "0"}

    keys = {b.key for b in at.button}
    assert {"accept-1", "decline-1", "accept-3", "decline-3"} <= keys
    assert "accept-2" not in keys and "decline-2" not in keys

def test_accepting_a_booking_from_the_page(backend):
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.run()

    at.button(key="accept-1").click().run()
    assert at.session_state["dashboard"].decision_open is True

    at.text_area(key="admin_notes_input").input("See you at 8").run()
    at.button(key="action_submit").click().run()

    assert not at.exception
    backend["decide_booking"].assert_called_once_with("1", "accept", "See you at 8")
    assert at.session_state["dashboard"].decision_open is False
    assert backend["fetch_bookings"].call_count == 2
