import pytest
from app.models.dashboard_models import Booking
from app.services.dashboard_service import filter_bookings, compute_stats, bookings_to_frame

def make_booking(booking_id, status, **extra):
    data = {
        "id": booking_id,
        "user_name": "Jana Nováková",
        "user_email": "jana@example.com",
        "service_type": "Home cleaning",
        "preferred_date": "2024-03-01T10:00:00",
        "duration": 60,
        "cost": "45.50",
        "status": status,
        "covid_restrictions": "medium",
    }
    data.update(extra)
    return Booking(**data)

@pytest.fixture
def bookings():
    return [
        make_booking("1", "pending"),
        make_booking("2", "accepted"),
        make_booking("3", "pending"),
    ]

def test_filter_all_is_identity(bookings):
    assert filter_bookings(bookings, "all") == bookings

def test_filter_by_status_keeps_server_order(bookings):
    assert [b.id for b in filter_bookings(bookings, "pending")] == ["1", "3"]
    assert [b.id for b in filter_bookings(bookings, "accepted")] == ["2"]
    assert filter_bookings(bookings, "declined") == []

def test_filter_rejects_unknown_status(bookings):
    with pytest.raises(ValueError):
        filter_bookings(bookings, "cancelled")

def test_stats_example(bookings):
    stats = compute_stats(bookings)
    assert stats.total == 3
    assert stats.pending == 2
    assert stats.accepted == 1
    assert stats.declined == 0

def test_stats_partition_sums_to_total():
    mixed = [make_booking(str(i), s) for i, s in enumerate(["pending", "declined", "declined", "accepted", "pending"])]
    stats = compute_stats(mixed)
    assert stats.pending + stats.accepted + stats.declined == stats.total == 5

def test_stats_empty_collection():
    stats = compute_stats([])
    assert stats.model_dump() == {"total": 0, "pending": 0, "accepted": 0, "declined": 0}

def test_booking_coerces_integer_id_and_ignores_extra_fields():
    booking = make_booking(42, "declined", created_at="2024-01-01T00:00:00", admin_notes="Fully booked")
    assert booking.id == "42"
    assert booking.is_pending is False
    assert booking.admin_notes == "Fully booked"

def test_booking_rejects_non_positive_duration():
    with pytest.raises(ValueError):
        make_booking("1", "pending", duration=0)

def test_bookings_to_frame(bookings):
    df = bookings_to_frame(bookings)
    assert list(df["id"]) == ["1", "2", "3"]
    assert df["cost"].iloc[0] == 45.5
    assert "status" in df.columns

def test_bookings_to_frame_empty():
    df = bookings_to_frame([])
    assert df.empty
    assert "service_type" in df.columns
