from typing import Any, Dict, List, Optional, Union
import asyncio

import pandas as pd

from app.core.config import settings
from app.core.logger import logger
from app.core.security import is_admin
from app.models.api_models import CurrentUser, DecisionAction
from app.models.dashboard_models import (
    BOOKING_STATUSES,
    STATUS_FILTERS,
    Booking,
    BookingStats,
    RestrictionsRecord,
)
from app.services.api_client import AdminApiClient, ApiError
from app.services.notification_service import NotificationQueue

MSG_LOAD_BOOKINGS_FAILED = "Failed to load bookings"
MSG_UPDATE_BOOKING_FAILED = "Failed to update booking"
MSG_LOAD_RESTRICTIONS_FAILED = "Failed to load COVID restrictions"
MSG_UPDATE_RESTRICTIONS_FAILED = "Failed to update COVID restrictions"
MSG_RESTRICTIONS_UPDATED = "COVID-19 restrictions updated successfully! All users have been notified."

DECISION_PAST_TENSE = {"accept": "accepted", "decline": "declined"}


def filter_bookings(bookings: List[Booking], status: str) -> List[Booking]:
    """
    Status filter over the loaded collection. 'all' returns the collection as is;
    any other value keeps bookings with exactly that status, in server order.
    """
    if status not in STATUS_FILTERS:
        raise ValueError(f"Unknown status filter: {status!r}")
    if status == "all":
        return list(bookings)
    return [b for b in bookings if b.status == status]


def compute_stats(bookings: List[Booking]) -> BookingStats:
    counts = {status: 0 for status in BOOKING_STATUSES}
    for booking in bookings:
        counts[booking.status] += 1
    return BookingStats(total=len(bookings), **counts)


def bookings_to_frame(bookings: List[Booking]) -> pd.DataFrame:
    """Flat table for the compact view of the booking list."""
    columns = [
        "id", "service_type", "user_name", "user_email", "preferred_date",
        "duration", "cost", "covid_restrictions", "status", "admin_notes",
    ]
    rows = [b.model_dump(include=set(columns)) for b in bookings]
    df = pd.DataFrame(rows, columns=columns)
    if not df.empty:
        df["preferred_date"] = pd.to_datetime(df["preferred_date"])
        df["cost"] = df["cost"].astype(float)
    return df


class DashboardService:
    """
    All client-side state of the admin dashboard.

    The page renders from this object and forwards operator actions to it.
    Network failures never escape: each one becomes an error notification
    with a fixed message and the state is left as it was.
    """

    def __init__(
        self,
        client: Optional[AdminApiClient] = None,
        default_restrictions: Optional[Dict[str, Any]] = None,
    ):
        self.client = client or AdminApiClient()
        self.notifications = NotificationQueue()

        self.user: Optional[CurrentUser] = None
        self.initialized = False
        self.redirect_to: Optional[str] = None
        self.loading = True

        self.bookings: List[Booking] = []
        self.filter_status = "all"

        # Decision dialog
        self.selected_booking: Optional[Booking] = None
        self.action_type: DecisionAction = "accept"
        self.admin_notes = ""
        self.decision_open = False

        # Restrictions dialog
        self.restrictions = RestrictionsRecord.model_validate(default_restrictions or {})
        self.restrictions_form = self.restrictions.model_copy()
        self.restrictions_open = False

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------

    async def resolve_user(self) -> Optional[CurrentUser]:
        """Ask the auth context who is looking at the page. None when unknown."""
        try:
            self.user = await self.client.get_current_user()
        except ApiError as e:
            logger.warning(f"⚠️ Could not resolve current user: {e}")
            self.user = None
        return self.user

    async def load(self, user: Optional[CurrentUser] = None) -> bool:
        """
        Page entry. Non-admins are sent to the user dashboard and nothing is fetched.
        Returns True when the dashboard data was requested.
        """
        if user is not None:
            self.user = user
        self.initialized = True

        if not is_admin(self.user):
            self.redirect_to = settings.USER_DASHBOARD_URL
            self.loading = False
            logger.warning(f"🚫 Non-admin actor on admin dashboard, redirecting to {self.redirect_to}")
            return False

        self.redirect_to = None
        await asyncio.gather(self.fetch_bookings(), self.fetch_restrictions())
        return True

    async def fetch_bookings(self) -> bool:
        try:
            self.bookings = await self.client.get_bookings()
            return True
        except ApiError as e:
            logger.error(f"❌ Loading bookings failed: {e}")
            self.notifications.error(MSG_LOAD_BOOKINGS_FAILED)
            return False
        finally:
            self.loading = False

    async def fetch_restrictions(self) -> bool:
        try:
            self.restrictions = await self.client.get_restrictions()
            return True
        except ApiError as e:
            logger.error(f"❌ Loading restrictions failed: {e}")
            self.notifications.error(MSG_LOAD_RESTRICTIONS_FAILED)
            return False

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    def set_filter(self, status: str) -> None:
        if status not in STATUS_FILTERS:
            raise ValueError(f"Unknown status filter: {status!r}")
        self.filter_status = status

    @property
    def filtered_bookings(self) -> List[Booking]:
        return filter_bookings(self.bookings, self.filter_status)

    @property
    def stats(self) -> BookingStats:
        return compute_stats(self.bookings)

    # ------------------------------------------------------------------
    # Decision dialog
    # ------------------------------------------------------------------

    def open_decision(self, booking: Booking, action: DecisionAction) -> None:
        if action not in DECISION_PAST_TENSE:
            raise ValueError(f"Unknown action: {action!r}")
        if not booking.is_pending:
            raise ValueError(f"Booking {booking.id} is already {booking.status}")
        self.selected_booking = booking
        self.action_type = action
        self.admin_notes = ""
        self.decision_open = True

    def cancel_decision(self) -> None:
        self.decision_open = False

    async def submit_decision(self, admin_notes: Optional[str] = None) -> bool:
        """
        Send the bound decision. On success the dialog closes and the list is
        re-fetched; on failure the dialog stays open with the notes kept.
        """
        if admin_notes is not None:
            self.admin_notes = admin_notes
        if not self.decision_open or self.selected_booking is None:
            return False

        booking = self.selected_booking
        try:
            await self.client.decide(booking.id, self.action_type, self.admin_notes)
        except ApiError as e:
            logger.error(f"❌ Decision on booking {booking.id} failed: {e}")
            self.notifications.error(MSG_UPDATE_BOOKING_FAILED)
            return False

        self.notifications.success(f"Booking {DECISION_PAST_TENSE[self.action_type]} successfully")
        self.decision_open = False
        await self.fetch_bookings()
        return True

    # ------------------------------------------------------------------
    # Restrictions dialog
    # ------------------------------------------------------------------

    def open_restrictions(self) -> RestrictionsRecord:
        self.restrictions_form = self.restrictions.model_copy()
        self.restrictions_open = True
        return self.restrictions_form

    def cancel_restrictions(self) -> None:
        self.restrictions_open = False

    async def submit_restrictions(self, record: Union[RestrictionsRecord, Dict[str, Any], None] = None) -> bool:
        """
        Replace the shared record with the edited one, then re-fetch it.
        On failure the dialog stays open with the edited values.
        """
        if record is not None:
            self.restrictions_form = RestrictionsRecord.model_validate(
                record.model_dump() if isinstance(record, RestrictionsRecord) else record
            )

        missing = self.restrictions_form.missing_fields()
        if missing:
            self.notifications.warning(f"Please fill in: {', '.join(missing)}")
            return False

        try:
            await self.client.put_restrictions(self.restrictions_form)
        except ApiError as e:
            logger.error(f"❌ Updating restrictions failed: {e}")
            self.notifications.error(MSG_UPDATE_RESTRICTIONS_FAILED)
            return False

        self.notifications.success(MSG_RESTRICTIONS_UPDATED)
        self.restrictions_open = False
        await self.fetch_restrictions()
        return True
