from typing import Optional, Literal, Union
from datetime import date, datetime
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field, field_validator

BookingStatus = Literal["pending", "accepted", "declined"]
StatusFilter = Literal["all", "pending", "accepted", "declined"]
RestrictionLevel = Literal["low", "medium", "high"]

BOOKING_STATUSES = ("pending", "accepted", "declined")
STATUS_FILTERS = ("all",) + BOOKING_STATUSES
RESTRICTION_LEVELS = ("low", "medium", "high")

class Booking(BaseModel):
    # Backend sends more fields than the dashboard shows
    model_config = ConfigDict(extra="ignore")

    id: str
    user_name: str = ""
    user_email: str = ""
    service_type: str
    preferred_date: Union[datetime, date]
    duration: int = Field(gt=0)  # minutes
    cost: Decimal
    status: BookingStatus = "pending"
    covid_restrictions: str = ""
    details: Optional[str] = None
    admin_notes: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        # Opaque identifier; some backends hand out integers
        if isinstance(value, int):
            return str(value)
        return value

    @property
    def is_pending(self) -> bool:
        return self.status == "pending"

class RestrictionsRecord(BaseModel):
    """Singleton COVID policy record, always replaced as a whole."""
    model_config = ConfigDict(extra="ignore")

    level: RestrictionLevel = "medium"
    density_limits: str = ""
    mask_required: bool = False
    quarantine_required: bool = False
    message: str = ""

    def missing_fields(self) -> list:
        """Names of required free-text fields left blank in the edit form."""
        return [name for name in ("density_limits", "message") if not getattr(self, name).strip()]

class BookingStats(BaseModel):
    total: int = 0
    pending: int = 0
    accepted: int = 0
    declined: int = 0
