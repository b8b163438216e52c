from pydantic import BaseModel, ConfigDict
from typing import Optional, Literal

DecisionAction = Literal["accept", "decline"]

# --- Outgoing Request Models ---

class DecisionRequest(BaseModel):
    action: DecisionAction
    admin_notes: str = ""

# --- Incoming Response Models ---

class CurrentUser(BaseModel):
    # Shape of /auth/me; only role matters to the dashboard
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    name: str = ""
    email: str = ""
    role: str = "user"
