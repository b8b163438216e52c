from typing import Optional

from app.core.config import settings
from app.models.api_models import CurrentUser

def is_admin(user: Optional[CurrentUser], admin_role: Optional[str] = None) -> bool:
    """
    Gate for rendering the admin page.
    The backend enforces authorization on every admin endpoint; this only
    decides whether the page shows itself or sends the actor away.
    """
    if user is None:
        return False
    return user.role == (admin_role or settings.ADMIN_ROLE)
