"""Web layer - server-rendered pages and the prayer form model."""

from .form import FormState, PrayerForm
from .pages import STATIC_DIR
from .pages import router as pages_router

__all__ = ["FormState", "PrayerForm", "STATIC_DIR", "pages_router"]
