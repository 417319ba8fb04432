"""API route modules.

Route organization:
- auth: Login, logout, current user
- sessions: Active admin sessions
- catalog: Properties, cities, regions, places, blog, types (CRUD pass-through)
- storage: Media listing and upload
- languages: Translation entries
- integrations: Calendar, exchange rates, notifications
"""

from . import (
    auth,
    catalog,
    integrations,
    languages,
    sessions,
    storage,
)

__all__ = [
    "auth",
    "catalog",
    "integrations",
    "languages",
    "sessions",
    "storage",
]
