"""
Utils package
"""

from jobtracker.utils.config import Settings, get_settings
from jobtracker.utils.database import Database, get_db

__all__ = [
    "Settings",
    "get_settings",
    "Database",
    "get_db",
]
