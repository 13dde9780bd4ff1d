"""
Runtime settings and the packaged configuration tables.
"""

from .settings import (
    CANDIDATE_KEYS_FILE,
    DOCUMENT_PROFILES_FILE,
    DOCUMENT_SCHEMAS_FILE,
    FIELD_RULES_FILE,
    PACKAGE_CONFIG_DIR,
    Settings,
    load_settings,
)

__all__ = [
    "Settings",
    "load_settings",
    "PACKAGE_CONFIG_DIR",
    "CANDIDATE_KEYS_FILE",
    "FIELD_RULES_FILE",
    "DOCUMENT_PROFILES_FILE",
    "DOCUMENT_SCHEMAS_FILE",
]
