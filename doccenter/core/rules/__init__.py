"""
Validation engine, field rule configuration and field state tracking.
"""

from .field_state import FieldStateTracker
from .rule_config import FieldRuleBuilder, FieldRuleLoader, ProfileLoader
from .rule_engine import LINE_ITEM_KEYS, ValidationEngine, build_validators

__all__ = [
    "ValidationEngine",
    "FieldRuleLoader",
    "ProfileLoader",
    "FieldRuleBuilder",
    "FieldStateTracker",
    "build_validators",
    "LINE_ITEM_KEYS",
]
