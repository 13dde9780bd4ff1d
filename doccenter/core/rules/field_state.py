"""
Per-document field state tracking for real-time validation.
"""

from typing import Any

from doccenter.core.models import FieldCheck, FieldState

from .rule_engine import ValidationEngine


class FieldStateTracker:
    """
    Tracks the untouched/valid/invalid state of each field of one document.

    Every profile field starts untouched. Each update re-checks the field
    and moves it to valid or invalid; it never returns to untouched.
    """

    def __init__(self, engine: ValidationEngine, document_type: str):
        self.engine = engine
        self.document_type = document_type
        self.values: dict[str, Any] = {}
        self._checks: dict[str, FieldCheck] = {}

        profile = engine.get_profile(document_type)
        self._states: dict[str, FieldState] = {
            key: FieldState.UNTOUCHED for key in (profile.all_fields if profile else [])
        }

    def update(self, field_key: str, value: Any) -> FieldCheck:
        """Record a new value for a field and re-check it."""
        self.values[field_key] = value
        check = self.engine.check_field(field_key, value, self.document_type, self.values)
        self._checks[field_key] = check
        self._states[field_key] = check.state
        return check

    def update_many(self, values: dict[str, Any]) -> dict[str, FieldCheck]:
        return {key: self.update(key, value) for key, value in values.items()}

    def state(self, field_key: str) -> FieldState:
        return self._states.get(field_key, FieldState.UNTOUCHED)

    def error(self, field_key: str) -> str | None:
        check = self._checks.get(field_key)
        return check.error_message if check else None

    def checklist(self) -> dict[str, FieldState]:
        """State of every tracked field, profile fields first."""
        return dict(self._states)

    @property
    def invalid_fields(self) -> list[str]:
        return [key for key, state in self._states.items() if state is FieldState.INVALID]
