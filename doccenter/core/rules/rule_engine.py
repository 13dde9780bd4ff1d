"""
Validation engine for checking document form values.

The engine decides which fields a document type requires, applies each
field's shape rule, and aggregates the outcome per document. Failures are
reported as results; nothing here raises for invalid input.
"""

from collections.abc import Mapping
from typing import Any

from doccenter.config import DOCUMENT_PROFILES_FILE, FIELD_RULES_FILE, Settings
from doccenter.core.models import (
    DocumentProfile,
    DocumentValidationResult,
    FieldCheck,
    FieldRule,
)
from doccenter.core.validators import (
    BaseValidator,
    DateRangeValidator,
    LengthValidator,
    OptionValidator,
    RangeValidator,
    RegexValidator,
    RequiredFieldValidator,
    TypeValidator,
    ValidationError,
)
from doccenter.observability.logger import get_logger
from doccenter.observability.metrics import record_generation_gate, record_validation_failure

from .rule_config import FieldRuleLoader, ProfileLoader

logger = get_logger(__name__)

# Line-item collections are validated by their own tables, not as fields
LINE_ITEM_KEYS = frozenset({"items", "packing_list", "packages"})


def build_validators(rule: FieldRule) -> list[BaseValidator]:
    """
    Build the shape validators for a field rule, in evaluation order.

    Presence is not included; the engine applies it first when the field
    is required.
    """
    name = rule.field_name
    validators: list[BaseValidator] = []

    if rule.type in ("text", "textarea"):
        if rule.min_length is not None or rule.max_length is not None:
            validators.append(LengthValidator(name, {"min_length": rule.min_length, "max_length": rule.max_length}))
        if rule.pattern:
            validators.append(RegexValidator(name, {"pattern": rule.pattern}))

    elif rule.type == "number":
        validators.append(TypeValidator(name, {"expected_type": "number"}))
        if rule.min is not None or rule.max is not None:
            validators.append(RangeValidator(name, {"min": rule.min, "max": rule.max}))

    elif rule.type == "date":
        validators.append(TypeValidator(name, {"expected_type": "date"}))
        if rule.min_date is not None or rule.max_date is not None:
            validators.append(DateRangeValidator(name, {"min_date": rule.min_date, "max_date": rule.max_date}))

    elif rule.type == "select" and rule.options:
        validators.append(OptionValidator(name, {"options": rule.options}))

    return validators


class ValidationEngine:
    """
    Checks fields and documents against field rules and document profiles.

    Required-ness comes from the document type's profile when one exists;
    without a profile the field rule's own ``required`` flag applies.
    """

    def __init__(
        self,
        rules: Mapping[str, FieldRule] | None = None,
        profiles: Mapping[str, DocumentProfile] | None = None,
    ):
        """
        Initialize the engine.

        Args:
            rules: Field key -> FieldRule
            profiles: Document type -> DocumentProfile
        """
        self.rules = dict(rules or {})
        self.profiles = dict(profiles or {})
        self._validators: dict[str, list[BaseValidator]] = {}
        for field_name, rule in self.rules.items():
            try:
                self._validators[field_name] = build_validators(rule)
            except ValueError as e:
                raise ValueError(f"Failed to create validators for field '{field_name}': {e}") from e

    @classmethod
    def from_yaml(cls, rules_path, profiles_path) -> "ValidationEngine":
        rules = FieldRuleLoader(rules_path).load_rules()
        profiles = ProfileLoader(profiles_path).load_profiles()
        return cls(rules=rules, profiles=profiles)

    @classmethod
    def load_default(cls, settings: Settings | None = None) -> "ValidationEngine":
        """Load the configured rules and profiles (the packaged ones unless overridden)."""
        settings = settings or Settings()
        return cls.from_yaml(
            settings.config_path(FIELD_RULES_FILE),
            settings.config_path(DOCUMENT_PROFILES_FILE),
        )

    def get_profile(self, document_type: str) -> DocumentProfile | None:
        return self.profiles.get(document_type)

    def required_fields(self, document_type: str) -> list[str]:
        """
        Required fields of a document type.

        With a profile this is the profile's required list; otherwise every
        field whose rule is marked required.
        """
        profile = self.profiles.get(document_type)
        if profile is not None:
            return list(profile.required)
        return [name for name, rule in self.rules.items() if rule.required]

    def is_required(self, field_key: str, document_type: str = "") -> bool:
        profile = self.profiles.get(document_type)
        if profile is not None:
            return profile.is_required(field_key)
        rule = self.rules.get(field_key)
        return bool(rule and rule.required)

    def check_field(
        self,
        field_key: str,
        value: Any,
        document_type: str = "",
        record: Mapping[str, Any] | None = None,
    ) -> FieldCheck:
        """
        Check one field value.

        Presence is checked before shape. An empty optional field is valid.
        A field without a rule only gets the presence check.

        Args:
            field_key: Canonical field key
            value: Current value
            document_type: Active document type (decides required-ness)
            record: All form values, for context

        Returns:
            FieldCheck with the outcome
        """
        required = self.is_required(field_key, document_type)
        rule = self.rules.get(field_key)

        context = dict(record or {})
        validators: list[BaseValidator] = list(self._validators.get(field_key, []))
        if required:
            validators.insert(0, RequiredFieldValidator(field_key))
        elif RequiredFieldValidator.is_empty(value):
            return FieldCheck(field_key=field_key, is_valid=True, required=False)

        for validator in validators:
            try:
                validator.validate(value, context)
            except ValidationError as e:
                record_validation_failure(document_type or "-", e.rule_name, field_key)
                return FieldCheck(
                    field_key=field_key,
                    is_valid=False,
                    error_message=(rule.error_message if rule else None) or e.message,
                    failed_rule=e.rule_name,
                    required=required,
                )

        return FieldCheck(field_key=field_key, is_valid=True, required=required)

    def check_document(self, document_type: str, values: Mapping[str, Any]) -> DocumentValidationResult:
        """
        Check every field of a document.

        A profiled document checks all of its profile fields, required and
        optional. Without a profile, every supplied value is checked except
        line-item collections.

        Args:
            document_type: Active document type
            values: Field key -> current value

        Returns:
            DocumentValidationResult; is_valid is True iff every checked field passed
        """
        profile = self.profiles.get(document_type)
        if profile is not None:
            field_keys = profile.all_fields
        else:
            field_keys = [key for key in values if key not in LINE_ITEM_KEYS]

        field_results: dict[str, FieldCheck] = {}
        errors: dict[str, str] = {}
        for key in field_keys:
            check = self.check_field(key, values.get(key), document_type, values)
            field_results[key] = check
            if not check.is_valid:
                errors[key] = check.error_message

        result = DocumentValidationResult(
            document_type=document_type,
            is_valid=not errors,
            errors_by_field=errors,
            field_results=field_results,
            profiled=profile is not None,
        )
        logger.debug(
            "Checked document",
            extra={
                "document_type": document_type,
                "field_count": len(field_results),
                "error_count": result.error_count,
            },
        )
        return result

    def can_generate(self, result: DocumentValidationResult, strict_mode: bool = False) -> bool:
        """
        Decide whether a document may be generated.

        Generation is blocked only in strict mode with an invalid document.
        """
        allowed = result.is_valid or not strict_mode
        record_generation_gate(result.document_type, allowed)
        if not allowed:
            logger.info(
                "Document generation blocked by strict mode",
                extra={"document_type": result.document_type, "error_count": result.error_count},
            )
        return allowed

    def can_save_draft(self, result: DocumentValidationResult | None = None) -> bool:
        """Drafts can always be saved, whatever their validation state."""
        return True

    def get_rule_summary(self) -> dict[str, Any]:
        """
        Get summary of loaded rules.

        Returns:
            Dictionary with rule and profile counts
        """
        counts: dict[str, int] = {}
        for rule in self.rules.values():
            counts[rule.type] = counts.get(rule.type, 0) + 1
        return {
            "total_rules": len(self.rules),
            "rules_by_type": counts,
            "profiles": len(self.profiles),
        }
