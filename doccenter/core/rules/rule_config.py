"""
Rule configuration management.

Loads field rules and document profiles from YAML files and provides a
builder for assembling rules in code.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from doccenter.core.models import DocumentProfile, FieldRule


def _read_yaml(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"{path} is not valid YAML: {e}") from e


class FieldRuleLoader:
    """
    Loads per-field shape rules from a YAML configuration file.

    Expected YAML format:
    ```yaml
    fields:
      invoice_no:
        type: text
        required: true
        min_length: 1
        max_length: 30
        pattern: '^[A-Z0-9\\-\\/]+$'
        error_message: 'Invoice number is required'

      exchange_rate:
        type: number
        min: 0.01
        max: 1000
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the field rule loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Field rule configuration file not found: {config_path}")

    def load_rules(self) -> dict[str, FieldRule]:
        """
        Load and parse field rules.

        Returns:
            Field key -> FieldRule

        Raises:
            ValueError: If the YAML is invalid or a rule is malformed
        """
        config = _read_yaml(self.config_path)

        if not config or "fields" not in config:
            raise ValueError("Configuration file must contain 'fields' section")

        rules: dict[str, FieldRule] = {}
        for field_name, rule_def in (config["fields"] or {}).items():
            rules[str(field_name)] = self._parse_rule(str(field_name), rule_def)
        return rules

    def _parse_rule(self, field_name: str, rule_def: Any) -> FieldRule:
        """
        Parse a single rule definition.

        Raises:
            ValueError: If the rule definition is invalid
        """
        if not isinstance(rule_def, dict):
            raise ValueError(f"Rule for field '{field_name}' must be a mapping")
        if "type" not in rule_def:
            raise ValueError(f"Rule for field '{field_name}' is missing 'type'")

        try:
            return FieldRule(field_name=field_name, **rule_def)
        except PydanticValidationError as e:
            raise ValueError(f"Invalid rule for field '{field_name}': {e}") from e


class ProfileLoader:
    """
    Loads document validation profiles from a YAML configuration file.

    Expected YAML format:
    ```yaml
    profiles:
      COM_INV:
        required: ['exporter_details', 'invoice_no', 'invoice_date']
        optional: ['reference_id', 'iec']
    ```
    """

    def __init__(self, config_path: str | Path):
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Document profile configuration file not found: {config_path}")

    def load_profiles(self) -> dict[str, DocumentProfile]:
        """
        Load and parse document profiles.

        Returns:
            Document type -> DocumentProfile

        Raises:
            ValueError: If the YAML is invalid or a profile is malformed
        """
        config = _read_yaml(self.config_path)

        if not config or "profiles" not in config:
            raise ValueError("Configuration file must contain 'profiles' section")

        profiles: dict[str, DocumentProfile] = {}
        for doc_type, profile_def in (config["profiles"] or {}).items():
            if not isinstance(profile_def, dict):
                raise ValueError(f"Profile for document '{doc_type}' must be a mapping")
            for section in ("required", "optional"):
                if not isinstance(profile_def.get(section, []), list):
                    raise ValueError(f"'{section}' of profile '{doc_type}' must be a list")
            profiles[str(doc_type)] = DocumentProfile(
                document_type=str(doc_type),
                required=profile_def.get("required", []),
                optional=profile_def.get("optional", []),
            )
        return profiles


class FieldRuleBuilder:
    """
    Programmatically build field rules and profiles (for testing or dynamic rules).
    """

    def __init__(self):
        """Initialize empty rule configuration."""
        self.rules: dict[str, FieldRule] = {}
        self.profiles: dict[str, DocumentProfile] = {}

    def add_text(
        self,
        field_name: str,
        required: bool = False,
        min_length: int | None = None,
        max_length: int | None = None,
        pattern: str | None = None,
        error_message: str | None = None,
    ) -> "FieldRuleBuilder":
        """Add a text rule."""
        self.rules[field_name] = FieldRule(
            field_name=field_name,
            type="text",
            required=required,
            min_length=min_length,
            max_length=max_length,
            pattern=pattern,
            error_message=error_message,
        )
        return self

    def add_number(
        self,
        field_name: str,
        required: bool = False,
        min_value: float | None = None,
        max_value: float | None = None,
        error_message: str | None = None,
    ) -> "FieldRuleBuilder":
        """Add a number rule."""
        self.rules[field_name] = FieldRule(
            field_name=field_name,
            type="number",
            required=required,
            min=min_value,
            max=max_value,
            error_message=error_message,
        )
        return self

    def add_date(
        self,
        field_name: str,
        required: bool = False,
        min_date: str | None = None,
        max_date: str | None = None,
        error_message: str | None = None,
    ) -> "FieldRuleBuilder":
        """Add a date rule."""
        self.rules[field_name] = FieldRule(
            field_name=field_name,
            type="date",
            required=required,
            min_date=min_date,
            max_date=max_date,
            error_message=error_message,
        )
        return self

    def add_select(
        self,
        field_name: str,
        options: list[str],
        required: bool = False,
        error_message: str | None = None,
    ) -> "FieldRuleBuilder":
        """Add a select rule."""
        self.rules[field_name] = FieldRule(
            field_name=field_name,
            type="select",
            required=required,
            options=options,
            error_message=error_message,
        )
        return self

    def add_profile(
        self,
        document_type: str,
        required: list[str],
        optional: list[str] | None = None,
    ) -> "FieldRuleBuilder":
        """Add a document profile."""
        self.profiles[document_type] = DocumentProfile(
            document_type=document_type,
            required=required,
            optional=optional or [],
        )
        return self

    def build(self) -> tuple[dict[str, FieldRule], dict[str, DocumentProfile]]:
        """Build and return (rules, profiles)."""
        return dict(self.rules), dict(self.profiles)
