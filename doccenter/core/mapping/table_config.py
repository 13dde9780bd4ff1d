"""
Candidate-key table configuration loading.
"""

from pathlib import Path
from typing import Any

import yaml


class CandidateTableLoader:
    """
    Loads the candidate-key table from a YAML file.

    Expected YAML format:
    ```yaml
    common:
      invoice_no: ['REFERANCE', 'INVOICE_NO', 'REF_NO']
      invoice_date: ['ORDER_DATE', 'DATE']

    documents:
      COM_INV:
        terms: ['INCOTERMS', 'TERMS']
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Candidate key table not found: {config_path}")

    def load_table(self) -> tuple[dict[str, list[str]], dict[str, dict[str, list[str]]]]:
        """
        Load and check the table.

        Returns:
            Tuple of (common scope, document scopes)

        Raises:
            ValueError: If the YAML is malformed or an entry is not a list of keys
        """
        with open(self.config_path, encoding="utf-8") as f:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Candidate key table {self.config_path} is not valid YAML: {e}") from e

        if not isinstance(config, dict) or "common" not in config:
            raise ValueError("Candidate key table must contain a 'common' section")

        common = self._parse_scope("common", config["common"] or {})

        documents: dict[str, dict[str, list[str]]] = {}
        for doc_type, fields in (config.get("documents") or {}).items():
            documents[str(doc_type)] = self._parse_scope(f"documents.{doc_type}", fields or {})

        return common, documents

    def _parse_scope(self, scope_name: str, entries: Any) -> dict[str, list[str]]:
        """
        Parse one scope of field -> candidate list entries.

        Raises:
            ValueError: If the scope is not a mapping of field -> list of strings
        """
        if not isinstance(entries, dict):
            raise ValueError(f"Scope '{scope_name}' must be a mapping of field -> candidate keys")

        scope: dict[str, list[str]] = {}
        for field_key, candidates in entries.items():
            if not isinstance(candidates, list):
                raise ValueError(f"Candidates for '{scope_name}.{field_key}' must be a list")
            if not all(isinstance(c, str) and c.strip() for c in candidates):
                raise ValueError(f"Candidates for '{scope_name}.{field_key}' must be non-empty strings")
            scope[str(field_key)] = [c.strip() for c in candidates]
        return scope
