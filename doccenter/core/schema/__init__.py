"""
Document schemas and the document decision guide.
"""

from .registry import SchemaRegistry
from .schema_config import GuideDocument, GuideEntry, SchemaLoader

__all__ = [
    "SchemaRegistry",
    "SchemaLoader",
    "GuideEntry",
    "GuideDocument",
]
