"""
DocumentField and DocumentSchema models describing the fields of a document type.
"""

from typing import Literal

from pydantic import BaseModel, Field, model_validator

FieldType = Literal[
    "text",
    "textarea",
    "date",
    "number",
    "select",
    "heading",
    "items_table",
    "packing_table",
    "mcd_table",
    "neg_table",
    "nondg_table",
]

# Field types that do not hold a single scalar value
NON_INPUT_TYPES = frozenset(
    {"heading", "items_table", "packing_table", "mcd_table", "neg_table", "nondg_table"}
)


class DocumentField(BaseModel):
    """
    One field of a document form (immutable input to the engine).

    Attributes:
        key: Canonical field key ("invoice_no"); None for section headings
        label: Human-readable label
        type: Input type; headings and line-item tables are not auto-filled
        required: Schema-level required marker shown next to the label
        options: Allowed values for select fields
        default: Initial value shown in the form
    """

    key: str | None = None
    label: str = ""
    type: FieldType = "text"
    required: bool = False
    options: list[str] | None = None
    default: str | None = None

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_key_present(self) -> "DocumentField":
        """Every field except headings must carry a key."""
        if self.type != "heading" and not self.key:
            raise ValueError(f"Field of type '{self.type}' requires a key")
        return self

    @property
    def is_input(self) -> bool:
        """True for fields holding a single scalar value."""
        return self.key is not None and self.type not in NON_INPUT_TYPES


class DocumentSchema(BaseModel):
    """
    Field list for a document type.

    Attributes:
        document_type: Document type identifier ("COM_INV")
        title: Document title
        description: What the document is for
        fields: Ordered field definitions
    """

    document_type: str = Field(..., min_length=1)
    title: str
    description: str = ""
    fields: list[DocumentField] = Field(default_factory=list)

    @property
    def input_fields(self) -> list[DocumentField]:
        return [f for f in self.fields if f.is_input]

    @property
    def field_keys(self) -> list[str]:
        return [f.key for f in self.fields if f.is_input]

    def get_field(self, key: str) -> DocumentField | None:
        for f in self.fields:
            if f.key == key:
                return f
        return None
