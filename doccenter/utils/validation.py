"""
Input validation utilities for doccenter.

Checks the free-text values a user hands to the engine (reference tokens,
document types, file paths) before they reach a lookup.
"""

import re


class ValidationError(ValueError):
    """Raised when input validation fails."""
    pass


def validate_reference_token(token: str, field_name: str = "reference") -> str:
    """
    Validate a reference token typed by the user.

    Tokens are free text (invoice references, AWB numbers). Any printable
    text is accepted; whether it names a shipment is for the lookup to say.

    Args:
        token: The reference to validate
        field_name: Name of the field (for error messages)

    Returns:
        The validated token, trimmed and upper-cased

    Raises:
        ValidationError: If validation fails

    Examples:
        >>> validate_reference_token(" inv-2024/0042 ")
        'INV-2024/0042'
        >>> validate_reference_token("inv#42")
        'INV#42'
        >>> validate_reference_token("")  # doctest: +SKIP
        ValidationError: reference must be a non-empty string
    """
    if not token or not isinstance(token, str):
        raise ValidationError(f"{field_name} must be a non-empty string")

    token = token.strip()

    if not token:
        raise ValidationError(f"{field_name} cannot be empty or whitespace-only")

    if re.search(r'[\x00-\x1f\x7f]', token):
        raise ValidationError(f"{field_name} contains control characters")

    return token.upper()


def validate_document_type(document_type: str, field_name: str = "document_type") -> str:
    """
    Validate a document type identifier.

    Args:
        document_type: Identifier such as "COM_INV"
        field_name: Name of the field (for error messages)

    Returns:
        The validated identifier, trimmed and upper-cased

    Raises:
        ValidationError: If validation fails

    Examples:
        >>> validate_document_type("com_inv")
        'COM_INV'
        >>> validate_document_type("COM INV")  # doctest: +SKIP
        ValidationError: document_type contains invalid characters
    """
    if not document_type or not isinstance(document_type, str):
        raise ValidationError(f"{field_name} must be a non-empty string")

    document_type = document_type.strip().upper()

    if not re.match(r'^[A-Z][A-Z0-9_]*$', document_type):
        raise ValidationError(
            f"{field_name} contains invalid characters. "
            "Document types start with a letter and contain only letters, digits and underscores."
        )

    if len(document_type) > 50:
        raise ValidationError(f"{field_name} exceeds maximum length of 50 characters")

    return document_type


def validate_file_path(file_path: str, field_name: str = "file_path") -> str:
    """
    Validate a file path for security.

    Prevents path traversal and ensures the path is reasonable.

    Args:
        file_path: The file path to validate
        field_name: Name of the field (for error messages)

    Returns:
        The validated file path (stripped of whitespace)

    Raises:
        ValidationError: If validation fails

    Examples:
        >>> validate_file_path("/data/snapshot.json")
        '/data/snapshot.json'
        >>> validate_file_path("../../../etc/passwd")  # doctest: +SKIP
        ValidationError: file_path contains path traversal characters
    """
    if not file_path or not isinstance(file_path, str):
        raise ValidationError(f"{field_name} must be a non-empty string")

    file_path = file_path.strip()

    if not file_path:
        raise ValidationError(f"{field_name} cannot be empty or whitespace-only")

    if ".." in file_path:
        raise ValidationError(f"{field_name} contains path traversal characters (..)")

    if "\x00" in file_path:
        raise ValidationError(f"{field_name} contains null bytes")

    if len(file_path) > 4096:  # Linux PATH_MAX
        raise ValidationError(f"{field_name} exceeds maximum length of 4096 characters")

    return file_path
