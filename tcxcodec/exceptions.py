"""
Exception classes for tcx-codec.

Every failure raised while decoding a TCX document is a ``DecodeError``.
A decode error always aborts the whole call; no partially built document
is returned.
"""

from typing import Optional, Any, Dict


class TcxError(Exception):
    """Base exception for all tcx-codec errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class DecodeError(TcxError):
    """
    Raised when a document cannot be turned into a typed ``Document``.

    Attributes:
        kind: ``"malformed-xml"`` or ``"schema-violation"``
        field: Qualified field name, e.g. ``Activity.id``
        path: Element path of the enclosing entity
        line, column: Position reported by the XML reader, when known
    """

    kind = "decode"

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        details = {}
        if field is not None:
            details["field"] = field
        if path is not None:
            details["path"] = path
        if line is not None:
            details["line"] = line
        if column is not None:
            details["column"] = column
        super().__init__(message, details)
        self.field = field
        self.path = path
        self.line = line
        self.column = column


class MalformedXml(DecodeError):
    """
    Raised when the input is not well-formed XML.

    Examples:
    - Unclosed or mismatched tags
    - Invalid characters or bad encoding
    - Empty input
    """

    kind = "malformed-xml"


class SchemaViolation(DecodeError):
    """Raised when well-formed XML breaks a TCX structural rule."""

    kind = "schema-violation"


class MissingRequiredField(SchemaViolation):
    """Raised when a required element or attribute is absent when its entity closes."""

    def __init__(self, field: str, path: Optional[str] = None):
        message = f"Missing required field {field}"
        if path:
            message = f"{message} at {path}"
        super().__init__(message, field=field, path=path)


class InvalidValue(SchemaViolation):
    """
    Raised when a present field fails primitive decoding.

    Examples:
    - Malformed timestamp
    - Negative distance or duration
    - Latitude outside -90..90
    """

    def __init__(self, field: str, text: Optional[str], reason: str, path: Optional[str] = None):
        message = f"Invalid value {text!r} for {field}: {reason}"
        if path:
            message = f"{message} at {path}"
        super().__init__(message, field=field, path=path)
        self.text = text
        self.reason = reason
