"""Decode errors for GTX8 cfg group files.

Errors classify and locate a failure; they do not format user-facing
text. The command-line layer turns them into stderr messages and exit
codes.

Error Kinds:
    TruncatedInput: Buffer ended before a field could be fully read
    SchemaViolation: A decoded value breaks a constraint of the format
"""

from typing import Optional


class DecodeError(Exception):
    """Base class for all decode failures.

    Attributes:
        field: Dotted path of the field where decoding stopped
        offset: Absolute byte offset of that field in the buffer
    """

    kind = "DecodeError"

    def __init__(self, field: str, offset: int, detail: str = ""):
        self.field = field
        self.offset = offset
        super().__init__(f"{self.kind} at {field} (offset {offset}){': ' + detail if detail else ''}")


class TruncatedInput(DecodeError):
    """Buffer too short for a field.

    Attributes:
        required: Bytes the field (or array) needs from its offset
        available: Bytes actually left from its offset
    """

    kind = "TruncatedInput"

    def __init__(self, field: str, offset: int, required: int, available: int):
        self.required = required
        self.available = max(0, available)
        super().__init__(
            field, offset, f"need {required} bytes, have {self.available}"
        )

    @property
    def missing(self) -> int:
        """Number of bytes missing to read the field."""
        return self.required - self.available


class SchemaViolation(DecodeError):
    """Decoded value fails a check asserted by the format.

    Attributes:
        value: Value found in the buffer
        expected: Value the format requires (None when not a single value)
    """

    kind = "SchemaViolation"

    def __init__(self, field: str, offset: int, value, expected: Optional[object] = None, reason: str = ""):
        self.value = value
        self.expected = expected
        self.reason = reason
        detail = reason or f"got {value!r}, expected {expected!r}"
        super().__init__(field, offset, detail)
