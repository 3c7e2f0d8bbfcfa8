"""Decode error taxonomy.

Every failure to turn a wire document into a typed event is a
`DecodeError`. Errors carry:
- `field`: dotted path of the offending field (e.g. "payload.item.nft_id")
- `value`: the raw value that failed to decode

Nested decoders prefix the path as the error propagates (see `DecodeError.at`).
"""

from __future__ import annotations

from typing import Any


class DecodeError(ValueError):
    """Base class for all wire-format errors."""

    def __init__(self, message: str, *, field: str | None = None, value: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value

    def at(self, prefix: str) -> DecodeError:
        """Prefix the field path with the enclosing field name and return self."""
        self.field = prefix if self.field is None else f"{prefix}.{self.field}"
        return self

    def __str__(self) -> str:
        if self.field is None:
            return self.message
        return f"{self.field}: {self.message}"


class MalformedEnvelope(DecodeError):
    """Envelope or payload does not match the declared shape."""


class UnknownChain(DecodeError):
    """Chain name is not one of the supported networks."""


class InvalidAddress(DecodeError):
    """Hex value is not a valid 20-byte address."""


class InvalidIdentifier(DecodeError):
    """Composite NFT identifier has fewer than three segments."""


class NumericOverflowOrFormat(DecodeError):
    """Integer or float text is malformed or out of range."""


class MissingRequiredField(DecodeError):
    """A non-optional field is absent or null."""
