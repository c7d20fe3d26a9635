"""Conversion between public identifiers and storage keys.

Only statement binding code calls into this module: entities and callers
carry plain strings, the tables are keyed by UUID and normalised email.
"""

from uuid import UUID

from .errors import MalformedIdentifierError


def to_storage_id(value: str | UUID) -> UUID:
    """Convert a comment identifier into its storage key.

    Raises:
        MalformedIdentifierError: if ``value`` is not a UUID
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError as e:
        raise MalformedIdentifierError(value) from e


def from_storage_id(value: UUID) -> str:
    """Convert a storage key back into the public identifier."""
    return str(value)


def normalize_email(email: str) -> str:
    """Normalise an email for use as a key or ownership filter."""
    return email.strip().lower()
