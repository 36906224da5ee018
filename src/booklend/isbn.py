# ABOUTME: ISBN normalization shared by the resolver and the ledger.
# ABOUTME: Strips separators so scanned, typed, and stored identifiers compare equal.

import re

from booklend.errors import ValidationError

_NON_ISBN_RE = re.compile(r"[^0-9X]")


def normalize_isbn(raw: str | None) -> str:
    """Reduce an identifier to its digits and check character.

    Every character that is not a decimal digit or an uppercase ``X`` is
    removed, including hyphens, spaces, and a lowercase ``x``.

    Raises:
        ValidationError: If nothing remains after normalization.
    """
    cleaned = _NON_ISBN_RE.sub("", raw or "")
    if not cleaned:
        raise ValidationError(f"ISBN is required (got {raw!r})")
    return cleaned


def isbn_key(value: str) -> str:
    """Normalize a stored cell for comparison; blank or junk cells map to ""."""
    return _NON_ISBN_RE.sub("", value or "")
