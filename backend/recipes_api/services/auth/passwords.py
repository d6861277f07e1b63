"""Password digest used for stored credentials.

A single unsalted SHA-256 pass over the UTF-8 bytes of the password, hex
encoded. Existing records depend on this exact format; changing it needs a
versioned digest column and a migration, not an in-place upgrade.
"""

from __future__ import annotations

import hashlib


def digest_password(raw: str) -> str:
    """Return the hex SHA-256 digest of ``raw``."""
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()
