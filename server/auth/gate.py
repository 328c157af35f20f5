"""Colon-delimited credential header check.

The header carries ``id:password`` verbatim (no base64, not HTTP Basic).
The value is split on every ``:`` and must yield exactly two parts, so a
password that itself contains ``:`` can never authenticate.
"""

from __future__ import annotations

import logging

from server.auth.credentials import CredentialTable

log = logging.getLogger(__name__)


class AuthGate:
    """Validates ``Authorization`` header values against a CredentialTable."""

    def __init__(self, credentials: CredentialTable):
        self._credentials = credentials

    @property
    def credentials(self) -> CredentialTable:
        return self._credentials

    def authenticate(self, header_value: str | None) -> bool:
        """Return ``True`` only for a known id with an exactly matching password."""
        if header_value is None:
            log.debug("Authentication failed: header absent")
            return False

        parts = header_value.split(":")
        if len(parts) != 2:
            log.debug("Authentication failed: malformed header")
            return False

        cred_id, password = parts
        cred = self._credentials.get(cred_id)
        if cred is None:
            log.debug("Authentication failed: unknown id")
            return False

        # plain equality, matching the original credential check
        if password != cred.password:
            log.debug("Authentication failed: bad password for %s", cred_id)
            return False
        return True
