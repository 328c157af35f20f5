"""Credential-table authentication for the record service."""

from server.auth.credentials import Credential, CredentialTable, load_credential_table
from server.auth.dependencies import is_authenticated
from server.auth.gate import AuthGate

__all__ = ["AuthGate", "Credential", "CredentialTable", "is_authenticated", "load_credential_table"]
