"""Authentication for the admin console.

Credential checks are delegated to the external identity provider; this
package only keeps local state derived from successful logins.

Components:
- CredentialDelegate: Asks the provider whether a username/password is valid
- IdentityStore: Insert-only local identities, created on first login
- SessionStore: Opaque-token sessions with a fixed TTL from creation
- SessionManager: Login, logout and the request authorization gate

Auth audit logging is in telemetry/audit/auth_logger.py.
"""

from resorter_admin.auth.credentials import CredentialDelegate, CredentialVerifier
from resorter_admin.auth.identity import Identity, IdentityStore
from resorter_admin.auth.manager import (
    GateResult,
    LoginResult,
    RequestContext,
    SessionManager,
)
from resorter_admin.auth.session import Session, SessionLookup, SessionStore

__all__ = [
    "CredentialDelegate",
    "CredentialVerifier",
    "GateResult",
    "Identity",
    "IdentityStore",
    "LoginResult",
    "RequestContext",
    "Session",
    "SessionLookup",
    "SessionManager",
    "SessionStore",
]
