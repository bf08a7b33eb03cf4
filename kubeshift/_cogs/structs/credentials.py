"""
Connection-related structures.

Acquiring the credentials is not the business of this library: the token
is given as is, and is attached to every request once the session is made.
Only the information passed to the HTTP protocol and TCP/SSL connection
is kept here, i.e. everything usable in a generic HTTP client:

* The API server's URL.
* SSL verification/ignorance flag.
* SSL certificate authority.
* HTTP ``Authorization: Bearer token`` (or other schemes).
"""
import dataclasses


@dataclasses.dataclass(frozen=True)
class ConnectionInfo:
    """
    A single endpoint with specific credentials and connection flags to use.
    """
    server: str  # e.g. "https://localhost:8443"
    token: str | None = None
    scheme: str | None = None  # RFC-7235/5.1: e.g. Bearer, Basic, Digest, etc.
    ca_path: str | None = None
    ca_data: bytes | None = None
    insecure: bool | None = None
