"""Authentication infrastructure components.

Password hashing, credential verification and JWT token issuance.
"""

from cloudauth.infrastructure.auth.credential_verifier import PasswordCredentialVerifier
from cloudauth.infrastructure.auth.jwt_service import (
    InvalidTokenError,
    JWTError,
    JWTService,
    TokenExpiredError,
    jwt_service,
)
from cloudauth.infrastructure.auth.password_hasher import (
    DUMMY_PASSWORD_HASH,
    hash_password,
    verify_password,
)

__all__ = [
    "DUMMY_PASSWORD_HASH",
    "InvalidTokenError",
    "JWTError",
    "JWTService",
    "PasswordCredentialVerifier",
    "TokenExpiredError",
    "hash_password",
    "jwt_service",
    "verify_password",
]
