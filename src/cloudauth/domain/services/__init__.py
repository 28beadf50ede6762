"""Domain services for CloudAuth.

Services hold the business logic and depend only on the interfaces in
``ports``; concrete stores and issuers are supplied by the caller.
"""

from cloudauth.domain.services.auth_errors import AuthError, AuthErrorCode
from cloudauth.domain.services.auth_service import AuthService
from cloudauth.domain.services.password_validator import (
    PasswordValidationError,
    PasswordValidator,
)
from cloudauth.domain.services.ports import DuplicateEmailError

__all__ = [
    "AuthError",
    "AuthErrorCode",
    "AuthService",
    "DuplicateEmailError",
    "PasswordValidationError",
    "PasswordValidator",
]
