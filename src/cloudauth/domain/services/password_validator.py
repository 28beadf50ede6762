"""Password policy applied at signup.

The policy always enforces a minimum length. With complexity enabled it
also requires upper and lower case letters, a digit and a symbol.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class PasswordValidationError:
    """A single policy violation.

    Attributes:
        field: The field name (always 'password').
        message: Human-readable error message.
        code: Machine-readable error code.
    """

    field: str
    message: str
    code: str


_COMPLEXITY_RULES = (
    (r"[A-Z]", "an uppercase letter", "password_no_uppercase"),
    (r"[a-z]", "a lowercase letter", "password_no_lowercase"),
    (r"\d", "a digit", "password_no_digit"),
    (r"[^A-Za-z0-9]", "a special character", "password_no_special"),
)


class PasswordValidator:
    """Checks a candidate password against the configured policy."""

    def __init__(self, min_length: int = 8, require_complexity: bool = False) -> None:
        self.min_length = min_length
        self.require_complexity = require_complexity

    def validate(self, password: str) -> list[PasswordValidationError]:
        """Return every violation; an empty list means the password is acceptable."""
        errors: list[PasswordValidationError] = []

        if len(password) < self.min_length:
            errors.append(
                PasswordValidationError(
                    field="password",
                    message=f"Password must be at least {self.min_length} characters",
                    code="password_too_short",
                )
            )

        if self.require_complexity:
            for pattern, description, code in _COMPLEXITY_RULES:
                if not re.search(pattern, password):
                    errors.append(
                        PasswordValidationError(
                            field="password",
                            message=f"Password must contain at least {description}",
                            code=code,
                        )
                    )

        return errors

    def is_valid(self, password: str) -> bool:
        return not self.validate(password)
