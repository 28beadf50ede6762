"""Password hashing with Argon2id.

Members' passwords are only ever stored as Argon2id hashes produced here.
"""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

_hasher = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a password using Argon2id.

    Example:
        >>> hash_password("s3cret-pass").startswith("$argon2id$")
        True
    """
    return _hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Check a plaintext password against a stored hash.

    Malformed hashes count as a mismatch rather than an error.
    """
    try:
        return _hasher.verify(hashed, password)
    except (VerificationError, InvalidHashError):
        return False


# Verified against when the email is unknown, so a miss costs the same
# time as a wrong password.
DUMMY_PASSWORD_HASH = hash_password("cloudauth-dummy-password")
