"""Member entity.

Members are identified by a unique email address and carry a set of
skill tags chosen at signup.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Member:
    """A registered member.

    Attributes:
        id: Unique identifier (UUID string). Also the session key that the
            member's refresh token is filed under.
        email: Email address, unique across all members.
        password_hash: Argon2id hash of the password (never plaintext).
        role: Role name carried in access tokens.
        skill_tags: Names of the skill tags the member holds.
        is_active: Whether the member can log in.
        created_at: When the member signed up.
        last_login: Timestamp of the last successful login.
    """

    id: str
    email: str
    password_hash: str
    role: str = "user"
    skill_tags: list[str] = field(default_factory=list)
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    last_login: datetime | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Member ID is required")
        if not self.email:
            raise ValueError("Email is required")
        if not self.password_hash:
            raise ValueError("Password hash is required")
