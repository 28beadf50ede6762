"""Email/password credential verification."""

from cloudauth.core.logging import get_logger
from cloudauth.domain.entities import AuthenticatedIdentity
from cloudauth.domain.services.ports import MemberStore
from cloudauth.infrastructure.auth.password_hasher import DUMMY_PASSWORD_HASH, verify_password

logger = get_logger(__name__)


class PasswordCredentialVerifier:
    """Verifies an email and password against the stored member record.

    Every failure path runs one Argon2 verification so unknown emails
    cannot be told apart from wrong passwords by response time.
    """

    def __init__(self, members: MemberStore) -> None:
        self.members = members

    async def verify(self, email: str, password: str) -> AuthenticatedIdentity | None:
        """Return the member's identity if the credentials are valid, else None."""
        member = await self.members.get_by_email(email)

        if member is None:
            verify_password(password, DUMMY_PASSWORD_HASH)
            logger.info("Credential check failed: unknown email")
            return None

        if not verify_password(password, member.password_hash):
            logger.info("Credential check failed: invalid password", member_id=member.id)
            return None

        if not member.is_active:
            logger.info("Credential check failed: member inactive", member_id=member.id)
            return None

        return AuthenticatedIdentity(member_id=member.id, email=member.email, role=member.role)
