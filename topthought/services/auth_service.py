import logging
from typing import Optional

from topthought.schemas.auth import AdminIdentity, LoginResponse
from topthought.security import create_access_token, hash_password, verify_password
from topthought.settings import Settings

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, repo, settings: Settings):
        self.repo = repo
        self.settings = settings

    def login(self, username: str, password: str) -> Optional[LoginResponse]:
        """Check admin credentials and issue a bearer token, or return None."""
        admin = self.repo.get_admin(username)
        if not admin:
            logger.info(f"Login rejected for unknown user {username!r}")
            return None

        if not verify_password(password, admin.get("password", "")):
            logger.info(f"Login rejected for {username!r}: bad password")
            return None

        identity = AdminIdentity(id=admin["_id"], username=admin["username"])
        token = create_access_token(identity, self.settings)
        return LoginResponse(token=token, user=identity)

    def ensure_admin(self) -> bool:
        """
        Seed the configured admin account when it is missing.
        Returns True when an account was created.
        """
        username = self.settings.ADMIN_USERNAME
        password = self.settings.ADMIN_PASSWORD
        if not password:
            logger.warning("ADMIN_PASSWORD not set; skipping admin account seeding")
            return False

        if self.repo.get_admin(username):
            return False

        self.repo.create_admin(username, hash_password(password))
        logger.info(f"Admin user created: username={username}")
        return True
