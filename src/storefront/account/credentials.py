"""Credential check for login.

An unknown email and a wrong password fail identically, so the response never
tells a caller which addresses are registered.
"""

import structlog
from protean.utils.globals import current_domain

from storefront.account.user import User
from storefront.shared.errors import NotFound

logger = structlog.get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def check_credentials(email: str, password: str) -> User:
    user = current_domain.repository_for(User).find_by_email(email)
    if user is None or not user.verify_password(password):
        logger.info("Credential check failed")
        raise NotFound(INVALID_CREDENTIALS)
    return user
