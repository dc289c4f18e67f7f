"""User registration: command, handler and entry point."""

import structlog
from protean import handle
from protean.fields import String, Text
from protean.utils.globals import current_domain

from storefront.account.user import Role, User, hash_password, normalize_email
from storefront.domain import storefront
from storefront.shared.errors import DuplicateEmail
from storefront.shared.locking import email_locks

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class RegisterUser:
    """Create an account. The password arrives already hashed."""

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=100)
    address: Text()
    role: String(max_length=10, default=Role.USER.value)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise DuplicateEmail(normalize_email(command.email))

        user = User.register(
            name=command.name,
            email=command.email,
            password_hash=command.password_hash,
            address=command.address,
            role=command.role or Role.USER.value,
        )
        repo.add(user)
        return str(user.id)


def register_user(name, email, password, address=None, role=Role.USER.value) -> str:
    """Register a new user and return its id. Raises DuplicateEmail for a taken address."""
    role = Role.parse(role)
    password_hash = hash_password(password)
    with email_locks.hold(normalize_email(email)):
        user_id = current_domain.process(
            RegisterUser(
                name=name,
                email=email,
                password_hash=password_hash,
                address=address,
                role=role.value,
            ),
            asynchronous=False,
        )
    logger.info("User registered", user_id=user_id, role=role.value)
    return user_id
