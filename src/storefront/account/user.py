"""User aggregate: a storefront account and its role.

The role is the only authorization axis. It is assigned at registration and
read at the API boundary; nothing in the order or stock paths looks at it.
"""

from datetime import UTC, datetime
from enum import Enum

import bcrypt
from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String, Text

from storefront.account.events import UserDetailsUpdated, UserRegistered, UserRemoved
from storefront.domain import storefront


class Role(Enum):
    USER = "USER"
    ADMIN = "ADMIN"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValidationError({"role": [f"Unknown role: {value!r}"]}) from None


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def hash_password(password: str) -> str:
    if not password:
        raise ValidationError({"password": ["Password is required"]})
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


@storefront.aggregate
class User:
    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=100)
    role: String(choices=Role, default=Role.USER.value)
    address: Text()
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def email_must_look_like_an_address(self):
        email = self.email or ""
        if any(ch.isspace() for ch in email) or email.count("@") != 1:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})
        local_part, domain_part = email.split("@", 1)
        if not local_part or "." not in domain_part or domain_part.startswith(".") or domain_part.endswith("."):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

    @classmethod
    def register(cls, name, email, password_hash, address=None, role=Role.USER.value):
        now = datetime.now(UTC)
        user = cls(
            name=name,
            email=normalize_email(email),
            password_hash=password_hash,
            role=Role.parse(role).value,
            address=address,
            created_at=now,
            updated_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                name=user.name,
                email=user.email,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    def verify_password(self, password: str) -> bool:
        if not password:
            return False
        return bcrypt.checkpw(password.encode("utf-8"), self.password_hash.encode("utf-8"))

    def update_details(self, name=None, email=None, address=None):
        if name is not None:
            self.name = name
        if email is not None:
            self.email = normalize_email(email)
        if address is not None:
            self.address = address
        self.updated_at = datetime.now(UTC)

        self.raise_(
            UserDetailsUpdated(
                user_id=str(self.id),
                name=self.name,
                email=self.email,
                address=self.address,
            )
        )

    def remove(self):
        self.raise_(UserRemoved(user_id=str(self.id), email=self.email, removed_at=datetime.now(UTC)))
