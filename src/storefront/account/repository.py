"""Repository for the User aggregate."""

from storefront.account.user import User, normalize_email
from storefront.domain import storefront
from storefront.shared.errors import NotFound


@storefront.repository(part_of=User)
class UserRepository:
    def get_user(self, user_id) -> User:
        user = self.get_or_none(user_id) if user_id else None
        if user is None:
            raise NotFound(f"User not found with id: {user_id}")
        return user

    def find_by_email(self, email: str) -> User | None:
        if not email:
            return None
        return self.query.filter(email=normalize_email(email)).all().first

    def listing(self) -> list[User]:
        return self.query.limit(None).order_by("name").all().items

    def remove_user(self, user: User) -> None:
        self._dao.delete(user)
