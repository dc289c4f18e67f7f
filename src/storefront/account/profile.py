"""User detail edits: command, handler and entry point.

Changing the email re-checks uniqueness under the lock for the new address.
"""

from contextlib import nullcontext

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.account.user import User, normalize_email
from storefront.domain import storefront
from storefront.shared.errors import DuplicateEmail
from storefront.shared.locking import email_locks


@storefront.command(part_of="User")
class UpdateUser:
    user_id: Identifier(required=True)
    name: String(max_length=100)
    email: String(max_length=254)
    address: Text()


@storefront.command_handler(part_of=User)
class UpdateUserHandler:
    @handle(UpdateUser)
    def update_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get_user(command.user_id)

        if command.email is not None:
            holder = repo.find_by_email(command.email)
            if holder is not None and holder.id != user.id:
                raise DuplicateEmail(normalize_email(command.email))

        user.update_details(name=command.name, email=command.email, address=command.address)
        repo.add(user)


def update_user(user_id, name=None, email=None, address=None) -> None:
    guard = email_locks.hold(normalize_email(email)) if email else nullcontext()
    with guard:
        current_domain.process(
            UpdateUser(user_id=user_id, name=name, email=email, address=address),
            asynchronous=False,
        )
