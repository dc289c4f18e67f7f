"""User removal: command and handler. Orders placed by the user are kept."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.account.user import User
from storefront.domain import storefront


@storefront.command(part_of="User")
class RemoveUser:
    user_id: Identifier(required=True)


@storefront.command_handler(part_of=User)
class RemoveUserHandler:
    @handle(RemoveUser)
    def remove_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get_user(command.user_id)
        user.remove()
        repo.remove_user(user)
