"""Domain events for the User aggregate. Password hashes never appear here."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    __version__ = 1

    user_id: Identifier(required=True)
    name: String(required=True)
    email: String(required=True)
    role: String(required=True)
    registered_at: DateTime(required=True)


@storefront.event(part_of="User")
class UserDetailsUpdated:
    __version__ = 1

    user_id: Identifier(required=True)
    name: String(required=True)
    email: String(required=True)
    address: String()


@storefront.event(part_of="User")
class UserRemoved:
    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    removed_at: DateTime(required=True)
