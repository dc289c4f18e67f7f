"""Application tests for user accounts."""

import pytest
from protean import current_domain

from storefront.account.credentials import check_credentials
from storefront.account.profile import update_user
from storefront.account.registration import register_user
from storefront.account.removal import RemoveUser
from storefront.account.user import Role, User
from storefront.shared.errors import DuplicateEmail, NotFound


@pytest.fixture()
def repo():
    return current_domain.repository_for(User)


class TestRegistration:
    def test_register_persists(self, repo):
        user_id = register_user(name="Ravi Menon", email="Ravi@Example.com", password="pa55word")
        user = repo.get_user(user_id)
        assert user.email == "ravi@example.com"
        assert user.role == Role.USER.value
        assert user.password_hash != "pa55word"

    def test_duplicate_email_is_rejected(self):
        register_user(name="Ravi Menon", email="ravi@example.com", password="pa55word")
        with pytest.raises(DuplicateEmail):
            register_user(name="Other Ravi", email="RAVI@example.com", password="different")

    def test_register_admin(self, repo):
        user_id = register_user(name="Ops", email="ops@example.com", password="pa55word", role=Role.ADMIN)
        assert repo.get_user(user_id).is_admin


class TestQueries:
    def test_find_by_email(self, repo, make_user):
        user_id = make_user(email="finder@example.com")
        assert str(repo.find_by_email("FINDER@example.com").id) == user_id
        assert repo.find_by_email("nobody@example.com") is None

    def test_listing(self, repo, make_user):
        make_user(name="Zed")
        make_user(name="Amy")
        assert [user.name for user in repo.listing()] == ["Amy", "Zed"]

    def test_get_unknown_user(self, repo):
        with pytest.raises(NotFound):
            repo.get_user("missing-user")


class TestUpdate:
    def test_update_details(self, repo, make_user):
        user_id = make_user()
        update_user(user_id, name="New Name", address="1 Harbour Road")
        user = repo.get_user(user_id)
        assert user.name == "New Name"
        assert user.address == "1 Harbour Road"

    def test_update_to_taken_email_fails(self, make_user):
        make_user(email="taken@example.com")
        user_id = make_user()
        with pytest.raises(DuplicateEmail):
            update_user(user_id, email="taken@example.com")

    def test_update_to_own_email_is_fine(self, repo, make_user):
        user_id = make_user(email="mine@example.com")
        update_user(user_id, email="MINE@example.com")
        assert repo.get_user(user_id).email == "mine@example.com"


class TestRemove:
    def test_remove_user(self, repo, make_user):
        user_id = make_user()
        current_domain.process(RemoveUser(user_id=user_id), asynchronous=False)
        assert repo.get_or_none(user_id) is None


class TestCredentials:
    def test_valid_credentials(self, make_user):
        user_id = make_user(email="login@example.com", password="open-sesame")
        assert str(check_credentials("Login@Example.com", "open-sesame").id) == user_id

    def test_wrong_password(self, make_user):
        make_user(email="login@example.com", password="open-sesame")
        with pytest.raises(NotFound) as exc:
            check_credentials("login@example.com", "guess")
        assert str(exc.value) == "Invalid email or password"

    def test_unknown_email_fails_the_same_way(self):
        with pytest.raises(NotFound) as exc:
            check_credentials("ghost@example.com", "guess")
        assert str(exc.value) == "Invalid email or password"
