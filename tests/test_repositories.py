"""Tests for the user and domain repositories."""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from core.models import Domain, User
from core.repositories import DomainRepository, UserRepository

BASE_TIME = datetime(2020, 1, 1, tzinfo=timezone.utc)


def _user(session, email, name="User", role="user", offset=0):
    return UserRepository(session).create(
        name=name,
        email=email,
        password_hash="x",
        role=role,
        created_at=BASE_TIME + timedelta(minutes=offset),
    )


def test_unknown_filter_key_raises(test_session):
    repo = UserRepository(test_session)

    with pytest.raises(ValueError, match="Unknown filter key"):
        repo.exists_where(typo_key=5)


def test_exists_with_filters(test_session):
    _user(test_session, "a@example.com", role="admin")
    _user(test_session, "b@example.com")
    repo = UserRepository(test_session)

    assert repo.exists_where(role="admin", email="a@example.com")
    assert not repo.exists_where(role="admin", email="b@example.com")
    assert repo.exists_where(email="b@example.com")
    assert not repo.exists_where(email="c@example.com")


def test_duplicate_email_violates_constraint(test_session):
    _user(test_session, "dup@example.com")
    with pytest.raises(IntegrityError):
        _user(test_session, "dup@example.com")
    test_session.rollback()


def test_email_taken_by_other_ignores_self(test_session):
    first = _user(test_session, "first@example.com")
    second = _user(test_session, "second@example.com")
    repo = UserRepository(test_session)

    assert not repo.email_taken_by_other("first@example.com", first.id)
    assert repo.email_taken_by_other("first@example.com", second.id)


class TestUserSearch:
    @pytest.fixture
    def users(self, test_session):
        _user(test_session, "alice@example.com", name="Alice", role="admin", offset=1)
        _user(test_session, "bob@example.com", name="Bob", offset=2)
        _user(test_session, "carol@sample.org", name="Carol", offset=3)
        _user(test_session, "dave_100%@sample.org", name="Dave", offset=4)
        return UserRepository(test_session)

    def test_newest_first(self, users):
        page = users.search(page=1, limit=10)
        assert [u.name for u in page.items] == ["Dave", "Carol", "Bob", "Alice"]
        assert page.total == 4
        assert page.total_pages == 1

    def test_pagination(self, users):
        page = users.search(page=2, limit=3)
        assert [u.name for u in page.items] == ["Alice"]
        assert page.total == 4
        assert page.total_pages == 2

    def test_search_name_or_email_case_insensitive(self, users):
        assert {u.name for u in users.search(1, 10, search="ALI").items} == {"Alice"}
        assert {u.name for u in users.search(1, 10, search="sample").items} == {"Carol", "Dave"}

    def test_search_wildcards_are_literal(self, users):
        assert [u.name for u in users.search(1, 10, search="%").items] == ["Dave"]
        assert [u.name for u in users.search(1, 10, search="_1").items] == ["Dave"]

    def test_role_filter(self, users):
        assert [u.name for u in users.search(1, 10, role="admin").items] == ["Alice"]

    def test_unknown_role_filter_ignored(self, users):
        assert users.search(1, 10, role="superuser").total == 4

    def test_empty_result_has_one_page(self, users):
        page = users.search(1, 10, search="nobody")
        assert page.items == []
        assert page.total == 0
        assert page.total_pages == 1


class TestDomainRepository:
    def test_list_scoped_to_owner_newest_first(self, test_session):
        owner = _user(test_session, "owner@example.com")
        other = _user(test_session, "other@example.com")
        repo = DomainRepository(test_session)
        repo.create(domain_name="old.com", user_id=owner.id, created_at=BASE_TIME)
        repo.create(
            domain_name="new.com", user_id=owner.id, created_at=BASE_TIME + timedelta(hours=1)
        )
        repo.create(domain_name="theirs.com", user_id=other.id)

        assert [d.domain_name for d in repo.list_for_owner(owner.id)] == ["new.com", "old.com"]

    def test_get_for_owner_checks_owner(self, test_session):
        owner = _user(test_session, "owner@example.com")
        other = _user(test_session, "other@example.com")
        repo = DomainRepository(test_session)
        domain = repo.create(domain_name="example.com", user_id=owner.id)

        assert repo.get_for_owner(domain.id, owner.id) is domain
        assert repo.get_for_owner(domain.id, other.id) is None

    def test_owner_has_domain(self, test_session):
        owner = _user(test_session, "owner@example.com")
        other = _user(test_session, "other@example.com")
        repo = DomainRepository(test_session)
        repo.create(domain_name="example.com", user_id=owner.id)

        assert repo.owner_has_domain(owner.id, "example.com")
        assert not repo.owner_has_domain(other.id, "example.com")

    def test_same_name_allowed_for_different_owners(self, test_session):
        first = _user(test_session, "first@example.com")
        second = _user(test_session, "second@example.com")
        repo = DomainRepository(test_session)
        repo.create(domain_name="shared.com", user_id=first.id)
        repo.create(domain_name="shared.com", user_id=second.id)

        assert repo.exists_where(domain_name="shared.com", user_id=first.id)
        assert repo.exists_where(domain_name="shared.com", user_id=second.id)

    def test_duplicate_for_same_owner_violates_constraint(self, test_session):
        owner = _user(test_session, "owner@example.com")
        repo = DomainRepository(test_session)
        repo.create(domain_name="example.com", user_id=owner.id)

        with pytest.raises(IntegrityError):
            repo.create(domain_name="example.com", user_id=owner.id)
        test_session.rollback()

    def test_new_domain_defaults_to_active(self, test_session):
        owner = _user(test_session, "owner@example.com")
        domain = DomainRepository(test_session).create(domain_name="example.com", user_id=owner.id)
        assert domain.status == "active"

    def test_deleting_user_removes_domains(self, test_session):
        owner = _user(test_session, "owner@example.com")
        keeper = _user(test_session, "keeper@example.com")
        domains = DomainRepository(test_session)
        domains.create(domain_name="a.com", user_id=owner.id)
        domains.create(domain_name="b.com", user_id=owner.id)
        domains.create(domain_name="c.com", user_id=keeper.id)

        deleted = UserRepository(test_session).delete(owner.id)

        assert deleted is owner
        assert test_session.query(Domain).filter(Domain.user_id == owner.id).count() == 0
        assert domains.count() == 1

    def test_domain_requires_existing_owner(self, test_session):
        with pytest.raises(IntegrityError):
            DomainRepository(test_session).create(domain_name="a.com", user_id=uuid.uuid4())
        test_session.rollback()

    def test_delete_missing_returns_none(self, test_session):
        assert UserRepository(test_session).delete(uuid.uuid4()) is None
        assert test_session.query(User).count() == 0
