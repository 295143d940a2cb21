"""Integration tests for AccountService over the Django store.

Run with: pytest tests/test_account_service.py -v
"""

import pytest
from django.contrib.auth.hashers import check_password
from django.db import transaction
from django.db.models import QuerySet

from eventhub import models as orm
from eventhub.domain import UserId
from eventhub.domain.errors import (
    DuplicateEmailError,
    LastAdminError,
    PermissionDeniedError,
)
from eventhub.stores.django_store import DjangoStore
from eventhub.wiring import build_services


@pytest.fixture
def accounts():
    return build_services().accounts


@pytest.mark.django_db
class TestRegistration:
    """Tests for register and authenticate against the database."""

    def test_register_persists_hashed_password(self, accounts):
        user_id = accounts.register("Ana", "Ana@Example.com", "pw123")

        row = orm.User.objects.get(pk=user_id.value)
        assert row.email == "ana@example.com"
        assert not row.is_admin
        assert check_password("pw123", row.password)

    def test_duplicate_email_rejected(self, accounts):
        accounts.register("Ana", "ana@example.com", "pw")
        with pytest.raises(DuplicateEmailError):
            accounts.register("Ana 2", "ana@example.com", "pw")
        assert orm.User.objects.count() == 1

    def test_unique_constraint_maps_to_duplicate_email(self):
        store = DjangoStore()
        store.create_user(name="Ana", email="ana@example.com", password="x")
        with pytest.raises(DuplicateEmailError):
            store.create_user(name="Ana", email="ana@example.com", password="x")

    def test_authenticate_round_trip(self, accounts):
        user_id = accounts.register("Ana", "ana@example.com", "pw")
        assert accounts.authenticate("ana@example.com", "pw").id == user_id


@pytest.mark.django_db
class TestAccountAdministration:
    """Tests for delete and set_admin_status against the database."""

    def test_delete_user_cascades(self, accounts, make_user, make_event):
        admin = make_user(is_admin=True)
        ana = make_user()
        bob = make_user()
        ana_event = make_event(ana)
        bob_event = make_event(bob)
        orm.Enrollment.objects.create(user=bob, event=ana_event)
        orm.Enrollment.objects.create(user=ana, event=bob_event)

        accounts.delete(admin.id, ana.id)

        assert not orm.User.objects.filter(pk=ana.id).exists()
        assert not orm.Event.objects.filter(pk=ana_event.id).exists()
        assert orm.Event.objects.filter(pk=bob_event.id).exists()
        assert orm.Enrollment.objects.count() == 0

    def test_store_reports_cascade_counts(self, make_user, make_event):
        ana = make_user()
        bob = make_user()
        event = make_event(ana)
        make_event(ana)
        orm.Enrollment.objects.create(user=bob, event=event)

        result = DjangoStore().delete_user(UserId(ana.id))

        assert result.count("user") == 1
        assert result.count("event") == 2
        assert result.count("enrollment") == 1

    def test_delete_user_locks_organized_events(self, make_user, make_event, monkeypatch):
        organizer = make_user()
        make_event(organizer)
        locked_models = []
        original = QuerySet.select_for_update

        def recording(queryset, *args, **kwargs):
            locked_models.append(queryset.model)
            return original(queryset, *args, **kwargs)

        monkeypatch.setattr(QuerySet, "select_for_update", recording)
        with transaction.atomic():
            result = DjangoStore().delete_user(UserId(organizer.id))

        assert orm.Event in locked_models
        assert result.count("event") == 1

    def test_last_admin_survives(self, accounts, make_user):
        admin = make_user(is_admin=True)
        with pytest.raises(LastAdminError):
            accounts.delete(admin.id, admin.id)
        assert orm.User.objects.filter(pk=admin.id).exists()

    def test_non_admin_cannot_delete_others(self, accounts, make_user):
        make_user(is_admin=True)
        ana = make_user()
        bob = make_user()
        with pytest.raises(PermissionDeniedError):
            accounts.delete(ana.id, bob.id)

    def test_set_admin_status_persists(self, accounts, make_user):
        admin = make_user(is_admin=True)
        ana = make_user()

        accounts.set_admin_status(admin.id, ana.id, True)
        ana.refresh_from_db()
        assert ana.is_admin

        accounts.set_admin_status(ana.id, admin.id, False)
        admin.refresh_from_db()
        assert not admin.is_admin

    def test_list_is_ordered_by_id(self, accounts, make_user):
        first = make_user()
        second = make_user()
        assert [u.id.value for u in accounts.list_users()] == [first.id, second.id]
