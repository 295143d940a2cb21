"""Account service - identity invariants live here.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or raise domain errors

Admin-set checks read the admins with row locks inside the same transaction
as the write they guard, so two concurrent demotions or deletions cannot
both observe "another admin remains" and leave the system without one.
"""

import logging

from django.contrib.auth.hashers import check_password, make_password

from eventhub.domain import User, UserId
from eventhub.domain.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    LastAdminError,
    NotFoundError,
    PermissionDeniedError,
    SelfModificationError,
)
from eventhub.services.common import coerce_id, require_text
from eventhub.stores.interfaces import AccountStore

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AccountService:
    """Service for registration, login and account administration."""

    def __init__(self, store: AccountStore) -> None:
        self._store = store

    def register(self, name: str, email: str, password: str) -> UserId:
        """Create a non-admin account and return its id.

        Raises:
            ValidationError: If name, email or password is blank.
            DuplicateEmailError: If the email is already registered.
        """
        name = require_text(name, "name")
        email = normalize_email(require_text(email, "email"))
        require_text(password, "password")
        # Hashed outside the transaction.
        encoded = make_password(password)

        with self._store.atomic():
            if self._store.get_user_by_email(email) is not None:
                raise DuplicateEmailError()
            user = self._store.create_user(name=name, email=email, password=encoded)

        logger.info("Registered user %s", user.id)
        return user.id

    def ensure_admin(self, name: str, email: str, password: str) -> tuple[User, bool]:
        """Seed an admin account unless one with this email already exists.

        Returns the account and whether it was created. An existing account
        is returned unchanged.
        """
        name = require_text(name, "name")
        email = normalize_email(require_text(email, "email"))
        require_text(password, "password")
        encoded = make_password(password)

        with self._store.atomic():
            existing = self._store.get_user_by_email(email)
            if existing is not None:
                return existing, False
            user = self._store.create_user(
                name=name, email=email, password=encoded, is_admin=True
            )

        logger.info("Seeded admin %s", user.id)
        return user, True

    def authenticate(self, email: str, password: str) -> User:
        """Return the account matching the credentials.

        Raises:
            InvalidCredentialsError: For blank input, unknown email or wrong
                password alike.
        """
        if not isinstance(email, str) or not isinstance(password, str):
            raise InvalidCredentialsError()
        if not email.strip() or not password.strip():
            raise InvalidCredentialsError()

        user = self._store.get_user_by_email(normalize_email(email))
        if user is None:
            # Run the hasher anyway so timing does not reveal unknown emails.
            make_password(password)
            raise InvalidCredentialsError()
        if not check_password(password, user.password):
            raise InvalidCredentialsError()
        return user

    def get(self, user_id: UserId | int) -> User:
        """Return an account.

        Raises:
            NotFoundError: If the account does not exist.
        """
        uid = coerce_id(UserId, user_id, "user_id")
        user = self._store.get_user(uid)
        if user is None:
            raise NotFoundError("user", uid)
        return user

    def list_users(self) -> list[User]:
        """Return every account ordered by id."""
        return self._store.list_users()

    def list_for_admin(self, requester_id: UserId | int) -> list[User]:
        """Return every account, provided the requester is an admin.

        Raises:
            PermissionDeniedError: If the requester is unknown or not an admin.
        """
        requester_id = coerce_id(UserId, requester_id, "requester_id")
        requester = self._store.get_user(requester_id)
        if requester is None or not requester.is_admin:
            raise PermissionDeniedError("list_accounts")
        return self._store.list_users()

    def delete(self, requester_id: UserId | int, target_id: UserId | int) -> None:
        """Delete an account with its enrollments and organized events.

        Raises:
            PermissionDeniedError: If the requester is unknown, or neither the
                target nor an admin.
            NotFoundError: If the target does not exist.
            LastAdminError: If the target is the only admin.
        """
        requester_id = coerce_id(UserId, requester_id, "requester_id")
        target_id = coerce_id(UserId, target_id, "target_id")

        with self._store.atomic():
            requester = self._store.get_user(requester_id)
            if requester is None:
                raise PermissionDeniedError("delete_account")

            admin_ids: set[UserId] | None = None
            if requester_id != target_id or requester.is_admin:
                admin_ids = {admin.id for admin in self._store.lock_admins()}
                if requester_id != target_id and requester_id not in admin_ids:
                    logger.debug("User %s may not delete user %s", requester_id, target_id)
                    raise PermissionDeniedError("delete_account")

            target = self._store.get_user(target_id, lock=True)
            if target is None:
                raise NotFoundError("user", target_id)
            if target.is_admin and admin_ids is None:
                # Promoted after the requester was read.
                admin_ids = {admin.id for admin in self._store.lock_admins()}
            if target.is_admin and len(admin_ids) <= 1:
                logger.debug("Refusing to delete last admin %s", target_id)
                raise LastAdminError(target_id)

            result = self._store.delete_user(target_id)

        logger.info(
            "User %s deleted user %s (events=%d, enrollments=%d)",
            requester_id,
            target_id,
            result.count("event"),
            result.count("enrollment"),
        )

    def set_admin_status(
        self,
        requester_id: UserId | int,
        target_id: UserId | int,
        new_status: bool,
    ) -> None:
        """Grant or revoke admin privilege. Setting the current value is a no-op.

        Raises:
            PermissionDeniedError: If the requester is not an admin.
            SelfModificationError: If the requester targets themselves.
            NotFoundError: If the target does not exist.
            LastAdminError: If the demotion would leave no admin.
        """
        requester_id = coerce_id(UserId, requester_id, "requester_id")
        target_id = coerce_id(UserId, target_id, "target_id")
        new_status = bool(new_status)

        with self._store.atomic():
            admins = self._store.lock_admins()
            admin_ids = {admin.id for admin in admins}
            if requester_id not in admin_ids:
                logger.debug("Non-admin %s tried to change admin status", requester_id)
                raise PermissionDeniedError("set_admin_status")
            if requester_id == target_id:
                raise SelfModificationError(requester_id)

            target = self._store.get_user(target_id, lock=True)
            if target is None:
                raise NotFoundError("user", target_id)
            if target.is_admin == new_status:
                return
            # Backstop only: the requester is an admin other than the target.
            if not new_status and len(admin_ids - {target_id}) < 1:
                raise LastAdminError(target_id)

            self._store.set_admin(target_id, new_status)

        logger.info(
            "User %s set admin=%s on user %s", requester_id, new_status, target_id
        )
