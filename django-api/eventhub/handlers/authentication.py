"""Bearer-token authentication for the HTTP handlers.

Tokens are the user id signed with Django's TimestampSigner. The requester
identity is resolved per request and passed explicitly to the services;
nothing about the session is kept server-side.
"""

from dataclasses import dataclass

from django.conf import settings
from django.core import signing
from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.request import Request

from eventhub.domain import User, UserId
from eventhub.domain.errors import NotFoundError
from eventhub.wiring import build_services

TOKEN_SALT = "eventhub.handlers.authentication"
DEFAULT_TOKEN_MAX_AGE = 60 * 60 * 12


@dataclass(frozen=True)
class Requester:
    """The authenticated account behind a request."""

    user: User

    @property
    def id(self) -> UserId:
        return self.user.id

    @property
    def is_admin(self) -> bool:
        return self.user.is_admin

    @property
    def is_authenticated(self) -> bool:
        return True


def _signer() -> signing.TimestampSigner:
    return signing.TimestampSigner(salt=TOKEN_SALT)


def issue_token(user_id: UserId) -> str:
    return _signer().sign(str(user_id.value))


def read_token(token: str) -> UserId:
    """Return the user id carried by a token.

    Raises:
        signing.BadSignature: If the token is forged, malformed or expired.
    """
    max_age = getattr(settings, "EVENTHUB_TOKEN_MAX_AGE", DEFAULT_TOKEN_MAX_AGE)
    value = _signer().unsign(token, max_age=max_age)
    try:
        return UserId.from_string(value)
    except ValueError:
        raise signing.BadSignature("Token does not carry a user id") from None


class SignedTokenAuthentication(BaseAuthentication):
    """Authorization: Bearer <token>"""

    keyword = "Bearer"

    def authenticate(self, request: Request) -> tuple[Requester, str] | None:
        parts = get_authorization_header(request).split()
        if not parts or parts[0].lower() != self.keyword.lower().encode():
            return None
        if len(parts) != 2:
            raise exceptions.AuthenticationFailed("Invalid token header.")
        try:
            token = parts[1].decode()
            user_id = read_token(token)
        except (UnicodeError, signing.BadSignature):
            raise exceptions.AuthenticationFailed("Invalid or expired token.") from None
        try:
            user = build_services().accounts.get(user_id)
        except NotFoundError:
            raise exceptions.AuthenticationFailed("Invalid or expired token.") from None
        return Requester(user=user), token

    def authenticate_header(self, request: Request) -> str:
        return self.keyword
