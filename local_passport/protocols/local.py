"""
Local Authentication Protocol

The most common way for a site to authenticate users: an email (or
username) plus a password. This module registers brand new users,
gives a password to users who signed up through a third-party provider,
and validates login attempts.

Failures that the user should see are reported as flash messages on the
request, using i18n keys (Error.Passport.*) that the front end
translates.
"""

import logging
from typing import Optional

from local_passport.config import AuthSettings, get_settings
from local_passport.domain.identifiers import is_email
from local_passport.domain.passport import Passport, Protocol
from local_passport.domain.request import AuthRequest
from local_passport.domain.user import User
from local_passport.errors import MissingFieldError, NotAuthenticatedError, ValidationError
from local_passport.ports.passport_port import PassportStorePort
from local_passport.ports.user_port import UserStorePort

logger = logging.getLogger(__name__)


class Flash:
    """Flash message keys reported by the local protocol."""
    EMAIL_MISSING = "Error.Passport.Email.Missing"
    PASSWORD_MISSING = "Error.Passport.Password.Missing"
    EMAIL_EXISTS = "Error.Passport.Email.Exists"
    USER_EXISTS = "Error.Passport.User.Exists"
    PASSWORD_INVALID = "Error.Passport.Password.Invalid"
    EMAIL_NOT_FOUND = "Error.Passport.Email.NotFound"
    USERNAME_NOT_FOUND = "Error.Passport.Username.NotFound"
    PASSWORD_WRONG = "Error.Passport.Password.Wrong"
    PASSWORD_NOT_SET = "Error.Passport.Password.NotSet"
    USER_INACTIVE = "Error.Passport.User.Inactive"


class LocalProtocol:
    """
    Username/password authentication over a user store and a passport store.

    Example:
        protocol = LocalProtocol(MemoryUserStore(), MemoryPassportStore())

        request = AuthRequest(params={"email": "a@b.io", "password": "hunter22"})
        user = protocol.register(request)

        user = protocol.login(AuthRequest(), "a@b.io", "hunter22")
    """

    name = Protocol.LOCAL.value

    def __init__(
        self,
        users: UserStorePort,
        passports: PassportStorePort,
        settings: Optional[AuthSettings] = None,
    ):
        self._users = users
        self._passports = passports
        self._settings = settings or get_settings()

    def _new_passport(self, user: User, password: Optional[str]) -> Passport:
        passport = Passport.create_local(
            user_id=user.user_id,
            password=password,
            min_length=self._settings.min_password_length,
        )
        return self._passports.create(passport)

    def register(self, request: AuthRequest) -> User:
        """
        Register a new user from the request's email and password.

        The user is created first, then given a local passport. If the
        passport cannot be created the user is destroyed again so no
        password-less account is left behind.

        Args:
            request: Request carrying ``email``, ``password`` and
                optionally ``username`` params

        Returns:
            The newly registered user

        Raises:
            MissingFieldError: If email or password was not entered
            ValidationError: If the user or passport failed validation
        """
        email = request.param("email")
        password = request.param("password")
        username = request.param("username")

        if not email:
            request.flash("error", Flash.EMAIL_MISSING)
            raise MissingFieldError("email", "No email was entered.")

        if not password:
            request.flash("error", Flash.PASSWORD_MISSING)
            raise MissingFieldError("password", "No password was entered.")

        attributes = {"email": email}
        if username:
            attributes["username"] = username

        try:
            user = self._users.create(attributes)
        except ValidationError as exc:
            if "email" in exc.invalid_attributes:
                request.flash("error", Flash.EMAIL_EXISTS)
            else:
                request.flash("error", Flash.USER_EXISTS)
            logger.info("local.register.rejected", extra={"invalid": sorted(exc.invalid_attributes)})
            raise

        try:
            self._new_passport(user, password)
        except Exception as exc:
            if isinstance(exc, ValidationError):
                request.flash("error", Flash.PASSWORD_INVALID)
            logger.info("local.register.rollback", extra={"user_id": user.user_id})
            # A failed rollback wins over the passport error
            self._users.destroy(user.user_id)
            raise

        logger.info("local.register.success", extra={"user_id": user.user_id})
        return user

    def connect(self, request: AuthRequest) -> User:
        """
        Give the signed-in user a local passport if they lack one.

        Users who registered through a third-party provider never set a
        password; this lets them add one. A user who already has a local
        passport is returned unchanged.

        Raises:
            NotAuthenticatedError: If no user is signed in
            ValidationError: If the password is missing or invalid
        """
        user = request.user
        if user is None:
            raise NotAuthenticatedError("A signed-in user is required to connect a local passport.")

        passport = self._passports.find_one(Protocol.LOCAL, user.user_id)
        if passport is None:
            self._new_passport(user, request.param("password"))
            logger.info("local.connect.created", extra={"user_id": user.user_id})

        return user

    def login(self, request: AuthRequest, identifier: str, password: str) -> Optional[User]:
        """
        Validate a login attempt.

        The identifier is treated as an email when it looks like one and
        as a username otherwise. Any failure is flashed on the request
        and reported as None.

        Returns:
            The authenticated user, or None if the attempt was rejected
        """
        if is_email(identifier):
            user = self._users.find_one(email=identifier)
            not_found = Flash.EMAIL_NOT_FOUND
        else:
            user = self._users.find_one(username=identifier)
            not_found = Flash.USERNAME_NOT_FOUND

        if user is None:
            request.flash("error", not_found)
            logger.info("local.login.unknown_user")
            return None

        passport = self._passports.find_one(Protocol.LOCAL, user.user_id)
        if passport is None:
            request.flash("error", Flash.PASSWORD_NOT_SET)
            logger.info("local.login.no_password", extra={"user_id": user.user_id})
            return None

        if not passport.validate_password(password):
            request.flash("error", Flash.PASSWORD_WRONG)
            logger.info("local.login.wrong_password", extra={"user_id": user.user_id})
            return None

        logger.info("local.login.success", extra={"user_id": user.user_id})
        return user
