"""User authentication service."""

import logging

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()

logger = logging.getLogger(__name__)


@transaction.atomic
def authenticate_user(*, nickname: str, password: str) -> User:
    """
    Authenticate a user by nickname and password and stamp last_login.

    The nickname is normalized the same way as on registration. An unknown
    nickname still pays for one password hash so both failures take
    about the same time and report the same message.

    Args:
        nickname: Nickname chosen on registration
        password: Plain password to check

    Returns:
        Authenticated User instance

    Raises:
        InvalidCredentialsError: If nickname or password is wrong
        InactiveAccountError: If account is deactivated
    """
    nickname = User.objects.normalize_nickname(nickname)
    user = User.objects.select_for_update().filter(nickname=nickname).first()

    if user is None:
        User().set_password(password)
        logger.info("Failed login for unknown nickname")
        raise InvalidCredentialsError("Invalid nickname or password")

    if not user.check_password(password):
        logger.info("Failed login for user %s", user.id)
        raise InvalidCredentialsError("Invalid nickname or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    logger.info("User %s logged in", user.id)
    return user
