"""User registration service."""

import logging

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.accounts.models import DEFAULT_PROFILE_ICON, PROFILE_ICONS
from .exceptions import UserRegistrationError

User = get_user_model()

logger = logging.getLogger(__name__)


def register_user(
    *,
    nickname: str,
    password: str,
    profile_icon: str = DEFAULT_PROFILE_ICON
) -> User:
    """
    Register a new user.

    Args:
        nickname: Unique nickname used to log in
        password: User's password (will be hashed)
        profile_icon: One of PROFILE_ICONS

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the nickname is taken or the icon is unknown
    """
    nickname = User.objects.normalize_nickname(nickname)
    if profile_icon not in PROFILE_ICONS:
        raise UserRegistrationError(f"Unknown profile icon: {profile_icon}")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                nickname=nickname,
                password=password,
                profile_icon=profile_icon,
            )
    except IntegrityError:
        raise UserRegistrationError(f"Nickname '{nickname}' is already taken")

    logger.info("Registered user %s", user.id)
    return user
