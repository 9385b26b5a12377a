from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
import uuid


PROFILE_ICONS = ['👤', '🐶', '🐱', '🐭', '🐹', '🐰', '🦊', '🐻', '🐼', '🐨', '🐯', '🦁']
DEFAULT_PROFILE_ICON = PROFILE_ICONS[0]


class UserManager(BaseUserManager):
    """Custom user manager for nickname-based authentication."""

    @classmethod
    def normalize_nickname(cls, nickname):
        """Nicknames are stored and looked up without surrounding whitespace."""
        return (nickname or '').strip()

    def create_user(self, nickname, password=None, **extra_fields):
        nickname = self.normalize_nickname(nickname)
        if not nickname:
            raise ValueError('Nickname is required')

        user = self.model(nickname=nickname, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, nickname, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(nickname, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Lunch club member, identified by a unique nickname."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    nickname = models.CharField(max_length=30, unique=True, db_index=True)
    profile_icon = models.CharField(
        max_length=8,
        choices=[(icon, icon) for icon in PROFILE_ICONS],
        default=DEFAULT_PROFILE_ICON,
    )

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    last_login = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'nickname'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['created_at'], name='users_created_at_idx'),
        ]

    def __str__(self):
        return self.nickname
