"""Account management service."""

import logging

from django.conf import settings
from django.db import IntegrityError, transaction
from django.contrib.auth import get_user_model
from uuid import UUID

from apps.accounts.models import UserRole
from .exceptions import UserNotFoundError, UserRegistrationError, SelfDeletionError

User = get_user_model()
logger = logging.getLogger(__name__)


def _get_user(user_id):
    try:
        return User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User not found: {user_id}")


@transaction.atomic
def update_user(*, user_id: UUID, fields: dict) -> User:
    """
    Update a user's fields. A ``password`` entry is hashed before saving.

    Raises:
        UserNotFoundError: If the user does not exist
        UserRegistrationError: If the new username or email is taken
    """
    user = _get_user(user_id)

    fields = dict(fields)
    password = fields.pop('password', None)
    for name, value in fields.items():
        setattr(user, name, value)
    if password:
        user.set_password(password)

    try:
        with transaction.atomic():
            user.save()
    except IntegrityError as e:
        raise UserRegistrationError("Username or email already exists") from e

    logger.info("Updated user %s (%s)", user.email, ', '.join(sorted(fields) + (['password'] if password else [])))
    return user


@transaction.atomic
def delete_user(*, user_id: UUID, acting_user) -> None:
    """
    Delete a user account.

    Raises:
        UserNotFoundError: If the user does not exist
        SelfDeletionError: If the acting user tries to delete themselves
    """
    user = _get_user(user_id)
    if user.pk == acting_user.pk:
        raise SelfDeletionError("You cannot delete your own account")

    email = user.email
    user.delete()
    logger.info("Deleted user %s", email)


@transaction.atomic
def ensure_default_admin() -> tuple:
    """
    Create the configured default administrator unless the email is taken.

    Returns:
        Tuple of (User instance, created flag)
    """
    email = settings.DEFAULT_ADMIN_EMAIL
    existing = User.objects.filter(email__iexact=email).first()
    if existing is not None:
        return existing, False

    user = User.objects.create_superuser(
        email=email,
        password=settings.DEFAULT_ADMIN_PASSWORD,
        username=settings.DEFAULT_ADMIN_USERNAME,
        role=UserRole.ADMINISTRATOR,
    )
    logger.info("Created default administrator %s", email)
    return user, True
