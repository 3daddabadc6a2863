"""User registration service."""

import logging

from django.db import IntegrityError, transaction
from django.contrib.auth import get_user_model

from apps.accounts.models import UserRole
from .exceptions import UserRegistrationError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def register_user(
    *,
    username: str,
    email: str,
    password: str,
    role: str = UserRole.OPERATOR
) -> User:
    """
    Create an operator account.

    Args:
        username: Unique username
        email: Unique email, used to log in
        password: Password (will be hashed)
        role: Administrator, Manager or Operator

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the username or email is already taken
    """
    if User.objects.filter(username=username).exists() or User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError("Username or email already exists")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                username=username,
                role=role,
            )
    except IntegrityError as e:
        raise UserRegistrationError("Username or email already exists") from e

    logger.info("Registered %s user %s", role, user.email)
    return user
