"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    UserNotFoundError,
    SelfDeletionError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user
from .account_management import update_user, delete_user, ensure_default_admin

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'UserNotFoundError',
    'SelfDeletionError',
    # Services
    'register_user',
    'authenticate_user',
    'update_user',
    'delete_user',
    'ensure_default_admin',
]
