"""User equivalence checking."""
from .user_checker import UserChecker, check_user

__all__ = [
    'UserChecker',
    'check_user',
]
