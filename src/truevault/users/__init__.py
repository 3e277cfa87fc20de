"""Users – user management and credential vending."""
from truevault.users.models import User, UserStatus
from truevault.users.service import UserService

__all__ = ["User", "UserService", "UserStatus"]
