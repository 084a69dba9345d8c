from .user import User, RoleEnum

__all__ = [
    "User",
    "RoleEnum",
]
