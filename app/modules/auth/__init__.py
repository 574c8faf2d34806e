from .users import (
    MIN_PASSWORD_LENGTH,
    UserCreate,
    UserManager,
    UserRead,
    UserUpdate,
    auth_backend,
    current_active_user,
    fastapi_users,
    get_jwt_strategy,
)

__all__ = [
    "MIN_PASSWORD_LENGTH",
    "UserCreate",
    "UserManager",
    "UserRead",
    "UserUpdate",
    "auth_backend",
    "current_active_user",
    "fastapi_users",
    "get_jwt_strategy",
]
