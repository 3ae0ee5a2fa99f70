"""Data transfer objects shared by the authentication layers."""

from authgate.dtos.auth_result import AuthenticationResult, AuthenticationStatus, LoginMode
from authgate.dtos.user_record import AccountStatus, Credentials, UserRecord

__all__ = [
    "AccountStatus",
    "AuthenticationResult",
    "AuthenticationStatus",
    "Credentials",
    "LoginMode",
    "UserRecord",
]
