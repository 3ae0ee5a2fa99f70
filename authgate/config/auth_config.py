"""Resolve authentication settings from the process environment and .env files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Iterable, Mapping, Optional, Union

from authgate.dtos.auth_result import LoginMode

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def read_env_file(path: Path) -> Dict[str, str]:
    """Parse ``KEY=VALUE`` lines; comments, blank lines and missing files yield nothing."""

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError:
        return {}
    values: Dict[str, str] = {}
    for line in lines:
        key, separator, value = line.partition("=")
        key = key.strip()
        if not separator or not key or key.startswith("#"):
            continue
        values[key] = value.strip().strip("\"'")
    return values


class AuthConfiguration:
    """Login and SQL Server settings; the process environment overrides .env files.

    Args:
        env_files: Files to read, relative paths resolved from the project root.
        environ: Mapping used instead of ``os.environ``. Intended for tests.
    """

    DEFAULT_ENV_FILES: tuple[str, ...] = (".env",)
    LOGIN_WITH_EMAIL_KEY = "AUTH_LOGIN_WITH_EMAIL"
    CONNECTION_STRING_KEY = "AUTH_SQLSERVER_CONNECTION_STRING"
    ITERATIONS_KEY = "AUTH_PASSWORD_ITERATIONS"
    DEFAULT_ITERATIONS = 480_000
    TRUTHY_VALUES = frozenset({"1", "true", "yes", "on"})

    def __init__(
        self,
        env_files: Optional[Iterable[Union[str, Path]]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self._values: Dict[str, str] = {}
        for candidate in env_files if env_files is not None else self.DEFAULT_ENV_FILES:
            self._values.update(read_env_file(PROJECT_ROOT / candidate))
        self._values.update(os.environ if environ is None else environ)

    def get_login_mode(self) -> LoginMode:
        """Return the identifier field users log in with.

        Returns:
            ``LoginMode.EMAIL`` when ``AUTH_LOGIN_WITH_EMAIL`` holds a truthy value,
            ``LoginMode.USERNAME`` otherwise.
        """

        raw = self._values.get(self.LOGIN_WITH_EMAIL_KEY, "").strip().lower()
        return LoginMode.EMAIL if raw in self.TRUTHY_VALUES else LoginMode.USERNAME

    def get_connection_string(self) -> Optional[str]:
        """Return the SQL Server connection string or ``None`` when unset."""

        candidate = self._values.get(self.CONNECTION_STRING_KEY, "").strip()
        return candidate or None

    def get_password_iterations(self) -> int:
        """Return the PBKDF2 iteration count used for new password hashes."""

        raw = self._values.get(self.ITERATIONS_KEY, "").strip()
        if not raw:
            return self.DEFAULT_ITERATIONS
        try:
            iterations = int(raw)
        except ValueError:
            return self.DEFAULT_ITERATIONS
        return iterations if iterations > 0 else self.DEFAULT_ITERATIONS
