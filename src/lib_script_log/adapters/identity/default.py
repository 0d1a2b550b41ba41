"""Process identity adapter.

Purpose
-------
Implement :class:`lib_script_log.application.ports.IdentityProvider`: report
the account type (``User``, ``Admin``, ``SYSTEM`` or ``Unknown``), the
account name and the short host name of the running process.

Key behaviours
--------------
* Windows: ``SYSTEM`` for the LocalSystem account or machine accounts ending
  in ``$``; ``Admin`` when ``shell32.IsUserAnAdmin`` says so.
* POSIX: ``Admin`` when the effective uid is ``0``.
* Any failure while probing privileges yields ``Unknown`` instead of raising.
* All platform facts are injectable for deterministic tests.
"""

from __future__ import annotations

import getpass
import os
import socket
import sys
from typing import Callable, Mapping

from ...domain.events import UserContext
from ...observability import log_debug

USER_TYPE_USER = "User"
USER_TYPE_ADMIN = "Admin"
USER_TYPE_SYSTEM = "SYSTEM"
USER_TYPE_UNKNOWN = "Unknown"

_UNKNOWN_USER = "UnknownUser"
_UNKNOWN_HOST = "UnknownHost"


class DefaultIdentityProvider:
    """Resolve :class:`UserContext` from the operating system.

    Parameters
    ----------
    platform:
        Override :data:`sys.platform` (``"win32"``, ``"linux"``, ...).
    env:
        Environment mapping used for fallbacks; defaults to :data:`os.environ`.
    hostname / user_name:
        Fixed values that bypass the operating-system lookups.
    is_admin:
        Callable returning the elevation state; bypasses the platform probe.

    Examples
    --------
    >>> provider = DefaultIdentityProvider(platform="linux", hostname="build01.example.org",
    ...                                    user_name="ada", is_admin=lambda: False)
    >>> provider.resolve()
    UserContext(user_type='User', user_name='ada', computer_name='build01')
    """

    def __init__(
        self,
        *,
        platform: str | None = None,
        env: Mapping[str, str] | None = None,
        hostname: str | None = None,
        user_name: str | None = None,
        is_admin: Callable[[], bool] | None = None,
    ) -> None:
        self._platform = platform or sys.platform
        self._env = env if env is not None else os.environ
        self._hostname = hostname
        self._user_name = user_name
        self._is_admin = is_admin

    def resolve(self) -> UserContext:
        """Return a freshly computed :class:`UserContext`."""

        user_name = self._resolve_user_name()
        return UserContext(
            user_type=self._resolve_user_type(user_name),
            user_name=user_name,
            computer_name=self._resolve_computer_name(),
        )

    def _resolve_user_name(self) -> str:
        if self._user_name:
            return self._user_name
        try:
            name = getpass.getuser()
        except Exception:  # noqa: BLE001 - getpass raises platform-specific errors
            name = self._env.get("USER") or self._env.get("USERNAME") or ""
        return name or _UNKNOWN_USER

    def _resolve_computer_name(self) -> str:
        raw = self._hostname if self._hostname is not None else _system_hostname()
        short = raw.split(".", 1)[0] if raw else ""
        if short:
            return short
        return self._env.get("COMPUTERNAME") or self._env.get("HOSTNAME") or _UNKNOWN_HOST

    def _resolve_user_type(self, user_name: str) -> str:
        if self._is_windows and _is_windows_system_account(user_name):
            return USER_TYPE_SYSTEM
        try:
            elevated = self._is_admin() if self._is_admin is not None else self._probe_admin()
        except (AttributeError, OSError) as exc:
            log_debug("identity_probe_failed", platform=self._platform, error=str(exc))
            return USER_TYPE_UNKNOWN
        return USER_TYPE_ADMIN if elevated else USER_TYPE_USER

    @property
    def _is_windows(self) -> bool:
        return self._platform.startswith("win")

    def _probe_admin(self) -> bool:
        if self._is_windows:
            import ctypes

            return bool(ctypes.windll.shell32.IsUserAnAdmin())  # type: ignore[attr-defined]
        return os.geteuid() == 0


def _is_windows_system_account(user_name: str) -> bool:
    """Return ``True`` for LocalSystem and machine accounts.

    Examples
    --------
    >>> _is_windows_system_account("SYSTEM"), _is_windows_system_account("BUILD01$")
    (True, True)
    >>> _is_windows_system_account("ada")
    False
    """

    return user_name.upper() == "SYSTEM" or user_name.endswith("$")


def _system_hostname() -> str:
    try:
        return socket.gethostname() or ""
    except OSError:
        return ""


__all__ = [
    "DefaultIdentityProvider",
    "USER_TYPE_ADMIN",
    "USER_TYPE_SYSTEM",
    "USER_TYPE_UNKNOWN",
    "USER_TYPE_USER",
]
