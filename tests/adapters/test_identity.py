from __future__ import annotations

import pytest

from lib_script_log.adapters.identity.default import DefaultIdentityProvider


def _raise_os_error() -> bool:
    raise OSError("token query failed")


@pytest.mark.parametrize(
    ("platform", "user", "admin", "expected"),
    [
        ("linux", "ada", False, "User"),
        ("linux", "root", True, "Admin"),
        ("win32", "ada", True, "Admin"),
        ("win32", "SYSTEM", False, "SYSTEM"),
        ("win32", "BUILD01$", False, "SYSTEM"),
    ],
)
def test_user_type_classification(platform: str, user: str, admin: bool, expected: str) -> None:
    provider = DefaultIdentityProvider(platform=platform, hostname="host", user_name=user, is_admin=lambda: admin)
    assert provider.resolve().user_type == expected


def test_probe_failure_yields_unknown() -> None:
    provider = DefaultIdentityProvider(platform="linux", hostname="h", user_name="ada", is_admin=_raise_os_error)
    assert provider.resolve().user_type == "Unknown"


def test_hostname_is_shortened() -> None:
    provider = DefaultIdentityProvider(
        platform="linux", hostname="build01.corp.example", user_name="ada", is_admin=lambda: False
    )
    context = provider.resolve()
    assert context.computer_name == "build01"
    assert context.full_user_context == "User-ada"


def test_empty_hostname_falls_back_to_environment() -> None:
    provider = DefaultIdentityProvider(
        platform="win32",
        env={"COMPUTERNAME": "WINBOX"},
        hostname="",
        user_name="ada",
        is_admin=lambda: False,
    )
    assert provider.resolve().computer_name == "WINBOX"


def test_user_name_falls_back_to_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    def _broken() -> str:
        raise OSError("no login name")

    monkeypatch.setattr("getpass.getuser", _broken)
    provider = DefaultIdentityProvider(platform="linux", env={"USER": "envuser"}, hostname="h", is_admin=lambda: False)
    assert provider.resolve().user_name == "envuser"


def test_live_resolution_never_raises() -> None:
    context = DefaultIdentityProvider().resolve()
    assert context.user_type in {"User", "Admin", "SYSTEM", "Unknown"}
    assert context.user_name
    assert context.computer_name
