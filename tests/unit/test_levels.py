"""Level and mode vocabulary tests.

Both mappers must be total: any input, including ``None`` and non-strings,
lands on exactly one canonical member.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from lib_script_log.domain.levels import LogLevel, LogMode

EXTENDED_LEVELS = {
    "INFORMATION": LogLevel.INFO,
    "CRITICAL": LogLevel.ERROR,
    "NOTICE": LogLevel.INFO,
    "VERBOSE": LogLevel.DEBUG,
    "INFO": LogLevel.INFO,
    "WARNING": LogLevel.WARNING,
    "WARN": LogLevel.WARNING,
    "ERROR": LogLevel.ERROR,
    "DEBUG": LogLevel.DEBUG,
    "SUCCESS": LogLevel.SUCCESS,
}


@pytest.mark.parametrize(("name", "expected"), sorted(EXTENDED_LEVELS.items()))
def test_extended_vocabulary_maps_case_insensitively(name: str, expected: LogLevel) -> None:
    assert LogLevel.from_name(name) is expected
    assert LogLevel.from_name(name.lower()) is expected
    assert LogLevel.from_name(f"  {name.title()} ") is expected


def test_unknown_level_defaults_to_info() -> None:
    assert LogLevel.from_name("fatal-ish") is LogLevel.INFO
    assert LogLevel.from_name(None) is LogLevel.INFO
    assert LogLevel.from_name(42) is LogLevel.INFO
    assert LogLevel.from_name("") is LogLevel.INFO


def test_level_members_pass_through() -> None:
    for level in LogLevel:
        assert LogLevel.from_name(level) is level


@settings(deadline=None)
@given(st.one_of(st.none(), st.text(max_size=20), st.integers(), st.floats(allow_nan=True)))
def test_level_mapping_is_total(value) -> None:
    assert isinstance(LogLevel.from_name(value), LogLevel)


@settings(deadline=None)
@given(st.sampled_from(sorted(EXTENDED_LEVELS)))
def test_level_mapping_is_pure(name: str) -> None:
    assert LogLevel.from_name(name) is LogLevel.from_name(name)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("Normal", LogMode.NORMAL),
        ("EnableDebug", LogMode.ENABLE_DEBUG),
        ("debug", LogMode.ENABLE_DEBUG),
        ("verbose", LogMode.ENABLE_DEBUG),
        ("SilentMode", LogMode.SILENT),
        ("silent", LogMode.SILENT),
        ("Off", LogMode.OFF),
        ("whatever", LogMode.NORMAL),
        (None, LogMode.NORMAL),
        (False, LogMode.OFF),
        (True, LogMode.NORMAL),
    ],
)
def test_mode_mapping(name, expected: LogMode) -> None:
    assert LogMode.from_name(name) is expected


def test_off_behaves_like_silent() -> None:
    assert LogMode.OFF.console_enabled is LogMode.SILENT.console_enabled is False
    assert LogMode.OFF.debug_enabled is LogMode.SILENT.debug_enabled is False


def test_only_enable_debug_shows_debug() -> None:
    assert [mode for mode in LogMode if mode.debug_enabled] == [LogMode.ENABLE_DEBUG]
    assert LogMode.NORMAL.console_enabled is True


@settings(deadline=None)
@given(st.one_of(st.none(), st.text(max_size=20), st.integers()))
def test_mode_mapping_is_total(value) -> None:
    assert isinstance(LogMode.from_name(value), LogMode)
