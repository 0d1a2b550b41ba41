"""Environment loader adapter tests for prefix filtering and verbatim values."""

from __future__ import annotations

from pathlib import Path

from hypothesis import given, settings
from hypothesis import strategies as st

from lib_script_log.adapters.env.default import DefaultEnvLoader, default_env_prefix
from lib_script_log.core import load_settings
from lib_script_log.domain.config import LogConfig


def test_default_env_prefix() -> None:
    assert default_env_prefix("lib-script-log") == "LIB_SCRIPT_LOG"


def test_env_loader_strips_prefix_and_keeps_text() -> None:
    environ = {
        "LIB_SCRIPT_LOG_MODE": "EnableDebug",
        "LIB_SCRIPT_LOG_DISABLE_FILE_LOGGING": "TRUE",
        "LIB_SCRIPT_LOG_JOB_NAME": "007",
        "LIB_SCRIPT_LOG_BASE_PATH": "/srv/logs",
        "LIB_SCRIPT_LOG_": "ignored",
        "OTHER": "ignored",
    }
    data = DefaultEnvLoader(environ=environ).load("LIB_SCRIPT_LOG")
    assert data == {
        "mode": "EnableDebug",
        "disable_file_logging": "TRUE",
        "job_name": "007",
        "base_path": "/srv/logs",
    }


def test_empty_environment_is_not_replaced_by_process_environment() -> None:
    assert DefaultEnvLoader(environ={}).load("LIB_SCRIPT_LOG") == {}


def test_numeric_and_none_like_names_survive_into_config() -> None:
    environ = {
        "LIB_SCRIPT_LOG_BASE_PATH": "/srv/logs",
        "LIB_SCRIPT_LOG_JOB_NAME": "007",
        "LIB_SCRIPT_LOG_PARENT_SCRIPT_NAME": "None",
        "LIB_SCRIPT_LOG_DISABLE_FILE_LOGGING": "true",
    }
    values, _ = load_settings(environ=environ)
    config = LogConfig.from_settings(values)

    assert config.job_name == "007"
    assert config.parent_script_name == "None"
    assert config.base_path == Path("/srv/logs")
    assert config.disable_file_logging is True


VALUES = st.sampled_from(["0", "007", "-3", "true", "false", "none", "null", "Off", "//share/logs"])
KEYS = st.sampled_from(["MODE", "JOB_NAME", "NETWORK_LOG_PATH", "WRAPPER_NAMES"])


@settings(deadline=None)
@given(st.dictionaries(KEYS, VALUES, max_size=4))
def test_env_loader_returns_values_verbatim(entries) -> None:
    environ = {f"DEMO_{key}": value for key, value in entries.items()}
    environ["IGNORED"] = "1"
    payload = DefaultEnvLoader(environ=environ).load("DEMO")

    assert payload == {key.lower(): value for key, value in entries.items()}
