"""Application-layer settings precedence.

Purpose
-------
Combine the settings layers (defaults, settings file, environment, explicit
arguments) into one flat mapping and remember which layer supplied each key.
Free of I/O so alternative composition roots can reuse it.

Contents
    - ``merge_settings``: public entry point driven by a simple loop.
    - ``settings_section``: picks the ``[script_log]`` table when present.
    - ``normalise_key``: canonical spelling of a setting name.

System Role
-----------
Receives layer payloads from :func:`lib_script_log.core.load_settings`; the
result feeds :meth:`lib_script_log.domain.config.LogConfig.from_settings`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final, Iterable

from ..domain.config import SourceInfo
from ..observability import log_debug

SETTINGS_SECTION: Final[str] = "script_log"

RECOGNISED_KEYS: Final[frozenset[str]] = frozenset(
    {
        "base_path",
        "job_name",
        "parent_script_name",
        "custom_log_path",
        "network_log_path",
        "mode",
        "disable_file_logging",
        "wrapper_names",
    }
)


def merge_settings(
    layers: Iterable[tuple[str, Mapping[str, object], str | None]],
) -> tuple[dict[str, object], dict[str, SourceInfo]]:
    """Merge settings *layers* honouring precedence and provenance.

    Parameters
    ----------
    layers:
        Iterable of ``(layer_name, mapping, source_path)`` tuples ordered from
        lowest to highest precedence.

    Returns
    -------
    tuple[dict[str, object], dict[str, SourceInfo]]
        ``(merged, provenance)``. Unknown keys are dropped.

    Examples
    --------
    >>> merged, meta = merge_settings([
    ...     ("file", {"script_log": {"mode": "SilentMode", "job_name": "Job1"}}, "log.toml"),
    ...     ("env", {"mode": "EnableDebug"}, None),
    ... ])
    >>> merged["mode"], meta["mode"]["layer"], meta["job_name"]["path"]
    ('EnableDebug', 'env', 'log.toml')
    """

    merged: dict[str, object] = {}
    meta: dict[str, SourceInfo] = {}
    for layer, payload, path in layers:
        for raw_key, value in settings_section(payload).items():
            key = normalise_key(raw_key)
            if key not in RECOGNISED_KEYS:
                log_debug("setting_ignored", layer=layer, path=path, key=str(raw_key))
                continue
            merged[key] = value
            meta[key] = {"layer": layer, "path": path, "key": key}
    return merged, meta


def settings_section(payload: Mapping[str, object]) -> Mapping[str, object]:
    """Return the ``[script_log]`` table of *payload*, or *payload* itself."""

    section = payload.get(SETTINGS_SECTION)
    if isinstance(section, Mapping):
        return section
    return payload


def normalise_key(key: object) -> str:
    """Lower-case *key* and turn dashes into underscores.

    Examples
    --------
    >>> normalise_key("Network-Log-Path")
    'network_log_path'
    """

    return str(key).strip().lower().replace("-", "_")


__all__ = ["RECOGNISED_KEYS", "SETTINGS_SECTION", "merge_settings", "normalise_key", "settings_section"]
