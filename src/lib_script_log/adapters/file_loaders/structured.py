"""Settings file loaders.

Purpose
-------
Turn an optional settings document into a mapping the settings merge
understands. Loaders are thin wrappers around ``tomllib``/``json``/
``yaml.safe_load`` so error handling and observability live in one place.

Contents
--------
* :class:`BaseFileLoader` – shared reading and mapping validation.
* :class:`TOMLFileLoader` / :class:`JSONFileLoader` / :class:`YAMLFileLoader`.
* :func:`loader_for` – pick the loader matching a file suffix.

System Role
-----------
Invoked by :func:`lib_script_log.core.load_settings` before the settings
layers are merged.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[assignment]

from ...domain.errors import InvalidFormat, NotFound
from ...observability import log_debug, log_error

try:
    import yaml  # type: ignore[import-not-found]
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    yaml = None  # type: ignore[assignment]


class BaseFileLoader:
    """Common utilities shared by the settings file loaders."""

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`NotFound` when the file is missing."""

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"Settings file not found: {path}")
        payload = file_path.read_bytes()
        log_debug("settings_file_read", layer="file", path=path, size=len(payload))
        return payload

    @staticmethod
    def _ensure_mapping(data: object, *, path: str) -> Mapping[str, object]:
        """Ensure *data* behaves like a mapping, otherwise raise ``InvalidFormat``.

        Examples
        --------
        >>> BaseFileLoader._ensure_mapping({"mode": "Off"}, path="demo")
        {'mode': 'Off'}
        >>> BaseFileLoader._ensure_mapping([1], path="demo")
        Traceback (most recent call last):
        ...
        lib_script_log.domain.errors.InvalidFormat: Settings file demo did not produce a mapping
        """

        if not isinstance(data, Mapping):
            raise InvalidFormat(f"Settings file {path} did not produce a mapping")
        return data  # type: ignore[return-value]


class TOMLFileLoader(BaseFileLoader):
    """Load TOML settings documents."""

    def load(self, path: str) -> Mapping[str, object]:
        """Return the mapping parsed from the TOML file at *path*.

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile('w', suffix='.toml', delete=False, encoding='utf-8')
        >>> _ = tmp.write('[script_log]\\njob_name = "Job1"')
        >>> tmp.close()
        >>> TOMLFileLoader().load(tmp.name)["script_log"]["job_name"]
        'Job1'
        >>> Path(tmp.name).unlink()
        """

        try:
            data = tomllib.loads(self._read(path).decode("utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:  # type: ignore[attr-defined]
            log_error("settings_file_invalid", layer="file", path=path, format="toml", error=str(exc))
            raise InvalidFormat(f"Invalid TOML in {path}: {exc}") from exc
        result = self._ensure_mapping(data, path=path)
        log_debug("settings_file_loaded", layer="file", path=path, format="toml")
        return result


class JSONFileLoader(BaseFileLoader):
    """Load JSON settings documents."""

    def load(self, path: str) -> Mapping[str, object]:
        try:
            data = json.loads(self._read(path))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            log_error("settings_file_invalid", layer="file", path=path, format="json", error=str(exc))
            raise InvalidFormat(f"Invalid JSON in {path}: {exc}") from exc
        result = self._ensure_mapping(data, path=path)
        log_debug("settings_file_loaded", layer="file", path=path, format="json")
        return result


class YAMLFileLoader(BaseFileLoader):
    """Load YAML settings documents when PyYAML is available.

    Raises
    ------
    NotFound
        When PyYAML is not installed.
    """

    def load(self, path: str) -> Mapping[str, object]:
        if yaml is None:
            raise NotFound("PyYAML is required for YAML settings support")
        try:
            data = yaml.safe_load(self._read(path))  # type: ignore[operator]
        except yaml.YAMLError as exc:  # type: ignore[attr-defined]
            log_error("settings_file_invalid", layer="file", path=path, format="yaml", error=str(exc))
            raise InvalidFormat(f"Invalid YAML in {path}: {exc}") from exc
        if data is None:
            data = {}
        result = self._ensure_mapping(data, path=path)
        log_debug("settings_file_loaded", layer="file", path=path, format="yaml")
        return result


_LOADERS: dict[str, BaseFileLoader] = {
    ".toml": TOMLFileLoader(),
    ".json": JSONFileLoader(),
    ".yaml": YAMLFileLoader(),
    ".yml": YAMLFileLoader(),
}


def loader_for(path: str | Path) -> BaseFileLoader:
    """Return the loader registered for the suffix of *path*.

    Raises
    ------
    InvalidFormat
        When the suffix is not one of ``.toml``, ``.json``, ``.yaml``, ``.yml``.

    Examples
    --------
    >>> type(loader_for("settings.TOML")).__name__
    'TOMLFileLoader'
    """

    suffix = Path(path).suffix.lower()
    try:
        return _LOADERS[suffix]
    except KeyError as exc:
        raise InvalidFormat(f"Unsupported settings file type: {path}") from exc


__all__ = ["JSONFileLoader", "TOMLFileLoader", "YAMLFileLoader", "loader_for"]
