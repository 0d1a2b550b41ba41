"""Environment variable adapter.

Purpose
-------
Read ``LIB_SCRIPT_LOG_*`` variables into the settings layer that sits between
the settings file and explicit arguments.

Key behaviours
--------------
* Enforces a prefix (``default_env_prefix``) so only relevant keys are captured.
* Strips the prefix and lower-cases the remainder
  (``LIB_SCRIPT_LOG_NETWORK_LOG_PATH`` → ``network_log_path``).
* Keeps values as text; names such as ``007`` or ``None`` survive unchanged
  and :class:`lib_script_log.domain.config.LogConfig` parses flags itself.
* Emits structured logging via :mod:`lib_script_log.observability`.
"""

from __future__ import annotations

import os
from typing import Mapping

from ...observability import log_debug


def default_env_prefix(slug: str) -> str:
    """Return the canonical environment prefix for *slug*.

    Examples
    --------
    >>> default_env_prefix('lib-script-log')
    'LIB_SCRIPT_LOG'
    """

    return slug.replace("-", "_").upper()


class DefaultEnvLoader:
    """Load environment variables that belong to the settings namespace."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ if environ is not None else os.environ

    def load(self, prefix: str) -> dict[str, str]:
        """Return a flat mapping of the variables carrying *prefix*.

        Parameters
        ----------
        prefix:
            Prefix filter (upper-case). The loader appends ``_`` if missing.

        Side Effects
        ------------
        Emits ``env_variables_loaded`` debug events with the collected keys.

        Examples
        --------
        >>> env = {
        ...     'DEMO_MODE': 'SilentMode',
        ...     'DEMO_DISABLE_FILE_LOGGING': 'true',
        ...     'OTHER': 'x',
        ... }
        >>> DefaultEnvLoader(environ=env).load('DEMO')
        {'mode': 'SilentMode', 'disable_file_logging': 'true'}
        """

        prefix = f"{prefix}_" if prefix and not prefix.endswith("_") else prefix
        collected: dict[str, str] = {}
        for key, value in self._environ.items():
            if prefix and not key.startswith(prefix):
                continue
            stripped = key[len(prefix) :] if prefix else key
            if not stripped:
                continue
            collected[stripped.lower()] = value
        log_debug("env_variables_loaded", layer="env", path=None, keys=sorted(collected.keys()))
        return collected


__all__ = ["DefaultEnvLoader", "default_env_prefix"]
