from __future__ import annotations

import logging
import os
import posixpath
from dataclasses import dataclass
from typing import Mapping

from .detect import PARSE_ERROR_POLICIES
from .errors import ConfigError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class EnvConfig:
    """Detect-step configuration read from the buildpack environment.

    - `CE_GO_PACKAGE`: package directory relative to the app root (default `./`).
    - `CE_GO_FUNCTION`: required function name (default `Receiver`; set it to
      an empty string to accept any supported function).
    - `CE_PROTOCOL`: protocol written to the build plan (default `http`).
    - `CE_GO_PARSE_ERRORS`: `abort` (default) or `skip` unparsable files.
    - `CE_GO_LOG_LEVEL`: logging level (default `INFO`).
    """

    package: str = "./"
    function: str = "Receiver"
    protocol: str = "http"
    parse_errors: str = "abort"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "EnvConfig":
        env = os.environ if environ is None else environ
        parse_errors = env.get("CE_GO_PARSE_ERRORS", "abort").strip().lower() or "abort"
        if parse_errors not in PARSE_ERROR_POLICIES:
            raise ConfigError(
                f"CE_GO_PARSE_ERRORS must be one of {', '.join(PARSE_ERROR_POLICIES)}, got {parse_errors!r}"
            )
        log_level = env.get("CE_GO_LOG_LEVEL", "INFO").strip().upper() or "INFO"
        if log_level not in _LOG_LEVELS:
            raise ConfigError(f"CE_GO_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got {log_level!r}")
        # Unset means default; set-but-empty is meaningful for the function filter.
        return cls(
            package=env.get("CE_GO_PACKAGE", "./") or "./",
            function=env.get("CE_GO_FUNCTION", "Receiver"),
            protocol=env.get("CE_PROTOCOL", "http"),
            parse_errors=parse_errors,
            log_level=log_level,
        )

    @property
    def package_dir(self) -> str:
        """The package directory, always ending in `/`."""
        return self.package if self.package.endswith("/") else self.package + "/"

    @property
    def logging_level(self) -> int:
        return logging.getLevelName(self.log_level)

    def full_package(self, module_path: str) -> str:
        """Join the go.mod module path with the package directory."""
        if self.package_dir == "./":
            return module_path
        return module_path + "/" + posixpath.normpath(self.package_dir)
