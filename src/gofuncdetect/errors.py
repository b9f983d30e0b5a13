"""Domain-specific errors for gofuncdetect."""

from __future__ import annotations


class GoFuncDetectError(Exception):
    """Base error for gofuncdetect."""


class ParseError(GoFuncDetectError):
    """Raised when a Go source file is not syntactically valid."""

    def __init__(self, path: str, message: str, *, line: int = 0, column: int = 0) -> None:
        self.path = path
        self.message = message
        self.line = line
        self.column = column
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.line:
            return f"{self.path}:{self.line}:{self.column}: {self.message}"
        return f"{self.path}: {self.message}"


class ConfigError(GoFuncDetectError):
    """Raised when environment or caller configuration is invalid."""


class GoModError(GoFuncDetectError):
    """Raised when the module path cannot be read from go.mod."""


class PlanWriteError(GoFuncDetectError):
    """Raised when the build plan cannot be written."""

