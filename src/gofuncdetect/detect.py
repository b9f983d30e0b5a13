"""Find the CloudEvents handler function in Go source files."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

from .catalog import CATALOG, is_supported
from .errors import ConfigError, ParseError
from .model import Declaration, FunctionDetails, Signature
from .resolve import ImportTable, build_signature
from .source.parser import parse_source

logger = logging.getLogger(__name__)

PARSE_ERROR_POLICIES = ("abort", "skip")


def _eligible(decl: Declaration) -> bool:
    # Only exported, plain (non-method, non-generic) functions can be entry points.
    return decl.exported and not decl.is_method and not decl.type_params


class Detector:
    """Match the top-level functions of Go files against a signature catalog.

    `package_names` optionally maps import paths to their declared package
    names, replacing the last-path-segment guess for unnamed imports.
    """

    def __init__(
        self,
        catalog: Sequence[Signature] = CATALOG,
        *,
        package_names: Mapping[str, str] | None = None,
    ) -> None:
        self.catalog = tuple(catalog)
        self.package_names = dict(package_names or {})

    def check_file(self, path: str, source: str, name_filter: str = "") -> FunctionDetails | None:
        """Return the first supported exported function in `source`, or None.

        Declarations are visited in source order. When `name_filter` is set,
        supported functions with a different name are passed over. Raises
        `ParseError` if the file does not parse.
        """
        parsed = parse_source(source, path=path)
        imports = ImportTable.from_file(parsed, package_names=self.package_names)
        for decl in parsed.declarations:
            if not _eligible(decl):
                continue
            sig = build_signature(decl, imports)
            if not is_supported(sig, self.catalog):
                logger.debug("%s:%d: %s has unsupported signature %s", path, decl.line, decl.name, sig)
                continue
            if name_filter and decl.name != name_filter:
                logger.debug("%s:%d: %s has a supported signature but is not %r", path, decl.line, decl.name, name_filter)
                continue
            return FunctionDetails(name=decl.name, package=parsed.package, signature=sig)
        return None

    def detect(
        self,
        files: Iterable[tuple[str, str]],
        name_filter: str = "",
        *,
        on_parse_error: str = "abort",
    ) -> FunctionDetails | None:
        """Check `(path, source)` pairs in order and return the first hit.

        `on_parse_error="abort"` re-raises the first `ParseError`;
        `"skip"` logs it and moves on to the next file.
        """
        if on_parse_error not in PARSE_ERROR_POLICIES:
            raise ConfigError(
                f"invalid parse error policy {on_parse_error!r} (expected one of: {', '.join(PARSE_ERROR_POLICIES)})"
            )
        for path, source in files:
            try:
                details = self.check_file(path, source, name_filter)
            except ParseError as e:
                if on_parse_error == "abort":
                    raise
                logger.warning("skipping unparsable file: %s", e)
                continue
            if details is not None:
                return details
        return None


_DEFAULT_DETECTOR = Detector()


def check_file(path: str, source: str, name_filter: str = "") -> FunctionDetails | None:
    """`Detector.check_file` with the default catalog."""
    return _DEFAULT_DETECTOR.check_file(path, source, name_filter)
