from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import NoReturn

from .catalog import describe_catalog
from .config import EnvConfig
from .detect import Detector
from .errors import ConfigError, GoFuncDetectError, GoModError, ParseError
from .gomod import candidate_files, read_module_path

logger = logging.getLogger("gofuncdetect")

# Buildpack detect exit codes.
DETECT_PASS = 0
DETECT_FAIL = 100

_LOG_FORMAT = "[%(asctime)s] %(levelname)-8s %(name)s: %(message)s"
_HANDLER_NAME = "gofuncdetect-stderr"


def _configure_logging(level: int) -> None:
    # Replace our handler on each run so it always writes to the current stderr.
    for h in list(logger.handlers):
        if h.get_name() == _HANDLER_NAME:
            logger.removeHandler(h)
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    logger.setLevel(level)


def _version() -> str:
    try:
        return importlib.metadata.version("gofuncdetect")
    except Exception:
        # Best-effort fallback for editable/local-only contexts.
        return "0.0.0"


def _fail() -> NoReturn:
    print(describe_catalog())
    raise SystemExit(DETECT_FAIL)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gofuncdetect",
        description="Buildpack detect step: find a CloudEvents handler function in a Go package.",
    )
    parser.add_argument("platform_dir", help="Buildpack platform directory.")
    parser.add_argument("build_plan", help="Build plan file to append the function requirement to.")
    parser.add_argument("--app-dir", default=".", help="Application root containing go.mod (default: .).")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as e:
        # The buildpack lifecycle treats any non-zero, non-100 code as an error.
        raise SystemExit(DETECT_FAIL if e.code else DETECT_PASS) from None

    try:
        cfg = EnvConfig.from_env()
    except ConfigError as e:
        _configure_logging(logging.INFO)
        logger.error("invalid configuration: %s", e)
        _fail()
    _configure_logging(cfg.logging_level)
    logger.debug("args: %s", argv if argv is not None else sys.argv[1:])

    app_dir = Path(args.app_dir)
    try:
        module_path = read_module_path(app_dir)
    except GoModError as e:
        logger.error("%s", e)
        _fail()

    full_package = cfg.full_package(module_path)
    logger.info("using relative path to look for function: %s", cfg.package_dir)
    logger.info("using plan file: %s", args.build_plan)

    files = candidate_files(app_dir, cfg.package_dir)
    if not files:
        logger.error("no .go files found in %s", app_dir / cfg.package_dir)
        _fail()

    def sources():
        for f in files:
            logger.info("processing file %s", f)
            try:
                text = f.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.error("failed to read %s: %s", f, e)
                _fail()
            yield str(f), text

    detector = Detector()
    try:
        details = detector.detect(sources(), cfg.function, on_parse_error=cfg.parse_errors)
    except ParseError as e:
        logger.error("failed to check file: %s", e)
        _fail()

    if details is None:
        _fail()

    logger.info(
        "found supported function %r in package %r signature %r",
        details.name,
        details.package,
        str(details.signature),
    )
    details = replace(details, package=full_package)

    from .plan import write_plan

    try:
        write_plan(Path(args.build_plan), details, protocol=cfg.protocol)
    except GoFuncDetectError as e:
        logger.error("%s", e)
        _fail()
    raise SystemExit(DETECT_PASS)


if __name__ == "__main__":
    main()
