"""gofuncdetect: find a CloudEvents handler function in Go source without compiling it."""

from __future__ import annotations

from . import errors
from .catalog import CATALOG, describe_catalog, is_supported
from .detect import Detector, check_file
from .model import Arg, FunctionDetails, Signature
from .source.parser import parse_source

__all__ = [
    "CATALOG",
    "Arg",
    "Detector",
    "FunctionDetails",
    "Signature",
    "check_file",
    "describe_catalog",
    "errors",
    "is_supported",
    "parse_source",
]
