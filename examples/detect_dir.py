"""Example: report the CloudEvents handler of a local Go package.

Run (after `pip install -e .`):
  python examples/detect_dir.py path/to/go/package [FunctionName]
"""

from __future__ import annotations

import sys
from pathlib import Path

import gofuncdetect
from gofuncdetect.catalog import RECOMMENDED_ALIASES


def main() -> int:
    pkg_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(".")
    name = sys.argv[2] if len(sys.argv) > 2 else ""

    files = [(str(p), p.read_text(encoding="utf-8")) for p in sorted(pkg_dir.glob("*.go"))]
    details = gofuncdetect.Detector().detect(files, name, on_parse_error="skip")
    if details is None:
        print(gofuncdetect.describe_catalog())
        return 1

    print(f"{details.package}.{details.name}: {details.signature.render(RECOMMENDED_ALIASES)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
