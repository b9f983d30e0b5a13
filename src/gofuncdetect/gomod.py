from __future__ import annotations

from pathlib import Path

from .errors import GoModError


def read_module_path(app_dir: Path) -> str:
    """Return the module path declared by `app_dir/go.mod`."""
    go_mod = Path(app_dir) / "go.mod"
    try:
        text = go_mod.read_text(encoding="utf-8")
    except OSError as e:
        raise GoModError(f"failed to read {go_mod}: {e}") from e
    for line in text.splitlines():
        line = line.split("//", 1)[0].strip()
        parts = line.split()
        if len(parts) >= 2 and parts[0] == "module":
            return parts[1].strip('"`')
    raise GoModError(f"failed to parse module path from {go_mod}")


def candidate_files(app_dir: Path, package_dir: str) -> list[Path]:
    """Return the package's `.go` files in lexical order."""
    pkg = Path(app_dir) / package_dir
    return sorted(p for p in pkg.glob("*.go") if p.is_file())
