import logging
from pathlib import Path

import pytest

CE_IMPORTS = """import (
	"context"

	cloudevents "github.com/cloudevents/sdk-go/v2"
	"github.com/cloudevents/sdk-go/v2/protocol"
)
"""


@pytest.fixture
def go_file():
    """Build Go source for package `pkg` with the CloudEvents import block and the given body."""

    def make(body: str, *, pkg: str = "widgets", imports: str = CE_IMPORTS) -> str:
        return f"package {pkg}\n\n{imports}\n{body}"

    return make


@pytest.fixture
def go_module(tmp_path: Path):
    """Write a go.mod plus `.go` files under tmp_path; returns the app dir."""

    def make(files: dict[str, str], *, module: str = "example.com/fn") -> Path:
        app = tmp_path / "app"
        app.mkdir(exist_ok=True)
        (app / "go.mod").write_text(f"module {module}\n\ngo 1.22\n", encoding="utf-8")
        for rel, text in files.items():
            p = app / rel
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(text, encoding="utf-8")
        return app

    return make


@pytest.fixture(autouse=True)
def _clear_ce_env(monkeypatch):
    # Detect configuration comes from the process environment.
    for name in ("CE_GO_PACKAGE", "CE_GO_FUNCTION", "CE_PROTOCOL", "CE_GO_PARSE_ERRORS", "CE_GO_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    # caplog only sees records that reach the root logger.
    monkeypatch.setattr(logging.getLogger("gofuncdetect"), "propagate", True)
    yield
