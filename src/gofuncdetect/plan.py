from __future__ import annotations

import json
from pathlib import Path

from .errors import PlanWriteError
from .model import FunctionDetails

CAPABILITY = "ce-go-function"


def _toml_str(value: str) -> str:
    # JSON string escapes are valid TOML basic-string escapes.
    return json.dumps(value, ensure_ascii=False)


def render_plan(details: FunctionDetails, *, protocol: str) -> str:
    """Render the build plan block that provides and requires the function capability."""
    return "\n".join(
        [
            "",
            "[[provides]]",
            f"name = {_toml_str(CAPABILITY)}",
            "[[requires]]",
            f"name = {_toml_str(CAPABILITY)}",
            "[requires.metadata]",
            f"package = {_toml_str(details.package)}",
            f"function = {_toml_str(details.name)}",
            f"protocol = {_toml_str(protocol)}",
            "",
        ]
    )


def write_plan(plan_file: Path, details: FunctionDetails, *, protocol: str) -> None:
    """Append the plan block to `plan_file`, creating it if needed."""
    plan_file = Path(plan_file)
    try:
        with plan_file.open("a", encoding="utf-8") as f:
            f.write(render_plan(details, protocol=protocol))
    except OSError as e:
        raise PlanWriteError(f"failed to write build plan {plan_file}: {e}") from e
