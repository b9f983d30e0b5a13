"""Accepted CloudEvents handler signatures."""

from __future__ import annotations

from typing import Sequence

from .model import Arg, Signature

CE_IMPORT = "github.com/cloudevents/sdk-go/v2"
CE_PROTOCOL_IMPORT = "github.com/cloudevents/sdk-go/v2/protocol"
CONTEXT_IMPORT = "context"

EVENT = Arg(import_path=CE_IMPORT, name="Event")
EVENT_PTR = Arg(import_path=CE_IMPORT, name="Event", by_reference=True)
CONTEXT = Arg(import_path=CONTEXT_IMPORT, name="Context")
RESULT = Arg(import_path=CE_PROTOCOL_IMPORT, name="Result")
ERROR = Arg(import_path="", name="error")

# Aliases used when rendering signatures for humans; they match the import
# block printed by `describe_catalog`.
RECOMMENDED_ALIASES = {
    CONTEXT_IMPORT: "context",
    CE_IMPORT: "event",
    CE_PROTOCOL_IMPORT: "protocol",
}

CATALOG: tuple[Signature, ...] = (
    Signature(inputs=(EVENT,)),
    Signature(inputs=(EVENT,), outputs=(RESULT,)),
    Signature(inputs=(EVENT,), outputs=(ERROR,)),
    Signature(inputs=(CONTEXT, EVENT)),
    Signature(inputs=(CONTEXT, EVENT), outputs=(RESULT,)),
    Signature(inputs=(CONTEXT, EVENT), outputs=(ERROR,)),
    Signature(inputs=(EVENT,), outputs=(EVENT_PTR,)),
    Signature(inputs=(EVENT,), outputs=(EVENT_PTR, RESULT)),
    Signature(inputs=(EVENT,), outputs=(EVENT_PTR, ERROR)),
    Signature(inputs=(CONTEXT, EVENT), outputs=(EVENT_PTR,)),
    Signature(inputs=(CONTEXT, EVENT), outputs=(EVENT_PTR, RESULT)),
    Signature(inputs=(CONTEXT, EVENT), outputs=(EVENT_PTR, ERROR)),
)


def is_supported(signature: Signature, catalog: Sequence[Signature] = CATALOG) -> bool:
    """Return True if `signature` equals one of the catalog entries exactly."""
    return signature in catalog


def describe_catalog(catalog: Sequence[Signature] = CATALOG) -> str:
    """Human-readable help listing the supported signatures and the imports they assume."""
    lines = [
        "Could not find a supported function signature. Examples of supported functions are",
        "shown below, also showing the imports that you can use. The function must also be visible",
        "outside of the package (capitalized, for example, Receive vs. receive).",
        "",
        "import (",
    ]
    for path, alias in RECOMMENDED_ALIASES.items():
        if alias == path.rsplit("/", 1)[-1]:
            lines.append(f'    "{path}"')
        else:
            lines.append(f'    {alias} "{path}"')
    lines.append(")")
    lines.append("")
    lines.append("The following function signatures are supported by this builder:")
    lines.extend(sig.render(RECOMMENDED_ALIASES) for sig in catalog)
    return "\n".join(lines) + "\n"
