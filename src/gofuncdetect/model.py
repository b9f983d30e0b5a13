from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class TypeRef:
    """A parameter or result type as written in source, before import resolution."""

    alias: str | None
    name: str
    by_reference: bool = False


@dataclass(frozen=True)
class Arg:
    """A resolved type. An empty `import_path` means a builtin or unqualified type."""

    import_path: str
    name: str
    by_reference: bool = False

    def render(self, aliases: Mapping[str, str] | None = None) -> str:
        prefix = "*" if self.by_reference else ""
        if not self.import_path:
            return f"{prefix}{self.name}"
        alias = (aliases or {}).get(self.import_path)
        if alias is None:
            alias = self.import_path.rsplit("/", 1)[-1]
        return f"{prefix}{alias}.{self.name}"


@dataclass(frozen=True)
class Signature:
    inputs: tuple[Arg, ...] = ()
    outputs: tuple[Arg, ...] = ()

    def render(self, aliases: Mapping[str, str] | None = None) -> str:
        """Render as Go function type text, e.g. `func(context.Context, event.Event) error`."""
        params = ", ".join(a.render(aliases) for a in self.inputs)
        text = f"func({params})"
        if len(self.outputs) == 1:
            text += " " + self.outputs[0].render(aliases)
        elif self.outputs:
            text += " (" + ", ".join(a.render(aliases) for a in self.outputs) + ")"
        return text

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class ImportSpec:
    name: str | None  # explicit rename, "." or "_"; None when unnamed
    path: str
    line: int = 0


@dataclass(frozen=True)
class Declaration:
    name: str
    params: tuple[TypeRef, ...]
    results: tuple[TypeRef, ...]
    receiver: TypeRef | None = None
    type_params: bool = False
    line: int = 0

    @property
    def exported(self) -> bool:
        # Go: an identifier is exported if its first character is an upper-case letter.
        return bool(self.name) and self.name[0].isupper()

    @property
    def is_method(self) -> bool:
        return self.receiver is not None


@dataclass(frozen=True)
class ParsedFile:
    path: str
    package: str
    imports: tuple[ImportSpec, ...]
    declarations: tuple[Declaration, ...]


@dataclass(frozen=True)
class FunctionDetails:
    name: str
    package: str
    signature: Signature
