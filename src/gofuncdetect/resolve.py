"""Import resolution and signature shapes.

`ImportTable` maps the qualifier used in a type (`event` in `event.Event`) to
the import path it names in one file. For imports without an explicit rename
the qualifier is the imported package's declared name, which is not visible
from the importing file; it is approximated by the last path segment unless
the caller supplies the declared name. This is a known approximation: e.g.
`github.com/cloudevents/sdk-go/v2` declares `package cloudevents`, so code
that imports it unnamed and writes `cloudevents.Event` only resolves when the
name is supplied through `package_names`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from .model import Arg, Declaration, ImportSpec, ParsedFile, Signature, TypeRef


def implicit_alias(import_path: str, package_names: Mapping[str, str] | None = None) -> str:
    """Return the qualifier an unnamed import introduces."""
    if package_names and import_path in package_names:
        return package_names[import_path]
    return import_path.rstrip("/").rsplit("/", 1)[-1]


@dataclass(frozen=True)
class ImportTable:
    aliases: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_imports(
        cls,
        imports: Iterable[ImportSpec],
        *,
        package_names: Mapping[str, str] | None = None,
    ) -> "ImportTable":
        aliases: dict[str, str] = {}
        for spec in imports:
            if spec.name in {"_", "."}:
                # Blank imports bind nothing; dot imports bind unqualified names.
                continue
            alias = spec.name if spec.name is not None else implicit_alias(spec.path, package_names)
            # Duplicate qualifiers do not compile; keep the first one.
            aliases.setdefault(alias, spec.path)
        return cls(aliases=aliases)

    @classmethod
    def from_file(cls, parsed: ParsedFile, *, package_names: Mapping[str, str] | None = None) -> "ImportTable":
        return cls.from_imports(parsed.imports, package_names=package_names)

    def lookup(self, alias: str) -> str | None:
        return self.aliases.get(alias)

    def resolve(self, ref: TypeRef) -> Arg:
        """Resolve a type as written to an `Arg`. Never fails.

        An unqualified type resolves to a builtin (`import_path == ""`). A
        qualifier that no import in the file binds stays part of the name
        (`Arg("", "context.Context")`), so it never equals an imported type.
        """
        if ref.alias is None:
            return Arg(import_path="", name=ref.name, by_reference=ref.by_reference)
        path = self.aliases.get(ref.alias)
        if path is None:
            return Arg(import_path="", name=f"{ref.alias}.{ref.name}", by_reference=ref.by_reference)
        return Arg(import_path=path, name=ref.name, by_reference=ref.by_reference)


def build_signature(decl: Declaration, imports: ImportTable) -> Signature:
    """Resolve a declaration's parameter and result types, preserving order."""
    return Signature(
        inputs=tuple(imports.resolve(p) for p in decl.params),
        outputs=tuple(imports.resolve(r) for r in decl.results),
    )
