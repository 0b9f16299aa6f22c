"""
Output kinds — the two compiler output conventions protogen supports.

``csharp`` emits exactly one file per schema, placed next to it.
``cpp`` emits a header/body pair, placed in a ``generate/`` folder
beside the schema with a ``.pb`` infix.
"""

from __future__ import annotations

from collections.abc import Mapping

from protogen.core.models.generation import OutputKind
from protogen.core.models.project import OutputKindOverride

# Subdirectory that receives paired artifacts
GENERATED_SUBDIR = "generate"

CSHARP = OutputKind(
    name="csharp",
    flag="csharp_out",
    expected_count=1,
    extensions=(".cs",),
    description="Single C# source file next to the schema",
)

CPP = OutputKind(
    name="cpp",
    flag="cpp_out",
    expected_count=2,
    subdir=GENERATED_SUBDIR,
    suffix=".pb",
    extensions=(".h", ".cc"),
    description="Header/body pair under generate/",
)

BUILTIN_KINDS: dict[str, OutputKind] = {k.name: k for k in (CSHARP, CPP)}

# Project language (lower-cased) → kind name
LANGUAGE_KINDS: dict[str, str] = {
    "csharp": "csharp",
    "c#": "csharp",
    "cs": "csharp",
    "cpp": "cpp",
    "c++": "cpp",
    "vc": "cpp",
}


def apply_override(kind: OutputKind, overrides: Mapping[str, OutputKindOverride] | None) -> OutputKind:
    """Return ``kind`` with any project-level override for it applied."""
    if not overrides:
        return kind
    for name, override in overrides.items():
        if name.strip().lower() == kind.name:
            update = override.model_dump(exclude_none=True)
            return kind.model_copy(update=update) if update else kind
    return kind


def unknown_overrides(overrides: Mapping[str, OutputKindOverride] | None) -> list[str]:
    """Override names that match no built-in kind."""
    return sorted(n for n in (overrides or {}) if n.strip().lower() not in BUILTIN_KINDS)


def get_kind(name: str, overrides: Mapping[str, OutputKindOverride] | None = None) -> OutputKind | None:
    """Look up an output kind by name."""
    kind = BUILTIN_KINDS.get(name.strip().lower())
    return apply_override(kind, overrides) if kind else None


def kind_for_language(
    language: str | None,
    overrides: Mapping[str, OutputKindOverride] | None = None,
) -> OutputKind | None:
    """Map a project's declared source language to its output kind.

    Returns None for languages with no generator support; such items
    are skipped rather than failed.
    """
    if not language:
        return None
    name = LANGUAGE_KINDS.get(language.strip().lower())
    return apply_override(BUILTIN_KINDS[name], overrides) if name else None
