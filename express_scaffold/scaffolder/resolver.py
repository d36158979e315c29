"""Variant resolution: the single source of truth for variant-dependent paths."""

from __future__ import annotations

from .models import (
    VARIANT_IMPORT_STYLES,
    GenerationPlan,
    GenerationRequest,
    LanguageVariant,
)


# variant -> (file extension, source root, lib directory)
_VARIANT_LAYOUTS: dict[LanguageVariant, tuple[str, str, str]] = {
    LanguageVariant.JAVASCRIPT: ("js", ".", "lib"),
    LanguageVariant.TYPESCRIPT: ("ts", "src", "src/lib"),
}


def resolve(request: GenerationRequest) -> GenerationPlan:
    """Derive the generation plan for *request*.

    Pure and total: both enums are closed, so every well-formed request maps
    to exactly one plan.
    """
    variant = request.language_variant
    extension, source_root, lib_dir = _VARIANT_LAYOUTS[variant]
    return GenerationPlan(
        request=request,
        file_extension=extension,
        source_root=source_root,
        lib_dir=lib_dir,
        import_style=VARIANT_IMPORT_STYLES[variant],
    )
