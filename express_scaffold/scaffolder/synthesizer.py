"""Data-access module synthesis.

Renders the connection (or client) module for the chosen library, plus the
Prisma schema where one is required.  Each ``(variant, choice)`` pair maps to
exactly one template; the table below is the complete list of generation
paths.
"""

from __future__ import annotations

from typing import Any

from .catalog import DataAccessProfile, get_profile
from .models import (
    DataAccessChoice,
    GeneratedArtifact,
    GenerationPlan,
    LanguageVariant,
    SynthesisResult,
)
from .templates import TemplateRenderer


DATA_ACCESS_TEMPLATES: dict[tuple[LanguageVariant, DataAccessChoice], str] = {
    (LanguageVariant.JAVASCRIPT, DataAccessChoice.MONGOOSE): "data_access/javascript/mongoose.js.j2",
    (LanguageVariant.JAVASCRIPT, DataAccessChoice.PRISMA): "data_access/javascript/prisma.js.j2",
    (LanguageVariant.JAVASCRIPT, DataAccessChoice.SEQUELIZE): "data_access/javascript/sequelize.js.j2",
    (LanguageVariant.TYPESCRIPT, DataAccessChoice.MONGOOSE): "data_access/typescript/mongoose.ts.j2",
    (LanguageVariant.TYPESCRIPT, DataAccessChoice.PRISMA): "data_access/typescript/prisma.ts.j2",
    (LanguageVariant.TYPESCRIPT, DataAccessChoice.SEQUELIZE): "data_access/typescript/sequelize.ts.j2",
}

SCHEMA_TEMPLATE = "schema/schema.prisma.j2"


class DataAccessSynthesizer:
    """Produces the generated data-access files for a plan."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def synthesize(self, plan: GenerationPlan, choice: DataAccessChoice) -> SynthesisResult:
        """Render the connection module and any auxiliary schema file.

        Args:
            plan: Resolved plan; decides file location and import syntax.
            choice: A concrete data-access library.  ``NONE`` is rejected;
                the pipeline skips synthesis entirely in that case.

        Returns:
            The primary module artifact and, for Prisma, the schema artifact.
        """
        if choice == DataAccessChoice.NONE:
            raise ValueError("Nothing to synthesize for data-access choice 'none'")

        profile = get_profile(choice)
        context = _build_context(profile)
        template_name = DATA_ACCESS_TEMPLATES[(plan.variant, profile.choice)]

        primary = GeneratedArtifact(
            path=plan.data_access_module_path.as_posix(),
            content=self.renderer.render(template_name, context),
        )

        auxiliary = None
        if profile.schema_file:
            auxiliary = GeneratedArtifact(
                path=plan.schema_path.as_posix(),
                content=self.renderer.render(SCHEMA_TEMPLATE, context),
            )

        return SynthesisResult(primary=primary, auxiliary=auxiliary)


def _build_context(profile: DataAccessProfile) -> dict[str, Any]:
    return {
        "env_var": profile.env_var,
        "default_url": profile.default_url,
    }
