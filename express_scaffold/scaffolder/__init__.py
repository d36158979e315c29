"""express-scaffold scaffolder -- customizes an Express starter project.

Copies the JavaScript or TypeScript starter tree and wires in the chosen
data-access library (Mongoose, Prisma, Sequelize, or none): dependencies in
``package.json``, a generated ``lib/db`` module, an import and bootstrap in
the entry point, and a connection-string line in ``.env``.

Quick usage::

    from express_scaffold.scaffolder import GenerationRequest, ProjectGenerator

    request = GenerationRequest.create("demo", "typescript", "prisma")
    result = await ProjectGenerator(request).generate("/tmp/output")
"""

from express_scaffold.scaffolder.errors import (
    PreconditionViolation,
    ScaffoldError,
    TemplateCorruptionError,
)
from express_scaffold.scaffolder.generator import GenerationResult, ProjectGenerator
from express_scaffold.scaffolder.models import (
    DataAccessChoice,
    GeneratedArtifact,
    GenerationPlan,
    GenerationRequest,
    ImportStyle,
    LanguageVariant,
    ProjectManifest,
)
from express_scaffold.scaffolder.pipeline import (
    CustomizationPipeline,
    PipelineResult,
    PipelineStage,
)
from express_scaffold.scaffolder.resolver import resolve

__all__ = [
    "CustomizationPipeline",
    "DataAccessChoice",
    "GeneratedArtifact",
    "GenerationPlan",
    "GenerationRequest",
    "GenerationResult",
    "ImportStyle",
    "LanguageVariant",
    "PipelineResult",
    "PipelineStage",
    "PreconditionViolation",
    "ProjectGenerator",
    "ProjectManifest",
    "ScaffoldError",
    "TemplateCorruptionError",
    "resolve",
]
