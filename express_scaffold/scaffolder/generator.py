"""Project generation: precondition checks, starter copy, customization.

Takes a :class:`GenerationRequest` and produces a ready-to-run Express
service directory.  The raw copy of the starter tree happens here; every
decision about what changes in the copy is made by the pipeline.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel
from rich.console import Console

from express_scaffold.utils import ensure_dir, print_step
from express_scaffold.utils import console as default_console

from .errors import PreconditionViolation, TemplateCorruptionError
from .models import GenerationPlan, GenerationRequest
from .pipeline import CustomizationPipeline, PipelineResult
from .resolver import resolve
from .templates import TemplateRenderer

if TYPE_CHECKING:
    from express_scaffold.config import ScaffoldConfig


class GenerationResult(BaseModel):
    """Outcome of a successful generation."""

    project_root: Path
    plan: GenerationPlan
    pipeline: PipelineResult


class ProjectGenerator:
    """Scaffolds one project for one request.

    Given a ``GenerationRequest``, ``generate`` will:
    - refuse to touch an existing directory
    - copy the starter tree for the requested language variant
    - run the customization pipeline over the copy

    A failure after the copy leaves the partially customized directory in
    place; there is no cleanup.
    """

    def __init__(
        self,
        request: GenerationRequest,
        config: "ScaffoldConfig | None" = None,
        console: Console | None = None,
    ) -> None:
        if config is None:
            from express_scaffold.config import ScaffoldConfig

            config = ScaffoldConfig()
        self.request = request
        self.config = config
        self.plan = resolve(request)
        self.renderer = TemplateRenderer(config.snippets_dir)
        self.console = console or default_console

    # -- Public API --------------------------------------------------------

    async def generate(self, output_dir: str | Path | None = None) -> GenerationResult:
        """Generate the project under *output_dir*.

        Args:
            output_dir: Parent directory; a subdirectory named after the app
                is created inside it.  Defaults to ``config.output_dir``.

        Returns:
            The project root, the plan and the pipeline's record of the run.

        Raises:
            PreconditionViolation: The target directory already exists.
            TemplateCorruptionError: The starter tree is missing or broken.
        """
        parent = Path(output_dir) if output_dir is not None else self.config.output_dir
        project_root = parent / self.request.app_name

        if project_root.exists():
            raise PreconditionViolation(f"Directory {project_root} already exists!")

        starter = self.config.starter_path(self.request.language_variant)
        if not starter.is_dir():
            raise TemplateCorruptionError(starter, "starter template directory is missing")

        await asyncio.to_thread(ensure_dir, parent)
        await asyncio.to_thread(shutil.copytree, starter, project_root)
        print_step(
            f"Copied {self.request.language_variant.value} starter to {project_root}",
            self.console,
        )

        pipeline = CustomizationPipeline(
            self.plan, project_root, renderer=self.renderer, console=self.console
        )
        result = await pipeline.run()

        return GenerationResult(project_root=project_root, plan=self.plan, pipeline=result)
