"""Template-customization pipeline.

Runs over a starter tree that has already been copied into the project root:

    TEMPLATE_COPIED -> MANIFEST_PATCHED -> DATA_ACCESS_SYNTHESIZED
        -> ENTRY_POINT_PATCHED -> ENV_AUGMENTED -> COMPLETE

When no data-access library was chosen the run goes straight from
MANIFEST_PATCHED to COMPLETE.  Each step reads its input, transforms it and
writes it back before the next step starts.  Nothing is retried and nothing
is rolled back: the first error propagates and leaves the tree as it is.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path, PurePosixPath

from pydantic import BaseModel, Field
from rich.console import Console

from express_scaffold.utils import print_step
from express_scaffold.utils import console as default_console

from .entrypoint import EntryPointPatcher
from .env import augment_env
from .errors import TemplateCorruptionError
from .manifest import patch_manifest, rename_manifest
from .models import DataAccessChoice, GenerationPlan, ProjectManifest
from .synthesizer import DataAccessSynthesizer
from .templates import TemplateRenderer, read_text, write_text


class PipelineStage(str, Enum):
    """States the pipeline moves through, in order."""
    TEMPLATE_COPIED = "template_copied"
    MANIFEST_PATCHED = "manifest_patched"
    DATA_ACCESS_SYNTHESIZED = "data_access_synthesized"
    ENTRY_POINT_PATCHED = "entry_point_patched"
    ENV_AUGMENTED = "env_augmented"
    COMPLETE = "complete"


class PipelineResult(BaseModel):
    """What a completed run did."""

    project_root: Path
    stages: list[PipelineStage] = Field(default_factory=list)
    written: list[str] = Field(default_factory=list, description="Relative paths written")


class CustomizationPipeline:
    """Applies the customization steps for one plan to one project root.

    Attributes:
        plan: Resolved generation plan.
        project_root: Directory holding the freshly copied starter template.
        stage: The last state reached.
    """

    def __init__(
        self,
        plan: GenerationPlan,
        project_root: str | Path,
        renderer: TemplateRenderer | None = None,
        console: Console | None = None,
    ) -> None:
        self.plan = plan
        self.project_root = Path(project_root)
        self.renderer = renderer or TemplateRenderer()
        self.synthesizer = DataAccessSynthesizer(self.renderer)
        self.entry_patcher = EntryPointPatcher(self.renderer)
        self.console = console or default_console
        self.stage = PipelineStage.TEMPLATE_COPIED
        self._result = PipelineResult(
            project_root=self.project_root, stages=[PipelineStage.TEMPLATE_COPIED]
        )

    async def run(self) -> PipelineResult:
        """Execute every step for the plan, strictly in order."""
        choice = self.plan.choice

        await self._patch_manifest()

        if choice != DataAccessChoice.NONE:
            await self._synthesize_data_access()
            await self._patch_entry_point()
            await self._augment_env()

        self._advance(PipelineStage.COMPLETE)
        return self._result

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    async def _patch_manifest(self) -> None:
        path = self.plan.manifest_path
        manifest = ProjectManifest.from_json(await self._read(path), path)
        rename_manifest(manifest, self.plan.app_name)
        patch_manifest(manifest, self.plan.choice)
        await self._write(path, manifest.to_json())
        self._advance(PipelineStage.MANIFEST_PATCHED, f"Updated {path}")

    async def _synthesize_data_access(self) -> None:
        result = self.synthesizer.synthesize(self.plan, self.plan.choice)
        for artifact in result.artifacts:
            await self._write(PurePosixPath(artifact.path), artifact.content)
        written = ", ".join(a.path for a in result.artifacts)
        self._advance(PipelineStage.DATA_ACCESS_SYNTHESIZED, f"Generated {written}")

    async def _patch_entry_point(self) -> None:
        path = self.plan.entry_point_path
        patched = self.entry_patcher.patch(await self._read(path), self.plan, self.plan.choice)
        await self._write(path, patched)
        self._advance(PipelineStage.ENTRY_POINT_PATCHED, f"Patched {path}")

    async def _augment_env(self) -> None:
        path = self.plan.env_path
        augmented = augment_env(await self._read(path), self.plan.choice)
        await self._write(path, augmented)
        self._advance(PipelineStage.ENV_AUGMENTED, f"Updated {path}")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _advance(self, stage: PipelineStage, message: str | None = None) -> None:
        self.stage = stage
        self._result.stages.append(stage)
        if message:
            print_step(message, self.console)

    async def _read(self, relative: PurePosixPath) -> str:
        try:
            return await read_text(self.project_root / relative)
        except FileNotFoundError as exc:
            raise TemplateCorruptionError(relative, "expected template file is missing") from exc

    async def _write(self, relative: PurePosixPath, content: str) -> None:
        await write_text(self.project_root / relative, content)
        self._result.written.append(relative.as_posix())
