"""Pydantic v2 models for the template-customization pipeline.

Defines the request a user makes, the plan derived from it, the in-memory
view of the copied ``package.json`` and the artifacts the synthesizer emits.
Requests, plans and artifacts are frozen; only the manifest is mutable.
"""

from __future__ import annotations

import json
import re
from enum import Enum
from pathlib import PurePosixPath
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidationError,
    field_validator,
    model_validator,
)

from .errors import PreconditionViolation, TemplateCorruptionError


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class LanguageVariant(str, Enum):
    """Source-syntax flavour of the generated project."""
    JAVASCRIPT = "javascript"
    TYPESCRIPT = "typescript"


class DataAccessChoice(str, Enum):
    """Persistence client whose boilerplate is generated."""
    NONE = "none"
    MONGOOSE = "mongoose"
    PRISMA = "prisma"
    SEQUELIZE = "sequelize"


class ImportStyle(str, Enum):
    """Module syntax used by generated code."""
    COMMONJS = "commonjs"
    ESM = "esm"


VARIANT_IMPORT_STYLES: dict[LanguageVariant, ImportStyle] = {
    LanguageVariant.JAVASCRIPT: ImportStyle.COMMONJS,
    LanguageVariant.TYPESCRIPT: ImportStyle.ESM,
}

_APP_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


# ---------------------------------------------------------------------------
# Request & plan
# ---------------------------------------------------------------------------

class GenerationRequest(BaseModel):
    """What the user asked for.  Fully determines every downstream decision."""

    model_config = ConfigDict(frozen=True)

    app_name: str = Field(..., description="Directory and package name of the new project")
    language_variant: LanguageVariant = Field(default=LanguageVariant.JAVASCRIPT)
    data_access_choice: DataAccessChoice = Field(default=DataAccessChoice.NONE)

    @field_validator("app_name")
    @classmethod
    def _check_app_name(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("App name cannot be empty")
        if not _APP_NAME_RE.match(value):
            raise ValueError(
                f"App name {value!r} may only contain letters, digits, '.', '_' "
                "and '-', and must start with a letter or digit"
            )
        return value

    @classmethod
    def create(
        cls,
        app_name: str,
        language_variant: LanguageVariant | str = LanguageVariant.JAVASCRIPT,
        data_access_choice: DataAccessChoice | str = DataAccessChoice.NONE,
    ) -> "GenerationRequest":
        """Build a request, reporting bad input as :class:`PreconditionViolation`."""
        try:
            return cls(
                app_name=app_name,
                language_variant=language_variant,
                data_access_choice=data_access_choice,
            )
        except ValidationError as exc:
            messages = "; ".join(err["msg"] for err in exc.errors())
            raise PreconditionViolation(messages) from exc


class GenerationPlan(BaseModel):
    """Resolved, read-only view of a request plus every variant-dependent path.

    Paths are POSIX-style and relative to the project root.
    """

    model_config = ConfigDict(frozen=True)

    request: GenerationRequest
    file_extension: str
    source_root: str
    lib_dir: str
    import_style: ImportStyle

    @model_validator(mode="after")
    def _check_import_style(self) -> "GenerationPlan":
        expected = VARIANT_IMPORT_STYLES[self.request.language_variant]
        if self.import_style is not expected:
            raise ValueError(
                f"{self.request.language_variant.value} projects use "
                f"{expected.value} imports, not {self.import_style.value}"
            )
        return self

    @property
    def app_name(self) -> str:
        return self.request.app_name

    @property
    def variant(self) -> LanguageVariant:
        return self.request.language_variant

    @property
    def choice(self) -> DataAccessChoice:
        return self.request.data_access_choice

    @property
    def entry_point_path(self) -> PurePosixPath:
        """Main entry file, e.g. ``index.js`` or ``src/index.ts``."""
        return PurePosixPath(self.source_root) / f"index.{self.file_extension}"

    @property
    def data_access_module_path(self) -> PurePosixPath:
        """Location of the generated connection module."""
        return PurePosixPath(self.lib_dir) / f"db.{self.file_extension}"

    @property
    def data_access_import(self) -> str:
        """Module specifier the entry point uses to load the connection module."""
        relative = PurePosixPath(self.lib_dir).relative_to(PurePosixPath(self.source_root))
        return f"./{relative.as_posix()}/db"

    @property
    def manifest_path(self) -> PurePosixPath:
        return PurePosixPath("package.json")

    @property
    def env_path(self) -> PurePosixPath:
        return PurePosixPath(".env")

    @property
    def schema_path(self) -> PurePosixPath:
        return PurePosixPath("prisma") / "schema.prisma"


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------

class ProjectManifest(BaseModel):
    """In-memory ``package.json``.

    Only the name and the two dependency partitions are modelled; every other
    top-level key of the source document is carried through untouched and in
    its original position.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="")
    dependencies: dict[str, str]
    dev_dependencies: dict[str, str] = Field(default_factory=dict, alias="devDependencies")

    _source: dict[str, Any] = PrivateAttr(default_factory=dict)

    @classmethod
    def from_json(cls, text: str, path: str | PurePosixPath = "package.json") -> "ProjectManifest":
        """Parse manifest text, raising :class:`TemplateCorruptionError` when malformed."""
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as exc:
            raise TemplateCorruptionError(path, f"manifest is not valid JSON ({exc.msg})") from exc
        if not isinstance(raw, dict):
            raise TemplateCorruptionError(path, "manifest must be a JSON object")
        if not isinstance(raw.get("dependencies"), dict):
            raise TemplateCorruptionError(path, "manifest has no 'dependencies' object")
        if "devDependencies" in raw and not isinstance(raw["devDependencies"], dict):
            raise TemplateCorruptionError(path, "'devDependencies' must be an object")
        try:
            manifest = cls.model_validate(raw)
        except ValidationError as exc:
            raise TemplateCorruptionError(path, f"manifest is malformed: {exc}") from exc
        manifest._source = raw
        return manifest

    def to_dict(self) -> dict[str, Any]:
        """Return the full document with the modelled keys written back in place."""
        data = dict(self._source)
        data["name"] = self.name
        data["dependencies"] = dict(self.dependencies)
        if self.dev_dependencies or "devDependencies" in self._source:
            data["devDependencies"] = dict(self.dev_dependencies)
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False) + "\n"


# ---------------------------------------------------------------------------
# Generated output
# ---------------------------------------------------------------------------

class GeneratedArtifact(BaseModel):
    """A file produced by the pipeline, relative to the project root."""

    model_config = ConfigDict(frozen=True)

    path: str
    content: str


class SynthesisResult(BaseModel):
    """Connection module plus the optional schema file some clients need."""

    model_config = ConfigDict(frozen=True)

    primary: GeneratedArtifact
    auxiliary: Optional[GeneratedArtifact] = None

    @property
    def artifacts(self) -> list[GeneratedArtifact]:
        return [a for a in (self.primary, self.auxiliary) if a is not None]
