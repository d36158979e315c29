"""express-scaffold configuration.

Typed configuration for the generator.  Settings use Pydantic v2 models so
they are validated at construction time and can be read from environment
variables or saved to and loaded from JSON.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from express_scaffold.scaffolder.errors import PreconditionViolation
from express_scaffold.scaffolder.models import DataAccessChoice, LanguageVariant

_PACKAGE_DIR = Path(__file__).parent

DEFAULT_STARTERS_DIR = _PACKAGE_DIR / "starters"
DEFAULT_SNIPPETS_DIR = _PACKAGE_DIR / "scaffolder" / "templates"


class ScaffoldConfig(BaseModel):
    """Global generator configuration.

    Created once by the CLI (usually via :meth:`from_env`) and passed to
    :class:`~express_scaffold.scaffolder.generator.ProjectGenerator`.
    """

    output_dir: Path = Field(default=Path("."), description="Parent of generated projects")
    starters_dir: Path = Field(
        default=DEFAULT_STARTERS_DIR,
        description="Directory with one starter tree per language variant",
    )
    snippets_dir: Path = Field(
        default=DEFAULT_SNIPPETS_DIR,
        description="Jinja2 templates for generated source files",
    )
    default_variant: LanguageVariant = Field(default=LanguageVariant.JAVASCRIPT)
    default_orm: DataAccessChoice = Field(default=DataAccessChoice.NONE)

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def starter_path(self, variant: LanguageVariant) -> Path:
        """Starter tree copied for *variant*."""
        return self.starters_dir / LanguageVariant(variant).value

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "ScaffoldConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            EXPRESS_SCAFFOLD_OUTPUT_DIR, EXPRESS_SCAFFOLD_STARTERS_DIR,
            EXPRESS_SCAFFOLD_SNIPPETS_DIR, EXPRESS_SCAFFOLD_VARIANT,
            EXPRESS_SCAFFOLD_ORM.

        Raises:
            PreconditionViolation: A variable holds a value that is not a
                known variant or data-access library.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("EXPRESS_SCAFFOLD_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["EXPRESS_SCAFFOLD_OUTPUT_DIR"])
        if os.environ.get("EXPRESS_SCAFFOLD_STARTERS_DIR"):
            kwargs["starters_dir"] = Path(os.environ["EXPRESS_SCAFFOLD_STARTERS_DIR"])
        if os.environ.get("EXPRESS_SCAFFOLD_SNIPPETS_DIR"):
            kwargs["snippets_dir"] = Path(os.environ["EXPRESS_SCAFFOLD_SNIPPETS_DIR"])
        if os.environ.get("EXPRESS_SCAFFOLD_VARIANT"):
            kwargs["default_variant"] = os.environ["EXPRESS_SCAFFOLD_VARIANT"].lower()
        if os.environ.get("EXPRESS_SCAFFOLD_ORM"):
            kwargs["default_orm"] = os.environ["EXPRESS_SCAFFOLD_ORM"].lower()
        try:
            return cls(**kwargs)
        except ValidationError as exc:
            bad = ", ".join(
                f"{err['loc'][0]}={err['input']!r}" for err in exc.errors()
            )
            raise PreconditionViolation(f"Invalid environment configuration: {bad}") from exc
