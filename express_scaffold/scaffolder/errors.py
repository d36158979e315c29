"""Exceptions raised by the scaffolder.

Every error is fatal to the current generation run.  Nothing is retried and
nothing is rolled back: a run that aborts after the starter template has been
copied leaves the target directory half-patched.  Storage failures surface as
the underlying ``OSError`` and are not wrapped.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for scaffolder failures."""


class PreconditionViolation(ScaffoldError):
    """Raised before any file operation when the request cannot be honoured.

    Examples: the target directory already exists, or the app name is empty.
    """


class TemplateCorruptionError(ScaffoldError):
    """Raised when a copied starter template is missing a file or is malformed."""

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{self.path}: {message}")
