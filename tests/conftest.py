"""Shared pytest fixtures for the express-scaffold test suite.

Provides reusable fixtures for:
- A quiet Rich console
- Fresh copies of the bundled starter templates
- Plans for any (variant, data-access) combination
- Delimiter and import inspection helpers for generated JavaScript/TypeScript
"""

from __future__ import annotations

import itertools
import re
import shutil
from pathlib import Path
from typing import Callable

import pytest
from rich.console import Console

from express_scaffold.config import DEFAULT_STARTERS_DIR, ScaffoldConfig
from express_scaffold.scaffolder.models import (
    DataAccessChoice,
    GenerationPlan,
    GenerationRequest,
    LanguageVariant,
)
from express_scaffold.scaffolder.resolver import resolve
from express_scaffold.scaffolder.templates import TemplateRenderer


ALL_VARIANTS = list(LanguageVariant)
ALL_CHOICES = list(DataAccessChoice)
CONCRETE_CHOICES = [c for c in DataAccessChoice if c != DataAccessChoice.NONE]
ALL_COMBINATIONS = list(itertools.product(ALL_VARIANTS, ALL_CHOICES))
CONCRETE_COMBINATIONS = list(itertools.product(ALL_VARIANTS, CONCRETE_CHOICES))


# ---------------------------------------------------------------------------
# Environment isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_scaffold_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make sure developer EXPRESS_SCAFFOLD_* settings never leak into tests."""
    for var in (
        "EXPRESS_SCAFFOLD_OUTPUT_DIR",
        "EXPRESS_SCAFFOLD_STARTERS_DIR",
        "EXPRESS_SCAFFOLD_SNIPPETS_DIR",
        "EXPRESS_SCAFFOLD_VARIANT",
        "EXPRESS_SCAFFOLD_ORM",
    ):
        monkeypatch.delenv(var, raising=False)


# ---------------------------------------------------------------------------
# Console, renderer & config
# ---------------------------------------------------------------------------

@pytest.fixture
def quiet_console() -> Console:
    """Console that swallows all output."""
    return Console(quiet=True)


@pytest.fixture
def renderer() -> TemplateRenderer:
    """Renderer pointed at the bundled snippet templates."""
    return TemplateRenderer()


@pytest.fixture
def config(tmp_path: Path) -> ScaffoldConfig:
    """Config that generates into a temporary directory."""
    return ScaffoldConfig(output_dir=tmp_path / "out")


# ---------------------------------------------------------------------------
# Plans & starter copies
# ---------------------------------------------------------------------------

def make_plan(
    variant: LanguageVariant,
    choice: DataAccessChoice,
    app_name: str = "demo",
) -> GenerationPlan:
    """Resolve a plan for the given combination."""
    return resolve(
        GenerationRequest(
            app_name=app_name,
            language_variant=variant,
            data_access_choice=choice,
        )
    )


@pytest.fixture
def copy_starter(tmp_path: Path) -> Callable[..., Path]:
    """Factory that copies a bundled starter tree into ``tmp_path``.

    Usage:
        root = copy_starter(LanguageVariant.TYPESCRIPT)
    """

    def _copy(variant: LanguageVariant, name: str = "demo") -> Path:
        root = tmp_path / name
        shutil.copytree(DEFAULT_STARTERS_DIR / variant.value, root)
        return root

    return _copy


# ---------------------------------------------------------------------------
# Source inspection helpers
# ---------------------------------------------------------------------------

_SPECIFIER_RE = re.compile(
    r'require\("(?P<req>[^"]+)"\)|from "(?P<frm>[^"]+)"|^import "(?P<bare>[^"]+)"',
    re.MULTILINE,
)


def delimiters_balanced(source: str) -> bool:
    """Return ``True`` when (), [] and {} pair up outside string literals."""
    closing = {")": "(", "]": "[", "}": "{"}
    stack: list[str] = []
    quote: str | None = None
    i = 0
    while i < len(source):
        ch = source[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in "\"'`":
            quote = ch
        elif ch in "([{":
            stack.append(ch)
        elif ch in closing:
            if not stack or stack.pop() != closing[ch]:
                return False
        i += 1
    return not stack and quote is None


def module_specifiers(source: str) -> list[str]:
    """Every module specifier imported or required by *source*, in order."""
    return [
        m.group("req") or m.group("frm") or m.group("bare")
        for m in _SPECIFIER_RE.finditer(source)
    ]


def package_names(source: str) -> set[str]:
    """npm package names imported by *source* (relative imports excluded)."""
    names = set()
    for specifier in module_specifiers(source):
        if specifier.startswith("."):
            continue
        parts = specifier.split("/")
        names.add("/".join(parts[:2]) if specifier.startswith("@") else parts[0])
    return names
