"""Entry-point patching.

The starter entry file is treated as an opaque body.  Patching only ever adds
a head block (the import of the generated module) and, for libraries that
need an explicit connect step, a tail block that replaces the template's
``start`` hook with one that connects before listening.  Nothing in the body
is removed or reordered.

Starter entry points are expected to look like::

    let start = () => {
      app.listen(PORT, ...)
    }

    setImmediate(() => start())

``setImmediate`` defers the call until the whole module, including any
appended bootstrap, has been evaluated.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .catalog import get_profile
from .errors import TemplateCorruptionError
from .models import DataAccessChoice, GenerationPlan, ImportStyle, LanguageVariant
from .templates import TemplateRenderer


IMPORT_TEMPLATES: dict[ImportStyle, str] = {
    ImportStyle.COMMONJS: "entrypoint/import.commonjs.j2",
    ImportStyle.ESM: "entrypoint/import.esm.j2",
}

BOOTSTRAP_TEMPLATES: dict[LanguageVariant, str] = {
    LanguageVariant.JAVASCRIPT: "entrypoint/bootstrap.js.j2",
    LanguageVariant.TYPESCRIPT: "entrypoint/bootstrap.ts.j2",
}

_START_HOOK_RE = re.compile(r"^let start\b", re.MULTILINE)


@dataclass
class SourceDocument:
    """A source file as head blocks + untouched body + tail blocks."""

    body: str
    head: list[str] = field(default_factory=list)
    tail: list[str] = field(default_factory=list)

    def add_head(self, block: str) -> None:
        """Queue *block* before the body, after any earlier head blocks."""
        self.head.append(block)

    def add_tail(self, block: str) -> None:
        self.tail.append(block)

    def render(self) -> str:
        body = self.body
        if self.tail and body and not body.endswith("\n"):
            body += "\n"
        return "".join(self.head) + body + "".join(self.tail)


class EntryPointPatcher:
    """Wires the generated data-access module into the starter entry point."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    def patch(self, entry_content: str, plan: GenerationPlan, choice: DataAccessChoice) -> str:
        """Return *entry_content* with the import (and bootstrap) added.

        ``NONE`` returns the content unchanged.

        Raises:
            TemplateCorruptionError: A bootstrap is required but the entry
                point does not declare the ``start`` hook.
        """
        if choice == DataAccessChoice.NONE:
            return entry_content

        profile = get_profile(choice)
        document = SourceDocument(body=entry_content)
        document.add_head(self.import_block(plan, choice))

        if profile.needs_connect:
            if not _START_HOOK_RE.search(entry_content):
                raise TemplateCorruptionError(
                    plan.entry_point_path,
                    "entry point does not declare the 'let start' hook",
                )
            document.add_tail(self.bootstrap_block(plan))

        return document.render()

    def import_block(self, plan: GenerationPlan, choice: DataAccessChoice) -> str:
        profile = get_profile(choice)
        return self.renderer.render(
            IMPORT_TEMPLATES[plan.import_style],
            {"binding": profile.binding, "module": plan.data_access_import},
        )

    def bootstrap_block(self, plan: GenerationPlan) -> str:
        return self.renderer.render(BOOTSTRAP_TEMPLATES[plan.variant], {})
