"""Command-line entry point for express-scaffold.

Usage::

    express-scaffold my-api
    express-scaffold my-api --variant typescript --orm prisma -o ./services
    python -m express_scaffold
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt

from express_scaffold.config import ScaffoldConfig
from express_scaffold.scaffolder import (
    DataAccessChoice,
    GenerationRequest,
    LanguageVariant,
    ProjectGenerator,
    ScaffoldError,
)
from express_scaffold.scaffolder.catalog import DATA_ACCESS_PROFILES
from express_scaffold.utils import (
    console,
    print_error,
    print_next_steps,
    print_success,
    print_summary_table,
    print_warning,
)

_VARIANT_CHOICES = [v.value for v in LanguageVariant]
_ORM_CHOICES = [c.value for c in DataAccessChoice]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="express-scaffold",
        description="Scaffold an Express backend service with an optional data-access library",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  express-scaffold my-api\n"
            "  express-scaffold my-api --variant typescript --orm prisma\n"
            "  express-scaffold my-api --orm mongoose -o ./services\n"
        ),
    )
    parser.add_argument(
        "app_name",
        nargs="?",
        default=None,
        help="Name of the new project (prompted for if omitted)",
    )
    parser.add_argument(
        "--variant",
        choices=_VARIANT_CHOICES,
        default=None,
        help="Language variant (prompted for if omitted)",
    )
    parser.add_argument(
        "--orm",
        choices=_ORM_CHOICES,
        default=None,
        help="Data-access library (prompted for if omitted)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Parent directory for the project (default: current directory)",
    )
    return parser


def collect_request(args: argparse.Namespace, config: ScaffoldConfig) -> GenerationRequest:
    """Fill in anything missing from *args* interactively and build the request."""
    app_name = args.app_name
    while not app_name or not app_name.strip():
        app_name = Prompt.ask("Enter your app name", console=console)
        if not app_name or not app_name.strip():
            print_error("App name cannot be empty")

    variant = args.variant or Prompt.ask(
        "Choose a variant",
        choices=_VARIANT_CHOICES,
        default=config.default_variant.value,
        console=console,
    )
    orm = args.orm or Prompt.ask(
        "Choose an ORM / database library",
        choices=_ORM_CHOICES,
        default=config.default_orm.value,
        console=console,
    )
    return GenerationRequest.create(app_name, variant, orm)


def next_steps(request: GenerationRequest) -> list[str]:
    """Shell commands to run inside the freshly generated project."""
    steps = [f"cd {request.app_name}", "npm install"]
    if request.data_access_choice == DataAccessChoice.PRISMA:
        steps.append("npx prisma migrate dev --name init")
    steps.append("npm run dev")
    return steps


def run(argv: list[str] | None = None, out: Console | None = None) -> int:
    """Parse *argv*, generate the project and return the process exit code."""
    target = out or console
    args = build_parser().parse_args(argv)

    try:
        config = ScaffoldConfig.from_env()
        if args.output:
            config.output_dir = Path(args.output)
        if not config.output_dir.exists():
            print_warning(
                f"Output directory {config.output_dir} does not exist; creating it", target
            )
        request = collect_request(args, config)
        result = asyncio.run(ProjectGenerator(request, config, console=target).generate())
    except (ScaffoldError, OSError) as exc:
        print_error(f"Error: {exc}", target)
        return 1

    choice = request.data_access_choice
    library = (
        DATA_ACCESS_PROFILES[choice].display_name
        if choice != DataAccessChoice.NONE
        else "None"
    )
    target.print()
    print_success(
        f"Successfully created {request.app_name} with "
        f"{request.language_variant.value} + {library}!",
        target,
    )
    print_summary_table(
        {
            "Project": str(result.project_root),
            "Variant": request.language_variant.value,
            "Data access": library,
            "Files written": str(len(result.pipeline.written)),
        },
        title="Generated project",
        out=target,
    )
    print_next_steps(next_steps(request), target)
    return 0


def main() -> None:
    """Console-script entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
