from pathlib import Path
from typing import Annotated

import typer

from orm_annotator.cli.common import build_annotator, console
from orm_annotator.core.annotate import Annotator
from orm_annotator.core.errors import AnnotatorError

ManifestOption = Annotated[Path | None, typer.Option(help="Schema manifest (.toml or .json).")]
ShortNamesOption = Annotated[bool | None, typer.Option("--short-names/--full-names", help="Render short class names.")]
StrictOption = Annotated[
    bool | None, typer.Option("--strict/--lenient", help="Fail on duplicate declarations and broken blocks.")
]
DryRunOption = Annotated[bool, typer.Option("--dry-run", help="Report changes without writing files.")]


def _report(annotator: Annotator, dry_run: bool) -> None:
    verb = "Would update" if dry_run else "Updated"
    for path in annotator.changed_files:
        console.print(f"[green]{verb}[/green] {path}")
    if not annotator.changed_files:
        console.print("Nothing to do.")


def annotate_class(
    class_name: Annotated[str, typer.Argument(help="Fully qualified class name.")],
    manifest: ManifestOption = None,
    short_names: ShortNamesOption = None,
    strict: StrictOption = None,
    dry_run: DryRunOption = False,
) -> None:
    """Annotate a single class."""
    annotator, _ = build_annotator(manifest, short_names, strict)
    try:
        processed = annotator.annotate_class(class_name, dry_run=dry_run)
    except AnnotatorError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc
    if not processed:
        console.print(f"[yellow]Skipped[/yellow] {class_name}")
        raise typer.Exit(1)
    _report(annotator, dry_run)


def annotate_module(
    module: Annotated[str, typer.Argument(help="Module whose classes should be annotated.")],
    manifest: ManifestOption = None,
    short_names: ShortNamesOption = None,
    strict: StrictOption = None,
    dry_run: DryRunOption = False,
) -> None:
    """Annotate every class of a module."""
    annotator, settings = build_annotator(manifest, short_names, strict)
    if not annotator.annotate_module(module, dry_run=dry_run):
        console.print(f"[yellow]Module {module!r} is not enabled[/yellow] (enabled: {settings.enabled_modules})")
        raise typer.Exit(1)
    _report(annotator, dry_run)
