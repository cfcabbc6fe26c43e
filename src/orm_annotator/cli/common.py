from pathlib import Path

import typer
from rich.console import Console

from orm_annotator.core.annotate import Annotator
from orm_annotator.core.errors import ManifestError
from orm_annotator.schema import load_manifest
from orm_annotator.settings import AnnotatorSettings, get_settings

console = Console()


def build_annotator(
    manifest: Path | None,
    short_names: bool | None,
    strict: bool | None = None,
) -> tuple[Annotator, AnnotatorSettings]:
    settings = get_settings(manifest=manifest, use_short_name=short_names, strict=strict)
    if settings.manifest is None:
        console.print("[red]No manifest given.[/red] Use --manifest or set ORM_ANNOTATOR_MANIFEST.")
        raise typer.Exit(1)
    try:
        store = load_manifest(settings.manifest)
    except ManifestError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from exc
    return Annotator(store, settings), settings
