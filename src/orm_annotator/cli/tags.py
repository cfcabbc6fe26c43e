from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from orm_annotator.cli.common import build_annotator, console


def tags(
    class_name: Annotated[str, typer.Argument(help="Fully qualified class name.")],
    manifest: Annotated[Path | None, typer.Option(help="Schema manifest (.toml or .json).")] = None,
    short_names: Annotated[
        bool | None, typer.Option("--short-names/--full-names", help="Render short class names.")
    ] = None,
) -> None:
    """Show the tags resolved for a class without touching any file."""
    annotator, _ = build_annotator(manifest, short_names)
    tag_set = annotator.resolve(class_name)

    table = Table(show_lines=False)
    table.add_column("tag")
    table.add_column("signature")
    for tag in tag_set.tags():
        table.add_row(f"@{tag.tag_name}", tag.signature)
    console.print(table)
    console.print(f"({tag_set.count()} tags)")
