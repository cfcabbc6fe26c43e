import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from orm_annotator.cli.annotate import annotate_class, annotate_module
from orm_annotator.cli.tags import tags

app = typer.Typer(
    name="orm-annotator",
    help="Write @property and @method docblocks for ORM classes.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("class")(annotate_class)
app.command("module")(annotate_module)
app.command("tags")(tags)


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def main() -> None:
    app()
