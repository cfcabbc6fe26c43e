"""Insert or refresh the generated docblock above a class declaration.

The block between ``/**`` and ``*/`` that carries the start and end markers is
owned by the annotator and regenerated on every run. Everything else in the
file, hand-written docblocks included, is left byte-for-byte as it was.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from orm_annotator.core.errors import (
    AmbiguousDeclarationSite,
    ClassNotFoundInSource,
    MalformedExistingAnnotationBlock,
)
from orm_annotator.core.names import render_class_name, short_name
from orm_annotator.core.reflection import declaration_start_bytes, declared_method_names
from orm_annotator.models import TagSet

logger = logging.getLogger(__name__)

START_MARKER = "StartGeneratedWithOrmAnnotator"
END_MARKER = "EndGeneratedWithOrmAnnotator"


@dataclass(frozen=True)
class ClassDeclarationSite:
    start: int
    class_name: str
    indent: str
    existing_member_names: frozenset[str]


@dataclass(frozen=True)
class AnnotationBlock:
    start: int
    end: int
    well_formed: bool
    inline: bool


def _newline_of(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


def find_declaration_starts(text: str, class_name: str) -> list[tuple[int, str]]:
    """(offset, indent) of every declaration of ``class_name``.

    A declaration alone on its line starts at the beginning of that line; one that
    shares its line with other code (``<?php class Team``) starts at the keyword.
    """
    encoded = text.encode("utf-8")
    starts = []
    for start_byte in declaration_start_bytes(text, class_name):
        position = len(encoded[:start_byte].decode("utf-8"))
        line_start = text.rfind("\n", 0, position) + 1
        prefix = text[line_start:position]
        if prefix.strip():
            starts.append((position, ""))
        else:
            starts.append((line_start, prefix))
    return starts


def find_annotation_block(text: str, site_start: int) -> AnnotationBlock | None:
    """Return the marked docblock ending right before ``site_start``, if any."""
    head = text[:site_start].rstrip()
    if not head.endswith("*/"):
        return None
    opening = head.rfind("/**")
    if opening == -1:
        return None
    docblock = head[opening:]
    if "*/" in docblock[3:-2] or START_MARKER not in docblock:
        return None

    line_start = head.rfind("\n", 0, opening) + 1
    inline = bool(head[line_start:opening].strip())
    well_formed = END_MARKER in docblock[docblock.index(START_MARKER) :]
    return AnnotationBlock(
        start=opening if inline else line_start,
        end=site_start,
        well_formed=well_formed,
        inline=inline,
    )


def render_block(
    class_name: str,
    tag_set: TagSet,
    *,
    use_short_name: bool = False,
    indent: str = "",
    newline: str = "\n",
) -> str:
    lines = [
        "/**",
        f" * Class {render_class_name(class_name, use_short_name)}",
        " *",
        f" * {START_MARKER}",
        *(f" * {tag.render()}" for tag in tag_set.tags()),
        f" * {END_MARKER}",
        " */",
    ]
    return "".join(f"{indent}{line}{newline}" for line in lines)


class AnnotationRewriter:
    def __init__(self, *, use_short_name: bool = False, strict: bool = False) -> None:
        self._use_short_name = use_short_name
        self._strict = strict

    def locate(
        self,
        file_text: str,
        class_name: str,
        existing_member_names: Iterable[str] | None = None,
    ) -> ClassDeclarationSite:
        starts = find_declaration_starts(file_text, class_name)
        if not starts:
            raise ClassNotFoundInSource(class_name)
        if len(starts) > 1:
            if self._strict:
                raise AmbiguousDeclarationSite(f"{len(starts)} declarations of '{short_name(class_name)}'")
            logger.warning("%d declarations of %s found, annotating the first", len(starts), class_name)

        start, indent = starts[0]
        if existing_member_names is None:
            existing_member_names = declared_method_names(file_text, class_name)
        return ClassDeclarationSite(
            start=start,
            class_name=class_name,
            indent=indent,
            existing_member_names=frozenset(existing_member_names),
        )

    def rewrite(
        self,
        file_text: str,
        class_name: str,
        tag_set: TagSet,
        existing_member_names: Iterable[str] | None = None,
    ) -> str:
        site = self.locate(file_text, class_name, existing_member_names)
        tags = tag_set.without_methods(site.existing_member_names)
        rendered = render_block(
            class_name,
            tags,
            use_short_name=self._use_short_name,
            indent=site.indent,
            newline=_newline_of(file_text),
        )

        block = find_annotation_block(file_text, site.start)
        if block is not None and not block.well_formed:
            if self._strict:
                raise MalformedExistingAnnotationBlock(f"Unterminated generated block above '{class_name}'")
            logger.warning("Unterminated generated block above %s, inserting a fresh one", class_name)
            block = None

        if block is None:
            return file_text[: site.start] + rendered + file_text[site.start :]
        if block.inline:
            rendered = rendered[len(site.indent) :]
        return file_text[: block.start] + rendered + file_text[block.end :]
