"""Conversion between the editor's builder state and stored pages/blocks.

The builder works in canvas pixels on a fixed 900x1200 canvas and names
paper stocks; storage keeps geometry as percentages of the canvas and the
paper as a background color.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from onlyzines.models.page import Page
from onlyzines.schemas.builder import BuilderElement, BuilderPage, BuilderState

CANVAS_WIDTH = 900
CANVAS_HEIGHT = 1200
BUILDER_VERSION = "13.1"

PAPER_COLORS: dict[str, str] = {
    "cotton": "#fdfbf7",
    "cream": "#f8f4e8",
    "bright": "#ffffff",
    "kraft": "#d4c4a8",
    "newsprint": "#f0ebe0",
    "blush": "#fdf2f0",
    "sage": "#e8ede5",
    "sky": "#e8f1f8",
}
COLOR_TO_PAPER: dict[str, str] = {color: paper for paper, color in PAPER_COLORS.items()}
DEFAULT_PAPER = "cotton"
FALLBACK_BACKGROUND = "#ffffff"

DEFAULT_ROLES: dict[str, dict[str, Any]] = {
    "display": {"f": "Bebas Neue", "s": 72},
    "header": {"f": "Playfair Display", "s": 36},
    "subhead": {"f": "Work Sans", "s": 18},
    "copy": {"f": "EB Garamond", "s": 14},
    "caption": {"f": "Inter", "s": 10},
    "scrawl": {"f": "Homemade Apple", "s": 16},
}


@dataclass(frozen=True)
class BlockRecord:
    block_type: str
    position_x: float
    position_y: float
    width: float
    height: float
    rotation: float
    z_index: int
    data: dict[str, Any]


@dataclass(frozen=True)
class PageRecord:
    """A page ready to be written, numbered from its position in the document."""

    page_number: int
    background_color: str
    metadata: dict[str, Any]
    blocks: tuple[BlockRecord, ...] = field(default_factory=tuple)
    canvas_width: int = CANVAS_WIDTH
    canvas_height: int = CANVAS_HEIGHT


def paper_to_color(paper: str | None) -> str:
    return PAPER_COLORS.get(paper or DEFAULT_PAPER, FALLBACK_BACKGROUND)


def color_to_paper(color: str | None) -> str:
    return COLOR_TO_PAPER.get(color or FALLBACK_BACKGROUND, DEFAULT_PAPER)


def element_to_block(element: BuilderElement, index: int) -> BlockRecord:
    return BlockRecord(
        block_type=element.type or "unknown",
        position_x=element.x / CANVAS_WIDTH * 100,
        position_y=element.y / CANVAS_HEIGHT * 100,
        width=element.w / CANVAS_WIDTH * 100,
        height=element.h / CANVAS_HEIGHT * 100,
        rotation=element.rotation or 0.0,
        z_index=element.z if element.z is not None else index,
        data=element.model_dump(mode="json", exclude_unset=True),
    )


def page_to_record(page: BuilderPage, page_number: int) -> PageRecord:
    return PageRecord(
        page_number=page_number,
        background_color=paper_to_color(page.paper),
        metadata={
            "name": page.name,
            "section": page.section,
            "paper": page.paper,
            "deckled": page.deckled,
        },
        blocks=tuple(
            element_to_block(element, index) for index, element in enumerate(page.elements)
        ),
    )


def from_builder_state(state: BuilderState) -> list[PageRecord]:
    """Turn the submitted document into page records numbered 1..N."""

    return [page_to_record(page, index + 1) for index, page in enumerate(state.pages)]


def _page_to_builder(page: Page, index: int) -> dict[str, Any]:
    metadata = page.page_metadata or {}
    elements = []
    for block in page.blocks:
        data = dict(block.data or {})
        elements.append(
            {
                **data,
                "id": data.get("id") or str(block.id),
                "type": block.block_type,
                "x": block.position_x / 100 * CANVAS_WIDTH,
                "y": block.position_y / 100 * CANVAS_HEIGHT,
                "w": block.width / 100 * CANVAS_WIDTH,
                "h": block.height / 100 * CANVAS_HEIGHT,
                "rotation": block.rotation,
                "z": block.z_index,
            }
        )

    return {
        "id": f"p{index + 1}",
        "name": metadata.get("name") or ("Cover" if index == 0 else f"Page {index + 1}"),
        "section": metadata.get("section") or ("cover" if index == 0 else "editorial"),
        "paper": metadata.get("paper") or color_to_paper(page.background_color),
        "deckled": bool(metadata.get("deckled")),
        "elements": elements,
    }


def blank_cover_page() -> dict[str, Any]:
    return {
        "id": "p1",
        "name": "Cover",
        "section": "cover",
        "paper": DEFAULT_PAPER,
        "deckled": False,
        "elements": [],
    }


def to_builder_state(
    title: str, pages: Sequence[Page], *, placeholder_page: bool = False
) -> dict[str, Any]:
    """Rebuild the editor document from stored pages (ordered by page number).

    With ``placeholder_page`` an issue without pages opens with one blank
    cover so the editor always has a canvas to draw on.
    """

    builder_pages = [_page_to_builder(page, index) for index, page in enumerate(pages)]
    if not builder_pages and placeholder_page:
        builder_pages = [blank_cover_page()]

    return {
        "version": BUILDER_VERSION,
        "project": {"name": title, "description": ""},
        "pages": builder_pages,
        "roles": {role: dict(style) for role, style in DEFAULT_ROLES.items()},
    }
