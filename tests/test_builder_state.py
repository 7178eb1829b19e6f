"""Tests for converting between builder state and stored pages."""

from __future__ import annotations

import pytest

from onlyzines.models.page import Block, Page
from onlyzines.schemas.builder import BuilderElement, BuilderState
from onlyzines.services.builder_state import (
    BUILDER_VERSION,
    DEFAULT_ROLES,
    FALLBACK_BACKGROUND,
    color_to_paper,
    element_to_block,
    from_builder_state,
    paper_to_color,
    to_builder_state,
)

from tests.conftest import make_builder_state


def test_element_geometry_is_stored_as_canvas_percentages() -> None:
    element = BuilderElement(id="hero", type="image", x=450, y=300, w=900, h=600, rotation=12)

    block = element_to_block(element, 0)

    assert block.block_type == "image"
    assert block.position_x == pytest.approx(50.0)
    assert block.position_y == pytest.approx(25.0)
    assert block.width == pytest.approx(100.0)
    assert block.height == pytest.approx(50.0)
    assert block.rotation == 12


def test_element_keeps_unknown_fields_in_block_data() -> None:
    element = BuilderElement.model_validate(
        {"id": "t1", "type": "text", "x": 0, "y": 0, "w": 10, "h": 10, "text": "Hi", "role": "copy"}
    )

    block = element_to_block(element, 3)

    assert block.data["text"] == "Hi"
    assert block.data["role"] == "copy"
    assert block.z_index == 3


def test_explicit_z_overrides_position_in_list() -> None:
    element = BuilderElement(x=0, y=0, w=1, h=1, z=9)

    assert element_to_block(element, 0).z_index == 9
    assert element_to_block(element, 0).block_type == "unknown"


def test_paper_and_background_color_map_both_ways() -> None:
    assert paper_to_color("kraft") == "#d4c4a8"
    assert color_to_paper("#d4c4a8") == "kraft"
    assert paper_to_color("glitter") == FALLBACK_BACKGROUND
    assert color_to_paper("#123456") == "cotton"


def test_pages_are_numbered_from_document_order() -> None:
    state = BuilderState.model_validate(make_builder_state(3))

    records = from_builder_state(state)

    assert [record.page_number for record in records] == [1, 2, 3]
    assert records[0].metadata == {
        "name": "Cover",
        "section": "cover",
        "paper": "kraft",
        "deckled": True,
    }
    assert records[0].background_color == "#d4c4a8"
    assert (records[0].canvas_width, records[0].canvas_height) == (900, 1200)


def _stored_page(page_number: int, *, metadata=None, blocks=()) -> Page:
    page = Page(
        page_number=page_number,
        background_color="#e8ede5",
        page_metadata=metadata,
    )
    page.blocks = list(blocks)
    return page


def test_to_builder_state_restores_pixels_and_metadata() -> None:
    block = Block(
        id=7,
        block_type="text",
        position_x=10.0,
        position_y=50.0,
        width=50.0,
        height=25.0,
        rotation=0.0,
        z_index=2,
        data={"text": "Hello"},
    )
    page = _stored_page(1, metadata={"name": "Front", "section": "cover", "paper": "sage"}, blocks=[block])

    state = to_builder_state("Issue One", [page])

    assert state["version"] == BUILDER_VERSION
    assert state["project"]["name"] == "Issue One"
    assert state["roles"] == DEFAULT_ROLES
    builder_page = state["pages"][0]
    assert builder_page["id"] == "p1"
    assert builder_page["name"] == "Front"
    assert builder_page["paper"] == "sage"
    element = builder_page["elements"][0]
    assert element["id"] == "7"
    assert element["text"] == "Hello"
    assert (element["x"], element["y"], element["w"], element["h"]) == pytest.approx(
        (90.0, 600.0, 450.0, 300.0)
    )
    assert element["z"] == 2


def test_to_builder_state_fills_default_names_without_metadata() -> None:
    pages = [_stored_page(1), _stored_page(2)]

    state = to_builder_state("Untitled", pages)

    assert [page["name"] for page in state["pages"]] == ["Cover", "Page 2"]
    assert [page["section"] for page in state["pages"]] == ["cover", "editorial"]
    assert state["pages"][1]["paper"] == "sage"


def test_placeholder_page_only_when_requested() -> None:
    assert to_builder_state("Empty", [])["pages"] == []

    pages = to_builder_state("Empty", [], placeholder_page=True)["pages"]

    assert len(pages) == 1
    assert pages[0]["name"] == "Cover"
    assert pages[0]["elements"] == []


def test_saved_document_reads_back_equivalently() -> None:
    original = make_builder_state(2, elements_per_page=2)
    records = from_builder_state(BuilderState.model_validate(original))
    pages = []
    for record in records:
        blocks = [
            Block(
                id=index + 1,
                block_type=block.block_type,
                position_x=block.position_x,
                position_y=block.position_y,
                width=block.width,
                height=block.height,
                rotation=block.rotation,
                z_index=block.z_index,
                data=block.data,
            )
            for index, block in enumerate(record.blocks)
        ]
        pages.append(
            _stored_page(record.page_number, metadata=record.metadata, blocks=blocks)
        )

    restored = to_builder_state("Issue One", pages)

    for before, after in zip(original["pages"], restored["pages"]):
        assert after["name"] == before["name"]
        assert after["paper"] == before["paper"]
        assert [element["id"] for element in after["elements"]] == [
            element["id"] for element in before["elements"]
        ]
        assert [element["text"] for element in after["elements"]] == [
            element["text"] for element in before["elements"]
        ]
        assert after["elements"][0]["x"] == pytest.approx(before["elements"][0]["x"])
