"""Editor-facing builder state exchanged with the zine builder.

Geometry in this document is in canvas pixels (900x1200); storage keeps
percentages. See ``onlyzines.services.builder_state`` for the conversion.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BuilderElement(BaseModel):
    """A single element on a builder page.

    Unknown keys are kept so the element can be stored verbatim and handed
    back to the editor unchanged.
    """

    model_config = ConfigDict(extra="allow")

    id: str | int | None = None
    type: str = "unknown"
    x: float
    y: float
    w: float
    h: float
    rotation: float | None = None
    z: int | None = None


class BuilderPage(BaseModel):
    id: str
    name: str
    section: str | None = None
    paper: str | None = None
    deckled: bool | None = None
    elements: list[BuilderElement] = Field(default_factory=list)


class BuilderProject(BaseModel):
    name: str = Field(..., max_length=200)
    description: str | None = None


class BuilderState(BaseModel):
    version: str
    project: BuilderProject
    pages: list[BuilderPage]
    roles: dict[str, Any] | None = None
