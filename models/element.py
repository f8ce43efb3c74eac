"""Leaf models placed on pages: scene elements and characters."""

from typing import Optional

from pydantic import Field, model_validator

from .base import EditorModel, SnakeCaseEnum, normalize_type_key


class ElementType(SnakeCaseEnum):
    """Kind of item drawn on a page."""

    TEXT = "text"
    IMAGE = "image"
    CHOICE = "choice"
    DIALOGUE = "dialogue"


class SceneElement(EditorModel):
    """A positioned visual or interactive item on a page."""

    id: str = Field(description="Element ID, unique within its page")
    element_type: ElementType = Field(
        default=ElementType.TEXT,
        alias="type",
        description="Element kind",
    )

    # Geometry
    x: float = Field(default=0.0)
    y: float = Field(default=0.0)
    width: float = Field(default=300.0)
    height: float = Field(default=100.0)

    content: str = Field(
        default="",
        description="Text content or image path",
    )
    z_index: int = Field(
        default=0,
        description="Paint order; ties are broken by position in the page",
    )
    properties: dict[str, str] = Field(
        default_factory=dict,
        description="Type-specific extra data",
    )

    @model_validator(mode="before")
    @classmethod
    def _normalize_type(cls, data):
        return normalize_type_key(data)

    @property
    def character_id(self) -> Optional[str]:
        """Character this element speaks for, if any."""
        return self.properties.get("characterId") or None


class Character(EditorModel):
    """A character in the project's registry."""

    id: str
    name: str = Field(default="Unnamed")
    color: str = Field(default="#ffffff", description="Display tint")
    default_sprite: Optional[str] = Field(
        default=None,
        description="Asset reference used when no sprite is specified",
    )
