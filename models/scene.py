"""Container models: pages (scenes), episodes and seasons."""

from typing import Optional

from pydantic import Field, model_validator

from .base import EditorModel
from .element import SceneElement
from .migrations import migrate_episode_data


class Page(EditorModel):
    """A single screen of authored content."""

    id: str
    name: str = Field(default="Untitled Page")
    background: Optional[str] = Field(
        default=None,
        description="Asset reference for the page background",
    )
    elements: list[SceneElement] = Field(
        default_factory=list,
        description="Elements in display order",
    )

    @property
    def element_count(self) -> int:
        return len(self.elements)

    def get_element(self, element_id: str) -> Optional[SceneElement]:
        """Get an element by its ID."""
        for element in self.elements:
            if element.id == element_id:
                return element
        return None

    def paint_order(self) -> list[SceneElement]:
        """Elements sorted back-to-front by z-index, keeping page order on ties."""
        # sorted() is stable, so equal z-indexes keep their sequence position
        return sorted(self.elements, key=lambda e: e.z_index)


# Earlier project files call pages "scenes"
Scene = Page


class Episode(EditorModel):
    """An episode: a keyed collection of pages."""

    id: str
    name: str = Field(default="Untitled Episode")
    pages: dict[str, Page] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _rename_scenes(cls, data):
        if isinstance(data, dict):
            return migrate_episode_data(data)
        return data


class Season(EditorModel):
    """A season: a keyed collection of episodes."""

    id: str
    name: str = Field(default="Untitled Season")
    episodes: dict[str, Episode] = Field(default_factory=dict)

    @property
    def page_count(self) -> int:
        return sum(len(episode.pages) for episode in self.episodes.values())
