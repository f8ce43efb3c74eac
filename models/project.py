"""Project data model."""

import json
from typing import Iterator, Optional

from pydantic import Field, model_validator

from .base import EditorModel
from .element import Character, ElementType, SceneElement
from .migrations import CURRENT_SCHEMA_VERSION, migrate_project_data
from .scene import Episode, Page, Season
from .script import ScriptGraph

SEED_SEASON_ID = "s_1"
SEED_EPISODE_ID = "ep_1"
SEED_PAGE_ID = "page_1"


class Project(EditorModel):
    """The root authoring document for one interactive-fiction title."""

    schema_version: int = Field(default=CURRENT_SCHEMA_VERSION)

    # Identity
    name: str = Field(default="New Project")

    # Canvas
    width: int = Field(default=1920)
    height: int = Field(default=1080)

    # Content tree
    seasons: dict[str, Season] = Field(default_factory=dict)
    characters: dict[str, Character] = Field(default_factory=dict)
    script_graphs: dict[str, ScriptGraph] = Field(default_factory=dict)

    # Editor cursors
    active_season_id: Optional[str] = Field(default=None)
    active_episode_id: Optional[str] = Field(default=None)
    active_page_id: Optional[str] = Field(default=None)

    @model_validator(mode="before")
    @classmethod
    def _upgrade_schema(cls, data):
        if isinstance(data, dict):
            return migrate_project_data(data)
        return data

    @property
    def page_count(self) -> int:
        return sum(season.page_count for season in self.seasons.values())

    def get_episode(self, season_id: str, episode_id: str) -> Optional[Episode]:
        """Resolve an episode by its season and episode IDs."""
        season = self.seasons.get(season_id)
        if season is None:
            return None
        return season.episodes.get(episode_id)

    def get_page(self, season_id: str, episode_id: str, page_id: str) -> Optional[Page]:
        episode = self.get_episode(season_id, episode_id)
        if episode is None:
            return None
        return episode.pages.get(page_id)

    @property
    def active_page(self) -> Optional[Page]:
        """The page currently open in the editor, if the cursors resolve."""
        if not (self.active_season_id and self.active_episode_id and self.active_page_id):
            return None
        return self.get_page(self.active_season_id, self.active_episode_id, self.active_page_id)

    def iter_pages(self) -> Iterator[tuple[Season, Episode, Page]]:
        """Walk every page together with its season and episode."""
        for season in self.seasons.values():
            for episode in season.episodes.values():
                for page in episode.pages.values():
                    yield season, episode, page

    def to_json(self, indent: int = 2) -> str:
        """Serialize to the on-disk JSON document."""
        return json.dumps(self.to_json_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str) -> "Project":
        """Parse an on-disk JSON document of any supported schema version.

        Raises:
            json.JSONDecodeError: If ``text`` is not JSON.
            pydantic.ValidationError: If the document does not fit the schema.
        """
        return cls.model_validate(json.loads(text))

    @classmethod
    def create(
        cls,
        name: str,
        width: int = 1920,
        height: int = 1080,
    ) -> "Project":
        """Create a new project seeded with one season, episode and page."""
        welcome = SceneElement(
            id="el_welcome",
            element_type=ElementType.TEXT,
            x=100,
            y=100,
            width=600,
            height=100,
            content="Welcome to your new story!",
            z_index=0,
        )
        page = Page(id=SEED_PAGE_ID, name="Page 1", elements=[welcome])
        episode = Episode(id=SEED_EPISODE_ID, name="Episode 1", pages={page.id: page})
        season = Season(id=SEED_SEASON_ID, name="Season 1", episodes={episode.id: episode})
        return cls(
            name=name,
            width=width,
            height=height,
            seasons={season.id: season},
            active_season_id=season.id,
            active_episode_id=episode.id,
            active_page_id=page.id,
        )

    def to_summary(self) -> str:
        """Generate a human-readable summary."""
        lines = [
            f"Project: {self.name}",
            f"Canvas: {self.width}x{self.height}",
            f"Seasons: {len(self.seasons)}",
            f"Pages: {self.page_count}",
            f"Characters: {len(self.characters)}",
            f"Scripts: {len(self.script_graphs)}",
        ]
        return "\n".join(lines)
