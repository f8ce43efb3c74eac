"""Command layer - the operations the editor front end invokes.

Each command takes the store lock once, resolves the target by ID, applies a
single change and returns. Failures raise a :class:`StoreError` before
anything is modified. :meth:`Commands.invoke` is the front-end boundary: it
accepts camelCase command names and JSON-shaped arguments and turns every
outcome into a :class:`Success` or :class:`Failure`.
"""

import inspect
import logging
import uuid
from pathlib import Path
from typing import Annotated, Any, Literal, Optional, Union, get_type_hints

from pydantic import BaseModel, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_snake

from models.base import EditorModel
from models.element import Character
from models.project import Project
from models.scene import Episode, Page, Season
from models.script import ScriptGraph
from core.assets import import_asset, list_assets
from core.errors import (
    ErrorKind,
    NotFoundError,
    ParseError,
    StoreError,
    UnknownCommandError,
)
from core.integrity import IntegrityIssue, check_project
from core.store import ProjectStore

logger = logging.getLogger(__name__)


# =============================================================================
# Boundary results
# =============================================================================


class Success(BaseModel):
    """A command completed; ``value`` is JSON-ready."""

    status: Literal["ok"] = "ok"
    value: Any = None


class Failure(BaseModel):
    """A command failed; ``message`` is meant for display."""

    status: Literal["error"] = "error"
    kind: ErrorKind
    message: str


CommandResult = Annotated[Union[Success, Failure], Field(discriminator="status")]
command_result_adapter: TypeAdapter = TypeAdapter(CommandResult)


# Front-end command name -> Commands method
COMMANDS = {
    "createProject": "create_project",
    "getCurrentProject": "get_current_project",
    "loadProject": "load_project",
    "saveProjectAs": "save_project_as",
    "saveProject": "save_project",
    "saveScene": "save_scene",
    "savePage": "save_page",
    "saveActiveScene": "save_active_scene",
    "deleteScene": "delete_scene",
    "deletePage": "delete_page",
    "deleteEpisode": "delete_episode",
    "deleteSeason": "delete_season",
    "createSeason": "create_season",
    "createEpisode": "create_episode",
    "createPage": "create_page",
    "openPage": "open_page",
    "saveCharacter": "save_character",
    "deleteCharacter": "delete_character",
    "saveScriptGraph": "save_script_graph",
    "deleteScriptGraph": "delete_script_graph",
    "importFile": "import_file",
    "getProjectAssets": "get_project_assets",
    "checkIntegrity": "check_integrity",
}

# Commands whose leaf ID may also be passed as plain ``id``
LEAF_ID_ARGUMENTS = {
    "delete_scene": "scene_id",
    "delete_page": "page_id",
}


def _new_id(prefix: str, taken) -> str:
    while True:
        candidate = f"{prefix}_{uuid.uuid4().hex[:8]}"
        if candidate not in taken:
            return candidate


def _to_wire(value: Any) -> Any:
    if isinstance(value, EditorModel):
        return value.to_json_dict()
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, list):
        return [_to_wire(item) for item in value]
    return value


def _resolve_season(project: Project, season_id: str) -> Season:
    season = project.seasons.get(season_id)
    if season is None:
        raise NotFoundError(f"Season {season_id} not found")
    return season


def _resolve_episode(project: Project, season_id: str, episode_id: str) -> Episode:
    season = _resolve_season(project, season_id)
    episode = season.episodes.get(episode_id)
    if episode is None:
        raise NotFoundError(f"Episode {episode_id} not found in season {season_id}")
    return episode


def _open_page(project: Project, season_id: str, episode_id: str, page_id: str) -> ScriptGraph:
    project.active_season_id = season_id
    project.active_episode_id = episode_id
    project.active_page_id = page_id
    graph = project.script_graphs.get(page_id)
    if graph is None:
        graph = ScriptGraph.default_for_page(page_id)
        project.script_graphs[page_id] = graph
        logger.debug(f"Created default script for page {page_id}")
    return graph


class Commands:
    """
    Operations exposed to the editor, bound to one :class:`ProjectStore`.

    Usage:
        commands = Commands(ProjectStore())
        commands.create_project("Demo")
        result = commands.invoke("deleteSeason", seasonId="s_1")
    """

    def __init__(self, store: ProjectStore):
        self.store = store

    # =========================================================================
    # Project
    # =========================================================================

    def create_project(self, name: str) -> Project:
        return self.store.create(name)

    def get_current_project(self) -> Optional[Project]:
        return self.store.get_current()

    def load_project(self, path: Union[str, Path]) -> Project:
        return self.store.load(path)

    def save_project_as(self, path: Union[str, Path], project: Project) -> None:
        self.store.save_as(path, project)

    def save_project(self, project: Project) -> str:
        return self.store.save(project)

    # =========================================================================
    # Seasons, episodes and pages
    # =========================================================================

    def save_page(self, season_id: str, episode_id: str, page: Page) -> None:
        """Insert or replace a page, keyed by its own ID."""
        with self.store.transaction() as project:
            episode = _resolve_episode(project, season_id, episode_id)
            episode.pages[page.id] = page.model_copy(deep=True)
        logger.debug(f"Saved page {page.id} in {season_id}/{episode_id}")

    def save_scene(self, season_id: str, episode_id: str, scene: Page) -> None:
        self.save_page(season_id, episode_id, scene)

    def save_active_scene(self, scene: Page) -> None:
        """Insert or replace a scene in the episode that is open in the editor."""
        with self.store.transaction() as project:
            season_id = project.active_season_id
            episode_id = project.active_episode_id
            if not (season_id and episode_id):
                raise NotFoundError("No active episode to save the scene into")
            episode = _resolve_episode(project, season_id, episode_id)
            episode.pages[scene.id] = scene.model_copy(deep=True)
        logger.debug(f"Saved scene {scene.id} in active episode {season_id}/{episode_id}")

    def delete_page(self, season_id: str, episode_id: str, page_id: str) -> None:
        with self.store.transaction() as project:
            episode = _resolve_episode(project, season_id, episode_id)
            if episode.pages.pop(page_id, None) is None:
                raise NotFoundError(f"Page {page_id} not found in episode {episode_id}")
            if (project.active_season_id, project.active_episode_id, project.active_page_id) == (
                season_id,
                episode_id,
                page_id,
            ):
                project.active_page_id = None
        logger.debug(f"Deleted page {page_id} from {season_id}/{episode_id}")

    def delete_scene(self, season_id: str, episode_id: str, scene_id: str) -> None:
        self.delete_page(season_id, episode_id, scene_id)

    def delete_episode(self, season_id: str, episode_id: str) -> None:
        with self.store.transaction() as project:
            season = _resolve_season(project, season_id)
            if season.episodes.pop(episode_id, None) is None:
                raise NotFoundError(f"Episode {episode_id} not found in season {season_id}")
            if (project.active_season_id, project.active_episode_id) == (season_id, episode_id):
                project.active_episode_id = None
                project.active_page_id = None
        logger.debug(f"Deleted episode {episode_id} from season {season_id}")

    def delete_season(self, season_id: str) -> None:
        with self.store.transaction() as project:
            if project.seasons.pop(season_id, None) is None:
                raise NotFoundError(f"Season {season_id} not found")
            if project.active_season_id == season_id:
                project.active_season_id = None
                project.active_episode_id = None
                project.active_page_id = None
        logger.debug(f"Deleted season {season_id}")

    def create_season(self, name: str) -> Season:
        with self.store.transaction() as project:
            season = Season(id=_new_id("s", project.seasons), name=name)
            project.seasons[season.id] = season
            return season.model_copy(deep=True)

    def create_episode(self, season_id: str, name: str) -> Episode:
        with self.store.transaction() as project:
            season = _resolve_season(project, season_id)
            episode = Episode(id=_new_id("ep", season.episodes), name=name)
            season.episodes[episode.id] = episode
            return episode.model_copy(deep=True)

    def create_page(self, season_id: str, episode_id: str, name: str) -> Page:
        """Create an empty page and open it in the editor."""
        with self.store.transaction() as project:
            episode = _resolve_episode(project, season_id, episode_id)
            page = Page(id=_new_id("page", episode.pages), name=name)
            episode.pages[page.id] = page
            _open_page(project, season_id, episode_id, page.id)
            return page.model_copy(deep=True)

    def open_page(self, season_id: str, episode_id: str, page_id: str) -> ScriptGraph:
        """Point the editor cursors at a page and return its script graph.

        A starter graph is created for pages that do not have one yet.
        """
        with self.store.transaction() as project:
            episode = _resolve_episode(project, season_id, episode_id)
            if page_id not in episode.pages:
                raise NotFoundError(f"Page {page_id} not found in episode {episode_id}")
            return _open_page(project, season_id, episode_id, page_id).model_copy(deep=True)

    # =========================================================================
    # Characters and scripts
    # =========================================================================

    def save_character(self, character: Character) -> None:
        with self.store.transaction() as project:
            project.characters[character.id] = character.model_copy(deep=True)

    def delete_character(self, character_id: str) -> None:
        with self.store.transaction() as project:
            if project.characters.pop(character_id, None) is None:
                raise NotFoundError(f"Character {character_id} not found")

    def save_script_graph(self, graph: ScriptGraph) -> None:
        with self.store.transaction() as project:
            project.script_graphs[graph.id] = graph.model_copy(deep=True)
        logger.debug(f"Saved script graph {graph.id} ({len(graph.nodes)} nodes)")

    def delete_script_graph(self, graph_id: str) -> None:
        with self.store.transaction() as project:
            if project.script_graphs.pop(graph_id, None) is None:
                raise NotFoundError(f"Script graph {graph_id} not found")

    # =========================================================================
    # Assets and checks
    # =========================================================================

    def import_file(self, path: Union[str, Path]) -> str:
        """Copy a file into the project's assets and return its reference."""
        with self.store.locked_path() as project_path:
            return import_asset(project_path, path, self.store.settings.assets_dir_name)

    def get_project_assets(self) -> list[str]:
        with self.store.locked_path() as project_path:
            return list_assets(project_path, self.store.settings.assets_dir_name)

    def check_integrity(self) -> list[IntegrityIssue]:
        with self.store.transaction() as project:
            return check_project(project)

    # =========================================================================
    # Front-end boundary
    # =========================================================================

    def _bind_arguments(self, method_name: str, arguments: dict[str, Any]) -> dict[str, Any]:
        func = getattr(type(self), method_name)
        hints = get_type_hints(func)
        parameters = inspect.signature(getattr(self, method_name)).parameters

        bound = {}
        for key, value in arguments.items():
            name = to_snake(key)
            if name == "id" and name not in parameters:
                name = LEAF_ID_ARGUMENTS.get(method_name, name)
            if name in bound:
                raise ParseError(f"Duplicate argument '{key}'")
            if name not in parameters:
                raise ParseError(f"Unexpected argument '{key}'")
            try:
                bound[name] = TypeAdapter(hints.get(name, Any)).validate_python(value)
            except ValidationError as e:
                raise ParseError(f"Invalid argument '{key}': {e}") from e

        missing = [
            name for name, param in parameters.items()
            if param.default is inspect.Parameter.empty and name not in bound
        ]
        if missing:
            raise ParseError(f"Missing argument(s): {', '.join(missing)}")
        return bound

    def invoke(self, command: str, **arguments: Any) -> Union[Success, Failure]:
        """Run a command by its front-end name and report the outcome."""
        try:
            method_name = COMMANDS.get(command)
            if command == "saveScene" and set(arguments) == {"scene"}:
                # flat form from editors without seasons
                method_name = "save_active_scene"
            if method_name is None:
                raise UnknownCommandError(f"Unknown command: {command}")
            value = getattr(self, method_name)(**self._bind_arguments(method_name, arguments))
        except StoreError as e:
            logger.debug(f"{command} failed: {e.message}")
            return Failure(kind=e.kind, message=e.message)
        return Success(value=_to_wire(value))
