"""Upgrades for project documents written by earlier editor versions.

Every document is brought to the current shape before validation:

* version 1 kept a flat ``scenes`` map on the project; those scenes are
  lifted into a default season and episode as pages.
* version 2 nested seasons and episodes but episodes held ``scenes`` and the
  cursor was ``activeSceneId``.
* version 3 (current) uses ``pages`` and ``activePageId``.

Documents without ``schemaVersion`` are identified by their shape. Enum
values written in any earlier spelling (``set-flag``, ``SetFlag``) are
rewritten as snake_case.
"""

import copy
import logging
from typing import Any, Iterator

from .base import normalize_enum_spelling

logger = logging.getLogger(__name__)

CURRENT_SCHEMA_VERSION = 3

DEFAULT_SEASON_ID = "s_1"
DEFAULT_EPISODE_ID = "ep_1"


def _dicts(container: Any) -> Iterator[dict]:
    if isinstance(container, dict):
        container = container.values()
    elif not isinstance(container, list):
        return
    for item in container:
        if isinstance(item, dict):
            yield item


def detect_schema_version(data: dict) -> int:
    """Return the declared schema version, or infer it from the shape."""
    version = data.get("schemaVersion", data.get("schema_version"))
    if version is not None:
        if isinstance(version, bool) or not isinstance(version, int):
            raise ValueError(f"schemaVersion must be an integer, got {version!r}")
        return version

    if "scenes" in data and not data.get("seasons"):
        return 1
    if "activeSceneId" in data:
        return 2
    for season in _dicts(data.get("seasons")):
        for episode in _dicts(season.get("episodes")):
            if "scenes" in episode:
                return 2
    return CURRENT_SCHEMA_VERSION


def migrate_episode_data(data: dict) -> dict:
    """Rename an episode's ``scenes`` map to ``pages``."""
    if "scenes" in data and "pages" not in data:
        data = dict(data)
        data["pages"] = data.pop("scenes")
    return data


def _lift_flat_scenes(data: dict) -> None:
    scenes = data.pop("scenes", None) or {}
    if isinstance(scenes, list):
        keyed = {}
        for scene in _dicts(scenes):
            scene_id = scene.get("id")
            if not isinstance(scene_id, str):
                raise ValueError(f"Scene ID must be a string, got {scene_id!r}")
            keyed[scene_id] = scene
        scenes = keyed

    data["seasons"] = {
        DEFAULT_SEASON_ID: {
            "id": DEFAULT_SEASON_ID,
            "name": "Season 1",
            "episodes": {
                DEFAULT_EPISODE_ID: {
                    "id": DEFAULT_EPISODE_ID,
                    "name": "Episode 1",
                    "pages": scenes,
                }
            },
        }
    }
    # flat scenes now live here, so saves without a season/episode land here too
    data["activeSeasonId"] = DEFAULT_SEASON_ID
    data["activeEpisodeId"] = DEFAULT_EPISODE_ID


def _normalize_type_field(item: dict) -> None:
    value = item.get("type")
    if isinstance(value, str):
        item["type"] = normalize_enum_spelling(value)


def _normalize_types(data: dict) -> None:
    for season in _dicts(data.get("seasons")):
        for episode in _dicts(season.get("episodes")):
            for page in _dicts(episode.get("pages")):
                for element in _dicts(page.get("elements")):
                    _normalize_type_field(element)
    for graph in _dicts(data.get("scriptGraphs")):
        for node in _dicts(graph.get("nodes")):
            _normalize_type_field(node)


def migrate_project_data(data: dict) -> dict:
    """Return a copy of ``data`` in the current schema.

    Raises:
        ValueError: If the document declares a newer or malformed version.
    """
    version = detect_schema_version(data)
    if version > CURRENT_SCHEMA_VERSION:
        raise ValueError(
            f"Project schema version {version} is newer than the supported "
            f"version {CURRENT_SCHEMA_VERSION}"
        )

    data = copy.deepcopy(data)

    if version < 2:
        _lift_flat_scenes(data)

    if "activeSceneId" in data:
        active_scene_id = data.pop("activeSceneId")
        data.setdefault("activePageId", active_scene_id)

    for season in _dicts(data.get("seasons")):
        episodes = season.get("episodes")
        if isinstance(episodes, dict):
            season["episodes"] = {
                key: migrate_episode_data(episode) if isinstance(episode, dict) else episode
                for key, episode in episodes.items()
            }

    _normalize_types(data)

    data.pop("schema_version", None)
    data["schemaVersion"] = CURRENT_SCHEMA_VERSION

    if version < CURRENT_SCHEMA_VERSION:
        logger.info(f"Upgraded project document from schema {version} to {CURRENT_SCHEMA_VERSION}")
    return data
