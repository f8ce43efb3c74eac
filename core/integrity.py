"""Integrity check - reports dangling references without blocking writes."""

import logging
from collections import Counter
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from models.project import Project

logger = logging.getLogger(__name__)


class IssueKind(str, Enum):
    """Kinds of inconsistency the check can find."""

    DANGLING_CONNECTION = "dangling_connection"
    DUPLICATE_NODE = "duplicate_node"
    DUPLICATE_ELEMENT = "duplicate_element"
    UNKNOWN_CHARACTER = "unknown_character"
    BROKEN_CURSOR = "broken_cursor"


class IntegrityIssue(BaseModel):
    """One inconsistency found in a project."""

    kind: IssueKind
    location: str = Field(description="Where the issue was found, e.g. 'script:main/conn_1'")
    message: str

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.location}: {self.message}"


def _character_ref(data) -> Optional[str]:
    if isinstance(data, dict):
        value = data.get("characterId")
        if isinstance(value, str) and value:
            return value
    return None


def _check_scripts(project: Project) -> list[IntegrityIssue]:
    issues = []
    for graph in project.script_graphs.values():
        node_ids = Counter(node.id for node in graph.nodes)

        for node_id, count in node_ids.items():
            if count > 1:
                issues.append(IntegrityIssue(
                    kind=IssueKind.DUPLICATE_NODE,
                    location=f"script:{graph.id}/{node_id}",
                    message=f"Node ID used {count} times",
                ))

        for conn in graph.connections:
            for end, node_id in (("from", conn.from_node), ("to", conn.to_node)):
                if node_id not in node_ids:
                    issues.append(IntegrityIssue(
                        kind=IssueKind.DANGLING_CONNECTION,
                        location=f"script:{graph.id}/{conn.id}",
                        message=f"'{end}' node {node_id} does not exist",
                    ))

        for node in graph.nodes:
            character_id = _character_ref(node.data)
            if character_id and character_id not in project.characters:
                issues.append(IntegrityIssue(
                    kind=IssueKind.UNKNOWN_CHARACTER,
                    location=f"script:{graph.id}/{node.id}",
                    message=f"Character {character_id} is not registered",
                ))
    return issues


def _check_pages(project: Project) -> list[IntegrityIssue]:
    issues = []
    for season, episode, page in project.iter_pages():
        where = f"page:{season.id}/{episode.id}/{page.id}"
        element_ids = Counter(element.id for element in page.elements)
        for element_id, count in element_ids.items():
            if count > 1:
                issues.append(IntegrityIssue(
                    kind=IssueKind.DUPLICATE_ELEMENT,
                    location=f"{where}/{element_id}",
                    message=f"Element ID used {count} times",
                ))

        for element in page.elements:
            character_id = element.character_id
            if character_id and character_id not in project.characters:
                issues.append(IntegrityIssue(
                    kind=IssueKind.UNKNOWN_CHARACTER,
                    location=f"{where}/{element.id}",
                    message=f"Character {character_id} is not registered",
                ))
    return issues


def _check_cursors(project: Project) -> list[IntegrityIssue]:
    cursors = (
        project.active_season_id,
        project.active_episode_id,
        project.active_page_id,
    )
    if not any(cursors):
        return []
    season_id, episode_id, page_id = cursors

    problem = None
    if season_id not in project.seasons:
        problem = f"Active season {season_id} does not exist"
    elif episode_id and project.get_episode(season_id, episode_id) is None:
        problem = f"Active episode {episode_id} does not exist"
    elif page_id and (
        not episode_id or project.get_page(season_id, episode_id, page_id) is None
    ):
        problem = f"Active page {page_id} does not exist"

    if problem is None:
        return []
    return [IntegrityIssue(kind=IssueKind.BROKEN_CURSOR, location="project", message=problem)]


def check_project(project: Project) -> list[IntegrityIssue]:
    """
    Find dangling references and duplicate IDs in a project.

    Nothing is changed and nothing is rejected; the editor decides what to do
    with the findings.
    """
    issues = _check_cursors(project) + _check_pages(project) + _check_scripts(project)
    if issues:
        logger.warning(f"Project '{project.name}' has {len(issues)} integrity issue(s)")
    return issues
