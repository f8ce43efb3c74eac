"""Nova Store Data Models"""

from .element import Character, ElementType, SceneElement
from .scene import Episode, Page, Scene, Season
from .script import NodeType, ScriptConnection, ScriptGraph, ScriptNode
from .project import Project
from .migrations import CURRENT_SCHEMA_VERSION

__all__ = [
    "Character",
    "ElementType",
    "SceneElement",
    "Episode",
    "Page",
    "Scene",
    "Season",
    "NodeType",
    "ScriptConnection",
    "ScriptGraph",
    "ScriptNode",
    "Project",
    "CURRENT_SCHEMA_VERSION",
]
