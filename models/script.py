"""Script graph models.

Graphs are stored, never executed. Node ``data`` is an opaque value owned by
the editor front end; :meth:`ScriptNode.payload` offers a typed view of it
for the node types whose shape is known.
"""

from typing import Any, Optional

from pydantic import ConfigDict, Field, ValidationError, model_validator

from .base import EditorModel, SnakeCaseEnum, normalize_type_key


class NodeType(SnakeCaseEnum):
    """Every node kind any saved project has used."""

    START = "start"
    END = "end"
    TEXT = "text"
    DIALOGUE = "dialogue"
    CHOICE = "choice"
    JUMP = "jump"
    SET_FLAG = "set_flag"
    SET_VARIABLE = "set_variable"
    CHECK_VARIABLE = "check_variable"
    CHANGE_SCENE = "change_scene"
    CHANGE_PAGE = "change_page"
    MUSIC = "music"
    CHARACTER = "character"
    BACKGROUND = "background"
    SCENE_NODE = "scene_node"


# =============================================================================
# Node payloads
# =============================================================================


class NodePayload(EditorModel):
    """Typed view over node data. Unknown keys are kept."""

    model_config = ConfigDict(extra="allow")


class LinePayload(NodePayload):
    """Text and dialogue nodes."""

    character_id: Optional[str] = None
    text: str = ""


class ChoiceOption(NodePayload):
    id: str
    label: str = ""


class ChoicePayload(NodePayload):
    choices: list[ChoiceOption] = Field(default_factory=list)


class JumpPayload(NodePayload):
    target: Optional[str] = None


class SetFlagPayload(NodePayload):
    flag: str = ""
    value: bool = True


class SetVariablePayload(NodePayload):
    variable: str = ""
    value: Any = None


class CheckVariablePayload(NodePayload):
    variable: str = ""
    operator: str = "=="
    value: Any = None


class ChangeScenePayload(NodePayload):
    target_id: Optional[str] = None


class MusicPayload(NodePayload):
    track: Optional[str] = None
    loop: bool = True
    volume: float = 1.0


class CharacterPayload(NodePayload):
    character_id: Optional[str] = None
    sprite: Optional[str] = None
    action: Optional[str] = None


class BackgroundPayload(NodePayload):
    image: Optional[str] = None


NODE_PAYLOADS: dict[NodeType, type[NodePayload]] = {
    NodeType.TEXT: LinePayload,
    NodeType.DIALOGUE: LinePayload,
    NodeType.CHOICE: ChoicePayload,
    NodeType.JUMP: JumpPayload,
    NodeType.SET_FLAG: SetFlagPayload,
    NodeType.SET_VARIABLE: SetVariablePayload,
    NodeType.CHECK_VARIABLE: CheckVariablePayload,
    NodeType.CHANGE_SCENE: ChangeScenePayload,
    NodeType.CHANGE_PAGE: ChangeScenePayload,
    NodeType.MUSIC: MusicPayload,
    NodeType.CHARACTER: CharacterPayload,
    NodeType.BACKGROUND: BackgroundPayload,
}


# =============================================================================
# Graph
# =============================================================================


class ScriptNode(EditorModel):
    """A node in a script graph."""

    id: str
    label: Optional[str] = Field(default=None)
    node_type: NodeType = Field(alias="type")
    x: float = Field(default=0.0)
    y: float = Field(default=0.0)
    data: Any = Field(
        default_factory=dict,
        description="Node contents; shape depends on the node type and is not validated",
    )

    @model_validator(mode="before")
    @classmethod
    def _normalize_type(cls, data):
        return normalize_type_key(data)

    def payload(self) -> Any:
        """Return the typed payload for this node, or the raw data.

        The raw value comes back unchanged when the node type has no known
        payload or the data does not fit it.
        """
        model = NODE_PAYLOADS.get(self.node_type)
        if model is None or not isinstance(self.data, dict):
            return self.data
        try:
            return model.model_validate(self.data)
        except ValidationError:
            return self.data


class ScriptConnection(EditorModel):
    """An edge between two node ports. Endpoints are not checked on write."""

    id: str
    from_node: str
    from_port: str
    to_node: str
    to_port: str


class ScriptGraph(EditorModel):
    """A node-and-connection graph of branching narrative logic."""

    id: str
    name: str = Field(default="Untitled Script")
    nodes: list[ScriptNode] = Field(default_factory=list)
    connections: list[ScriptConnection] = Field(default_factory=list)

    def get_node(self, node_id: str) -> Optional[ScriptNode]:
        """Get a node by its ID."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    @property
    def start_node(self) -> Optional[ScriptNode]:
        for node in self.nodes:
            if node.node_type == NodeType.START:
                return node
        return None

    @classmethod
    def default_for_page(cls, page_id: str) -> "ScriptGraph":
        """Create the starter graph opened for a page that has none."""
        return cls(
            id=page_id,
            name=f"Script for {page_id}",
            nodes=[
                ScriptNode(
                    id=f"start_{page_id}",
                    node_type=NodeType.START,
                    x=100,
                    y=100,
                    data={},
                )
            ],
        )
