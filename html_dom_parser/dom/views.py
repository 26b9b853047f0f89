"""Data models describing query results."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field

from lxml import etree


class NodeSummary(BaseModel):
    """Flat description of a matched node."""

    tag: Optional[str] = Field(default=None, description="Element tag, None for text/attribute results")
    attributes: Dict[str, str] = Field(default_factory=dict, description="Element attributes")
    text: str = Field(default="", description="Text content, truncated")
    line: Optional[int] = Field(default=None, description="Source line of the element")

    @classmethod
    def from_node(cls, node: Any, max_text: int = 80) -> "NodeSummary":
        """Build a summary from an element or a string result."""
        if not isinstance(node, etree._Element):
            return cls(text=str(node)[:max_text])

        text = " ".join("".join(node.itertext()).split())
        return cls(
            tag=node.tag if isinstance(node.tag, str) else None,
            attributes={str(k): str(v) for k, v in node.attrib.items()},
            text=text[:max_text],
            line=node.sourceline,
        )


class QueryResult(BaseModel):
    """Outcome of one lookup."""

    expression: str
    nodes: List[NodeSummary] = Field(default_factory=list)

    @classmethod
    def from_nodes(cls, expression: str, nodes: Optional[List[Any]]) -> "QueryResult":
        """Build a result; None (no match) gives an empty result."""
        return cls(
            expression=expression,
            nodes=[NodeSummary.from_node(n) for n in nodes or []],
        )

    @property
    def found(self) -> bool:
        """Whether anything matched."""
        return bool(self.nodes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return self.model_dump()
