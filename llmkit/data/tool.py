"""
Tool (function) specifications offered to chat models.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class ToolParameters:
    """
    JSON Schema of a tool's arguments.

    Attributes:
        properties: Property name -> schema fragment (type, description, enum, ...)
        required: Names of required properties
    """
    properties: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    required: List[str] = field(default_factory=list)
    type: str = "object"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "properties": self.properties, "required": self.required}


@dataclass
class ToolSpecification:
    name: str
    description: Optional[str] = None
    parameters: Optional[ToolParameters] = None

    def to_dict(self) -> Dict[str, Any]:
        spec: Dict[str, Any] = {"name": self.name}
        if self.description is not None:
            spec["description"] = self.description
        spec["parameters"] = (self.parameters or ToolParameters()).to_dict()
        return spec
