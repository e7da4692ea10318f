"""Ports and their identifiers.

Port ids are consumed by the renderer and by code that matches
connection events to ports, so their format is fixed:

- ``<node_id>-input-<index>``
- ``<node_id>-output-<index>``
- ``<node_id>-param-<param_id>``
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class PortType(str, Enum):
    """Kinds of node ports."""

    INPUT = "Input"
    OUTPUT = "Output"
    PARAM = "Param"


@dataclass
class Port:
    """A port on a node.

    ``x`` and ``y`` are offsets from the node's top-left corner. Output
    ports are moved in place when their node grows.
    """

    id: str
    type: PortType
    x: float
    y: float
    label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, "type": self.type.value, "x": self.x, "y": self.y}
        if self.label is not None:
            data["label"] = self.label
        return data


def _coerce_port_index(index: Optional[int]) -> int:
    """Validate a port index, mapping ``None`` to 0."""
    if index is None:
        return 0
    if isinstance(index, bool) or not isinstance(index, int):
        raise TypeError(f"Port index must be int, not {type(index).__name__}")
    if index < 0:
        raise ValueError(f"Port index must be non-negative, got {index}")
    return index


def generate_input_port_id(node_id: str, input_index: Optional[int] = None) -> str:
    """Return the id of input ``input_index`` of ``node_id``.

    Parameters
    ----------
    node_id : str
        Id of the owning node
    input_index : int, optional
        0-based input index. ``None`` means input 0.

    Raises
    ------
    TypeError
        If the index is not an int
    ValueError
        If the index is negative
    """
    return f"{node_id}-input-{_coerce_port_index(input_index)}"


def generate_output_port_id(node_id: str, output_index: Optional[int] = None) -> str:
    """Return the id of output ``output_index`` of ``node_id``.

    Same index rules as ``generate_input_port_id``.
    """
    return f"{node_id}-output-{_coerce_port_index(output_index)}"


def generate_param_port_id(node_id: str, param_id: str) -> str:
    """Return the id of the port for param ``param_id`` of ``node_id``."""
    return f"{node_id}-param-{param_id}"
