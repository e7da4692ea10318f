"""Per-node layout.

A ``NodeView`` holds everything the renderer needs to draw one audio node:
its label, its size and the offsets of its input, output and param ports.
The size is derived from the port counts and the widest label, and grows
as params are added; it never shrinks.

Example
-------
>>> from audiograph.text import FixedWidthMeasurer
>>> data = NodeCreationData('n1', 'GainNode', number_of_inputs=1, number_of_outputs=1)
>>> node = NodeView(data, 'Gain 1', measurer=FixedWidthMeasurer())
>>> node.add_param_port('p1', 'gain').id
'n1-param-p1'
"""

from dataclasses import dataclass, replace
import math
from typing import Any, Dict, List, Optional, Tuple

from .layout import input_port_xy, output_port_xy, param_port_xy
from .ports import (
    Port,
    PortType,
    generate_input_port_id,
    generate_output_port_id,
    generate_param_port_id,
)
from .styles import DEFAULT_STYLES, GraphStyles
from .text import FontSizeMeasurer, TextMeasurer


@dataclass(frozen=True)
class NodeCreationData:
    """A node-creation event."""

    node_id: str
    node_type: str
    number_of_inputs: int = 0
    number_of_outputs: int = 0

    def __post_init__(self) -> None:
        for name in ("number_of_inputs", "number_of_outputs"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{name} must be int, not {type(value).__name__}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NodeCreationData":
        """Build from an event payload with camelCase keys."""
        return cls(
            node_id=data["nodeId"],
            node_type=data["nodeType"],
            number_of_inputs=data.get("numberOfInputs", 0),
            number_of_outputs=data.get("numberOfOutputs", 0),
        )


@dataclass(frozen=True)
class ParamCreationData:
    """A param-creation event."""

    node_id: str
    param_id: str
    param_type: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParamCreationData":
        """Build from an event payload with camelCase keys."""
        return cls(
            node_id=data["nodeId"],
            param_id=data["paramId"],
            param_type=data["paramType"],
        )


@dataclass(frozen=True)
class Size:
    """Width and height of a node in pixels."""

    width: float = 0
    height: float = 0

    def as_tuple(self) -> Tuple[float, float]:
        return (self.width, self.height)


@dataclass
class NodeLayout:
    """Intermediate measurements a node's size is derived from."""

    input_port_section_height: float = 0
    output_port_section_height: float = 0
    max_text_length: float = 0
    total_height: float = 0


class NodeView:
    """Layout state of one node in an audio graph.

    Parameters
    ----------
    data : NodeCreationData
        Identity and port counts of the node
    label : str
        Display label, usually from ``NodeLabelGenerator``
    measurer : TextMeasurer, optional
        Measures label widths (default: ``FontSizeMeasurer()``)
    styles : GraphStyles
        Layout constants (default: ``DEFAULT_STYLES``)

    Attributes
    ----------
    position : tuple of (float, float) or None
        Center of the node, assigned by the graph layout stage. ``None``
        until then; unplaced nodes must not be rendered.
    ports : dict
        Port id to ``Port``, in insertion order
    """

    position: Optional[Tuple[float, float]]
    ports: Dict[str, Port]

    def __init__(
        self,
        data: NodeCreationData,
        label: str,
        measurer: Optional[TextMeasurer] = None,
        styles: GraphStyles = DEFAULT_STYLES,
    ) -> None:
        self._id = data.node_id
        self._type = data.node_type
        self._number_of_inputs = data.number_of_inputs
        self._number_of_outputs = data.number_of_outputs
        self._label = label
        self._measurer: TextMeasurer = measurer if measurer is not None else FontSizeMeasurer()
        self._styles = styles

        self.size = Size()
        self.position = None
        self._layout = NodeLayout()
        self.ports = {}

        self._update_node_layout_after_adding_node()
        self._setup_input_ports()
        self.recompute_output_layout()

    @property
    def id(self) -> str:
        return self._id

    @property
    def type(self) -> str:
        return self._type

    @property
    def label(self) -> str:
        return self._label

    @property
    def number_of_inputs(self) -> int:
        return self._number_of_inputs

    @property
    def number_of_outputs(self) -> int:
        return self._number_of_outputs

    @property
    def layout(self) -> NodeLayout:
        """A copy of the current layout measurements."""
        return replace(self._layout)

    @property
    def is_placed(self) -> bool:
        """True once the graph layout stage has assigned a position."""
        return self.position is not None

    def add_param_port(self, param_id: str, param_type: str) -> Port:
        """Add a port for an audio param and grow the node to fit it.

        Params are stacked below the input ports in the order they are
        added, so param events for a node must be applied in arrival order.
        There is no matching remove: ports live as long as their node.

        Parameters
        ----------
        param_id : str
            Id of the param, unique within the node
        param_type : str
            Param name shown next to the port, e.g. ``'gain'``

        Returns
        -------
        Port
            The new param port, or the existing one if ``param_id`` was
            already added (the node is left unchanged)
        """
        existing = self.ports.get(generate_param_port_id(self._id, param_id))
        if existing is not None:
            return existing

        number_of_params = len(self.get_ports_by_type(PortType.PARAM))
        x, y = param_port_xy(
            number_of_params, self._layout.input_port_section_height, self._styles
        )
        port = Port(
            id=generate_param_port_id(self._id, param_id),
            type=PortType.PARAM,
            x=x,
            y=y,
            label=param_type,
        )
        self._add_port(port)

        self._update_node_layout_after_adding_param(number_of_params + 1, param_type)
        # The total height may have grown.
        self.recompute_output_layout()
        return port

    def get_ports_by_type(self, port_type: PortType) -> List[Port]:
        """Return ports of ``port_type`` in insertion order."""
        return [port for port in self.ports.values() if port.type == port_type]

    def has_port(self, port_id: str) -> bool:
        """Return True if the node has a port with ``port_id``."""
        return port_id in self.ports

    def recompute_output_layout(self) -> None:
        """Place every output port against the current node size.

        Existing output ports are moved in place and keep their ids; missing
        ones are created. Safe to call any number of times.
        """
        node_size = self.size.as_tuple()
        for i in range(self._number_of_outputs):
            port_id = generate_output_port_id(self._id, i)
            x, y = output_port_xy(i, node_size, self._number_of_outputs, self._styles)
            port = self.ports.get(port_id)
            if port is not None:
                port.x = x
                port.y = y
            else:
                self._add_port(Port(id=port_id, type=PortType.OUTPUT, x=x, y=y))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the node for the renderer."""
        position = None
        if self.position is not None:
            position = {"x": self.position[0], "y": self.position[1]}
        return {
            "id": self._id,
            "type": self._type,
            "label": self._label,
            "size": {"width": self.size.width, "height": self.size.height},
            "position": position,
            "ports": [port.to_dict() for port in self.ports.values()],
        }

    def __repr__(self) -> str:
        return f"NodeView({self._id!r}, {self._label!r}, size={self.size.as_tuple()})"

    def _update_node_layout_after_adding_node(self) -> None:
        styles = self._styles
        # Even with no inputs, leave room for the node label.
        input_section = (
            styles.total_input_port_height * max(1, self._number_of_inputs)
            + styles.left_side_top_padding
        )
        self._layout.input_port_section_height = input_section
        self._layout.output_port_section_height = (
            styles.total_output_port_height * self._number_of_outputs
        )
        self._layout.total_height = max(
            input_section + styles.bottom_padding_without_param,
            self._layout.output_port_section_height,
        )
        self._fold_text_length(self._label, styles.node_label_font_style)
        self._update_node_size()

    def _update_node_layout_after_adding_param(self, number_of_params: int, param_type: str) -> None:
        styles = self._styles
        left_side_height = (
            self._layout.input_port_section_height
            + number_of_params * styles.total_param_port_height
            + styles.bottom_padding_with_param
        )
        self._layout.total_height = max(
            self._layout.total_height,
            left_side_height,
            self._layout.output_port_section_height,
        )
        self._fold_text_length(param_type, styles.param_label_font_style)
        self._update_node_size()

    def _fold_text_length(self, text: str, font_style: str) -> None:
        width = self._measurer.measure_width(text, font_style)
        self._layout.max_text_length = max(self._layout.max_text_length, width)

    def _update_node_size(self) -> None:
        self.size = Size(
            width=math.ceil(
                self._styles.left_margin_of_text
                + self._layout.max_text_length
                + self._styles.right_margin_of_text
            ),
            height=self._layout.total_height,
        )

    def _setup_input_ports(self) -> None:
        for i in range(self._number_of_inputs):
            x, y = input_port_xy(i, self._styles)
            self._add_port(Port(id=generate_input_port_id(self._id, i), type=PortType.INPUT, x=x, y=y))

    def _add_port(self, port: Port) -> None:
        self.ports[port.id] = port
