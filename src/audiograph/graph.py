"""Graph model that owns node views and the edges between their ports.

``GraphView`` applies node, param and connection events for one audio
context. Each graph has its own ``NodeLabelGenerator``, so node numbering
is per graph. ``GraphManager`` keeps one graph per context.

Example
-------
>>> from audiograph import GraphView, NodeCreationData, NodesConnectedData
>>> graph = GraphView('ctx')
>>> osc = graph.add_node(NodeCreationData('a', 'OscillatorNode', 0, 1))
>>> dest = graph.add_node(NodeCreationData('b', 'AudioDestinationNode', 1, 0))
>>> osc.label, dest.label
('Oscillator 1', 'AudioDestination 2')
>>> graph.add_node_to_node_connection(NodesConnectedData('a', 'b')).id
'a-output-0->b-input-0'
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional
import warnings

from .labels import NodeLabelGenerator
from .node_view import NodeCreationData, NodeView, ParamCreationData
from .ports import (
    Port,
    generate_input_port_id,
    generate_output_port_id,
    generate_param_port_id,
)
from .styles import DEFAULT_STYLES, GraphStyles
from .text import FontSizeMeasurer, TextMeasurer


class GraphError(ValueError):
    """Base class for errors raised by the graph model."""

    pass


class NodeNotFoundError(GraphError):
    """Raised when an event refers to a node that is not in the graph."""

    pass


class ParamNotFoundError(GraphError):
    """Raised when an event refers to a param that is not in the graph."""

    pass


class InvalidConnectionError(GraphError):
    """Raised when a connection refers to a port the node does not have."""

    pass


class GraphNotFoundError(GraphError):
    """Raised when no graph exists for a context id."""

    pass


class DuplicateNodeWarning(UserWarning):
    """Warning issued when a node id is created twice in one graph."""

    pass


class DuplicateParamWarning(UserWarning):
    """Warning issued when a param is created twice on one node."""

    pass


class EdgeType(str, Enum):
    """Kinds of edges."""

    NODE_TO_NODE = "NodeToNode"
    NODE_TO_PARAM = "NodeToParam"


def generate_edge_id(source_port_id: str, destination_port_id: str) -> str:
    """Return the id of the edge between two ports."""
    return f"{source_port_id}->{destination_port_id}"


@dataclass(frozen=True)
class NodesConnectedData:
    """A node-to-node connection or disconnection event.

    ``destination_id`` may be ``None`` only for disconnections, where it
    means "everything this source is connected to".
    """

    source_id: str
    destination_id: Optional[str] = None
    source_output_index: Optional[int] = None
    destination_input_index: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NodesConnectedData":
        """Build from an event payload with camelCase keys."""
        return cls(
            source_id=data["sourceId"],
            destination_id=data.get("destinationId"),
            source_output_index=data.get("sourceOutputIndex"),
            destination_input_index=data.get("destinationInputIndex"),
        )


@dataclass(frozen=True)
class NodeParamConnectedData:
    """A node-to-param connection or disconnection event.

    Events name the destination param only; the graph resolves the node
    that owns it.
    """

    source_id: str
    destination_param_id: str
    source_output_index: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NodeParamConnectedData":
        """Build from an event payload with camelCase keys.

        The payload's ``destinationId`` is the id of the param.
        """
        return cls(
            source_id=data["sourceId"],
            destination_param_id=data["destinationId"],
            source_output_index=data.get("sourceOutputIndex"),
        )


@dataclass(frozen=True)
class EdgeView:
    """A directed edge from an output port to an input or param port."""

    id: str
    type: EdgeType
    source_id: str
    destination_id: str
    source_port_id: str
    destination_port_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "sourceId": self.source_id,
            "destinationId": self.destination_id,
            "sourcePortId": self.source_port_id,
            "destinationPortId": self.destination_port_id,
        }


class GraphView:
    """Nodes and edges of one audio context.

    Parameters
    ----------
    context_id : str
        Id of the audio context this graph belongs to
    measurer : TextMeasurer, optional
        Shared by every node of the graph (default: ``FontSizeMeasurer()``)
    styles : GraphStyles
        Layout constants for every node (default: ``DEFAULT_STYLES``)
    """

    nodes: Dict[str, NodeView]
    edges: Dict[str, EdgeView]

    def __init__(
        self,
        context_id: str,
        measurer: Optional[TextMeasurer] = None,
        styles: GraphStyles = DEFAULT_STYLES,
    ) -> None:
        self.context_id = context_id
        self.measurer: TextMeasurer = measurer if measurer is not None else FontSizeMeasurer()
        self.styles = styles
        self.nodes = {}
        self.edges = {}
        self._label_generator = NodeLabelGenerator()
        # param id -> owning node id
        self._param_owners: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __iter__(self) -> Iterator[NodeView]:
        return iter(self.nodes.values())

    def __repr__(self) -> str:
        return f"GraphView({self.context_id!r}, nodes={len(self.nodes)}, edges={len(self.edges)})"

    def add_node(self, data: NodeCreationData) -> NodeView:
        """Create the view for a new node.

        Re-creating an existing node id issues ``DuplicateNodeWarning``; the
        old node and its edges are discarded.
        """
        if data.node_id in self.nodes:
            warnings.warn(
                f"Node {data.node_id!r} already exists in graph {self.context_id!r}; replacing it",
                DuplicateNodeWarning,
                stacklevel=2,
            )
            self.remove_node(data.node_id)

        label = self._label_generator.generate_label(data.node_type)
        node = NodeView(data, label, measurer=self.measurer, styles=self.styles)
        self.nodes[node.id] = node
        return node

    def remove_node(self, node_id: str) -> NodeView:
        """Remove a node with its edges and params, returning it."""
        node = self.get_node_by_id(node_id)
        for edge in self.get_edges_by_node(node_id):
            del self.edges[edge.id]
        for param_id in [p for p, owner in self._param_owners.items() if owner == node_id]:
            del self._param_owners[param_id]
        del self.nodes[node_id]
        return node

    def get_node_by_id(self, node_id: str) -> NodeView:
        """Return the node with ``node_id``.

        Raises
        ------
        NodeNotFoundError
            If the graph has no such node
        """
        node = self.nodes.get(node_id)
        if node is None:
            raise NodeNotFoundError(f"Node {node_id!r} not found in graph {self.context_id!r}")
        return node

    def add_param(self, data: ParamCreationData) -> Port:
        """Add a param port to its node.

        A param id seen before on the same node issues
        ``DuplicateParamWarning`` and leaves the node unchanged.
        """
        node = self.get_node_by_id(data.node_id)
        port_id = generate_param_port_id(node.id, data.param_id)
        existing = node.ports.get(port_id)
        if existing is not None:
            warnings.warn(
                f"Param {data.param_id!r} already exists on node {node.id!r}; ignoring",
                DuplicateParamWarning,
                stacklevel=2,
            )
            self._param_owners[data.param_id] = node.id
            return existing

        port = node.add_param_port(data.param_id, data.param_type)
        self._param_owners[data.param_id] = node.id
        return port

    def remove_param(self, param_id: str) -> None:
        """Forget a param and drop the edges into it.

        The port stays on its node; ports are only discarded with the node.
        """
        node_id = self._param_owners.pop(param_id, None)
        if node_id is None:
            raise ParamNotFoundError(f"Param {param_id!r} not found in graph {self.context_id!r}")
        port_id = generate_param_port_id(node_id, param_id)
        for edge_id in [e.id for e in self.edges.values() if e.destination_port_id == port_id]:
            del self.edges[edge_id]

    def get_node_id_for_param(self, param_id: str) -> str:
        """Return the id of the node that owns ``param_id``."""
        node_id = self._param_owners.get(param_id)
        if node_id is None:
            raise ParamNotFoundError(f"Param {param_id!r} not found in graph {self.context_id!r}")
        return node_id

    def add_node_to_node_connection(self, data: NodesConnectedData) -> EdgeView:
        """Connect an output of one node to an input of another."""
        if data.destination_id is None:
            raise InvalidConnectionError("A connection needs a destination node")
        source_port_id = generate_output_port_id(data.source_id, data.source_output_index)
        destination_port_id = generate_input_port_id(
            data.destination_id, data.destination_input_index
        )
        return self._add_edge(
            EdgeType.NODE_TO_NODE,
            data.source_id,
            data.destination_id,
            source_port_id,
            destination_port_id,
        )

    def remove_node_to_node_connection(self, data: NodesConnectedData) -> List[EdgeView]:
        """Remove node-to-node edges, returning the removed edges.

        With a destination, only the matching edge is removed. Without one,
        every edge leaving the source is removed, or only those leaving
        ``source_output_index`` when it is given.
        """
        if data.destination_id is not None:
            edge_id = generate_edge_id(
                generate_output_port_id(data.source_id, data.source_output_index),
                generate_input_port_id(data.destination_id, data.destination_input_index),
            )
            edge = self.edges.pop(edge_id, None)
            return [edge] if edge is not None else []

        removed = []
        source_port_id = None
        if data.source_output_index is not None:
            source_port_id = generate_output_port_id(data.source_id, data.source_output_index)
        for edge in list(self.edges.values()):
            if edge.source_id != data.source_id:
                continue
            if source_port_id is not None and edge.source_port_id != source_port_id:
                continue
            removed.append(self.edges.pop(edge.id))
        return removed

    def add_node_to_param_connection(self, data: NodeParamConnectedData) -> EdgeView:
        """Connect an output of a node to a param of another."""
        destination_id = self.get_node_id_for_param(data.destination_param_id)
        return self._add_edge(
            EdgeType.NODE_TO_PARAM,
            data.source_id,
            destination_id,
            generate_output_port_id(data.source_id, data.source_output_index),
            generate_param_port_id(destination_id, data.destination_param_id),
        )

    def remove_node_to_param_connection(self, data: NodeParamConnectedData) -> Optional[EdgeView]:
        """Remove a node-to-param edge, returning it if it existed."""
        destination_id = self._param_owners.get(data.destination_param_id)
        if destination_id is None:
            return None
        edge_id = generate_edge_id(
            generate_output_port_id(data.source_id, data.source_output_index),
            generate_param_port_id(destination_id, data.destination_param_id),
        )
        return self.edges.pop(edge_id, None)

    def get_edges_by_node(self, node_id: str) -> List[EdgeView]:
        """Return every edge that starts or ends at ``node_id``."""
        return [
            edge
            for edge in self.edges.values()
            if edge.source_id == node_id or edge.destination_id == node_id
        ]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize nodes and edges for the renderer."""
        return {
            "contextId": self.context_id,
            "nodes": [node.to_dict() for node in self.nodes.values()],
            "edges": [edge.to_dict() for edge in self.edges.values()],
        }

    def _add_edge(
        self,
        edge_type: EdgeType,
        source_id: str,
        destination_id: str,
        source_port_id: str,
        destination_port_id: str,
    ) -> EdgeView:
        source = self.get_node_by_id(source_id)
        destination = self.get_node_by_id(destination_id)
        if not source.has_port(source_port_id):
            raise InvalidConnectionError(
                f"Node {source_id!r} has no port {source_port_id!r} "
                f"(has {source.number_of_outputs} output{'s' if source.number_of_outputs != 1 else ''})"
            )
        if not destination.has_port(destination_port_id):
            raise InvalidConnectionError(
                f"Node {destination_id!r} has no port {destination_port_id!r}"
            )

        edge = EdgeView(
            id=generate_edge_id(source_port_id, destination_port_id),
            type=edge_type,
            source_id=source_id,
            destination_id=destination_id,
            source_port_id=source_port_id,
            destination_port_id=destination_port_id,
        )
        self.edges[edge.id] = edge
        return edge


class GraphManager:
    """Keeps one ``GraphView`` per audio context.

    All graphs share the manager's measurer and styles.
    """

    def __init__(
        self,
        measurer: Optional[TextMeasurer] = None,
        styles: GraphStyles = DEFAULT_STYLES,
    ) -> None:
        self.measurer: TextMeasurer = measurer if measurer is not None else FontSizeMeasurer()
        self.styles = styles
        self._graphs: Dict[str, GraphView] = {}

    def __len__(self) -> int:
        return len(self._graphs)

    @property
    def context_ids(self) -> List[str]:
        return list(self._graphs)

    def create_graph(self, context_id: str) -> GraphView:
        """Return the graph for ``context_id``, creating it if needed."""
        graph = self._graphs.get(context_id)
        if graph is None:
            graph = GraphView(context_id, measurer=self.measurer, styles=self.styles)
            self._graphs[context_id] = graph
        return graph

    def has_graph(self, context_id: str) -> bool:
        return context_id in self._graphs

    def get_graph(self, context_id: str) -> GraphView:
        graph = self._graphs.get(context_id)
        if graph is None:
            raise GraphNotFoundError(f"No graph for context {context_id!r}")
        return graph

    def destroy_graph(self, context_id: str) -> GraphView:
        """Discard the graph for ``context_id`` and return it."""
        graph = self.get_graph(context_id)
        del self._graphs[context_id]
        return graph

    def clear_graphs(self) -> None:
        self._graphs.clear()
