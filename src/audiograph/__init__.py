"""
audiograph - node layout for audio graph visualizers
====================================================

Sizes the nodes of an audio graph and places their ports, driven by
node, param and connection events.

Example:
  >>> from audiograph import GraphView, NodeCreationData, ParamCreationData
  >>> graph = GraphView('ctx')
  >>> gain = graph.add_node(NodeCreationData('n1', 'GainNode', 1, 1))
  >>> gain.label
  'Gain 1'
  >>> port = graph.add_param(ParamCreationData('n1', 'p1', 'gain'))
  >>> port.id
  'n1-param-p1'

Real font metrics are available through ``audiograph.integrations.qt``.
"""

# Graph model
from .graph import (
    GraphView as GraphView,
    GraphManager as GraphManager,
    EdgeView as EdgeView,
    EdgeType as EdgeType,
    NodesConnectedData as NodesConnectedData,
    NodeParamConnectedData as NodeParamConnectedData,
    generate_edge_id as generate_edge_id,
    # Errors and warnings
    GraphError as GraphError,
    NodeNotFoundError as NodeNotFoundError,
    ParamNotFoundError as ParamNotFoundError,
    InvalidConnectionError as InvalidConnectionError,
    GraphNotFoundError as GraphNotFoundError,
    DuplicateNodeWarning as DuplicateNodeWarning,
    DuplicateParamWarning as DuplicateParamWarning,
)

# Node layout
from .node_view import (
    NodeView as NodeView,
    NodeCreationData as NodeCreationData,
    ParamCreationData as ParamCreationData,
    NodeLayout as NodeLayout,
    Size as Size,
)
from .labels import NodeLabelGenerator as NodeLabelGenerator
from .layout import (
    input_port_xy as input_port_xy,
    output_port_xy as output_port_xy,
    param_port_xy as param_port_xy,
)
from .ports import (
    Port as Port,
    PortType as PortType,
    generate_input_port_id as generate_input_port_id,
    generate_output_port_id as generate_output_port_id,
    generate_param_port_id as generate_param_port_id,
)

# Styles and text measurement
from .styles import GraphStyles as GraphStyles, DEFAULT_STYLES as DEFAULT_STYLES
from .text import (
    TextMeasurer as TextMeasurer,
    FixedWidthMeasurer as FixedWidthMeasurer,
    FontSizeMeasurer as FontSizeMeasurer,
    parse_font_size as parse_font_size,
)
