"""Port placement within a node.

Pure functions: results depend only on the arguments and the styles, so
they can be replayed whenever a node's size changes. Coordinates are
relative to the node's top-left corner. Input and param ports are placed
at the top of their row; outputs are centered on their row.
"""

from typing import Tuple

from .styles import DEFAULT_STYLES, GraphStyles


def input_port_xy(index: int, styles: GraphStyles = DEFAULT_STYLES) -> Tuple[float, float]:
    """Position of input ``index`` on the left edge.

    Input rows start below the top padding, one ``total_input_port_height``
    apart.
    """
    y = styles.left_side_top_padding + index * styles.total_input_port_height
    return (0, y)


def output_port_xy(
    index: int,
    node_size: Tuple[float, float],
    number_of_outputs: int,
    styles: GraphStyles = DEFAULT_STYLES,
) -> Tuple[float, float]:
    """Position of output ``index`` on the right edge.

    Outputs form a stack of ``number_of_outputs`` rows centered on the
    node's vertical midpoint, so the result changes with the node height.

    Parameters
    ----------
    index : int
        0-based output index
    node_size : tuple of (float, float)
        Current ``(width, height)`` of the node
    number_of_outputs : int
        Total outputs of the node
    styles : GraphStyles
        Layout constants

    Returns
    -------
    tuple of (float, float)
        ``(x, y)`` offset of the port center
    """
    width, height = node_size
    pitch = styles.total_output_port_height
    y = height / 2 + (2 * index - number_of_outputs + 1) * pitch / 2
    return (width, y)


def param_port_xy(
    number_of_existing_params: int,
    input_section_height: float,
    styles: GraphStyles = DEFAULT_STYLES,
) -> Tuple[float, float]:
    """Position of the next param port, stacked below the input section."""
    y = input_section_height + number_of_existing_params * styles.total_param_port_height
    return (0, y)
