"""Style constants used to lay out nodes and ports.

All values are in pixels. ``GraphStyles`` bundles them so a graph can be
laid out with a different look without touching module globals.
"""

from dataclasses import dataclass

# Port geometry (pixels)
PORT_PADDING = 4
INPUT_PORT_RADIUS = 10
AUDIO_PARAM_RADIUS = 5

# Text margins (pixels)
LEFT_MARGIN_OF_TEXT = 12
RIGHT_MARGIN_OF_TEXT = 30

# Node padding (pixels)
LEFT_SIDE_TOP_PADDING = 5
BOTTOM_PADDING_WITHOUT_PARAM = 6
BOTTOM_PADDING_WITH_PARAM = 8

# CSS font shorthand used to measure labels
NODE_LABEL_FONT_STYLE = "14px Segoe UI, Arial"
PARAM_LABEL_FONT_STYLE = "12px Segoe UI, Arial"


@dataclass(frozen=True)
class GraphStyles:
    """Pixel constants for node and port layout.

    Parameters
    ----------
    port_padding : int
        Vertical gap between adjacent ports (default: 4)
    input_port_radius : int
        Radius of input and output ports (default: 10)
    audio_param_radius : int
        Radius of param ports (default: 5)
    left_margin_of_text : int
        Space left of the widest label (default: 12)
    right_margin_of_text : int
        Space right of the widest label (default: 30)
    left_side_top_padding : int
        Space above the first input port (default: 5)
    bottom_padding_without_param : int
        Space below the input section when the node has no params (default: 6)
    bottom_padding_with_param : int
        Space below the last param port (default: 8)
    node_label_font_style : str
        Font used to measure the node label
    param_label_font_style : str
        Font used to measure param labels
    """

    port_padding: int = PORT_PADDING
    input_port_radius: int = INPUT_PORT_RADIUS
    audio_param_radius: int = AUDIO_PARAM_RADIUS
    left_margin_of_text: int = LEFT_MARGIN_OF_TEXT
    right_margin_of_text: int = RIGHT_MARGIN_OF_TEXT
    left_side_top_padding: int = LEFT_SIDE_TOP_PADDING
    bottom_padding_without_param: int = BOTTOM_PADDING_WITHOUT_PARAM
    bottom_padding_with_param: int = BOTTOM_PADDING_WITH_PARAM
    node_label_font_style: str = NODE_LABEL_FONT_STYLE
    param_label_font_style: str = PARAM_LABEL_FONT_STYLE

    @property
    def total_input_port_height(self) -> int:
        """Vertical pitch of one input port row."""
        return self.input_port_radius * 2 + self.port_padding

    @property
    def total_output_port_height(self) -> int:
        """Vertical pitch of one output port row."""
        return self.total_input_port_height

    @property
    def total_param_port_height(self) -> int:
        """Vertical pitch of one param port row."""
        return self.audio_param_radius * 2 + self.port_padding


DEFAULT_STYLES = GraphStyles()
