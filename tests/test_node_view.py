"""Tests for audiograph.node_view module."""

import pytest

from audiograph import (
    FixedWidthMeasurer,
    GraphStyles,
    NodeCreationData,
    NodeView,
    ParamCreationData,
    PortType,
    Size,
)


def make_node(inputs=2, outputs=1, label="Gain 1", node_id="n1", **kwargs):
    data = NodeCreationData(node_id, "GainNode", number_of_inputs=inputs, number_of_outputs=outputs)
    return NodeView(data, label, measurer=FixedWidthMeasurer(char_width=7), **kwargs)


class TestNodeCreationData:
    """Tests for NodeCreationData."""

    def test_from_dict(self):
        data = NodeCreationData.from_dict(
            {
                "contextId": "ctx",
                "nodeId": "n1",
                "nodeType": "GainNode",
                "numberOfInputs": 1,
                "numberOfOutputs": 2,
            }
        )
        assert data == NodeCreationData("n1", "GainNode", 1, 2)

    def test_from_dict_missing_counts(self):
        data = NodeCreationData.from_dict({"nodeId": "n1", "nodeType": "GainNode"})
        assert data.number_of_inputs == 0
        assert data.number_of_outputs == 0

    def test_negative_count_rejected(self):
        with pytest.raises(ValueError):
            NodeCreationData("n1", "GainNode", number_of_inputs=-1)

    def test_non_int_count_rejected(self):
        with pytest.raises(TypeError):
            NodeCreationData("n1", "GainNode", number_of_outputs=1.5)


class TestParamCreationData:
    """Tests for ParamCreationData."""

    def test_from_dict(self):
        data = ParamCreationData.from_dict({"nodeId": "n1", "paramId": "p1", "paramType": "gain"})
        assert data == ParamCreationData("n1", "p1", "gain")


class TestNodeConstruction:
    """Tests for laying out a freshly created node."""

    def test_identity(self):
        node = make_node()
        assert node.id == "n1"
        assert node.type == "GainNode"
        assert node.label == "Gain 1"
        assert node.number_of_inputs == 2
        assert node.number_of_outputs == 1

    def test_label_read_only(self):
        node = make_node()
        with pytest.raises(AttributeError):
            node.label = "other"

    def test_not_placed(self):
        node = make_node()
        assert node.position is None
        assert not node.is_placed
        node.position = (100, 50)
        assert node.is_placed

    def test_layout(self):
        layout = make_node().layout
        assert layout.input_port_section_height == 53
        assert layout.output_port_section_height == 24
        assert layout.total_height == 59
        assert layout.max_text_length == 42

    def test_size(self):
        node = make_node()
        assert node.size == Size(84, 59)
        assert node.size.height == node.layout.total_height

    def test_ports(self):
        node = make_node()
        assert list(node.ports) == ["n1-input-0", "n1-input-1", "n1-output-0"]
        assert (node.ports["n1-input-0"].x, node.ports["n1-input-0"].y) == (0, 5)
        assert (node.ports["n1-input-1"].x, node.ports["n1-input-1"].y) == (0, 29)
        assert (node.ports["n1-output-0"].x, node.ports["n1-output-0"].y) == (84, 29.5)

    def test_input_section_height_formula(self):
        for inputs in range(0, 6):
            node = make_node(inputs=inputs, outputs=0)
            assert node.layout.input_port_section_height == 24 * max(1, inputs) + 5

    def test_zero_inputs_reserves_one_row(self):
        assert make_node(inputs=0).layout.input_port_section_height == make_node(
            inputs=1
        ).layout.input_port_section_height

    def test_zero_outputs(self):
        node = make_node(inputs=1, outputs=0)
        assert node.layout.output_port_section_height == 0
        assert node.size.height == 24 + 5 + 6
        assert node.get_ports_by_type(PortType.OUTPUT) == []

    def test_no_ports(self):
        node = make_node(inputs=0, outputs=0, label="X 1")
        assert node.ports == {}
        assert node.size == Size(63, 35)

    def test_outputs_govern_height(self):
        node = make_node(inputs=0, outputs=3)
        assert node.size.height == 72
        ys = [port.y for port in node.get_ports_by_type(PortType.OUTPUT)]
        assert ys == [12, 36, 60]

    def test_width_rounds_up(self):
        data = NodeCreationData("n1", "GainNode", 1, 1)
        node = NodeView(data, "ab", measurer=FixedWidthMeasurer(char_width=0.3))
        assert node.size.width == 43

    def test_custom_styles(self):
        styles = GraphStyles(left_margin_of_text=0, right_margin_of_text=0)
        node = make_node(styles=styles)
        assert node.size.width == 42

    def test_label_measured_with_node_font(self):
        calls = []

        class RecordingMeasurer:
            def measure_width(self, text, font_style=None):
                calls.append((text, font_style))
                return 10

        data = NodeCreationData("n1", "GainNode", 1, 1)
        NodeView(data, "Gain 1", measurer=RecordingMeasurer())
        assert calls == [("Gain 1", "14px Segoe UI, Arial")]


class TestAddParamPort:
    """Tests for NodeView.add_param_port."""

    def test_adds_param_port(self):
        node = make_node()
        port = node.add_param_port("p1", "gain")
        assert port.id == "n1-param-p1"
        assert port.type == PortType.PARAM
        assert port.label == "gain"
        assert (port.x, port.y) == (0, 53)
        assert node.ports["n1-param-p1"] is port

    def test_grows_height(self):
        node = make_node()
        node.add_param_port("p1", "gain")
        assert node.size.height == 53 + 14 + 8
        assert node.layout.total_height == node.size.height

    def test_relayouts_outputs(self):
        node = make_node()
        output = node.ports["n1-output-0"]
        node.add_param_port("p1", "gain")
        assert node.ports["n1-output-0"] is output
        assert output.y == 37.5
        assert output.x == node.size.width

    def test_params_stack(self):
        node = make_node()
        node.add_param_port("p1", "gain")
        second = node.add_param_port("p2", "detune")
        assert second.y == 53 + 14

    def test_wide_param_label_widens_node(self):
        node = make_node()
        node.add_param_port("p1", "playbackRate")
        assert node.layout.max_text_length == 84
        assert node.size.width == 126
        assert node.ports["n1-output-0"].x == 126

    def test_short_param_label_keeps_width(self):
        node = make_node()
        node.add_param_port("p1", "Q")
        assert node.size.width == 84

    def test_height_and_text_length_never_decrease(self):
        node = make_node(inputs=1, outputs=6)
        heights = [node.layout.total_height]
        lengths = [node.layout.max_text_length]
        for i, name in enumerate(["frequency", "Q", "gain", "detune", "x"]):
            node.add_param_port(f"p{i}", name)
            heights.append(node.layout.total_height)
            lengths.append(node.layout.max_text_length)
        assert heights == sorted(heights)
        assert lengths == sorted(lengths)

    def test_outputs_stay_inside_node(self):
        node = make_node(inputs=1, outputs=4)
        for i in range(6):
            node.add_param_port(f"p{i}", "gain")
            outputs = node.get_ports_by_type(PortType.OUTPUT)
            ys = [port.y for port in outputs]
            assert all(0 <= y <= node.size.height for y in ys)
            gaps = {b - a for a, b in zip(ys, ys[1:])}
            assert gaps == {24}

    def test_repeated_param_id_leaves_node_unchanged(self):
        node = make_node(inputs=1, outputs=1)
        first = node.add_param_port("p1", "gain")
        size = node.size
        position = (first.x, first.y)
        second = node.add_param_port("p1", "gain")
        assert second is first
        assert (first.x, first.y) == position == (0, 29)
        assert node.size == size == Size(84, 51)
        assert len(node.get_ports_by_type(PortType.PARAM)) == 1

    def test_input_ports_unchanged(self):
        node = make_node()
        before = [(p.x, p.y) for p in node.get_ports_by_type(PortType.INPUT)]
        node.add_param_port("p1", "gain")
        after = [(p.x, p.y) for p in node.get_ports_by_type(PortType.INPUT)]
        assert before == after

    def test_param_label_measured_with_param_font(self):
        calls = []

        class RecordingMeasurer:
            def measure_width(self, text, font_style=None):
                calls.append((text, font_style))
                return len(text)

        data = NodeCreationData("n1", "GainNode", 1, 1)
        node = NodeView(data, "Gain 1", measurer=RecordingMeasurer())
        node.add_param_port("p1", "gain")
        assert calls[-1] == ("gain", "12px Segoe UI, Arial")


class TestGetPortsByType:
    """Tests for NodeView.get_ports_by_type."""

    def test_by_type(self):
        node = make_node(inputs=3, outputs=2)
        node.add_param_port("a", "gain")
        assert len(node.get_ports_by_type(PortType.INPUT)) == 3
        assert len(node.get_ports_by_type(PortType.OUTPUT)) == 2
        assert [p.id for p in node.get_ports_by_type(PortType.PARAM)] == ["n1-param-a"]

    def test_insertion_order(self):
        node = make_node()
        node.add_param_port("z", "gain")
        node.add_param_port("a", "pan")
        assert [p.id for p in node.get_ports_by_type(PortType.PARAM)] == [
            "n1-param-z",
            "n1-param-a",
        ]


class TestRecomputeOutputLayout:
    """Tests for NodeView.recompute_output_layout."""

    def test_idempotent(self):
        node = make_node(outputs=2)
        before = {pid: (p.x, p.y) for pid, p in node.ports.items()}
        node.recompute_output_layout()
        node.recompute_output_layout()
        after = {pid: (p.x, p.y) for pid, p in node.ports.items()}
        assert before == after

    def test_restores_moved_port(self):
        node = make_node()
        node.ports["n1-output-0"].y = 999
        node.recompute_output_layout()
        assert node.ports["n1-output-0"].y == 29.5


class TestToDict:
    """Tests for NodeView.to_dict."""

    def test_unplaced(self):
        node = make_node(inputs=1, outputs=1)
        data = node.to_dict()
        assert data["id"] == "n1"
        assert data["type"] == "GainNode"
        assert data["label"] == "Gain 1"
        assert data["size"] == {"width": 84, "height": 35}
        assert data["position"] is None
        assert [p["id"] for p in data["ports"]] == ["n1-input-0", "n1-output-0"]

    def test_placed_with_param(self):
        node = make_node(inputs=1, outputs=1)
        node.add_param_port("p1", "gain")
        node.position = (10, 20)
        data = node.to_dict()
        assert data["position"] == {"x": 10, "y": 20}
        assert data["ports"][-1] == {
            "id": "n1-param-p1",
            "type": "Param",
            "label": "gain",
            "x": 0,
            "y": 29,
        }


class TestScenario:
    """Two inputs, one output, then one param."""

    def test_gain_node(self):
        node = make_node(inputs=2, outputs=1, label="Gain 1", node_id="abc")
        assert sorted(node.ports) == ["abc-input-0", "abc-input-1", "abc-output-0"]
        old_height = node.size.height
        node.add_param_port("p1", "gain")
        assert "abc-param-p1" in node.ports
        assert node.size.height >= old_height
        output = node.ports["abc-output-0"]
        assert output.y == node.size.height / 2
