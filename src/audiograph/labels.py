"""Short display labels for graph nodes."""

# Suffix dropped from node type names to keep labels concise
NODE_TYPE_SUFFIX = "Node"


class NodeLabelGenerator:
    """Converts node types into short, numbered labels.

    Node ids are long opaque strings, so nodes are labelled with their type
    and a running number instead. Each graph owns its own generator, so
    numbering starts at 1 for every graph and is never reused within it.

    Example
    -------
    >>> labels = NodeLabelGenerator()
    >>> labels.generate_label('GainNode')
    'Gain 1'
    >>> labels.generate_label('GainNode')
    'Gain 2'
    """

    def __init__(self) -> None:
        self._total_number_of_nodes = 0

    @property
    def count(self) -> int:
        """Number of labels generated so far."""
        return self._total_number_of_nodes

    def generate_label(self, node_type: str) -> str:
        """Generate the next label for a node of ``node_type``.

        A trailing ``'Node'`` (case-sensitive) is removed from the type. A
        type that is exactly ``'Node'`` leaves an empty prefix, so the label
        is just a space and the number, e.g. ``' 1'``.

        Parameters
        ----------
        node_type : str
            Node type name, e.g. ``'OscillatorNode'``

        Returns
        -------
        str
            Label of the form ``'<type> <n>'``
        """
        if node_type.endswith(NODE_TYPE_SUFFIX):
            node_type = node_type[: -len(NODE_TYPE_SUFFIX)]
        self._total_number_of_nodes += 1
        return f"{node_type} {self._total_number_of_nodes}"

    def __repr__(self) -> str:
        return f"NodeLabelGenerator(count={self._total_number_of_nodes})"
