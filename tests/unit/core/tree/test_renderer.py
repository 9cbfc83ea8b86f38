from __future__ import annotations

"""
Unit tests for the Syntax Tree Renderer.

Verifies connector selection, indentation prefixes and the one-line node
description format.
"""

from syntaxscope.core.tree.materializer import ExpansionState, visible_subtree
from syntaxscope.core.tree.renderer import format_node, node_label, render_visible
from syntaxscope.domain.analysis_models import SyntaxNode
from syntaxscope.domain.constants import NodeType


def test_render_default_view(analysis_result):
    """TC-01: Connectors and prefixes follow sibling position."""
    lines = render_visible(visible_subtree(analysis_result.ast, ExpansionState()))

    assert lines[0].startswith("▼ Program")
    assert lines[1].startswith("├── ▼ Variable declaration \"x\"")
    assert lines[2].startswith("│   ├── Type annotation \"number\"")
    assert lines[3].startswith("│   └── Literal \"5\"")
    assert lines[4].startswith("└── ▼ Function declaration \"f\"")
    assert lines[5].startswith("    └── ▶ Block")


def test_render_deep_prefixes(analysis_result):
    """TC-02: Ancestors that are last siblings contribute blank indentation."""
    root = analysis_result.ast
    lines = render_visible(visible_subtree(root, ExpansionState.expand_all(root)))

    assert lines[-1].startswith("            └── Identifier \"y\"")


def test_format_node_includes_location_and_attributes():
    """TC-03: Description carries value, line:position and attributes."""
    node = SyntaxNode(
        node_type=NodeType.VARIABLE_DECLARATION,
        value="x",
        line=3,
        position=7,
        attributes={"kind": "const"},
    )
    assert format_node(node) == 'Variable declaration "x" (3:7) kind="const"'


def test_format_node_marker_only_for_parents():
    """TC-04: Leaves never carry an expansion marker."""
    parent = SyntaxNode(node_type=NodeType.BLOCK_STATEMENT, children=(SyntaxNode(NodeType.STATEMENT),))
    assert format_node(parent, expanded=True).startswith("▼ ")
    assert format_node(parent, expanded=False).startswith("▶ ")
    assert format_node(SyntaxNode(NodeType.STATEMENT)) == "Statement (0:0)"


def test_node_label_unknown_type():
    """TC-05: Missing node types render with the unknown label."""
    assert node_label(None) == "Unknown"


def test_render_empty_sequence():
    """TC-06: No rows produce no lines."""
    assert render_visible([]) == []


def test_unlisted_node_type_shown_as_reported():
    """TC-07: Types without a label render with their reported text."""
    node = SyntaxNode(node_type=None, raw_type="MODULE", line=1, position=1)
    assert format_node(node) == "MODULE (1:1)"
    assert node_label("MODULE") == "MODULE"
    assert node_label("") == "Unknown"
