from __future__ import annotations

"""
Syntax Tree Materializer.

Turns an immutable syntax tree into an interactively expandable, display
ready sequence of rows. Expansion state lives outside the tree in an
explicit path-to-flag mapping owned by the view, so the same AST can be
shared and re-traversed freely.
"""

import logging
from collections import Counter
from typing import Dict, Iterator, List, Optional, Tuple

from syntaxscope.domain.analysis_models import SyntaxNode
from syntaxscope.domain.constants import DEFAULT_EXPANDED_DEPTH, NodeType
from syntaxscope.domain.view_models import NodePath, TreeSummary, VisibleNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# EXPANSION STATE
# -----------------------------------------------------------------------------

class ExpansionState:
    """
    Per-path expansion flags of a tree view.

    Paths never toggled fall back to the depth default (expanded above
    DEFAULT_EXPANDED_DEPTH). Collapsing a node keeps the flags of its
    descendants untouched, so re-expanding restores their previous layout.
    """

    def __init__(
            self,
            overrides: Optional[Dict[NodePath, bool]] = None,
            default_depth: int = DEFAULT_EXPANDED_DEPTH,
    ) -> None:
        self._overrides: Dict[NodePath, bool] = dict(overrides or {})
        self._default_depth = default_depth

    def is_expanded(self, path: NodePath) -> bool:
        """
        Resolve the expansion flag of a node.

        Args:
            path: Root-to-node child indices.

        Returns:
            bool: Explicit flag if the path was toggled, else the depth default.
        """
        path = tuple(path)
        if path in self._overrides:
            return self._overrides[path]
        return len(path) < self._default_depth

    def toggle(self, path: NodePath) -> bool:
        """
        Flip the expansion flag of a single path.

        Args:
            path: Root-to-node child indices.

        Returns:
            bool: The new flag.
        """
        path = tuple(path)
        new_state = not self.is_expanded(path)
        self._overrides[path] = new_state
        logger.debug(f"Tree path {_format_path(path)} -> {'expanded' if new_state else 'collapsed'}")
        return new_state

    def snapshot(self) -> Dict[NodePath, bool]:
        """Return a copy of the explicit flags."""
        return dict(self._overrides)

    def collapse_all(self) -> None:
        """Collapse every node, including those never toggled."""
        self._overrides.clear()
        self._default_depth = 0

    def reset(self) -> None:
        """Forget every explicit flag and restore the depth default."""
        self._overrides.clear()
        self._default_depth = DEFAULT_EXPANDED_DEPTH

    @classmethod
    def expand_all(cls, root: Optional[SyntaxNode]) -> "ExpansionState":
        """
        Build a state in which every node of the tree is expanded.

        Args:
            root: Tree root (None gives an empty state).

        Returns:
            ExpansionState: State with an explicit True flag for each node.
        """
        flags: Dict[NodePath, bool] = {}
        if root is not None:
            for path, _node in _walk(root, ()):
                flags[path] = True
        return cls(flags)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def is_available(root: Optional[SyntaxNode]) -> bool:
    """A tree is displayable only if its root reports a type."""
    return root is not None and bool(root.type_name)


def is_expanded(expansion: ExpansionState, path: NodePath) -> bool:
    return expansion.is_expanded(path)


def visible_subtree(
        node: Optional[SyntaxNode],
        expansion: ExpansionState,
        path: NodePath = (),
        is_last_sibling: bool = True,
) -> Iterator[VisibleNode]:
    """
    Lazily yield the rows visible under the given expansion state.

    Produces the node itself and then, only while its path is expanded,
    the visible rows of each child in stored order (pre-order). Uses an
    explicit stack, so arbitrarily deep trees are safe. Calling it again
    with the same state yields the same rows.

    Args:
        node: Subtree root. A missing or typeless root yields nothing.
        expansion: View-owned expansion flags.
        path: Path of 'node' from the tree root.
        is_last_sibling: Whether 'node' is its parent's final child.

    Yields:
        VisibleNode: One row per visible node.
    """
    path = tuple(path)
    if node is None or (not path and not is_available(node)):
        return

    stack: List[Tuple[SyntaxNode, NodePath, bool]] = [(node, path, is_last_sibling)]
    while stack:
        current, current_path, is_last = stack.pop()
        expanded = expansion.is_expanded(current_path)
        yield VisibleNode(
            node=current,
            depth=len(current_path),
            path=current_path,
            is_last_sibling=is_last,
            expanded=expanded and current.has_children,
        )

        if expanded:
            stack.extend(_children_reversed(current, current_path))


def node_at(root: Optional[SyntaxNode], path: NodePath) -> Optional[SyntaxNode]:
    """
    Resolve a root-to-node path.

    Returns:
        Optional[SyntaxNode]: The addressed node, or None if the path
                              leaves the tree.
    """
    current = root
    for index in path:
        if current is None or index < 0 or index >= len(current.children):
            return None
        current = current.children[index]
    return current


def summarize_tree(root: Optional[SyntaxNode]) -> Optional[TreeSummary]:
    """
    Compute the structural summary of a tree.

    Args:
        root: Tree root.

    Returns:
        Optional[TreeSummary]: None when no analysis is available.
    """
    if not is_available(root):
        return None

    type_counts: Counter = Counter()
    max_depth = 0
    node_count = 0
    for path, node in _walk(root, ()):
        node_count += 1
        max_depth = max(max_depth, len(path))
        if node.type_name:
            type_counts[node.type_name] += 1

    return TreeSummary(
        root_type=root.node_type,
        root_type_name=root.type_name,
        root_value=root.value,
        child_count=len(root.children),
        line=root.line,
        position=root.position,
        has_errors=type_counts.get(NodeType.SYNTAX_ERROR.value, 0) > 0,
        node_type_counts=dict(type_counts),
        depth=max_depth,
        node_count=node_count,
    )

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _walk(node: SyntaxNode, path: NodePath) -> Iterator[Tuple[NodePath, SyntaxNode]]:
    """Pre-order traversal of every node regardless of expansion."""
    stack: List[Tuple[SyntaxNode, NodePath, bool]] = [(node, tuple(path), True)]
    while stack:
        current, current_path, _is_last = stack.pop()
        yield current_path, current
        stack.extend(_children_reversed(current, current_path))


def _children_reversed(node: SyntaxNode, path: NodePath) -> Iterator[Tuple[SyntaxNode, NodePath, bool]]:
    """Child stack entries, last child first so pops come out in stored order."""
    last_index = len(node.children) - 1
    for index in range(last_index, -1, -1):
        yield node.children[index], path + (index,), index == last_index


def _format_path(path: NodePath) -> str:
    return ".".join(str(i) for i in path) or "<root>"
