from __future__ import annotations

"""
Syntax Tree Renderer.

Converts the materialized rows of a syntax tree into visual ASCII lines.
Handles connector selection and indentation from each row's depth and
sibling position, without re-walking the tree.
"""

from typing import Iterable, List, Optional, Union

from syntaxscope.domain.analysis_models import SyntaxNode
from syntaxscope.domain.constants import NodeType
from syntaxscope.domain.view_models import VisibleNode
from syntaxscope.utils.i18n import i18n

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "

EXPANDED_MARK = "▼"
COLLAPSED_MARK = "▶"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_visible(rows: Iterable[VisibleNode]) -> List[str]:
    """
    Transform visible tree rows into a list of display strings.

    Uses standard ASCII connectors (├──, └──) for every row below the root
    and rebuilds the indentation prefix from the 'is_last_sibling' flags
    of the row's ancestors, which precede it in pre-order.

    Args:
        rows: Pre-order rows produced by the materializer.

    Returns:
        List[str]: One line per row.
    """
    lines: List[str] = []
    # last_flags[d] holds is_last_sibling of the most recent row at depth d
    last_flags: List[bool] = []

    for row in rows:
        del last_flags[row.depth:]
        last_flags.append(row.is_last_sibling)

        if row.depth == 0:
            prefix = ""
        else:
            ancestors = last_flags[1:row.depth]
            prefix = "".join(SPACE if is_last else PIPE for is_last in ancestors)
            prefix += LAST_BRANCH if row.is_last_sibling else BRANCH

        lines.append(f"{prefix}{format_node(row.node, expanded=row.expanded)}")

    return lines


def format_node(node: SyntaxNode, expanded: Optional[bool] = None) -> str:
    """
    Build the one-line description of a node.

    Format: '[▼|▶] Label "value" (line:position) key="value"'. The marker is
    only present for nodes that have children.

    Args:
        node: Node to describe.
        expanded: Expansion flag used to choose the marker.

    Returns:
        str: Formatted node description.
    """
    parts: List[str] = []

    if node.has_children:
        parts.append(EXPANDED_MARK if expanded else COLLAPSED_MARK)

    parts.append(node_label(node.type_name))

    if node.value:
        parts.append(f'"{node.value}"')

    parts.append(f"({node.line}:{node.position})")

    if node.attributes:
        parts.append(" ".join(f'{k}="{v}"' for k, v in node.attributes.items()))

    return " ".join(parts)


def node_label(node_type: Union[NodeType, str, None]) -> str:
    """
    Resolve the localized label of a node type.

    Types without a label are shown as reported; a missing type is "Unknown".
    """
    name = node_type.value if isinstance(node_type, NodeType) else (node_type or "")
    if not name:
        return i18n.t("labels.unknown", default="Unknown")
    return i18n.t(f"labels.node.{name}", default=name)
