"""Text rendering of syntax trees.

Works on anything exposing ``kind``, ``value`` and ``children()``, so tokens
and expression nodes print the same way::

    ParseTree
    └─ BinaryExpression
       ├─ LiteralExpression
       │  └─ NumberToken 1
       ├─ PlusToken
       └─ LiteralExpression
          └─ NumberToken 2
"""

from __future__ import annotations

from dumbbrain.ast_nodes import SyntaxNode

BRANCH = "├─ "
LAST_BRANCH = "└─ "
PIPE = "│  "
SPACE = "   "


def format_node(node: SyntaxNode) -> str:
    label = str(node.kind)
    if node.value is not None:
        label += f" {node.value}"
    return label


def _render_children(node: SyntaxNode, prefix: str, lines: list[str]) -> None:
    children = list(node.children())
    for i, child in enumerate(children):
        last = i == len(children) - 1
        lines.append(prefix + (LAST_BRANCH if last else BRANCH) + format_node(child))
        _render_children(child, prefix + (SPACE if last else PIPE), lines)


def render_tree(node: SyntaxNode, root_label: str = "ParseTree") -> str:
    """Render ``node`` under a ``root_label`` heading, one node per line."""
    lines = [root_label, LAST_BRANCH + format_node(node)]
    _render_children(node, SPACE, lines)
    return "\n".join(lines) + "\n"
