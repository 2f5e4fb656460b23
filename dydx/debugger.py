"""
dydx Visual Debugger - Expression Tree Visualization.

Provides utilities for visualizing and debugging symbolic trees.
"""
import logging

from .symbolic import ExprConst, ExprVar, ExprAdd, ExprMul, ExprPow, ExprFunc

logger = logging.getLogger(__name__)


def _label(n):
    if isinstance(n, ExprConst):
        return f"{n.value:.4g}", "lightyellow"
    if isinstance(n, ExprVar):
        return n.name, "lightgreen"
    if isinstance(n, ExprAdd):
        return "+", "lightblue"
    if isinstance(n, ExprMul):
        return "×", "lightblue"
    if isinstance(n, ExprPow):
        return "^", "lightblue"
    if isinstance(n, ExprFunc):
        return n.name, "lightcoral"
    return type(n).__name__, "white"


def _children(n):
    if isinstance(n, (ExprAdd, ExprMul)):
        return [(n.left, "L"), (n.right, "R")]
    if isinstance(n, ExprPow):
        return [(n.base, "base"), (n.exp, "exp")]
    if isinstance(n, ExprFunc):
        return [(n.arg, "arg")]
    return []


def graph_to_dot(node, name="graph"):
    """
    Export a symbolic tree to GraphViz DOT format.

    Subtrees shared between parents (the same object) are drawn once, with
    one edge per parent.

    Args:
        node: Root SymbolicNode
        name: Graph name
    Returns:
        String in DOT format
    """
    lines = [f"digraph {name} {{"]
    lines.append("  rankdir=TB;")
    lines.append("  node [shape=box, style=filled, fillcolor=lightblue];")

    visited = set()
    node_ids = {}

    def get_id(n):
        if id(n) not in node_ids:
            node_ids[id(n)] = f"n{len(node_ids)}"
        return node_ids[id(n)]

    def visit(n, parent_id=None, edge_label=None):
        nid = get_id(n)

        if id(n) not in visited:
            visited.add(id(n))
            label, color = _label(n)
            lines.append(f'  {nid} [label="{label}", fillcolor={color}];')
            for child, child_label in _children(n):
                visit(child, nid, child_label)

        if parent_id:
            lines.append(f'  {parent_id} -> {nid} [label="{edge_label}"];')

    visit(node)
    lines.append("}")
    return "\n".join(lines)


def export_to_file(node, filename="graph.dot", name="graph"):
    """Export a tree to a DOT file."""
    dot_str = graph_to_dot(node, name)
    with open(filename, 'w') as f:
        f.write(dot_str)
    logger.info("Exported %d DOT lines to %s", dot_str.count("\n") + 1, filename)
    return filename


def format_tree(node, indent=0):
    """Indented text representation of the tree, one node per line."""
    prefix = "  " * indent

    if isinstance(node, ExprConst):
        return f"{prefix}Const({node.value})"
    if isinstance(node, ExprVar):
        return f"{prefix}Var({node.name})"

    if isinstance(node, ExprFunc):
        head = node.name
    else:
        head = type(node).__name__.replace("Expr", "")
    lines = [f"{prefix}{head}("]
    lines.extend(format_tree(child, indent + 1) for child, _ in _children(node))
    lines.append(f"{prefix})")
    return "\n".join(lines)


def print_tree(node):
    """Print a simple text representation of the tree."""
    print(format_tree(node))
