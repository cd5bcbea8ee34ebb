from __future__ import annotations

from collections.abc import Callable
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from ._node import GeneralTreeNode

TEE = "├── "
CORNER = "└── "
PIPE = "│   "
BLANK = "    "

_SIZE_PREFIXES = "KMGTPE"


def render_tree(
    node: GeneralTreeNode[Any],
    key: Callable[[Any], Any] | None = None,
    reverse: bool = False,
) -> str:
    """Render the subtree under *node* as box-drawing text, one entry per line.

    Children are shown ordered by ``key`` applied to their payload when given;
    the stored child order is not modified.
    """
    lines: list[str] = []
    stack: list[tuple[GeneralTreeNode[Any], str, str]] = [(node, "", "")]
    while stack:
        current, prefix, children_prefix = stack.pop()
        lines.append(f"{prefix}{current.data}\n")
        children = _ordered(current.children, key, reverse)
        last = len(children) - 1
        for i in range(last, -1, -1):
            if i < last:
                stack.append((children[i], children_prefix + TEE, children_prefix + PIPE))
            else:
                stack.append((children[i], children_prefix + CORNER, children_prefix + BLANK))
    return "".join(lines)


def _ordered(
    children: list[GeneralTreeNode[Any]],
    key: Callable[[Any], Any] | None,
    reverse: bool,
) -> list[GeneralTreeNode[Any]]:
    ordered = list(children)
    if key is not None:
        ordered.sort(key=lambda c: key(c.data), reverse=reverse)
    elif reverse:
        ordered.reverse()
    return ordered


def format_size(num_bytes: int) -> str:
    """Format a byte count with SI prefixes: ``999 B``, ``1.0 KB``, ``2.5 MB``.

    Each step divides by 1000 with truncation toward zero; the final digit
    is rounded half-up.
    """
    if -1000 < num_bytes < 1000:
        return f"{num_bytes} B"
    value = num_bytes
    idx = 0
    while (value <= -999_950 or value >= 999_950) and idx < len(_SIZE_PREFIXES) - 1:
        value = abs(value) // 1000 * (1 if value > 0 else -1)
        idx += 1
    scaled = (Decimal(value) / 1000).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{scaled} {_SIZE_PREFIXES[idx]}B"
