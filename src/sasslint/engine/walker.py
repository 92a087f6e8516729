"""Generic traversal over expression trees.

Visit order is pre-order, left to right: a node is yielded before its
children, and children are visited in source order. Unknown node types are
treated as leaves so newer parser variants never break a rule.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sasslint.tree.expressions import (
    BinaryOp,
    Conditional,
    FunctionCall,
    KeywordArgument,
    ListExpr,
    MapExpr,
    Parenthesized,
    UnaryOp,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from sasslint.tree.expressions import Expression

Ancestors = tuple["Expression", ...]


def children(expr: Expression) -> list[Expression]:
    """Direct sub-expressions of *expr* in source order."""
    if isinstance(expr, BinaryOp):
        return [expr.left, expr.right]
    if isinstance(expr, UnaryOp):
        return [expr.operand]
    if isinstance(expr, FunctionCall):
        return list(expr.arguments)
    if isinstance(expr, ListExpr):
        return list(expr.items)
    if isinstance(expr, MapExpr):
        flat: list[Expression] = []
        for key, value in expr.entries:
            flat.append(key)
            flat.append(value)
        return flat
    if isinstance(expr, Conditional):
        return [expr.condition, expr.when_true, expr.when_false]
    if isinstance(expr, Parenthesized):
        return [expr.expression]
    if isinstance(expr, KeywordArgument):
        return [expr.value]
    return []


def walk(
    expr: Expression | None,
    *,
    descend: Callable[[Expression, Ancestors], bool] | None = None,
) -> Iterator[tuple[Expression, Ancestors]]:
    """Yield ``(node, ancestors)`` for every reachable subtree.

    *ancestors* runs outermost first. When *descend* returns ``False`` for a
    node, that node is still yielded but its children are not visited.
    """
    if expr is None:
        return
    # Explicit stack: deep nesting must not hit the recursion limit.
    stack: list[tuple[Expression, Ancestors]] = [(expr, ())]
    while stack:
        node, ancestors = stack.pop()
        yield node, ancestors
        if descend is not None and not descend(node, ancestors):
            continue
        path = (*ancestors, node)
        for child in reversed(children(node)):
            stack.append((child, path))


def collect(
    expr: Expression | None,
    predicate: Callable[[Expression], bool],
    *,
    descend: Callable[[Expression, Ancestors], bool] | None = None,
) -> list[Expression]:
    """Return the subtrees of *expr* matching *predicate*, in visit order."""
    return [node for node, _ in walk(expr, descend=descend) if predicate(node)]
