"""Document and expression tree model."""

from sasslint.tree.expressions import (
    BinaryOp,
    Conditional,
    Expression,
    FunctionCall,
    KeywordArgument,
    ListExpr,
    Literal,
    MapExpr,
    Parenthesized,
    UnaryOp,
    VariableRef,
)
from sasslint.tree.nodes import (
    AtRule,
    ChildNode,
    Comment,
    Container,
    Declaration,
    Node,
    Root,
    Rule,
    SourceSpan,
)

__all__ = [
    "AtRule",
    "BinaryOp",
    "ChildNode",
    "Comment",
    "Conditional",
    "Container",
    "Declaration",
    "Expression",
    "FunctionCall",
    "KeywordArgument",
    "ListExpr",
    "Literal",
    "MapExpr",
    "Node",
    "Parenthesized",
    "Root",
    "Rule",
    "SourceSpan",
    "UnaryOp",
    "VariableRef",
]
