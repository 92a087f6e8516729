"""Indented-syntax Sass parser producing the document and expression trees."""

from sasslint.parser.document import ParseError, parse
from sasslint.parser.expression import ExpressionSyntaxError, parse_expression

__all__ = ["ExpressionSyntaxError", "ParseError", "parse", "parse_expression"]
