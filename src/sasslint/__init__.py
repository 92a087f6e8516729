"""sasslint - rule-analysis engine and lint rules for indented-syntax Sass."""

__version__ = "0.3.0"
