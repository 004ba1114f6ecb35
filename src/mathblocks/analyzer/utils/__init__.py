"""
Analyzer utilities: HTML loading and shared regular expressions.
"""

from .html import HtmlDocument, SourceElement, load_html

__all__ = [
    "HtmlDocument",
    "SourceElement",
    "load_html",
]
