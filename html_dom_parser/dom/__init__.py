"""HTML document parsing and XPath querying module."""

from html_dom_parser.dom.engine import (
    HtmlParser,
    LxmlHtmlParser,
    LxmlXPathEvaluator,
    QueryContext,
    XPathEvaluator,
)
from html_dom_parser.dom.factory import HtmlDomFactory
from html_dom_parser.dom.parser import HtmlDomParser
from html_dom_parser.dom.views import NodeSummary, QueryResult

__all__ = [
    "HtmlParser",
    "LxmlHtmlParser",
    "LxmlXPathEvaluator",
    "QueryContext",
    "XPathEvaluator",
    "HtmlDomFactory",
    "HtmlDomParser",
    "NodeSummary",
    "QueryResult",
]
