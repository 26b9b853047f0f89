"""
HTML DOM Parser
===============

A thin convenience layer over lxml: load an HTML string into a document and
look elements up by id, class, tag or raw XPath.

Main Components:
- HtmlDomFactory: Builds documents, query contexts and parsers from HTML
- HtmlDomParser: XPath backed lookups over one document
- InvalidHtmlProvided: Raised when the HTML engine refuses an input

Quick Start:
    >>> from html_dom_parser import HtmlDomFactory
    >>>
    >>> parser = HtmlDomFactory().create_query_facade_from_html(
    ...     '<div id="x" class="a b"></div>'
    ... )
    >>> element = parser.get_first_element_by_id("x")
    >>> parser.has_class("a", element)
    True
"""

__version__ = "1.0.0"

# Lazy imports for better performance
_LAZY_IMPORTS = {
    "HtmlDomFactory": ("html_dom_parser.dom.factory", "HtmlDomFactory"),
    "HtmlDomParser": ("html_dom_parser.dom.parser", "HtmlDomParser"),
    "QueryContext": ("html_dom_parser.dom.engine", "QueryContext"),
    "Config": ("html_dom_parser.core.config", "Config"),
    "HtmlDomError": ("html_dom_parser.core.exceptions", "HtmlDomError"),
    "InvalidHtmlProvided": ("html_dom_parser.core.exceptions", "InvalidHtmlProvided"),
    "XPathQueryError": ("html_dom_parser.core.exceptions", "XPathQueryError"),
}


def __getattr__(name: str):
    """Lazy import mechanism for main components."""
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        from importlib import import_module
        module = import_module(module_path)
        attr = getattr(module, attr_name)
        globals()[name] = attr
        return attr
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")


__all__ = [
    "HtmlDomFactory",
    "HtmlDomParser",
    "QueryContext",
    "Config",
    "HtmlDomError",
    "InvalidHtmlProvided",
    "XPathQueryError",
    "__version__",
]
