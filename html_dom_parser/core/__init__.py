"""Core components - configuration, logging, and exceptions."""

from html_dom_parser.core.config import Config, ParserConfig
from html_dom_parser.core.exceptions import (
    HtmlDomError,
    InvalidHtmlProvided,
    XPathQueryError,
)
from html_dom_parser.core.logging import setup_logging, get_logger

__all__ = [
    "Config",
    "ParserConfig",
    "HtmlDomError",
    "InvalidHtmlProvided",
    "XPathQueryError",
    "setup_logging",
    "get_logger",
]
