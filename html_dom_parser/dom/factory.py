"""Factory building documents, query contexts and parsers from HTML."""

import logging
from typing import Optional

from html_dom_parser.core.config import ParserConfig
from html_dom_parser.core.exceptions import InvalidHtmlProvided
from html_dom_parser.dom.engine import (
    INPUT_REJECTED_ERRORS,
    Document,
    HtmlParser,
    LxmlHtmlParser,
    QueryContext,
    XPathEvaluator,
)
from html_dom_parser.dom.parser import HtmlDomParser

logger = logging.getLogger(__name__)


class HtmlDomFactory:
    """
    Creates documents, query contexts and HtmlDomParser instances from
    HTML strings.

    Centralizes the translation of engine input rejections into
    InvalidHtmlProvided.
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        html_parser: Optional[HtmlParser] = None,
        evaluator: Optional[XPathEvaluator] = None,
    ):
        """
        Initialize the factory.

        Args:
            config: Parser configuration (read from the environment if None)
            html_parser: HTML engine adapter (lxml by default)
            evaluator: XPath engine adapter handed to every query context
        """
        self.config = config or ParserConfig.from_env()
        self.html_parser = html_parser or LxmlHtmlParser(self.config)
        self.evaluator = evaluator

    def create_document(self, html: str) -> Document:
        """
        Create a document from the provided HTML string.

        Malformed markup is recovered by the engine; its warnings are
        discarded.

        Args:
            html: The HTML content to parse

        Returns:
            The parsed document tree

        Raises:
            InvalidHtmlProvided: If the engine refuses the input (e.g. empty string)
        """
        try:
            document = self.html_parser.parse(html)
        except INPUT_REJECTED_ERRORS as e:
            raise InvalidHtmlProvided(html, cause=e) from e

        logger.debug(f"Parsed document from {len(html)} characters of HTML")
        return document

    def create_query_context(
        self,
        document: Document,
        register_node_ns: bool = True,
    ) -> QueryContext:
        """
        Create a query context bound to the given document.

        Args:
            document: The parsed document
            register_node_ns: Whether to register the namespace of the context node

        Returns:
            The created QueryContext
        """
        return QueryContext(document, register_node_ns, evaluator=self.evaluator)

    def create_query_context_from_html(
        self,
        html: str,
        register_node_ns: Optional[bool] = None,
    ) -> QueryContext:
        """
        Create a query context straight from an HTML string.

        Args:
            html: The HTML content to parse
            register_node_ns: Whether to register the namespace of the context
                node (configured default if None)

        Returns:
            The created QueryContext

        Raises:
            InvalidHtmlProvided: If the engine refuses the input
        """
        try:
            document = self.create_document(html)
        except InvalidHtmlProvided as e:
            raise InvalidHtmlProvided(
                html,
                cause=e.cause,
                message=f"Could not create query context from provided html : '{html}'.",
            ) from e.cause

        if register_node_ns is None:
            register_node_ns = self.config.register_node_ns
        return self.create_query_context(document, register_node_ns)

    def create_query_facade_from_html(self, html: str) -> HtmlDomParser:
        """
        Create an HtmlDomParser over the provided HTML string.

        Args:
            html: The HTML content to parse

        Returns:
            The created HtmlDomParser

        Raises:
            InvalidHtmlProvided: If the engine refuses the input
        """
        document = self.create_document(html)
        query_context = self.create_query_context(document, self.config.register_node_ns)
        return HtmlDomParser(query_context)
