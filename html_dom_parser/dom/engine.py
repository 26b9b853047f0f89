"""Adapters around the lxml HTML parser and XPath evaluator."""

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

import lxml.html
from lxml import etree

from html_dom_parser.core.config import ParserConfig
from html_dom_parser.core.exceptions import XPathQueryError

logger = logging.getLogger(__name__)

Document = etree._ElementTree
Node = Union[etree._Element, str]

# Conditions under which lxml refuses an input outright rather than
# recovering a tree from it.
INPUT_REJECTED_ERRORS = (etree.ParserError, etree.XMLSyntaxError, ValueError)


_NODE_TYPE_TESTS = {"node", "text", "comment", "processing-instruction"}
_LEADING_NAME = re.compile(r"([^\W\d][\w.\-]*(?::(?:[^\W\d][\w.\-]*|\*))?)\s*(::|\()?")


def _split_union(expression: str) -> List[str]:
    """Split an expression on its top-level '|' operators."""
    branches = []
    depth = 0
    quote = None
    start = 0
    for index, char in enumerate(expression):
        if quote:
            if char == quote:
                quote = None
        elif char in "'\"":
            quote = char
        elif char in "([":
            depth += 1
        elif char in ")]":
            depth -= 1
        elif char == "|" and depth == 0:
            branches.append(expression[start:index])
            start = index + 1
    branches.append(expression[start:])
    return branches


def _starts_relative_path(branch: str) -> bool:
    text = branch.lstrip()
    if not text:
        return False
    if text[0] == ".":
        return not text[1:2].isdigit()
    if text[0] in "@*":
        return True
    match = _LEADING_NAME.match(text)
    if not match:
        return False
    if match.group(2) == "(":
        return match.group(1) in _NODE_TYPE_TESTS
    return True


def anchor_to_document(expression: str) -> str:
    """
    Rewrite relative location paths so they start at the document node.

    lxml always evaluates with an element as the context node, so
    ``html/body`` or ``.//*`` would otherwise be resolved from the root
    element and never reach the root element itself. Absolute paths,
    function calls, variables and literals are left untouched.

    Args:
        expression: XPath expression

    Returns:
        The expression with each relative top-level union branch prefixed by '/'
    """
    anchored = []
    for branch in _split_union(expression):
        if _starts_relative_path(branch):
            stripped = branch.lstrip()
            branch = branch[:len(branch) - len(stripped)] + "/" + stripped
        anchored.append(branch)
    return "|".join(anchored)


class HtmlParser(ABC):
    """Turns raw HTML text into a document tree."""

    @abstractmethod
    def parse(self, html: str) -> Document:
        """
        Parse HTML into a document.

        Args:
            html: Raw HTML content

        Returns:
            Parsed document tree

        Raises:
            One of INPUT_REJECTED_ERRORS when the engine refuses the input.
        """


class XPathEvaluator(ABC):
    """Evaluates XPath 1.0 expressions against nodes of a document tree."""

    @abstractmethod
    def evaluate(
        self,
        expression: str,
        context_node: etree._Element,
        namespaces: Optional[Dict[str, str]] = None,
        variables: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Evaluate an expression relative to a context node.

        Args:
            expression: XPath expression
            context_node: Node the expression is evaluated against
            namespaces: Prefix to URI mapping usable in the expression
            variables: Values bound to $name references in the expression

        Returns:
            A list of nodes for node-set expressions, otherwise a scalar

        Raises:
            XPathQueryError: If the expression cannot be compiled or evaluated
        """


class LxmlHtmlParser(HtmlParser):
    """HtmlParser backed by libxml2's recovering HTML parser."""

    def __init__(self, config: Optional[ParserConfig] = None):
        self.config = config or ParserConfig.from_env()

    def _build_parser(self, encoding: Optional[str] = None) -> lxml.html.HTMLParser:
        # Parser objects keep per-parse state, so each call gets its own.
        return lxml.html.HTMLParser(
            encoding=encoding,
            recover=self.config.recover,
            remove_comments=self.config.remove_comments,
            remove_pis=self.config.remove_pis,
            no_network=self.config.no_network,
        )

    def parse(self, html: str) -> Document:
        encoding = None
        if isinstance(html, str):
            # lxml refuses unicode strings carrying an XML encoding declaration.
            html = html.encode("utf-8")
            encoding = "utf-8"

        parser = self._build_parser(encoding)
        root = lxml.html.document_fromstring(html, parser=parser)

        discarded = len(parser.error_log)
        if discarded:
            logger.debug(f"Discarded {discarded} recoverable HTML parser errors")

        return root.getroottree()


class LxmlXPathEvaluator(XPathEvaluator):
    """XPathEvaluator delegating to lxml's libxml2 XPath engine."""

    def evaluate(
        self,
        expression: str,
        context_node: etree._Element,
        namespaces: Optional[Dict[str, str]] = None,
        variables: Optional[Dict[str, Any]] = None,
    ) -> Any:
        try:
            return context_node.xpath(
                expression,
                namespaces=namespaces,
                smart_strings=False,
                **(variables or {}),
            )
        except etree.XPathError as e:
            raise XPathQueryError(expression, cause=e) from e


class QueryContext:
    """
    Queryable view bound to exactly one document.

    The context shares the document with its creator and never mutates it.
    When ``register_node_ns`` is enabled, the namespace prefixes in scope on
    the context node are made available to the expression.
    """

    def __init__(
        self,
        document: Document,
        register_node_ns: bool = True,
        evaluator: Optional[XPathEvaluator] = None,
    ):
        """
        Initialize the query context.

        Args:
            document: Parsed document tree (an element is accepted and
                resolved to its tree)
            register_node_ns: Default for namespace registration on queries
            evaluator: XPath engine adapter (lxml by default)
        """
        if isinstance(document, etree._Element):
            document = document.getroottree()
        self.document = document
        self.register_node_ns = register_node_ns
        self.evaluator = evaluator or LxmlXPathEvaluator()

    @property
    def root(self) -> etree._Element:
        """Root element of the bound document."""
        return self.document.getroot()

    def namespaces_for(
        self,
        node: etree._Element,
        register_node_ns: Optional[bool] = None,
    ) -> Optional[Dict[str, str]]:
        """Namespace mapping to register for a query against ``node``."""
        if register_node_ns is None:
            register_node_ns = self.register_node_ns
        if not register_node_ns:
            return None
        # XPath 1.0 has no default namespace, so unprefixed entries are skipped.
        return {prefix: uri for prefix, uri in node.nsmap.items() if prefix}

    def evaluate(
        self,
        expression: str,
        context_node: Optional[etree._Element] = None,
        register_node_ns: Optional[bool] = None,
        **variables: Any,
    ) -> Any:
        """
        Evaluate an expression and return the raw engine result.

        Args:
            expression: XPath expression
            context_node: Node to evaluate against (the document node if None,
                so the root element itself can match)
            register_node_ns: Override of the context's namespace flag
            **variables: Values for $name references in the expression

        Returns:
            Node list for node-set expressions, otherwise a float, bool or str
        """
        node = context_node
        if node is None:
            node = self.root
            expression = anchor_to_document(expression)
        return self.evaluator.evaluate(
            expression,
            node,
            namespaces=self.namespaces_for(node, register_node_ns),
            variables=variables,
        )

    def query(
        self,
        expression: str,
        context_node: Optional[etree._Element] = None,
        register_node_ns: Optional[bool] = None,
        **variables: Any,
    ) -> List[Node]:
        """
        Evaluate a node-set expression.

        Returns:
            Matched nodes in document order, possibly empty

        Raises:
            XPathQueryError: If the expression is invalid or yields a scalar
        """
        result = self.evaluate(expression, context_node, register_node_ns, **variables)
        if not isinstance(result, list):
            raise XPathQueryError(
                expression,
                message=f"XPath expression did not evaluate to a node-set: '{expression}'",
            )
        return result
