"""XPath backed lookups over a parsed HTML document."""

import re
from typing import Any, List, Optional

from lxml import etree

from html_dom_parser.core.exceptions import XPathQueryError
from html_dom_parser.core.logging import log_query
from html_dom_parser.dom.engine import Node, QueryContext

# XPath name test: optionally prefixed NCName, or the '*' wildcard.
_NAME_TEST = re.compile(r"^(?:\*|(?:[^\W\d][\w.\-]*:)?[^\W\d][\w.\-]*)$")

ID_QUERY = ".//*[@id=$id]"
CLASS_QUERY = (
    ".//*[contains(concat(' ', normalize-space(@class), ' '),"
    " concat(' ', $class_name, ' '))]"
)


class HtmlDomParser:
    """
    Queries an HTML DOM using XPath.

    Every lookup is one XPath expression evaluated against the wrapped
    QueryContext. A lookup matching nothing returns None, never an empty
    list; an invalid expression raises XPathQueryError.
    """

    def __init__(self, query_context: QueryContext):
        """
        Initialize the parser.

        Args:
            query_context: Query context bound to the document to search
        """
        self.query_context = query_context

    @property
    def document(self) -> etree._ElementTree:
        """Document the parser searches."""
        return self.query_context.document

    def get_first_element_by_id(
        self,
        element_id: str,
        context_node: Optional[etree._Element] = None,
        register_node_ns: Optional[bool] = None,
    ) -> Optional[etree._Element]:
        """
        Retrieve the first element whose id attribute equals ``element_id``.

        Args:
            element_id: The id to look for
            context_node: Node whose subtree is searched (whole document if None)
            register_node_ns: Whether to register the namespace of the context node

        Returns:
            The first matching element, or None if not found
        """
        nodes = self.query(ID_QUERY, context_node, register_node_ns, id=element_id)
        return None if nodes is None else nodes[0]

    def get_elements_by_class(
        self,
        class_name: str,
        context_node: Optional[etree._Element] = None,
        register_node_ns: Optional[bool] = None,
    ) -> Optional[List[etree._Element]]:
        """
        Retrieve all elements carrying ``class_name`` as a class token.

        Matching is by whole token, so "foo" does not match "foobar".

        Args:
            class_name: The class name to look for
            context_node: Node whose subtree is searched (whole document if None)
            register_node_ns: Whether to register the namespace of the context node

        Returns:
            Matching elements in document order, or None if none found
        """
        return self.query(CLASS_QUERY, context_node, register_node_ns, class_name=class_name)

    def get_first_element_by_class(
        self,
        class_name: str,
        context_node: Optional[etree._Element] = None,
        register_node_ns: Optional[bool] = None,
    ) -> Optional[etree._Element]:
        """Retrieve the first element carrying ``class_name``, or None."""
        nodes = self.get_elements_by_class(class_name, context_node, register_node_ns)
        return None if nodes is None else nodes[0]

    def get_elements_by_tag(
        self,
        tag: str,
        context_node: Optional[etree._Element] = None,
        register_node_ns: Optional[bool] = None,
    ) -> Optional[List[etree._Element]]:
        """
        Retrieve all descendant elements named ``tag``.

        Args:
            tag: Tag name (or '*' for any element)
            context_node: Node whose descendants are searched (whole document if None)
            register_node_ns: Whether to register the namespace of the context node

        Returns:
            Matching elements in document order, or None if none found

        Raises:
            XPathQueryError: If ``tag`` is not a valid element name
        """
        if not _NAME_TEST.match(tag):
            raise XPathQueryError(tag, message=f"Invalid tag name: '{tag}'")
        return self.query(f".//{tag}", context_node, register_node_ns)

    def get_first_element_by_tag(
        self,
        tag: str,
        context_node: Optional[etree._Element] = None,
        register_node_ns: Optional[bool] = None,
    ) -> Optional[etree._Element]:
        """Retrieve the first descendant element named ``tag``, or None."""
        nodes = self.get_elements_by_tag(tag, context_node, register_node_ns)
        return None if nodes is None else nodes[0]

    def query(
        self,
        expression: str,
        context_node: Optional[etree._Element] = None,
        register_node_ns: Optional[bool] = None,
        **variables: Any,
    ) -> Optional[List[Node]]:
        """
        Execute an XPath query.

        Args:
            expression: XPath expression yielding a node-set
            context_node: Node the expression is evaluated against (the
                document node if None)
            register_node_ns: Whether to register the namespace of the context node
            **variables: Values bound to $name references in the expression

        Returns:
            Matched nodes in document order, or None if nothing matched

        Raises:
            XPathQueryError: If the expression is invalid or yields a scalar
        """
        nodes = self.query_context.query(
            expression,
            context_node,
            register_node_ns,
            **variables,
        )
        log_query(expression, len(nodes))
        return nodes or None

    def has_class(self, class_name: str, element: etree._Element) -> bool:
        """
        Check whether an element carries a class token.

        The class attribute is split on any whitespace, consistent with the
        normalize-space() matching of get_elements_by_class.

        Args:
            class_name: The class name to check for
            element: The element to inspect

        Returns:
            True if the element has the class, False otherwise
        """
        return class_name in (element.get("class") or "").split()
