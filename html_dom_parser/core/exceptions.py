"""Custom exceptions for the HTML DOM parser."""

from typing import Optional


class HtmlDomError(Exception):
    """Base exception for all HTML DOM parser errors."""

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}\nDetails: {self.details}"
        return self.message


class InvalidHtmlProvided(HtmlDomError, ValueError):
    """The HTML engine refused the provided input outright.

    Raised only for the engine's illegal-argument conditions (empty or
    whitespace-only input, or input of a type the engine cannot read).
    Malformed markup is recovered by the parser and never ends up here.
    """

    def __init__(
        self,
        html: str,
        cause: Optional[BaseException] = None,
        message: Optional[str] = None,
    ):
        self.html = html
        self.cause = cause
        msg = message or f"Could not create document from provided html : '{html}'."
        super().__init__(msg, details=str(cause) if cause else None)


class XPathQueryError(HtmlDomError):
    """An XPath expression could not be compiled or evaluated.

    Distinct from a query that simply matches nothing, which yields None.
    """

    def __init__(
        self,
        expression: str,
        cause: Optional[BaseException] = None,
        message: Optional[str] = None,
    ):
        self.expression = expression
        self.cause = cause
        msg = message or f"Invalid XPath expression: '{expression}'"
        super().__init__(msg, details=str(cause) if cause else None)
