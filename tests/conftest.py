from __future__ import annotations

import logging

import pytest
import structlog

from html_dom_parser.core.config import ParserConfig
from html_dom_parser.dom.factory import HtmlDomFactory

SIMPLE_HTML = '<div id="testId" class="testClass"></div>'

NESTED_HTML = """
<html>
  <body>
    <div id="outer" class="box">
      <span class="item first">one</span>
      <div id="inner" class="box inner">
        <span class="item">two</span>
        <p class="item-extra">para</p>
      </div>
    </div>
    <span class="item">three</span>
    <ul id="menu">
      <li class="nav">Home</li>
      <li class="nav active">Blog</li>
      <li class="navigation">About</li>
    </ul>
  </body>
</html>
"""


@pytest.fixture()
def parser_config() -> ParserConfig:
    return ParserConfig()


@pytest.fixture()
def factory(parser_config) -> HtmlDomFactory:
    return HtmlDomFactory(config=parser_config)


@pytest.fixture()
def simple_parser(factory):
    return factory.create_query_facade_from_html(SIMPLE_HTML)


@pytest.fixture()
def nested_parser(factory):
    return factory.create_query_facade_from_html(NESTED_HTML)


@pytest.fixture()
def restore_logging():
    """Undo the root handlers and structlog setup installed by setup_logging."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("html_dom_parser").setLevel(logging.NOTSET)
    structlog.reset_defaults()
