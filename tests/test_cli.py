from __future__ import annotations

import json
import logging

import pytest
from click.testing import CliRunner

from html_dom_parser.cli.runner import cli
from tests.conftest import NESTED_HTML

pytestmark = pytest.mark.usefixtures("restore_logging")


@pytest.fixture()
def runner():
    return CliRunner()


@pytest.fixture()
def page(tmp_path):
    path = tmp_path / "page.html"
    path.write_text(NESTED_HTML, encoding="utf-8")
    return str(path)


@pytest.fixture()
def empty_page(tmp_path):
    path = tmp_path / "empty.html"
    path.write_text("", encoding="utf-8")
    return str(path)


def _json(result):
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


def test_query_command_json(runner, page):
    payload = _json(runner.invoke(cli, ["query", page, "//li", "--json"]))
    assert payload["expression"] == "//li"
    assert [node["text"] for node in payload["nodes"]] == ["Home", "Blog", "About"]
    assert payload["nodes"][0]["tag"] == "li"


def test_query_command_first(runner, page):
    payload = _json(runner.invoke(cli, ["query", page, "//li", "--first", "--json"]))
    assert [node["text"] for node in payload["nodes"]] == ["Home"]


def test_query_command_with_context(runner, page):
    payload = _json(runner.invoke(cli, ["query", page, ".//span", "--context-id", "inner", "--json"]))
    assert [node["text"] for node in payload["nodes"]] == ["two"]


def test_query_command_unknown_context_id(runner, page):
    result = runner.invoke(cli, ["query", page, ".//span", "--context-id", "missing"])
    assert result.exit_code == 1
    assert "No element with id 'missing'" in result.output
    assert "No match" not in result.output


def test_query_command_matches_root_element(runner, page):
    payload = _json(runner.invoke(cli, ["query", page, "html/body/ul", "--json"]))
    assert [node["attributes"] for node in payload["nodes"]] == [{"id": "menu"}]


def test_query_command_attribute_values(runner, page):
    payload = _json(runner.invoke(cli, ["query", page, "//ul/@id", "--json"]))
    assert payload["nodes"] == [{"tag": None, "attributes": {}, "text": "menu", "line": None}]


def test_query_command_no_match(runner, page):
    payload = _json(runner.invoke(cli, ["query", page, "//table", "--json"]))
    assert payload["nodes"] == []


def test_query_command_table_output(runner, page):
    result = runner.invoke(cli, ["query", page, "//li"])
    assert result.exit_code == 0
    assert "Home" in result.output


def test_query_command_invalid_expression(runner, page):
    result = runner.invoke(cli, ["query", page, "//li["])
    assert result.exit_code == 1
    assert "Invalid XPath expression" in result.output


def test_empty_file_is_rejected(runner, empty_page):
    result = runner.invoke(cli, ["by-tag", empty_page, "div"])
    assert result.exit_code == 1
    assert "Could not create document" in result.output


def test_by_id_command(runner, page):
    payload = _json(runner.invoke(cli, ["by-id", page, "menu", "--json"]))
    assert payload["expression"] == "#menu"
    assert payload["nodes"][0]["attributes"] == {"id": "menu"}


def test_by_class_command(runner, page):
    payload = _json(runner.invoke(cli, ["by-class", page, "nav", "--json"]))
    assert [node["text"] for node in payload["nodes"]] == ["Home", "Blog"]


def test_by_tag_command(runner, page):
    payload = _json(runner.invoke(cli, ["by-tag", page, "span", "--first", "--json"]))
    assert [node["text"] for node in payload["nodes"]] == ["one"]


def test_has_class_command(runner, page):
    assert runner.invoke(cli, ["has-class", page, "inner", "box"]).exit_code == 0
    assert runner.invoke(cli, ["has-class", page, "inner", "item"]).exit_code == 1
    assert runner.invoke(cli, ["has-class", page, "missing", "box"]).exit_code == 1


def test_info_command(runner, monkeypatch):
    monkeypatch.setenv("HTMLDOM_REMOVE_COMMENTS", "true")
    result = runner.invoke(cli, ["info"])
    assert result.exit_code == 0
    assert "Configuration" in result.output


def test_verbose_logging_uses_configured_log_file(runner, page, tmp_path, monkeypatch):
    log_file = tmp_path / "logs" / "cli.log"
    monkeypatch.setenv("LOG_FILE", str(log_file))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    result = runner.invoke(cli, ["by-tag", page, "li", "-v"])
    assert result.exit_code == 0, result.output

    for handler in logging.getLogger().handlers:
        handler.flush()
    content = log_file.read_text(encoding="utf-8")
    assert "XPath query evaluated" in content
    assert "DEBUG" in content


def test_log_level_comes_from_environment(runner, page, tmp_path, monkeypatch):
    log_file = tmp_path / "cli.log"
    monkeypatch.setenv("LOG_FILE", str(log_file))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    result = runner.invoke(cli, ["by-tag", page, "li"])
    assert result.exit_code == 0, result.output

    assert logging.getLogger("html_dom_parser").level == logging.WARNING
    assert "XPath query evaluated" not in log_file.read_text(encoding="utf-8")
