"""CLI runner for querying HTML files."""

import json
import sys
from pathlib import Path
from typing import Callable, List, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from html_dom_parser.core.config import Config
from html_dom_parser.core.exceptions import HtmlDomError
from html_dom_parser.core.logging import setup_logging
from html_dom_parser.dom.factory import HtmlDomFactory
from html_dom_parser.dom.parser import HtmlDomParser
from html_dom_parser.dom.views import QueryResult

console = Console()


def setup_cli_logging(verbose: bool = False) -> None:
    """Set up logging for CLI from the environment configuration."""
    config = Config.from_env()
    setup_logging(
        level="DEBUG" if verbose else config.log_level,
        log_file=config.log_file,
        json_logs=config.json_logs,
    )


def load_parser(path: str) -> HtmlDomParser:
    """Read an HTML file and build a parser over it."""
    html = Path(path).read_text(encoding="utf-8")
    return HtmlDomFactory().create_query_facade_from_html(html)


def display_result(result: QueryResult, as_json: bool = False) -> None:
    """Print a query result as a table or JSON."""
    if as_json:
        click.echo(json.dumps(result.to_dict(), ensure_ascii=False))
        return

    if not result.found:
        console.print(f"[yellow]No match for[/yellow] {escape(result.expression)}")
        return

    table = Table(title=escape(result.expression), border_style="blue")
    table.add_column("#", style="dim")
    table.add_column("Tag", style="cyan")
    table.add_column("Attributes", style="green")
    table.add_column("Text")
    table.add_column("Line", style="dim")

    for index, node in enumerate(result.nodes):
        attributes = " ".join(f'{k}="{v}"' for k, v in node.attributes.items())
        table.add_row(
            str(index),
            node.tag or "-",
            escape(attributes),
            escape(node.text),
            str(node.line) if node.line is not None else "-",
        )

    console.print(table)


def run_lookup(
    path: str,
    label: str,
    lookup: Callable[[HtmlDomParser], Optional[List]],
    as_json: bool,
    verbose: bool,
) -> None:
    """Run one lookup against a file, exiting with 1 on failure."""
    setup_cli_logging(verbose)

    try:
        parser = load_parser(path)
        nodes = lookup(parser)
    except HtmlDomError as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]")
        if verbose and e.details:
            console.print(f"[dim]{escape(e.details)}[/dim]")
        sys.exit(1)

    display_result(QueryResult.from_nodes(label, nodes), as_json)


def _first(nodes):
    return None if nodes is None else nodes[:1]


json_option = click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
verbose_option = click.option("--verbose", "-v", is_flag=True, help="Verbose output")
first_option = click.option("--first", is_flag=True, help="Only the first match")
file_argument = click.argument("file", type=click.Path(exists=True, dir_okay=False))


@click.group()
@click.version_option(version="1.0.0")
def cli():
    """HTML DOM Parser - XPath lookups over HTML files"""
    pass


@cli.command()
@file_argument
@click.argument("expression")
@click.option("--context-id", help="Evaluate relative to the element with this id")
@first_option
@json_option
@verbose_option
def query(
    file: str,
    expression: str,
    context_id: Optional[str],
    first: bool,
    as_json: bool,
    verbose: bool,
):
    """Run a raw XPath EXPRESSION against FILE.

    Examples:

        html-dom-parser query page.html "//a[@href]"

        html-dom-parser query page.html ".//li" --context-id menu
    """
    def lookup(parser: HtmlDomParser):
        context_node = None
        if context_id:
            context_node = parser.get_first_element_by_id(context_id)
            if context_node is None:
                raise HtmlDomError(f"No element with id '{context_id}'")
        nodes = parser.query(expression, context_node)
        return _first(nodes) if first else nodes

    run_lookup(file, expression, lookup, as_json, verbose)


@cli.command("by-id")
@file_argument
@click.argument("element_id")
@json_option
@verbose_option
def by_id(file: str, element_id: str, as_json: bool, verbose: bool):
    """Find the element with id ELEMENT_ID."""
    def lookup(parser: HtmlDomParser):
        element = parser.get_first_element_by_id(element_id)
        return None if element is None else [element]

    run_lookup(file, f"#{element_id}", lookup, as_json, verbose)


@cli.command("by-class")
@file_argument
@click.argument("class_name")
@first_option
@json_option
@verbose_option
def by_class(file: str, class_name: str, first: bool, as_json: bool, verbose: bool):
    """Find elements carrying the class CLASS_NAME."""
    def lookup(parser: HtmlDomParser):
        nodes = parser.get_elements_by_class(class_name)
        return _first(nodes) if first else nodes

    run_lookup(file, f".{class_name}", lookup, as_json, verbose)


@cli.command("by-tag")
@file_argument
@click.argument("tag")
@first_option
@json_option
@verbose_option
def by_tag(file: str, tag: str, first: bool, as_json: bool, verbose: bool):
    """Find elements named TAG."""
    def lookup(parser: HtmlDomParser):
        nodes = parser.get_elements_by_tag(tag)
        return _first(nodes) if first else nodes

    run_lookup(file, tag, lookup, as_json, verbose)


@cli.command("has-class")
@file_argument
@click.argument("element_id")
@click.argument("class_name")
@verbose_option
def has_class(file: str, element_id: str, class_name: str, verbose: bool):
    """Check whether element ELEMENT_ID carries CLASS_NAME.

    Exits with 0 when it does, 1 otherwise.
    """
    setup_cli_logging(verbose)

    try:
        parser = load_parser(file)
    except HtmlDomError as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]")
        sys.exit(1)

    element = parser.get_first_element_by_id(element_id)
    if element is None:
        console.print(f"[red]No element with id '{escape(element_id)}'[/red]")
        sys.exit(1)

    if parser.has_class(class_name, element):
        console.print(f"[green]#{element_id} has class '{class_name}'[/green]")
    else:
        console.print(f"[yellow]#{element_id} does not have class '{class_name}'[/yellow]")
        sys.exit(1)


@cli.command()
def info():
    """Show the effective configuration."""
    config = Config.from_env()

    table = Table(title="Configuration", border_style="blue")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Recover", "Yes" if config.parser.recover else "No")
    table.add_row("Remove Comments", "Yes" if config.parser.remove_comments else "No")
    table.add_row("Remove PIs", "Yes" if config.parser.remove_pis else "No")
    table.add_row("No Network", "Yes" if config.parser.no_network else "No")
    table.add_row("Register Node NS", "Yes" if config.parser.register_node_ns else "No")
    table.add_row("Log Level", config.log_level)
    table.add_row("Log File", config.log_file or "-")
    table.add_row("JSON Logs", "Yes" if config.json_logs else "No")

    console.print(table)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
