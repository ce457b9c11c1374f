"""Search and query CLI commands."""

from pathlib import Path

import click
import msgspec
from rich.console import Console
from rich.markup import escape
from rich.text import Text

from specsearch.documents import load_documents
from specsearch.exceptions import SpecSearchError
from specsearch.search import (
    MatchField,
    SearchOptions,
    SearchOutput,
    SearchResult,
    advanced_search_specs,
    filter_documents,
    get_search_syntax_help,
    parse_query,
    search_specs,
)

PRIORITIES = ("low", "medium", "high", "critical")

STATUS_ICONS = {
    "in-progress": "🔨",
    "complete": "✅",
    "archived": "📦",
}
PRIORITY_ICONS = {
    "critical": "🔴",
    "high": "🟡",
    "medium": "🟠",
    "low": "🟢",
}
HIGHLIGHT_STYLE = "bold yellow"


def _dump_json(data) -> str:
    return msgspec.json.format(msgspec.json.encode(data), indent=2).decode()


def _default_simple() -> bool:
    ctx = click.get_current_context()
    return ctx.obj is not None and ctx.obj.settings.mode == "simple"


@click.command()
@click.argument("query", required=True)
@click.option(
    "--docs",
    "-d",
    "docs_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML or JSON file listing the documents to search",
)
@click.option("--status", help="Pre-filter by status")
@click.option("--tag", "tags", multiple=True, help="Pre-filter by tag (repeatable)")
@click.option(
    "--priority",
    type=click.Choice(PRIORITIES, case_sensitive=False),
    help="Pre-filter by priority",
)
@click.option("--assignee", help="Pre-filter by assignee")
@click.option(
    "--simple/--advanced",
    default=_default_simple,
    help="Treat the query as plain terms, or parse its syntax (default from config)",
)
@click.option(
    "--max-matches",
    "-n",
    type=click.IntRange(min=1),
    help="Maximum matches shown per spec",
)
@click.option(
    "--context-length",
    type=click.IntRange(min=1),
    help="Characters of context around content matches",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format",
)
@click.pass_context
def search(ctx: click.Context, query: str, **kwargs) -> None:
    """Search specs for QUERY.

    Supports advanced query syntax:
    - Boolean: api AND auth, frontend OR backend, api NOT deprecated
    - Fields: status:in-progress, tag:api, priority:high, title:dashboard
    - Dates: created:>2025-11-01, created:2025-11-01..2025-11-15
    - Fuzzy: authetication~
    - Phrases and grouping: "token refresh", (a OR b) AND c
    """
    console: Console = ctx.obj.console
    settings = ctx.obj.settings

    docs_path = kwargs["docs_path"] or settings.documents
    if docs_path is None:
        raise click.UsageError(
            "No documents file given. Use --docs or set 'documents' in the config."
        )

    try:
        documents = load_documents(Path(docs_path))
    except SpecSearchError as e:
        if ctx.obj.debug:
            raise
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        ctx.exit(1)

    filters = {
        "status": kwargs["status"],
        "tags": list(kwargs["tags"]),
        "priority": kwargs["priority"],
        "assignee": kwargs["assignee"],
    }
    documents = filter_documents(documents, **filters)

    options = SearchOptions(
        max_matches_per_spec=kwargs["max_matches"] or settings.max_matches_per_spec,
        context_length=kwargs["context_length"] or settings.context_length,
    )

    if kwargs["simple"]:
        output = search_specs(query, documents, options)
    else:
        output = advanced_search_specs(query, documents, options)

    if kwargs["output_format"] == "json":
        click.echo(_dump_json(output.to_dict()))
        return

    _display_results(console, output, query, _describe_filters(filters))


@click.command()
@click.argument("query", required=True)
def parse(query: str) -> None:
    """Show how QUERY is parsed."""
    click.echo(_dump_json(parse_query(query).to_dict()))


@click.command()
def syntax() -> None:
    """Show the search query syntax."""
    click.echo(get_search_syntax_help())


def _describe_filters(filters: dict) -> list[str]:
    described = []
    for key in ("status", "priority", "assignee"):
        if filters[key]:
            described.append(f"{key}={filters[key]}")
    for tag in filters["tags"]:
        described.append(f"tag={tag}")
    return described


def _display_results(
    console: Console, output: SearchOutput, query: str, filters: list[str]
) -> None:
    """Render search results to the console."""
    safe_query = escape(query)

    if output.is_empty:
        console.print()
        console.print(f'[yellow]🔍 No specs found matching "{safe_query}"[/yellow]')
        if filters:
            console.print(f"[dim]With filters: {escape(', '.join(filters))}[/dim]")
        console.print()
        return

    count = output.metadata.total_results
    console.print()
    console.print(
        f'[green]🔍 Found {count} spec{"" if count == 1 else "s"} '
        f'matching "{safe_query}"[/green]'
    )
    console.print(
        f"[dim]   Searched {output.metadata.specs_searched} specs "
        f"in {output.metadata.search_time:.1f}ms[/dim]"
    )
    if filters:
        console.print(f"[dim]   With filters: {escape(', '.join(filters))}[/dim]")
    console.print()

    for result in output.results:
        _display_result(console, result)


def _highlight(text: str, spans: list[tuple[int, int]]) -> Text:
    rendered = Text(text)
    for start, end in spans:
        rendered.stylize(HIGHLIGHT_STYLE, start, end)
    return rendered


def _display_result(console: Console, result: SearchResult) -> None:
    document = result.document
    icon = STATUS_ICONS.get(document.status or "", "📅")

    header = Text(f"{icon} ")
    header.append(document.path, style="cyan")
    header.append(f" ({result.score}% match)", style="dim")
    console.print(header)

    meta = []
    if document.priority:
        meta.append(f"{PRIORITY_ICONS.get(document.priority, '')} {document.priority}")
    if document.tags:
        meta.append(f"[{', '.join(document.tags)}]")
    if meta:
        console.print(Text(f"   {' • '.join(meta)}", style="dim"))

    for field, label in (
        (MatchField.TITLE, "Title"),
        (MatchField.DESCRIPTION, "Description"),
    ):
        match = next((m for m in result.matches if m.field == field), None)
        if match:
            line = Text(f"   {label}: ", style="bold")
            line.append_text(_highlight(match.text, match.highlights))
            console.print(line)

    tag_matches = [m for m in result.matches if m.field == MatchField.TAGS]
    if tag_matches:
        line = Text("   Tags: ", style="bold")
        for index, match in enumerate(tag_matches):
            if index:
                line.append(", ")
            line.append_text(_highlight(match.text, match.highlights))
        console.print(line)

    content_matches = [m for m in result.matches if m.field == MatchField.CONTENT]
    if content_matches:
        console.print(Text("   Content matches:", style="bold"))
        for match in content_matches:
            line = Text("   ")
            line.append(f"[L{match.line_number}] ", style="dim")
            line.append_text(_highlight(match.text, match.highlights))
            console.print(line)

    hidden = result.total_matches - len(result.matches)
    if hidden > 0:
        console.print(
            Text(
                f"   ... and {hidden} more match{'' if hidden == 1 else 'es'}",
                style="dim",
            )
        )

    console.print()
