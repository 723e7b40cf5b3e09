import json
import logging
from pathlib import Path
from typing import List, NoReturn, Optional, Tuple

import typer
from rich import print
from rich.markdown import Markdown
from rich.panel import Panel as RichPanel
from rich.table import Table

from gqlxp.adapters import category_panel, search_results_panel
from gqlxp.config import get_settings
from gqlxp.formatters import to_json, to_markdown
from gqlxp.gql import GraphQLSchema, NotFoundError, ParseError, SchemaResolver, parse_schema
from gqlxp.navigation import GLOBAL_KEY_BINDINGS, GQLType, ListPanel, NavigationManager, empty_panel
from gqlxp.search import SchemaSearchEngine, SearchError

logger = logging.getLogger(__name__)

APP_HELP = """
gqlxp: explore a GraphQL schema from the terminal.

Every command takes the path to an SDL file. The file name without its
extension is the schema ID under which its search index is stored.

CORE WORKFLOW:
1. LOOK UP:  `gqlxp show schema.graphql User` or `gqlxp show schema.graphql Query.user`
2. TRACE:    `gqlxp usages schema.graphql User` lists every place a type is referenced.
3. SEARCH:   `gqlxp search schema.graphql "user email"` ranks types, fields and directives.
4. BROWSE:   `gqlxp browse schema.graphql Query user User` drills through panels.
"""

app = typer.Typer(name="gqlxp", help=APP_HELP, no_args_is_help=True)


def _fail(message: str) -> NoReturn:
    print(f"[red]Error:[/red] {message}")
    raise typer.Exit(code=1)


def _schema_id(schema_path: Path) -> str:
    return schema_path.stem


def _load_schema(schema_path: Path) -> GraphQLSchema:
    try:
        content = schema_path.read_bytes()
    except OSError as e:
        _fail(f"Cannot read schema file {schema_path}: {e}")
    try:
        return parse_schema(content)
    except ParseError as e:
        _fail(f"{schema_path}: {e}")


def _engine() -> SchemaSearchEngine:
    return SchemaSearchEngine(get_settings().index_dir)


def _print_panel(panel: ListPanel, crumbs: List[str]) -> None:
    title = " > ".join(crumbs) if crumbs else panel.title
    table = Table(title=title)
    table.add_column("", style="green", width=1)
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Description")
    selected = panel.selected_item()
    for item in panel.items():
        marker = ">" if item is selected else ""
        table.add_row(marker, item.title, item.type_name, item.description)
    print(table)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr."),
):
    """
    gqlxp: GraphQL schema explorer.
    """
    level = "DEBUG" if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@app.command()
def show(
    schema_path: Path = typer.Argument(..., help="Path to the SDL file"),
    target: str = typer.Argument(..., help="Type name, Query.<field>, Mutation.<field> or @<directive>"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    usages: bool = typer.Option(False, "--usages", help="Include usages in JSON output"),
):
    """
    Show a single type, root field or directive.
    """
    schema = _load_schema(schema_path)
    try:
        if json_output:
            typer.echo(to_json(schema, target, include_usages=usages))
            return
        print(Markdown(to_markdown(schema, target)))
    except NotFoundError as e:
        if e.is_builtin:
            _fail(f"{e.name} is a built-in scalar")
        _fail(str(e))
    except ValueError as e:
        _fail(str(e))


@app.command("usages")
def list_usages(
    schema_path: Path = typer.Argument(..., help="Path to the SDL file"),
    type_name: str = typer.Argument(..., help="Named type to trace"),
):
    """
    List every place a type is referenced, in schema order.
    """
    schema = _load_schema(schema_path)
    resolver = SchemaResolver(schema)
    found = resolver.resolve_usages(type_name)
    if not found:
        print(f"[yellow]No usages of {type_name}.[/yellow]")
        return

    table = Table(title=f"Usages of {type_name}")
    table.add_column("Path", style="cyan")
    table.add_column("Parent", style="magenta")
    table.add_column("Kind")
    for usage in found:
        table.add_row(usage.path, usage.parent_type, usage.parent_kind)
    print(table)


@app.command()
def search(
    schema_path: Path = typer.Argument(..., help="Path to the SDL file"),
    query: str = typer.Argument(..., help="Search terms; a trailing * matches prefixes"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Maximum results"),
    reindex: bool = typer.Option(False, "--reindex", help="Rebuild the index before searching"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Full-text search over types, fields and directives.

    The schema is indexed on first use. Name matches rank above kind and path
    matches, which rank above description matches.
    """
    schema = _load_schema(schema_path)
    schema_id = _schema_id(schema_path)
    engine = _engine()
    limit = limit or get_settings().search_limit
    try:
        if reindex:
            engine.index(schema_id, schema)
        results = engine.search_or_index(schema_id, schema, query, limit)
    except (SearchError, ValueError) as e:
        _fail(str(e))

    if json_output:
        typer.echo(json.dumps([r.model_dump() for r in results], indent=2))
        return
    if not results:
        print("[yellow]No matches found.[/yellow]")
        return

    for res in results:
        print(f"[green]{res.score:6.2f}[/green] [magenta]{res.kind:<11}[/magenta] [bold]{res.path}[/bold] {res.description}")


@app.command()
def index(
    schema_path: Path = typer.Argument(..., help="Path to the SDL file"),
):
    """
    Build or replace the search index for a schema.
    """
    schema = _load_schema(schema_path)
    schema_id = _schema_id(schema_path)
    try:
        count = _engine().index(schema_id, schema)
    except (SearchError, ValueError) as e:
        _fail(str(e))
    print(f"[bold green]Indexed {count} documents for '{schema_id}'[/bold green]")


@app.command()
def remove(
    schema_id: str = typer.Argument(..., help="Schema ID (file name without extension)"),
):
    """
    Delete the search index for a schema ID.
    """
    try:
        _engine().remove(schema_id)
    except (SearchError, ValueError) as e:
        _fail(str(e))
    print(f"[green]Removed index for '{schema_id}'[/green]")


def _select(panel: ListPanel, name: str) -> bool:
    # Field items are addressed as Parent.field
    return panel.select_by_name(name) or panel.select_by_name(f"{panel.title}.{name}")


@app.command()
def browse(
    schema_path: Path = typer.Argument(..., help="Path to the SDL file"),
    category: GQLType = typer.Argument(GQLType.QUERY, help="Top-level category"),
    path: Optional[List[str]] = typer.Argument(None, help="Items to open in turn"),
    query: str = typer.Option("", "--query", "-q", help="Search terms for the Search category"),
):
    """
    Walk the panel hierarchy and print the panel reached.

    Each PATH element selects an item in the current panel and opens it,
    the way the explorer does when moving to the next panel.
    """
    schema = _load_schema(schema_path)
    resolver = SchemaResolver(schema)
    settings = get_settings()
    manager = NavigationManager(settings.visible_panels, panel_factory=empty_panel)
    manager.switch_type(category)
    manager.reset()

    if category is GQLType.SEARCH:
        if not query:
            _fail("The Search category needs --query")
        try:
            results = _engine().search_or_index(_schema_id(schema_path), schema, query, settings.search_limit)
        except (SearchError, ValueError) as e:
            _fail(str(e))
        top = search_results_panel(results, resolver)
    else:
        top = category_panel(category, resolver)
    manager.set_current_panel(top)

    for name in path or []:
        panel = manager.current_panel()
        if not isinstance(panel, ListPanel) or not _select(panel, name):
            _fail(f"No item named {name!r} in panel {panel.title if panel else ''}")
        child = panel.open_selected()
        if child is None:
            _fail(f"{name} has nothing to open")
        manager.open_panel(child)
        manager.navigate_forward()

    current = manager.current_panel()
    if isinstance(current, ListPanel):
        _print_panel(current, manager.breadcrumbs())


@app.command()
def keys():
    """
    List the explorer key bindings.
    """
    table = Table(title="Key Bindings")
    table.add_column("Keys", style="cyan")
    table.add_column("Action", style="magenta")
    table.add_column("Help")
    for binding in GLOBAL_KEY_BINDINGS:
        table.add_row(", ".join(repr(k) if k == " " else k for k in binding.keys), binding.action, binding.help)
    print(table)


@app.command()
def schema_info(
    schema_path: Path = typer.Argument(..., help="Path to the SDL file"),
):
    """
    Summarize a schema: definition counts per category and index status.
    """
    schema = _load_schema(schema_path)
    schema_id = _schema_id(schema_path)
    counts: List[Tuple[str, int]] = [
        ("Query", len(schema.query)),
        ("Mutation", len(schema.mutation)),
        ("Object", len(schema.objects)),
        ("Input", len(schema.inputs)),
        ("Enum", len(schema.enums)),
        ("Scalar", len(schema.scalars)),
        ("Interface", len(schema.interfaces)),
        ("Union", len(schema.unions)),
        ("Directive", len(schema.directives)),
    ]
    table = Table(title=f"Schema '{schema_id}'")
    table.add_column("Category", style="cyan")
    table.add_column("Count", justify="right")
    for name, count in counts:
        table.add_row(name, str(count))
    print(table)

    try:
        indexed = _engine().document_count(schema_id)
    except (SearchError, ValueError) as e:
        _fail(str(e))
    status = f"{indexed} documents indexed" if indexed is not None else "not indexed"
    print(RichPanel(status, title="Search Index", border_style="blue"))


if __name__ == "__main__":
    app()
