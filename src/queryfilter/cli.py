"""queryfilter CLI — entry point.

Commands:
    queryfilter select  <file> [filter options]   Print elements that pass
    queryfilter explain [filter options]          Show the filter tree built

Filter options are combined with AND:
    --all-tags a,b      element has every tag
    --any-tags a,b      element has at least one tag
    --without-tags a,b  element has none of the tags
    --match REGEX       some value matches (restrict with --field)
    --where FIELD=VAL   field equals value (repeatable; VAL parsed as JSON if possible)
"""
from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import Any, Callable

import click
from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.table import Table

from .combinators import and_, identity, not_, or_
from .config import Settings, get_settings
from .errors import QueryFilterError
from .loader import iter_elements
from .node import AnyFilter, FilterNode
from .predicates import RegexMatch, field_equals, has_tag

logger = logging.getLogger(__name__)

console = Console()
err_console = Console(stderr=True)

# ── Helpers ─────────────────────────────────────────────────────────────────


def _split(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def _parse_where(raw: str) -> tuple[str, Any]:
    name, sep, value = raw.partition("=")
    if not sep or not name.strip():
        raise click.BadParameter(f"Expected FIELD=VALUE, got {raw!r}.", param_hint="--where")
    try:
        parsed: Any = json.loads(value)
    except ValueError:
        parsed = value
    return name.strip(), parsed


def build_filter(
    all_tags: list[str] | None = None,
    any_tags: list[str] | None = None,
    without_tags: list[str] | None = None,
    match: str = "",
    fields: list[str] | None = None,
    where: list[tuple[str, Any]] | None = None,
    tag_field: str = "tags",
) -> FilterNode:
    """Assemble the AND of every requested condition.

    Returns :data:`identity` when no condition is given.
    """
    parts: list[AnyFilter] = [has_tag(t, field=tag_field) for t in all_tags or []]
    if any_tags:
        parts.append(or_(*(has_tag(t, field=tag_field) for t in any_tags)))
    if without_tags:
        parts.append(not_(or_(*(has_tag(t, field=tag_field) for t in without_tags))))
    if match:
        parts.append(RegexMatch(match, fields=fields or None))
    for name, value in where or []:
        parts.append(field_equals(name, value))
    if not parts:
        return identity
    return and_(*parts)


def filter_options(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the shared filter-building options to a command."""

    @click.option("--all-tags", default="", help="Comma-separated tags that must all be present.")
    @click.option("--any-tags", default="", help="Comma-separated tags of which one must be present.")
    @click.option("--without-tags", default="", help="Comma-separated tags that must be absent.")
    @click.option("--match", "-m", default="", help="Regex searched across element values.")
    @click.option("--field", "fields", multiple=True, help="Restrict --match to this field (repeatable).")
    @click.option("--where", "-w", multiple=True, help="FIELD=VALUE equality condition (repeatable).")
    @click.option("--tag-field", default=None, help="Element field holding tags [env: QUERYFILTER_TAG_FIELD].")
    @click.pass_context
    @functools.wraps(fn)
    def wrapper(
        ctx: click.Context,
        all_tags: str,
        any_tags: str,
        without_tags: str,
        match: str,
        fields: tuple[str, ...],
        where: tuple[str, ...],
        tag_field: str | None,
        **kwargs: Any,
    ) -> Any:
        cfg: Settings = ctx.obj
        try:
            tree = build_filter(
                all_tags=_split(all_tags),
                any_tags=_split(any_tags),
                without_tags=_split(without_tags),
                match=match,
                fields=list(fields),
                where=[_parse_where(w) for w in where],
                tag_field=tag_field or cfg.tag_field,
            )
        except QueryFilterError as exc:
            raise click.ClickException(str(exc)) from exc
        logger.debug("Built filter: %r", tree)
        return ctx.invoke(fn, tree=tree, **kwargs)

    return wrapper


def _print_table(elements: list[dict[str, Any]], title: str) -> None:
    cols: list[str] = []
    for element in elements:
        cols.extend(k for k in element if k not in cols)
    tbl = Table(title=title, box=box.ROUNDED, show_lines=False, highlight=True)
    for col in cols:
        tbl.add_column(col, overflow="fold", max_width=60)
    for element in elements:
        tbl.add_row(*[_cell(element.get(c)) for c in cols])
    console.print(tbl)


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)


# ── CLI root ─────────────────────────────────────────────────────────────────


@click.group()
@click.version_option(version="1.0.0", prog_name="queryfilter")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """queryfilter — select elements with composable AND / OR / NOT filters."""
    try:
        cfg = get_settings()
    except ValidationError as exc:
        raise click.ClickException(f"Invalid QUERYFILTER_* configuration:\n{exc}") from exc
    logging.basicConfig(
        level=logging.DEBUG if verbose else cfg.log_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = cfg


# ── select ───────────────────────────────────────────────────────────────────


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@filter_options
@click.option(
    "--output", "-o", "output_fmt", default=None,
    type=click.Choice(["table", "json", "count"], case_sensitive=False),
    help="Output format [env: QUERYFILTER_OUTPUT_FORMAT, default: table].",
)
@click.option("--limit", "-n", default=0, type=click.IntRange(min=0), help="Max elements to print (0 = all).")
@click.option("--strict/--lenient", default=None, help="Fail on undecodable lines instead of skipping them.")
@click.pass_obj
def select(
    cfg: Settings,
    file: Path,
    tree: FilterNode,
    output_fmt: str | None,
    limit: int,
    strict: bool | None,
) -> None:
    """Print the elements of an NDJSON FILE that pass the filter.

    \b
    Examples:
      queryfilter select items.ndjson --all-tags foo,bar
      queryfilter select items.ndjson --any-tags foo,bar --without-tags baz
      queryfilter select items.ndjson --match "^draft" --field title -o json
      queryfilter select items.ndjson --where status=\\"open\\" -o count
    """
    output_fmt = output_fmt.lower() if output_fmt else cfg.output_format
    strict = cfg.strict_input if strict is None else strict

    selected: list[dict[str, Any]] = []
    scanned = 0
    try:
        for element in iter_elements(str(file), strict=strict):
            scanned += 1
            if tree.apply(element):
                selected.append(element)
                if limit and len(selected) >= limit:
                    break
    except QueryFilterError as exc:
        raise click.ClickException(str(exc)) from exc

    if output_fmt == "count":
        click.echo(len(selected))
        return

    if output_fmt == "json":
        for element in selected:
            click.echo(json.dumps(element, default=str))
        err_console.print(f"[dim]{len(selected)} of {scanned} elements selected[/dim]")
        return

    if not selected:
        err_console.print("[yellow]No elements matched.[/yellow]")
        return
    _print_table(selected, title=file.name)
    console.print(f"[dim]{len(selected)} of {scanned} elements selected from {file.name}[/dim]")


# ── explain ──────────────────────────────────────────────────────────────────


@main.command()
@filter_options
def explain(tree: FilterNode) -> None:
    """Show the filter tree the given options would build.

    \b
    Examples:
      queryfilter explain --all-tags foo --without-tags bar
    """
    console.print(repr(tree), markup=False, highlight=False)
    console.print(f"[dim]depth {tree.depth}[/dim]")


if __name__ == "__main__":
    main()
