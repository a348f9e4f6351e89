"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdwiki.config import Settings, load_config
from mdwiki.core.breadcrumbs import resolve_breadcrumbs
from mdwiki.core.errors import ContentError, InvalidFrontmatter
from mdwiki.core.graph import build_graph, write_graph
from mdwiki.core.links import check_links
from mdwiki.core.parse import parse_record
from mdwiki.core.relations import all_tags, prev_next, related_content, related_tags
from mdwiki.core.repository import ContentRepository
from mdwiki.core.schema import validate_partial
from mdwiki.core.search import build_search_index, write_search_index
from mdwiki.core.tree import iter_nodes
from mdwiki.store.base import ContentStore
from mdwiki.store.database import init_db, make_engine, reset_db
from mdwiki.store.fs import FileSystemStore
from mdwiki.store.sql import SQLStore, import_store


ContentDirOpt = Annotated[Optional[str], typer.Option("--content-dir", help="Content root (one directory per category)")]
StoreOpt = Annotated[Optional[str], typer.Option("--store", help="Backing store: fs or sql")]
OutDirOpt = Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling, then configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _store(settings: Settings) -> ContentStore:
    if settings.store == "sql":
        engine = make_engine(settings.db_url)
        init_db(engine)
        return SQLStore(engine)
    return FileSystemStore(settings.content_dir)


def _repository(content_dir: str = None, store: str = None) -> tuple[Settings, ContentRepository]:
    settings = _settings(overrides={"content_dir": content_dir, "store": store})
    return settings, ContentRepository(_store(settings))


def _load(repo: ContentRepository, category: str, slug: str) -> None:
    """Fail the command unless (category, slug) loads cleanly."""
    try:
        repo.load(category, slug)
    except ContentError as e:
        _fail(str(e))


def validate_cmd(
    content_dir: ContentDirOpt = None,
    store: StoreOpt = None,
    partial: Annotated[bool, typer.Option("--partial", help="Migration mode: only title and category required")] = False,
    ):
    """Validate the frontmatter of every article and report all violations."""
    _, repo = _repository(content_dir, store)
    total = 0
    invalid: list[InvalidFrontmatter] = []
    for category in repo.list_categories():
        for slug in repo.list_slugs(category):
            total += 1
            source_id = f"{category}/{slug}"
            try:
                if partial:
                    metadata, _ = parse_record(repo.store.get(category, slug), source_id)
                    validate_partial(metadata, source_id)
                else:
                    repo.load(category, slug)
            except InvalidFrontmatter as e:
                invalid.append(e)

    for e in invalid:
        typer.echo(str(e), err=True)
    typer.echo(f"Validated {total} article(s): {total - len(invalid)} valid, {len(invalid)} invalid")
    if invalid:
        raise typer.Exit(1)


def tree_cmd(content_dir: ContentDirOpt = None, store: StoreOpt = None):
    """Print each category's navigation tree."""
    _, repo = _repository(content_dir, store)
    trees = repo.content_tree()
    if not trees:
        typer.echo("No categories found.")
        raise typer.Exit(1)
    for tree in trees:
        typer.echo(f"{tree.name} ({tree.count})")
        for node, depth in iter_nodes(tree.articles):
            typer.echo(f"{'  ' * (depth + 1)}{node.title} [{node.slug}]")


def related_cmd(
    category: Annotated[str, typer.Argument(help="Article category")],
    slug: Annotated[str, typer.Argument(help="Article slug")],
    limit: Annotated[Optional[int], typer.Option("--limit", help="Max related articles")] = None,
    content_dir: ContentDirOpt = None,
    store: StoreOpt = None,
    ):
    """List related articles: explicit links first, then shared tags."""
    settings, repo = _repository(content_dir, store)
    _load(repo, category, slug)
    records = related_content(repo, category, slug, settings.related_limit if limit is None else limit)
    if not records:
        typer.echo("No related articles.")
    for r in records:
        typer.echo(f"  {r.path}  {r.title}")


def prev_next_cmd(
    category: Annotated[str, typer.Argument(help="Article category")],
    slug: Annotated[str, typer.Argument(help="Article slug")],
    content_dir: ContentDirOpt = None,
    store: StoreOpt = None,
    ):
    """Show the previous and next article within the category."""
    _, repo = _repository(content_dir, store)
    _load(repo, category, slug)
    result = prev_next(repo, category, slug)
    typer.echo(f"prev: {result.prev.path if result.prev else '-'}")
    typer.echo(f"next: {result.next.path if result.next else '-'}")


def breadcrumbs_cmd(
    category: Annotated[str, typer.Argument(help="Category")],
    slug: Annotated[Optional[str], typer.Argument(help="Article slug")] = None,
    content_dir: ContentDirOpt = None,
    store: StoreOpt = None,
    ):
    """Print the breadcrumb trail for a category or article page."""
    settings, repo = _repository(content_dir, store)
    crumbs = resolve_breadcrumbs(repo, category, slug, settings.base_url)
    typer.echo(" > ".join(f"{c.label} ({c.path})" for c in crumbs))


def tags_cmd(
    tag: Annotated[Optional[str], typer.Option("--tag", help="Show tags co-occurring with this tag")] = None,
    limit: Annotated[Optional[int], typer.Option("--limit", help="Max related tags")] = None,
    content_dir: ContentDirOpt = None,
    store: StoreOpt = None,
    ):
    """List tags by popularity, or the related tags of one tag."""
    settings, repo = _repository(content_dir, store)
    if tag:
        for t in related_tags(repo, tag, settings.related_tags_limit if limit is None else limit):
            typer.echo(f"  {t.tag}  (together {t.co_occurrence}, total {t.count})")
        return
    tags = all_tags(repo)
    if not tags:
        typer.echo("No tags found.")
        raise typer.Exit(1)
    for t in tags:
        typer.echo(f"  {t.tag}  ({t.count})")


def search_index_cmd(out: OutDirOpt = None, content_dir: ContentDirOpt = None, store: StoreOpt = None):
    """Write search-index.json for the client-side search page."""
    settings = _settings(overrides={"output_dir": out, "content_dir": content_dir, "store": store})
    repo = ContentRepository(_store(settings))
    entries = build_search_index(repo, settings.max_headings, settings.words_per_minute)
    path = write_search_index(entries, Path(settings.output_dir))
    typer.echo(f"Indexed {len(entries)} article(s) to {path}")


def graph_cmd(out: OutDirOpt = None, content_dir: ContentDirOpt = None, store: StoreOpt = None):
    """Write graph.json: article nodes with parent and related edges."""
    settings = _settings(overrides={"output_dir": out, "content_dir": content_dir, "store": store})
    repo = ContentRepository(_store(settings))
    graph = build_graph(repo)
    path = write_graph(graph, Path(settings.output_dir))
    typer.echo(f"Wrote {len(graph.nodes)} node(s), {len(graph.edges)} edge(s) to {path}")


def links_cmd(content_dir: ContentDirOpt = None, store: StoreOpt = None):
    """Report internal links that point at no known page."""
    _, repo = _repository(content_dir, store)
    broken = check_links(repo)
    if not broken:
        typer.echo("No broken links found.")
        return
    for b in broken:
        typer.echo(f"  {b.category}/{b.slug} -> {b.link}")
    typer.echo(f"Found {len(broken)} broken link(s).")
    raise typer.Exit(1)


def db_import_cmd(
    content_dir: ContentDirOpt = None,
    db_url: Annotated[Optional[str], typer.Option("--db-url", help="Database URL")] = None,
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate the articles table first")] = False,
    ):
    """Copy the filesystem content tree into the SQL store."""
    settings = _settings(overrides={"content_dir": content_dir, "db_url": db_url})
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing data cleared.")
    else:
        init_db(engine)
    try:
        counts = import_store(FileSystemStore(settings.content_dir), SQLStore(engine))
    except Exception as e:
        _fail("Import failed", e)
    typer.echo(
        f"Import complete - "
        f"{counts['created']} created, "
        f"{counts['updated']} updated, "
        f"{counts['unchanged']} unchanged"
    )
