"""CLI for previewing a folio content directory."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from folio.config import FolioConfig, load_config, merge_cli_overrides
from folio.content.feed import render_feed
from folio.content.ingest import ingest, load_directory
from folio.content.models import Author, BlogFilter, Document
from folio.content.store import ContentStore
from folio.errors import ContentDirectoryError

app = typer.Typer(
    name="folio",
    help="Query a directory of markdown blog posts.",
)

console = Console()

ContentDirOption = Annotated[
    Optional[Path],
    typer.Option("--content-dir", "-d", help="Directory of markdown posts."),
]
ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to a .folio.toml file."),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from folio import __version__

        console.print(f"folio {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable debug logging.")] = False,
) -> None:
    """Folio - blog content engine."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(content_dir: Path | None, config_path: Path | None) -> tuple[FolioConfig, ContentStore]:
    """Resolve config and ingest the content directory into a fresh store."""
    config = merge_cli_overrides(
        load_config(config_path),
        content_dir=str(content_dir) if content_dir is not None else None,
    )
    directory = config.content_dir
    if not directory.is_dir():
        raise ContentDirectoryError(f"Content directory not found: {directory}")

    store = ContentStore()
    blog = config.to_blog_config()
    ingest(
        store,
        load_directory(directory),
        site_host=config.site_host(),
        default_author=Author(name=blog.author) if blog.author else None,
        max_workers=config.content.max_workers,
    )
    return config, store


def _load_or_exit(content_dir: Path | None, config_path: Path | None) -> tuple[FolioConfig, ContentStore]:
    try:
        return _load(content_dir, config_path)
    except ContentDirectoryError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from exc


def _documents_table(title: str, documents: list[Document]) -> Table:
    table = Table(title=title)
    table.add_column("Date", style="dim")
    table.add_column("Slug", style="cyan")
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Tags")
    table.add_column("Min", justify="right")
    for doc in documents:
        table.add_row(
            doc.publish_date.date().isoformat(),
            doc.slug,
            doc.title,
            doc.category.name,
            ", ".join(doc.tags),
            str(doc.read_time),
        )
    return table


@app.command("list")
def list_posts(
    page: Annotated[int, typer.Option("--page", "-p", help="Page number.")] = 1,
    page_size: Annotated[Optional[int], typer.Option("--page-size", help="Posts per page.")] = None,
    category: Annotated[Optional[str], typer.Option("--category", help="Category slug.")] = None,
    tag: Annotated[Optional[str], typer.Option("--tag", help="Tag substring.")] = None,
    author: Annotated[Optional[str], typer.Option("--author", help="Author substring.")] = None,
    featured: Annotated[Optional[bool], typer.Option("--featured/--not-featured")] = None,
    query: Annotated[Optional[str], typer.Option("--query", "-q", help="Search term.")] = None,
    content_dir: ContentDirOption = None,
    config_path: ConfigOption = None,
) -> None:
    """List published posts, newest first."""
    config, store = _load_or_exit(content_dir, config_path)
    criteria = BlogFilter(
        category=category,
        tag=tag,
        author=author,
        featured=featured,
        search_term=query,
    )
    response = store.list(
        page=page,
        page_size=page_size or config.to_blog_config().posts_per_page,
        filter=criteria,
    )
    console.print(_documents_table("Posts", response.items))
    console.print(
        f"Page {response.page}/{max(response.total_pages, 1)} "
        f"({response.total} posts)"
    )


@app.command()
def show(
    slug: Annotated[str, typer.Argument(help="Post slug.")],
    html: Annotated[bool, typer.Option("--html", help="Print rendered HTML body.")] = False,
    content_dir: ContentDirOption = None,
    config_path: ConfigOption = None,
) -> None:
    """Show a single post, drafts included."""
    _, store = _load_or_exit(content_dir, config_path)
    doc = store.get_by_slug(slug)
    if doc is None:
        console.print(f"[yellow]No post with slug '{slug}'[/yellow]")
        raise typer.Exit(1)

    console.print(f"[bold]{doc.title}[/bold]" + (" [yellow](draft)[/yellow]" if doc.draft else ""))
    console.print(f"{doc.publish_date.date().isoformat()} · {doc.category.name} · {doc.read_time} min read")
    if doc.tags:
        console.print(f"Tags: {', '.join(doc.tags)}")
    console.print(doc.excerpt)
    if html:
        console.print(doc.body, markup=False, highlight=False, soft_wrap=True)


@app.command()
def search(
    term: Annotated[str, typer.Argument(help="Search term.")],
    content_dir: ContentDirOption = None,
    config_path: ConfigOption = None,
) -> None:
    """Full-text search over published posts."""
    config, store = _load_or_exit(content_dir, config_path)
    if not config.blog.enable_search:
        console.print("[yellow]Search is disabled in configuration[/yellow]")
        raise typer.Exit(1)

    response = store.search(term)
    table = Table(title=f"Results for '{term}'")
    table.add_column("Score", justify="right")
    table.add_column("Slug", style="cyan")
    table.add_column("Title")
    table.add_column("Matched")
    for hit in response.results:
        table.add_row(
            f"{hit.score:g}",
            hit.document.slug,
            hit.document.title,
            ", ".join(hit.matched_fields),
        )
    console.print(table)
    console.print(f"{response.total_results} results in {response.search_time:.2f} ms")
    if response.suggestions:
        console.print(f"Suggestions: {', '.join(response.suggestions)}")


@app.command()
def related(
    slug: Annotated[str, typer.Argument(help="Post slug.")],
    limit: Annotated[Optional[int], typer.Option("--limit", "-n", help="Maximum results.")] = None,
    preview: Annotated[bool, typer.Option("--preview", help="Include drafts.")] = False,
    content_dir: ContentDirOption = None,
    config_path: ConfigOption = None,
) -> None:
    """Recommend posts related to SLUG."""
    config, store = _load_or_exit(content_dir, config_path)
    doc = store.get_by_slug(slug)
    if doc is None:
        console.print(f"[yellow]No post with slug '{slug}'[/yellow]")
        raise typer.Exit(1)

    results = store.related(
        doc.id,
        limit if limit is not None else config.to_blog_config().related_posts_count,
        include_drafts=preview,
    )
    table = Table(title=f"Related to '{doc.title}'")
    table.add_column("Score", justify="right")
    table.add_column("Slug", style="cyan")
    table.add_column("Title")
    for item in results:
        table.add_row(str(item.score), item.slug, item.title)
    console.print(table)


@app.command()
def stats(
    content_dir: ContentDirOption = None,
    config_path: ConfigOption = None,
) -> None:
    """Show aggregate statistics."""
    _, store = _load_or_exit(content_dir, config_path)
    result = store.statistics()
    console.print(f"Posts: {result.total_posts}")
    console.print(f"Views: {result.total_views}  Likes: {result.total_likes}")

    table = Table(title="Categories")
    table.add_column("Category")
    table.add_column("Posts", justify="right")
    for category_id, count in sorted(result.categories_count.items()):
        table.add_row(category_id, str(count))
    console.print(table)


@app.command()
def feed(
    output: Annotated[Optional[Path], typer.Option("--output", "-o", help="Write XML here.")] = None,
    content_dir: ContentDirOption = None,
    config_path: ConfigOption = None,
) -> None:
    """Render the RSS feed."""
    config, store = _load_or_exit(content_dir, config_path)
    blog = config.to_blog_config()
    if not blog.enable_rss:
        console.print("[yellow]RSS is disabled in configuration[/yellow]")
        raise typer.Exit(1)

    xml = render_feed(store.feed(blog))
    if output is None:
        console.print(xml, markup=False, highlight=False, soft_wrap=True)
    else:
        output.write_text(xml, encoding="utf-8")
        console.print(f"Wrote feed to {output}")


if __name__ == "__main__":
    app()
