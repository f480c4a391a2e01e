"""
Command-line interface for the pay-per-reveal server.

Usage:
    pay-per-reveal serve                       # Run the API
    pay-per-reveal articles                    # List loaded articles
    pay-per-reveal preview <index>             # Show an article as a reader sees it
"""

import logging
from pathlib import Path
from typing import Optional

import typer
import uvicorn
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from api.config import get_settings
from reveal_core.errors import RevealError
from reveal_core.identity import user_identity_for
from reveal_core.ledger import RevealLedger
from reveal_core.models import TokenKind
from reveal_core.reveal import RevealService
from reveal_core.store import ArticleStore

app = typer.Typer(
    name="pay-per-reveal",
    help="Articles with blurred words, revealed one micropayment at a time",
)
console = Console()


def _load_store(config: Optional[Path]) -> ArticleStore:
    return ArticleStore.load(config or get_settings().article_config_path)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from API_HOST)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (default from API_PORT)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the API server."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    console.print("\n[bold cyan]Pay-Per-Reveal Article Server[/bold cyan]")
    console.print(f"  Pay to:      {settings.pay_to_address or '[red]not set[/red]'}")
    console.print(f"  Network:     {settings.network}")
    console.print(f"  Facilitator: {settings.facilitator_url}")
    console.print(f"  Articles:    {settings.article_config_path}\n")

    uvicorn.run(
        "api.main:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


@app.command()
def articles(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Article config JSON"),
):
    """List articles with their token and blurred-word counts."""
    store = _load_store(config)

    table = Table(title="Articles")
    table.add_column("#", justify="right")
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Price", justify="right")
    table.add_column("Tokens", justify="right")
    table.add_column("Blurred", justify="right", style="yellow")
    table.add_column("Phrases", justify="right")

    for index, article in enumerate(store):
        table.add_row(
            str(index),
            article.id,
            article.title,
            article.price_per_reveal,
            str(len(article.tokens)),
            str(article.blurred_count),
            str(len({span.group_id for span in article.spans})),
        )
    console.print(table)


@app.command()
def preview(
    index: int = typer.Argument(..., help="Article index"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Article config JSON"),
    reveal: list[str] = typer.Option([], "--reveal", "-r", help="Token id to reveal first (repeatable)"),
    wallet: str = typer.Option("0xpreview", "--wallet", "-w", help="Wallet address to reveal as"),
):
    """Print an article the way a reader sees it, optionally after some reveals."""
    user = user_identity_for(wallet)
    try:
        store = _load_store(config)
        service = RevealService(store, RevealLedger())
        article = store.by_index(index)
        for token_id in reveal:
            result = service.reveal_word(article.id, token_id, user)
            console.print(f"[green]{escape(result.message)}[/green]")
    except RevealError as exc:
        console.print(f"[red]Error:[/red] {escape(exc.message)}")
        raise typer.Exit(code=1)

    lines: list[str] = []
    current: list[str] = []
    for token in service.render_masked(article.id, user):
        if token.type == TokenKind.PARAGRAPH_BREAK.value:
            lines.extend([" ".join(current), ""])
            current = []
        elif token.type == TokenKind.LINE_BREAK.value:
            lines.append(" ".join(current))
            current = []
        elif token.is_blurred and not token.is_revealed:
            current.append(f"[dim]{token.text}[/dim]")
        elif token.is_revealed:
            current.append(f"[bold green]{escape(token.text)}[/bold green]")
        else:
            current.append(escape(token.text))
    lines.append(" ".join(current))

    console.print(f"\n[bold]{escape(article.title)}[/bold]  [dim]({article.price_per_reveal} per word)[/dim]\n")
    console.print("\n".join(lines), highlight=False)


if __name__ == "__main__":
    app()
