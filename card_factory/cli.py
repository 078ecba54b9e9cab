"""CLI interface for the card factory."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.rule import Rule
from rich.table import Table

from card_factory.adapters import create_source
from card_factory.config import AppConfig, DeckConfig, load_config
from card_factory.factories import Creature, Spell, create_pair, get_deck
from card_factory.models import (
    ArtVersionRecord,
    CardRecord,
    InvalidQuery,
    NotFound,
    TransientError,
)

console = Console()

PATTERN_INFO = (
    "[grey50]Abstract Factory Pattern Benefits:[/grey50]\n"
    "  [green]✓[/green] Client code works with ANY deck through the same factory functions\n"
    "  [green]✓[/green] Deck color determines which theme is used\n"
    "  [green]✓[/green] Factory creates products matching its theme\n"
    "  [green]✓[/green] Real MTG data fetched dynamically from Scryfall"
)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Set up logging
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )

    if not hasattr(args, "func"):
        parser.print_help()
        return

    args.func(args)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="card-factory",
        description="Abstract Factory demo with live Magic: The Gathering card data",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (-v info, -vv debug)",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to config.yaml (default: config.yaml)",
    )

    subparsers = parser.add_subparsers(title="commands", dest="command")

    # lookup
    lookup_parser = subparsers.add_parser("lookup", help="Look up one card by fuzzy name")
    lookup_parser.add_argument("name", nargs="+", help="Card name (typos are fine)")
    lookup_parser.add_argument(
        "--art",
        action="store_true",
        help="Also list every unique art version",
    )
    lookup_parser.set_defaults(func=_cmd_lookup)

    # art
    art_parser = subparsers.add_parser("art", help="List the unique art versions of a card")
    art_parser.add_argument("name", nargs="+", help="Card name (resolved by fuzzy lookup first)")
    art_parser.set_defaults(func=_cmd_art)

    # decks
    decks_parser = subparsers.add_parser("decks", help="List the deck themes")
    decks_parser.set_defaults(func=_cmd_decks)

    # deck
    deck_parser = subparsers.add_parser("deck", help="Build a creature and a spell with a deck factory")
    deck_parser.add_argument("--color", type=str, default=None, help="Deck color, e.g. red or blue")
    deck_parser.add_argument("--creature", type=str, default=None, help="Creature card name")
    deck_parser.add_argument("--spell", type=str, default=None, help="Spell card name")
    deck_parser.set_defaults(func=_cmd_deck)

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the JSON API")
    serve_parser.add_argument("--host", type=str, default=None, help="Bind address (overrides config)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port (overrides config)")
    serve_parser.set_defaults(func=_cmd_serve)

    return parser


def _load_app_config(args: argparse.Namespace) -> AppConfig:
    """Load config, exiting with a message on errors."""
    try:
        return load_config(args.config)
    except ValueError as exc:
        console.print(str(exc), style="red", markup=False)
        sys.exit(1)


# ------------------------------------------------------------------
# Command handlers
# ------------------------------------------------------------------


def _cmd_lookup(args: argparse.Namespace) -> None:
    config = _load_app_config(args)
    query = " ".join(args.name)
    ok = asyncio.run(_run_lookup(config, query, with_art=args.art))
    if not ok:
        sys.exit(1)


def _cmd_art(args: argparse.Namespace) -> None:
    config = _load_app_config(args)
    query = " ".join(args.name)
    ok = asyncio.run(_run_lookup(config, query, with_art=True, show_card=False))
    if not ok:
        sys.exit(1)


async def _run_lookup(
    config: AppConfig,
    query: str,
    with_art: bool = False,
    show_card: bool = True,
) -> bool:
    source = create_source(config.source)
    try:
        with console.status(f"Looking up '{escape(query)}'..."):
            result = await source.lookup_card(query)
        if not _report_failure(result):
            return False

        if show_card:
            console.print(card_table(result))
        if with_art:
            # Always search art by the canonical name, not the query
            with console.status(f"Fetching art versions for '{escape(result.name)}'..."):
                versions = await source.lookup_art_versions(result.name)
            console.print(art_table(result.name, versions))
        return True
    finally:
        await source.close()


def _report_failure(result: object) -> bool:
    """Print a message for a failed lookup. Returns True on success."""
    if isinstance(result, CardRecord):
        return True
    if isinstance(result, InvalidQuery):
        console.print("[red]Please enter a card name[/red]")
    elif isinstance(result, NotFound):
        if result.ambiguous:
            console.print(f"[yellow]'{escape(result.query)}' matches too many cards, be more specific[/yellow]")
        else:
            console.print(f"[yellow]Card not found: {escape(result.query)}[/yellow]")
    elif isinstance(result, TransientError):
        console.print(f"[red]Search failed, try again[/red] ({escape(result.message)})")
    return False


def _cmd_decks(args: argparse.Namespace) -> None:
    config = _load_app_config(args)
    table = Table(title="Deck Factories")
    table.add_column("Id", style="cyan")
    table.add_column("Name")
    table.add_column("Style")
    table.add_column("Creature")
    table.add_column("Spell")
    for deck in config.decks.values():
        table.add_row(
            escape(deck.id),
            f"[{deck.color}]{escape(deck.name)}[/{deck.color}]",
            escape(deck.description),
            escape(deck.creature),
            escape(deck.spell),
        )
    console.print(table)


def _cmd_deck(args: argparse.Namespace) -> None:
    config = _load_app_config(args)
    interactive = args.color is None
    deck_ids = list(config.decks)

    while True:
        color = args.color or Prompt.ask(
            "Choose your [green]deck color[/green]",
            choices=deck_ids,
            default=deck_ids[0],
            console=console,
        )
        deck = get_deck(config.decks, color)
        if deck is None:
            console.print(f"[red]Unknown deck color: {escape(color)}. Available: {', '.join(deck_ids)}[/red]")
            sys.exit(1)

        console.print(Rule(f"[{deck.color}]{escape(deck.name.upper())} DECK FACTORY[/{deck.color}]"))
        creature_name = args.creature or deck.creature
        spell_name = args.spell or deck.spell
        if interactive:
            creature_name = Prompt.ask(
                "[green]Enter creature card name[/green]",
                default=creature_name,
                console=console,
            )
            spell_name = Prompt.ask(
                "[green]Enter spell card name[/green]",
                default=spell_name,
                console=console,
            )

        creature, spell = asyncio.run(_run_deck(config, deck, creature_name, spell_name))
        console.print(creature_table(creature, deck.color))
        console.print(spell_table(spell, deck.color))
        console.print(Panel(PATTERN_INFO, title="[yellow]Pattern Info[/yellow]", border_style="grey50"))

        if not interactive or not Confirm.ask("Look up more cards?", default=False, console=console):
            break

    console.print(Rule("[grey50]Thanks for using MTG Card Factory![/grey50]"))


async def _run_deck(
    config: AppConfig, deck: DeckConfig, creature_name: str, spell_name: str
) -> tuple[Creature, Spell]:
    source = create_source(config.source)
    try:
        with console.status("Fetching cards from Scryfall..."):
            return await create_pair(source, deck, creature_name, spell_name)
    finally:
        await source.close()


def _cmd_serve(args: argparse.Namespace) -> None:
    import uvicorn

    from card_factory.main import create_app

    config = _load_app_config(args)
    host = args.host or config.api.host
    port = args.port or config.api.port
    console.print(f"[bold]Serving card factory API on http://{host}:{port}[/bold]")
    uvicorn.run(create_app(config), host=host, port=port)


# ------------------------------------------------------------------
# Rendering
# ------------------------------------------------------------------


def card_table(card: CardRecord) -> Table:
    table = Table(title=escape(card.name), show_header=False)
    table.add_column("Property", style="bold", width=15)
    table.add_column("Value", overflow="fold")
    table.add_row("Mana Cost", escape(card.mana_cost or ""))
    table.add_row("Type", escape(card.type_line or ""))
    table.add_row("Text", escape(card.oracle_text or ""))
    if card.power is not None or card.toughness is not None:
        table.add_row("Power/Toughness", escape(f"{card.power or '?'}/{card.toughness or '?'}"))
    table.add_row("Colors", ", ".join(sorted(card.colors)) or "Colorless")
    table.add_row("Image", escape(card.image_url or ""))
    return table


def art_table(card_name: str, versions: List[ArtVersionRecord]) -> Table:
    table = Table(title=f"{escape(card_name)}: {len(versions)} art version(s)")
    table.add_column("Set", style="cyan")
    table.add_column("Code")
    table.add_column("#", justify="right")
    table.add_column("Artist")
    table.add_column("Image", overflow="fold")
    for v in versions:
        table.add_row(
            escape(v.set_name or "Unknown Set"),
            escape((v.set_code or "").upper()),
            escape(v.collector_number or ""),
            escape(v.artist or "Unknown Artist"),
            escape(v.image_url or v.art_crop_url or ""),
        )
    return table


def creature_table(creature: Creature, color: str) -> Table:
    table = _product_table("CREATURE", color)
    table.add_row("[bold]Name[/bold]", escape(creature.name))
    table.add_row("[bold]Mana Cost[/bold]", escape(creature.mana_cost))
    table.add_row("[bold]Power/Toughness[/bold]", escape(creature.power_toughness))
    table.add_row("[bold]Keywords[/bold]", escape(creature.keywords))
    table.add_row("[bold]Text[/bold]", escape(creature.text))
    return table


def spell_table(spell: Spell, color: str) -> Table:
    table = _product_table("SPELL", color)
    table.add_row("[bold]Name[/bold]", escape(spell.name))
    table.add_row("[bold]Mana Cost[/bold]", escape(spell.mana_cost))
    table.add_row("[bold]Type[/bold]", escape(spell.keywords))
    table.add_row("[bold]Text[/bold]", escape(spell.text))
    return table


def _product_table(title: str, color: str) -> Table:
    table = Table(title=f"[{color}]{title}[/{color}]", border_style=color)
    table.add_column("[grey50]Property[/grey50]", width=15)
    table.add_column("[grey50]Value[/grey50]", max_width=50, overflow="fold")
    return table
