from __future__ import annotations

from typing import Optional

from rich.columns import Columns
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .cards import Card
from .models import TableView


def card_panel(card: Optional[Card], hidden: bool = False) -> Panel:
    if hidden or card is None:
        t = Text("🂠", style="bold white on blue")
        return Panel(t, padding=(1, 3), border_style="blue")

    style = "bold red" if card.is_red else "bold white"
    inner = Text()
    inner.append(f"{card.face}\n", style=style)
    inner.append(card.label, style="dim")
    return Panel(inner, padding=(0, 1), border_style=("red" if card.is_red else "white"))


def seat_tags(view: TableView, i: int) -> str:
    s = view.seats[i]
    tag = ""
    if s.personality:
        tag += f" [{s.personality}]"
    if s.is_dealer:
        tag += " (D)"
    if s.folded:
        tag += " (FOLDED)" if s.dealt else " (OUT)"
    elif s.all_in:
        tag += " (ALL-IN)"
    if s.hand_name:
        tag += f" ({s.hand_name})"
    return tag


def render(console: Console, view: TableView, log_lines: int = 12):
    console.clear()

    header = Table.grid(expand=True)
    header.add_column(justify="left")
    header.add_column(justify="right")
    header.add_row(
        f"[bold]Texas Hold'em[/bold]  Hand #{view.hand_no}  Street: [bold]{view.street.title.upper()}[/bold]",
        f"Pot: [bold]{view.pot}[/bold]   Current bet: [bold]{view.current_bet}[/bold]",
    )
    console.print(header)
    console.print()

    board_panels = []
    for i in range(5):
        if i < len(view.community):
            board_panels.append(card_panel(view.community[i]))
        else:
            board_panels.append(Panel(Text(""), height=5, border_style="dim"))
    console.print("[bold]Board[/bold]")
    console.print(Columns(board_panels, equal=True, expand=True))
    console.print()

    seats = Table(expand=True, show_edge=False)
    seats.add_column("Seat")
    seats.add_column("Cards")
    seats.add_column("Bet", justify="right")
    seats.add_column("Stack", justify="right")
    for i, s in enumerate(view.seats):
        if s.hole is not None:
            cards = " ".join(f"[{'red' if c.is_red else 'white'}]{c.face}[/]" for c in s.hole)
        elif s.dealt and not s.folded:
            cards = "🂠 🂠"
        else:
            cards = ""
        name = f"[bold]{escape(s.name)}[/bold]" if s.is_acting else escape(s.name)
        won = f" [green]+{s.won}[/green]" if s.won else ""
        seats.add_row(f"{name}{escape(seat_tags(view, i))}", cards, str(s.bet or ""), f"{s.chips}{won}")
    console.print(seats)

    if view.winner_text:
        console.print(Panel(f"[bold green]{escape(view.winner_text)}[/bold green]", border_style="green"))

    console.print()
    console.print("[bold]Hand log[/bold]")
    for line in view.log[-log_lines:]:
        console.print(f" • {escape(line)}", style="dim")
