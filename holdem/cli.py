#!/usr/bin/env python3
"""
Texas Hold'em (CLI): one human against AI seats.

Actions at your turn:
  f            fold
  k            check
  c            call
  r <amount>   raise to <amount> (your total bet for the street)
  a            all-in

Commands (any prompt):
  odds         Monte Carlo win rate for your hand against the live opponents
  help         show this help
  q            quit
"""

from __future__ import annotations

import argparse
import logging
import random
import sys
import time
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .actions import ALL_IN, CALL, CHECK, FOLD, Decision, raise_to
from .ai import PERSONALITIES
from .config import STRENGTH_MODELS, TableConfig
from .engine import action_options, advance_until_wait, new_table, start_hand, submit_human_action
from .errors import HoldemError, IllegalAction
from .models import HandState, TableState, snapshot
from .render import render
from .strength import estimate_equity

log = logging.getLogger(__name__)


class QuitGame(Exception):
    pass


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="holdem", description="Texas Hold'em against AI opponents.")
    ap.add_argument("--seats", type=int, default=8, help="Seats at the table, including yours (2-8)")
    ap.add_argument("--chips", type=int, default=1000, help="Starting stack")
    ap.add_argument("--small-blind", type=int, default=10)
    ap.add_argument("--big-blind", type=int, default=20)
    ap.add_argument("--name", default="You", help="Your name at the table")
    ap.add_argument("--seed", type=int, default=None, help="Seed for a reproducible game")
    ap.add_argument("--strength", choices=STRENGTH_MODELS, default="heuristic",
                    help="How AI seats estimate their hand strength")
    ap.add_argument("--personality", choices=sorted(PERSONALITIES), default=None,
                    help="Give every AI seat this personality (default: random per seat)")
    ap.add_argument("--watch", action="store_true", help="No human seat: watch the AIs play")
    ap.add_argument("--fast", action="store_true", help="Skip the AI thinking pauses")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def config_from_args(args: argparse.Namespace) -> TableConfig:
    return TableConfig(
        seats=args.seats,
        starting_chips=args.chips,
        small_blind=args.small_blind,
        big_blind=args.big_blind,
        human_seat=None if args.watch else 0,
        human_name=args.name,
        think_delay=(0.0, 0.0) if args.fast else (0.5, 2.0),
        seed=args.seed,
        strength_model=args.strength,
        ai_personality=args.personality,
    ).validate()


def setup_logging(verbose: bool, console: Console):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


class TerminalTable:
    """Renders every change and reads the human's decisions from stdin."""

    def __init__(self, table: TableState, console: Console):
        self.t = table
        self.console = console
        self.odds_rng = random.Random()

    def show(self, h: HandState):
        render(self.console, snapshot(h, self.t))

    def pause(self, seconds: float):
        if seconds > 0:
            time.sleep(seconds)

    def read(self, prompt: str, h: Optional[HandState]) -> str:
        while True:
            s = self.console.input(prompt).strip().lower()
            if s in ("q", "quit", "exit"):
                raise QuitGame()
            if s == "help":
                self.console.print(__doc__)
                continue
            if s == "odds":
                self.console.print(self.odds_text(h))
                continue
            return s

    def odds_text(self, h: Optional[HandState]) -> str:
        if h is None or h.hand_done:
            return "No hand in progress."
        if self.t.config.human_seat is None:
            return "Nobody to compute odds for while watching."
        me = self.t.seats[self.t.config.human_seat]
        if me.folded or not me.hole:
            return "You are not in this hand."
        opponents = sum(1 for s in h.seats if s is not me and not s.folded and s.hole)
        eq = estimate_equity(me.hole, h.community, opponents, iters=700, rng=self.odds_rng)
        return f"Win rate vs {opponents} random hand(s): {100.0 * eq:5.1f}%"

    def human_decide(self, h: HandState) -> Decision:
        seat = h.acting_seat
        opt = action_options(h, seat)
        choices: List[str] = ["f=fold"]
        choices.append("k=check" if opt.can_check else f"c=call {opt.to_call}")
        if opt.can_raise:
            choices.append(f"r <{opt.min_raise_to}-{opt.max_raise_to}>=raise to")
        choices.append("a=all-in")
        while True:
            s = self.read(f"{seat.name}, choose ({', '.join(choices)}): ", h)
            parts = s.split()
            if not parts:
                continue
            cmd = parts[0]
            if cmd == "f":
                return FOLD
            if cmd == "k":
                return CHECK
            if cmd == "c":
                return CALL
            if cmd in ("a", "allin", "all-in"):
                return ALL_IN
            if cmd == "r":
                if len(parts) == 1:
                    return raise_to(opt.min_raise_to)
                if parts[1].isdigit():
                    return raise_to(int(parts[1]))
                self.console.print("Enter a whole number, e.g. r 60")
                continue
            self.console.print("Invalid input. Type 'help' for the list of actions.")

    def play_hand(self) -> HandState:
        h = start_hand(self.t)
        self.show(h)
        advance_until_wait(h, self.t, pause=self.pause, on_change=self.show)
        while not h.hand_done:
            decision = self.human_decide(h)
            try:
                submit_human_action(h, self.t, decision, pause=self.pause, on_change=self.show)
            except IllegalAction as e:
                log.info("rejected %s: %s", decision, e)
                self.console.print(f"[red]{escape(str(e))}[/red]")
        return h

    def run(self):
        while not self.t.game_over:
            h = self.play_hand()
            if self.t.game_over:
                break
            self.read("\nNext hand: Enter=deal, or type 'q' to quit: ", h)
        winner = self.t.seats[self.t.winner]
        self.console.print(f"\n[bold]Game over![/bold] {winner.name} won the game with {winner.chips}.")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    console = Console()
    setup_logging(args.verbose, console)
    try:
        table = new_table(config_from_args(args))
    except HoldemError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        return 2

    try:
        TerminalTable(table, console).run()
    except (QuitGame, KeyboardInterrupt, EOFError):
        log.info("quit after hand #%d", table.hand_no)
        console.print("\nGood game!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
