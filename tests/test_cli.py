import io
import unittest

from rich.console import Console

from holdem.actions import ALL_IN, CHECK, FOLD, raise_to
from holdem.cli import QuitGame, TerminalTable, build_parser, config_from_args, main
from holdem.config import TableConfig
from holdem.engine import advance_until_wait, new_table, start_hand


class Scripted(TerminalTable):
    """Feeds canned answers instead of reading stdin."""

    def __init__(self, table, answers):
        super().__init__(table, Console(file=io.StringIO(), width=120))
        self.answers = list(answers)

    def read(self, prompt, h):
        if not self.answers:
            raise QuitGame()
        return self.answers.pop(0)


class TestArgs(unittest.TestCase):

    def test_defaults(self):
        cfg = config_from_args(build_parser().parse_args([]))
        self.assertEqual((cfg.seats, cfg.starting_chips, cfg.small_blind, cfg.big_blind), (8, 1000, 10, 20))
        self.assertEqual(cfg.human_seat, 0)
        self.assertEqual(cfg.think_delay, (0.5, 2.0))

    def test_flags(self):
        args = build_parser().parse_args(["--seats", "4", "--chips", "500", "--small-blind", "5",
                                          "--big-blind", "10", "--seed", "3", "--watch", "--fast",
                                          "--strength", "equity", "--name", "Ann",
                                          "--personality", "tight"])
        cfg = config_from_args(args)
        self.assertEqual(cfg.ai_personality, "tight")
        self.assertEqual((cfg.seats, cfg.starting_chips, cfg.small_blind, cfg.big_blind), (4, 500, 5, 10))
        self.assertIsNone(cfg.human_seat)
        self.assertEqual(cfg.think_delay, (0.0, 0.0))
        self.assertEqual((cfg.seed, cfg.strength_model, cfg.human_name), (3, "equity", "Ann"))

    def test_bad_table_exits_with_error(self):
        self.assertEqual(main(["--seats", "12"]), 2)


class TestTerminal(unittest.TestCase):

    def test_human_input_parsing(self):
        t = new_table(TableConfig(seats=2, human_seat=0, think_delay=(0.0, 0.0), seed=2))
        h = start_hand(t)
        advance_until_wait(h, t)
        self.assertTrue(h.awaiting_human)

        self.assertEqual(Scripted(t, ["", "x", "r abc", "r 60"]).human_decide(h), raise_to(60))
        self.assertEqual(Scripted(t, ["r"]).human_decide(h), raise_to(40))
        self.assertEqual(Scripted(t, ["f"]).human_decide(h), FOLD)
        self.assertEqual(Scripted(t, ["k"]).human_decide(h), CHECK)
        self.assertEqual(Scripted(t, ["all-in"]).human_decide(h), ALL_IN)
        with self.assertRaises(QuitGame):
            Scripted(t, []).human_decide(h)

    def test_rejected_action_is_logged_and_reprompted(self):
        t = new_table(TableConfig(seats=2, human_seat=0, think_delay=(0.0, 0.0), seed=2))
        term = Scripted(t, ["k", "f"])
        with self.assertLogs("holdem.cli", level="INFO") as logs:
            h = term.play_hand()
        self.assertTrue(h.hand_done)
        self.assertTrue(t.seats[0].folded)
        self.assertIn("rejected check", logs.output[0])
        self.assertIn("cannot check", term.console.file.getvalue())

    def test_odds_text(self):
        t = new_table(TableConfig(seats=3, human_seat=0, think_delay=(0.0, 0.0), seed=6))
        term = Scripted(t, [])
        self.assertEqual(term.odds_text(None), "No hand in progress.")
        h = start_hand(t)
        self.assertIn("Win rate vs 2 random hand(s)", term.odds_text(h))

    def test_watch_a_few_hands(self):
        t = new_table(TableConfig(seats=4, human_seat=None, think_delay=(0.0, 0.0), seed=12))
        term = Scripted(t, ["", ""])
        with self.assertRaises(QuitGame):
            term.run()
        self.assertLessEqual(t.hand_no, 3)
        self.assertGreaterEqual(t.hand_no, 1)
        self.assertEqual(sum(s.chips for s in t.seats), 4000)
        self.assertIn("Hand #1", term.console.file.getvalue())


if __name__ == "__main__":
    unittest.main()
