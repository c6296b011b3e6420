import unittest

from holdem.actions import ALL_IN, CALL, CHECK, FOLD, raise_to
from holdem.config import TableConfig
from holdem.engine import (action_options, advance_until_wait, apply_action, betting_closed,
                           is_round_complete, new_table, play_hand, start_hand,
                           submit_human_action, validate_action)
from holdem.errors import ConfigError, IllegalAction
from holdem.models import Street, snapshot


def ai_table(seats=3, seed=1, think_delay=(0.0, 0.0), **kw):
    cfg = TableConfig(seats=seats, human_seat=None, think_delay=think_delay, seed=seed, **kw)
    return new_table(cfg)


def chips_of(t):
    return [s.chips for s in t.seats]


class TestTable(unittest.TestCase):

    def test_new_table(self):
        t = new_table(TableConfig(seats=4, seed=3))
        self.assertEqual([s.name for s in t.seats], ["You", "Player 2", "Player 3", "Player 4"])
        self.assertTrue(t.seats[0].is_human)
        self.assertIsNone(t.seats[0].personality)
        self.assertTrue(all(s.personality for s in t.seats[1:]))
        self.assertEqual(t.total_chips, 4000)

    def test_fixed_ai_personality(self):
        t = new_table(TableConfig(seats=4, seed=3, ai_personality="Conservative"))
        self.assertEqual([s.personality.name for s in t.seats[1:]], ["Conservative"] * 3)

    def test_bad_config(self):
        for cfg in (TableConfig(seats=1), TableConfig(seats=9), TableConfig(small_blind=30),
                    TableConfig(human_seat=5, seats=4), TableConfig(strength_model="magic"),
                    TableConfig(ai_personality="maniac")):
            with self.subTest(cfg=cfg), self.assertRaises(ConfigError):
                new_table(cfg)


class TestBlinds(unittest.TestCase):

    def test_blinds_and_first_to_act(self):
        t = ai_table(seats=8)
        h = start_hand(t)
        self.assertEqual(h.dealer, 1)
        self.assertEqual((h.sb_seat, h.bb_seat), (2, 3))
        self.assertEqual(h.pot, 30)
        self.assertEqual(h.current_bet, 20)
        self.assertEqual(h.acting, 4)
        self.assertTrue(all(len(s.hole) == 2 for s in t.seats))
        self.assertEqual(len(h.deck), 52 - 16)

    def test_heads_up_blinds(self):
        t = ai_table(seats=2)
        h = start_hand(t)
        self.assertEqual((h.dealer, h.sb_seat, h.bb_seat), (1, 0, 1))
        self.assertEqual(h.acting, 0)

    def test_short_big_blind_is_all_in(self):
        t = ai_table(seats=3)
        t.seats[0].chips = 5
        t.seats[1].chips += 995
        h = start_hand(t)
        self.assertEqual(h.bb_seat, 0)
        self.assertTrue(t.seats[0].all_in)
        self.assertEqual(h.pot, 15)
        self.assertEqual(h.current_bet, 10)

    def test_broke_seat_sits_out(self):
        t = ai_table(seats=4)
        t.seats[2].chips = 0
        t.seats[3].chips += 1000
        h = start_hand(t)
        self.assertTrue(t.seats[2].folded)
        self.assertEqual(t.seats[2].hole, [])
        self.assertEqual((h.dealer, h.sb_seat, h.bb_seat), (1, 3, 0))


class TestBetting(unittest.TestCase):

    def test_everyone_folds_to_big_blind(self):
        t = ai_table(seats=8)
        h = start_hand(t)
        while h.acting != h.bb_seat:
            apply_action(h, FOLD)
        advance_until_wait(h, t)
        self.assertTrue(h.hand_done)
        self.assertEqual(h.payouts, {h.bb_seat: 30})
        self.assertEqual(t.seats[h.bb_seat].chips, 1010)
        self.assertEqual(t.seats[h.sb_seat].chips, 990)
        self.assertEqual(h.community, [])
        self.assertEqual(h.street, Street.PRE_FLOP)
        self.assertEqual(sum(chips_of(t)), 8000)

    def test_raise_reopens_action(self):
        t = ai_table(seats=3)
        h = start_hand(t)
        d, sb, bb = h.dealer, h.sb_seat, h.bb_seat
        self.assertEqual(h.acting, d)
        apply_action(h, CALL)
        apply_action(h, CALL)
        self.assertEqual(h.acting, bb)
        self.assertFalse(is_round_complete(h))

        apply_action(h, raise_to(60))
        self.assertEqual(h.current_bet, 60)
        self.assertTrue(t.seats[bb].has_acted)
        self.assertFalse(t.seats[d].has_acted)
        self.assertFalse(t.seats[sb].has_acted)

        apply_action(h, CALL)
        self.assertFalse(is_round_complete(h))
        apply_action(h, CALL)
        self.assertTrue(is_round_complete(h))
        self.assertEqual(h.pot, 180)

    def test_big_blind_option_when_limped(self):
        t = ai_table(seats=3)
        h = start_hand(t)
        apply_action(h, CALL)
        apply_action(h, CALL)
        self.assertEqual(action_options(h, h.acting_seat).to_call, 0)
        self.assertTrue(action_options(h, h.acting_seat).can_check)
        apply_action(h, CHECK)
        self.assertTrue(is_round_complete(h))

    def test_check_facing_bet_is_rejected_without_change(self):
        t = ai_table(seats=3)
        h = start_hand(t)
        before = (chips_of(t), h.pot, h.current_bet, h.acting, len(h.log))
        with self.assertRaises(IllegalAction):
            apply_action(h, CHECK)
        self.assertEqual(before, (chips_of(t), h.pot, h.current_bet, h.acting, len(h.log)))

    def test_out_of_turn(self):
        t = ai_table(seats=3)
        h = start_hand(t)
        other = t.seats[(h.acting + 1) % 3]
        with self.assertRaises(IllegalAction):
            validate_action(h, other, FOLD)

    def test_call_with_nothing_owed_is_a_check(self):
        t = ai_table(seats=3)
        h = start_hand(t)
        apply_action(h, CALL)
        apply_action(h, CALL)
        self.assertEqual(apply_action(h, CALL), CHECK)

    def test_raise_is_clamped(self):
        t = ai_table(seats=3)
        h = start_hand(t)
        self.assertEqual(apply_action(h, raise_to(25)), raise_to(40))
        self.assertEqual(h.current_bet, 40)
        self.assertEqual(apply_action(h, raise_to(5000)), ALL_IN)
        self.assertEqual(h.current_bet, 1000)

    def test_action_options(self):
        t = ai_table(seats=3)
        h = start_hand(t)
        opts = action_options(h, h.acting_seat)
        self.assertEqual((opts.to_call, opts.can_check, opts.can_raise), (20, False, True))
        self.assertEqual((opts.min_raise_to, opts.max_raise_to), (40, 1000))


class TestAllIn(unittest.TestCase):

    def test_all_in_runs_out_the_board(self):
        t = ai_table(seats=2, seed=5)
        h = start_hand(t)
        apply_action(h, ALL_IN)
        self.assertEqual(h.current_bet, 1000)
        self.assertFalse(betting_closed(h))
        self.assertEqual(apply_action(h, CALL), CALL)
        self.assertTrue(betting_closed(h))

        advance_until_wait(h, t)
        self.assertTrue(h.hand_done)
        self.assertEqual(h.street, Street.SHOWDOWN)
        self.assertEqual(len(h.community), 5)
        self.assertEqual(len(h.deck), 52 - 4 - 3 - 5)
        self.assertEqual(sum(chips_of(t)), 2000)
        self.assertEqual(sum(h.payouts.values()), 2000)
        if len(h.payouts) == 1:
            self.assertTrue(t.game_over)
            self.assertEqual(t.winner, next(iter(h.payouts)))

    def test_raise_against_all_in_becomes_call(self):
        t = ai_table(seats=2)
        h = start_hand(t)
        apply_action(h, ALL_IN)
        self.assertEqual(apply_action(h, raise_to(500)), CALL)

    def test_snapshot_shows_cards_at_showdown(self):
        t = ai_table(seats=2, seed=9)
        h = start_hand(t)
        self.assertTrue(all(v.hole is None for v in snapshot(h, t).seats))
        apply_action(h, ALL_IN)
        apply_action(h, CALL)
        advance_until_wait(h, t)
        view = snapshot(h, t)
        self.assertTrue(all(v.hole is not None and v.hand_name for v in view.seats))
        self.assertEqual(view.pot, 0)
        self.assertTrue(view.hand_done)


class TestSession(unittest.TestCase):

    def test_chips_are_conserved_over_many_hands(self):
        t = ai_table(seats=6, seed=7, starting_chips=300)
        streets = []
        for _ in range(60):
            if t.game_over:
                break
            h = play_hand(t, on_change=lambda hs: streets.append(len(hs.community)))
            self.assertTrue(h.hand_done)
            self.assertEqual(h.pot, 0)
            self.assertEqual(sum(chips_of(t)), 1800)
            self.assertTrue(all(c >= 0 for c in chips_of(t)))
            self.assertLessEqual(len(h.community), 5)
        self.assertTrue(all(n in (0, 3, 4, 5) for n in streets))

    def test_same_seed_same_session(self):
        a, b = ai_table(seats=4, seed=21), ai_table(seats=4, seed=21)
        for _ in range(5):
            if a.game_over:
                break
            ha, hb = play_hand(a), play_hand(b)
            self.assertEqual(ha.log, hb.log)
        self.assertEqual(chips_of(a), chips_of(b))

    def test_game_over(self):
        t = ai_table(seats=2)
        t.seats[1].chips += t.seats[0].chips
        t.seats[0].chips = 0
        with self.assertRaises(IllegalAction):
            start_hand(t)
        self.assertTrue(t.game_over)
        self.assertEqual(t.winner, 1)

    def test_pause_gets_think_delays(self):
        t = ai_table(seats=3, think_delay=(0.25, 0.5))
        waits = []
        play_hand(t, pause=waits.append)
        self.assertTrue(waits)
        self.assertTrue(all(0.25 <= w <= 0.5 for w in waits))


class TestHuman(unittest.TestCase):

    def test_waits_for_human_then_continues(self):
        t = new_table(TableConfig(seats=3, human_seat=0, think_delay=(0.0, 0.0), seed=4))
        for _ in range(30):
            h = play_hand(t)
            if h.awaiting_human:
                break
        self.assertTrue(h.awaiting_human)
        self.assertFalse(h.hand_done)
        self.assertTrue(h.acting_seat.is_human)
        self.assertIsNotNone(snapshot(h, t).seats[0].hole)

        submit_human_action(h, t, FOLD)
        self.assertTrue(t.seats[0].folded)
        self.assertTrue(h.hand_done)
        self.assertFalse(h.awaiting_human)
        self.assertEqual(sum(chips_of(t)), 3000)

    def test_submit_without_pending_decision(self):
        t = ai_table(seats=3)
        h = start_hand(t)
        with self.assertRaises(IllegalAction):
            submit_human_action(h, t, FOLD)

    def test_illegal_human_action_keeps_waiting(self):
        t = new_table(TableConfig(seats=2, human_seat=0, think_delay=(0.0, 0.0), seed=2))
        h = start_hand(t)
        advance_until_wait(h, t)
        self.assertTrue(h.awaiting_human)
        self.assertEqual(h.acting_seat.index, 0)
        with self.assertRaises(IllegalAction):
            submit_human_action(h, t, CHECK)
        self.assertTrue(h.awaiting_human)
        self.assertEqual(submit_human_action(h, t, FOLD).payouts, {1: 30})


if __name__ == "__main__":
    unittest.main()
