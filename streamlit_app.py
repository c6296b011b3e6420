"""
Texas Hold'em in the browser.

Run:
  streamlit run streamlit_app.py
"""

from __future__ import annotations

import streamlit as st

from holdem.actions import ALL_IN, CALL, CHECK, FOLD, Decision, raise_to
from holdem.cards import Card
from holdem.config import TableConfig
from holdem.engine import action_options, advance_until_wait, new_table, start_hand, submit_human_action
from holdem.errors import HoldemError, IllegalAction
from holdem.models import HandState, TableState, TableView, snapshot


# ----------------------------
# Card face (SVG) rendering
# ----------------------------

def card_svg(card: Card, width=120, height=170):
    sym = card.face[1:]
    color = "#C1121F" if card.is_red else "#111111"
    r = card.rank

    svg = f"""
    <svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" viewBox="0 0 120 170">
      <rect x="2" y="2" width="116" height="166" rx="12" ry="12" fill="white" stroke="#222" stroke-width="2"/>
      <text x="12" y="24" font-size="20" font-family="Arial" fill="{color}">{r}</text>
      <text x="12" y="46" font-size="22" font-family="Arial" fill="{color}">{sym}</text>

      <text x="60" y="98" text-anchor="middle" font-size="54" font-family="Arial" fill="{color}">{sym}</text>

      <g transform="rotate(180,60,85)">
        <text x="12" y="24" font-size="20" font-family="Arial" fill="{color}">{r}</text>
        <text x="12" y="46" font-size="22" font-family="Arial" fill="{color}">{sym}</text>
      </g>
    </svg>
    """
    return svg.strip().encode("utf-8")


def card_back_svg(width=120, height=170):
    svg = f"""
    <svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" viewBox="0 0 120 170">
      <rect x="2" y="2" width="116" height="166" rx="12" ry="12" fill="#0B3D91" stroke="#222" stroke-width="2"/>
      <rect x="10" y="10" width="100" height="150" rx="10" ry="10" fill="none" stroke="white" stroke-width="2"/>
      <text x="60" y="92" text-anchor="middle" font-size="18" font-family="Arial" fill="white">HOLD'EM</text>
    </svg>
    """
    return svg.strip().encode("utf-8")


# ----------------------------
# Session
# ----------------------------

def new_game(seats: int, starting_chips: int, small_blind: int):
    cfg = TableConfig(seats=seats, starting_chips=starting_chips, small_blind=small_blind,
                      big_blind=small_blind * 2, think_delay=(0.0, 0.0))
    t = new_table(cfg)
    st.session_state.t = t
    st.session_state.h = start_hand(t)
    st.session_state.info = ""


def next_hand():
    t: TableState = st.session_state.t
    if not t.game_over:
        st.session_state.h = start_hand(t)


def act(decision: Decision):
    try:
        submit_human_action(st.session_state.h, st.session_state.t, decision)
    except IllegalAction as e:
        st.session_state.info = str(e)


# ----------------------------
# Rendering
# ----------------------------

def render_board(view: TableView):
    st.subheader("Board")
    cols = st.columns(5)
    for i in range(5):
        with cols[i]:
            if i < len(view.community):
                st.image(card_svg(view.community[i]), use_container_width=True)
                st.caption(view.community[i].label)
            else:
                st.markdown("—")


def render_seats(view: TableView):
    st.subheader("Players")
    cols = st.columns(4)
    for i, s in enumerate(view.seats):
        with cols[i % 4]:
            status = []
            if s.is_dealer:
                status.append("D")
            if s.is_acting:
                status.append("TO ACT")
            if s.folded:
                status.append("FOLDED" if s.dealt else "OUT")
            elif s.all_in:
                status.append("ALL-IN")
            tag = f" ({', '.join(status)})" if status else ""
            kind = "" if s.is_human else f" · {s.personality}"
            st.markdown(f"**{s.name}**{kind}{tag}")
            won = f" (+{s.won})" if s.won else ""
            st.write(f"Stack: {s.chips}{won}   Bet: {s.bet}")
            if s.hand_name:
                st.caption(s.hand_name)

            if not s.dealt or s.folded:
                continue
            c1, c2 = st.columns(2)
            if s.hole is not None:
                with c1:
                    st.image(card_svg(s.hole[0]), use_container_width=True)
                with c2:
                    st.image(card_svg(s.hole[1]), use_container_width=True)
            else:
                with c1:
                    st.image(card_back_svg(), use_container_width=True)
                with c2:
                    st.image(card_back_svg(), use_container_width=True)


def render_actions(h: HandState):
    seat = h.acting_seat
    opt = action_options(h, seat)
    st.markdown(f"### Your action (to call: {opt.to_call})")
    a1, a2, a3, a4 = st.columns(4)
    with a1:
        st.button("Fold", on_click=act, args=(FOLD,), use_container_width=True)
    with a2:
        if opt.can_check:
            st.button("Check", on_click=act, args=(CHECK,), use_container_width=True)
        else:
            st.button(f"Call {opt.to_call}", on_click=act, args=(CALL,), use_container_width=True)
    with a3:
        if opt.can_raise and opt.min_raise_to < opt.max_raise_to:
            amount = st.slider("Raise to", opt.min_raise_to, opt.max_raise_to, opt.min_raise_to)
            st.button("Raise", on_click=act, args=(raise_to(amount),), use_container_width=True)
    with a4:
        st.button("All-in", on_click=act, args=(ALL_IN,), use_container_width=True)


def streamlit_app():
    st.set_page_config(page_title="Texas Hold'em", layout="wide")
    st.title("Texas Hold'em")

    with st.sidebar:
        st.header("Game setup")
        seats = st.slider("Seats", 2, 8, 8, 1)
        starting_chips = st.number_input("Starting stack", 100, 200000, 1000, 100)
        sb = st.number_input("Small blind", 1, 10000, 10, 1)
        if st.button("New game", use_container_width=True) or "t" not in st.session_state:
            try:
                new_game(int(seats), int(starting_chips), int(sb))
            except HoldemError as e:
                st.error(str(e))
                st.stop()

    t: TableState = st.session_state.t
    h: HandState = st.session_state.h
    advance_until_wait(h, t)
    view = snapshot(h, t)

    left, mid, right = st.columns([1, 1, 1])
    with left:
        st.metric("Street", view.street.title)
    with mid:
        st.metric("Pot", view.pot)
    with right:
        st.metric("Current bet", view.current_bet)

    st.divider()
    render_board(view)
    st.divider()

    if view.winner_text:
        st.success(view.winner_text)
    if st.session_state.info:
        st.info(st.session_state.info)
        st.session_state.info = ""

    if view.game_over:
        st.warning(f"Game over: {t.seats[t.winner].name} won with {t.seats[t.winner].chips}.")
    elif h.hand_done:
        st.button("Next hand", type="primary", on_click=next_hand)
    elif h.awaiting_human:
        render_actions(h)

    st.divider()
    render_seats(view)

    st.divider()
    st.subheader("Hand log")
    st.code("\n".join(view.log[-25:]) if view.log else "(no log yet)")


if __name__ == "__main__":
    streamlit_app()
