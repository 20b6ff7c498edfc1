"""Tests for state transitions: plays, draws, effects and declarations."""

import random
from dataclasses import replace

import pytest
from maumau.engine import (
    Card,
    DeclareLastCard,
    Direction,
    DrawCard,
    GameNotInProgressError,
    GameSettings,
    GameState,
    InvalidMoveError,
    NotYourTurnError,
    PassTurn,
    PlayCard,
    Player,
    Suit,
    apply_draw_card,
    apply_play_card,
    declare_last_card,
    get_legal_actions,
    pass_turn,
    reshuffle_on_empty,
)

MANUAL = GameSettings(auto_declare_last_card=False)


def card(rank: str, suit: str = "hearts", d: int = 0) -> Card:
    return Card(id=f"{suit}-{rank}-{d}", suit=Suit(suit), rank=rank)


JOKER = Card(id="joker-red-0", suit=Suit.JOKER, rank="joker")


def make_state(
    hands,
    top,
    deck=(),
    under=(),
    current=0,
    direction=Direction.CLOCKWISE,
    settings=GameSettings(),
) -> GameState:
    players = tuple(
        Player(id=f"p{i}", name=f"P{i}", hand=tuple(h), score=100) for i, h in enumerate(hands)
    )
    return GameState(
        players=players,
        current_player_index=current,
        deck=tuple(deck),
        discard_pile=tuple(under) + (top,),
        direction=direction,
        game_started=True,
        settings=settings,
    )


def filler(n: int, suit: str = "clubs") -> list:
    return [card(r, suit, 1) for r in ("2", "3", "4", "5", "6", "7", "8", "10")[:n]]


def test_play_matching_suit_passes_turn() -> None:
    state = make_state(
        hands=[[card("5"), card("K", "spades")], filler(3)],
        top=card("2"),
        deck=[card("3", "diamonds"), card("4", "diamonds")],
    )
    new = apply_play_card(state, 0, card("5"))
    assert new.current_player_index == 1
    assert not new.game_ended
    assert new.top_discard() == card("5")
    assert [c.rank for c in new.players[0].hand] == ["K"]
    assert new.total_cards() == state.total_cards()
    # input untouched
    assert len(state.players[0].hand) == 2


def test_undeclared_last_card_penalty() -> None:
    state = make_state(
        hands=[[card("7")], filler(3)],
        top=card("2"),
        deck=[card("3", "spades"), card("4", "spades"), card("8", "spades")],
        settings=MANUAL,
    )
    new = apply_play_card(state, 0, card("7"))
    assert [c.rank for c in new.players[0].hand] == ["8", "4"]
    assert not new.game_ended
    assert new.winner is None
    assert new.current_player_index == 1
    assert "forgot to declare" in new.last_action
    assert new.total_cards() == state.total_cards()


def test_penalty_with_nothing_to_draw_still_wins() -> None:
    state = make_state(hands=[[card("7")], filler(3)], top=card("2"), settings=MANUAL)
    new = apply_play_card(state, 0, card("7"))
    assert new.history[-3:] == (
        "P0 forgot to declare last card! +0 penalty cards.",
        "P0 played 7♥.",
        "P0 wins the round!",
    )
    assert new.game_ended
    assert new.winner == "p0"
    assert new.players[0].hand == ()


def test_penalty_draws_from_recycled_discard() -> None:
    under = [card("3", "clubs"), card("4", "clubs"), card("5", "clubs")]
    state = make_state(
        hands=[[card("7")], filler(3)],
        top=card("2"),
        under=under,
        settings=MANUAL,
    )
    new = apply_play_card(state, 0, card("7"), random.Random(8))
    hand = new.players[0].hand
    assert len(hand) == 2
    assert set(hand) <= set(under)
    assert "+2 penalty cards" in new.last_action
    assert "The discard pile was reshuffled into the deck." in new.history
    assert new.discard_pile == (card("2"), card("7"))
    assert len(new.deck) == 1
    assert not new.game_ended
    assert new.total_cards() == state.total_cards()


def test_declared_last_card_wins() -> None:
    state = make_state(
        hands=[[card("7")], [card("K", "spades"), card("5", "clubs")]],
        top=card("2"),
        deck=filler(2, "diamonds"),
        settings=MANUAL,
    )
    state = declare_last_card(state, 0)
    new = apply_play_card(state, 0, card("7"))
    assert new.game_ended
    assert new.winner == "p0"
    assert new.current_player_index == 0
    assert new.players[0].score == 100
    assert new.players[1].score == 85
    assert new.players[0].hand == ()


def test_auto_declare_never_penalizes() -> None:
    state = make_state(hands=[[card("7")], filler(3)], top=card("2"), deck=filler(2, "diamonds"))
    new = apply_play_card(state, 0, card("7"))
    assert new.game_ended
    assert new.winner == "p0"


def test_auto_declare_for_next_player() -> None:
    state = make_state(
        hands=[[card("7"), card("8")], [card("9", "clubs")]],
        top=card("2"),
        deck=filler(2, "diamonds"),
    )
    new = apply_play_card(state, 0, card("7"))
    assert new.current_player_index == 1
    assert new.players[1].declared_last_card
    assert new.history[-1] == "P1 declared last card!"


def test_ace_skips_next_player() -> None:
    state = make_state(hands=[[card("A"), card("3")], filler(3), filler(3, "spades")], top=card("2"))
    new = apply_play_card(state, 0, card("A"))
    assert new.current_player_index == 2


def test_ace_skips_counterclockwise() -> None:
    state = make_state(
        hands=[[card("A"), card("3")], filler(3), filler(3, "spades")],
        top=card("2"),
        direction=Direction.COUNTERCLOCKWISE,
    )
    new = apply_play_card(state, 0, card("A"))
    assert new.current_player_index == 1


def test_queen_reverses_direction() -> None:
    state = make_state(hands=[[card("Q"), card("3")], filler(3), filler(3, "spades")], top=card("2"))
    new = apply_play_card(state, 0, card("Q"))
    assert new.direction == Direction.COUNTERCLOCKWISE
    assert new.current_player_index == 2


def test_queen_two_players_still_advances() -> None:
    state = make_state(hands=[[card("Q"), card("3")], filler(3)], top=card("2"))
    new = apply_play_card(state, 0, card("Q"))
    assert new.current_player_index == 1


def test_nine_previous_player_draws() -> None:
    state = make_state(
        hands=[filler(3, "spades"), [card("9"), card("3")], filler(3)],
        top=card("2"),
        deck=[card("K", "diamonds")],
        current=1,
    )
    new = apply_play_card(state, 1, card("9"))
    assert len(new.players[0].hand) == 4
    assert new.players[0].hand[-1] == card("K", "diamonds")
    assert len(new.players[2].hand) == 3
    assert new.current_player_index == 2


def test_nine_counterclockwise_previous_is_forward_seat() -> None:
    state = make_state(
        hands=[filler(3, "spades"), [card("9"), card("3")], filler(3)],
        top=card("2"),
        deck=[card("K", "diamonds")],
        current=1,
        direction=Direction.COUNTERCLOCKWISE,
    )
    new = apply_play_card(state, 1, card("9"))
    assert len(new.players[2].hand) == 4
    assert new.current_player_index == 0


def test_nine_recycles_discard_when_deck_empty() -> None:
    state = make_state(
        hands=[[card("3", "spades")], [card("9"), card("3")], filler(3, "spades")],
        top=card("2"),
        under=[card("2", "clubs"), card("6", "clubs")],
        current=1,
    )
    new = apply_play_card(state, 1, card("9"), random.Random(4))
    assert len(new.players[0].hand) == 2
    assert new.players[0].hand[-1] in (card("2", "clubs"), card("6", "clubs"), card("2"))
    assert new.discard_pile == (card("9"),)
    assert len(new.deck) == 2
    assert "The discard pile was reshuffled into the deck." in new.history
    assert new.total_cards() == state.total_cards()
    assert new.current_player_index == 2


def test_wildcard_next_draws_five_and_is_skipped() -> None:
    deck = filler(6, "diamonds")
    state = make_state(hands=[[JOKER, card("3")], filler(3), filler(3, "spades")], top=card("2"), deck=deck)
    new = apply_play_card(state, 0, JOKER)
    assert len(new.players[1].hand) == 8
    assert len(new.deck) == 1
    assert new.current_player_index == 2
    assert new.total_cards() == state.total_cards()


def test_wildcard_with_exhausted_deck_still_skips() -> None:
    state = make_state(hands=[[JOKER, card("3")], filler(3), filler(3, "spades")], top=card("2"))
    new = apply_play_card(state, 0, JOKER)
    # only the previous top card can be recycled
    assert len(new.players[1].hand) == 4
    assert new.discard_pile == (JOKER,)
    assert new.current_player_index == 2


def test_plain_card_two_players_alternates() -> None:
    state = make_state(hands=[[card("5"), card("6")], [card("5", "clubs"), card("7", "clubs")]], top=card("2"))
    state = apply_play_card(state, 0, card("5"))
    assert state.current_player_index == 1
    state = apply_play_card(state, 1, card("5", "clubs"))
    assert state.current_player_index == 0


def test_play_resets_declarations() -> None:
    state = make_state(hands=[filler(3, "hearts"), filler(3)], top=card("2", "hearts", 0), settings=MANUAL)
    state = declare_last_card(state, 1)
    new = apply_play_card(state, 0, card("3", "hearts", 1))
    assert not any(p.declared_last_card for p in new.players)


def test_invalid_moves_rejected() -> None:
    state = make_state(hands=[[card("5", "spades"), card("3")], filler(3)], top=card("2"))
    with pytest.raises(InvalidMoveError):
        apply_play_card(state, 0, card("5", "spades"))
    with pytest.raises(InvalidMoveError):
        apply_play_card(state, 0, card("4"))
    with pytest.raises(NotYourTurnError):
        apply_play_card(state, 1, card("2", "clubs", 1))
    with pytest.raises(InvalidMoveError):
        apply_play_card(state, 5, card("3"))


def test_bluffing_allows_any_card() -> None:
    state = make_state(
        hands=[[card("5", "spades"), card("3")], filler(3)],
        top=card("2"),
        settings=GameSettings(enable_bluffing=True),
    )
    new = apply_play_card(state, 0, card("5", "spades"))
    assert new.top_discard() == card("5", "spades")


def test_actions_rejected_after_round_end() -> None:
    state = make_state(hands=[[card("5")], filler(3)], top=card("2"))
    ended = apply_play_card(state, 0, card("5"))
    with pytest.raises(GameNotInProgressError):
        apply_draw_card(ended, 0)
    with pytest.raises(GameNotInProgressError):
        apply_play_card(replace(state, game_started=False), 0, card("5"))


def test_draw_playable_keeps_turn() -> None:
    state = make_state(hands=[filler(2, "spades"), filler(3)], top=card("2"), deck=[card("K")])
    new = apply_draw_card(state, 0)
    assert new.current_player_index == 0
    assert new.drawn_playable == 0
    assert new.players[0].hand[-1] == card("K")
    assert PassTurn(0) in get_legal_actions(new, 0)

    passed = pass_turn(new, 0)
    assert passed.current_player_index == 1
    assert passed.drawn_playable is None


def test_draw_unplayable_passes_turn() -> None:
    state = make_state(hands=[filler(2, "spades"), filler(3)], top=card("2"), deck=[card("K", "diamonds")], settings=MANUAL)
    state = declare_last_card(state, 1)
    new = apply_draw_card(state, 0)
    assert new.current_player_index == 1
    assert len(new.players[0].hand) == 3
    assert not any(p.declared_last_card for p in new.players)


def test_draw_with_no_cards_left_is_noop() -> None:
    state = make_state(hands=[filler(2, "spades"), filler(3)], top=card("2"))
    new = apply_draw_card(state, 0)
    assert new.players == state.players
    assert new.current_player_index == 0
    assert new.last_action == "No cards left to draw."


def test_pass_without_draw_rejected() -> None:
    state = make_state(hands=[filler(2, "spades"), filler(3)], top=card("2"))
    with pytest.raises(InvalidMoveError):
        pass_turn(state, 0)


def test_declare_last_card_changes_only_flag() -> None:
    state = make_state(hands=[filler(3, "spades"), filler(3)], top=card("2"))
    new = declare_last_card(state, 1)
    assert new.players[1].declared_last_card
    assert replace(new, players=state.players) == state


def test_reshuffle_on_empty_deck() -> None:
    under = [card("3"), card("4"), card("5"), card("6")]
    top = card("7")
    result = reshuffle_on_empty((), under + [top], 1, random.Random(3))
    assert result.reshuffled
    assert len(result.drawn) == 1
    assert result.discard_pile == (top,)
    assert len(result.deck) == 3
    assert sorted(c.id for c in result.drawn + result.deck) == sorted(c.id for c in under)


def test_reshuffle_short_draw() -> None:
    result = reshuffle_on_empty([card("3")], [card("4"), card("5")], 5)
    assert len(result.drawn) == 2
    assert result.deck == ()
    assert result.discard_pile == (card("5"),)
    assert result.reshuffled


def test_reshuffle_not_needed() -> None:
    result = reshuffle_on_empty([card("3"), card("4")], [card("5")], 1)
    assert result.drawn == (card("4"),)
    assert not result.reshuffled


def test_legal_actions() -> None:
    state = make_state(
        hands=[[card("5"), card("5", "spades")], filler(3)],
        top=card("2"),
        deck=[card("K")],
    )
    actions = get_legal_actions(state, 0)
    assert PlayCard(0, card("5")) in actions
    assert PlayCard(0, card("5", "spades")) not in actions
    assert DrawCard(0) in actions
    assert get_legal_actions(state, 1) == []


def test_legal_actions_offer_declaration() -> None:
    state = make_state(hands=[[card("5")], filler(3)], top=card("2"), settings=MANUAL)
    assert DeclareLastCard(0) in get_legal_actions(state, 0)
    declared = declare_last_card(state, 0)
    assert DeclareLastCard(0) not in get_legal_actions(declared, 0)
