import random
from collections import Counter

import pytest

from uno_server.errors import InitializationFailure
from uno_server.models import DiscardEntry, Player
from uno_server.services.uno.deck import (
    DECK_SIZE,
    build_cards,
    deal_initial,
    generate_deck,
    reshuffle_from_discard,
    shuffle,
)
from uno_server.services.uno.session import FAILED, GameSession


def test_generated_deck_is_canonical_multiset():
    deck = generate_deck(random.Random(3))
    assert len(deck) == DECK_SIZE == 108
    counts = Counter((c.color, c.value) for c in deck)
    for color in ('red', 'blue', 'green', 'yellow'):
        assert counts[(color, '0')] == 1
        for value in [str(n) for n in range(1, 10)] + ['skip', 'reverse', 'draw_2']:
            assert counts[(color, value)] == 2
    assert counts[('wild', 'change_color')] == 4
    assert counts[('wild', 'draw_4')] == 4
    assert len({c.id for c in deck}) == 108


def test_shuffle_is_a_permutation():
    cards = build_cards()
    before = sorted(c.id for c in cards)
    shuffled = shuffle(list(cards), random.Random(11))
    assert sorted(c.id for c in shuffled) == before
    assert [c.id for c in shuffled] != [c.id for c in cards]


def test_deal_buries_colorless_seed_cards(card_factory):
    session = GameSession('r1', hand_size=1)
    session.players = [Player(id='a', name='A'), Player(id='b', name='B')]
    seed = card_factory('red', '5')
    session.deck = [
        seed,
        card_factory('wild', 'draw_4'),
        card_factory('wild', 'change_color'),
        card_factory('blue', '2'),
        card_factory('green', '1'),
    ]
    deal_initial(session)
    assert [c.value for c in session.players[0].hand] == ['1']
    assert [c.value for c in session.players[1].hand] == ['2']
    assert session.top.card == seed
    assert len(session.discard) == 3
    assert session.deck == []


def test_initial_top_is_never_colorless():
    for seed in range(40):
        session = GameSession('r', rng=random.Random(seed))
        session.players = [Player(id='a', name='A'), Player(id='b', name='B')]
        session.start_round()
        assert session.top.card.value not in ('draw_4', 'change_color')
        assert session.card_total() == 108


def test_deck_exhaustion_while_dealing_is_fatal(card_factory):
    session = GameSession('r2', hand_size=1)
    session.players = [Player(id='a', name='A'), Player(id='b', name='B')]
    session.deck = [card_factory('wild', 'change_color'), card_factory('red', '1'), card_factory('red', '2')]
    with pytest.raises(InitializationFailure):
        deal_initial(session)
    assert session.deck == []
    assert session.discard == []
    assert all(p.hand == [] for p in session.players)


def test_oversized_hands_leave_session_failed():
    session = GameSession('r3', hand_size=60, rng=random.Random(0))
    session.players = [Player(id='a', name='A'), Player(id='b', name='B')]
    with pytest.raises(InitializationFailure):
        session.start_round()
    assert session.status == FAILED
    assert session.card_total() == 0


def test_reshuffle_keeps_only_top(session_factory, card_factory):
    top = DiscardEntry(card_factory('yellow', '3', 'top'))
    wild = DiscardEntry(card_factory('wild', 'draw_4', 'w'), chosen_color='red')
    session = session_factory({'a': [], 'b': []}, top)
    session.discard = [DiscardEntry(card_factory('red', '1', 'x')), wild, top]

    old_discard = len(session.discard)
    reshuffle_from_discard(session)

    assert len(session.deck) == old_discard - 1
    assert session.discard == [top]
    # wild cards go back as plain wild cards
    assert {c.id for c in session.deck} == {'x', 'w'}
    assert all(c.color in ('red', 'wild') for c in session.deck)


def test_reshuffle_with_single_discard_is_noop(session_factory, card_factory):
    session = session_factory({'a': [], 'b': []}, card_factory('red', '1'))
    reshuffle_from_discard(session)
    assert session.deck == []
    assert len(session.discard) == 1
