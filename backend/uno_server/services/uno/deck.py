"""Deck construction, dealing and reshuffling.

The deck is a plain list of Card; the end of the list is the top, so
drawing is ``deck.pop()``.
"""

import logging
import random
from typing import List, Optional

from uno_server.errors import InitializationFailure
from uno_server.models import (
    ACTION_VALUES,
    COLORS,
    INVALID_SEED_VALUES,
    NUMBER_VALUES,
    WILD,
    WILD_VALUES,
    Card,
    DiscardEntry,
    new_card_id,
)

logger = logging.getLogger(__name__)

DECK_SIZE = 108
WILD_COPIES = 4


def shuffle(cards: list, rng: Optional[random.Random] = None) -> list:
    """Fisher-Yates shuffle in place; returns the same list."""
    rng = rng or random
    for i in range(len(cards) - 1, 0, -1):
        j = rng.randint(0, i)
        cards[i], cards[j] = cards[j], cards[i]
    return cards


def build_cards() -> List[Card]:
    cards = []
    for color in COLORS:
        for value in NUMBER_VALUES + ACTION_VALUES:
            copies = 1 if value == '0' else 2
            for _ in range(copies):
                cards.append(Card(id=new_card_id(), color=color, value=value))
    for _ in range(WILD_COPIES):
        for value in WILD_VALUES:
            cards.append(Card(id=new_card_id(), color=WILD, value=value))
    return cards


def generate_deck(rng: Optional[random.Random] = None) -> List[Card]:
    """Return a freshly shuffled canonical 108-card deck."""
    return shuffle(build_cards(), rng)


def _draw_or_fail(session, what: str) -> Card:
    if not session.deck:
        raise InitializationFailure(session.room_id, f'deck exhausted while dealing {what}')
    return session.deck.pop()


def deal_initial(session) -> None:
    """Deal a fresh round: hand_size cards per player, then a seed discard.

    Seeds without an intrinsic color are buried under the discard pile and
    another seed is drawn. Running out of cards raises InitializationFailure
    and leaves deck, discard and hands empty.
    """
    try:
        for player in session.players:
            player.hand = []
            player.finished = False
            for _ in range(session.hand_size):
                player.hand.append(_draw_or_fail(session, f'hand of {player.name}'))

        buried = []
        seed = _draw_or_fail(session, 'seed card')
        while seed.value in INVALID_SEED_VALUES:
            buried.append(DiscardEntry(seed))
            seed = _draw_or_fail(session, 'seed card')
        session.discard = buried + [DiscardEntry(seed)]
    except InitializationFailure:
        session.deck = []
        session.discard = []
        for player in session.players:
            player.hand = []
        raise

    logger.info(
        f"[deal] room={session.room_id} players={len(session.players)} "
        f"seed={seed.color}/{seed.value} buried={len(buried)} deck={len(session.deck)}"
    )


def reshuffle_from_discard(session) -> None:
    """Turn everything under the top discard entry into a new deck.

    Wild cards go back without their chosen color. No-op when the discard
    pile holds one entry or fewer.
    """
    if len(session.discard) <= 1:
        return
    top = session.discard[-1]
    session.deck = shuffle([entry.card for entry in session.discard[:-1]], session.rng)
    session.discard = [top]
    logger.info(f"[reshuffle] room={session.room_id} deck={len(session.deck)}")
