"""Legality predicates for card plays.

These functions only inspect state; they raise a GameError describing the
first rule a play breaks and never mutate anything.
"""

from typing import Optional

from uno_server.errors import CardNotOwned, IllegalPlay, MissingChoice
from uno_server.models import COLORS, Card, DiscardEntry, Player


def is_valid_choice(chosen_color: Optional[str]) -> bool:
    return chosen_color in COLORS


def matches_top(card: Card, top: DiscardEntry) -> bool:
    if card.is_wild:
        return True
    return card.color == top.effective_color or card.value == top.card.value


def validate_play(player: Player, card_id: str, chosen_color: Optional[str], top: DiscardEntry) -> Card:
    """Return the card to play, or raise why it cannot be played."""
    card = player.find_card(card_id)
    if card is None:
        raise CardNotOwned(card_id)
    if card.is_wild:
        if not is_valid_choice(chosen_color):
            raise MissingChoice(chosen_color)
        return card
    if not matches_top(card, top):
        raise IllegalPlay(card_id, top.effective_color, top.card.value)
    return card
