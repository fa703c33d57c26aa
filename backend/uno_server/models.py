from dataclasses import dataclass, field
from typing import Optional
import uuid

COLORS = ('red', 'blue', 'green', 'yellow')
WILD = 'wild'
NUMBER_VALUES = tuple(str(n) for n in range(10))
ACTION_VALUES = ('skip', 'reverse', 'draw_2')
WILD_VALUES = ('change_color', 'draw_4')

# Values that can never seed the discard pile: they carry no intrinsic color
INVALID_SEED_VALUES = frozenset(WILD_VALUES)

DRAW_PENALTIES = {'draw_2': 2, 'draw_4': 4}


def new_card_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Card:
    id: str
    color: str
    value: str

    @property
    def is_wild(self) -> bool:
        return self.color == WILD

    def to_dict(self):
        return {
            'id': self.id,
            'color': self.color,
            'value': self.value,
        }


@dataclass(frozen=True)
class DiscardEntry:
    """A card on the discard pile.

    A wild card's chosen color lives here, assigned once when the card is
    played, so the card value itself is never mutated.
    """
    card: Card
    chosen_color: Optional[str] = None

    @property
    def effective_color(self) -> str:
        if self.card.is_wild and self.chosen_color:
            return self.chosen_color
        return self.card.color

    def to_dict(self):
        data = self.card.to_dict()
        data['color'] = self.effective_color
        data['chosen_color'] = self.chosen_color
        data['is_wild'] = self.card.is_wild
        return data


@dataclass
class Player:
    id: str
    name: str
    finished: bool = False
    hand: list = field(default_factory=list)

    def find_card(self, card_id: str) -> Optional[Card]:
        for card in self.hand:
            if card.id == card_id:
                return card
        return None

    def remove_card(self, card_id: str) -> Card:
        card = self.find_card(card_id)
        self.hand.remove(card)
        return card

    def to_dict(self):
        # Never includes hand contents: other players only see the count
        return {
            'id': self.id,
            'name': self.name,
            'card_count': len(self.hand),
            'finished': self.finished,
        }
