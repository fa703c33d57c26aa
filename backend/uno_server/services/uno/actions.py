from dataclasses import dataclass
from typing import Any, Optional, Union

from uno_server.errors import InvalidAction

PLAY_CARD = 'PLAY_CARD'
DRAW_CARD = 'DRAW_CARD'


@dataclass(frozen=True)
class PlayCard:
    card_id: str
    chosen_color: Optional[str] = None

    type = PLAY_CARD


@dataclass(frozen=True)
class DrawCard:
    type = DRAW_CARD


Action = Union[PlayCard, DrawCard]


def parse_action(payload: Any) -> Action:
    """Build an Action from a JSON payload, rejecting malformed input.

    Accepts ``card_id``/``chosen_color`` as well as the camelCase
    ``cardId``/``chosenColor`` sent by the mobile client.
    """
    if not isinstance(payload, dict):
        raise InvalidAction('action must be an object')
    kind = payload.get('type')
    if kind == DRAW_CARD:
        return DrawCard()
    if kind == PLAY_CARD:
        card_id = payload.get('card_id', payload.get('cardId'))
        if not card_id or not isinstance(card_id, str):
            raise InvalidAction('PLAY_CARD requires card_id')
        chosen_color = payload.get('chosen_color', payload.get('chosenColor'))
        return PlayCard(card_id=card_id, chosen_color=chosen_color)
    raise InvalidAction(f'Unknown action type: {kind!r}', type=kind)
