"""
uno_server.errors — game error hierarchy
========================================

Every error raised by the engine or the registry derives from GameError.
Each one knows the HTTP status it maps to and a stable machine-readable
code, so the API layer renders all of them through one handler.
"""

from typing import Any, Dict, Optional


class GameError(Exception):
    """Base exception for all rejected room and game operations."""

    status_code = 400
    code = 'game_error'

    def __init__(self, message: str, **extra: Any):
        self.message = message
        self.extra = extra
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        payload = {'error': self.message, 'code': self.code}
        payload.update(self.extra)
        return payload


class NotFound(GameError):
    """Raised when a room id is unknown."""

    status_code = 404
    code = 'not_found'

    def __init__(self, room_id: str):
        self.room_id = room_id
        super().__init__(f"Room '{room_id}' not found", room_id=room_id)


class TurnViolation(GameError):
    """Raised when a player acts out of turn.

    Carries the identity of the player who is actually due to act.
    """

    status_code = 403
    code = 'turn_violation'

    def __init__(self, current_player_id: Optional[str], current_player_name: str):
        self.current_player_id = current_player_id
        self.current_player_name = current_player_name
        super().__init__(
            'It is not your turn',
            current_player_id=current_player_id,
            current_player_name=current_player_name,
        )


class CardNotOwned(GameError):
    code = 'card_not_owned'

    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__('You do not hold that card', card_id=card_id)


class MissingChoice(GameError):
    code = 'missing_choice'

    def __init__(self, chosen_color: Any = None):
        super().__init__(
            'A wild card requires chosen_color: red, blue, green or yellow',
            chosen_color=chosen_color,
        )


class IllegalPlay(GameError):
    code = 'illegal_play'

    def __init__(self, card_id: str, top_color: str, top_value: str):
        super().__init__(
            'Card matches neither the top color nor the top value',
            card_id=card_id,
            top_color=top_color,
            top_value=top_value,
        )


class InvalidAction(GameError):
    """Raised when an action payload is malformed."""

    code = 'invalid_action'


class GameNotInProgress(GameError):
    status_code = 409
    code = 'not_in_progress'

    def __init__(self, status: str):
        self.status = status
        super().__init__(f'Game is not in progress ({status})', status=status)


class InitializationFailure(GameError):
    """Raised when the deck runs out while dealing.

    Fatal for the round: the session stays unusable until it is reset.
    """

    status_code = 500
    code = 'initialization_failure'

    def __init__(self, room_id: str, reason: str):
        self.room_id = room_id
        super().__init__(f'Game initialization failed: {reason}', room_id=room_id)
