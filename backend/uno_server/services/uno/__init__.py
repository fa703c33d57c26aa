"""UNO domain services: deck, rules, turn engine and room registry.

This package contains the authoritative game logic. HTTP routes and
socket handlers import from here, keeping transport concerns separated
from core game mechanics.
"""

from .actions import DrawCard, PlayCard, parse_action
from .registry import RoomRegistry
from .session import GameSession

__all__ = ['DrawCard', 'PlayCard', 'parse_action', 'RoomRegistry', 'GameSession']
