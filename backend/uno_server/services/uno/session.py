import logging
import random
import threading
from typing import Any, Dict, List, Optional

from uno_server.errors import GameNotInProgress, InitializationFailure, TurnViolation
from uno_server.models import DRAW_PENALTIES, DiscardEntry, Player
from . import rules
from .actions import Action, DrawCard, PlayCard
from .deck import deal_initial, generate_deck, reshuffle_from_discard

logger = logging.getLogger(__name__)

AWAITING_PLAYERS = 'awaiting_players'
IN_PROGRESS = 'in_progress'
ROUND_OVER = 'round_over'
FAILED = 'failed'


class GameSession:
    """Authoritative state of one room.

    Every public method takes the session lock, so actions are applied one
    at a time and snapshots never see a half-applied action.
    """

    def __init__(self, room_id: str, hand_size: int = 7, min_players: int = 2,
                 rng: Optional[random.Random] = None):
        self.room_id = room_id
        self.hand_size = hand_size
        self.min_players = min_players
        self.rng = rng
        self.players: List[Player] = []
        self.deck = []
        self.discard: List[DiscardEntry] = []
        self.current_index = 0
        self.round_over = False
        self.status = AWAITING_PLAYERS
        self.lock = threading.RLock()

    # ---- queries ----

    @property
    def top(self) -> Optional[DiscardEntry]:
        return self.discard[-1] if self.discard else None

    @property
    def current_player(self) -> Optional[Player]:
        if not self.players:
            return None
        return self.players[self.current_index]

    def get_player(self, player_id: str) -> Optional[Player]:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def card_total(self) -> int:
        return len(self.deck) + len(self.discard) + sum(len(p.hand) for p in self.players)

    # ---- membership & lifecycle ----

    def add_player(self, player_id: str, name: str) -> bool:
        """Add a player; returns False when they were already seated.

        Deals a new round when membership crosses min_players from below.
        """
        with self.lock:
            if self.get_player(player_id):
                logger.info(f"[join] room={self.room_id} player={player_id} already seated")
                return False
            before = len(self.players)
            player = Player(id=player_id, name=name)
            self.players.append(player)
            logger.info(f"[join] room={self.room_id} player={player_id} name={name} count={len(self.players)}")
            if before < self.min_players <= len(self.players):
                self.start_round()
            elif self.status == IN_PROGRESS:
                self._draw(player, self.hand_size)
            return True

    def start_round(self) -> None:
        """Deal a fresh deck to the current members and reset win flags."""
        with self.lock:
            self.round_over = False
            self.current_index = 0
            self.deck = generate_deck(self.rng)
            try:
                deal_initial(self)
            except InitializationFailure as exc:
                self.status = FAILED
                logger.error(f"[deal-failed] room={self.room_id} {exc.message}")
                raise
            self.status = IN_PROGRESS

    def reset(self) -> None:
        with self.lock:
            if len(self.players) >= self.min_players:
                self.start_round()
                return
            self.deck = []
            self.discard = []
            for p in self.players:
                p.hand = []
                p.finished = False
            self.current_index = 0
            self.round_over = False
            self.status = AWAITING_PLAYERS
            logger.info(f"[reset] room={self.room_id} awaiting players")

    # ---- rotation ----

    def _next_index(self, index: int) -> int:
        # One rotation hop, passing over finished players; if everyone has
        # finished the plain neighbour is returned.
        count = len(self.players)
        candidate = index
        for _ in range(count):
            candidate = (candidate + 1) % count
            if not self.players[candidate].finished:
                return candidate
        return (index + 1) % count

    def advance(self, steps: int = 1) -> None:
        for _ in range(steps):
            self.current_index = self._next_index(self.current_index)

    def reverse_order(self) -> None:
        """Reverse seating in place, keeping the current player due."""
        self.players.reverse()
        self.current_index = len(self.players) - 1 - self.current_index

    def _draw(self, player: Player, count: int) -> list:
        drawn = []
        for _ in range(count):
            if not self.deck:
                reshuffle_from_discard(self)
            if not self.deck:
                logger.warning(f"[draw] room={self.room_id} no cards left for player={player.id}")
                break
            card = self.deck.pop()
            player.hand.append(card)
            drawn.append(card)
        return drawn

    # ---- actions ----

    def apply_action(self, player_id: str, action: Action) -> None:
        """Validate and apply one action; raises GameError without mutating on rejection."""
        with self.lock:
            if self.status != IN_PROGRESS:
                raise GameNotInProgress(self.status)
            current = self.current_player
            if current.id != player_id:
                raise TurnViolation(current.id, current.name)

            if isinstance(action, PlayCard):
                self._play_card(current, action)
            elif isinstance(action, DrawCard):
                self._draw(current, 1)
                logger.info(f"[draw] room={self.room_id} player={player_id} hand={len(current.hand)}")
                self.advance(1)
            else:
                raise TypeError(f'Unsupported action {action!r}')

    def _play_card(self, actor: Player, action: PlayCard) -> None:
        card = rules.validate_play(actor, action.card_id, action.chosen_color, self.top)

        actor.remove_card(card.id)
        chosen = action.chosen_color if card.is_wild else None
        self.discard.append(DiscardEntry(card, chosen))
        logger.info(
            f"[play] room={self.room_id} player={actor.id} card={card.color}/{card.value}"
            + (f" chosen={chosen}" if chosen else '')
        )

        steps = 1
        if card.value in DRAW_PENALTIES:
            target_index = self._next_index(self.current_index)
            # With nobody else left unfinished the penalty has no victim
            if target_index != self.current_index:
                self._draw(self.players[target_index], DRAW_PENALTIES[card.value])
                self.current_index = target_index
        elif card.value == 'skip':
            steps = 2
        elif card.value == 'reverse':
            self.reverse_order()

        if not actor.hand:
            actor.finished = True
            logger.info(f"[finished] room={self.room_id} player={actor.id}")
            if all(p.finished for p in self.players):
                self.round_over = True
                self.status = ROUND_OVER
                logger.info(f"[round-over] room={self.room_id}")

        self.advance(steps)

    # ---- snapshots ----

    def snapshot(self, player_id: str) -> Dict[str, Any]:
        """State as seen by one player: their own hand, everyone else's counts."""
        with self.lock:
            me = self.get_player(player_id)
            current = self.current_player
            top = self.top
            return {
                'room_id': self.room_id,
                'status': self.status,
                'top_card': top.to_dict() if top else None,
                'current_player_id': current.id if current else None,
                'current_player_name': current.name if current else '',
                'hand': [c.to_dict() for c in me.hand] if me else [],
                'players': [p.to_dict() for p in self.players],
                'is_my_turn': bool(current and current.id == player_id and self.status == IN_PROGRESS),
                'is_over': self.round_over,
                'deck_count': len(self.deck),
                'discard_count': len(self.discard),
            }

    def summary(self) -> Dict[str, Any]:
        with self.lock:
            return {
                'room_id': self.room_id,
                'player_count': len(self.players),
                'players': [p.name for p in self.players],
            }
