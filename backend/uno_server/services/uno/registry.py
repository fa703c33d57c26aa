import logging
import random
import threading
import uuid
from typing import Any, Dict, List, Optional, Tuple

from uno_server.errors import NotFound
from .session import GameSession

logger = logging.getLogger(__name__)


class RoomRegistry:
    """Process-wide map of room id to GameSession.

    Installed on the Flask app like any other extension:

        rooms = RoomRegistry()
        rooms.init_app(app)

    The map lock only guards lookups and inserts; each session serializes
    its own mutations.
    """

    def __init__(self, app=None, rng: Optional[random.Random] = None):
        self._rooms: Dict[str, GameSession] = {}
        self._lock = threading.Lock()
        self.hand_size = 7
        self.min_players = 2
        self.rng = rng
        if app is not None:
            self.init_app(app)

    def init_app(self, app) -> None:
        self.hand_size = int(app.config.get('HAND_SIZE', 7))
        self.min_players = int(app.config.get('MIN_PLAYERS', 2))
        app.extensions['uno_rooms'] = self

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)

    def _get_or_create(self, room_id: Optional[str]) -> GameSession:
        with self._lock:
            if room_id is None:
                room_id = str(uuid.uuid4())
                logger.info(f"[create] new room={room_id}")
            session = self._rooms.get(room_id)
            if session is None:
                session = GameSession(
                    room_id,
                    hand_size=self.hand_size,
                    min_players=self.min_players,
                    rng=random.Random(self.rng.random()) if self.rng else None,
                )
                self._rooms[room_id] = session
            return session

    def create_or_join(self, room_id: Optional[str], player_id: str, name: str) -> Tuple[GameSession, bool]:
        """Seat a player, creating the room when needed.

        ``room_id=None`` asks for a fresh room. Returns the session and
        whether the player was newly added; re-joining is a no-op.
        """
        session = self._get_or_create(room_id)
        added = session.add_player(player_id, name)
        return session, added

    def get(self, room_id: str) -> GameSession:
        with self._lock:
            session = self._rooms.get(room_id)
        if session is None:
            raise NotFound(room_id)
        return session

    def list(self) -> List[Dict[str, Any]]:
        with self._lock:
            sessions = list(self._rooms.values())
        return [s.summary() for s in sessions]

    def reset(self, room_id: str) -> GameSession:
        session = self.get(room_id)
        session.reset()
        logger.info(f"[reset] room={room_id} status={session.status}")
        return session

    def clear(self) -> None:
        with self._lock:
            count = len(self._rooms)
            self._rooms.clear()
        logger.info(f"[clear] dropped {count} room(s)")
