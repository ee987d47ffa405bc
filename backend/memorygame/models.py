import threading
import uuid
from dataclasses import dataclass, field
from typing import List, Optional

WAITING_FOR_PLAYERS = 'waiting_for_players'
IN_PROGRESS = 'in_progress'
LOCKED = 'locked'
COMPLETE = 'complete'


@dataclass
class Card:
    id: int
    image: str
    is_flipped: bool = False
    is_matched: bool = False

    @property
    def is_revealed(self) -> bool:
        """Face-up but not yet resolved."""
        return self.is_flipped and not self.is_matched

    def to_dict(self):
        return {
            'id': self.id,
            'image': self.image,
            'isFlipped': self.is_flipped,
            'isMatched': self.is_matched,
        }


@dataclass
class Player:
    id: str
    name: str
    score: int = 0

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'score': self.score,
        }


@dataclass
class ChatMessage:
    name: str
    message: str
    time: str

    def to_dict(self):
        return {
            'name': self.name,
            'message': self.message,
            'time': self.time,
        }


@dataclass
class Room:
    room_id: str
    turn_time: int
    pair_count: int
    custom_images: List[str] = field(default_factory=list)
    players: List[Player] = field(default_factory=list)
    cards: List[Card] = field(default_factory=list)
    current_turn: Optional[str] = None
    game_started: bool = False
    locked: bool = False
    completed: bool = False
    chat: List[ChatMessage] = field(default_factory=list)
    # Identifies this room instance; deferred tasks compare it before mutating
    token: str = field(default_factory=lambda: uuid.uuid4().hex)
    mutex: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    @property
    def status(self) -> str:
        if self.completed:
            return COMPLETE
        if not self.game_started:
            return WAITING_FOR_PLAYERS
        return LOCKED if self.locked else IN_PROGRESS

    def get_player(self, player_id) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def opponent_of(self, player_id) -> Optional[Player]:
        return next((p for p in self.players if p.id != player_id), None)

    def revealed_cards(self) -> List[Card]:
        return [c for c in self.cards if c.is_revealed]

    def state_payload(self):
        """Payload of a gameUpdate event."""
        return {
            'cards': [c.to_dict() for c in self.cards],
            'currentTurn': self.current_turn,
            'players': [p.to_dict() for p in self.players],
            'pairCount': self.pair_count,
        }

    def start_payload(self):
        payload = self.state_payload()
        payload['roomId'] = self.room_id
        payload['turnTime'] = self.turn_time
        return payload
