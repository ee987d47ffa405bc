import threading
from typing import Dict, List, Optional

from memorygame.errors import RoomFull, RoomIdTaken, RoomNotFound, ValidationError
from memorygame.models import Player, Room

MAX_PLAYERS = 2


class RoomRegistry:
    """Owns the room id -> Room mapping for one application instance."""

    def __init__(self):
        self._rooms: Dict[str, Room] = {}
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._rooms)

    def __contains__(self, room_id):
        return isinstance(room_id, str) and room_id in self._rooms

    def get(self, room_id) -> Optional[Room]:
        if not isinstance(room_id, str):
            return None
        return self._rooms.get(room_id)

    def create(self, room_id, creator_id, creator_name, turn_time,
               pair_count, custom_images: Optional[List[str]] = None) -> Room:
        if not all([room_id, creator_name, turn_time]):
            raise ValidationError()
        if not isinstance(room_id, str):
            raise ValidationError('Room ID must be text.')
        with self._lock:
            if room_id in self._rooms:
                raise RoomIdTaken()
            room = Room(
                room_id=room_id,
                turn_time=turn_time,
                pair_count=pair_count,
                custom_images=list(custom_images or []),
                players=[Player(id=creator_id, name=creator_name)],
            )
            self._rooms[room_id] = room
        return room

    def join(self, room_id, player_id, player_name) -> Room:
        if not all([room_id, player_name]):
            raise ValidationError()
        if not isinstance(room_id, str):
            raise ValidationError('Room ID must be text.')
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                raise RoomNotFound()
            if len(room.players) >= MAX_PLAYERS:
                raise RoomFull()
            if room.game_started:
                raise RoomFull('Game already in progress.')
            if room.get_player(player_id):
                raise ValidationError('You are already in this room.')
            room.players.append(Player(id=player_id, name=player_name))
        return room

    def remove(self, room_id) -> Optional[Room]:
        with self._lock:
            return self._rooms.pop(room_id, None)

    def find_by_player(self, player_id) -> Optional[Room]:
        with self._lock:
            rooms = list(self._rooms.values())
        return next((r for r in rooms if r.get_player(player_id)), None)
