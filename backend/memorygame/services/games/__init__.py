"""Game domain services: deck, room registry, turn engine and timers.

This package contains the transport-free game logic that socket handlers
call into, keeping Socket.IO concerns separated from the core mechanics.
"""

from .deck import build_deck, select_images, standard_pool
from .engine import MatchEngine
from .registry import RoomRegistry

__all__ = ['MatchEngine', 'RoomRegistry', 'build_deck', 'select_images', 'standard_pool']
