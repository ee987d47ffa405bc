import logging
import random
from datetime import datetime
from functools import partial

from memorygame.errors import (
    InvalidCardState,
    NotYourTurn,
    RoomUnavailable,
    ValidationError,
)
from memorygame.models import ChatMessage
from .deck import available_image_count, build_deck, select_images, unique_images
from .registry import MAX_PLAYERS
from .scoring import all_matched, decide_winner

DISCONNECT_END = 'end'
DISCONNECT_CONTINUE = 'continue'


class MatchEngine:
    """Room lifecycle and turn/flip state machine.

    Every public method is one reaction to an inbound event (or to the
    mismatch timer) and runs to completion while holding the room's mutex.
    State changes are broadcast through the gateway; errors meant for the
    caller are raised as `GameError` subclasses.
    """

    def __init__(self, registry, gateway, scheduler, image_pool, reveal_delay=2.0,
                 default_pair_count=8, disconnect_policy=DISCONNECT_END,
                 draw_result='draw', rng=None, logger=None):
        if disconnect_policy not in (DISCONNECT_END, DISCONNECT_CONTINUE):
            raise ValueError(f"unknown disconnect policy: {disconnect_policy!r}")
        self.registry = registry
        self.gateway = gateway
        self.scheduler = scheduler
        self.image_pool = tuple(image_pool)
        self.reveal_delay = reveal_delay
        self.default_pair_count = default_pair_count
        self.disconnect_policy = disconnect_policy
        self.draw_result = draw_result
        self.rng = rng or random.Random()
        self.logger = logger or logging.getLogger(__name__)

    @property
    def max_pair_count(self) -> int:
        return len(self.image_pool)

    # ---- room lifecycle ----

    def create_room(self, player_id, data):
        data = self._payload(data)
        self._check_names(data, 'roomId', 'playerName')
        self._check_not_seated(player_id)
        if not all([data.get('roomId'), data.get('playerName'), data.get('turnTime')]):
            raise ValidationError()
        custom_images = self._parse_custom_images(data.get('customImages'))
        turn_time = self._parse_positive_int(data.get('turnTime'), 'Turn time')
        pair_count = self._parse_pair_count(data.get('pairCount'), custom_images)

        room = self.registry.create(
            data.get('roomId'),
            player_id,
            data.get('playerName'),
            turn_time,
            pair_count,
            custom_images,
        )
        self.gateway.subscribe(player_id, room.room_id)
        self.logger.info(f"[room-created] room={room.room_id} pairs={pair_count} custom={len(custom_images)}")
        return room

    def join_room(self, player_id, data):
        data = self._payload(data)
        self._check_names(data, 'roomId', 'playerName')
        self._check_not_seated(player_id)
        room = self.registry.join(data.get('roomId'), player_id, data.get('playerName'))
        with room.mutex:
            self.gateway.subscribe(player_id, room.room_id)
            self.logger.info(f"[room-joined] room={room.room_id} players={len(room.players)}")
            self.gateway.publish(room.room_id, 'playerJoined', [p.to_dict() for p in room.players])
            if len(room.players) == MAX_PLAYERS:
                self.start_game(room)
        return room

    def start_game(self, room):
        if len(room.players) != MAX_PLAYERS or room.game_started:
            return
        images = select_images(self.image_pool, room.custom_images, room.pair_count, self.rng)
        room.cards = build_deck(images, self.rng)
        room.current_turn = room.players[0].id
        room.game_started = True
        room.locked = False
        self.logger.info(f"[game-start] room={room.room_id} cards={len(room.cards)} first={room.players[0].name}")
        self.gateway.publish(room.room_id, 'gameStart', room.start_payload())

    def leave(self, player_id):
        """Handle a player's disconnection according to the disconnect policy."""
        room = self.registry.find_by_player(player_id)
        if room is None:
            return
        with room.mutex:
            room.players = [p for p in room.players if p.id != player_id]
            ended = not room.players or self.disconnect_policy == DISCONNECT_END
            if ended:
                self._close_room(room)
            elif room.current_turn == player_id:
                room.current_turn = room.players[0].id
            self.logger.info(f"[player-left] room={room.room_id} remaining={len(room.players)} ended={ended}")
            if room.players:
                self.gateway.publish(room.room_id, 'playerLeft', {
                    'roomId': room.room_id,
                    'players': [p.to_dict() for p in room.players],
                    'ended': ended,
                })
                if ended:
                    for p in room.players:
                        self.gateway.unsubscribe(p.id, room.room_id)
                elif room.game_started:
                    self._broadcast_update(room)

    # ---- turn/flip state machine ----

    def flip_card(self, player_id, room_id, card_id):
        room = self.registry.get(room_id)
        if room is None:
            raise RoomUnavailable()
        with room.mutex:
            if self.registry.get(room_id) is not room:
                raise RoomUnavailable()
            if not room.game_started or room.locked:
                self.logger.debug(f"[flip-ignored] room={room_id} status={room.status}")
                return
            if player_id != room.current_turn:
                raise NotYourTurn()
            try:
                card = self._flippable_card(room, card_id)
            except InvalidCardState as exc:
                self.logger.debug(f"[flip-ignored] room={room_id} card={card_id!r} reason={exc.message}")
                return

            card.is_flipped = True
            self.logger.info(f"[flip] room={room_id} player={player_id} card={card.id}")
            self._broadcast_update(room)

            revealed = room.revealed_cards()
            if len(revealed) != 2:
                return
            room.locked = True
            first, second = revealed
            if first.image == second.image:
                first.is_matched = True
                second.is_matched = True
                room.get_player(player_id).score += 1
                room.locked = False
                self.logger.info(f"[match] room={room_id} player={player_id} cards={first.id},{second.id}")
                self._broadcast_update(room)
                if all_matched(room.cards):
                    self.end_game(room)
            else:
                self._broadcast_update(room)
                self.scheduler.schedule(
                    room_id,
                    self.reveal_delay,
                    partial(self.resolve_mismatch, room_id, room.token, (first.id, second.id)),
                    token=room.token,
                )

    def resolve_mismatch(self, room_id, token, card_ids):
        """Hide a mismatched pair, pass the turn and unlock the room."""
        room = self.registry.get(room_id)
        if room is None or room.token != token:
            self.logger.info(f"[timer-abort] room={room_id} room no longer exists")
            return
        with room.mutex:
            if self.registry.get(room_id) is not room:
                return
            for cid in card_ids:
                room.cards[cid].is_flipped = False
            opponent = room.opponent_of(room.current_turn)
            if opponent is not None:
                room.current_turn = opponent.id
            room.locked = False
            self.logger.info(f"[mismatch] room={room_id} cards={card_ids} next={room.current_turn}")
            self._broadcast_update(room)

    def end_game(self, room):
        winner = decide_winner(room.players, self.draw_result)
        room.completed = True
        self.logger.info(f"[game-end] room={room.room_id} winner={winner}")
        self.gateway.publish(room.room_id, 'gameEnd', {
            'winner': winner,
            'players': [p.to_dict() for p in room.players],
        })
        self._close_room(room)
        for p in room.players:
            self.gateway.unsubscribe(p.id, room.room_id)

    # ---- chat ----

    def send_chat(self, data):
        if not isinstance(data, dict):
            return None
        room = self.registry.get(data.get('roomId'))
        if room is None or not isinstance(data.get('message'), str):
            return None
        msg = ChatMessage(
            name=data.get('name'),
            message=data.get('message'),
            time=datetime.now().strftime('%H:%M:%S'),
        )
        with room.mutex:
            room.chat.append(msg)
            self.gateway.publish(room.room_id, 'newChatMessage', msg.to_dict())
        return msg

    # ---- helpers ----

    def _broadcast_update(self, room):
        self.gateway.publish(room.room_id, 'gameUpdate', room.state_payload())

    def _close_room(self, room):
        if self.registry.get(room.room_id) is room:
            self.registry.remove(room.room_id)

    def _flippable_card(self, room, card_id):
        if isinstance(card_id, bool):
            raise InvalidCardState('Card id must be an integer.')
        if isinstance(card_id, float) and not card_id.is_integer():
            raise InvalidCardState('Card id must be an integer.')
        try:
            index = int(card_id)
        except (TypeError, ValueError):
            raise InvalidCardState('Card id must be an integer.')
        if not 0 <= index < len(room.cards):
            raise InvalidCardState('Card id out of range.')
        card = room.cards[index]
        if card.is_flipped or card.is_matched:
            raise InvalidCardState('Card is already face-up.')
        return card

    @staticmethod
    def _payload(data):
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValidationError('Malformed request.')
        return data

    @staticmethod
    def _check_names(data, *keys):
        for key in keys:
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValidationError(f'{key} must be text.')

    def _check_not_seated(self, player_id):
        room = self.registry.find_by_player(player_id)
        if room is not None:
            raise ValidationError(f'You are already in room {room.room_id}.')

    @staticmethod
    def _parse_positive_int(value, label):
        try:
            number = int(value)
        except (TypeError, ValueError):
            raise ValidationError(f'{label} must be a whole number.')
        if number < 1:
            raise ValidationError(f'{label} must be at least 1.')
        return number

    @staticmethod
    def _parse_custom_images(value):
        if value is None:
            return []
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ValidationError('Custom images must be a list of paths.')
        return unique_images(value)

    def _parse_pair_count(self, value, custom_images):
        if value is None or value == '':
            value = self.default_pair_count
        pair_count = self._parse_positive_int(value, 'Pair count')
        available = available_image_count(self.image_pool, custom_images)
        if pair_count > available:
            raise ValidationError(f'At most {available} pairs are available.')
        return pair_count
