from flask import current_app, request
from flask_socketio import emit

from memorygame import socketio
from memorygame.errors import GameError


def _engine():
    return current_app.extensions['memorygame']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect():
    current_app.logger.info(f"[connect] sid={_get_sid()}")
    emit('connected', {'id': _get_sid()})


def handle_disconnect(*args):
    current_app.logger.info(f"[disconnect] sid={_get_sid()}")
    _engine().leave(_get_sid())


def handle_create_room(data):
    try:
        room = _engine().create_room(_get_sid(), data)
    except GameError as exc:
        emit('joinError', exc.message)
        return
    emit('roomCreated', room.room_id)


def handle_join_room(data):
    try:
        _engine().join_room(_get_sid(), data)
    except GameError as exc:
        emit('joinError', exc.message)


def handle_flip_card(data):
    if not isinstance(data, dict):
        data = {}
    try:
        _engine().flip_card(_get_sid(), data.get('roomId'), data.get('cardId'))
    except GameError as exc:
        emit('flipError', exc.message)


def handle_send_chat_message(data):
    _engine().send_chat(data)


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register the game's Socket.IO event handlers on `namespace`."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('createRoom', handle_create_room, namespace=namespace)
    socketio.on_event('joinRoom', handle_join_room, namespace=namespace)
    socketio.on_event('flipCard', handle_flip_card, namespace=namespace)
    socketio.on_event('sendChatMessage', handle_send_chat_message, namespace=namespace)
