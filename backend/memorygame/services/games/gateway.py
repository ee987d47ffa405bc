from flask_socketio import join_room, leave_room


class SocketIOGateway:
    """Publishes room events and manages room membership over Socket.IO.

    Room ids double as Socket.IO room names, so a broadcast reaches every
    connection subscribed to the game room.
    """

    def __init__(self, socketio, namespace='/'):
        self.socketio = socketio
        self.namespace = namespace

    def publish(self, room_id, event, payload):
        # socketio.emit works from handlers and background tasks alike
        self.socketio.emit(event, payload, to=room_id, namespace=self.namespace)

    def subscribe(self, player_id, room_id):
        join_room(room_id, sid=player_id, namespace=self.namespace)

    def unsubscribe(self, player_id, room_id):
        leave_room(room_id, sid=player_id, namespace=self.namespace)
