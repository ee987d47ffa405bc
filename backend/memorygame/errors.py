"""Domain errors raised by the room services.

Each error carries a human-readable message that socket handlers relay to
the offending caller only.
"""


class GameError(Exception):
    message = 'Something went wrong.'

    def __init__(self, message=None):
        if message:
            self.message = message
        super().__init__(self.message)


class ValidationError(GameError):
    message = 'All fields are required.'


class RoomIdTaken(GameError):
    message = 'Room ID is already taken.'


class RoomNotFound(GameError):
    message = 'Room not found.'


class RoomUnavailable(RoomNotFound):
    message = 'Room not available.'


class RoomFull(GameError):
    message = 'Room is full.'


class NotYourTurn(GameError):
    message = 'Not your turn.'


class InvalidCardState(GameError):
    message = 'Card cannot be flipped.'


class UnsupportedFileType(GameError):
    message = 'Only images are allowed.'
