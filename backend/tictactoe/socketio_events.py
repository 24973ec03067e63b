from flask import current_app, request

from tictactoe import socketio
from tictactoe.gateway import ConnectionGateway

EXTENSION_KEY = 'tictactoe'


def _gateway() -> ConnectionGateway:
    return current_app.extensions[EXTENSION_KEY]


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect(auth=None):
    _gateway().connect(_get_sid())


def handle_disconnect(reason=None):
    _gateway().disconnect(_get_sid())


def handle_join_room(room_code=None, name=None, *_extra):
    _gateway().join(_get_sid(), room_code, name)


def handle_player_move(index=None, *_extra):
    _gateway().move(_get_sid(), index)


def handle_send_message(data=None, *_extra):
    _gateway().chat(data)


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register the game protocol's Socket.IO event handlers on `namespace`."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('joinRoom', handle_join_room, namespace=namespace)
    socketio.on_event('playerMove', handle_player_move, namespace=namespace)
    socketio.on_event('sendMessage', handle_send_message, namespace=namespace)
