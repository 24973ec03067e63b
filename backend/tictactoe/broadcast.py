from typing import Any

from flask_socketio import SocketIO


class SocketIOChannel:
    """Delivers game messages through Socket.IO rooms.

    Each game room code doubles as the Socket.IO room name, so the
    broadcast group for a game is exactly the set of connections that
    entered it.
    """

    def __init__(self, socketio: SocketIO, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def broadcast(self, room_code: str, event: str, payload: Any) -> None:
        # Use socketio.emit since this may be called from a background task
        self.socketio.emit(event, payload, to=room_code, namespace=self.namespace)

    def send(self, connection_id: str, event: str, payload: Any) -> None:
        self.socketio.emit(event, payload, to=connection_id, namespace=self.namespace)

    def add(self, connection_id: str, room_code: str) -> None:
        self.socketio.server.enter_room(connection_id, room_code, namespace=self.namespace)

    def discard(self, connection_id: str, room_code: str) -> None:
        self.socketio.server.leave_room(connection_id, room_code, namespace=self.namespace)
