import itertools
from typing import Dict, Iterator, List, Optional

from tictactoe.models import Room


class RoomRegistry:
    """In-memory table of live rooms keyed by room code.

    Rooms are created lazily on first join and removed when their last
    player leaves. A secondary index maps each seated connection to its
    room code so inbound moves resolve without scanning every room.
    """

    def __init__(self):
        self._rooms: Dict[str, Room] = {}
        self._by_connection: Dict[str, str] = {}
        self._epochs: Iterator[int] = itertools.count(1)

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, code: str) -> bool:
        return code in self._rooms

    def codes(self) -> List[str]:
        return list(self._rooms)

    def rooms(self) -> List[Room]:
        return list(self._rooms.values())

    def get(self, code: str) -> Optional[Room]:
        return self._rooms.get(code)

    def get_or_create(self, code: str) -> Room:
        room = self._rooms.get(code)
        if room is None:
            # A fresh epoch distinguishes a recreated room from its predecessor
            room = Room(code, epoch=next(self._epochs))
            self._rooms[code] = room
        return room

    def find_by_connection(self, connection_id: str) -> Optional[Room]:
        code = self._by_connection.get(connection_id)
        if code is None:
            return None
        return self._rooms.get(code)

    def bind(self, connection_id: str, code: str) -> None:
        self._by_connection[connection_id] = code

    def unbind(self, connection_id: str) -> None:
        self._by_connection.pop(connection_id, None)

    def remove(self, code: str) -> Optional[Room]:
        room = self._rooms.pop(code, None)
        if room is not None:
            for p in room.players:
                self._by_connection.pop(p.connection_id, None)
        return room
