import logging
import threading
from typing import Any, Optional

from config import Config
from tictactoe.models import Room, Transition
from tictactoe.registry import RoomRegistry
from tictactoe.services.games.scheduler import RoundTransitionScheduler


class ConnectionGateway:
    """Routes inbound protocol events to room transitions.

    The gateway owns no game rules. It resolves the room for a connection,
    applies the room operation, forwards the resulting emissions in order
    and arms or cancels the round reset timer.
    """

    def __init__(
        self,
        registry: RoomRegistry,
        channel,
        scheduler: RoundTransitionScheduler,
        logger: Optional[logging.Logger] = None,
        reset_delay: float = Config.ROUND_RESET_DELAY_SEC,
    ):
        self.registry = registry
        self.channel = channel
        self.scheduler = scheduler
        self.logger = logger or logging.getLogger(__name__)
        self.reset_delay = reset_delay
        # Socket.IO may dispatch events and timers on separate threads
        self._lock = threading.RLock()

    def connect(self, connection_id: str) -> None:
        self.logger.info(f"[connect] sid={connection_id}")

    def join(self, connection_id: str, room_code: Any, name: Any) -> Transition:
        if not isinstance(room_code, str) or not room_code or not isinstance(name, str):
            self.logger.debug(f"[join-ignored] sid={connection_id} malformed payload")
            return Transition()
        with self._lock:
            if self.registry.find_by_connection(connection_id) is not None:
                self.logger.debug(f"[join-ignored] sid={connection_id} already seated")
                return Transition()
            room = self.registry.get_or_create(room_code)
            result = room.join(connection_id, name)
            if not result.applied:
                self.logger.info(f"[join-ignored] room={room_code} sid={connection_id} room full")
                return result
            self.registry.bind(connection_id, room_code)
            self.channel.add(connection_id, room_code)
            self.logger.info(
                f"[join] room={room_code} sid={connection_id} name={name} mark={room.player(connection_id).mark}"
            )
            self._forward(room, result)
            return result

    def move(self, connection_id: str, cell: Any) -> Transition:
        with self._lock:
            room = self.registry.find_by_connection(connection_id)
            if room is None:
                return Transition()
            result = room.move(connection_id, cell)
            if not result.applied:
                self.logger.debug(f"[move-ignored] room={room.code} sid={connection_id} cell={cell!r}")
                return result
            self.logger.info(f"[move] room={room.code} sid={connection_id} cell={cell} turn={room.turn_count}")
            self._forward(room, result)
            if result.round_over:
                self.logger.info(
                    f"[round-over] room={room.code} round={room.round} winner={room.last_winner or 'draw'} score={room.score}"
                )
                self._arm_reset(room)
            return result

    def chat(self, data: Any) -> bool:
        """Relay a chat line to a room. Membership of the sender is not checked."""
        if not isinstance(data, dict):
            return False
        room_code = data.get('room')
        if not isinstance(room_code, str) or not room_code:
            return False
        self.channel.broadcast(room_code, 'chatMessage', {'name': data.get('name'), 'message': data.get('message')})
        return True

    def disconnect(self, connection_id: str) -> Transition:
        with self._lock:
            room = self.registry.find_by_connection(connection_id)
            if room is None:
                return Transition()
            result = room.leave(connection_id)
            self.registry.unbind(connection_id)
            self.channel.discard(connection_id, room.code)
            # A leave always abandons the round in progress
            self.scheduler.cancel(room.code)
            self.logger.info(f"[leave] room={room.code} sid={connection_id} remaining={len(room.players)}")
            if result.empty:
                self.registry.remove(room.code)
                self.logger.info(f"[room-closed] room={room.code}")
                return result
            self._forward(room, result)
            return result

    def finish_round(self, room_code: str, epoch: int, round_number: int) -> Transition:
        """Timer callback: start the next round if the same room is still settling it."""
        with self._lock:
            room = self.registry.get(room_code)
            if room is None or room.epoch != epoch or room.round != round_number:
                self.logger.info(f"[round-reset-skip] room={room_code} epoch={epoch} round={round_number}")
                return Transition()
            result = room.reset_round()
            if not result.applied:
                self.logger.info(f"[round-reset-skip] room={room_code} phase={room.phase}")
                return result
            self.logger.info(f"[round-reset] room={room_code} round={room.round} starter={room.starter.name}")
            self._forward(room, result)
            return result

    def _arm_reset(self, room: Room) -> None:
        code, epoch, round_number = room.code, room.epoch, room.round
        self.scheduler.schedule(code, self.reset_delay, lambda: self.finish_round(code, epoch, round_number))

    def _forward(self, room: Room, result: Transition) -> None:
        for emission in result.emissions:
            if emission.to is None:
                self.channel.broadcast(room.code, emission.event, emission.payload)
            else:
                self.channel.send(emission.to, emission.event, emission.payload)
