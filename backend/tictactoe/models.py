from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from tictactoe.services.games.rules import (
    BOARD_SIZE,
    MARKS,
    detect_winner,
    empty_board,
    is_draw,
    mark_for_turn,
    opening_turn,
)

# Room phases
WAITING = 'waiting'
ACTIVE = 'active'
SETTLING = 'settling'

MAX_PLAYERS = 2
SYSTEM_NAME = 'System'


@dataclass
class Player:
    connection_id: str
    name: str
    mark: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.connection_id,
            'name': self.name,
            'mark': self.mark,
        }


@dataclass
class Emission:
    """One outbound message. `to` is a connection id; None means the whole room."""
    event: str
    payload: Any
    to: Optional[str] = None


@dataclass
class Transition:
    """Result of a room operation.

    A rejected action has `applied` False and no emissions; callers never
    receive an exception for a rule violation.
    """
    applied: bool = False
    emissions: List[Emission] = field(default_factory=list)
    round_over: bool = False
    empty: bool = False

    def emit(self, event: str, payload: Any, to: Optional[str] = None) -> None:
        self.emissions.append(Emission(event, payload, to))


def _notice(message: str) -> Dict[str, str]:
    return {'message': message}


class Room:
    def __init__(self, code: str, epoch: int = 0):
        self.code = code
        self.epoch = epoch
        self.players: List[Player] = []
        self.board: List[Optional[str]] = empty_board()
        self.turn_count = 0
        self.score: Dict[str, int] = {mark: 0 for mark in MARKS}
        self.starter_index = 0
        self.phase = WAITING
        self.round = 1
        # Outcome of the round being settled: a mark, or None for a draw
        self.last_winner: Optional[str] = None

    @property
    def current_mark(self) -> str:
        return mark_for_turn(self.turn_count)

    @property
    def starter(self) -> Optional[Player]:
        if self.starter_index < len(self.players):
            return self.players[self.starter_index]
        return self.players[0] if self.players else None

    def player(self, connection_id: str) -> Optional[Player]:
        for p in self.players:
            if p.connection_id == connection_id:
                return p
        return None

    def opponent_of(self, connection_id: str) -> Optional[Player]:
        for p in self.players:
            if p.connection_id != connection_id:
                return p
        return None

    def roster(self) -> List[Dict[str, Any]]:
        return [p.to_dict() for p in self.players]

    def board_snapshot(self) -> List[Optional[str]]:
        return list(self.board)

    # ---- transitions ----

    def join(self, connection_id: str, name: str) -> Transition:
        result = Transition()
        if len(self.players) >= MAX_PLAYERS or self.player(connection_id):
            return result

        taken = {p.mark for p in self.players}
        mark = next(m for m in MARKS if m not in taken)
        self.players.append(Player(connection_id=connection_id, name=name, mark=mark))
        result.applied = True
        result.emit('playerJoined', self.roster())
        result.emit('gameState', self.board_snapshot())

        if len(self.players) == MAX_PLAYERS:
            starter = self.starter
            self.phase = ACTIVE
            self.turn_count = opening_turn(starter.mark)
            result.emit('notification', _notice(f"Game started! {starter.name} goes first."))
        return result

    def move(self, connection_id: str, cell: Any) -> Transition:
        result = Transition()
        if self.phase != ACTIVE:
            return result
        player = self.player(connection_id)
        if player is None or player.mark != self.current_mark:
            return result
        if isinstance(cell, bool) or not isinstance(cell, int):
            return result
        if not 0 <= cell < BOARD_SIZE or self.board[cell] is not None:
            return result

        self.board[cell] = player.mark
        self.turn_count += 1
        result.applied = True
        result.emit('gameState', self.board_snapshot())

        winner = detect_winner(self.board)
        if winner:
            self.score[winner] += 1
            self.last_winner = winner
            self.phase = SETTLING
            result.round_over = True
            result.emit('gameOver', player.name)
            result.emit('updateScore', dict(self.score))
            result.emit(
                'notification',
                _notice(f"Congratulations {player.name}! You are the winner!"),
                to=player.connection_id,
            )
            loser = self.opponent_of(connection_id)
            if loser:
                result.emit(
                    'notification',
                    _notice(f"Sorry {loser.name}, you lost this round."),
                    to=loser.connection_id,
                )
        elif is_draw(self.board):
            self.last_winner = None
            self.phase = SETTLING
            result.round_over = True
            result.emit('gameOver', 'Draw')
        return result

    def reset_round(self) -> Transition:
        """Start the next round after a win or draw, handing the first move over."""
        result = Transition()
        if self.phase != SETTLING or len(self.players) < MAX_PLAYERS:
            return result

        self.board = empty_board()
        self.starter_index = 1 - self.starter_index
        starter = self.starter
        self.turn_count = opening_turn(starter.mark)
        self.round += 1
        self.phase = ACTIVE
        result.applied = True
        result.emit('gameState', self.board_snapshot())
        if self.last_winner:
            message = f"{self.last_winner} wins! Next round starting... {starter.name} goes first."
        else:
            message = f"It's a draw! Next round starting... {starter.name} goes first."
        self.last_winner = None
        result.emit('notification', _notice(message))
        return result

    def leave(self, connection_id: str) -> Transition:
        result = Transition()
        player = self.player(connection_id)
        if player is None:
            return result

        self.players.remove(player)
        result.applied = True
        result.emit('chatMessage', {'name': SYSTEM_NAME, 'message': f"{player.name} left the game."})
        result.emit('playerJoined', self.roster())

        if not self.players:
            result.empty = True
            return result

        self.board = empty_board()
        self.phase = WAITING
        self.last_winner = None
        result.emit('gameState', self.board_snapshot())
        return result

    def to_dict(self) -> Dict[str, Any]:
        starter = self.starter
        return {
            'code': self.code,
            'phase': self.phase,
            'round': self.round,
            'players': self.roster(),
            'board': self.board_snapshot(),
            'turn_count': self.turn_count,
            'current_mark': self.current_mark if self.phase == ACTIVE else None,
            'score': dict(self.score),
            'starter_index': self.starter_index,
            'starter': starter.name if starter else None,
        }
