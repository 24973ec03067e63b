from typing import List, Optional, Sequence, Tuple

X = 'X'
O = 'O'
MARKS = (X, O)
BOARD_SIZE = 9

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


def empty_board() -> List[Optional[str]]:
    return [None] * BOARD_SIZE


def detect_winner(board: Sequence[Optional[str]]) -> Optional[str]:
    """Return the mark owning a complete row, column or diagonal, else None."""
    for a, b, c in WINNING_LINES:
        mark = board[a]
        if mark and mark == board[b] == board[c]:
            return mark
    return None


def is_full(board: Sequence[Optional[str]]) -> bool:
    return all(cell is not None for cell in board)


def is_draw(board: Sequence[Optional[str]]) -> bool:
    return detect_winner(board) is None and is_full(board)


def mark_for_turn(turn_count: int) -> str:
    # X moves on even turns, O on odd
    return X if turn_count % 2 == 0 else O


def opening_turn(mark: str) -> int:
    """Smallest turn count whose parity lets `mark` move first."""
    return 0 if mark == X else 1
