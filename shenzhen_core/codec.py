from __future__ import annotations

from typing import Any, Dict, List, Optional

from .board import Board, Foundations, NUM_COLUMNS, NUM_FREE_CELLS, check_invariants
from .cards import Card, DRAGON_COLORS, SUITS, parse_card
from .slots import Slots
from .state import GameState, GameStatus, HistoryEntry


def board_to_json(b: Board) -> Dict[str, Any]:
    foundations: Dict[str, Any] = {s: int(b.foundations.rank(s)) for s in SUITS}
    foundations['flower'] = bool(b.foundations.flower)
    return {
        "columns": [[c.id for c in col] for col in b.columns],
        "freeCells": [c.id if c is not None else None for c in b.free_cells],
        "foundations": foundations,
        "dragons": {c: int(b.dragons[i]) for i, c in enumerate(DRAGON_COLORS)},
    }


def _card(text: Any) -> Card:
    card = parse_card(text)
    if card is None:
        raise ValueError(f"unknown card id: {text!r}")
    return card


def _mapping(obj: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = obj.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"{key} must be an object")
    return value


def board_from_json(obj: Dict[str, Any], strict: bool = True) -> Board:
    """Decodes a board. With `strict`, the 40-card inventory must balance."""
    cols_in = obj["columns"]
    cells_in = obj["freeCells"]
    if len(cols_in) != NUM_COLUMNS or len(cells_in) != NUM_FREE_CELLS:
        raise ValueError("bad board shape")
    columns = [tuple(_card(x) for x in col) for col in cols_in]
    cells: List[Optional[Card]] = [None if x is None else _card(x) for x in cells_in]
    f = _mapping(obj, "foundations")
    ranks = tuple(int(f.get(s, 0)) for s in SUITS)
    d = _mapping(obj, "dragons")
    dragons = tuple(1 if int(d.get(c, 0)) else 0 for c in DRAGON_COLORS)
    board = Board(
        columns=Slots.of(columns),
        free_cells=Slots.of(cells),
        foundations=Foundations(ranks=ranks, flower=bool(f.get("flower", False))),  # type: ignore[arg-type]
        dragons=dragons,  # type: ignore[arg-type]
    )
    if strict:
        problems = check_invariants(board)
        if problems:
            raise ValueError("; ".join(problems))
    return board


def state_to_json(s: GameState) -> Dict[str, Any]:
    return {
        "board": board_to_json(s.board),
        "status": s.status,
        "history": [{"board": board_to_json(h.board), "isAuto": bool(h.is_auto)} for h in s.history],
        "devMode": bool(s.dev_mode),
        "gameId": int(s.game_id),
        "initialBoard": board_to_json(s.initial_board) if s.initial_board is not None else None,
        "timerRunning": bool(s.timer_running),
    }


def json_to_state(obj: Dict[str, Any]) -> GameState:
    """Decodes a state posted by a client; raises ValueError on malformed input."""
    try:
        dev_mode = bool(obj.get("devMode", False))
        status = str(obj.get("status", GameStatus.PLAYING))
        if status not in GameStatus.ALL:
            raise ValueError(f"unknown status: {status}")
        # dev mode boards may break the inventory (foundation jumps); idle boards are empty
        strict = not dev_mode and status != GameStatus.IDLE
        board = board_from_json(obj["board"], strict=strict)
        history = tuple(
            HistoryEntry(board_from_json(h["board"], strict=False), bool(h.get("isAuto", False)))
            for h in obj.get("history", [])
        )
        initial = obj.get("initialBoard")
        return GameState(
            board=board,
            status=status,
            history=history,
            dev_mode=dev_mode,
            game_id=int(obj.get("gameId", 0)),
            initial_board=board_from_json(initial, strict=False) if initial else None,
            timer_running=bool(obj.get("timerRunning", status == GameStatus.PLAYING)),
        )
    except (AttributeError, KeyError, TypeError) as e:
        raise ValueError(f"bad state: {e}") from e
