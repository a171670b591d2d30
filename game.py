from __future__ import annotations

# Facade module that re-exports the engine's public API.
# Used by the Flask app and the tests; the logic lives under shenzhen_core/*.

from shenzhen_core.cards import (  # noqa: F401
    Card,
    DRAGON_COLORS,
    DragonCard,
    FlowerCard,
    MAX_RANK,
    NormalCard,
    SUITS,
    can_stack,
    full_deck,
    is_valid_run,
    locked_marker,
    parse_card,
)
from shenzhen_core.slots import Slots  # noqa: F401
from shenzhen_core.board import (  # noqa: F401
    Board,
    DECK_SIZE,
    Foundations,
    NUM_COLUMNS,
    NUM_FREE_CELLS,
    check_invariants,
)
from shenzhen_core.refs import (  # noqa: F401
    ColumnTarget,
    FoundationTarget,
    FreeCellTarget,
    TargetRef,
    parse_target,
)
from shenzhen_core.config import EngineConfig  # noqa: F401
from shenzhen_core.state import GameState, GameStatus, HistoryEntry, initial_state  # noqa: F401
from shenzhen_core.deal import deal_board, distribute, has_free_first_move, shuffle_deck  # noqa: F401
from shenzhen_core.moves import (  # noqa: F401
    CardLocation,
    apply_move,
    can_move_to_foundation,
    locate_card,
    move_card,
    relocate,
)
from shenzhen_core.cascade import auto_move_ones, is_trivial_movable  # noqa: F401
from shenzhen_core.dragons import can_collect_dragons, collect_dragons  # noqa: F401
from shenzhen_core.solver import auto_solve, auto_solve_moves  # noqa: F401
from shenzhen_core.history import compute_undo_state, undo  # noqa: F401
from shenzhen_core.win import check_win, is_won  # noqa: F401
from shenzhen_core.engine import (  # noqa: F401
    new_game,
    pause_game,
    restart_game,
    resume_game,
    toggle_dev_mode,
    trigger_auto_move,
)
from shenzhen_core.session import GameSession  # noqa: F401
from shenzhen_core.codec import board_from_json, board_to_json, json_to_state, state_to_json  # noqa: F401
