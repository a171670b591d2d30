from shenzhen_core.board import Board, Foundations, NUM_COLUMNS, NUM_FREE_CELLS
from shenzhen_core.cards import parse_card
from shenzhen_core.slots import Slots
from shenzhen_core.state import GameState, GameStatus


def card(text):
    c = parse_card(text)
    assert c is not None, text
    return c


def make_board(columns, free=None, foundations=(0, 0, 0), flower=False, dragons=(0, 0, 0)):
    """Builds a board from identifier strings; missing columns/cells are empty."""
    cols = [tuple(card(x) for x in col) for col in columns]
    cols += [()] * (NUM_COLUMNS - len(cols))
    cells = [None if x is None else card(x) for x in (free or [])]
    cells += [None] * (NUM_FREE_CELLS - len(cells))
    return Board(
        columns=Slots.of(cols),
        free_cells=Slots.of(cells),
        foundations=Foundations(ranks=tuple(foundations), flower=flower),
        dragons=tuple(dragons),
    )


def make_state(board, **kwargs):
    kwargs.setdefault('status', GameStatus.PLAYING)
    kwargs.setdefault('timer_running', True)
    return GameState(board=board, **kwargs)


def column_ids(state, index):
    return [c.id for c in state.board.columns[index]]


def near_win_board():
    """Everything played except normal-C-9, which sits alone in column 0."""
    return make_board(
        [['normal-C-9']],
        free=['dragon-A-locked', 'dragon-B-locked', 'dragon-C-locked'],
        foundations=(9, 9, 8),
        flower=True,
        dragons=(1, 1, 1),
    )
