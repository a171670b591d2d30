"""
Shenzhen-style solitaire engine.

Pure game-state logic: every command takes an immutable GameState and returns
the next one (the same object when the command is rejected).
Modules:
- cards.py, slots.py, board.py: Card variants, Slots, Board, Foundations
- refs.py: destination identifiers (col-N, free-N, foundation-X)
- state.py: GameState, HistoryEntry, GameStatus
- deal.py: deck shuffling and dealing
- moves.py, cascade.py, dragons.py, solver.py: the rules
- history.py: grouped undo
- win.py: win detection
- engine.py, session.py: lifecycle commands and the caller-held session
- codec.py: JSON encoding for the HTTP API
"""
