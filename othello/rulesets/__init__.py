"""Game rules.

Only Reversi/Othello lives here; `reversi.rules` holds the pure move
resolution and legality checks, `reversi.factory` builds sessions.
"""
