BOARD_SIZE = 3
MAX_PLAYERS = 2

# Game lifecycle
STATUS_WAITING = "waiting"
STATUS_ACTIVE = "active"
STATUS_COMPLETED = "completed"
STATUS_DRAW = "draw"
GAME_STATUSES = (STATUS_WAITING, STATUS_ACTIVE, STATUS_COMPLETED, STATUS_DRAW)
TERMINAL_STATUSES = {STATUS_COMPLETED, STATUS_DRAW}

# Per-participant result of a finished game
OUTCOME_WON = "won"
OUTCOME_LOST = "lost"
OUTCOME_DRAWN = "drawn"
OUTCOMES = (OUTCOME_WON, OUTCOME_LOST, OUTCOME_DRAWN)

# Leaderboard ranking metrics
METRIC_WINS = "wins"
METRIC_EFFICIENCY = "efficiency"
METRICS = (METRIC_WINS, METRIC_EFFICIENCY)

GAME_NAME_MIN = 3
GAME_NAME_MAX = 100
PLAYER_NAME_MAX = 100
SEARCH_QUERY_MAX = 100
PAGE_LIMIT_MAX = 100

# Index sets that end the game when uniformly occupied: rows, columns, diagonals.
WINNING_LINES: list[tuple[tuple[int, int], ...]] = (
    [tuple((r, c) for c in range(BOARD_SIZE)) for r in range(BOARD_SIZE)]
    + [tuple((r, c) for r in range(BOARD_SIZE)) for c in range(BOARD_SIZE)]
    + [
        tuple((i, i) for i in range(BOARD_SIZE)),
        tuple((i, BOARD_SIZE - 1 - i) for i in range(BOARD_SIZE)),
    ]
)

__all__ = [
    "BOARD_SIZE",
    "MAX_PLAYERS",
    "STATUS_WAITING",
    "STATUS_ACTIVE",
    "STATUS_COMPLETED",
    "STATUS_DRAW",
    "GAME_STATUSES",
    "TERMINAL_STATUSES",
    "OUTCOME_WON",
    "OUTCOME_LOST",
    "OUTCOME_DRAWN",
    "OUTCOMES",
    "METRIC_WINS",
    "METRIC_EFFICIENCY",
    "METRICS",
    "GAME_NAME_MIN",
    "GAME_NAME_MAX",
    "PLAYER_NAME_MAX",
    "SEARCH_QUERY_MAX",
    "PAGE_LIMIT_MAX",
    "WINNING_LINES",
]
