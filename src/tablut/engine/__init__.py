"""Search engine package: minimax search, evaluation and shared models.

The Qt worker lives in :mod:`tablut.engine.qt_bridge` and needs the optional
PyQt6 dependency, so it is not imported here.
"""

from tablut.engine.evaluation import (
    WILL_WIN_VALUE,
    WINNING_VALUE,
    Evaluator,
    material_balance,
    terminal_score,
)
from tablut.engine.minimax import MinimaxEngine
from tablut.engine.search import (
    DEFAULT_TIME_LIMIT_MS,
    CancelCheck,
    IEngine,
    SearchLimits,
    SearchResult,
)

__all__ = [
    "DEFAULT_TIME_LIMIT_MS",
    "WILL_WIN_VALUE",
    "WINNING_VALUE",
    "CancelCheck",
    "Evaluator",
    "IEngine",
    "MinimaxEngine",
    "SearchLimits",
    "SearchResult",
    "material_balance",
    "terminal_score",
]
