"""Environment module: zero-sum normal-form games solved by regret matching."""

from .game_model import GameModel, MatrixGame
from .rock_paper_scissors import RockPaperScissorsVariant, RPS_EQUILIBRIUM
from .colonel_blotto import ColonelBlotto, generate_allocations, count_allocations
from .game_factory import create_game, GAME_DESCRIPTIONS

__all__ = [
    'GameModel',
    'MatrixGame',
    'RockPaperScissorsVariant',
    'RPS_EQUILIBRIUM',
    'ColonelBlotto',
    'generate_allocations',
    'count_allocations',
    'create_game',
    'GAME_DESCRIPTIONS',
]
