# Games package for Discord bot
from .expression_parser import ExpressionParser
from .solver import TwentyFourSolver, solve_twenty_four
from .twentyfour import SolveOutcome, SolveResult, TwentyFourGame

__all__ = [
    'ExpressionParser',
    'SolveOutcome',
    'SolveResult',
    'TwentyFourGame',
    'TwentyFourSolver',
    'solve_twenty_four',
]
