"""
24 Game - validation, solving and result formatting.

Validates the four numbers a player submits, runs the solver and turns the
outcome into the text shown back to the player.
"""

import json
import logging
from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

import redis

from .expression_parser import ExpressionParser
from .solver import TARGET, TOLERANCE, TwentyFourSolver, format_number

logger = logging.getLogger(__name__)


class SolveOutcome(Enum):
    """How a solve request ended."""
    SOLVED = "solved"
    NO_SOLUTION = "no_solution"
    INVALID_INPUT = "invalid_input"


@dataclass
class SolveResult:
    """Represents the result of one solve request."""
    outcome: str
    numbers: List[float] = field(default_factory=list)
    expression: Optional[str] = None
    error: Optional[str] = None

    @property
    def solved(self) -> bool:
        return self.outcome == SolveOutcome.SOLVED.value

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(asdict(self))

    @classmethod
    def from_json(cls, data: str) -> 'SolveResult':
        """Deserialize from JSON string."""
        parsed = json.loads(data)
        return cls(**parsed)


def format_solution(expression: str, target: float = TARGET) -> str:
    """Drop the outer parentheses and append the target: '((4-1)*8)' -> '(4-1)*8 = 24'."""
    if expression.startswith('(') and expression.endswith(')'):
        expression = expression[1:-1]
    return f"{expression} = {format_number(target)}"


class TwentyFourGame:
    """
    Entry point for the presentation layer.

    Solutions are cached in Redis (when a client is given) under the ordered
    numbers, since the witness found depends on the input order.
    """

    DEFAULT_CACHE_TTL = 3600

    def __init__(self, solver: Optional[TwentyFourSolver] = None,
                 parser: Optional[ExpressionParser] = None,
                 redis_client=None,
                 cache_ttl: int = DEFAULT_CACHE_TTL):
        """
        Initialize the game.

        Args:
            solver: Solver to use, a default TwentyFourSolver if omitted
            parser: Input parser, a default ExpressionParser if omitted
            redis_client: Optional RedisClient for caching and stats
            cache_ttl: Seconds a cached solution is kept
        """
        self.solver = solver or TwentyFourSolver()
        self.parser = parser or ExpressionParser()
        self.redis = redis_client
        self.cache_ttl = cache_ttl

    def _puzzle_key(self, numbers: Sequence[float]) -> str:
        return "-".join(format_number(n) for n in numbers)

    def _cached(self, key: str) -> Optional[SolveResult]:
        if self.redis is None:
            return None
        try:
            data = self.redis.get_cached_solution(key)
        except redis.RedisError as e:
            logger.warning("Could not read cached solution for %s: %s", key, e)
            return None
        if not data:
            return None
        try:
            return SolveResult.from_json(data)
        except (ValueError, TypeError) as e:
            logger.warning("Ignoring unreadable cached solution for %s: %s", key, e)
            return None

    def _store(self, key: str, result: SolveResult) -> None:
        if self.redis is None:
            return
        try:
            self.redis.cache_solution(key, result.to_json(), self.cache_ttl)
        except redis.RedisError as e:
            logger.warning("Could not cache solution for %s: %s", key, e)

    def _count(self, server_id: Optional[str], result: SolveResult) -> None:
        if self.redis is None or server_id is None:
            return
        try:
            self.redis.increment_stat(server_id, result.outcome)
        except redis.RedisError as e:
            logger.warning("Could not update stats for server %s: %s", server_id, e)

    def solve(self, values: Sequence[Optional[str]], server_id: Optional[str] = None) -> SolveResult:
        """
        Validate the entries and look for an expression equal to 24.

        Args:
            values: The four raw entries
            server_id: Discord server the request came from, used for stats

        Returns:
            SolveResult describing the outcome
        """
        numbers, error = self.parser.parse_numbers(values)
        if numbers is None:
            logger.info("Rejected input %s: %s", list(values), error)
            result = SolveResult(outcome=SolveOutcome.INVALID_INPUT.value, error=error)
            self._count(server_id, result)
            return result

        key = self._puzzle_key(numbers)
        result = self._cached(key)
        if result is None:
            expression = self.solver.solve(numbers, TARGET)
            if expression is None:
                result = SolveResult(outcome=SolveOutcome.NO_SOLUTION.value, numbers=numbers)
            else:
                result = SolveResult(outcome=SolveOutcome.SOLVED.value, numbers=numbers,
                                     expression=expression)
            self._store(key, result)

        logger.info("Puzzle %s: %s", key, result.outcome)
        self._count(server_id, result)
        return result

    def check_answer(self, values: Sequence[Optional[str]], expression: str) -> Tuple[bool, str]:
        """
        Check a player's own expression for the four numbers.

        Returns:
            Tuple of (correct, message)
        """
        numbers, error = self.parser.parse_numbers(values)
        if numbers is None:
            return False, error

        checked = self.parser.parse_and_validate(expression, numbers)
        if not checked['valid']:
            return False, checked['error']

        shown = expression.strip()
        value = checked['result']
        if abs(value - TARGET) < TOLERANCE:
            return True, f"{shown} = {format_number(TARGET)}"
        return False, f"{shown} = {format_number(value)}, not {format_number(TARGET)}"

    def format_result(self, result: SolveResult, failure_message: str) -> str:
        """Text shown to the player; both failure kinds share one message."""
        if result.solved:
            return format_solution(result.expression)
        return failure_message

    def get_stats(self, server_id: str) -> Dict[str, int]:
        """Outcome counters for a server, zero-filled."""
        stats = {outcome.value: 0 for outcome in SolveOutcome}
        if self.redis is None:
            return stats
        stats.update(self.redis.get_stats(server_id))
        return stats
