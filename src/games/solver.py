import logging
import operator
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

TARGET = 24
TOLERANCE = 1e-9


@dataclass(frozen=True)
class Item:
    """A partial result in the search: its value and the expression that produced it."""
    value: float
    expr: str


def format_number(value: float) -> str:
    """Plain decimal text for an input number ('4' rather than '4.0')."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def apply_operator(a: float, op: str, b: float) -> Optional[float]:
    """
    Apply a single operator to two operands.

    Returns None when the operation is not applicable (division by zero).
    """
    if op == '/':
        if b == 0:
            return None
        return a / b
    func = TwentyFourSolver.OPS.get(op)
    if func is None:
        raise ValueError(f"Unknown operator: {op}")
    return func(a, b)


class TwentyFourSolver:
    """
    Solver for the 24 game.
    Combines the numbers pairwise with + - * / until one value is left and
    returns the first expression found that reaches the target.
    """

    OPS = {
        '+': operator.add,
        '-': operator.sub,
        '*': operator.mul,
        '/': operator.truediv,  # zero divisors are filtered out by apply_operator
    }

    def __init__(self, tolerance: float = TOLERANCE):
        self.tolerance = tolerance

    def make_items(self, numbers: Iterable[float]) -> Tuple[Item, ...]:
        return tuple(Item(float(n), format_number(n)) for n in numbers)

    def solve(self, numbers: Iterable[float], target: float = TARGET) -> Optional[str]:
        """
        Find an expression over the numbers that equals the target.

        Args:
            numbers: The operands, used in the given order.
            target: The value to reach.

        Returns:
            Fully parenthesized expression string, or None if no combination
            reaches the target.
        """
        items = self.make_items(numbers)
        logger.debug("Solving %s for target %s", [i.expr for i in items], target)
        expression = self.reduce(items, target)
        logger.debug("Result for %s: %s", [i.expr for i in items], expression)
        return expression

    def reduce(self, items: Sequence[Item], target: float) -> Optional[str]:
        if not items:
            raise ValueError("Cannot reduce an empty collection")

        if len(items) == 1:
            if abs(items[0].value - target) < self.tolerance:
                return items[0].expr
            return None

        # Both orders of every pair, since - and / are not commutative
        for i in range(len(items)):
            for j in range(len(items)):
                if i == j:
                    continue

                left, right = items[i], items[j]
                rest = tuple(items[k] for k in range(len(items)) if k != i and k != j)

                for op in self.OPS:
                    value = apply_operator(left.value, op, right.value)
                    if value is None:
                        continue

                    combined = Item(value, f"({left.expr}{op}{right.expr})")
                    result = self.reduce((combined,) + rest, target)
                    if result is not None:
                        return result

        return None

    def has_solution(self, numbers: Iterable[float], target: float = TARGET) -> bool:
        return self.solve(numbers, target) is not None


def solve_twenty_four(numbers: Iterable[float]) -> Optional[str]:
    """Return an expression of the four numbers equal to 24, or None."""
    return TwentyFourSolver().solve(numbers, TARGET)


def has_solution(numbers: Iterable[float]) -> bool:
    return TwentyFourSolver().has_solution(numbers, TARGET)
