"""
Input parsing and safe expression evaluation for the 24 game.

Turns the four raw entries into numbers (the precondition check that runs before
the solver) and evaluates witness expressions with Python's ast module instead
of eval().
"""

import ast
import math
import operator
import re
from collections import Counter
from typing import Dict, List, Optional, Sequence, Tuple, Union


NUMBER_RE = re.compile(r'\d+(?:\.\d*)?(?:e[+-]?\d+)?|\.\d+(?:e[+-]?\d+)?')


class ExpressionParser:
    """
    Parses puzzle inputs and evaluates arithmetic expressions.
    Only allows: +, -, *, / operators, numeric literals, and parentheses.
    """

    REQUIRED_NUMBERS = 4

    # Mapping of AST operators to actual Python operators
    SAFE_OPERATORS = {
        ast.Add: operator.add,
        ast.Sub: operator.sub,
        ast.Mult: operator.mul,
        ast.Div: operator.truediv,
    }

    # Characters allowed in expressions
    ALLOWED_CHARS = set('0123456789.e+-*/() ')

    def parse_numbers(self, values: Sequence[Optional[str]]) -> Tuple[Optional[List[float]], Optional[str]]:
        """
        Parse the raw puzzle entries.

        Args:
            values: The entries as typed by the user

        Returns:
            Tuple of (numbers or None, error_message or None)
        """
        if len(values) != self.REQUIRED_NUMBERS:
            return None, f"Expected {self.REQUIRED_NUMBERS} numbers, got {len(values)}"

        numbers = []
        for position, raw in enumerate(values, start=1):
            text = str(raw).strip() if raw is not None else ''
            if not text:
                return None, f"Number {position} is missing"
            # float() also takes digit separators and non-ASCII digits
            if '_' in text or not text.isascii():
                return None, f"Number {position} is not a number: {text}"
            try:
                number = float(text)
            except ValueError:
                return None, f"Number {position} is not a number: {text}"
            if not math.isfinite(number):
                return None, f"Number {position} must be finite"
            if number <= 0:
                return None, f"Number {position} must be greater than zero"
            numbers.append(number)

        return numbers, None

    def sanitize(self, expression: str) -> str:
        """Remove any characters not in the allowed set."""
        return ''.join(c for c in expression if c in self.ALLOWED_CHARS)

    def extract_numbers(self, expression: str) -> List[float]:
        """Return every numeric literal in the expression, in order."""
        return [float(n) for n in NUMBER_RE.findall(expression)]

    def validate_numbers(self, expression: str, available: Sequence[float]) -> Tuple[bool, Optional[str]]:
        """
        Check that the expression uses every available number exactly once.

        Returns:
            Tuple of (is_valid, error_message or None)
        """
        used_counter = Counter(self.extract_numbers(expression))
        available_counter = Counter(float(n) for n in available)

        for num, count in used_counter.items():
            if num not in available_counter:
                return False, f"Number {num:g} is not available"
            if count > available_counter[num]:
                return False, f"Number {num:g} used more times than available"

        for num, count in available_counter.items():
            if used_counter[num] < count:
                return False, f"Number {num:g} is not used"

        return True, None

    def _safe_eval(self, node: ast.AST) -> Union[int, float]:
        """
        Recursively evaluate AST node with only allowed operations.

        Raises:
            ValueError: If an unsupported operation is encountered
        """
        if isinstance(node, ast.Expression):
            return self._safe_eval(node.body)

        if isinstance(node, ast.Constant):
            if isinstance(node.value, (int, float)) and not isinstance(node.value, bool):
                return node.value
            raise ValueError("Only numeric values allowed")

        if isinstance(node, ast.BinOp):
            op_type = type(node.op)
            if op_type not in self.SAFE_OPERATORS:
                raise ValueError(f"Operator not allowed: {op_type.__name__}")

            left = self._safe_eval(node.left)
            right = self._safe_eval(node.right)

            if op_type is ast.Div and right == 0:
                raise ValueError("Division by zero")

            return self.SAFE_OPERATORS[op_type](left, right)

        if isinstance(node, ast.UnaryOp):
            if isinstance(node.op, ast.USub):
                return -self._safe_eval(node.operand)
            if isinstance(node.op, ast.UAdd):
                return self._safe_eval(node.operand)
            raise ValueError("Unsupported unary operator")

        raise ValueError("Invalid expression structure")

    def evaluate(self, expression: str) -> Tuple[bool, Optional[Union[int, float]], Optional[str]]:
        """
        Safely evaluate expression using AST parsing.

        Returns:
            Tuple of (success, result or None, error_message or None)
        """
        clean_expr = self.sanitize(expression)

        if not clean_expr.strip():
            return False, None, "Empty expression"

        try:
            tree = ast.parse(clean_expr, mode='eval')
            return True, self._safe_eval(tree), None
        except SyntaxError as e:
            return False, None, f"Invalid syntax: {e.msg}"
        except ValueError as e:
            return False, None, str(e)

    def parse_and_validate(self, expression: str, available_numbers: Sequence[float]) -> Dict:
        """
        Complete validation and evaluation of an expression.

        Returns:
            Dictionary with:
            - valid: bool
            - result: float or None
            - error: str or None
            - numbers_used: list of numbers used
        """
        result = {
            'valid': False,
            'result': None,
            'error': None,
            'numbers_used': []
        }

        clean_expr = self.sanitize(expression)

        if not clean_expr.strip():
            result['error'] = "Empty expression"
            return result

        result['numbers_used'] = self.extract_numbers(clean_expr)

        is_valid, error = self.validate_numbers(clean_expr, available_numbers)
        if not is_valid:
            result['error'] = error
            return result

        success, eval_result, error = self.evaluate(clean_expr)
        if not success:
            result['error'] = error
            return result

        result['valid'] = True
        result['result'] = float(eval_result)
        return result
