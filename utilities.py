"""
Utilities module for the LineScript interpreter
Integer coercion and comparison helpers shared by the executor
"""

from typing import Callable, Dict, Optional
import operator
import re

from error_handling import NumericCoercionError, UnknownOperatorError


# ==================== INTEGER COERCION ====================

# Optional sign followed by ASCII digits, nothing else. int() alone would
# also accept surrounding whitespace, underscores and non-ASCII digits.
DECIMAL_PATTERN = re.compile(r'[+-]?[0-9]+')


def coerce_int(text: str, strict: bool = False, span=None) -> int:
  """
  Interpret a string value as a base-10 integer

  Args:
    text: Value held in memory or written in the script
    strict: Raise instead of falling back to zero
    span: Source span reported on failure

  Returns:
    The parsed integer, or 0 when text is not an integer and strict is off

  Raises:
    NumericCoercionError if text is not an integer and strict is on

  Examples:
    coerce_int("42") -> 42
    coerce_int("-7") -> -7
    coerce_int("null") -> 0
    coerce_int("") -> 0
  """
  if DECIMAL_PATTERN.fullmatch(text):
    return int(text)
  if strict:
    raise NumericCoercionError(text, span)
  return 0


# ==================== COMPARISON OPERATORS ====================

COMPARISON_OPERATORS: Dict[str, Callable[[int, int], bool]] = {
    '<': operator.lt,
    '>': operator.gt,
    '==': operator.eq,
    '!=': operator.ne,
}


def lookup_comparison(op: str, strict: bool = False, span=None) -> Optional[Callable[[int, int], bool]]:
  """
  Find the function implementing a comparison operator

  Args:
    op: Operator token from an IF line
    strict: Raise for operators outside the supported set
    span: Source span reported on failure

  Returns:
    The comparison function, or None for an unknown operator when strict is off
  """
  comparison = COMPARISON_OPERATORS.get(op)
  if comparison is None and strict:
    raise UnknownOperatorError(op, span)
  return comparison


def compare(left: int, op: str, right: int, strict: bool = False, span=None) -> bool:
  """
  Evaluate `left op right`

  An unknown operator counts as a match unless strict is on.

  Examples:
    compare(5, "<", 10) -> True
    compare(5, ">", 10) -> False
    compare(1, "?", 2) -> True
  """
  comparison = lookup_comparison(op, strict, span)
  if comparison is None:
    return True
  return comparison(left, right)


# ==================== FORMATTING ====================

def describe_operands(keyword: str, operands) -> str:
  """Format a keyword and its operand values for debug traces"""
  if not operands:
    return keyword
  return f"{keyword} " + " ".join(repr(value) for value in operands)
