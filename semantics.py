"""
LineScript Analyzer
Turns the token sequence into typed operations by keyword dispatch
"""

from typing import Callable, Dict, List, Optional, Union
from dataclasses import dataclass, field
import sys

from parsing import SourceSpan, Token
from error_handling import MalformedScriptError
from utilities import describe_operands


# ============================================================================
# OPERATIONS (Immutable Dataclasses)
# ============================================================================

@dataclass(frozen=True)
class Declare:
  """DECLARE <name>"""
  name: str
  span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Assign:
  """SET <name> <value>"""
  name: str
  value: str
  span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Increment:
  """INCREMENT <name> <delta>"""
  name: str
  delta: str
  span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Decrement:
  """DECREMENT <name> <delta>"""
  name: str
  delta: str
  span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Print:
  """PRINT <name>"""
  name: str
  span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class BranchStart:
  """IF <target> <operator> <comparison>"""
  target: str
  operator: str
  comparison: str
  span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class BranchEnd:
  """ENDIF"""
  span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)


Operation = Union[Declare, Assign, Increment, Decrement, Print, BranchStart, BranchEnd]


# ============================================================================
# KEYWORD TABLE
# ============================================================================

# keyword -> (operand count, constructor taking the operand values)
KEYWORDS: Dict[str, tuple] = {
    'DECLARE': (1, Declare),
    'SET': (2, Assign),
    'PRINT': (1, Print),
    'INCREMENT': (2, Increment),
    'DECREMENT': (2, Decrement),
    'IF': (3, BranchStart),
    'ENDIF': (0, BranchEnd),
}


def keyword_arity(keyword: str) -> Optional[int]:
  """Number of operands a keyword consumes, or None if it is not a keyword"""
  entry = KEYWORDS.get(keyword)
  return entry[0] if entry else None


# ============================================================================
# ANALYSIS
# ============================================================================

def analyze_keyword(tokens: List[Token], cursor: int, debug: bool = False) -> Operation:
  """
  Build the operation for the keyword at tokens[cursor].

  The operands are the next tokens taken verbatim, even when they spell a
  keyword themselves. Raises MalformedScriptError when the script ends
  before all operands are present.
  """
  keyword_token = tokens[cursor]
  arity, constructor = KEYWORDS[keyword_token.value]
  operands = tokens[cursor + 1:cursor + 1 + arity]

  if len(operands) < arity:
    raise MalformedScriptError(keyword_token.value, arity, len(operands), keyword_token.span)

  values = [token.value for token in operands]
  if debug:
    print(f"  Operation: {describe_operands(keyword_token.value, values)}", file=sys.stderr)

  return constructor(*values, span=keyword_token.span)


def analyze_tokens(tokens: List[Token], debug: bool = False) -> List[Operation]:
  """Analyze a token sequence into operations, in script order"""
  operations = []
  cursor = 0

  if debug:
    print(f"Analyzing {len(tokens)} tokens", file=sys.stderr)

  while cursor < len(tokens):
    token = tokens[cursor]
    arity = keyword_arity(token.value)

    if arity is None:
      if debug:
        print(f"  Skipping unrecognized token {token.value!r} at {token.span}", file=sys.stderr)
      cursor += 1
      continue

    operations.append(analyze_keyword(tokens, cursor, debug))
    cursor += 1 + arity

  return operations


def pretty_print_operations(operations: List[Operation]) -> str:
  """Render operations one per line for debugging"""
  result = ""
  for i, operation in enumerate(operations):
    result += f"{i:4d}  {operation!r}\n"
  return result


# ============================================================================
# FACTORY FUNCTIONS (for main.py)
# ============================================================================

def create_analyzer(debug: bool = False) -> Callable[[List[Token]], List[Operation]]:
  """Factory function returning an analyzer"""
  def analyzer(tokens: List[Token]) -> List[Operation]:
    return analyze_tokens(tokens, debug)

  return analyzer


def create_debug_analyzer() -> Callable[[List[Token]], List[Operation]]:
  """Factory function returning a debug analyzer"""
  return create_analyzer(debug=True)
