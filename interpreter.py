"""
LineScript Interpreter
Executes an operation sequence once against a fresh execution context
Printing to the context's output stream is the only side effect
"""

from typing import Callable, Dict, List, Optional, TextIO
from dataclasses import dataclass, field
import sys

from semantics import (
  Operation,
  Declare,
  Assign,
  Increment,
  Decrement,
  Print,
  BranchStart,
  BranchEnd,
)
from utilities import coerce_int, compare


# Value stored by DECLARE before any SET
NULL_VALUE = "null"


# ============================================================================
# EXECUTION CONTEXT
# ============================================================================

@dataclass
class ExecutionContext:
  """
  State of one execution pass.

  memory maps variable names to string values. branch_stack holds the
  outcome of every IF whose ENDIF has not been reached yet; operations are
  skipped while any of those outcomes is false.
  """
  output: TextIO = field(default_factory=lambda: sys.stdout)
  strict: bool = False
  memory: Dict[str, str] = field(default_factory=dict)
  branch_stack: List[bool] = field(default_factory=list)

  @property
  def skipping(self) -> bool:
    return not all(self.branch_stack)

  def read(self, name: str) -> str:
    """Current value of a variable; undefined variables read as the empty string"""
    return self.memory.get(name, "")

  def write(self, name: str, value: str) -> None:
    self.memory[name] = value


def make_execution_context(output: Optional[TextIO] = None, strict: bool = False) -> ExecutionContext:
  """Create a fresh execution context"""
  return ExecutionContext(output=output if output is not None else sys.stdout, strict=strict)


# ============================================================================
# OPERATION HANDLERS
# ============================================================================

def exec_declare(op: Declare, context: ExecutionContext) -> None:
  context.write(op.name, NULL_VALUE)


def exec_assign(op: Assign, context: ExecutionContext) -> None:
  context.write(op.name, op.value)


def exec_print(op: Print, context: ExecutionContext) -> None:
  context.output.write(context.read(op.name) + "\n")


def exec_increment(op: Increment, context: ExecutionContext) -> None:
  """Add delta to the variable, treating non-integers as 0"""
  initial = coerce_int(context.read(op.name), context.strict, op.span)
  delta = coerce_int(op.delta, context.strict, op.span)
  context.write(op.name, str(initial + delta))


def exec_decrement(op: Decrement, context: ExecutionContext) -> None:
  """Subtract delta from the variable, treating non-integers as 0"""
  initial = coerce_int(context.read(op.name), context.strict, op.span)
  delta = coerce_int(op.delta, context.strict, op.span)
  context.write(op.name, str(initial - delta))


def exec_branch_start(op: BranchStart, context: ExecutionContext, debug: bool = False) -> None:
  """
  Open a conditional block.

  Inside a block that is already skipped the condition is not evaluated; an
  inert frame is pushed so the matching ENDIF closes this block and not the
  enclosing one. The target and comparison are integer literals, not
  variable names.
  """
  if context.skipping:
    context.branch_stack.append(True)
    return

  target = coerce_int(op.target, context.strict, op.span)
  comparison = coerce_int(op.comparison, context.strict, op.span)
  match = compare(target, op.operator, comparison, context.strict, op.span)

  if debug:
    print(f"  Condition {target} {op.operator} {comparison} -> {match}", file=sys.stderr)

  context.branch_stack.append(match)


def exec_branch_end(op: BranchEnd, context: ExecutionContext) -> None:
  """Close the innermost conditional block; a stray ENDIF does nothing"""
  if context.branch_stack:
    context.branch_stack.pop()


# ============================================================================
# DISPATCH
# ============================================================================

def execute_operation(op: Operation, context: ExecutionContext, debug: bool = False) -> None:
  """Execute one operation, honouring the current skip state"""
  if debug:
    state = "skip" if context.skipping else "run"
    print(f"Executing [{state}]: {op!r}", file=sys.stderr)

  # Block boundaries are tracked even while skipping
  if isinstance(op, BranchEnd):
    exec_branch_end(op, context)
    return
  if isinstance(op, BranchStart):
    exec_branch_start(op, context, debug)
    return

  if context.skipping:
    return

  if isinstance(op, Declare):
    exec_declare(op, context)
  elif isinstance(op, Assign):
    exec_assign(op, context)
  elif isinstance(op, Print):
    exec_print(op, context)
  elif isinstance(op, Increment):
    exec_increment(op, context)
  elif isinstance(op, Decrement):
    exec_decrement(op, context)
  else:
    raise TypeError(f"Unknown operation type: {type(op).__name__}")


# ============================================================================
# PROGRAM EXECUTION
# ============================================================================

def execute_program(
  operations: List[Operation],
  output: Optional[TextIO] = None,
  debug: bool = False,
  strict: bool = False
) -> ExecutionContext:
  """
  Execute operations in order against a fresh context and return the final context.
  An IF left open at the end of the program is not an error.
  """
  context = make_execution_context(output, strict)

  for op in operations:
    execute_operation(op, context, debug)

  if debug and context.branch_stack:
    print(f"Program ended with {len(context.branch_stack)} unclosed IF block(s)", file=sys.stderr)

  return context


# ============================================================================
# FACTORY FUNCTIONS (for main.py)
# ============================================================================

def create_interpreter(
  debug: bool = False,
  strict: bool = False,
  output: Optional[TextIO] = None
) -> Callable[[List[Operation]], ExecutionContext]:
  """Factory function returning an interpreter"""
  def interpreter(operations: List[Operation]) -> ExecutionContext:
    return execute_program(operations, output, debug, strict)

  return interpreter


def create_debug_interpreter(strict: bool = False, output: Optional[TextIO] = None):
  """Factory function returning a debug interpreter"""
  return create_interpreter(debug=True, strict=strict, output=output)
