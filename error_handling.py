"""
Error handling for LineScript with source context in error messages
Every script-level failure derives from LineScriptError
"""

from typing import Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from parsing import SourceSpan


# ============================================================================
# DATA STRUCTURES (Immutable Dictionaries)
# ============================================================================

def make_script_error(
    message: str,
    span: Optional['SourceSpan'] = None,
    context: Optional[str] = None,
) -> Dict:
    """Create an immutable script error structure"""
    return {
        'message': message,
        'span': span,
        'context': context,
    }


def format_script_error(error: Dict) -> str:
    """Format script error as string"""
    if error['span']:
        error_msg = f"{error['span']}: {error['message']}"
    else:
        error_msg = error['message']

    if error['context']:
        error_msg += f"\n{error['context']}"

    return error_msg


# ============================================================================
# PURE FUNCTIONS
# ============================================================================

def get_context_lines(source_text: str, line_num: int, col_num: int, context_lines: int = 2) -> str:
    """Get context lines around the error"""
    lines = source_text.split('\n')
    start_line = max(0, line_num - context_lines - 1)
    end_line = min(len(lines), line_num + context_lines)

    context_parts = []
    for i in range(start_line, end_line):
        line_prefix = f"{i+1:4d}: "
        context_parts.append(f"{line_prefix}{lines[i]}")
        if i == line_num - 1:
            context_parts.append(f"{'':6}{' ' * (col_num - 1)}^ Error here")

    return '\n'.join(context_parts)


# ============================================================================
# EXCEPTIONS
# ============================================================================

class LineScriptError(Exception):
    """Base class for every error reported by the interpreter"""
    def __init__(self, message: str, span: Optional['SourceSpan'] = None, context: str = ""):
        self.message = message
        self.span = span
        self.context = context
        super().__init__(message)

    def __str__(self) -> str:
        return format_script_error(make_script_error(self.message, self.span, self.context))


class FileReadError(LineScriptError):
    """The script file could not be read"""
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read script '{path}': {reason}")


class MalformedScriptError(LineScriptError):
    """A keyword is missing some of its operands"""
    def __init__(self, keyword: str, expected: int, found: int, span: Optional['SourceSpan'] = None):
        self.keyword = keyword
        self.expected = expected
        self.found = found
        plural = "" if expected == 1 else "s"
        super().__init__(
            f"{keyword} requires {expected} operand{plural}, got {found}", span
        )


class NumericCoercionError(LineScriptError):
    """A value used as an integer is not a base-10 integer (strict mode only)"""
    def __init__(self, text: str, span: Optional['SourceSpan'] = None):
        self.text = text
        super().__init__(f"'{text}' is not a base-10 integer", span)


class UnknownOperatorError(LineScriptError):
    """An IF uses an operator outside <, >, ==, != (strict mode only)"""
    def __init__(self, operator: str, span: Optional['SourceSpan'] = None):
        self.operator = operator
        super().__init__(f"Unknown comparison operator '{operator}'", span)


class ScriptErrorHandler:
    """Attaches source context to errors raised while processing a script"""
    def __init__(self, source_text: str, filename: str = "<input>"):
        self.source_text = source_text
        self.filename = filename

    def enhance(self, error: LineScriptError) -> LineScriptError:
        """Fill in the context lines of an error that points into the source"""
        if error.span is not None and not error.context:
            error.context = get_context_lines(
                self.source_text, error.span.start_line, error.span.start_col
            )
        return error
