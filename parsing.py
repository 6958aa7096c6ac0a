"""
LineScript Tokenizer
Splits script text into space/newline delimited tokens with source spans
"""

from typing import List, Optional
from dataclasses import dataclass, field
import sys

from pyparsing import Regex, col, lineno

from error_handling import FileReadError


@dataclass(frozen=True)
class SourceSpan:
    """Source location information for error reporting"""
    filename: str
    start_line: int
    start_col: int
    end_line: int
    end_col: int
    text: str = ""

    def __str__(self) -> str:
        if self.start_line == self.end_line:
            return f"{self.filename}:{self.start_line}:{self.start_col}-{self.end_col}"
        return f"{self.filename}:{self.start_line}:{self.start_col}-{self.end_line}:{self.end_col}"


@dataclass(frozen=True)
class Token:
    """LineScript token; the span is informational and not part of equality"""
    value: str
    span: Optional[SourceSpan] = field(default=None, compare=False)

    def __str__(self) -> str:
        return self.value


# Only space and newline separate tokens. Tabs, carriage returns and
# punctuation stay inside the token they touch.
DELIMITERS = " \n"


def make_word_pattern() -> Regex:
    """Build the pyparsing element matching a single token"""
    word = Regex(r"[^ \n]+")
    word.set_whitespace_chars(DELIMITERS)
    word.parse_with_tabs()
    return word


WORD = make_word_pattern()


class LineScriptTokenizer:
    """Tokenizer producing Token objects in script order"""

    def __init__(self, filename: str = "<input>", debug: bool = False):
        self.filename = filename
        self.debug = debug

    def tokenize(self, text: str) -> List[Token]:
        """Tokenize LineScript source.

        A final word with no delimiter after it is still emitted, and runs of
        delimiters never produce empty tokens.
        """
        tokens = []
        for _, start, end in WORD.scan_string(text):
            tokens.append(Token(text[start:end], self._span(text, start, end)))

        if self.debug:
            print(f"Tokenized {self.filename}: {len(tokens)} tokens", file=sys.stderr)
            for token in tokens:
                print(f"  Token: {token.value!r} at {token.span}", file=sys.stderr)

        return tokens

    def _span(self, text: str, start: int, end: int) -> SourceSpan:
        line_num = lineno(start, text)
        col_num = col(start, text)
        return SourceSpan(
            self.filename, line_num, col_num, line_num, col_num + (end - start), text[start:end]
        )


class LineScriptParser:
    """Reads script files and turns them into tokens"""

    def __init__(self, debug: bool = False):
        self.debug = debug

    def read_file(self, filepath: str) -> str:
        """Read a LineScript source file"""
        return read_script(filepath)

    def tokenize_file(self, filepath: str) -> List[Token]:
        """Read and tokenize a LineScript source file"""
        return self.tokenize(self.read_file(filepath), filepath)

    def tokenize(self, text: str, filename: str = "<input>") -> List[Token]:
        """Tokenize LineScript source code from string"""
        tokenizer = LineScriptTokenizer(filename, self.debug)
        return tokenizer.tokenize(text)


def read_script(filepath: str) -> str:
    """Read script text, converting every I/O failure into FileReadError.

    Bytes that are not valid UTF-8 are kept as surrogate escapes so they pass
    through tokens and PRINT output unchanged.
    """
    try:
        with open(filepath, 'r', encoding='utf-8', errors='surrogateescape', newline='') as f:
            return f.read()
    except FileNotFoundError:
        raise FileReadError(filepath, "file not found")
    except IsADirectoryError:
        raise FileReadError(filepath, "is a directory")
    except PermissionError:
        raise FileReadError(filepath, "permission denied")
    except OSError as e:
        raise FileReadError(filepath, e.strerror or str(e)) from e


def tokenize(text: str, filename: str = "<input>") -> List[Token]:
    """Tokenize text with a default tokenizer"""
    return LineScriptTokenizer(filename).tokenize(text)


# Factory functions for creating parsers
def create_parser(debug: bool = False) -> LineScriptParser:
    """Create a LineScript parser"""
    return LineScriptParser(debug=debug)


def create_debug_parser() -> LineScriptParser:
    """Create a LineScript parser with debug enabled"""
    return LineScriptParser(debug=True)


def pretty_print_tokens(tokens: List[Token]) -> str:
    """Render tokens one per line for debugging"""
    result = ""
    for i, token in enumerate(tokens):
        result += f"{i:4d}  {token.value!r}"
        if token.span is not None:
            result += f"  ({token.span.start_line}:{token.span.start_col})"
        result += "\n"
    return result
