"""
Test configuration for LineScript tests
"""

import io
import pytest
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from parsing import tokenize
from semantics import analyze_tokens
from interpreter import execute_program


@pytest.fixture
def run():
  """Run script text and return everything it printed"""
  def run_text(source: str, strict: bool = False) -> str:
    output = io.StringIO()
    execute_program(analyze_tokens(tokenize(source)), output=output, strict=strict)
    return output.getvalue()

  return run_text
