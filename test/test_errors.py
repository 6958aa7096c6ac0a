"""
Tests for LineScript error types and formatting
"""

import pytest
from parsing import SourceSpan, read_script
from error_handling import (
  LineScriptError,
  FileReadError,
  MalformedScriptError,
  NumericCoercionError,
  UnknownOperatorError,
  ScriptErrorHandler,
  get_context_lines,
)


class TestErrorTaxonomy:
  """Every script failure shares one base class"""

  @pytest.mark.parametrize("error", [
      FileReadError("a.ls", "file not found"),
      MalformedScriptError("SET", 2, 1),
      NumericCoercionError("abc"),
      UnknownOperatorError("?"),
  ])
  def test_base_class(self, error):
    assert isinstance(error, LineScriptError)

  def test_message_without_span(self):
    assert str(MalformedScriptError("DECLARE", 1, 0)) == "DECLARE requires 1 operand, got 0"

  def test_message_with_span(self):
    span = SourceSpan("s.ls", 4, 2, 4, 4, "<=")
    error = UnknownOperatorError("<=", span)
    assert str(error) == "s.ls:4:2-4: Unknown comparison operator '<='"


class TestContext:
  """Test source context formatting"""

  def test_context_lines(self):
    source = "one\ntwo\nthree\nfour\nfive\nsix"
    context = get_context_lines(source, 4, 3)
    assert context.split('\n') == [
        "   2: two",
        "   3: three",
        "   4: four",
        "        ^ Error here",
        "   5: five",
        "   6: six",
    ]

  def test_handler_only_enhances_errors_with_spans(self):
    handler = ScriptErrorHandler("PRINT x\n", "s.ls")
    error = handler.enhance(NumericCoercionError("x"))
    assert error.context == ""

    span = SourceSpan("s.ls", 1, 7, 1, 8, "x")
    error = handler.enhance(NumericCoercionError("x", span))
    assert "   1: PRINT x" in error.context


class TestReadScript:
  """Test file reading"""

  def test_reads_text(self, tmp_path):
    script = tmp_path / "ok.ls"
    script.write_bytes(b"PRINT x\r\n")
    assert read_script(str(script)) == "PRINT x\r\n"

  def test_non_utf8_bytes_survive_as_surrogate_escapes(self, tmp_path):
    script = tmp_path / "latin1.ls"
    script.write_bytes(b"SET x caf\xe9\n")
    text = read_script(str(script))
    assert text == "SET x caf\udce9\n"
    assert text.encode('utf-8', 'surrogateescape') == b"SET x caf\xe9\n"

  def test_missing_file(self, tmp_path):
    with pytest.raises(FileReadError) as excinfo:
      read_script(str(tmp_path / "nope.ls"))
    assert excinfo.value.reason == "file not found"
