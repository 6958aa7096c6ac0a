"""
LineScript - Main Entry Point
A line-oriented scripting language with variables, arithmetic and IF blocks
"""

import sys
import argparse
from typing import List, Optional, TextIO

from parsing import create_parser, create_debug_parser, pretty_print_tokens, read_script
from semantics import create_analyzer, create_debug_analyzer, pretty_print_operations
from interpreter import create_interpreter, create_debug_interpreter, ExecutionContext
from error_handling import FileReadError, LineScriptError, ScriptErrorHandler


VERSION = "LineScript v0.1.0"


def create_arg_parser() -> argparse.ArgumentParser:
  """Create command line argument parser"""
  parser = argparse.ArgumentParser(
      prog='linescript',
      description='LineScript - run a line-oriented script',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  %(prog)s script.ls              # Run a script
  %(prog)s --tokens script.ls     # Show the token list
  %(prog)s --analyze script.ls    # Show the operation list
  %(prog)s --debug script.ls      # Run with trace output on stderr
  %(prog)s --strict script.ls     # Fail on non-integers and unknown operators
        """
  )

  parser.add_argument(
      'script',
      help='LineScript file to execute'
  )

  parser.add_argument(
      '--tokens',
      action='store_true',
      help='Tokenize file and show tokens (for debugging)'
  )

  parser.add_argument(
      '--analyze',
      action='store_true',
      help='Tokenize and analyze file, show operations (for debugging)'
  )

  parser.add_argument(
      '--debug',
      action='store_true',
      help='Enable debug output for all stages'
  )

  parser.add_argument(
      '--strict',
      action='store_true',
      help='Treat non-integer values and unknown comparison operators as errors '
           '(only when running, not with --tokens or --analyze)'
  )

  parser.add_argument(
      '--version',
      action='version',
      version=VERSION
  )

  return parser


def run_source(
  source: str,
  filename: str = "<input>",
  output: Optional[TextIO] = None,
  debug: bool = False,
  strict: bool = False
) -> ExecutionContext:
  """Tokenize, analyze and execute script text"""
  parser = create_debug_parser() if debug else create_parser()
  analyzer = create_debug_analyzer() if debug else create_analyzer()
  if debug:
    interpreter = create_debug_interpreter(strict=strict, output=output)
  else:
    interpreter = create_interpreter(strict=strict, output=output)

  try:
    tokens = parser.tokenize(source, filename)
    operations = analyzer(tokens)
    return interpreter(operations)
  except LineScriptError as e:
    raise ScriptErrorHandler(source, filename).enhance(e)


def show_tokens(script_path: str, debug: bool = False) -> None:
  """Tokenize a script file and show the tokens"""
  parser = create_debug_parser() if debug else create_parser()
  tokens = parser.tokenize_file(script_path)

  print(f"{len(tokens)} tokens in {script_path}:")
  print(pretty_print_tokens(tokens), end='')


def show_operations(script_path: str, debug: bool = False) -> None:
  """Tokenize and analyze a script file and show the operations"""
  source = read_script(script_path)
  parser = create_debug_parser() if debug else create_parser()
  analyzer = create_debug_analyzer() if debug else create_analyzer()

  try:
    operations = analyzer(parser.tokenize(source, script_path))
  except LineScriptError as e:
    raise ScriptErrorHandler(source, script_path).enhance(e)

  print(f"{len(operations)} operations in {script_path}:")
  print(pretty_print_operations(operations), end='')


def enable_byte_passthrough(stream: TextIO) -> None:
  """Let script bytes that were not valid UTF-8 be written back unchanged"""
  reconfigure = getattr(stream, 'reconfigure', None)
  if reconfigure is not None:
    reconfigure(errors='surrogateescape')


def run_script_file(script_path: str, debug: bool = False, strict: bool = False) -> None:
  """Run a LineScript file"""
  source = read_script(script_path)
  enable_byte_passthrough(sys.stdout)
  if debug:
    print(f"Running {script_path} ({len(source)} characters)", file=sys.stderr)
  run_source(source, script_path, debug=debug, strict=strict)


def main(argv: Optional[List[str]] = None) -> None:
  """Main entry point for LineScript"""
  arg_parser = create_arg_parser()
  args = arg_parser.parse_args(argv)

  if args.strict and (args.tokens or args.analyze):
    arg_parser.error("--strict only applies when running a script, not with --tokens or --analyze")

  try:
    if args.tokens:
      show_tokens(args.script, debug=args.debug)
    elif args.analyze:
      show_operations(args.script, debug=args.debug)
    else:
      run_script_file(args.script, debug=args.debug, strict=args.strict)
  except FileReadError as e:
    print(f"Error: {e}")
    sys.exit(1)
  except LineScriptError as e:
    print(f"Script error: {e}")
    sys.exit(1)


if __name__ == "__main__":
  main()
