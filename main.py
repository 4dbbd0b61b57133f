"""
Lox expression interpreter - Main Entry Point
Runs a file of `;`-separated expressions or an interactive prompt
"""

import sys
import argparse
from typing import List, Optional
import os

# Readline support for history and auto-completion
try:
  import readline
  READLINE_AVAILABLE = True
except ImportError:
  READLINE_AVAILABLE = False

from tokens import KEYWORDS
from expressions import pretty_print_ast, print_ast
from error_handling import LoxError, LoxErrorHandler
from parsing import create_debug_parser, create_parser
from interpreter import create_debug_interpreter, create_interpreter


VERSION = "Lox v0.1.0 (expression core)"

# sysexits.h codes
EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70

HISTORY_FILE = "~/.lox_history"


def create_arg_parser() -> argparse.ArgumentParser:
  """Create command line argument parser"""
  parser = argparse.ArgumentParser(
      prog='lox',
      description='Lox expression interpreter',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
Examples:
  %(prog)s                        # Interactive mode
  %(prog)s script.lox             # Evaluate every expression in a file
  %(prog)s --tokens script.lox    # Show the token stream
  %(prog)s --parse script.lox     # Show the expression trees
  %(prog)s --debug script.lox     # Run with debug output
        """
  )

  parser.add_argument(
      'scripts',
      nargs='*',
      metavar='script',
      help='Lox script file to execute'
  )

  parser.add_argument(
      '--tokens',
      action='store_true',
      help='Scan file and show tokens (for debugging)'
  )

  parser.add_argument(
      '--parse',
      action='store_true',
      help='Parse file and show expression trees (for debugging)'
  )

  parser.add_argument(
      '--debug',
      action='store_true',
      help='Enable debug output for all stages'
  )

  parser.add_argument(
      '--no-color',
      action='store_true',
      help='Disable colored error output'
  )

  parser.add_argument(
      '--version',
      action='version',
      version=VERSION
  )

  return parser


def report(handler: LoxErrorHandler, errors: List[LoxError]) -> None:
  """Print errors to stderr"""
  for error in errors:
    print(handler.format(error), file=sys.stderr)


def read_source(script_path: str) -> Optional[str]:
  """Read a script, printing a hint and returning None on failure"""
  try:
    with open(script_path, 'r', encoding='utf-8') as f:
      return f.read()
  except FileNotFoundError:
    print(f"Error: Script file '{script_path}' not found", file=sys.stderr)
    print(f"  Hint: Check the file path and make sure the file exists", file=sys.stderr)
  except PermissionError:
    print(f"Error: Permission denied reading '{script_path}'", file=sys.stderr)
  except UnicodeDecodeError as e:
    print(f"Error: Cannot decode file '{script_path}': {e}", file=sys.stderr)
    print(f"  Hint: Make sure the file is a text file with UTF-8 encoding", file=sys.stderr)
  return None


def run_source(source: str, filename: str = "<input>", mode: str = "run",
               debug: bool = False, use_color: bool = True) -> int:
  """
  Scan, parse and evaluate a whole source text.

  Every parse diagnostic is reported before giving up. Returns a sysexits
  status: 65 for scan/parse errors, 70 for runtime errors.
  """
  handler = LoxErrorHandler(source, filename, use_color)
  parser = create_debug_parser() if debug else create_parser()
  interpreter = create_debug_interpreter() if debug else create_interpreter()

  try:
    if mode == "tokens":
      for token in parser.tokenize(source):
        print(f"{token.line:4d} {token}")
      return EX_OK

    expressions, errors = parser.parse_program(source)
  except LoxError as e:
    report(handler, [e])
    return EX_DATAERR
  except RecursionError:
    print(f"{filename}: Error: expression nested too deeply", file=sys.stderr)
    return EX_DATAERR

  if errors:
    report(handler, errors)
    return EX_DATAERR

  for expr in expressions:
    if mode == "parse":
      print(pretty_print_ast(expr) if debug else print_ast(expr))
      continue
    try:
      print(interpreter.interpret(expr))
    except LoxError as e:
      report(handler, [e])
      return EX_SOFTWARE
    except RecursionError:
      print(f"{filename}: Error: expression nested too deeply", file=sys.stderr)
      return EX_SOFTWARE

  return EX_OK


def run_script_file(script_path: str, mode: str = "run", debug: bool = False,
                    use_color: bool = True) -> int:
  """Run a Lox script file"""
  source = read_source(script_path)
  if source is None:
    return EX_NOINPUT
  if debug:
    print(f"Running {script_path} ({mode})...")
  return run_source(source, script_path, mode, debug, use_color)


def setup_readline():
  """Setup readline with history and auto-completion"""
  if not READLINE_AVAILABLE:
    return

  history_file = os.path.expanduser(HISTORY_FILE)
  try:
    readline.read_history_file(history_file)
  except OSError:
    pass  # First time, no history yet, or permission denied

  readline.set_history_length(1000)

  completions = sorted(KEYWORDS) + [":tokens", ":parse", ":help", "exit"]

  def completer(text, state):
    options = [cmd for cmd in completions if cmd.startswith(text)]
    if state < len(options):
      return options[state]
    return None

  readline.set_completer(completer)
  readline.parse_and_bind("tab: complete")

  import atexit
  atexit.register(readline.write_history_file, history_file)


def run_line(code: str, debug: bool = False, use_color: bool = True) -> None:
  """Handle one REPL line; errors are reported and never end the session"""
  parser = create_debug_parser() if debug else create_parser()
  interpreter = create_debug_interpreter() if debug else create_interpreter()

  if code.startswith(":tokens "):
    source = code[len(":tokens "):]
  elif code.startswith(":parse "):
    source = code[len(":parse "):]
  else:
    source = code
  handler = LoxErrorHandler(source, "<stdin>", use_color)

  try:
    if code.startswith(":tokens "):
      print(" ".join(str(token) for token in parser.tokenize(source)))
    elif code.startswith(":parse "):
      print(print_ast(parser.parse_expression(source)))
    else:
      print(interpreter.interpret(parser.parse_expression(source)))
  except LoxError as e:
    report(handler, [e])
  except RecursionError:
    print("Error: expression nested too deeply", file=sys.stderr)


def run_interactive_mode(debug: bool = False, use_color: bool = True) -> None:
  """Run Lox in interactive mode, one expression per line"""
  print(f"{VERSION} - Interactive Mode")
  print("Type 'exit' to quit, ':help' for commands")
  if debug:
    print("Debug mode enabled")

  setup_readline()

  while True:
    try:
      code = input("> ")
    except (KeyboardInterrupt, EOFError):
      print("\nGoodbye!")
      break

    code = code.strip()
    if code == "exit":
      break
    if not code:
      continue

    if code == ":help":
      print("REPL Commands:")
      print("  :tokens <src>     - Show scanned tokens")
      print("  :parse <expr>     - Show parsed tree")
      print("  :help             - Show this help")
      print("  exit              - Exit REPL")
      print()
      print("Expressions:")
      print("  1 + 2 * 3         - Arithmetic")
      print("  \"a\" + \"b\"         - String concatenation")
      print("  !(1 < 2) == false - Comparison and logic")
      continue

    run_line(code, debug, use_color)


def main(argv: Optional[List[str]] = None) -> None:
  """Main entry point for Lox"""
  arg_parser = create_arg_parser()
  args = arg_parser.parse_args(argv)
  use_color = not args.no_color

  if len(args.scripts) > 1:
    print("Usage: lox [script]", file=sys.stderr)
    sys.exit(EX_USAGE)

  if args.scripts:
    mode = "tokens" if args.tokens else "parse" if args.parse else "run"
    sys.exit(run_script_file(args.scripts[0], mode, args.debug, use_color))

  run_interactive_mode(debug=args.debug, use_color=use_color)


if __name__ == "__main__":
  main()
