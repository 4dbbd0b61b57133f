"""
Test configuration for the Lox expression core
"""

import pytest
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from parsing import create_parser
from interpreter import create_interpreter


@pytest.fixture
def parser():
  """Provide a fresh front end for each test"""
  return create_parser()


@pytest.fixture
def interpreter():
  return create_interpreter()


@pytest.fixture
def evaluate(parser, interpreter):
  """Parse and evaluate one expression"""
  def _evaluate(source):
    return interpreter.evaluate(parser.parse_expression(source))
  return _evaluate


@pytest.fixture
def examples_dir():
  """Get the examples directory path"""
  return project_root / "examples"
