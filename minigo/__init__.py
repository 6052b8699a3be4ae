# minigo: a tree-walking interpreter for a small, dynamically typed subset of Go.
#
# Layout:
# - reader:     lexer, parser and source positions (source text -> syntax tree)
# - types:      runtime values, callables and the lexical scope
# - evaluation: statement/expression dispatch and call resolution
# - modules:    host packages (fmt, strings) importable from programs
# - interpreter: the driver selecting and running an entry point

import logging

from minigo.errors import MinigoError
from minigo.interpreter import Interpreter
from minigo.reader import FileSet, parse_file

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["Interpreter", "FileSet", "parse_file", "MinigoError", "__version__"]
