from minigo.reader.parser import lex, parse_expr, parse_file, TokenStream
from minigo.reader.positions import FileSet, Position

__all__ = ["lex", "parse_expr", "parse_file", "TokenStream", "FileSet", "Position"]
