"""
  Go subset Lexer and Parser

- Regex driven lexer with Go's automatic semicolon insertion
- Recursive descent parser emitting minigo.reader.ast nodes
- Binary operators use Go's five precedence levels

The parser accepts more than the evaluator runs (if, for, var, x++, unary
operators) so that unsupported constructs surface as evaluation errors with a
source line rather than as parse failures.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, NamedTuple, NoReturn, Optional

from minigo.errors import ParseError
from minigo.reader import ast
from minigo.reader.positions import FileSet, SourceFile


class Token(NamedTuple):
    kind: str  # ident, keyword, int, float, imag, char, string, op, eof
    value: str
    pos: int


KEYWORDS = frozenset({
    "break", "case", "chan", "const", "continue", "default", "defer", "else",
    "fallthrough", "for", "func", "go", "goto", "if", "import", "interface",
    "map", "package", "range", "return", "select", "struct", "switch", "type",
    "var",
})

OPERATORS = [
    "...", "<<=", ">>=", "&^=",
    "&&", "||", "<-", "++", "--", "==", "!=", "<=", ">=", ":=",
    "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "<<", ">>", "&^",
    "+", "-", "*", "/", "%", "&", "|", "^", "<", ">", "=", "!", "~",
    "(", ")", "[", "]", "{", "}", ",", ";", ".", ":",
]

_DECIMALS = r"[0-9](?:_?[0-9])*"
_EXPONENT = r"[eE][+-]?" + _DECIMALS
_FLOAT = (
    rf"(?:{_DECIMALS}\.(?:{_DECIMALS})?(?:{_EXPONENT})?"
    rf"|\.{_DECIMALS}(?:{_EXPONENT})?"
    rf"|{_DECIMALS}{_EXPONENT})"
)
_INT = r"(?:0[xX][0-9a-fA-F_]+|0[bB][01_]+|0[oO][0-7_]+|[0-9][0-9_]*)"

TOKEN_RE = re.compile(
    r"(?P<newline>\n)"
    r"|(?P<space>[ \t\r]+)"
    r"|(?P<comment>//[^\n]*)"  # single-line comment
    r"|(?P<ml_comment>/\*.*?\*/)"  # multi-line comment
    r"|(?P<bad_comment>/\*)"
    rf"|(?P<imag>(?:{_FLOAT}|{_INT})i)"
    rf"|(?P<float>{_FLOAT})"
    rf"|(?P<int>{_INT})"
    r"|(?P<char>'(?:\\.|[^\\'\n])+')"
    r'|(?P<string>"(?:\\.|[^\\"\n])*"|`[^`]*`)'
    r"|(?P<ident>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<op>" + "|".join(re.escape(op) for op in OPERATORS) + ")",
    re.DOTALL,
)

# Tokens after which a newline terminates the statement.
_SEMI_KINDS = frozenset({"ident", "int", "float", "imag", "char", "string"})
_SEMI_VALUES = frozenset({"break", "continue", "fallthrough", "return", "++", "--", ")", "]", "}"})

ASSIGN_OPS = frozenset({":=", "=", "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "<<=", ">>=", "&^="})

BINARY_PRECEDENCE: dict[str, int] = {
    "||": 1,
    "&&": 2,
    "==": 3, "!=": 3, "<": 3, "<=": 3, ">": 3, ">=": 3,
    "+": 4, "-": 4, "|": 4, "^": 4,
    "*": 5, "/": 5, "%": 5, "<<": 5, ">>": 5, "&": 5, "&^": 5,
}

UNARY_OPS = frozenset({"+", "-", "!", "^"})


def _where(source: str, offset: int, filename: str) -> str:
    line = source.count("\n", 0, offset) + 1
    column = offset - (source.rfind("\n", 0, offset) + 1) + 1
    return f"{filename or '-'}:{line}:{column}"


def lex(source: str, base: int = 0, filename: str = "") -> Iterator[Token]:
    """Token generator: yields Token(kind, value, pos) with pos = base + offset."""
    pos = 0
    n = len(source)
    last: Optional[Token] = None

    def needs_semi() -> bool:
        return last is not None and (
            last.kind in _SEMI_KINDS or (last.kind in ("keyword", "op") and last.value in _SEMI_VALUES)
        )

    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            if source[pos] in "\"`":
                raise ParseError(f"{_where(source, pos, filename)}: string literal not terminated")
            raise ParseError(f"{_where(source, pos, filename)}: unexpected character {source[pos]!r}")

        group = m.lastgroup
        text = m.group()
        start = pos
        pos = m.end()

        if group == "space":
            continue
        if group == "bad_comment":
            raise ParseError(f"{_where(source, start, filename)}: comment not terminated")
        if group in ("newline", "comment", "ml_comment"):
            if (group == "newline" or "\n" in text) and needs_semi():
                last = Token("op", ";", base + start)
                yield Token("op", ";", base + start)
            continue

        if group == "ident" and text in KEYWORDS:
            group = "keyword"
        last = Token(group, text, base + start)
        yield last

    if needs_semi():
        yield Token("op", ";", base + n)
    yield Token("eof", "", base + n)


class TokenStream:
    def __init__(self, token_iter: Iterable[Token], source_file: SourceFile | None = None):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []
        self.source_file = source_file

    # ------------------------
    # Token helpers
    # ------------------------
    def peek(self) -> Token:
        if not self.buffer:
            self.buffer.append(next(self.tokens, Token("eof", "", -1)))
        return self.buffer[0]

    def advance(self) -> Token:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, Token("eof", "", -1))

    def at(self, value: str) -> bool:
        tok = self.peek()
        return tok.kind in ("op", "keyword") and tok.value == value

    def expect(self, value: str) -> Token:
        if not self.at(value):
            self.error(f"expected {value!r}")
        return self.advance()

    def expect_ident(self) -> ast.Ident:
        tok = self.peek()
        if tok.kind != "ident":
            self.error("expected identifier")
        self.advance()
        return ast.Ident(tok.pos, tok.value)

    def expect_semi(self) -> None:
        if self.at(";"):
            self.advance()
        elif not (self.at(")") or self.at("}") or self.peek().kind == "eof"):
            self.error("expected ';' or newline")

    def error(self, message: str, tok: Token | None = None) -> NoReturn:
        tok = tok or self.peek()
        found = "EOF" if tok.kind == "eof" else repr(tok.value)
        where = str(self.source_file.position(tok.pos)) if self.source_file and tok.pos >= 0 else "-"
        raise ParseError(f"{where}: {message}, found {found}")

    # ------------------------
    # Declarations
    # ------------------------
    def parse_file(self, filename: str = "") -> ast.File:
        start = self.expect("package")
        package = self.expect_ident()
        self.expect_semi()

        imports: list[ast.ImportSpec] = []
        while self.at("import"):
            imports.extend(self.parse_import_decl())
            self.expect_semi()

        decls: list[ast.FuncDecl] = []
        while self.peek().kind != "eof":
            if self.at(";"):
                self.advance()
                continue
            if not self.at("func"):
                self.error("unsupported top-level declaration")
            decls.append(self.parse_func_decl())
            self.expect_semi()
        return ast.File(start.pos, filename, package, imports, decls)

    def parse_import_decl(self) -> list[ast.ImportSpec]:
        self.expect("import")
        if not self.at("("):
            return [self.parse_import_spec()]
        self.advance()
        specs = []
        while not self.at(")"):
            specs.append(self.parse_import_spec())
            self.expect_semi()
        self.expect(")")
        return specs

    def parse_import_spec(self) -> ast.ImportSpec:
        tok = self.peek()
        name = None
        if tok.kind == "ident":
            name = self.expect_ident()
        elif self.at("."):
            self.advance()
            name = ast.Ident(tok.pos, ".")
        path = self.peek()
        if path.kind != "string":
            self.error("expected import path")
        self.advance()
        return ast.ImportSpec(tok.pos, name, ast.BasicLit(path.pos, ast.LitKind.STRING, path.value))

    def parse_func_decl(self) -> ast.FuncDecl:
        start = self.expect("func")
        if self.at("("):
            self.error("methods are not supported")
        name = self.expect_ident()
        params = self.parse_parameters()
        results = self.parse_result()
        body = self.parse_block() if self.at("{") else None
        return ast.FuncDecl(start.pos, name, params, results, body)

    def parse_parameters(self) -> list[ast.Field]:
        self.expect("(")
        entries: list[tuple[Optional[ast.Ident], ast.Expr]] = []
        while not self.at(")"):
            entries.append(self.parse_param_entry())
            if not self.at(","):
                break
            self.advance()
        self.expect(")")

        if all(name is None for name, _ in entries):
            return [ast.Field(typ.pos, [], typ) for _, typ in entries]

        # Go groups names that precede a typed name: (a, b int, s string)
        fields: list[ast.Field] = []
        pending: list[ast.Ident] = []
        for name, typ in entries:
            if name is None:
                if not isinstance(typ, ast.Ident):
                    self.error("mixed named and unnamed parameters")
                pending.append(typ)
                continue
            pending.append(name)
            fields.append(ast.Field(pending[0].pos, pending, typ))
            pending = []
        if pending:
            self.error("mixed named and unnamed parameters")
        return fields

    def parse_param_entry(self) -> tuple[Optional[ast.Ident], ast.Expr]:
        if self.at("..."):
            self.error("variadic parameters are not supported")
        first = self.parse_type()
        if self.at(",") or self.at(")"):
            return None, first
        if not isinstance(first, ast.Ident):
            self.error("expected parameter name")
        return first, self.parse_type()

    def parse_result(self) -> list[ast.Field]:
        if self.at("("):
            return self.parse_parameters()
        if self.peek().kind == "ident":
            typ = self.parse_type()
            return [ast.Field(typ.pos, [], typ)]
        return []

    def parse_type(self) -> ast.Expr:
        if self.peek().kind != "ident":
            self.error("unsupported type")
        x: ast.Expr = self.expect_ident()
        if self.at("."):
            self.advance()
            x = ast.SelectorExpr(x.pos, x, self.expect_ident())
        return x

    # ------------------------
    # Statements
    # ------------------------
    def parse_block(self) -> ast.BlockStmt:
        start = self.expect("{")
        stmts = self.parse_stmt_list()
        self.expect("}")
        return ast.BlockStmt(start.pos, stmts)

    def parse_stmt_list(self) -> list[ast.Stmt]:
        stmts: list[ast.Stmt] = []
        while not self.at("}") and self.peek().kind != "eof":
            if self.at(";"):
                self.advance()
                continue
            stmts.append(self.parse_stmt())
            if not self.at("}"):
                self.expect_semi()
        return stmts

    def parse_stmt(self) -> ast.Stmt:
        tok = self.peek()
        if tok.kind == "keyword":
            if tok.value == "return":
                self.advance()
                results = [] if (self.at(";") or self.at("}")) else self.parse_expr_list()
                return ast.ReturnStmt(tok.pos, results)
            if tok.value == "if":
                return self.parse_if()
            if tok.value == "for":
                return self.parse_for()
            if tok.value == "var":
                return self.parse_var()
            self.error(f"unsupported statement {tok.value!r}")
        if self.at("{"):
            return self.parse_block()
        return self.parse_simple_stmt()

    def parse_simple_stmt(self) -> ast.Stmt:
        start = self.peek()
        lhs = self.parse_expr_list()
        tok = self.peek()
        if tok.kind == "op" and tok.value in ASSIGN_OPS:
            self.advance()
            return ast.AssignStmt(start.pos, lhs, tok.value, self.parse_expr_list())
        if len(lhs) > 1:
            self.error("expected 1 expression")
        if self.at("++") or self.at("--"):
            self.advance()
            return ast.IncDecStmt(start.pos, lhs[0], tok.value)
        return ast.ExprStmt(start.pos, lhs[0])

    def parse_if(self) -> ast.IfStmt:
        start = self.expect("if")
        init = None
        stmt = self.parse_simple_stmt()
        if self.at(";"):
            self.advance()
            init = stmt
            cond = self.parse_expr()
        elif isinstance(stmt, ast.ExprStmt):
            cond = stmt.x
        else:
            self.error("expected condition")
        body = self.parse_block()
        orelse: Optional[ast.Stmt] = None
        if self.at("else"):
            self.advance()
            if self.at("if"):
                orelse = self.parse_if()
            elif self.at("{"):
                orelse = self.parse_block()
            else:
                self.error("expected 'if' or block after else")
        return ast.IfStmt(start.pos, init, cond, body, orelse)

    def parse_for(self) -> ast.ForStmt:
        start = self.expect("for")
        init = cond = post = None
        if not self.at("{"):
            stmt = None if self.at(";") else self.parse_simple_stmt()
            if self.at(";"):
                self.advance()
                init = stmt
                if not self.at(";"):
                    cond = self.parse_expr()
                self.expect(";")
                if not self.at("{"):
                    post = self.parse_simple_stmt()
            elif isinstance(stmt, ast.ExprStmt):
                cond = stmt.x
            else:
                self.error("expected for loop condition")
        return ast.ForStmt(start.pos, init, cond, post, self.parse_block())

    def parse_var(self) -> ast.DeclStmt:
        start = self.expect("var")
        names = [self.expect_ident()]
        while self.at(","):
            self.advance()
            names.append(self.expect_ident())
        typ = None
        if not (self.at("=") or self.at(";") or self.at("}")):
            typ = self.parse_type()
        values: list[ast.Expr] = []
        if self.at("="):
            self.advance()
            values = self.parse_expr_list()
        return ast.DeclStmt(start.pos, names, typ, values)

    # ------------------------
    # Expressions
    # ------------------------
    def parse_expr_list(self) -> list[ast.Expr]:
        exprs = [self.parse_expr()]
        while self.at(","):
            self.advance()
            exprs.append(self.parse_expr())
        return exprs

    def parse_expr(self, min_prec: int = 1) -> ast.Expr:
        x = self.parse_unary()
        while True:
            tok = self.peek()
            prec = BINARY_PRECEDENCE.get(tok.value, 0) if tok.kind == "op" else 0
            if prec < min_prec:
                return x
            self.advance()
            y = self.parse_expr(prec + 1)
            x = ast.BinaryExpr(x.pos, x, tok.value, y)

    def parse_unary(self) -> ast.Expr:
        tok = self.peek()
        if tok.kind == "op" and tok.value in UNARY_OPS:
            self.advance()
            return ast.UnaryExpr(tok.pos, tok.value, self.parse_unary())
        return self.parse_primary()

    def parse_primary(self) -> ast.Expr:
        x = self.parse_operand()
        while True:
            if self.at("."):
                self.advance()
                x = ast.SelectorExpr(x.pos, x, self.expect_ident())
            elif self.at("("):
                self.advance()
                args: list[ast.Expr] = []
                while not self.at(")"):
                    args.append(self.parse_expr())
                    if not self.at(","):
                        break
                    self.advance()
                self.expect(")")
                x = ast.CallExpr(x.pos, x, args)
            else:
                return x

    def parse_operand(self) -> ast.Expr:
        tok = self.peek()
        if tok.kind in ("int", "float", "imag", "char", "string"):
            self.advance()
            return ast.BasicLit(tok.pos, ast.LitKind(tok.kind.upper()), tok.value)
        if tok.kind == "ident":
            return self.expect_ident()
        if self.at("("):
            self.advance()
            x = self.parse_expr()
            self.expect(")")
            return ast.ParenExpr(tok.pos, x)
        self.error("expected operand")


def parse_file(fset: FileSet, filename: str, source: str | None = None) -> ast.File:
    """Read (when `source` is None), register and parse one source file."""
    if source is None:
        with open(filename, encoding="utf-8") as fh:
            source = fh.read()
    sf = fset.add_file(filename, source)
    stream = TokenStream(lex(source, sf.base, filename), sf)
    return stream.parse_file(filename)


def parse_expr(source: str, fset: FileSet | None = None, filename: str = "<expr>") -> ast.Expr:
    fset = fset or FileSet()
    sf = fset.add_file(filename, source)
    stream = TokenStream(lex(source, sf.base, filename), sf)
    expr = stream.parse_expr()
    stream.expect_semi()
    if stream.peek().kind != "eof":
        stream.error("unexpected trailing input")
    return expr
