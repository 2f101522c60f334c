"""
minipas Parser

Parses minipas source into a syntax tree of `ASTNode` instances.

The parser is a hand-written recursive-descent parser with exactly one token of
lookahead. It pulls tokens from a `Lexer` on demand, implements one method per
grammar rule, and builds the tree bottom-up as each rule resolves.

Grammar
-------
    Program   -> 'program' ID ';' Block '.'
    Block     -> 'begin' StmtList 'end'
    StmtList  -> ε | Stmt (';' Stmt)*            (a ';' right before 'end' is allowed)
    Stmt      -> AssignStmt | IfStmt | WhileStmt | BreakStmt | Block
    AssignStmt-> ID ':=' Expr
    IfStmt    -> 'if' Cond 'then' (Block|Stmt) ['else' (Block|Stmt)]
    WhileStmt -> 'while' Cond 'do' (Block|Stmt)
    BreakStmt -> 'break'
    Expr      -> Term (('+'|'-') Term)*
    Term      -> Factor (('*'|'/'|'mod') Factor)*
    Factor    -> NUM | ID | '(' Expr ')'
    Cond      -> 'not' Cond
               | '(' Expr relop Expr ')' (('and'|'or') Cond)*
               | Expr relop Expr (('and'|'or') Cond)*

Parser Behavior
---------------
- Fail-fast: the first syntax error raises `ParseError` and aborts the parse.
  Nothing inside the parser catches it, so no partial tree is ever returned.
- `(` at the start of a condition always opens a parenthesized comparison. The
  inner expression is parsed first and the following token decides the outcome.
  No tokens are ever pushed back.

Entry Points
------------
- `Parser(lexer).parse()`: Parse a full program, raising `ParseError` on failure.
- `parse_source(source)`: Parse source text into a `ParseResult` holding either
  the tree or the error.

Raises
------
ParseError
    A `SyntaxError` subclass carrying the message, the expected construct, the
    offending token text, and its line/column.
"""

from __future__ import annotations

import logging

from minipas.minipas_ast import ASTNode
from minipas.minipas_constants import (
    ASSIGN,
    BEGIN,
    BREAK,
    DEFAULT_EXPECTED_LABEL,
    DO,
    DOT,
    ELSE,
    END,
    EOF,
    EXPECTED_LABELS,
    ID,
    IF,
    LABEL_ASSIGN,
    LABEL_BLOCK,
    LABEL_BREAK,
    LABEL_COMPOUND,
    LABEL_CONDITION,
    LABEL_IF,
    LABEL_KEYWORD,
    LABEL_LOGICAL,
    LABEL_NOT,
    LABEL_NUMBER,
    LABEL_PROGRAM,
    LABEL_PROGRAM_NAME,
    LABEL_RELOP,
    LABEL_STMT_LIST,
    LABEL_TARGET,
    LABEL_VARIABLE,
    LABEL_WHILE,
    LPAREN,
    NOT,
    NUM,
    PROGRAM,
    RELOP,
    RPAREN,
    SEMICOLON,
    THEN,
    WHILE,
    additive_ops,
    logical_ops,
    multiplicative_ops,
)
from minipas.minipas_lexer import CharacterStream, Lexer, Token

log = logging.getLogger(__name__)


def format_error(message: str, token: Token) -> str:
    """Renders a diagnostic with the position and text of the offending token.

    Example:
        Error: expected 'then' (at line 3, column 12, found 'do')
    """
    found = "end of input" if token.kind == EOF else f"'{token.text}'"
    return f"Error: {message} (at line {token.line}, column {token.col}, found {found})"


class ParseError(SyntaxError):
    """Raised on the first syntax error in a minipas program.

    Attributes:
        message (str): Explanation of what was wrong or expected.
        expected (str | None): Human-readable label of the expected construct, if any.
        found (str): Text of the offending token ('' at end of input).
        kind (str): Kind of the offending token.
        line (int): 1-based line of the offending token.
        col (int): 1-based column of the offending token.
    """

    def __init__(self, message: str, token: Token, expected: str | None = None):
        super().__init__(format_error(message, token))
        self.message = message
        self.expected = expected
        self.found = token.text
        self.kind = token.kind
        self.line = token.line
        self.col = token.col


class Parser:
    """
    minipas Parser Class

    Drives a Lexer one token at a time and turns the token stream into a syntax
    tree. The lookahead token is primed at construction.

    Attributes
    ----------
    lexer : Lexer
        Source of tokens.
    lookahead : Token
        The single unconsumed token the parser inspects before choosing a rule.

    Methods
    -------
    parse() -> ASTNode
        Parse a complete program and require end of input after it.
    parse_program() -> ASTNode
    parse_block() -> ASTNode
    parse_statement_list() -> ASTNode
    parse_statement() -> ASTNode
    parse_assignment() -> ASTNode
    parse_if() -> ASTNode
    parse_loop_while() -> ASTNode
    parse_break() -> ASTNode
    parse_expression() -> ASTNode
    parse_term() -> ASTNode
    parse_factor() -> ASTNode
    parse_condition() -> ASTNode

    Raises
    ------
    ParseError
        On the first token that does not fit the grammar.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self.lookahead: Token = lexer.next_token()

    def current(self) -> Token:
        return self.lookahead

    def advance(self) -> Token:
        """Consumes the lookahead, pulls the next token, and returns the consumed one."""
        tok = self.lookahead
        self.lookahead = self.lexer.next_token()
        return tok

    def check(self, kind: str) -> bool:
        return self.lookahead.kind == kind

    def error(self, message: str, expected: str | None = None) -> ParseError:
        return ParseError(message, self.lookahead, expected)

    def expect(self, kind: str) -> Token:
        if self.lookahead.kind == kind:
            return self.advance()
        label = EXPECTED_LABELS.get(kind, DEFAULT_EXPECTED_LABEL)
        raise self.error(f"expected '{label}'", expected=label)

    def parse(self) -> ASTNode:
        """Parse a full program; any token after the final '.' is an error."""
        log.debug("Parse started at %r", self.lookahead)
        try:
            root = self.parse_program()
            if not self.check(EOF):
                raise self.error("unexpected content after program end", expected="end of input")
        except ParseError as e:
            log.debug("Parse failed at line %d, col %d: %s", e.line, e.col, e.message)
            raise
        log.debug("Parse finished")
        return root

    def parse_program(self) -> ASTNode:
        node = ASTNode(LABEL_PROGRAM)

        if not self.check(PROGRAM):
            raise self.error("program must start with the 'program' keyword", expected="program")
        node.add(ASTNode(LABEL_KEYWORD + self.expect(PROGRAM).text))

        if not self.check(ID):
            raise self.error("'program' must be followed by the program name", expected="identifier")
        node.add(ASTNode(LABEL_PROGRAM_NAME + self.expect(ID).text))

        if not self.check(SEMICOLON):
            raise self.error("program name must be followed by a semicolon", expected="semicolon")
        self.expect(SEMICOLON)

        node.add(self.parse_block())

        if not self.check(DOT):
            raise self.error("program must end with a period", expected="period")
        self.expect(DOT)

        return node

    def parse_block(self) -> ASTNode:
        node = ASTNode(LABEL_BLOCK)
        self.expect(BEGIN)
        node.add(self.parse_statement_list())
        self.expect(END)
        return node

    def parse_statement_list(self) -> ASTNode:
        node = ASTNode(LABEL_STMT_LIST)
        if self.check(END):
            return node
        node.add(self.parse_statement())
        while self.check(SEMICOLON):
            self.advance()
            if self.check(END):
                break
            node.add(self.parse_statement())
        return node

    def parse_statement(self) -> ASTNode:
        kind = self.lookahead.kind
        if kind == ID:
            return self.parse_assignment()
        if kind == IF:
            return self.parse_if()
        if kind == WHILE:
            return self.parse_loop_while()
        if kind == BREAK:
            return self.parse_break()
        if kind == BEGIN:
            return ASTNode(LABEL_COMPOUND, [self.parse_block()])
        if kind == NUM:
            raise self.error(
                "statement cannot start with a number; likely a malformed assignment target",
                expected="identifier",
            )
        raise self.error(
            "expected an assignment, if, while or break statement, or a block",
            expected="statement",
        )

    def parse_branch(self) -> ASTNode:
        """Body of `then`, `else`, or `do`: a Block on `begin`, otherwise one statement."""
        if self.check(BEGIN):
            return self.parse_block()
        return self.parse_statement()

    def parse_assignment(self) -> ASTNode:
        node = ASTNode(LABEL_ASSIGN)
        if not self.check(ID):
            raise self.error("assignment target must be an identifier", expected="identifier")
        node.add(ASTNode(LABEL_TARGET + self.expect(ID).text))
        self.expect(ASSIGN)
        node.add(self.parse_expression())
        return node

    def parse_if(self) -> ASTNode:
        node = ASTNode(LABEL_IF)
        self.expect(IF)
        node.add(self.parse_condition())
        self.expect(THEN)
        node.add(self.parse_branch())
        if self.check(ELSE):
            self.expect(ELSE)
            node.add(self.parse_branch())
        return node

    def parse_loop_while(self) -> ASTNode:
        node = ASTNode(LABEL_WHILE)
        self.expect(WHILE)
        node.add(self.parse_condition())
        self.expect(DO)
        node.add(self.parse_branch())
        return node

    def parse_break(self) -> ASTNode:
        self.expect(BREAK)
        return ASTNode(LABEL_BREAK)

    def parse_expression(self) -> ASTNode:
        node = self.parse_term()
        while self.lookahead.kind in additive_ops:
            op_tok = self.advance()
            node = ASTNode(op_tok.text, [node, self.parse_term()])
        return node

    def parse_term(self) -> ASTNode:
        node = self.parse_factor()
        while self.lookahead.kind in multiplicative_ops:
            op_tok = self.advance()
            node = ASTNode(op_tok.text, [node, self.parse_factor()])
        return node

    def parse_factor(self) -> ASTNode:
        if self.check(NUM):
            return ASTNode(LABEL_NUMBER + self.advance().text)
        if self.check(ID):
            return ASTNode(LABEL_VARIABLE + self.advance().text)
        if self.check(LPAREN):
            self.expect(LPAREN)
            node = self.parse_expression()
            self.expect(RPAREN)
            return node
        raise self.error(
            "expected a number, variable, or parenthesized expression",
            expected="number, variable, or parenthesized expression",
        )

    def parse_condition(self) -> ASTNode:
        if self.check(NOT):
            node = ASTNode(LABEL_NOT + self.advance().text)
            node.add(self.parse_condition())
            return node

        node = ASTNode(LABEL_CONDITION)
        if self.check(LPAREN):
            self.expect(LPAREN)
            left = self.parse_expression()
            if self.check(RELOP):
                node.add(left)
                node.add(ASTNode(LABEL_RELOP + self.advance().text))
                node.add(self.parse_expression())
            elif self.check(RPAREN):
                raise self.error(
                    "parenthesized condition must contain a relational operator",
                    expected="relational operator",
                )
            else:
                raise self.error("malformed parenthesized condition", expected="relational operator")
            self.expect(RPAREN)
        else:
            node.add(self.parse_expression())
            if not self.check(RELOP):
                raise self.error("condition missing relational operator", expected="relational operator")
            node.add(ASTNode(LABEL_RELOP + self.advance().text))
            node.add(self.parse_expression())

        return self.parse_logical_tail(node)

    def parse_logical_tail(self, node: ASTNode) -> ASTNode:
        """Folds `and`/`or` suffixes, each time making the condition so far the left child."""
        while self.lookahead.kind in logical_ops:
            op_tok = self.advance()
            node = ASTNode(LABEL_LOGICAL + op_tok.text, [node, self.parse_condition()])
        return node


class ParseResult:
    """Outcome of `parse_source`: exactly one of `tree` or `error` is set.

    Attributes:
        tree (ASTNode | None): The program tree on success.
        error (ParseError | None): The first syntax error on failure.
    """

    def __init__(self, tree: ASTNode | None = None, error: ParseError | None = None):
        if (tree is None) == (error is None):
            raise ValueError("ParseResult needs exactly one of tree or error")
        self.tree = tree
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    def __repr__(self) -> str:
        if self.error is not None:
            return f"ParseResult(error={str(self.error)!r})"
        return f"ParseResult(tree={self.tree!r})"


def parse_source(source: str) -> ParseResult:
    """Parse a whole source text, collapsing the outcome to a tree or an error."""
    parser = Parser(Lexer(CharacterStream(source)))
    try:
        return ParseResult(tree=parser.parse())
    except ParseError as e:
        return ParseResult(error=e)
    except RecursionError:
        log.debug("Recursion limit hit at %r", parser.lookahead)
        return ParseResult(error=ParseError("program is nested too deeply", parser.lookahead))


__all__ = ["ParseError", "ParseResult", "Parser", "format_error", "parse_source"]
