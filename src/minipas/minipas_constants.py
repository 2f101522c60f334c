"""
Language tables shared by the minipas lexer and parser.

Token kinds are plain strings. The lexer produces them, the parser dispatches on
them, and the error formatter maps them to human-readable labels.

Exports:
    - keyword_map: source spelling -> keyword token kind
    - single_char_tokens: one-character operators and punctuation
    - relational_operators: every spelling the lexer classifies as RELOP
    - EXPECTED_LABELS: token kind -> label used in "expected ..." diagnostics
    - TOKEN_KINDS: the closed set of token kinds
"""

# Keywords
PROGRAM = "PROGRAM"
BEGIN = "BEGIN"
END = "END"
IF = "IF"
THEN = "THEN"
ELSE = "ELSE"
WHILE = "WHILE"
DO = "DO"
BREAK = "BREAK"
AND = "AND"
OR = "OR"
NOT = "NOT"
MOD = "MOD"

# Literals
ID = "ID"
NUM = "NUM"

# Operators
PLUS = "PLUS"
MINUS = "MINUS"
MUL = "MUL"
DIV = "DIV"
ASSIGN = "ASSIGN"
RELOP = "RELOP"

# Punctuation
LPAREN = "LPAREN"
RPAREN = "RPAREN"
SEMICOLON = "SEMICOLON"
DOT = "DOT"

UNKNOWN = "UNKNOWN"
EOF = "EOF"

keyword_map: dict[str, str] = {
    "program": PROGRAM,
    "begin": BEGIN,
    "end": END,
    "if": IF,
    "then": THEN,
    "while": WHILE,
    "do": DO,
    "and": AND,
    "or": OR,
    "not": NOT,
    "else": ELSE,
    "break": BREAK,
    "mod": MOD,
}

single_char_tokens: dict[str, str] = {
    "+": PLUS,
    "-": MINUS,
    "*": MUL,
    "/": DIV,
    "(": LPAREN,
    ")": RPAREN,
    ";": SEMICOLON,
    ".": DOT,
}

relational_operators: frozenset[str] = frozenset({"=", "<>", "<", "<=", ">", ">=", "!="})

additive_ops: frozenset[str] = frozenset({PLUS, MINUS})
multiplicative_ops: frozenset[str] = frozenset({MUL, DIV, MOD})
logical_ops: frozenset[str] = frozenset({AND, OR})

TOKEN_KINDS: frozenset[str] = frozenset(
    set(keyword_map.values())
    | set(single_char_tokens.values())
    | {ID, NUM, ASSIGN, RELOP, UNKNOWN, EOF}
)

EXPECTED_LABELS: dict[str, str] = {
    PROGRAM: "program",
    BEGIN: "begin",
    END: "end",
    SEMICOLON: "semicolon",
    DOT: "period",
    ID: "identifier",
    ASSIGN: ":=",
    IF: "if",
    THEN: "then",
    WHILE: "while",
    DO: "do",
    ELSE: "else",
    BREAK: "break",
    PLUS: "+",
    MINUS: "-",
    MUL: "*",
    DIV: "/",
    MOD: "mod",
    LPAREN: "(",
    RPAREN: ")",
    RELOP: "relational operator",
}
DEFAULT_EXPECTED_LABEL = "specific symbol"

# Node labels (prefixed labels are completed with the token text)
LABEL_PROGRAM = "Program"
LABEL_KEYWORD = "Keyword: "
LABEL_PROGRAM_NAME = "Program name: "
LABEL_BLOCK = "Block"
LABEL_STMT_LIST = "Statement list"
LABEL_COMPOUND = "Compound statement"
LABEL_ASSIGN = "Assignment"
LABEL_TARGET = "Target: "
LABEL_IF = "If statement"
LABEL_WHILE = "While statement"
LABEL_BREAK = "Break statement"
LABEL_NUMBER = "Number: "
LABEL_VARIABLE = "Variable: "
LABEL_CONDITION = "Condition"
LABEL_RELOP = "Relational operator: "
LABEL_NOT = "Not: "
LABEL_LOGICAL = "Logical operator: "

BOM = "\ufeff"
