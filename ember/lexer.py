"""Tokenizer for Ember source text.

The scanner is lark's basic lexer driven by the terminal definitions in
`EMBER_TOKENS`, built in lark's lexer-only mode. The grammar's single
rule just lists the token set; parsing is done by `ember.parser`. Keywords are declared as string terminals: when lark sees
that a keyword string is also a valid IDENT it retags matching IDENT
tokens instead of treating them as separate alternatives.
"""

from __future__ import annotations

from typing import List

from lark import Lark, Token


EMBER_TOKENS = r"""
    start: _token*

    _token: IDENT | INT | STRING | ILLEGAL
          | ASSIGN | PLUS | MINUS | ASTERISK | SLASH | PERCENT | BANG
          | EQ | NOT_EQ | LT | GT | LTE | GTE | OR | AND
          | COMMA | SEMICOLON | LPAREN | RPAREN | LBRACE | RBRACE | LBRACKET | RBRACKET
          | FUNCTION | LET | TRUE | FALSE | IF | ELSE | RETURN | ERR | WHILE

    // Keywords
    FUNCTION: "fn"
    LET: "let"
    TRUE: "true"
    FALSE: "false"
    IF: "if"
    ELSE: "else"
    RETURN: "ret"
    ERR: "err"
    WHILE: "while"

    // Literals
    IDENT: /[a-zA-Z_]+/
    INT: /[0-9]+/
    STRING: /"[^"]*"/

    // Operators
    EQ: "=="
    NOT_EQ: "!="
    LTE: "<="
    GTE: ">="
    OR: "||"
    AND: "&&"
    ASSIGN: "="
    PLUS: "+"
    MINUS: "-"
    ASTERISK: "*"
    SLASH: "/"
    PERCENT: "%"
    BANG: "!"
    LT: "<"
    GT: ">"

    // Delimiters
    COMMA: ","
    SEMICOLON: ";"
    LPAREN: "("
    RPAREN: ")"
    LBRACE: "{"
    RBRACE: "}"
    LBRACKET: "["
    RBRACKET: "]"

    // Anything the rules above cannot match
    ILLEGAL.-1: /./s

    WS: /[ \t\r\n]+/
    %ignore WS
    LINE_COMMENT: /\/\/[^\n]*/
    %ignore LINE_COMMENT
"""


EMBER_LEXER = Lark(
    EMBER_TOKENS,
    parser=None,
    lexer='basic',
)


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens terminated by an EOF token."""
    tokens = list(EMBER_LEXER.lex(source))
    if tokens:
        last = tokens[-1]
        line, column = last.end_line, last.end_column
    else:
        line, column = 1, 1
    tokens.append(Token('EOF', '', len(source), line, column))
    return tokens
