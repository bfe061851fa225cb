# Ember language package
# This package provides a parser and a tree-walking interpreter for the Ember language.
from .lexer import tokenize
from .parser import parse, parse_program
from .environment import Environment
from .errors import EmberError, ParseError, EvalError
from .interpreter import Interpreter, evaluate, evaluate_node, run_program

__all__ = [
    'tokenize',
    'parse',
    'parse_program',
    'Environment',
    'Interpreter',
    'evaluate',
    'evaluate_node',
    'run_program',
    'EmberError',
    'ParseError',
    'EvalError',
]
