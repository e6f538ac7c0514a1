"""Workflow parsing core.

This package turns YAML workflow text into typed ASTs.

It provides:
- a YAML decoder adapter with YAML 1.2 boolean resolution;
- declarative field mapping tables for every node kind;
- a total AST builder collecting diagnostics;
- a parser and a strict convenience entry point.
"""

from .builder import WorkflowBuilder
from .loader import WorkflowLoader, decode
from .parser import WorkflowParser, parse_or_throw, parse_workflow

__all__ = (
    'WorkflowBuilder',
    'WorkflowLoader',
    'WorkflowParser',
    'decode',
    'parse_or_throw',
    'parse_workflow',
)
