# caprule/host/__init__.py
"""Minimal host parser for caprule.

This package provides:
- Output tree types (Node, Span, Location)
- A Parser with a rule table, a per-instance pattern registry and a
  sequential rule-trying parse loop
- A Facade owning a nested Parser

Plugins extend either object through `use(plugin)` and `define(name, fn)`.
"""

from .ast import Location, Span, Node
from .parser import Parser, compile_pattern
from .facade import Facade
