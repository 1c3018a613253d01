# caprule/host/facade.py
from __future__ import annotations
import types
from typing import Callable, Optional

from .ast import Node
from .parser import Parser


class Facade:
    """Top-level object owning a nested `Parser`."""
    def __init__(self, options: Optional[dict] = None):
        self.options = dict(options or {})
        self.parser = Parser(self.options)

    def define(self, name: str, fn: Callable) -> "Facade":
        setattr(self, name, types.MethodType(fn, self))
        return self

    def use(self, plugin: Callable[["Facade"], None]) -> "Facade":
        plugin(self)
        return self

    def parse(self, text: str) -> Node:
        return self.parser.parse(text)
