# caprule/__init__.py
"""caprule: declare parser rules from a label and a regex or a callback."""

from .host import Facade, Node, Parser
from .registrar import ConfigurationError, HostKind, capture

__version__ = "0.1.0"
