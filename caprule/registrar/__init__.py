# caprule/registrar/__init__.py
"""Plugin that adds a `capture` method to a caprule `Parser` or `Facade`.

    from caprule.host import Parser
    from caprule import capture

    parser = Parser().use(capture())
    parser.capture("slash", r"^/").capture("comma", r"^,")
    ast = parser.parse("/,")
"""

from __future__ import annotations
import enum
import logging
from typing import Callable, Optional

from ..host import Facade, Parser
from .rules import ConfigurationError, capture as capture_rule, pattern_rule

log = logging.getLogger(__name__)


class HostKind(enum.Enum):
    FACADE = "facade"
    PARSER = "parser"

    @classmethod
    def resolve(cls, host, kind: Optional["HostKind"] = None) -> "HostKind":
        """Decide the host kind once; exactly one kind must apply to `host`."""
        kinds = [k for k in cls if k.applies_to(host)]
        if not kinds:
            raise ConfigurationError("expected an instance of Facade or Parser")
        if len(kinds) > 1:
            raise ConfigurationError("expected an instance of Facade or Parser, not both")
        if kind is not None and kind is not kinds[0]:
            raise ConfigurationError(
                f"host kind mismatch: expected {kind.value}, got {kinds[0].value}"
            )
        return kinds[0]

    def applies_to(self, host) -> bool:
        return isinstance(host, Facade if self is HostKind.FACADE else Parser)


def _forward(facade: Facade, *args, **kwargs):
    return facade.parser.capture(*args, **kwargs)


def capture(options: Optional[dict] = None) -> Callable:
    """Return a setup function installing `capture` on a facade or a parser.

    `options` is reserved and currently ignored.
    """
    def install(host, kind: Optional[HostKind] = None) -> None:
        resolved = HostKind.resolve(host, kind)

        if resolved is HostKind.FACADE:
            host.parser.define("capture", capture_rule)
            host.define("capture", _forward)
        else:
            host.define("capture", capture_rule)
        log.debug("installed capture on %s", resolved.value)
    return install


__all__ = ["capture", "capture_rule", "pattern_rule", "HostKind", "ConfigurationError"]
