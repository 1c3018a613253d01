# caprule/registrar/rules.py
"""`capture` 규칙 등록기.

파서에 설치되는 `capture(type, matcher)` 메서드와, 정규식으로부터
규칙 함수를 만들어 내는 `pattern_rule`을 제공합니다.

- matcher가 callable → `parser.set(type, matcher)` 그대로 위임
- matcher가 패턴(컴파일된 정규식 또는 소스 문자열) → 레지스트리에 기록 후 생성된 규칙 등록
- 그 외 → ConfigurationError
"""

from __future__ import annotations
import logging
from typing import Optional

from ..host import Node, Parser
from ..host.parser import PATTERN_TYPES, Rule, compile_pattern

log = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Raised when the plugin is installed or used with invalid arguments."""


def pattern_rule(type: str, pattern) -> Rule:
    """Build a rule that turns one non-empty match of `pattern` into a `type` node.

    The rule returns the node and leaves attaching it to the host. A missing or
    zero-length match returns None: the rule simply did not apply.
    """
    def rule(parser: Parser) -> Optional[Node]:
        pos = parser.position()
        m = parser.match(pattern)
        if m is None or not m.group(0):
            return None
        node = parser.node(pos, type, m.group(0))
        node.define("match", m)
        return node
    rule.__name__ = f"capture_{type}"
    return rule


def _is_text_pattern(matcher) -> bool:
    # bytes patterns cannot match the str input
    if isinstance(matcher, PATTERN_TYPES):
        return isinstance(matcher.pattern, str)
    return isinstance(matcher, str)


def capture(parser: Parser, type: str, matcher, flags: str = "") -> Parser:
    """Register a rule named `type` on `parser` from a callback or a pattern.

    Installed as a method, so callers write `parser.capture("slash", r"^/")`.
    `flags` holds regex flag letters (`i`, `m`, `s`, `x`, `A`) for a pattern
    given as a source string. Returns the parser for chaining.
    """
    if not isinstance(type, str) or not type:
        raise ConfigurationError(f"expected a non-empty rule name, got {type!r}")

    if callable(matcher):
        if flags:
            raise ConfigurationError(f"capture {type!r}: flags need a pattern source string")
        log.debug("capture %r: callback rule", type)
        return parser.set(type, matcher)

    if not _is_text_pattern(matcher):
        raise ConfigurationError(
            f"capture {type!r}: expected a callable or a regular expression, "
            f"got {matcher.__class__.__name__}"
        )
    if flags and not isinstance(matcher, str):
        raise ConfigurationError(f"capture {type!r}: flags need a pattern source string")

    pattern = compile_pattern(matcher, flags)
    parser.regex[type] = pattern
    log.debug("capture %r: pattern rule %r", type, pattern.pattern)
    return parser.set(type, pattern_rule(type, pattern))
