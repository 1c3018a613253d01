# caprule/host/parser.py
"""caprule 호스트 파서: 플러그인이 기대하는 최소한의 파서 객체.

특징
----
- 규칙 테이블(`rules`): 이름 → `fn(parser) -> Optional[Node]`, **등록 순서 유지**
  - 같은 이름을 다시 `set` 하면 함수만 교체(마지막 등록이 이김, 순서는 유지)
- 패턴 레지스트리(`regex`): 인스턴스마다 독립된 dict (전역 공유 없음)
- 입력 커서: 절대 오프셋 + 1-based 행/열

파싱 루프
---------
  1) 남은 입력이 있는 동안 규칙을 등록 순서대로 시도
  2) 규칙이 노드를 돌려주면 `prev()` 아래에 붙임(이미 부모가 있으면 그대로)
  3) 노드 없이 입력만 소비한 규칙도 진행으로 간주(공백 스킵 등)
  4) 아무 규칙도 진행하지 못하면 → SyntaxError

API
---
- `define(name, fn)`     : `fn`을 인스턴스 메서드로 설치(플러그인용)
- `set(type, fn)` / `get(type)`: 규칙 등록/조회
- `position()`           : 현재 위치를 잡고, 노드에 Span을 찍는 함수를 반환
- `match(pattern)`       : 커서 위치의 남은 입력에 매치, 성공 시 소비
- `node(pos, type, val)` : 노드 생성 + 위치 스탬프
- `prev()` / `push(node)` / `pop(type)`: 노드 스택
- `apply(type)`          : 규칙 하나를 실행하고 결과 노드를 트리에 붙임
- `parse(text)`          : 전체 입력을 파싱하여 루트 노드 반환
"""

from __future__ import annotations
import re as _stdre
import types
from typing import Callable, Dict, List, Optional, Union

import regex as re

from .ast import Location, Node, Span

Rule = Callable[["Parser"], Optional[Node]]
Stamp = Callable[[Node], Node]

# --------- Helpers ---------

_FLAG_MAP = {
    'i': re.IGNORECASE,
    'm': re.MULTILINE,
    's': re.DOTALL,
    'x': re.VERBOSE,
    'A': re.ASCII,
}

PATTERN_TYPES = (type(re.compile("")), _stdre.Pattern)

def compile_pattern(pat: Union[str, "re.Pattern"], flags: str = "") -> "re.Pattern":
    """패턴 소스 문자열을 `regex`로 컴파일. 이미 컴파일된 패턴은 그대로 반환."""
    if isinstance(pat, PATTERN_TYPES):
        return pat
    f = 0
    for ch in flags:
        f |= _FLAG_MAP.get(ch, 0)
    return re.compile(pat, f)

def _line_bounds(src: str, pos: int):
    start = src.rfind("\n", 0, pos)
    start = 0 if start < 0 else start + 1
    end = src.find("\n", pos)
    end = len(src) if end < 0 else end
    return start, end

def _caret_snippet(src: str, pos: int) -> str:
    """해당 절대 오프셋 pos에 캐럿(^)을 찍은 스니펫을 생성."""
    start, end = _line_bounds(src, pos)
    line = src[start:end]
    caret = " " * (pos - start) + "^"
    return f"{line}\n{caret}"

# --------- Core implementation ---------

class Parser:
    def __init__(self, options: Optional[dict] = None):
        self.options = dict(options or {})
        self.rules: Dict[str, Rule] = {}
        self.regex: Dict[str, "re.Pattern"] = {}
        self.reset("")

    # ---- Input binding ----
    def reset(self, text: str) -> None:
        self.input = text
        self._i = 0
        self._line = 1
        self._col = 1
        self.ast = Node("root")
        self.stack: List[Node] = [self.ast]

    @property
    def rest(self) -> str:
        return self.input[self._i:]

    def location(self) -> Location:
        return Location(self._line, self._col, self._i)

    # ---- Extension API ----
    def define(self, name: str, fn: Callable) -> "Parser":
        setattr(self, name, types.MethodType(fn, self))
        return self

    def use(self, plugin: Callable[["Parser"], None]) -> "Parser":
        plugin(self)
        return self

    def set(self, type: str, fn: Rule) -> "Parser":
        self.rules[type] = fn
        return self

    def get(self, type: str) -> Rule:
        try:
            return self.rules[type]
        except KeyError:
            raise KeyError(f"undefined rule '{type}'")

    # ---- Primitives used by rules ----
    def position(self) -> Stamp:
        start = self.location()

        def stamp(node: Node) -> Node:
            node.position = Span(start, self.location())
            return node
        return stamp

    def match(self, pattern):
        """남은 입력의 앞부분에 패턴을 매치. 실패하면 None(소비 없음)."""
        m = compile_pattern(pattern).match(self.rest)
        if m is None:
            return None
        self._advance_text(m.group(0))
        return m

    def node(self, pos: Stamp, type: str, val: str = "") -> Node:
        return pos(Node(type, val))

    def prev(self) -> Node:
        return self.stack[-1]

    def push(self, node: Node) -> Node:
        if node.parent is None:
            self.prev().add_node(node)
        self.stack.append(node)
        return node

    def pop(self, type: str) -> Node:
        if len(self.stack) < 2 or self.stack[-1].type != type:
            loc = self.location()
            raise SyntaxError(
                f"Parse error: no open '{type}' to close at {loc.line}:{loc.column}\n"
                f"{_caret_snippet(self.input, self._i)}"
            )
        return self.stack.pop()

    # ---- Rule execution ----
    def apply(self, type: str) -> Optional[Node]:
        """규칙 하나를 실행. 노드가 나오면 `prev()` 아래에 붙이고 반환.

        노드가 아닌 반환값(매치 객체 등)은 무시하고 None을 돌려준다.
        """
        node = self.get(type)(self)
        if not isinstance(node, Node):
            return None
        if node.parent is None:
            self.prev().add_node(node)
        return node

    def parse(self, text: str) -> Node:
        self.reset(text)
        while self._i < len(self.input):
            self._step()
        if len(self.stack) > 1:
            raise SyntaxError(f"Parse error: unclosed '{self.stack[-1].type}' at end of input")
        return self.ast

    # ---- Internals ----
    def _step(self) -> None:
        for name in list(self.rules):
            start = self._i
            node = self.apply(name)
            if self._i > start:
                return
            if node is not None:
                raise SyntaxError(f"Parse error: rule '{name}' produced a node without consuming input")
        loc = self.location()
        raise SyntaxError(
            f"Parse error: unexpected character {self.input[self._i]!r} at {loc.line}:{loc.column}\n"
            f"{_caret_snippet(self.input, self._i)}"
        )

    def _advance_text(self, consumed: str) -> None:
        """소비된 텍스트 길이만큼 내부 포인터/행렬을 갱신."""
        n = len(consumed)
        seg = consumed
        while True:
            j = seg.find("\n")
            if j == -1:
                break
            self._line += 1
            self._col = 1
            seg = seg[j+1:]
        self._col += len(seg)
        self._i += n
