"""
Tests for installing the capture plugin on facades and parsers.
"""

import logging

import pytest

from caprule import capture
from caprule.host import Facade, Parser
from caprule.registrar import ConfigurationError, HostKind


class TestHostKind:

    def test_resolve_facade(self):
        assert HostKind.resolve(Facade()) is HostKind.FACADE

    def test_resolve_parser(self):
        assert HostKind.resolve(Parser()) is HostKind.PARSER

    def test_resolve_other(self):
        with pytest.raises(ConfigurationError, match="Facade or Parser"):
            HostKind.resolve(object())

    def test_resolve_both_kinds_fails(self):
        """An object that is both a facade and a parser is ambiguous"""
        class Hybrid(Facade, Parser):
            pass

        with pytest.raises(ConfigurationError, match="not both"):
            HostKind.resolve(Hybrid())

    def test_resolve_with_explicit_kind(self):
        assert HostKind.resolve(Parser(), HostKind.PARSER) is HostKind.PARSER
        with pytest.raises(ConfigurationError, match="mismatch"):
            HostKind.resolve(Parser(), HostKind.FACADE)

    def test_applies_to(self):
        assert HostKind.FACADE.applies_to(Facade())
        assert not HostKind.FACADE.applies_to(Parser())
        assert HostKind.PARSER.applies_to(Parser())


class TestInstall:

    def test_returns_setup_function(self):
        install = capture()
        assert callable(install)
        assert install(Parser()) is None

    def test_options_are_ignored(self):
        p = Parser().use(capture({"anything": True}))
        p.capture("slash", r"^/")
        assert [n.type for n in p.parse("/").nodes] == ["slash"]

    def test_parser_gets_method(self):
        p = Parser()
        assert not hasattr(p, "capture")
        capture()(p)
        assert callable(p.capture)

    def test_facade_gets_method_and_parser_too(self):
        f = Facade()
        capture()(f)
        assert callable(f.capture)
        assert callable(f.parser.capture)

    def test_invalid_host(self):
        """Neither a facade nor a parser: fail without touching the object"""
        class Thing:
            pass

        thing = Thing()
        with pytest.raises(ConfigurationError, match="expected an instance of Facade or Parser"):
            capture()(thing)
        assert vars(thing) == {}

    def test_install_on_both_kinds_leaves_host_untouched(self):
        class Hybrid(Facade, Parser):
            pass

        host = Hybrid()
        with pytest.raises(ConfigurationError, match="not both"):
            capture()(host)
        assert not hasattr(host, "capture")
        assert not hasattr(host.parser, "capture")

    def test_explicit_kind(self):
        p = Parser()
        capture()(p, HostKind.PARSER)
        assert callable(p.capture)

    def test_kind_mismatch_leaves_host_untouched(self):
        f = Facade()
        with pytest.raises(ConfigurationError, match="mismatch"):
            capture()(f, HostKind.PARSER)
        assert not hasattr(f, "capture")
        assert not hasattr(f.parser, "capture")

    def test_configuration_error_is_runtime_error(self):
        assert issubclass(ConfigurationError, RuntimeError)

    def test_install_logs_at_debug(self, caplog):
        caplog.set_level(logging.DEBUG, logger="caprule")
        Facade().use(capture())
        assert "installed capture on facade" in caplog.text


class TestFacadeForwarding:

    def test_forward_returns_parser(self, facade):
        assert facade.capture("slash", r"^/") is facade.parser

    def test_forward_matches_direct_call(self):
        """Calling through the facade registers the same rules as the parser method"""
        via_facade = Facade().use(capture())
        direct = Facade().use(capture())

        via_facade.capture("slash", r"^/").capture("comma", r"^,")
        direct.parser.capture("slash", r"^/").capture("comma", r"^,")

        assert list(via_facade.parser.rules) == list(direct.parser.rules)
        assert {k: v.pattern for k, v in via_facade.parser.regex.items()} == \
               {k: v.pattern for k, v in direct.parser.regex.items()}
        assert via_facade.parse("/,,/") == direct.parse("/,,/")

    def test_forward_keyword_arguments(self, facade):
        facade.capture(type="dot", matcher=r"^\.")
        assert "dot" in facade.parser.rules
