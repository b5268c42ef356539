"""Unit tests for the parser registry and format detection."""

import pytest

from cefleef.exceptions import MissingMarkerError
from cefleef.parsers import ParserOptions, get_registry
from cefleef.parsers.base import BaseLineParser
from cefleef.parsers.formats.cef import CEFParser
from cefleef.parsers.formats.leef import LEEFParser
from cefleef.parsers.registry import ParserRegistry

pytestmark = pytest.mark.unit


class PipeKVParser(BaseLineParser):
    """Minimal parser used to exercise registration."""

    marker = "KV:"
    header_fields = ("KVVersion", "Source")

    @property
    def name(self) -> str:
        return "kv"

    def attribute_delimiter(self, header, extension):
        return ",", extension


class TestParserRegistry:
    """Tests for ParserRegistry."""

    @pytest.fixture
    def registry(self):
        """Create an isolated registry."""
        registry = ParserRegistry()
        registry.register(PipeKVParser)
        return registry

    def test_get_by_name(self, registry):
        """Test lookup by parser name."""
        assert isinstance(registry.get("kv"), PipeKVParser)
        assert registry.get("missing") is None

    def test_get_passes_options(self, registry):
        """Test that lookups build the parser with the given options."""
        options = ParserOptions(preserve_original=True)
        assert registry.get("kv", options).options is options

    def test_custom_parser_pipeline(self, registry):
        """Test that a registered parser reuses the shared pipeline."""
        record = registry.get("kv").parse("KV:1|app|a=1,b=2")
        assert record == {"KVVersion": "1", "Source": "app", "a": "1", "b": "2"}

    def test_unregister(self, registry):
        """Test removing a parser."""
        assert registry.unregister("kv") is True
        assert registry.unregister("kv") is False
        assert registry.get("kv") is None

    def test_reregister_overwrites(self, registry, caplog):
        """Test that registering the same name twice keeps the latest class."""
        registry.register(PipeKVParser)
        assert "already registered" in caplog.text
        assert len(registry.list_parsers()) == 1

    def test_len(self, registry):
        """Test that the registry reports how many parsers it holds."""
        assert len(registry) == 1
        registry.unregister("kv")
        assert len(registry) == 0

    def test_list_parsers(self, registry):
        """Test parser info listing."""
        assert registry.list_parsers() == [
            {
                "name": "kv",
                "description": "",
                "marker": "KV:",
                "header_fields": ["KVVersion", "Source"],
            }
        ]


class TestGlobalRegistry:
    """Tests for the built-in parser registry."""

    def test_builtin_parsers_registered(self):
        """Test that CEF and LEEF are registered on import."""
        names = [p["name"] for p in get_registry().list_parsers()]
        assert "cef" in names
        assert "leef" in names

    def test_load_builtin_parsers_is_idempotent(self):
        """Test that loading the built-in parsers again keeps the count."""
        from cefleef.parsers.registry import load_builtin_parsers

        before = len(get_registry())
        load_builtin_parsers()
        assert len(get_registry()) == before >= 2

    def test_get_is_case_insensitive(self):
        """Test lookup with an upper-case name."""
        assert isinstance(get_registry().get("CEF"), CEFParser)

    def test_detect_cef(self):
        """Test detection of a CEF line."""
        parser = get_registry().find_parser("<134>host CEF:0|V|P|1|100|N|5|")
        assert isinstance(parser, CEFParser)

    def test_detect_leef(self):
        """Test detection of a LEEF line."""
        parser = get_registry().find_parser("LEEF:1.0|V|P|1|E|")
        assert isinstance(parser, LEEFParser)

    def test_earliest_marker_wins(self):
        """Test that the marker closest to the start decides the format."""
        registry = get_registry()
        assert isinstance(registry.find_parser("CEF:0|V|P|1|100|N|5|msg=LEEF:1.0"), CEFParser)
        assert isinstance(registry.find_parser("LEEF:1.0|V|P|1|E|msg=CEF:0"), LEEFParser)

    def test_hint_takes_precedence(self):
        """Test that a hint selects its parser when the marker is present."""
        parser = get_registry().find_parser("CEF:0|V|P|1|100|N|5|msg=LEEF:1.0", hint="leef")
        assert isinstance(parser, LEEFParser)

    def test_hint_ignored_without_marker(self):
        """Test that a hint is ignored when its marker is absent."""
        parser = get_registry().find_parser("CEF:0|V|P|1|100|N|5|", hint="leef")
        assert isinstance(parser, CEFParser)

    def test_no_parser(self):
        """Test that a line without markers has no parser."""
        assert get_registry().find_parser("no marker here") is None


class TestParse:
    """Tests for the format-detecting parse function."""

    def test_parse_cef(self):
        """Test dispatch to the CEF parser."""
        from cefleef import parse

        record = parse("CEF:0|V|P|1.0|100|N|5|src=1.1.1.1", preserve_original=True)
        assert record["CEFVersion"] == "0"
        assert record["src"] == "1.1.1.1"
        assert "Event" in record

    def test_parse_leef(self):
        """Test dispatch to the LEEF parser."""
        from cefleef import parse

        record = parse("LEEF:1.0|V|P|1.0|E|src=1.1.1.1")
        assert record["LEEFVersion"] == "1.0"
        assert "Event" not in record

    def test_missing_marker(self):
        """Test that a line without any marker fails with MissingMarkerError."""
        from cefleef import parse

        with pytest.raises(MissingMarkerError) as exc_info:
            parse("no marker here")
        assert set(exc_info.value.markers) >= {"CEF:", "LEEF:"}
