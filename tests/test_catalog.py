"""Tests for command parsing and command class version resolution."""

import dataclasses
import xml.etree.ElementTree as ET

import pytest
from helpers import make_class

from zwave_codegen.catalog import (
    Catalog,
    CatalogBuilder,
    CommandEntry,
    ingest,
    parse_code,
    parse_commands,
    parse_version,
)
from zwave_codegen.naming import IdentifierStyle

CAMEL = IdentifierStyle.UPPER_CAMEL
VERBATIM = IdentifierStyle.VERBATIM


class TestParseCode:
    @pytest.mark.parametrize(
        "text, expected",
        [("0x20", 0x20), ("0X2a", 0x2A), ("0x0", 0), ("0xff", 0xFF), ("0x0020", 0x20), ("0x 20", 0x20)],
    )
    def test_valid(self, text, expected):
        assert parse_code(text) == expected

    @pytest.mark.parametrize("text", [None, "", "0x", "20", "0xZZ", "0x100", "x20", "0x-1", "1x20"])
    def test_invalid(self, text):
        assert parse_code(text) is None


class TestParseVersion:
    def test_valid(self):
        assert parse_version("0") == 0
        assert parse_version(" 12 ") == 12
        assert parse_version("300") == 300

    @pytest.mark.parametrize("text", [None, "", "v1", "-1", "1.0", "0x2"])
    def test_invalid(self, text):
        assert parse_version(text) is None


class TestParseCommands:
    def test_strips_class_prefix_and_keeps_order(self):
        node = make_class(
            "COMMAND_CLASS_BASIC",
            "0x20",
            "1",
            [("BASIC_SET", "0x01"), ("BASIC_GET", "0x02"), ("BASIC_REPORT", "0x03")],
        )
        commands = parse_commands("BASIC", node, CAMEL)
        assert [(c.display_name, c.code) for c in commands] == [("Set", 1), ("Get", 2), ("Report", 3)]
        assert commands[0].raw_name == "BASIC_SET"

    def test_verbatim_style(self):
        node = make_class("COMMAND_CLASS_SWITCH_BINARY", "0x25", "1", [("SWITCH_BINARY_SET", "0x01")])
        assert parse_commands("SWITCH_BINARY", node, VERBATIM) == [
            CommandEntry(raw_name="SWITCH_BINARY_SET", code=1, display_name="SET")
        ]

    def test_unprefixed_name_is_used_in_full(self):
        node = make_class("COMMAND_CLASS_METER", "0x32", "1", [("CUSTOM_RESET", "0x05")])
        commands = parse_commands("METER", node, CAMEL)
        assert [c.display_name for c in commands] == ["CustomReset"]

    def test_invalid_nodes_are_skipped(self):
        node = make_class(
            "COMMAND_CLASS_BASIC",
            "0x20",
            "1",
            [
                (None, "0x01"),
                ("BASIC_GET", None),
                ("BASIC_GET", "0xZZ"),
                ("BASIC_GET", "0x100"),
                ("BASIC_GET", "02"),
                ("BASIC_2GO", "0x04"),
                ("BASIC_", "0x05"),
                ("BASIC_REPORT", "0x03"),
            ],
        )
        warnings = []
        commands = parse_commands("BASIC", node, VERBATIM, warnings)
        assert [c.display_name for c in commands] == ["REPORT"]
        assert len(warnings) == 7

    def test_duplicates_are_passed_through(self):
        node = make_class(
            "COMMAND_CLASS_BASIC",
            "0x20",
            "1",
            [("BASIC_SET", "0x01"), ("BASIC_SET", "0x01"), ("BASIC_ALIAS", "0x01")],
        )
        commands = parse_commands("BASIC", node, CAMEL)
        assert [(c.display_name, c.code) for c in commands] == [("Set", 1), ("Set", 1), ("Alias", 1)]

    def test_nested_commands_are_ignored(self):
        node = ET.fromstring(
            '<cmd_class name="COMMAND_CLASS_BASIC" key="0x20" version="1">'
            '<cmd name="BASIC_SET" key="0x01"><cmd name="BASIC_INNER" key="0x09" /></cmd>'
            '<group><cmd name="BASIC_DEEP" key="0x0a" /></group>'
            "</cmd_class>"
        )
        commands = parse_commands("BASIC", node, CAMEL)
        assert [c.display_name for c in commands] == ["Set"]


class TestCatalogBuilder:
    def test_newer_version_replaces_older(self):
        catalog = ingest(
            [
                make_class("COMMAND_CLASS_BASIC", "0x20", "1", [("BASIC_SET", "0x01")]),
                make_class("COMMAND_CLASS_BASIC", "0x20", "2", [("BASIC_SET", "0x01")]),
            ],
            CAMEL,
        )
        assert [e.display_name for e in catalog] == ["Basic"]
        entry = catalog.get("Basic")
        assert entry.version == 2
        assert [(c.display_name, c.code) for c in entry.commands] == [("Set", 1)]
        assert catalog.version_of(0x20) == 2

    def test_verbatim_key(self):
        catalog = ingest(
            [
                make_class("COMMAND_CLASS_BASIC", "0x20", "1", [("BASIC_SET", "0x01")]),
                make_class("COMMAND_CLASS_BASIC", "0x20", "2", [("BASIC_SET", "0x01")]),
            ],
            VERBATIM,
        )
        assert len(catalog) == 1
        assert catalog.get("BASIC").version == 2
        assert len(catalog.get("BASIC").commands) == 1

    def test_commands_are_never_merged_across_versions(self):
        catalog = ingest(
            [
                make_class("COMMAND_CLASS_BASIC", "0x20", "1", [("BASIC_SET", "0x01"), ("BASIC_GET", "0x02")]),
                make_class("COMMAND_CLASS_BASIC", "0x20", "2", [("BASIC_REPORT", "0x03")]),
            ],
            CAMEL,
        )
        assert [c.display_name for c in catalog.get("Basic").commands] == ["Report"]

    def test_increasing_versions_keep_highest(self):
        nodes = [
            make_class(f"COMMAND_CLASS_METER_V{v}", "0x32", str(v), [(f"METER_V{v}_GET", f"0x0{v}")])
            for v in range(1, 6)
        ]
        catalog = ingest(nodes, CAMEL)
        assert len(catalog) == 1
        entry = catalog.by_code(0x32)
        assert entry.display_name == "MeterV5"
        assert entry.version == 5
        assert [c.code for c in entry.commands] == [5]

    def test_rename_evicts_old_name(self):
        catalog = ingest(
            [
                make_class("COMMAND_CLASS_SWITCH_ALL", "0x27", "1"),
                make_class("COMMAND_CLASS_ALL_SWITCH", "0x27", "2", [("ALL_SWITCH_SET", "0x01")]),
            ],
            CAMEL,
        )
        assert catalog.get("SwitchAll") is None
        assert catalog.get("AllSwitch").version == 2
        assert catalog.by_code(0x27).display_name == "AllSwitch"

    def test_older_version_is_discarded(self):
        builder = CatalogBuilder(CAMEL)
        assert builder.add(make_class("COMMAND_CLASS_BASIC", "0x20", "2", [("BASIC_SET", "0x01")]))
        assert not builder.add(
            make_class("COMMAND_CLASS_BASIC_OLD", "0x20", "1", [("BASIC_OLD_GET", "0x02")])
        )
        catalog = builder.build()
        assert [e.display_name for e in catalog] == ["Basic"]
        assert [c.display_name for c in catalog.get("Basic").commands] == ["Set"]
        assert catalog.version_of(0x20) == 2

    def test_equal_version_first_seen_wins(self):
        catalog = ingest(
            [
                make_class("COMMAND_CLASS_BASIC", "0x20", "1", [("BASIC_SET", "0x01")]),
                make_class("COMMAND_CLASS_BASIC", "0x20", "1", [("BASIC_GET", "0x02")]),
                make_class("COMMAND_CLASS_OTHER", "0x20", "1"),
            ],
            CAMEL,
        )
        assert [e.display_name for e in catalog] == ["Basic"]
        assert [c.display_name for c in catalog.get("Basic").commands] == ["Set"]

    @pytest.mark.parametrize(
        "name, key, version",
        [
            ("COMMAND_CLASS_BASIC", "0xZZ", "1"),
            ("COMMAND_CLASS_BASIC", None, "1"),
            ("COMMAND_CLASS_BASIC", "0x120", "1"),
            ("COMMAND_CLASS_BASIC", "0x20", None),
            ("COMMAND_CLASS_BASIC", "0x20", "one"),
            ("BASIC", "0x20", "1"),
            (None, "0x20", "1"),
            ("COMMAND_CLASS_", "0x20", "1"),
            ("COMMAND_CLASS_2D", "0x20", "1"),
        ],
    )
    def test_invalid_nodes_are_skipped(self, name, key, version):
        builder = CatalogBuilder(CAMEL)
        assert not builder.add(make_class(name, key, version, [("BASIC_SET", "0x01")]))
        assert builder.skipped == 1
        assert len(builder.warnings) == 1
        assert len(builder.build()) == 0

    def test_skip_does_not_stop_ingestion(self):
        catalog = ingest(
            [
                make_class("COMMAND_CLASS_BASIC", "0xZZ", "1"),
                make_class("COMMAND_CLASS_SWITCH_BINARY", "0x25", "1"),
            ],
            CAMEL,
        )
        assert [e.display_name for e in catalog] == ["SwitchBinary"]

    def test_name_held_by_other_code_is_skipped(self):
        builder = CatalogBuilder(CAMEL)
        builder.add(make_class("COMMAND_CLASS_BASIC", "0x20", "1", [("BASIC_SET", "0x01")]))
        builder.add(make_class("COMMAND_CLASS_METER", "0x32", "1"))
        assert not builder.add(make_class("COMMAND_CLASS_BASIC", "0x32", "2"))

        catalog = builder.build()
        assert catalog.by_code(0x20).display_name == "Basic"
        assert catalog.by_code(0x32).display_name == "Meter"
        assert catalog.version_of(0x32) == 1

    def test_one_entry_per_code_and_name(self):
        nodes = [
            make_class("COMMAND_CLASS_A", "0x01", "1"),
            make_class("COMMAND_CLASS_B", "0x02", "1"),
            make_class("COMMAND_CLASS_C", "0x01", "3"),
            make_class("COMMAND_CLASS_A", "0x02", "2"),
            make_class("COMMAND_CLASS_D", "0x01", "2"),
        ]
        catalog = ingest(nodes, CAMEL)
        codes = [e.code for e in catalog]
        names = [e.display_name for e in catalog]
        assert sorted(codes) == [1, 2]
        assert len(set(names)) == len(names)
        assert catalog.by_code(1).display_name == "C"
        assert catalog.by_code(2).display_name == "A"
        assert catalog.by_code(2).version == 2


class TestCatalog:
    def test_entries_sorted_by_display_name(self):
        catalog = ingest(
            [
                make_class("COMMAND_CLASS_SWITCH_BINARY", "0x25", "1"),
                make_class("COMMAND_CLASS_BASIC", "0x20", "1"),
                make_class("COMMAND_CLASS_METER", "0x32", "1"),
            ],
            CAMEL,
        )
        assert [e.display_name for e in catalog] == ["Basic", "Meter", "SwitchBinary"]
        assert catalog.command_classes == tuple(catalog)

    def test_short_name(self):
        catalog = ingest([make_class("COMMAND_CLASS_SWITCH_BINARY", "0x25", "1")], CAMEL)
        assert catalog.get("SwitchBinary").short_name == "SWITCH_BINARY"

    def test_lookups(self):
        catalog = ingest(
            [make_class("COMMAND_CLASS_BASIC", "0x20", "1", [("BASIC_SET", "0x01"), ("BASIC_GET", "0x02")])],
            CAMEL,
        )
        assert catalog.by_code(0x21) is None
        assert catalog.get("Missing") is None
        assert catalog.version_of(0x21) is None
        assert catalog.command_count == 2

    def test_catalog_is_immutable(self):
        catalog = ingest([make_class("COMMAND_CLASS_BASIC", "0x20", "1")], CAMEL)
        with pytest.raises(dataclasses.FrozenInstanceError):
            catalog.command_classes = ()
        with pytest.raises(TypeError):
            catalog.versions[0x20] = 9
        with pytest.raises(dataclasses.FrozenInstanceError):
            catalog.get("Basic").version = 9

    def test_empty_catalog(self):
        catalog = Catalog(command_classes=())
        assert len(catalog) == 0
        assert catalog.command_count == 0

    def test_catalog_is_hashable(self):
        first = ingest([make_class("COMMAND_CLASS_BASIC", "0x20", "1")], CAMEL)
        second = ingest([make_class("COMMAND_CLASS_BASIC", "0x20", "1")], CAMEL)
        assert hash(first) == hash(second)
        assert first == second
        assert len({first, second}) == 1

    def test_lookups_return_catalog_entries(self):
        catalog = ingest(
            [
                make_class("COMMAND_CLASS_SWITCH_BINARY", "0x25", "1"),
                make_class("COMMAND_CLASS_BASIC", "0x20", "1"),
                make_class("COMMAND_CLASS_BASIC_V2", "0x20", "2"),
            ],
            CAMEL,
        )
        for entry in catalog:
            assert catalog.get(entry.display_name) is entry
            assert catalog.by_code(entry.code) is entry
        assert catalog.get("Basic") is None
        assert catalog.by_code(0x20).display_name == "BasicV2"
