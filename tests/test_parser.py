"""
Tests for plistconf.parser module.

Tests plist decoding and flattening including:
- XML and binary decoding, format restriction
- Dotted key construction for nested dictionaries
- Leaf matching for every supported shape
- Collision policy (last write wins)
- Error taxonomy for malformed roots and unsupported values
- Secret classification calls
"""

from __future__ import annotations

import sys
from datetime import datetime

import pytest

from plistconf.exceptions import DocumentDecodeError, MalformedRootError, UnsupportedTypeError
from plistconf.parser import decode_document, detect_format, flatten, match_leaf
from plistconf.secrets_policy import DynamicSecrets, SpecificSecrets
from plistconf.values import ConfigType, FlatValue


class TestDecodeDocument:
    """Tests for decoding raw plist bytes."""

    def test_decode_xml(self, sample_xml_plist):
        """Test decoding an XML plist."""
        document = decode_document(sample_xml_plist)

        assert document["http"]["timeout"] == 30
        assert document["features"]["darkMode"] is True

    def test_decode_binary(self, make_plist):
        """Test decoding a binary plist."""
        data = make_plist({"name": "test"}, fmt="binary")

        assert decode_document(data) == {"name": "test"}
        assert detect_format(data) == "binary"

    def test_detect_xml(self, sample_xml_plist):
        """Test that non-binary data is reported as XML."""
        assert detect_format(sample_xml_plist) == "xml"

    def test_invalid_bytes_raise(self):
        """Test that garbage bytes raise DocumentDecodeError."""
        with pytest.raises(DocumentDecodeError):
            decode_document(b"this is not a plist")

    def test_forced_binary_rejects_xml(self, sample_xml_plist):
        """Test that forcing the binary format rejects XML input."""
        with pytest.raises(DocumentDecodeError):
            decode_document(sample_xml_plist, "binary")

    def test_unknown_format_raises(self, sample_xml_plist):
        """Test that an unknown format name is a programming error."""
        with pytest.raises(ValueError, match="Unknown plist format"):
            decode_document(sample_xml_plist, "json")

    def test_malformed_date_raises(self):
        """Test that an unparseable <date> raises DocumentDecodeError."""
        data = b"""<?xml version="1.0" encoding="UTF-8"?>
<plist version="1.0"><dict><key>d</key><date>garbage</date></dict></plist>"""

        with pytest.raises(DocumentDecodeError):
            decode_document(data)


class TestFlattenKeys:
    """Tests for dotted key construction."""

    def test_single_nested_key(self):
        """Test {"http": {"timeout": 30}} flattens to http.timeout."""
        entries = flatten({"http": {"timeout": 30}})

        assert list(entries) == ["http.timeout"]
        assert entries["http.timeout"].value == FlatValue(ConfigType.INT, 30)

    def test_deep_nesting(self):
        """Test that the key is the dotted path of all containing keys."""
        entries = flatten({"a": {"b": {"c": "deep"}}})

        assert entries["a.b.c"].value == FlatValue(ConfigType.STRING, "deep")

    def test_depth_n(self):
        """Test nesting of arbitrary depth keeps component order."""
        path = [f"k{i}" for i in range(8)]
        document: dict = {"leaf": 1}
        for component in reversed(path):
            document = {component: document}

        entries = flatten(document)

        assert list(entries) == [".".join(path + ["leaf"])]

    def test_top_level_leaves(self, sample_xml_plist):
        """Test the sample document flattens to four keys."""
        entries = flatten(decode_document(sample_xml_plist))

        assert sorted(entries) == [
            "features.darkMode",
            "http.endpoint",
            "http.timeout",
            "retryCount",
        ]

    def test_empty_dictionaries_produce_no_keys(self):
        """Test that empty dictionaries contribute nothing."""
        assert flatten({}) == {}
        assert flatten({"a": {}, "b": {"c": {}}}) == {}

    def test_keys_are_case_sensitive(self):
        """Test that keys differing only in case stay distinct."""
        entries = flatten({"Key": 1, "key": 2})

        assert entries["Key"].value.value == 1
        assert entries["key"].value.value == 2


class TestCollisionPolicy:
    """Tests for keys that flatten to the same dotted path."""

    def test_literal_dotted_key_after_nested_wins(self):
        """Test a later literal 'a.b' overrides nested a -> b."""
        entries = flatten({"a": {"b": 1}, "a.b": 2})

        assert len(entries) == 1
        assert entries["a.b"].value.value == 2

    def test_nested_after_literal_dotted_key_wins(self):
        """Test a later nested a -> b overrides literal 'a.b'."""
        entries = flatten({"a.b": 2, "a": {"b": 1}})

        assert len(entries) == 1
        assert entries["a.b"].value.value == 1

    def test_duplicate_xml_keys_later_wins(self):
        """Test duplicate keys at the same level: later value, no error."""
        data = b"""<?xml version="1.0" encoding="UTF-8"?>
<plist version="1.0"><dict>
<key>port</key><integer>80</integer>
<key>port</key><integer>8080</integer>
</dict></plist>"""

        entries = flatten(decode_document(data))

        assert entries["port"].value == FlatValue(ConfigType.INT, 8080)

    def test_collision_keeps_later_type(self):
        """Test that the winning value keeps its own variant."""
        entries = flatten({"a": {"b": "text"}, "a.b": True})

        assert entries["a.b"].value == FlatValue(ConfigType.BOOL, True)


class TestMatchLeaf:
    """Tests for leaf shape matching."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("s", FlatValue(ConfigType.STRING, "s")),
            (42, FlatValue(ConfigType.INT, 42)),
            (1.5, FlatValue(ConfigType.DOUBLE, 1.5)),
            (True, FlatValue(ConfigType.BOOL, True)),
            (b"\x01", FlatValue(ConfigType.BYTES, b"\x01")),
            (["a", "b"], FlatValue(ConfigType.STRING_ARRAY, ("a", "b"))),
            ([1, 2], FlatValue(ConfigType.INT_ARRAY, (1, 2))),
            ([1.0, 2.5], FlatValue(ConfigType.DOUBLE_ARRAY, (1.0, 2.5))),
            ([True, False], FlatValue(ConfigType.BOOL_ARRAY, (True, False))),
        ],
    )
    def test_supported_shapes(self, raw, expected):
        """Test each supported shape maps to its variant."""
        assert match_leaf("k", raw) == expected

    def test_bool_is_not_int(self):
        """Test that booleans are tagged BOOL even though bool subclasses int."""
        assert match_leaf("k", False).type is ConfigType.BOOL
        assert match_leaf("k", [True, True]).type is ConfigType.BOOL_ARRAY

    def test_empty_array_is_string_array(self):
        """Test that an empty array becomes an empty string array."""
        assert match_leaf("k", []) == FlatValue(ConfigType.STRING_ARRAY, ())

    def test_arrays_stored_as_tuples(self):
        """Test that array payloads are immutable tuples."""
        assert isinstance(match_leaf("k", [1, 2]).value, tuple)


class TestUnsupportedValues:
    """Tests for values outside the supported shapes."""

    def test_date_raises(self):
        """Test that a date leaf raises with key and type name."""
        with pytest.raises(UnsupportedTypeError) as exc_info:
            flatten({"build": {"date": datetime(2024, 1, 1)}})

        assert exc_info.value.key == "build.date"
        assert exc_info.value.type_name == "datetime"

    def test_heterogeneous_array_raises(self):
        """Test that a mixed array raises."""
        with pytest.raises(UnsupportedTypeError) as exc_info:
            flatten({"mixed": [1, "two"]})

        assert exc_info.value.key == "mixed"
        assert exc_info.value.type_name == "list[int | str]"

    def test_int_and_float_array_raises(self):
        """Test that ints and floats are not mixed into a double array."""
        with pytest.raises(UnsupportedTypeError):
            flatten({"numbers": [1, 2.5]})

    def test_array_of_dicts_raises(self):
        """Test that arrays of dictionaries are not flattened."""
        with pytest.raises(UnsupportedTypeError) as exc_info:
            flatten({"servers": [{"host": "a"}]})

        assert exc_info.value.type_name == "list[dict]"

    def test_array_of_data_raises(self):
        """Test that arrays of data blobs are unsupported."""
        with pytest.raises(UnsupportedTypeError):
            flatten({"blobs": [b"a", b"b"]})

    def test_nested_array_raises(self):
        """Test that arrays of arrays are unsupported."""
        with pytest.raises(UnsupportedTypeError):
            flatten({"matrix": [[1, 2], [3, 4]]})

    def test_non_string_keyed_dict_raises(self):
        """Test that a nested dict with non-string keys is unsupported."""
        with pytest.raises(UnsupportedTypeError) as exc_info:
            flatten({"codes": {200: "ok"}})

        assert exc_info.value.key == "codes"
        assert exc_info.value.type_name == "dict with int keys"

    def test_none_raises(self):
        """Test that None is unsupported."""
        with pytest.raises(UnsupportedTypeError):
            flatten({"nothing": None})

    def test_excessive_nesting_raises(self):
        """Test that nesting past the recursion limit raises DocumentDecodeError."""
        document: dict = {"leaf": 1}
        for _ in range(sys.getrecursionlimit() + 100):
            document = {"k": document}

        with pytest.raises(DocumentDecodeError, match="nested too deeply"):
            flatten(document)


class TestMalformedRoot:
    """Tests for documents whose root is not a dictionary."""

    @pytest.mark.parametrize("root", ["text", 1, [1, 2], None, {1: "x"}])
    def test_non_dict_root_raises(self, root):
        """Test that any non string-keyed dict root raises MalformedRootError."""
        with pytest.raises(MalformedRootError):
            flatten(root)

    def test_scalar_string_root_from_xml(self):
        """Test a plist whose root is a string."""
        data = b"""<?xml version="1.0" encoding="UTF-8"?>
<plist version="1.0"><string>hello</string></plist>"""

        with pytest.raises(MalformedRootError) as exc_info:
            flatten(decode_document(data))

        assert exc_info.value.type_name == "str"


class TestSecretClassification:
    """Tests for how flatten consults the secrets specifier."""

    def test_called_once_per_leaf_with_key_and_raw_value(self):
        """Test the specifier sees each dotted key and raw value exactly once."""
        calls: list[tuple[str, object]] = []

        def record(key, value):
            calls.append((key, value))
            return False

        flatten({"db": {"password": "pw", "ports": [1, 2]}}, DynamicSecrets(record))

        assert calls == [("db.password", "pw"), ("db.ports", [1, 2])]

    def test_flag_stored_on_entry(self):
        """Test that the decision is persisted per entry."""
        entries = flatten(
            {"db": {"password": "pw", "user": "u"}},
            SpecificSecrets({"db.password"}),
        )

        assert entries["db.password"].is_secret is True
        assert entries["db.user"].is_secret is False

    def test_default_is_no_secrets(self):
        """Test that omitting the specifier marks nothing secret."""
        entries = flatten({"password": "pw"})

        assert entries["password"].is_secret is False
