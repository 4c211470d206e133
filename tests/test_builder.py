"""Tests for tomlcore.builder."""

import datetime

import pytest

from tomlcore import Array, NestingDepthError, NodeType, TomlBuilder, Value, dumps


class TestBuild:
    def test_scalars_and_tables(self):
        tbl = TomlBuilder().build({"title": "x", "owner": {"name": "Tom", "age": 42}})
        assert tbl["title"] == Value("x")
        assert tbl["owner"].type is NodeType.TABLE
        assert not tbl["owner"].is_inline
        assert tbl["owner"]["age"] == Value(42)

    def test_list_of_mappings_is_array_of_tables(self):
        tbl = TomlBuilder().build({"products": [{"name": "Hammer"}, {"name": "Nail"}]})
        products = tbl["products"]
        assert products.is_array_of_tables()
        assert not any(elem.is_inline for elem in products)

    def test_mappings_in_mixed_lists_are_inline(self):
        tbl = TomlBuilder().build({"mixed": [1, {"a": {"b": 2}}]})
        nested = tbl["mixed"][1]
        assert nested.is_inline
        assert nested["a"].is_inline

    def test_inline_tables_config(self):
        tbl = TomlBuilder({"inline_tables": True}).build({"point": {"x": 1}, "pts": [{"x": 1}]})
        assert tbl["point"].is_inline
        assert tbl["pts"][0].is_inline
        assert not tbl.is_inline

    def test_nodes_are_copied(self):
        arr = Array([1])
        tbl = TomlBuilder().build({"arr": arr, "again": arr})
        assert tbl["arr"] == arr
        assert tbl["arr"] is not arr
        tbl["arr"].append(2)
        assert len(tbl["again"]) == 1
        assert len(arr) == 1

    def test_python_dates(self):
        tbl = TomlBuilder().build(
            {"when": datetime.datetime(1979, 5, 27, 7, 32, tzinfo=datetime.timezone.utc)}
        )
        assert tbl["when"].type is NodeType.DATE_TIME

    def test_root_must_be_mapping(self):
        with pytest.raises(TypeError):
            TomlBuilder().build([1, 2])

    def test_keys_must_be_strings(self):
        with pytest.raises(TypeError, match="not a string"):
            TomlBuilder().build({"a": {1: "x"}})

    def test_unsupported_values_name_their_path(self):
        with pytest.raises(TypeError, match="a.b.1"):
            TomlBuilder().build({"a": {"b": [1, None]}})

    def test_out_of_range_integers_name_their_path(self):
        with pytest.raises(ValueError, match="a.big"):
            TomlBuilder().build({"a": {"big": 2**64}})

    def test_depth_limit(self):
        with pytest.raises(NestingDepthError):
            TomlBuilder({"max_depth": 1}).build({"a": {"b": {"c": 1}}})


class TestBuildAndFormat:
    def test_document(self):
        tree = {
            "title": "Example",
            "owner": {"name": "Tom", "dob": datetime.datetime(1979, 5, 27, 7, 32, tzinfo=datetime.timezone.utc)},
            "database": {"ports": [8000, 8001], "enabled": True, "temp_targets": {"cpu": 79.5}},
            "servers": {"alpha": {"ip": "10.0.0.1"}, "beta": {"ip": "10.0.0.2"}},
            "products": [{"name": "Hammer", "sku": 738594937}, {"name": "Nail", "color": "gray"}],
        }
        expected = (
            "title = 'Example'\n"
            "\n"
            "[owner]\n"
            "name = 'Tom'\n"
            "dob = 1979-05-27T07:32:00Z\n"
            "\n"
            "[database]\n"
            "ports = [ 8000, 8001 ]\n"
            "enabled = true\n"
            "\n"
            "    [database.temp_targets]\n"
            "    cpu = 79.5\n"
            "\n"
            "[servers.alpha]\n"
            "ip = '10.0.0.1'\n"
            "\n"
            "[servers.beta]\n"
            "ip = '10.0.0.2'\n"
            "\n"
            "[[products]]\n"
            "name = 'Hammer'\n"
            "sku = 738594937\n"
            "\n"
            "[[products]]\n"
            "name = 'Nail'\n"
            "color = 'gray'\n"
        )
        assert dumps(TomlBuilder().build(tree)) == expected
