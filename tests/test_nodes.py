"""Tests for tomlcore.nodes and tomlcore.table."""

import datetime

import pytest

from tomlcore import (
    Array,
    Date,
    DateTime,
    NestingDepthError,
    NodeType,
    Table,
    Time,
    TimeOffset,
    Value,
    ValueFormat,
    deep_equal,
    make_node,
)


class TestValue:
    @pytest.mark.parametrize(
        "payload, expected",
        [
            ("text", NodeType.STRING),
            (1, NodeType.INTEGER),
            (1.5, NodeType.FLOAT),
            (True, NodeType.BOOLEAN),
            (Date(year=2024, month=1, day=15), NodeType.DATE),
            (Time(hour=7, minute=32), NodeType.TIME),
            (DateTime(date=Date(year=2024, month=1, day=15), time=Time(hour=7, minute=32)), NodeType.DATE_TIME),
        ],
    )
    def test_type_from_payload(self, payload, expected):
        assert Value(payload).type is expected

    def test_python_dates_are_converted(self):
        assert Value(datetime.date(2024, 1, 15)).value == Date(year=2024, month=1, day=15)
        assert Value(datetime.time(7, 32, 0, 500)).value == Time(hour=7, minute=32, nanosecond=500_000)

    def test_python_datetime_keeps_offset(self):
        tz = datetime.timezone(datetime.timedelta(hours=-8))
        value = Value(datetime.datetime(1979, 5, 27, 0, 32, tzinfo=tz)).value
        assert value.offset == TimeOffset(minutes=-480)

    def test_naive_python_datetime_is_local(self):
        value = Value(datetime.datetime(1979, 5, 27, 0, 32)).value
        assert value.is_local

    def test_unsupported_payload(self):
        with pytest.raises(TypeError):
            Value(None)

    def test_payload_is_mutable(self):
        v = Value(1)
        v.value = 2
        assert v.value == 2

    def test_type_is_fixed(self):
        v = Value(1)
        with pytest.raises(TypeError):
            v.value = "one"
        assert v.type is NodeType.INTEGER

    def test_float_accepts_integer_payload(self):
        v = Value(1.5)
        v.value = 2
        assert v.value == 2.0
        assert isinstance(v.value, float)

    def test_integers_are_64_bit(self):
        assert Value(2**63 - 1).value == 2**63 - 1
        assert Value(-(2**63)).value == -(2**63)
        with pytest.raises(ValueError):
            Value(2**63)
        with pytest.raises(ValueError):
            Value(-(2**63) - 1)
        with pytest.raises(ValueError):
            Value(10**5000)

    def test_assigning_out_of_range_integer(self):
        v = Value(1)
        with pytest.raises(ValueError):
            v.value = 2**64
        assert v.value == 1

    def test_bool_is_not_integer(self):
        v = Value(1)
        with pytest.raises(TypeError):
            v.value = True

    def test_copy_keeps_flags(self):
        v = Value(255, ValueFormat.HEXADECIMAL)
        clone = v.copy()
        assert clone is not v
        assert clone == v
        assert clone.flags is ValueFormat.HEXADECIMAL

    def test_repr(self):
        assert repr(Value(1)) == "Value(1)"

    def test_equality_ignores_flags(self):
        assert Value(8, ValueFormat.OCTAL) == Value(8)

    def test_no_coercion(self):
        assert Value(1) != Value(1.0)
        assert Value(1) != Value(True)

    def test_not_hashable(self):
        with pytest.raises(TypeError):
            hash(Value(1))


class TestMakeNode:
    def test_nodes_are_copied(self):
        node = Value(1)
        wrapped = make_node(node)
        assert wrapped is not node
        assert wrapped == node

    def test_copied_containers_are_independent(self):
        inner = Array([1, {"a": 2}])
        wrapped = make_node(inner)
        wrapped[1]["a"] = 3
        assert inner[1]["a"] == Value(2)

    def test_copy_depth_is_limited(self):
        arr = Array()
        cursor = arr
        for _ in range(300):
            cursor = cursor.append([])
        with pytest.raises(NestingDepthError):
            make_node(arr)

    def test_containers(self):
        assert make_node({"a": 1}).type is NodeType.TABLE
        assert make_node([1, 2]).type is NodeType.ARRAY
        assert make_node((1, 2)).type is NodeType.ARRAY

    def test_nested_dicts_are_standalone_tables(self):
        tbl = make_node({"a": {"b": 1}})
        assert not tbl["a"].is_inline


class TestDeepEqual:
    def test_tables_compare_by_key(self):
        assert deep_equal(Table({"a": 1, "b": 2}), Table({"b": 2, "a": 1}))

    def test_tables_missing_key(self):
        assert not deep_equal(Table({"a": 1}), Table({"b": 1}))

    def test_inline_flag_is_not_content(self):
        assert Table({"a": 1}, is_inline=True) == Table({"a": 1})

    def test_table_against_array(self):
        assert not deep_equal(Table(), Array())


class TestTable:
    def test_insertion_order(self):
        tbl = Table()
        tbl["z"] = 1
        tbl["a"] = 2
        tbl["m"] = 3
        assert list(tbl) == ["z", "a", "m"]

    def test_insert_keeps_existing(self):
        tbl = Table({"a": 1})
        assert not tbl.insert("a", 2)
        assert tbl["a"] == Value(1)
        assert tbl.insert("b", 2)
        assert list(tbl.keys()) == ["a", "b"]

    def test_same_node_under_two_keys(self):
        inner = Array([1])
        tbl = Table()
        tbl["a"] = inner
        tbl["b"] = inner
        tbl["a"].append(2)
        assert len(tbl["b"]) == 1
        assert len(inner) == 1

    def test_insert_or_assign(self):
        tbl = Table({"a": 1})
        node = tbl.insert_or_assign("a", "x")
        assert tbl["a"] is node
        assert node.type is NodeType.STRING

    def test_keys_must_be_strings(self):
        with pytest.raises(TypeError):
            Table()[1] = 2

    def test_mapping_protocol(self):
        tbl = Table({"a": 1, "b": [1]})
        assert "a" in tbl
        assert len(tbl) == 2
        assert tbl.get("missing") is None
        del tbl["a"]
        assert "a" not in tbl
        assert [key for key, _ in tbl.items()] == ["b"]
        assert [node.type for node in tbl.values()] == [NodeType.ARRAY]

    def test_copy_is_deep(self):
        tbl = Table({"sub": {"a": [1]}}, is_inline=True)
        clone = tbl.copy()
        assert clone == tbl
        assert clone.is_inline
        assert clone["sub"] is not tbl["sub"]
        clone["sub"]["a"].append(2)
        assert len(tbl["sub"]["a"]) == 1

    def test_type_tag(self):
        assert Table().type is NodeType.TABLE
        assert Table().as_table() is not None
        assert Table().as_array() is None
