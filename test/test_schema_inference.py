"""Tests for flat record schema inference."""

import os
import sys
import unittest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from recordshape.schema_inference import (
    FieldAccumulator,
    FieldState,
    InputShapeError,
    Schema,
    SchemaBuilder,
    TypeTag,
    infer_schema,
    type_of
)


class TestTypeOf(unittest.TestCase):
    """Test cases for value classification."""

    def test_scalars(self):
        self.assertEqual(type_of("Alice"), TypeTag.STRING)
        self.assertEqual(type_of(True), TypeTag.BOOL)
        self.assertEqual(type_of(False), TypeTag.BOOL)
        self.assertEqual(type_of(None), TypeTag.NULL)

    def test_integers_prefer_signed(self):
        """Integers in the signed 64-bit range classify as signed."""
        self.assertEqual(type_of(30), TypeTag.SIGNED_INT)
        self.assertEqual(type_of(-30), TypeTag.SIGNED_INT)
        self.assertEqual(type_of(2**63 - 1), TypeTag.SIGNED_INT)
        self.assertEqual(type_of(-(2**63)), TypeTag.SIGNED_INT)

    def test_unsigned_and_float(self):
        self.assertEqual(type_of(2**63), TypeTag.UNSIGNED_INT)
        self.assertEqual(type_of(2**64 - 1), TypeTag.UNSIGNED_INT)
        self.assertEqual(type_of(2**64), TypeTag.FLOAT)
        self.assertEqual(type_of(-(2**63) - 1), TypeTag.FLOAT)
        self.assertEqual(type_of(30.0), TypeTag.FLOAT)
        self.assertEqual(type_of(0.5), TypeTag.FLOAT)

    def test_containers_are_opaque(self):
        self.assertEqual(type_of([1, {"a": 1}]), TypeTag.ARRAY)
        self.assertEqual(type_of(()), TypeTag.ARRAY)
        self.assertEqual(type_of({"nested": {"deep": 1}}), TypeTag.OBJECT)

    def test_non_json_value(self):
        with self.assertRaises(TypeError):
            type_of(object())


class TestFieldAccumulator(unittest.TestCase):
    """Test cases for the per-field fold step."""

    def test_first_observation_is_optional(self):
        state = FieldAccumulator.observe(None, 30)
        self.assertEqual(state.declared_type, TypeTag.SIGNED_INT)
        self.assertTrue(state.optional)

    def test_first_observation_null(self):
        state = FieldAccumulator.observe(None, None)
        self.assertEqual(state.declared_type, TypeTag.NULL)
        self.assertTrue(state.optional)
        self.assertEqual(state.observed_types, frozenset())

    def test_concrete_observation_clears_optional(self):
        state = FieldAccumulator.observe(FieldState(TypeTag.STRING, True), "Bob")
        self.assertFalse(state.optional)
        self.assertEqual(state.declared_type, TypeTag.STRING)

    def test_null_keeps_type(self):
        state = FieldAccumulator.observe(FieldState(TypeTag.BOOL, False), None)
        self.assertTrue(state.optional)
        self.assertEqual(state.declared_type, TypeTag.BOOL)

    def test_last_differing_type_wins(self):
        state = FieldAccumulator.observe(None, 1)
        state = FieldAccumulator.observe(state, "one")
        self.assertEqual(state.declared_type, TypeTag.STRING)
        state = FieldAccumulator.observe(state, 1.5)
        self.assertEqual(state.declared_type, TypeTag.FLOAT)
        self.assertEqual(state.observed_types,
                         frozenset([TypeTag.SIGNED_INT, TypeTag.STRING, TypeTag.FLOAT]))

    def test_state_is_immutable(self):
        state = FieldState(TypeTag.STRING, False)
        FieldAccumulator.observe(state, None)
        self.assertFalse(state.optional)


class TestSchemaBuilder(unittest.TestCase):
    """Test cases for building a schema from records."""

    def assertField(self, schema, name, type_tag, optional):
        self.assertIn(name, schema)
        self.assertEqual(schema[name].declared_type, type_tag, name)
        self.assertEqual(schema[name].optional, optional, name)

    def test_all_fields_present(self):
        records = [
            {"name": "Alice", "age": 30, "is_student": False},
            {"name": "Bob", "age": 25, "is_student": True, "address": None}
        ]
        schema = infer_schema(records)
        self.assertEqual(list(schema), ["address", "age", "is_student", "name"])
        self.assertField(schema, "address", TypeTag.NULL, True)
        self.assertField(schema, "age", TypeTag.SIGNED_INT, False)
        self.assertField(schema, "is_student", TypeTag.BOOL, False)
        self.assertField(schema, "name", TypeTag.STRING, False)

    def test_partial_fields(self):
        records = [
            {"name": "Alice", "age": 30},
            {"name": "Bob", "is_student": True}
        ]
        schema = infer_schema(records)
        self.assertField(schema, "age", TypeTag.SIGNED_INT, True)
        self.assertField(schema, "is_student", TypeTag.BOOL, True)
        self.assertField(schema, "name", TypeTag.STRING, False)

    def test_single_record_fields_are_required(self):
        schema = infer_schema([{"name": "Alice", "age": 30.0}])
        self.assertField(schema, "name", TypeTag.STRING, False)
        self.assertField(schema, "age", TypeTag.FLOAT, False)

    def test_null_then_concrete_stays_optional(self):
        """A null in an earlier record is not undone by later values."""
        records = [
            {"email": None},
            {"email": "bob@example.com"},
            {"email": "carol@example.com"}
        ]
        schema = infer_schema(records)
        self.assertField(schema, "email", TypeTag.STRING, True)

    def test_missing_from_first_record_stays_optional(self):
        records = [
            {"name": "Alice"},
            {"name": "Bob", "age": 25},
            {"name": "Carol", "age": 35}
        ]
        schema = infer_schema(records)
        self.assertField(schema, "age", TypeTag.SIGNED_INT, True)

    def test_null_never_overwrites_type(self):
        records = [{"score": 1.5}, {"score": None}]
        schema = infer_schema(records)
        self.assertField(schema, "score", TypeTag.FLOAT, True)

    def test_always_null_field(self):
        schema = infer_schema([{"x": None}, {"x": None}])
        self.assertField(schema, "x", TypeTag.NULL, True)

    def test_non_object_entries_are_skipped(self):
        records = [{"name": "Alice"}, "stray", 42, None, [1, 2], {"name": "Bob"}]
        schema = infer_schema(records)
        self.assertEqual(schema.record_count, 2)
        self.assertEqual(list(schema), ["name"])
        self.assertField(schema, "name", TypeTag.STRING, False)

    def test_non_array_input(self):
        with self.assertRaises(InputShapeError) as ctx:
            infer_schema({"name": "Alice", "age": 30})
        self.assertEqual(ctx.exception.actual_type, "dict")
        with self.assertRaises(InputShapeError):
            infer_schema("[]")
        with self.assertRaises(ValueError):
            infer_schema(None)

    def test_empty_input(self):
        schema = infer_schema([])
        self.assertEqual(len(schema), 0)
        self.assertEqual(schema.record_count, 0)

    def test_ordering_independent_of_key_order(self):
        first = infer_schema([{"b": 1, "a": "x", "c": True}])
        second = infer_schema([{"c": False, "a": "y", "b": 2}])
        self.assertEqual(list(first), ["a", "b", "c"])
        self.assertEqual(dict(first), dict(second))

    def test_deterministic_for_fixed_order(self):
        records = [
            {"id": 1, "value": "a"},
            {"id": 2, "value": 3, "extra": None},
            {"id": 3}
        ]
        self.assertEqual(dict(infer_schema(records)), dict(infer_schema(records)))

    def test_presence_law(self):
        records = [
            {"a": 1, "b": 1, "c": 1, "d": None},
            {"a": 2, "b": None, "d": 4},
            {"a": 3, "b": 3, "c": 3, "d": 5}
        ]
        schema = infer_schema(records)
        self.assertFalse(schema["a"].optional)
        self.assertTrue(schema["b"].optional)
        self.assertTrue(schema["c"].optional)
        self.assertTrue(schema["d"].optional)

    def test_sample_size(self):
        records = [{"a": 1}, {"a": 2}, {"b": 3}]
        schema = SchemaBuilder(sample_size=2).build(records)
        self.assertEqual(list(schema), ["a"])
        self.assertFalse(schema["a"].optional)

    def test_schema_is_read_only(self):
        schema = infer_schema([{"a": 1}])
        self.assertIsInstance(schema, Schema)
        with self.assertRaises(TypeError):
            schema["b"] = FieldState(TypeTag.STRING, False)

    def test_to_dict(self):
        schema = infer_schema([{"a": 1}, {"a": "x", "b": None}])
        self.assertEqual(schema.to_dict(), {
            "records": 2,
            "fields": {
                "a": {"type": "String", "optional": False, "observed": ["SignedInt", "String"]},
                "b": {"type": "AnyOrNull", "optional": True, "observed": []},
            }
        })


if __name__ == '__main__':
    unittest.main()
