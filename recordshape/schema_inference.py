"""Flat record schema inference from sample JSON records.

This module provides the inference core used by every output notation:
- TypeTag / type_of: classify a single JSON value
- FieldAccumulator: fold successive observations of one field
- SchemaBuilder: drive the fold over a record sequence and settle optionality
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterator, Mapping, Optional

logger = logging.getLogger(__name__)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1


class InputShapeError(ValueError):
    """Exception raised when the top-level input is not an array of records."""

    def __init__(self, message: str, actual_type: str = ''):
        self.message = message
        self.actual_type = actual_type
        super().__init__(message)


class TypeTag(Enum):
    """Renderer-agnostic leaf classification of an observed value."""
    STRING = 'String'
    SIGNED_INT = 'SignedInt'
    UNSIGNED_INT = 'UnsignedInt'
    FLOAT = 'Float'
    BOOL = 'Bool'
    ARRAY = 'ArrayOfUnknown'
    OBJECT = 'ObjectMap'
    NULL = 'AnyOrNull'


def type_of(value: Any) -> TypeTag:
    """Classify a JSON value.

    Integers are tested for the signed 64-bit range before the unsigned one;
    anything that fits neither is treated as a float.
    """
    if value is None:
        return TypeTag.NULL
    if isinstance(value, str):
        return TypeTag.STRING
    if isinstance(value, bool):
        return TypeTag.BOOL
    if isinstance(value, int):
        if INT64_MIN <= value <= INT64_MAX:
            return TypeTag.SIGNED_INT
        if INT64_MAX < value <= UINT64_MAX:
            return TypeTag.UNSIGNED_INT
        return TypeTag.FLOAT
    if isinstance(value, float):
        return TypeTag.FLOAT
    if isinstance(value, (list, tuple)):
        return TypeTag.ARRAY
    if isinstance(value, Mapping):
        return TypeTag.OBJECT
    raise TypeError(f"Value of type {type(value).__name__} is not a JSON value")


@dataclass(frozen=True)
class FieldState:
    """Declared type and optionality of one field."""
    declared_type: TypeTag
    optional: bool
    observed_types: FrozenSet[TypeTag] = field(default_factory=frozenset)

    def to_dict(self) -> Dict[str, Any]:
        """Returns the state as a JSON-serializable dict."""
        return {
            'type': self.declared_type.value,
            'optional': self.optional,
            'observed': sorted(t.value for t in self.observed_types),
        }


class FieldAccumulator:
    """Folds the observations of a field into a FieldState."""

    @staticmethod
    def observe(state: Optional[FieldState], value: Any) -> FieldState:
        """Applies one observation of a field to its running state.

        A field seen for the first time starts out optional, since its
        presence in the other records is not known yet. A null keeps the
        field optional and never replaces a concrete type. A concrete value
        clears the running optional flag and, if its type differs from the
        stored one, replaces it: the last differing observation wins.

        Args:
            state: The running state, or None on first sight
            value: The observed JSON value

        Returns:
            The new state
        """
        value_type = type_of(value)
        is_null = value_type == TypeTag.NULL
        if state is None:
            return FieldState(
                declared_type=value_type,
                optional=True,
                observed_types=frozenset() if is_null else frozenset([value_type]))
        if is_null:
            return FieldState(state.declared_type, True, state.observed_types)
        return FieldState(
            declared_type=value_type,
            optional=state.optional and is_null,
            observed_types=state.observed_types | {value_type})


class Schema(Mapping[str, FieldState]):
    """Read-only mapping of field name to FieldState, ordered by field name."""

    def __init__(self, fields: Mapping[str, FieldState], record_count: int = 0):
        self._fields: Dict[str, FieldState] = dict(sorted(fields.items()))
        self.record_count = record_count

    def __getitem__(self, name: str) -> FieldState:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Schema({self._fields!r}, record_count={self.record_count})"

    def to_dict(self) -> Dict[str, Any]:
        """Returns the schema as a JSON-serializable dict."""
        return {
            'records': self.record_count,
            'fields': {name: state.to_dict() for name, state in self._fields.items()},
        }


class SchemaBuilder:
    """Builds a flat Schema from a sequence of JSON records."""

    def __init__(self, sample_size: int = 0):
        """Initialize the schema builder.

        Args:
            sample_size: Maximum number of top-level entries to inspect (0 = all)
        """
        self.sample_size = sample_size

    def build(self, records: Any) -> Schema:
        """Infers the schema of the object records in `records`.

        Entries that are not objects are skipped. A field ends up required
        only if it is present and non-null in every object record.

        Raises:
            InputShapeError: If `records` is not an array
        """
        if not isinstance(records, (list, tuple)):
            raise InputShapeError(
                f"Expected an array of records, got {type(records).__name__}",
                type(records).__name__)
        if self.sample_size > 0:
            records = records[:self.sample_size]

        fields: Dict[str, FieldState] = {}
        present: Dict[str, int] = {}
        record_count = 0
        for index, record in enumerate(records):
            if not isinstance(record, Mapping):
                logger.debug("Skipping non-object entry %d (%s)", index, type(record).__name__)
                continue
            record_count += 1
            for key, value in record.items():
                name = str(key)
                fields[name] = FieldAccumulator.observe(fields.get(name), value)
                if value is not None:
                    present[name] = present.get(name, 0) + 1

        # the running flag only reflects the latest observation; absence and
        # nulls in earlier records are settled from the presence counts
        settled = {
            name: FieldState(state.declared_type, present.get(name, 0) < record_count, state.observed_types)
            for name, state in fields.items()
        }
        logger.debug("Inferred %d fields from %d object records", len(settled), record_count)
        return Schema(settled, record_count)


def infer_schema(records: Any, sample_size: int = 0) -> Schema:
    """Infers a flat Schema from a parsed JSON array of records."""
    return SchemaBuilder(sample_size=sample_size).build(records)
