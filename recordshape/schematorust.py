"""Renders an inferred Schema as a Rust struct declaration."""

from typing import Dict

from recordshape.common import pascal, process_template, safe_name
from recordshape.schema_inference import FieldState, Schema, TypeTag


class SchemaToRust:
    """Converts a Schema to a Rust struct, optionally with Serde annotations"""

    reserved_words = [
        'as', 'break', 'const', 'continue', 'crate', 'else', 'enum', 'extern', 'false', 'fn', 'for', 'if', 'impl',
        'in', 'let', 'loop', 'match', 'mod', 'move', 'mut', 'pub', 'ref', 'return', 'self', 'Self', 'static',
        'struct', 'super', 'trait', 'true', 'type', 'unsafe', 'use', 'where', 'while', 'async', 'await', 'dyn',
        'abstract', 'become', 'box', 'do', 'final', 'gen', 'macro', 'override', 'priv', 'try', 'typeof', 'unsized',
        'virtual', 'yield',
    ]

    type_mapping: Dict[TypeTag, str] = {
        TypeTag.STRING: 'String',
        TypeTag.SIGNED_INT: 'i64',
        TypeTag.UNSIGNED_INT: 'u64',
        TypeTag.FLOAT: 'f64',
        TypeTag.BOOL: 'bool',
        TypeTag.ARRAY: 'Vec<Value>',
        TypeTag.OBJECT: 'HashMap<String, Value>',
        TypeTag.NULL: 'Value',
    }

    def __init__(self, type_name: str = 'Data', serde_annotation: bool = False) -> None:
        self.type_name = type_name
        self.serde_annotation = serde_annotation

    def safe_identifier(self, name: str) -> str:
        """Converts a name to a safe Rust identifier"""
        if name in ('self', 'Self', 'super', 'crate'):
            return f"{name}_"
        return name

    def escaped_identifier(self, name: str) -> str:
        """Converts a name to a Rust identifier, using the r# prefix for keywords"""
        if name in SchemaToRust.reserved_words:
            return f"r#{name}"
        return name

    def map_type_to_rust(self, state: FieldState) -> str:
        """Maps a field state to a Rust type, wrapping optional fields in Option"""
        rust_type = self.type_mapping[state.declared_type]
        if state.optional:
            return f"Option<{rust_type}>"
        return rust_type

    def field_identifier(self, name: str) -> str:
        """Converts a field name to a Rust identifier, before keyword escaping"""
        identifier = safe_name(name)
        if identifier == '_':
            identifier = '_field'
        return self.safe_identifier(identifier)

    def render(self, schema: Schema) -> str:
        """Generates the Rust struct for the schema"""
        identifiers = {name: self.field_identifier(name) for name in schema}
        # names that need no sanitizing keep their identifier; the others get a numeric suffix on a clash
        used = {identifier for name, identifier in identifiers.items() if identifier == name}
        fields = []
        for original_field_name, state in schema.items():
            field_name = identifiers[original_field_name]
            if field_name != original_field_name:
                candidate, counter = field_name, 1
                while candidate in used:
                    candidate = f"{field_name}_{counter}"
                    counter += 1
                field_name = candidate
                used.add(field_name)
            field_name = self.escaped_identifier(field_name)
            fields.append({
                'original_name': original_field_name.replace('\\', '\\\\').replace('"', '\\"'),
                'name': field_name,
                'type': self.map_type_to_rust(state),
                'serde_rename': self.serde_annotation and field_name.removeprefix('r#') != original_field_name,
            })
        return process_template(
            'schematorust/struct.rs.jinja',
            struct_name=self.safe_identifier(safe_name(pascal(self.type_name))),
            fields=fields,
            serde_annotation=self.serde_annotation)


def convert_schema_to_rust(schema: Schema, type_name: str = 'Data', serde_annotation: bool = False) -> str:
    """Converts a Schema to a Rust struct declaration

    Args:
        schema (Schema): The inferred schema
        type_name (str): The name of the struct
        serde_annotation (bool): Include Serde derive and rename annotations
    """
    return SchemaToRust(type_name, serde_annotation).render(schema)
