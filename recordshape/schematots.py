# pylint: disable=missing-module-docstring, line-too-long

import json
import re
from typing import Dict

from recordshape.common import pascal, process_template, safe_name
from recordshape.schema_inference import Schema, TypeTag


def is_typescript_identifier(name: str) -> bool:
    """Check if name can be used unquoted as a TypeScript property name."""
    return re.match(r'^[A-Za-z_$][A-Za-z0-9_$]*$', name) is not None


class SchemaToTypeScript:
    """Converts a Schema to a TypeScript interface."""

    def __init__(self, type_name: str = 'Data', export: bool = False) -> None:
        self.type_name = type_name
        self.export = export

    def map_type_to_typescript(self, type_tag: TypeTag) -> str:
        """Map a type tag to a TypeScript type."""
        mapping: Dict[TypeTag, str] = {
            TypeTag.STRING: 'string',
            TypeTag.SIGNED_INT: 'number',
            TypeTag.UNSIGNED_INT: 'number',
            TypeTag.FLOAT: 'number',
            TypeTag.BOOL: 'boolean',
            TypeTag.ARRAY: 'Array',
            TypeTag.OBJECT: 'Record<string, unknown>',
            TypeTag.NULL: 'null',
        }
        return mapping[type_tag]

    def property_name(self, name: str) -> str:
        """Quotes a property name that is not a valid identifier."""
        if is_typescript_identifier(name):
            return name
        return json.dumps(name)

    def render(self, schema: Schema) -> str:
        """Generate the TypeScript interface for the schema."""
        fields = [{
            'name': self.property_name(name),
            'type': self.map_type_to_typescript(state.declared_type),
            'optional': state.optional,
        } for name, state in schema.items()]
        return process_template(
            'schematots/interface.ts.jinja',
            interface_name=safe_name(pascal(self.type_name)),
            fields=fields,
            export=self.export)


def convert_schema_to_typescript(schema: Schema, type_name: str = 'Data', export: bool = False) -> str:
    """Convert a Schema to a TypeScript interface declaration."""
    return SchemaToTypeScript(type_name, export).render(schema)
