"""Infers a type declaration from a JSON file holding an array of records.

This module provides:
- j2d: Infer a declaration in any registered notation
- j2rs: Infer a Rust struct
- j2ts: Infer a TypeScript interface
"""

import json
import logging
import os

from recordshape.renderers import get_renderer, render_schema
from recordshape.schema_inference import SchemaBuilder

logger = logging.getLogger(__name__)


def convert_json_to_declaration(
    input_file: str,
    output_file: str,
    notation: str,
    type_name: str = 'Data',
    sample_size: int = 0,
    serde_annotation: bool = False,
    export: bool = False
) -> str:
    """Infers a type declaration from a JSON file.

    Reads a JSON document whose root is an array of records, infers the
    flat schema of the object records and renders it in the requested
    notation. The notation is resolved before the file is read.

    Args:
        input_file: Path of the JSON file to analyze
        output_file: Output path for the declaration (empty = don't write)
        notation: Output notation ('rust', 'typescript', 'json', ...)
        type_name: Name of the generated type
        sample_size: Maximum number of records to sample (0 = all)
        serde_annotation: Add Serde annotations (ignored unless rust)
        export: Export the interface (ignored unless typescript)

    Returns:
        The rendered declaration
    """
    get_renderer(notation)

    with open(input_file, 'r', encoding='utf-8') as f:
        data = json.load(f)
    logger.info("Read %s", input_file)

    schema = SchemaBuilder(sample_size=sample_size).build(data)
    declaration = render_schema(schema, notation, type_name,
                                serde_annotation=serde_annotation, export=export)

    if output_file:
        output_dir = os.path.dirname(output_file)
        if output_dir and not os.path.exists(output_dir):
            os.makedirs(output_dir)
        with open(output_file, 'w', encoding='utf-8') as f:
            f.write(declaration + '\n')
        logger.info("Wrote %s declaration to %s", notation, output_file)
    return declaration


def convert_json_to_rust(input_file: str, output_file: str, type_name: str = 'Data',
                         sample_size: int = 0, serde_annotation: bool = False) -> str:
    """Infers a Rust struct from a JSON file."""
    return convert_json_to_declaration(input_file, output_file, 'rust', type_name,
                                       sample_size, serde_annotation=serde_annotation)


def convert_json_to_typescript(input_file: str, output_file: str, type_name: str = 'Data',
                               sample_size: int = 0, export: bool = False) -> str:
    """Infers a TypeScript interface from a JSON file."""
    return convert_json_to_declaration(input_file, output_file, 'typescript', type_name,
                                       sample_size, export=export)
