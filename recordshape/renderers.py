"""Registry of output notations for inferred schemas.

A renderer is a callable `(schema, type_name, **options) -> str`. Adding a
notation only requires registering another such callable.
"""

import json
import logging
from typing import Callable, Dict, FrozenSet, Iterable, List

from recordshape.schema_inference import Schema
from recordshape.schematorust import convert_schema_to_rust
from recordshape.schematots import convert_schema_to_typescript

logger = logging.getLogger(__name__)

Renderer = Callable[..., str]


class UnknownNotationError(ValueError):
    """Exception raised when no renderer is registered for a notation."""

    def __init__(self, notation: str, supported: List[str]):
        self.notation = notation
        self.supported = supported
        super().__init__(f"Unknown notation '{notation}'. Supported notations: {', '.join(supported)}")


def convert_schema_to_json(schema: Schema, type_name: str = 'Data') -> str:
    """Renders the schema itself as an indented JSON document."""
    return json.dumps({'name': type_name, **schema.to_dict()}, indent=2)


NOTATIONS: Dict[str, Renderer] = {
    'rust': convert_schema_to_rust,
    'typescript': convert_schema_to_typescript,
    'ts': convert_schema_to_typescript,
    'json': convert_schema_to_json,
}

# keyword options each renderer accepts beyond the schema and the type name
NOTATION_OPTIONS: Dict[str, FrozenSet[str]] = {
    'rust': frozenset(['serde_annotation']),
    'typescript': frozenset(['export']),
    'ts': frozenset(['export']),
    'json': frozenset(),
}


def register_renderer(notation: str, renderer: Renderer, options: Iterable[str] = ()) -> None:
    """Registers a renderer under a notation name, replacing any previous one.

    Args:
        notation: The notation name (case-insensitive)
        renderer: Callable `(schema, type_name, **options) -> str`
        options: Names of the keyword options the renderer accepts
    """
    NOTATIONS[notation.lower()] = renderer
    NOTATION_OPTIONS[notation.lower()] = frozenset(options)


def get_renderer(notation: str) -> Renderer:
    """Returns the renderer for a notation.

    Raises:
        UnknownNotationError: If the notation is not registered
    """
    renderer = NOTATIONS.get(notation.lower()) if isinstance(notation, str) else None
    if renderer is None:
        raise UnknownNotationError(str(notation), sorted(NOTATIONS))
    return renderer


def render_schema(schema: Schema, notation: str, type_name: str = 'Data', **options) -> str:
    """Renders the schema in the given notation.

    Options the notation does not accept are ignored.
    """
    renderer = get_renderer(notation)
    accepted = NOTATION_OPTIONS.get(notation.lower(), frozenset())
    ignored = sorted(name for name, value in options.items() if name not in accepted and value)
    if ignored:
        logger.debug("Ignoring options %s for notation %s", ', '.join(ignored), notation)
    logger.debug("Rendering %d fields as %s", len(schema), notation)
    return renderer(schema, type_name, **{name: value for name, value in options.items() if name in accepted})
