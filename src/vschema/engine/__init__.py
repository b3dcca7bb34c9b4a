"""Tree-walking engines: validation and coercion.

Both dispatch on the schema variant, recurse into children for composite
schemas, and prepend keys/indices to errors as they unwind.
"""

from vschema.engine.coercer import coerce_node
from vschema.engine.validator import validate_node

__all__ = [
    "coerce_node",
    "validate_node",
]
