"""Markup tree model and serializer.

Key Components:
    MarkupNode: Element, text fragment or comment with fluent mutators,
        rendering and one-shot flushing
    process_arguments: Normalizes loose construction arguments into content
        and attributes
    build_node / build_into: Build trees from JSON-compatible descriptions
"""

from .arguments import process_arguments
from .description import DescriptionError, build_into, build_node
from .node import COMMENT_NAME, MarkupNode, escape_attribute_value

__all__ = [
    "COMMENT_NAME",
    "DescriptionError",
    "MarkupNode",
    "build_into",
    "build_node",
    "escape_attribute_value",
    "process_arguments",
]
