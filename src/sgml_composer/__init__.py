"""SGML Composer.

Build HTML, XML and other SGML-family documents as trees of nodes and
serialize them either minimized or indented for reading.

Progressive API Disclosure:
- Level 1: Simple functions - create(), compose()
- Level 2: Node trees - MarkupNode with fluent mutators, render() and flush()
- Level 3: Configured output - ComposerConfig and RenderConfig presets
"""

from typing import Any, Optional

__version__ = "0.1.0"
__author__ = "SGML Composer Team"

from .markup import DescriptionError, MarkupNode, build_node, process_arguments
from .markup.arguments import pack_arguments
from .shared.config import ComposerConfig, ConfigValidationError, RenderConfig


def create(name: str = "", *arguments: Any) -> MarkupNode:
    """Create a standalone node.

    Arguments follow `MarkupNode.tag`: one argument is normalized as is,
    several are treated as one sequence of content and attribute mappings.
    """
    return MarkupNode(name, pack_arguments(arguments))


def compose(
    description: Any,
    minimize: Optional[bool] = None,
    config: Optional[ComposerConfig] = None
) -> str:
    """Render a JSON-compatible tree description to markup.

    Args:
        description: Text, comment or element description
            (see `sgml_composer.markup.description`)
        minimize: Render minimized; defaults to the configuration's setting
        config: Composer configuration, the defaults when omitted

    Returns:
        The markup text
    """
    config = config or ComposerConfig()
    return build_node(description, config.render).render(minimize, config=config.render)


__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "create",
    "compose",

    # Level 2: Node trees
    "MarkupNode",
    "DescriptionError",
    "process_arguments",

    # Level 3: Configuration
    "ComposerConfig",
    "RenderConfig",
    "ConfigValidationError",
]
