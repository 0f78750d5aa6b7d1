"""Argument normalization for markup node construction.

A node accepts a loose mix of content and attributes so callers can write
``MarkupNode("p", "text")``, ``MarkupNode("p", {"id": "x"})`` or
``MarkupNode("p", ["text", {"id": "x"}])`` interchangeably.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

Attributes = Dict[str, str]
Arguments = Optional[Union[str, Mapping[str, Any], Sequence[Any]]]


def attribute_value(value: Any) -> str:
    """Coerce an attribute value to the string stored on a node."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def pack_arguments(arguments: Tuple[Any, ...]) -> Arguments:
    """Turn positional arguments into a single normalizable argument.

    No arguments mean ``None``, one argument is passed through and several
    become a list, so ``tag("a", "home", {"href": "/"})`` reads naturally.
    """
    if not arguments:
        return None
    if len(arguments) == 1:
        return arguments[0]
    return list(arguments)


def _collect(argument: Any, content: List[str], attributes: Attributes) -> None:
    if argument is None:
        return
    if isinstance(argument, Mapping):
        # Later mappings win on key collisions.
        for name, value in argument.items():
            attributes[str(name)] = attribute_value(value)
    elif isinstance(argument, (list, tuple)):
        for item in argument:
            _collect(item, content, attributes)
    elif isinstance(argument, str):
        content.append(argument)
    else:
        content.append(str(argument))


def process_arguments(arguments: Arguments) -> Tuple[str, Attributes]:
    """Split node arguments into content and attributes.

    Mappings contribute attributes, merged in order with the last value for
    a key winning. Every other value contributes content; content pieces are
    joined with single spaces in the order they were given. Nested lists and
    tuples are flattened and ``None`` is ignored, so no input shape raises.

    Args:
        arguments: ``None``, a single string or mapping, or a sequence mixing
            strings and mappings

    Returns:
        Tuple of the joined content string and the attribute dictionary
    """
    content: List[str] = []
    attributes: Attributes = {}
    _collect(arguments, content, attributes)
    return " ".join(content), attributes
