"""Build markup trees from plain data descriptions.

A description is JSON-compatible data:

* a string is text written into the parent;
* ``{"comment": "..."}`` is a comment;
* ``{"tag": "name", ...}`` is an element with the optional keys
  ``attributes`` (object), ``content`` (string), ``children`` (list of
  descriptions), ``void`` (true, false or a closure string such as ``" /"``),
  ``minimize`` (bool) and ``block`` (bool).
"""

from typing import Any, Mapping, Optional

from sgml_composer.shared import RenderConfig

from .node import MarkupNode

_ELEMENT_KEYS = frozenset(
    {"tag", "attributes", "content", "children", "void", "minimize", "block"}
)


class DescriptionError(ValueError):
    """Raised when a tree description cannot be turned into nodes."""

    def __init__(self, message: str, path: str = "$") -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


def _build_element(
    description: Mapping[str, Any], config: RenderConfig, path: str
) -> MarkupNode:
    unknown = set(description) - _ELEMENT_KEYS
    if unknown:
        raise DescriptionError(f"unknown keys {sorted(unknown)}", path)

    name = description["tag"]
    if not isinstance(name, str) or not name:
        raise DescriptionError("'tag' must be a non-empty string", path)

    attributes = description.get("attributes") or {}
    if not isinstance(attributes, Mapping):
        raise DescriptionError("'attributes' must be an object", path)

    node = MarkupNode(name, attributes)

    content = description.get("content")
    if content is not None:
        if isinstance(content, bool) or not isinstance(content, (str, int, float)):
            raise DescriptionError("'content' must be a string", path)
        node.write(content)

    children = description.get("children") or []
    if not isinstance(children, list):
        raise DescriptionError("'children' must be a list", path)
    for index, child in enumerate(children):
        build_into(node, child, config, f"{path}.children[{index}]")

    void = description.get("void", False)
    if isinstance(void, str):
        node.void(void)
    elif void is True:
        node.void(config.void_closure)
    elif void is not False:
        raise DescriptionError("'void' must be a boolean or a closure string", path)

    if description.get("minimize"):
        node.minimize()
    if description.get("block"):
        node.block()
    return node


def build_into(
    parent: MarkupNode,
    description: Any,
    config: Optional[RenderConfig] = None,
    path: str = "$",
) -> MarkupNode:
    """Add the node described by ``description`` to ``parent``.

    Args:
        parent: Node that receives the text, comment or element
        description: Text, comment or element description
        config: Render settings supplying the default void closure
        path: Location of ``description`` used in error messages

    Returns:
        The parent, for chaining

    Raises:
        DescriptionError: If the description is malformed
    """
    config = config or RenderConfig()
    if isinstance(description, str):
        parent.write(description)
    elif isinstance(description, Mapping) and "comment" in description:
        if set(description) != {"comment"}:
            raise DescriptionError("a comment takes no other keys", path)
        parent.comment(description["comment"])
    elif isinstance(description, Mapping) and "tag" in description:
        parent.attach(_build_element(description, config, path))
    else:
        raise DescriptionError(
            "expected a string, a comment object or an object with a 'tag'", path
        )
    return parent


def build_node(description: Any, config: Optional[RenderConfig] = None) -> MarkupNode:
    """Build a standalone node tree from a description.

    An element description yields that element. Text and comment
    descriptions, which have no element of their own, yield an anonymous
    node holding them.

    Raises:
        DescriptionError: If the description is malformed
    """
    config = config or RenderConfig()
    if isinstance(description, Mapping) and "tag" in description and "comment" not in description:
        return _build_element(description, config, "$")
    return build_into(MarkupNode(), description, config)
