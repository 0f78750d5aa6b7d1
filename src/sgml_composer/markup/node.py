"""Markup tree nodes and their serializer.

A `MarkupNode` is one element, one anonymous text fragment or one comment.
A node holds either inline content or child nodes, never both: attaching a
child to a node with content first moves that content into an anonymous
child so text and elements keep their document order.

Serialization is a recursive walk that either minimizes (no whitespace, no
comments) or indents one structural line per nesting level. Flushing renders
a node once and then empties it, so a later flush of the same node emits
only what was added since, without repeating the start tag.
"""

import io
import weakref
from dataclasses import InitVar, dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from sgml_composer.shared import RenderConfig, get_logger

from .arguments import Arguments, attribute_value, pack_arguments, process_arguments

COMMENT_NAME = "--"

_DEFAULT_RENDER_CONFIG = RenderConfig()
_ATTRIBUTE_ESCAPES = str.maketrans({
    "\\": "\\\\",
    '"': '\\"',
    "'": "\\'",
    "\0": "\\0",
})

_logger = get_logger(__name__, component="markup_node")


def escape_attribute_value(value: str) -> str:
    """Backslash-escape quotes, backslashes and NUL in an attribute value."""
    return value.translate(_ATTRIBUTE_ESCAPES)


@dataclass(eq=False)
class MarkupNode:
    """Represents a single node of a markup tree.

    Nodes are built with a tag name and loose arguments (see
    `process_arguments`) and grown through the fluent mutators, each of which
    returns the node itself, or the new child for `attach` and `tag`.
    """

    name: str = ""
    arguments: InitVar[Arguments] = None

    content: str = field(default="", init=False)
    children: List["MarkupNode"] = field(default_factory=list, init=False)
    attributes: Dict[str, str] = field(default_factory=dict, init=False)

    # Rendering flags
    is_void: bool = field(default=False, init=False)
    void_closure: str = field(default="", init=False)
    minimized: bool = field(default=False, init=False)
    blocked: bool = field(default=False, init=False)
    start_flushed: bool = field(default=False, init=False)

    _parent: Optional["weakref.ReferenceType[MarkupNode]"] = field(
        default=None, init=False, repr=False
    )

    def __post_init__(self, arguments: Arguments) -> None:
        """Split the construction arguments into content and attributes."""
        self.content, self.attributes = process_arguments(arguments)

    @property
    def parent(self) -> Optional["MarkupNode"]:
        """The node this one is attached to, if it is still alive."""
        return self._parent() if self._parent is not None else None

    @property
    def is_comment(self) -> bool:
        return self.name == COMMENT_NAME

    def has_name(self) -> bool:
        return self.name != ""

    def has_content(self) -> bool:
        return self.content != ""

    def has_children(self) -> bool:
        return len(self.children) > 0

    def clear_content(self) -> "MarkupNode":
        self.content = ""
        return self

    # Attributes

    def get_attribute(self, name: str) -> str:
        """Get an attribute value, or an empty string when it is not set."""
        return self.attributes.get(name, "")

    def set_attribute(self, name: str, value: Any, append: bool = False) -> "MarkupNode":
        """Set an attribute, overwriting any previous value.

        Args:
            name: Attribute name
            value: Attribute value; an empty value renders as a bare name
            append: Add the value to the existing one, separated by a space

        Returns:
            This node, for chaining
        """
        value = attribute_value(value)
        if append:
            value = f"{self.get_attribute(name)} {value}".strip()
        self.attributes[name] = value
        return self

    def set_attributes(self, attributes: Optional[Mapping[str, Any]]) -> "MarkupNode":
        """Set several attributes in the mapping's iteration order."""
        for name, value in (attributes or {}).items():
            self.set_attribute(name, value)
        return self

    def remove_attribute(self, name: str) -> "MarkupNode":
        self.attributes.pop(name, None)
        return self

    # Content and children

    def write(self, text: Any) -> "MarkupNode":
        """Append text after everything already in this node."""
        text = text if isinstance(text, str) else str(text)
        if not text:
            return self
        if self.has_children():
            self._adopt(MarkupNode("", text))
        else:
            self.content += text
        return self

    def attach(self, child: "MarkupNode") -> "MarkupNode":
        """Attach a child node after the existing content and children.

        Inline content is first promoted to an anonymous child so that it
        keeps its place in front of the new child. A child that already
        belongs to another node is moved.

        Returns:
            The attached child
        """
        if self.has_content():
            self._adopt(MarkupNode("", self.content))
            self.content = ""
        self._adopt(child)
        return child

    def tag(self, name: str, *arguments: Any) -> "MarkupNode":
        """Create a child element with any tag name and attach it.

        A single argument is normalized as is; several arguments are treated
        as one sequence, so ``node.tag("a", "home", {"href": "/"})`` works.

        Returns:
            The new child
        """
        return self.attach(MarkupNode(name, pack_arguments(arguments)))

    def comment(self, text: Any) -> "MarkupNode":
        self.attach(MarkupNode(COMMENT_NAME, text))
        return self

    def _adopt(self, child: "MarkupNode") -> None:
        previous = child.parent
        if previous is not None:
            previous.children = [c for c in previous.children if c is not child]
        child._parent = weakref.ref(self)
        self.children.append(child)

    # Rendering flags

    def void(self, closure: str = "") -> "MarkupNode":
        """Render without an end tag; use ``" /"`` as closure for XML style."""
        self.void_closure = closure
        self.is_void = True
        return self

    def minimize(self) -> "MarkupNode":
        """Always render the inside of this node minimized."""
        self.minimized = True
        return self

    def block(self) -> "MarkupNode":
        """Withhold the end tag until `unblock` is called."""
        self.blocked = True
        return self

    def unblock(self) -> "MarkupNode":
        self.blocked = False
        return self

    # Serialization

    def _start_tag(self) -> str:
        if self.start_flushed:
            return ""
        parts = [self.name]
        for name, value in self.attributes.items():
            parts.append(name if value == "" else f'{name}="{escape_attribute_value(value)}"')
        closure = self.void_closure if self.is_void else ""
        return f"<{' '.join(parts)}{closure}>"

    def _end_tag(self) -> str:
        if self.is_void or self.blocked or not self.name:
            return ""
        return f"</{self.name}>"

    def render(
        self,
        minimize: Optional[bool] = None,
        indent_level: int = 0,
        config: Optional[RenderConfig] = None
    ) -> str:
        """Serialize this node and its descendants.

        Args:
            minimize: Render without whitespace and comments; defaults to the
                configuration's ``minimize_by_default``
            indent_level: Nesting level of this node in verbose output
            config: Render settings, the package defaults when omitted

        Returns:
            The markup text
        """
        config = config or _DEFAULT_RENDER_CONFIG
        if minimize is None:
            minimize = config.minimize_by_default
        return self._render(minimize, indent_level, config)

    def _render(self, minimize: bool, level: int, config: RenderConfig) -> str:
        # A node may force minimization onto its inside, never lift it.
        inner_minimize = minimize or self.minimized or self.is_void
        indent = config.indent(level)

        if self.has_content():
            if not self.has_name():
                markup = self.content
            elif self.is_comment:
                markup = "" if inner_minimize else f"<!-- {self.content} -->"
            else:
                markup = self._start_tag() + self.content + self._end_tag()
        elif self.has_children():
            start = self._start_tag() if self.has_name() else ""
            end = self._end_tag()
            rendered = [child._render(inner_minimize, level + 1, config) for child in self.children]
            if inner_minimize:
                markup = start + "".join(rendered) + end
            else:
                head = f"{indent}{start}{config.line_break}" if start else ""
                tail = f"{indent}{end}{config.line_break}" if end else ""
                return head + "".join(rendered) + tail
        elif self.has_name() and not self.is_comment:
            markup = self._start_tag() + self._end_tag()
        else:
            markup = ""

        if minimize or not markup:
            return markup
        return f"{indent}{markup}{config.line_break}"

    def flush(
        self,
        minimize: Optional[bool] = None,
        sink: Optional[Any] = None,
        config: Optional[RenderConfig] = None
    ) -> Any:
        """Render this node once, then empty it.

        After a flush the start tag is never emitted again and the content,
        children and attributes are gone; a blocked node can therefore be
        flushed repeatedly to stream its inside and, once unblocked, its end
        tag.

        Args:
            minimize: Render minimized; see `render`
            sink: Optional writable object. Text streams receive the markup as
                ``str``, anything else receives it encoded with the configured
                encoding
            config: Render settings, the package defaults when omitted

        Returns:
            The markup when no sink is given, otherwise the sink's write result
        """
        config = config or _DEFAULT_RENDER_CONFIG
        markup = self.render(minimize, config=config)

        if sink is None:
            result: Any = markup
        else:
            try:
                if isinstance(sink, io.TextIOBase):
                    result = sink.write(markup)
                else:
                    result = sink.write(markup.encode(config.encoding))
            except Exception:
                _logger.exception(
                    "Writing markup to sink failed",
                    extra={"node": self.name, "sink": type(sink).__name__},
                )
                raise

        _logger.debug(
            "Flushed markup",
            extra={
                "node": self.name,
                "characters": len(markup),
                "sink": type(sink).__name__ if sink is not None else None,
            },
        )

        self.start_flushed = True
        self.content = ""
        for child in self.children:
            child._parent = None
        self.children = []
        self.attributes = {}
        return result
