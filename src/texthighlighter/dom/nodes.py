"""Mutable document tree: element and text nodes.

A deliberately small DOM.  Element and text nodes are distinct classes that
share a ``Node`` base carrying parent/sibling navigation; the ``node_type``
discriminant is what callers switch on.  Children are ordered lists, so
sibling indices are positional and change whenever a text node is split or a
node is wrapped.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


class NodeType(Enum):
    """Discriminant for the two node variants (DOM nodeType values)."""

    ELEMENT = 1
    TEXT = 3


class Node:
    """Behaviour shared by elements and text nodes."""

    __slots__ = ("parent",)

    node_type: ClassVar[NodeType]

    def __init__(self) -> None:
        self.parent: Element | None = None

    # -- navigation --------------------------------------------------------

    @property
    def index(self) -> int:
        """Position of this node among its parent's children."""
        if self.parent is None:
            msg = "Detached node has no index"
            raise ValueError(msg)
        for i, child in enumerate(self.parent.children):
            if child is self:
                return i
        msg = "Node not found in its parent's children"
        raise ValueError(msg)

    @property
    def previous_sibling(self) -> Node | None:
        if self.parent is None:
            return None
        i = self.index
        return self.parent.children[i - 1] if i > 0 else None

    @property
    def next_sibling(self) -> Node | None:
        if self.parent is None:
            return None
        siblings = self.parent.children
        i = self.index
        return siblings[i + 1] if i + 1 < len(siblings) else None

    @property
    def depth(self) -> int:
        """Number of ancestors."""
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def ancestors(self) -> Iterator[Element]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def root(self) -> Node:
        node: Node = self
        while node.parent is not None:
            node = node.parent
        return node

    def contains(self, other: Node | None) -> bool:
        """True if *other* is this node or one of its descendants."""
        node = other
        while node is not None:
            if node is self:
                return True
            node = node.parent
        return False

    def tree_position(self) -> tuple[int, ...]:
        """Child-index path from the root; sorts in document order."""
        path: list[int] = []
        node: Node = self
        while node.parent is not None:
            path.append(node.index)
            node = node.parent
        path.reverse()
        return tuple(path)

    # -- mutation ----------------------------------------------------------

    def remove(self) -> None:
        """Detach this node from its parent (no-op when already detached)."""
        if self.parent is not None:
            self.parent.remove_child(self)

    def move_before(self, ref: Node) -> None:
        """Move this node so it sits immediately before *ref*."""
        if ref.parent is None:
            msg = "Reference node is detached"
            raise ValueError(msg)
        self.remove()
        ref.parent.insert_child(ref.index, self)

    def move_after(self, ref: Node) -> None:
        """Move this node so it sits immediately after *ref*."""
        if ref.parent is None:
            msg = "Reference node is detached"
            raise ValueError(msg)
        self.remove()
        ref.parent.insert_child(ref.index + 1, self)

    def wrap(self, wrapper: Element) -> Element:
        """Put *wrapper* in this node's place and move this node inside it."""
        if self.parent is not None:
            self.parent.replace_child(wrapper, self)
        wrapper.append_child(self)
        return wrapper

    # -- content -----------------------------------------------------------

    @property
    def text_content(self) -> str:
        raise NotImplementedError

    def clone(self, deep: bool = True) -> Node:
        raise NotImplementedError

    @property
    def is_element(self) -> bool:
        return self.node_type is NodeType.ELEMENT

    @property
    def is_text(self) -> bool:
        return self.node_type is NodeType.TEXT


class Text(Node):
    """A text node.  Length only changes through ``split`` or assignment."""

    __slots__ = ("data",)

    node_type: ClassVar[NodeType] = NodeType.TEXT

    def __init__(self, data: str = "") -> None:
        super().__init__()
        self.data = data

    def __len__(self) -> int:
        return len(self.data)

    def __repr__(self) -> str:
        return f"Text({self.data!r})"

    @property
    def text_content(self) -> str:
        return self.data

    def clone(self, deep: bool = True) -> Text:
        return Text(self.data)

    def split(self, offset: int) -> Text:
        """Split at *offset*, DOM ``splitText`` style.

        This node keeps ``data[:offset]``; a new text node holding the rest is
        inserted right after it and returned.  Either part may be empty.

        Raises:
            IndexError: If *offset* is negative or past the end of the text.
        """
        if offset < 0 or offset > len(self.data):
            msg = (
                f"Split offset {offset} out of range for text of "
                f"length {len(self.data)}"
            )
            raise IndexError(msg)
        tail = Text(self.data[offset:])
        self.data = self.data[:offset]
        if self.parent is not None:
            self.parent.insert_child(self.index + 1, tail)
        return tail


class Element(Node):
    """An element node with a tag, ordered attributes and ordered children."""

    __slots__ = ("attributes", "children", "tag")

    node_type: ClassVar[NodeType] = NodeType.ELEMENT

    def __init__(
        self,
        tag: str,
        attributes: dict[str, str] | None = None,
        children: Iterable[Node] = (),
    ) -> None:
        super().__init__()
        self.tag = tag.lower()
        self.attributes: dict[str, str] = dict(attributes or {})
        self.children: list[Node] = []
        for child in children:
            self.append_child(child)

    def __repr__(self) -> str:
        return (
            f"Element({self.tag!r}, {self.attributes!r}, "
            f"children={len(self.children)})"
        )

    # -- attributes --------------------------------------------------------

    def get(self, name: str, default: str | None = None) -> str | None:
        return self.attributes.get(name, default)

    def set(self, name: str, value: str) -> None:
        self.attributes[name] = value

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def remove_attribute(self, name: str) -> None:
        self.attributes.pop(name, None)

    # -- children ----------------------------------------------------------

    @property
    def first_child(self) -> Node | None:
        return self.children[0] if self.children else None

    @property
    def last_child(self) -> Node | None:
        return self.children[-1] if self.children else None

    def has_child_nodes(self) -> bool:
        return bool(self.children)

    def insert_child(self, index: int, node: Node) -> None:
        if node.contains(self):
            msg = "Cannot insert a node into its own subtree"
            raise ValueError(msg)
        node.remove()
        self.children.insert(index, node)
        node.parent = self

    def append_child(self, node: Node) -> None:
        self.insert_child(len(self.children), node)

    def remove_child(self, node: Node) -> None:
        if node.parent is not self:
            msg = "Node is not a child of this element"
            raise ValueError(msg)
        del self.children[node.index]
        node.parent = None

    def replace_child(self, new: Node, old: Node) -> None:
        if old.parent is not self:
            msg = "Node to replace is not a child of this element"
            raise ValueError(msg)
        if new is old:
            return
        new.remove()
        i = old.index
        self.children[i] = new
        new.parent = self
        old.parent = None

    def append(self, nodes: Iterable[Node]) -> None:
        """Move *nodes* to the end of this element, keeping their order."""
        for node in list(nodes):
            self.append_child(node)

    def prepend(self, nodes: Iterable[Node]) -> None:
        """Move *nodes* to the start of this element, keeping their order."""
        for i, node in enumerate(list(nodes)):
            self.insert_child(i, node)

    def unwrap(self) -> list[Node]:
        """Replace this element with its children; return the moved children."""
        moved = list(self.children)
        parent = self.parent
        if parent is None:
            return moved
        position = self.index
        for offset, child in enumerate(moved):
            parent.insert_child(position + offset, child)
        self.remove()
        return moved

    def normalize_text_nodes(self) -> None:
        """Coalesce adjacent text children and drop empty ones, recursively."""
        previous: Text | None = None
        for child in list(self.children):
            if isinstance(child, Text):
                if not child.data:
                    child.remove()
                elif previous is not None:
                    previous.data += child.data
                    child.remove()
                else:
                    previous = child
                continue
            previous = None
            if isinstance(child, Element):
                child.normalize_text_nodes()

    # -- traversal ---------------------------------------------------------

    def iter_descendants(self) -> Iterator[Node]:
        """Yield descendants in document (pre-) order, excluding self."""
        stack: list[Node] = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, Element):
                stack.extend(reversed(node.children))

    def iter_elements(self) -> Iterator[Element]:
        for node in self.iter_descendants():
            if isinstance(node, Element):
                yield node

    def iter_text_nodes(self) -> Iterator[Text]:
        for node in self.iter_descendants():
            if isinstance(node, Text):
                yield node

    def find_by_id(self, element_id: str) -> Element | None:
        if self.get("id") == element_id:
            return self
        for element in self.iter_elements():
            if element.get("id") == element_id:
                return element
        return None

    def find_first(self, tag: str) -> Element | None:
        tag = tag.lower()
        for element in self.iter_elements():
            if element.tag == tag:
                return element
        return None

    # -- content -----------------------------------------------------------

    @property
    def text_content(self) -> str:
        return "".join(node.data for node in self.iter_text_nodes())

    def clone(self, deep: bool = True) -> Element:
        copy = Element(self.tag, self.attributes)
        if deep:
            for child in self.children:
                copy.append_child(child.clone(deep=True))
        return copy
