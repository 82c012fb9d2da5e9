"""Data models for the section scraper pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Iterator, List, Optional, Tuple, Union


@dataclass(frozen=True)
class Rect:
    """A bounding box in CSS layout pixels."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Rect:
        return cls(
            x=float(raw["x"]),
            y=float(raw["y"]),
            width=float(raw["width"]),
            height=float(raw["height"]),
        )

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(eq=False)
class DomElement:
    """One element of a rendered-DOM snapshot.

    Equality is identity: two structurally identical elements are still two
    distinct candidates.
    """

    tag: str
    attrs: List[Tuple[str, str]] = field(default_factory=list)
    rect: Rect = field(default_factory=lambda: Rect(0.0, 0.0, 0.0, 0.0))
    children: List[Union["DomElement", str]] = field(default_factory=list)
    markup: Optional[str] = None
    parent: Optional["DomElement"] = field(default=None, repr=False)

    @classmethod
    def from_snapshot(cls, raw: dict[str, Any]) -> DomElement:
        """Build an element tree from the JSON value produced in-page.

        Element nodes are ``{"tag", "attrs", "rect", "children"}``, plus
        ``"html"`` on section candidates: the cleaned ``outerHTML`` the page
        produced for them.  Children are element nodes or plain strings (text).
        The tree is built iteratively so deep documents cannot exhaust the
        interpreter's recursion limit.
        """
        root = cls._from_node(raw, parent=None)
        stack: list[tuple[DomElement, dict[str, Any]]] = [(root, raw)]
        while stack:
            element, node = stack.pop()
            for child in node.get("children", []):
                if isinstance(child, str):
                    element.children.append(child)
                else:
                    child_el = cls._from_node(child, parent=element)
                    element.children.append(child_el)
                    stack.append((child_el, child))
        return root

    @classmethod
    def _from_node(cls, node: dict[str, Any], parent: Optional[DomElement]) -> DomElement:
        return cls(
            tag=str(node["tag"]),
            attrs=[(str(name), str(value)) for name, value in node.get("attrs", [])],
            rect=Rect.from_dict(node["rect"]),
            markup=node.get("html"),
            parent=parent,
        )

    @property
    def tag_name(self) -> str:
        """Lower-cased tag name, used for every tag comparison."""
        return self.tag.lower()

    def get_attr(self, name: str) -> str | None:
        for attr_name, value in self.attrs:
            if attr_name == name:
                return value
        return None

    def iter_elements(self) -> Iterator[DomElement]:
        """Yield this element and all descendant elements in document order."""
        stack: list[DomElement] = [self]
        while stack:
            element = stack.pop()
            yield element
            stack.extend(
                reversed([c for c in element.children if isinstance(c, DomElement)])
            )

    def text_content(self) -> str:
        """Concatenated text of every descendant text node, like DOM ``textContent``."""
        parts: list[str] = []
        stack: list[Union[DomElement, str]] = [self]
        while stack:
            node = stack.pop()
            if isinstance(node, str):
                parts.append(node)
            elif isinstance(node, DomElement):
                stack.extend(reversed(node.children))
        return "".join(parts)

    def has_descendant(self, tag_name: str) -> bool:
        return any(
            el.tag_name == tag_name for el in self.iter_elements() if el is not self
        )


@dataclass
class SectionCandidate:
    """A DOM element that passed the size and content filters."""

    tag_name: str
    bounding_rect: Rect
    text_preview: str
    raw_markup: str
    native_id: str = ""


@dataclass
class ScrapedSection:
    """The externally visible form of a candidate."""

    id: str
    tag_name: str
    html: str
    text: str
    rect: Rect

    @classmethod
    def from_candidate(cls, candidate: SectionCandidate, index: int) -> ScrapedSection:
        return cls(
            id=candidate.native_id or f"section-{index}",
            tag_name=candidate.tag_name,
            html=candidate.raw_markup,
            text=candidate.text_preview,
            rect=candidate.bounding_rect,
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON shape used on the wire (camel-cased ``tagName``)."""
        return {
            "id": self.id,
            "tagName": self.tag_name,
            "html": self.html,
            "text": self.text,
            "rect": self.rect.to_dict(),
        }
