"""Output tree node produced by the notebook renderer."""

from dataclasses import dataclass, field
from html import escape
from typing import Optional

# Elements that never have content and are serialized without a closing tag.
VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "source", "track", "wbr",
})


@dataclass
class Element:
    """A minimal HTML element.

    An element holds either child elements or raw inner HTML. When
    ``inner_html`` is set it takes precedence over the children; appending a
    child clears it.

    Attributes:
        tag: Tag name
        attributes: Attributes in the order they were set
        children: Child elements
        inner_html: Raw inner content, emitted verbatim
    """

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: list["Element"] = field(default_factory=list)
    inner_html: Optional[str] = None

    def set_attribute(self, name: str, value: str) -> None:
        self.attributes[name] = value

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def append_child(self, child: "Element") -> "Element":
        self.inner_html = None
        self.children.append(child)
        return child

    @property
    def class_name(self) -> str:
        return self.attributes.get("class", "")

    @property
    def html(self) -> str:
        """Serialized content of the element (without the element itself)."""
        if self.inner_html is not None:
            return self.inner_html
        return "".join(child.outer_html for child in self.children)

    @property
    def outer_html(self) -> str:
        """Serialized element including its own tag."""
        attrs = "".join(
            f' {name}="{escape(value, quote=True)}"' for name, value in self.attributes.items()
        )
        if self.tag in VOID_ELEMENTS:
            return f"<{self.tag}{attrs}>"
        return f"<{self.tag}{attrs}>{self.html}</{self.tag}>"

    def __str__(self) -> str:
        return self.outer_html
