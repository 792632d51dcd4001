"""Element building with configurable CSS class prefix."""

from collections.abc import Mapping, Sequence
from typing import Any, Callable, Optional, Protocol, Union

from nbrender.models import Element


class MinimalElement(Protocol):
    """The smallest element surface the renderer depends on."""

    inner_html: Optional[str]

    def set_attribute(self, name: str, value: str) -> None: ...

    def append_child(self, child: Any) -> Any: ...


ClassesOrAttrs = Union[Sequence[str], Mapping[str, str], None]
ChildrenOrHtml = Union[Sequence[Any], str, None]


class ElementBuilder:
    """Build elements from a tag, classes or attributes, and content.

    All class names are prefixed with ``class_prefix`` except ``lang-*``
    classes, which mark the language of a code block for syntax highlighters.

    Example:
        >>> el = ElementBuilder()
        >>> el("pre", ["text-output"], "&lt;hi&gt;").outer_html
        '<pre class="nb-text-output">&lt;hi&gt;</pre>'
    """

    def __init__(
        self,
        create_element: Callable[[str], Any] = Element,
        class_prefix: str = "nb-",
    ):
        """Initialize element builder.

        Args:
            create_element: Factory creating an empty element for a tag name
            class_prefix: Prefix for all class names except lang-*
        """
        self.create_element = create_element
        self.class_prefix = class_prefix

    def prefix_class_name(self, name: str) -> str:
        return name if name.startswith("lang-") else self.class_prefix + name

    def __call__(
        self,
        tag: str,
        classes_or_attrs: ClassesOrAttrs = None,
        children_or_html: ChildrenOrHtml = None,
    ) -> Any:
        """Create an element.

        Args:
            tag: Tag name
            classes_or_attrs: List of class names, or mapping of attributes
                (its "class" value is split and prefixed like a class list)
            children_or_html: List of child elements, or raw inner HTML that
                is assigned without any escaping

        Returns:
            The created element
        """
        el = self.create_element(tag)

        if isinstance(classes_or_attrs, Mapping):
            for name, value in classes_or_attrs.items():
                if name == "class":
                    value = " ".join(self.prefix_class_name(c) for c in value.split(" "))
                el.set_attribute(name, value)
        elif classes_or_attrs:
            el.set_attribute(
                "class", " ".join(self.prefix_class_name(c) for c in classes_or_attrs)
            )

        if isinstance(children_or_html, str):
            if children_or_html:
                el.inner_html = children_or_html
        elif children_or_html:
            for child in children_or_html:
                el.append_child(child)

        return el
