"""Mutable, mergeable collection of HTML attributes."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from attrs import define, field
from markupsafe import Markup, escape

from .errors import NullAttributeValue
from .sources import (
    NameFunction,
    RawPairList,
    check_key,
    pair_from_function,
    pairs_from_keywords,
    pairs_from_object,
    pairs_from_source,
    value_text,
)

# Attribute keys mapped to the text of their values, in insertion order.
AttributeDict = dict[str, str]
TextPairList = list[tuple[str, str]]

CLASS_KEY = "class"


def _to_text(pairs: RawPairList) -> TextPairList:
    """Validate every value before anything is written to the bag."""

    return [(key, value_text(key, value)) for key, value in pairs]


@define(slots=True, eq=False, init=False)
class HtmlAttributes:
    """A set of HTML attributes that renders as a pre-escaped string.

    Attributes can be supplied as single-parameter functions whose parameter
    name is the key (``lambda data_foo: "x"``), as keyword arguments, as
    ``(key, value)`` pairs, as mappings or as any object with public fields.
    Keys derived from Python names have underscores turned into hyphens;
    mapping and pair keys are used verbatim.

    Every mutating method returns the instance so calls can be chained.
    Instances are not safe for concurrent mutation.

    Example:
        >>> HtmlAttributes(style="width: 100%;").add_class("c1").to_html()
        Markup(' style="width: 100%;" class="c1"')

    Attributes:
        entries: Attribute keys and the text of their values.
    """

    entries: AttributeDict = field(factory=dict)

    def __init__(self, *sources: object, **attributes: Any) -> None:
        self.__attrs_init__()
        self.attrs(*sources, **attributes)

    @classmethod
    def from_mapping(cls, attributes: Mapping[str, Any]) -> HtmlAttributes:
        """Build a new instance from a mapping, keys used verbatim."""

        return cls(attributes)

    @classmethod
    def from_object(cls, obj: object) -> HtmlAttributes:
        """Build a new instance from the public fields of ``obj``."""

        bag = cls()
        bag._merge(_to_text(pairs_from_object(obj)))
        return bag

    def add_class(self, class_name: str) -> HtmlAttributes:
        """Add a CSS class (or several space separated classes).

        The value is appended to the existing ``class`` attribute. Repeated
        class names are kept as given; no de-duplication is done.

        Args:
            class_name: The CSS class(es) to add.

        Returns:
            This instance, to allow method chaining.
        """

        if class_name is None:
            raise NullAttributeValue(CLASS_KEY)
        class_name = str(class_name)
        if not class_name:
            return self

        current = self.entries.get(CLASS_KEY)
        if current:
            self.entries[CLASS_KEY] = f"{current} {class_name}"
        else:
            self.entries[CLASS_KEY] = class_name
        return self

    def attr(
        self, key: str | NameFunction, value: Any = None  # noqa: ANN401
    ) -> HtmlAttributes:
        """Add or overwrite a single attribute.

        Either pass ``key`` and ``value``, or a single function such as
        ``lambda data_foo: "x"`` whose parameter names the attribute.
        Writing ``class`` this way replaces any classes added before.

        Args:
            key: Attribute key, or a single-parameter function.
            value: Attribute value when ``key`` is a string.

        Returns:
            This instance, to allow method chaining.
        """

        if callable(key):
            pair = pair_from_function(key)
        else:
            pair = (check_key(key), value)
        self._merge(_to_text([pair]))
        return self

    def attrs(self, *sources: object, **attributes: Any) -> HtmlAttributes:
        """Add or overwrite attributes from any number of sources.

        Sources are applied in order, keyword arguments last. When a key
        repeats, the later value wins.

        Args:
            *sources: Mappings, name functions, sequences of name functions
                or ``(key, value)`` pairs, other ``HtmlAttributes`` or
                objects with public fields.
            **attributes: Attributes given as keywords; ``class_`` and
                ``data_foo`` become ``class`` and ``data-foo``.

        Returns:
            This instance, to allow method chaining.
        """

        pairs: TextPairList = []
        for source in sources:
            if isinstance(source, HtmlAttributes):
                pairs.extend(source.items())
            else:
                pairs.extend(_to_text(pairs_from_source(source)))
        pairs.extend(_to_text(pairs_from_keywords(attributes)))

        self._merge(pairs)
        return self

    def _merge(self, pairs: TextPairList) -> None:
        """Write validated pairs, overwriting existing keys."""

        for key, value in pairs:
            self.entries[key] = value

    def copy(self) -> HtmlAttributes:
        """Return an independent instance with the same attributes."""

        return HtmlAttributes(self.entries)

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the value stored for ``key`` or ``default``."""

        return self.entries.get(key, default)

    def items(self) -> TextPairList:
        """Return the attributes as ``(key, value)`` pairs in order."""

        return list(self.entries.items())

    def to_dict(self) -> AttributeDict:
        """Return a copy of the attributes as a plain dictionary."""

        return dict(self.entries)

    def to_html(self) -> Markup:
        """Render the attributes for direct use inside a start tag.

        Each attribute is written as `` key="value"`` with both parts
        escaped, ``Markup`` values included, since markup that is safe in
        element content can still close a quoted attribute. The result is
        ``Markup`` and must not be escaped again.

        Returns:
            The attribute string, empty when there are no attributes.
        """

        return Markup("").join(
            Markup(' {0}="{1}"').format(
                escape(str(key)), escape(str(value))
            )
            for key, value in self.entries.items()
        )

    def __html__(self) -> str:
        return self.to_html()

    def __str__(self) -> str:
        return str(self.to_html())

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __getitem__(self, key: str) -> str:
        return self.entries[key]
