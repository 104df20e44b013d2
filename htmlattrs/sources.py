"""Turn the supported attribute sources into ordered key/value pairs."""

from __future__ import annotations

import dataclasses
import inspect
import logging
from collections.abc import Iterable, Mapping
from typing import Any, Callable

import attrs

from .errors import InvalidKeySource, NullAttributeValue

logger = logging.getLogger(__name__)

# An attribute as written by the caller, before the value becomes text.
RawPair = tuple[str, Any]
RawPairList = list[RawPair]

# Callables like ``lambda data_foo: "x"`` where the parameter names the key.
NameFunction = Callable[[Any], Any]

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def normalize_key(name: str) -> str:
    """Convert a Python identifier into an attribute key.

    A single trailing underscore is dropped so reserved words can be used
    (``class_`` becomes ``class``) and the remaining underscores become
    hyphens (``data_foo`` becomes ``data-foo``).

    Args:
        name: Identifier taken from a parameter, keyword or field name.

    Returns:
        Hyphenated attribute key.
    """

    if len(name) > 1 and name.endswith("_"):
        name = name[:-1]
    return name.replace("_", "-")


def check_key(key: object, source: object = None) -> str:
    """Return ``key`` if it is a non-empty string, raise otherwise."""

    if not isinstance(key, str):
        raise InvalidKeySource(
            f"Attribute keys must be strings, got {type(key).__name__}",
            source if source is not None else key,
        )
    if not key:
        raise InvalidKeySource(
            "Attribute keys cannot be empty",
            source if source is not None else key,
        )
    return key


def value_text(key: str, value: object) -> str:
    """Return the text stored for ``value``.

    Args:
        key: Attribute key, used for error reporting.
        value: Value supplied by the caller.

    Returns:
        The lowercase spelling for booleans and plain ``str(value)`` for
        everything else, ``Markup`` included. Escaping happens on render.

    Raises:
        NullAttributeValue: ``value`` is ``None``.
    """

    if value is None:
        raise NullAttributeValue(key)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def pair_from_function(func: NameFunction) -> RawPair:
    """Derive an attribute from a single-parameter callable.

    The parameter name is the key and the result of calling ``func(None)``
    is the value.

    Args:
        func: Callable such as ``lambda data_foo: "bar"``.

    Returns:
        The normalized key and the raw value.

    Raises:
        InvalidKeySource: ``func`` does not take exactly one positional
            parameter.
        NullAttributeValue: ``func`` returned ``None``.
    """

    try:
        params = list(inspect.signature(func).parameters.values())
    except (TypeError, ValueError) as exc:
        raise InvalidKeySource(
            f"Cannot read the parameter name of {func!r}", func
        ) from exc

    if len(params) != 1 or params[0].kind not in _POSITIONAL:
        raise InvalidKeySource(
            "Attribute functions must take exactly one positional parameter",
            func,
        )

    key = check_key(normalize_key(params[0].name), func)
    value = func(None)
    if value is None:
        raise NullAttributeValue(key)
    return key, value


def pairs_from_mapping(mapping: Mapping[Any, Any]) -> RawPairList:
    """Return the items of ``mapping`` with keys used verbatim."""

    return [(check_key(key, mapping), value) for key, value in mapping.items()]


def pairs_from_keywords(keywords: Mapping[str, Any]) -> RawPairList:
    """Return keyword arguments as pairs with normalized keys."""

    return [
        (check_key(normalize_key(name), keywords), value)
        for name, value in keywords.items()
    ]


def _is_record(obj: object) -> bool:
    """Tell whether ``obj`` is a structured record rather than a sequence."""

    return (
        attrs.has(type(obj))
        or (dataclasses.is_dataclass(obj) and not isinstance(obj, type))
        or (isinstance(obj, tuple) and hasattr(obj, "_asdict"))
    )


def _read_field(obj: object, name: str) -> Any:  # noqa: ANN401
    """Read one field, reporting getter failures as ``InvalidKeySource``."""

    try:
        return getattr(obj, name)
    except Exception as exc:
        raise InvalidKeySource(
            f"Cannot read field {name!r} of {type(obj).__name__}", obj
        ) from exc


def _record_fields(obj: Any) -> dict[str, Any]:  # noqa: ANN401
    """Collect the public readable fields of ``obj`` in declaration order."""

    if attrs.has(type(obj)):
        fields = {
            field.name: _read_field(obj, field.name)
            for field in attrs.fields(type(obj))
        }
    elif dataclasses.is_dataclass(obj):
        fields = {
            field.name: _read_field(obj, field.name)
            for field in dataclasses.fields(obj)
        }
    elif isinstance(obj, tuple) and hasattr(obj, "_asdict"):
        fields = dict(obj._asdict())
    elif hasattr(obj, "__dict__"):
        fields = dict(vars(obj))
    else:
        raise InvalidKeySource(
            f"Cannot read attributes from a {type(obj).__name__} value", obj
        )

    # Properties are readable fields too; walk the MRO base-first so the
    # order follows the class definitions.
    for klass in reversed(type(obj).__mro__):
        for name, member in vars(klass).items():
            if (
                isinstance(member, property)
                and not name.startswith("_")
                and name not in fields
            ):
                fields[name] = _read_field(obj, name)

    return {
        name: value
        for name, value in fields.items()
        if not name.startswith("_")
    }


def pairs_from_object(obj: object) -> RawPairList:
    """Flatten a field container into pairs with normalized keys.

    Args:
        obj: attrs instance, dataclass, named tuple, ``SimpleNamespace`` or
            any object with public instance attributes or properties.

    Returns:
        One pair per public field, keys normalized.

    Raises:
        InvalidKeySource: ``obj`` is not a field container (no instance
            dictionary and not an attrs, dataclass or named tuple record),
            or one of its fields cannot be read. A container whose public
            field set is empty gives no pairs.
    """

    fields = _record_fields(obj)
    logger.debug(
        "Flattened %s into %d attributes", type(obj).__name__, len(fields)
    )
    return [
        (check_key(normalize_key(name), obj), value)
        for name, value in fields.items()
    ]


def _pairs_from_items(items: Iterable[Any]) -> RawPairList:
    """Convert a sequence of name functions and ``(key, value)`` pairs."""

    pairs: RawPairList = []
    for item in items:
        if callable(item) and not isinstance(item, type):
            pairs.append(pair_from_function(item))
        elif (
            isinstance(item, (tuple, list))
            and len(item) == 2
            and not _is_record(item)
        ):
            pairs.append((check_key(item[0], item), item[1]))
        else:
            raise InvalidKeySource(
                "Expected an attribute function or a (key, value) pair, "
                f"got {item!r}",
                item,
            )
    return pairs


def pairs_from_source(source: object) -> RawPairList:
    """Convert any supported source into pairs.

    Mappings and explicit pairs keep their keys verbatim; name functions
    and field containers have their keys normalized.

    Args:
        source: Mapping, name function, sequence of name functions and
            pairs, or a field container.

    Returns:
        Ordered pairs ready to be merged.
    """

    if isinstance(source, Mapping):
        return pairs_from_mapping(source)
    if isinstance(source, (str, bytes, bytearray)):
        raise InvalidKeySource(
            f"Cannot derive attributes from {type(source).__name__} values",
            source,
        )
    if _is_record(source):
        return pairs_from_object(source)
    if callable(source) and not isinstance(source, type):
        return [pair_from_function(source)]
    if isinstance(source, Iterable):
        return _pairs_from_items(source)
    return pairs_from_object(source)
