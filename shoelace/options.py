"""Builders for the ``<sl-menu-item>`` lists rendered inside ``<sl-select>``."""

from __future__ import annotations

import datetime
import uuid
from collections.abc import Iterable, Mapping
from decimal import Decimal

from django.utils.safestring import mark_safe

from .attributes import is_blank, normalize_attrs
from .exceptions import InvalidOptionError, UnsupportedCollectionError
from .host import get_host

OPTION_TAG = "sl-menu-item"
GROUP_LABEL_TAG = "sl-menu-label"
DIVIDER_TAG = mark_safe("<sl-menu-divider></sl-menu-divider>")
OPTION_SEPARATOR = "\n"

# Selection entries of these types are values already, never records.
_SCALAR_TYPES = (str, bytes, int, float, Decimal, uuid.UUID, datetime.date, datetime.time)


def _text(value) -> str:
    return "" if value is None else str(value)


def option_text_and_value(element) -> tuple[str, str]:
    """Split a choice into ``(text, value)``.

    ``("Apple", "apple")`` and ``("Apple", "apple", {"disabled": True})``
    carry text first and value last; anything else is used for both.
    """

    if isinstance(element, (list, tuple)):
        parts = [part for part in element if not isinstance(part, Mapping)]
        if not parts:
            return "", ""
        return _text(parts[0]), _text(parts[-1])
    return _text(element), _text(element)


def option_html_attributes(element) -> dict:
    """Merge the attribute mappings carried inside a list/tuple choice."""

    attrs: dict = {}
    if isinstance(element, (list, tuple)):
        for part in element:
            if isinstance(part, Mapping):
                attrs.update(part)
    return attrs


def extract_selected_and_disabled(selection):
    """Accept either the selected value(s) or ``{"selected": ..., "disabled": ...}``."""

    if isinstance(selection, Mapping):
        return selection.get("selected"), selection.get("disabled")
    return selection, None


def _value_set(values) -> frozenset[str]:
    if values is None:
        return frozenset()
    if callable(values):
        raise InvalidOptionError(
            "Callable selections need a collection; use options_from_collection_for_select()."
        )
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        return frozenset({str(values)})
    return frozenset(str(value) for value in values)


def _iter_choices(container) -> Iterable:
    if isinstance(container, Mapping):
        return container.items()
    if not isinstance(container, Iterable):
        raise UnsupportedCollectionError(
            f"Cannot build options from {type(container).__name__!r}; "
            "expected markup, a mapping or an iterable of choices."
        )
    return container


def options_for_select(container, selection=None, *, host=None):
    """Render ``container`` as ``<sl-menu-item>`` elements.

    A string is taken as pre-rendered markup and returned unchanged.  An item
    is checked/disabled when its stringified value is among the stringified
    selected/disabled values.  Items are separated by a newline.
    """

    if isinstance(container, str):
        return container

    host = get_host(host)
    selected, disabled = (_value_set(values) for values in extract_selected_and_disabled(selection))

    items = []
    for element in _iter_choices(container):
        attrs = normalize_attrs(option_html_attributes(element))
        text, value = option_text_and_value(element)

        attrs["checked"] = attrs.get("checked") or value in selected
        attrs["disabled"] = attrs.get("disabled") or value in disabled
        attrs["value"] = value

        items.append(host.content_tag(OPTION_TAG, text, attrs))
    return mark_safe(OPTION_SEPARATOR.join(items))


def grouped_options_for_select(grouped_options, selection=None, *, host=None):
    """Render ``[(label, choices), ...]`` with a divider between groups."""

    host = get_host(host)
    body = []
    for index, group in enumerate(_iter_choices(grouped_options)):
        try:
            label, values = group
        except (TypeError, ValueError) as exc:
            raise UnsupportedCollectionError(
                f"Option groups must be (label, choices) pairs, got {group!r}."
            ) from exc

        if index > 0:
            body.append(DIVIDER_TAG)
        if not is_blank(label):
            body.append(host.content_tag(GROUP_LABEL_TAG, label, {}))
        body.append(options_for_select(values, selection, host=host))
    return mark_safe("".join(body))


def value_for_collection(item, accessor):
    """Read ``accessor`` from ``item``: call it, look it up, or getattr it.

    Bound methods found by name are called, the way Django templates resolve
    ``{{ user.get_full_name }}``.
    """

    if callable(accessor):
        return accessor(item)
    if isinstance(item, Mapping):
        return item.get(accessor)
    value = getattr(item, accessor)
    return value() if callable(value) else value


def extract_values_from_collection(collection, value_accessor, selected):
    """Turn a selected/disabled argument into plain values.

    A callable is a predicate over the collection's elements; records are
    reduced with ``value_accessor``; scalars are kept as they are.
    """

    if selected is None:
        return None
    if callable(selected):
        return [value_for_collection(element, value_accessor) for element in collection if selected(element)]
    if isinstance(selected, _SCALAR_TYPES) or not isinstance(selected, Iterable):
        selected = [selected]
    return [
        item if isinstance(item, _SCALAR_TYPES) or item is None else value_for_collection(item, value_accessor)
        for item in selected
    ]


def options_from_collection_for_select(collection, value_accessor, text_accessor, selection=None, *, host=None):
    """Render a collection of records using the given value/text accessors."""

    collection = list(_iter_choices(collection))
    choices = [
        (
            value_for_collection(element, text_accessor),
            value_for_collection(element, value_accessor),
            option_html_attributes(element),
        )
        for element in collection
    ]

    selected, disabled = extract_selected_and_disabled(selection)
    select_deselect = {
        "selected": extract_values_from_collection(collection, value_accessor, selected),
        "disabled": extract_values_from_collection(collection, value_accessor, disabled),
    }
    return options_for_select(choices, select_deselect, host=host)


def from_django_choices(choices) -> list:
    """Convert Django ``(value, label)`` choices into ``(text, value)`` order.

    Django optgroups (``(group, [(value, label), ...])``) become
    ``(group, [(text, value), ...])`` groups.
    """

    converted = []
    for value, label in choices:
        if isinstance(label, (list, tuple)):
            converted.append((value, [(text, option_value) for option_value, text in label]))
        else:
            converted.append((label, value))
    return converted


def _is_group(choice) -> bool:
    return isinstance(choice, (list, tuple)) and len(choice) == 2 and isinstance(choice[1], (list, tuple))


def is_grouped(choices) -> bool:
    """``True`` when any choice is a ``(label, [choices])`` pair."""

    if isinstance(choices, str) or not isinstance(choices, (list, tuple)):
        return False
    return any(_is_group(choice) for choice in choices)


def group_choices(choices) -> list:
    """Split a mix of plain choices and groups into ``(label, choices)`` groups.

    Runs of plain choices become unlabelled groups; real groups are kept.
    """

    groups = []
    plain = []
    for choice in choices:
        if _is_group(choice):
            if plain:
                groups.append((None, plain))
                plain = []
            groups.append(choice)
        else:
            plain.append(choice)
    if plain:
        groups.append((None, plain))
    return groups
