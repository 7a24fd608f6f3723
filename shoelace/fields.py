"""Per-kind adapters turning a bound field into a shoelace element.

Kinds are described by the static :data:`FIELD_KINDS` table.  The text family
shares :func:`render_input`; color, switch, textarea, checkbox and the two
selects need their own adapter.  :func:`render_field` dispatches by kind name.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from django.utils.html import format_html

from .attributes import FieldOptions, normalize_attrs, resolve_attributes
from .conf import get_setting
from .exceptions import UnknownFieldKind
from .host import MISSING
from .options import (
    from_django_choices,
    group_choices,
    grouped_options_for_select,
    is_grouped,
    options_for_select,
    options_from_collection_for_select,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldKind:
    element: str
    type_tag: str | None = None
    host_tag: str = "input"
    sizing: bool = True
    validity: bool = True
    label: bool = False


FIELD_KINDS = {
    "email": FieldKind("sl-input", "email", label=True),
    "number": FieldKind("sl-input", "number", label=True),
    "password": FieldKind("sl-input", "password", label=True),
    "search": FieldKind("sl-input", "search", label=True),
    "telephone": FieldKind("sl-input", "tel", label=True),
    "phone": FieldKind("sl-input", "tel", label=True),
    "text": FieldKind("sl-input", "text", label=True),
    "url": FieldKind("sl-input", "url", label=True),
    "color": FieldKind("sl-color-picker"),
    "range": FieldKind("sl-range"),
    "switch": FieldKind("sl-switch", sizing=False),
    "textarea": FieldKind("sl-textarea", host_tag="textarea", sizing=False),
    "checkbox": FieldKind("sl-checkbox", sizing=False),
    "select": FieldKind("sl-select", host_tag="select", sizing=False, validity=False),
    "collection_select": FieldKind("sl-select", host_tag="select", sizing=False, validity=False),
}

INPUT_KINDS = ("email", "number", "password", "search", "telephone", "phone", "text", "url")

# Kinds that accept ``within=(min, max)``.
BOUNDED_KINDS = ("number", "range")


def get_kind(kind_name) -> FieldKind:
    try:
        return FIELD_KINDS[kind_name]
    except KeyError:
        raise UnknownFieldKind(kind_name) from None


def substitute_element(kind_name, tag_name=None) -> str:
    """Return the shoelace element for ``kind_name``.

    Only the host's default tag for the kind is swapped; any other tag name
    is passed through untouched.
    """

    kind = get_kind(kind_name)
    if tag_name is None or tag_name == kind.host_tag:
        return kind.element
    return tag_name


def _apply_within(field_options: FieldOptions):
    within = field_options.attrs.pop("within", None)
    if within is None:
        return
    if isinstance(within, range):
        low, high = within[0], within[-1]
    else:
        low, high = within
    field_options.attrs.setdefault("min", low)
    field_options.attrs.setdefault("max", high)


def render_input(context, kind_name, field_name, options=None, content=None, tag_name=None):
    """Render one of the text family kinds, or ``color``/``range``."""

    kind = get_kind(kind_name)
    field_options = FieldOptions.from_mapping(options)
    if kind.label:
        field_options.attrs.setdefault("label", context.label(field_name))
    if kind_name in BOUNDED_KINDS:
        _apply_within(field_options)

    attrs = resolve_attributes(
        field_options,
        context,
        field_name,
        type_tag=kind.type_tag,
        sizing=kind.sizing,
        validity=kind.validity,
    )
    return context.host.content_tag(substitute_element(kind_name, tag_name), content or "", attrs)


def render_color(context, field_name, options=None, tag_name=None):
    field_options = FieldOptions.from_mapping(options)
    attrs = resolve_attributes(field_options, context, field_name)
    attrs.setdefault("value", get_setting("COLOR_DEFAULT"))
    return context.host.content_tag(substitute_element("color", tag_name), "", attrs)


def render_switch(context, field_name, options=None, content=None):
    kind = get_kind("switch")
    attrs = resolve_attributes(FieldOptions.from_mapping(options), context, field_name, sizing=kind.sizing)
    if content is None:
        content = context.label(field_name)
    return context.host.content_tag(kind.element, content, attrs)


def render_text_area(context, field_name, options=None, tag_name="textarea"):
    """Render ``sl-textarea``; the value becomes the element's text."""

    field_options = FieldOptions.from_mapping(options)
    size, field_options.size = field_options.size, MISSING
    if isinstance(size, str) and "x" in size:
        cols, rows = size.split("x", 1)
        field_options.attrs.setdefault("cols", cols)
        field_options.attrs.setdefault("rows", rows)
    field_options.attrs.setdefault("resize", get_setting("TEXTAREA_RESIZE"))

    attrs = resolve_attributes(field_options, context, field_name, sizing=False)
    value = attrs.pop("value", "")
    return context.host.content_tag(substitute_element("textarea", tag_name), value, attrs)


def is_checked(value, checked_value) -> bool:
    """Whether a bound ``value`` means "checked" for ``checked_value``."""

    if isinstance(value, bool):
        return value == bool(checked_value)
    if value is None or value is MISSING:
        return False
    if isinstance(value, str):
        return value == str(checked_value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return str(checked_value) in {str(item) for item in value}
    return str(value) == str(checked_value)


def render_check_box(context, field_name, options=None, checked_value="1", unchecked_value="0", content=None):
    """Render ``sl-checkbox``.

    With ``multiple=True`` the checkbox is one of several sharing a name, so
    the ``id`` includes ``checked_value`` and ``multiple`` itself is dropped.
    ``include_hidden=True`` prepends a hidden input carrying
    ``unchecked_value`` so unchecked boxes still submit something.
    """

    field_options = FieldOptions.from_mapping(options)
    field_options.value = checked_value

    explicit_checked = field_options.attrs.pop("checked", MISSING)
    multiple = field_options.attrs.pop("multiple", False)
    include_hidden = field_options.attrs.pop("include-hidden", False)

    if explicit_checked is MISSING:
        checked = is_checked(context.value(field_name), checked_value)
    else:
        checked = explicit_checked is True

    attrs = resolve_attributes(
        field_options,
        context,
        field_name,
        sizing=False,
        discriminator=checked_value if multiple else MISSING,
    )
    if checked:
        attrs["checked"] = True

    if content is None:
        content = context.label(field_name)
    markup = context.host.content_tag("sl-checkbox", content, attrs)

    if include_hidden and "name" in attrs:
        return format_html('<input type="hidden" name="{}" value="{}">{}', attrs["name"], unchecked_value, markup)
    return markup


def _selected_value(context, field_name, options):
    if "selected" in options:
        return options["selected"]
    value = context.value(field_name)
    return None if value is MISSING else value


def _select_content_tag(context, field_name, option_tags, html_options):
    attrs = resolve_attributes(
        FieldOptions.from_mapping(html_options),
        context,
        field_name,
        sizing=False,
        validity=False,
        binds_value=False,
    )
    return context.host.content_tag("sl-select", option_tags, attrs)


def render_select(context, field_name, choices=None, options=None, html_options=None, content=None):
    """Render ``sl-select`` from markup, flat choices or grouped choices.

    ``options`` carries ``selected``/``disabled``; ``html_options`` become
    attributes of the ``sl-select`` element.  ``content`` replaces
    ``choices`` when given.  Without either, a Django form field's own
    choices are used.
    """

    options = dict(options or {})
    if content is not None:
        choices = content
    if choices is None:
        field_choices = context.host.field_choices(context.object, field_name)
        if field_choices is not MISSING:
            choices = from_django_choices(field_choices)

    selection = {
        "selected": _selected_value(context, field_name, options),
        "disabled": options.get("disabled"),
    }

    if choices is None:
        option_tags = ""
    elif isinstance(choices, str):
        option_tags = choices
    else:
        if isinstance(choices, Mapping):
            choices = list(choices.items())
        elif isinstance(choices, Iterable) and not isinstance(choices, (list, tuple)):
            # Generators and querysets are materialised once so grouping can be probed.
            choices = list(choices)
        if is_grouped(choices):
            option_tags = grouped_options_for_select(group_choices(choices), selection, host=context.host)
        else:
            option_tags = options_for_select(choices, selection, host=context.host)

    return _select_content_tag(context, field_name, option_tags, html_options)


def render_collection_select(
    context, field_name, collection, value_accessor, text_accessor, options=None, html_options=None
):
    options = dict(options or {})
    selection = {
        "selected": _selected_value(context, field_name, options),
        "disabled": options.get("disabled"),
    }
    option_tags = options_from_collection_for_select(
        collection, value_accessor, text_accessor, selection, host=context.host
    )
    return _select_content_tag(context, field_name, option_tags, html_options)


def _split_selection(options):
    select_options = {}
    if "selected" in options:
        select_options["selected"] = options.pop("selected")
    if "disabled" in options and not isinstance(options["disabled"], bool):
        select_options["disabled"] = options.pop("disabled")
    return select_options


def render_field(context, kind_name, field_name, options=None, content=None):
    """Dispatch a field by kind name with a flat option mapping.

    ``checked_value``/``unchecked_value`` go to checkboxes.  For selects,
    ``choices`` (or ``collection``, ``value_method`` and ``text_method``),
    ``selected`` and a non-boolean ``disabled`` (the disabled option values)
    drive the options; ``disabled=True`` disables the ``sl-select`` itself.
    Everything else becomes an attribute.
    """

    logger.debug(f"Rendering {kind_name} field '{field_name}'")
    options = dict(options or {})

    if kind_name in INPUT_KINDS or kind_name == "range":
        return render_input(context, kind_name, field_name, options, content=content)
    if kind_name == "color":
        return render_color(context, field_name, options)
    if kind_name == "switch":
        return render_switch(context, field_name, options, content=content)
    if kind_name == "textarea":
        return render_text_area(context, field_name, options)
    if kind_name == "checkbox":
        checked_value = options.pop("checked_value", "1")
        unchecked_value = options.pop("unchecked_value", "0")
        return render_check_box(context, field_name, options, checked_value, unchecked_value, content=content)
    if kind_name == "select":
        choices = options.pop("choices", None)
        select_options = _split_selection(options)
        return render_select(context, field_name, choices, select_options, options, content=content)
    if kind_name == "collection_select":
        collection = options.pop("collection")
        value_accessor = options.pop("value_method")
        text_accessor = options.pop("text_method")
        select_options = _split_selection(options)
        return render_collection_select(
            context, field_name, collection, value_accessor, text_accessor, select_options, options
        )
    raise UnknownFieldKind(kind_name)
