"""Template tags rendering Django forms with shoelace web components.

Load with ``{% load shoelace_tags %}``.  Two styles are supported:

* ``{% render_field form.email placeholder="you@example.com" %}`` renders a
  ``BoundField`` as the shoelace element matching its widget.
* ``{% sl_form_for form action="/profile/" as f %} ... {% endsl_form_for %}``
  exposes a builder ``f`` used with ``{% sl_field f "email" "email" %}``,
  ``{% sl_select f "country" countries %}``, ``{% sl_submit f %}``...
"""

from __future__ import annotations

from django import forms, template
from django.template.base import token_kwargs
from django.utils.html import mark_safe

from .. import fields, forms as sl_forms, tags
from ..builder import BindingContext
from ..conf import get_setting
from ..options import group_choices, grouped_options_for_select, is_grouped, options_for_select

register = template.Library()

WIDGET_INPUT_KINDS = {
    "color": "color",
    "email": "email",
    "number": "number",
    "password": "password",
    "range": "range",
    "search": "search",
    "tel": "telephone",
    "text": "text",
    "url": "url",
}


def _merge_attrs(widget_attrs: dict, tag_attrs: dict) -> dict:
    """Layer the template's attributes over the widget's.

    ``class`` values are joined so the widget's classes survive on the
    shoelace element; any other template attribute replaces the widget's.
    """

    merged = widget_attrs.copy()
    for attr, value in tag_attrs.items():
        if attr == "class" and attr in merged:
            merged[attr] = f"{merged[attr]} {value}".strip()
        else:
            merged[attr] = value
    return merged


def _widget_kind(widget):
    if isinstance(widget, forms.Textarea):
        return "textarea"
    if isinstance(widget, forms.CheckboxInput):
        return "checkbox"
    if isinstance(widget, forms.Select):
        return "select"
    return WIDGET_INPUT_KINDS.get(getattr(widget, "input_type", None))


@register.simple_tag
def render_field(bound_field, **attrs):
    """Render ``bound_field`` as a shoelace element with extra attributes.

    Widget attributes (``maxlength``, ``required``, CSS classes...) are merged
    with the ones passed in the template.  Widgets without a shoelace
    counterpart (hidden, file, radio...) fall back to Django's own rendering.
    """

    widget = bound_field.field.widget
    widget_attrs = bound_field.build_widget_attrs(dict(getattr(widget, "attrs", {})))
    final_attrs = _merge_attrs(widget_attrs, attrs)

    kind = _widget_kind(widget)
    if kind is None:
        return mark_safe(bound_field.as_widget(attrs=final_attrs))

    context = BindingContext.for_object(bound_field.form)
    if kind == "select":
        if getattr(widget, "allow_multiple_selected", False):
            final_attrs.setdefault("multiple", True)
        # The widget knows how its options spell the value (True -> "true").
        selected = widget.format_value(bound_field.value())
        return fields.render_select(context, bound_field.name, None, {"selected": selected}, final_attrs)
    return fields.render_field(context, kind, bound_field.name, final_attrs)


@register.simple_tag
def sl_field(builder, kind, field_name, **options):
    return builder.field(kind, field_name, **options)


@register.simple_tag
def sl_check_box(builder, field_name, checked_value="1", unchecked_value="0", **options):
    return builder.check_box(field_name, options, checked_value, unchecked_value)


@register.simple_tag
def sl_select(builder, field_name, choices=None, **options):
    return builder.field("select", field_name, choices=choices, **options)


@register.simple_tag
def sl_collection_select(builder, field_name, collection, value_method, text_method, **options):
    return builder.field(
        "collection_select",
        field_name,
        collection=collection,
        value_method=value_method,
        text_method=text_method,
        **options,
    )


@register.simple_tag
def sl_submit(builder, value=None, **options):
    return builder.submit(value, **options)


@register.simple_tag
def sl_submit_tag(value=None, **options):
    return tags.sl_submit_tag(value, **options)


@register.simple_tag
def sl_button_tag(content="", **attrs):
    return tags.sl_button_tag(content, **attrs)


@register.simple_tag
def sl_icon_tag(name, **attrs):
    return tags.sl_icon_tag(name, **attrs)


@register.simple_tag
def sl_text_field_tag(name, value=None, **options):
    return tags.sl_text_field_tag(name, value, **options)


@register.simple_tag
def sl_options_for_select(choices, selected=None, disabled=None):
    selection = {"selected": selected, "disabled": disabled}
    if is_grouped(choices):
        return grouped_options_for_select(group_choices(choices), selection)
    return options_for_select(choices, selection)


class ShoelaceFormNode(template.Node):
    """Renders the body of ``sl_form_for``/``sl_form_with``/``sl_form_tag``."""

    def __init__(self, mode, nodelist, obj, attrs, target):
        self.mode = mode
        self.nodelist = nodelist
        self.obj = obj
        self.attrs = attrs
        self.target = target

    def render(self, context):
        attrs = {key: value.resolve(context) for key, value in self.attrs.items()}
        csrf_token = context.get("csrf_token")

        def body(builder=None):
            if builder is None:
                return self.nodelist.render(context)
            with context.push(**{self.target: builder}):
                return self.nodelist.render(context)

        if self.mode == "tag":
            return sl_forms.sl_form_tag(body, csrf_token=csrf_token, **attrs)
        if self.mode == "with":
            return sl_forms.sl_form_with(body, csrf_token=csrf_token, **attrs)
        obj = self.obj.resolve(context) if self.obj is not None else None
        return sl_forms.sl_form_for(obj, body, csrf_token=csrf_token, **attrs)


def _parse_form_tag(parser, token, mode):
    bits = token.split_contents()
    tag_name = bits.pop(0)

    target = get_setting("BUILDER_NAME")
    if len(bits) >= 2 and bits[-2] == "as":
        target = bits[-1]
        bits = bits[:-2]

    obj = None
    if mode == "for":
        if not bits or "=" in bits[0]:
            raise template.TemplateSyntaxError(f"'{tag_name}' requires the form or object to bind.")
        obj = parser.compile_filter(bits.pop(0))

    attrs = token_kwargs(bits, parser)
    if bits:
        raise template.TemplateSyntaxError(
            f"'{tag_name}' received unexpected arguments: {' '.join(bits)}"
        )

    nodelist = parser.parse((f"end{tag_name}",))
    parser.delete_first_token()
    return ShoelaceFormNode(mode, nodelist, obj, attrs, target)


@register.tag("sl_form_for")
def do_sl_form_for(parser, token):
    """``{% sl_form_for form action="/save/" as f %}...{% endsl_form_for %}``"""

    return _parse_form_tag(parser, token, "for")


@register.tag("sl_form_with")
def do_sl_form_with(parser, token):
    """``{% sl_form_with model=form action="/save/" %}...{% endsl_form_with %}``"""

    return _parse_form_tag(parser, token, "with")


@register.tag("sl_form_tag")
def do_sl_form_tag(parser, token):
    """``{% sl_form_tag action="/search/" method="get" %}...{% endsl_form_tag %}``"""

    return _parse_form_tag(parser, token, "tag")
