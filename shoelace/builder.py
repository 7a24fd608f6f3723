"""Binding context and the field-builder facade handed to form bodies."""

from __future__ import annotations

from dataclasses import dataclass
from functools import partialmethod
from typing import Any

from django.forms import BaseForm
from django.forms.utils import pretty_name
from django.utils.text import capfirst
from django.utils.translation import gettext as _

from . import fields
from .conf import get_setting
from .host import MISSING, Host, get_host
from .tags import sl_submit_tag


@dataclass(frozen=True)
class BindingContext:
    """The object a form is bound to, its name, and the host serving both."""

    object_name: str
    object: Any
    host: Host

    @classmethod
    def for_object(cls, obj=None, object_name=None, host=None) -> "BindingContext":
        if object_name is None:
            object_name = (obj.prefix or "") if isinstance(obj, BaseForm) else ""
        return cls(object_name=object_name, object=obj, host=get_host(host))

    def value(self, field_name):
        return self.host.field_value(self.object, field_name)

    def errors_for(self, field_name) -> list[str]:
        if self.object is None:
            return []
        return [message for message in self.host.field_errors(self.object, field_name) if message]

    def label(self, field_name) -> str:
        return self.host.field_label(self.object, field_name)

    def name_and_id(self, field_name, value=MISSING):
        return self.host.name_and_id(self.object_name, field_name, value)


class ShoelaceFormBuilder:
    """Renders the fields of one form as shoelace elements.

    Usage::

        builder = ShoelaceFormBuilder(BindingContext.for_object(form))
        builder.email_field("email", placeholder="you@example.com")
        builder.select("country", [("Chile", "cl"), ("Peru", "pe")])
    """

    def __init__(self, context: BindingContext):
        self.context = context

    @property
    def object(self):
        return self.context.object

    @property
    def object_name(self):
        return self.context.object_name

    def field(self, kind, field_name, content=None, **options):
        return fields.render_field(self.context, kind, field_name, options, content=content)

    def input_field(self, kind, field_name, content=None, **options):
        return fields.render_input(self.context, kind, field_name, options, content=content)

    email_field = partialmethod(input_field, "email")
    number_field = partialmethod(input_field, "number")
    password_field = partialmethod(input_field, "password")
    search_field = partialmethod(input_field, "search")
    telephone_field = partialmethod(input_field, "telephone")
    phone_field = partialmethod(input_field, "phone")
    text_field = partialmethod(input_field, "text")
    url_field = partialmethod(input_field, "url")

    def color_field(self, field_name, **options):
        return fields.render_color(self.context, field_name, options)

    color_picker = color_field

    def range_field(self, field_name, **options):
        return fields.render_input(self.context, "range", field_name, options)

    range = range_field

    def switch_field(self, field_name, content=None, **options):
        return fields.render_switch(self.context, field_name, options, content=content)

    switch = switch_field

    def text_area(self, field_name, **options):
        return fields.render_text_area(self.context, field_name, options)

    def check_box(self, field_name, options=None, checked_value="1", unchecked_value="0", content=None):
        return fields.render_check_box(
            self.context, field_name, options, checked_value, unchecked_value, content=content
        )

    def select(self, field_name, choices=None, options=None, html=None, content=None):
        return fields.render_select(self.context, field_name, choices, options, html, content=content)

    def collection_select(self, field_name, collection, value_method, text_method, options=None, html=None):
        return fields.render_collection_select(
            self.context, field_name, collection, value_method, text_method, options, html
        )

    def submit(self, value=None, **options):
        return sl_submit_tag(value or self.submit_default_value(), host=self.context.host, **options)

    def submit_default_value(self) -> str:
        """"Create Post"/"Update Post" for models, else the configured label."""

        obj = self.object
        model = getattr(obj, "instance", obj)
        meta = getattr(model, "_meta", None)
        if meta is not None:
            adding = model._state.adding
            caption = _("Create %(model)s") if adding else _("Update %(model)s")
            return caption % {"model": capfirst(meta.verbose_name)}
        if self.object_name:
            return _("Create %(model)s") % {"model": pretty_name(self.object_name)}
        return get_setting("SUBMIT_LABEL")
