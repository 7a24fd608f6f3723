"""Narrow interface to the Django machinery the shoelace helpers rely on.

The helpers never subclass Django widgets or forms.  Everything they need from
the host (bound values, validation errors, labels, naming rules and the
element-emission primitive) goes through a :class:`Host` object.
:class:`DjangoHost` is the default implementation; another one can be plugged
in with the ``SHOELACE_HOST`` setting or passed explicitly.
"""

from __future__ import annotations

import abc
import re
from collections.abc import Mapping

from django.core.exceptions import ImproperlyConfigured
from django.forms import BaseForm
from django.forms.utils import flatatt, pretty_name
from django.utils.html import format_html
from django.utils.module_loading import import_string

from .conf import get_setting


class _Missing:
    """Marker for "the host has no value for this field"."""

    def __repr__(self):
        return "MISSING"

    def __bool__(self):
        return False


MISSING = _Missing()

_ID_UNSAFE_RE = re.compile(r"[^-a-zA-Z0-9:.]")
_VALUE_SPACES_RE = re.compile(r"[\s.]")
_VALUE_UNSAFE_RE = re.compile(r"[^-\w]")


def sanitize_to_id(name) -> str:
    """Turn a field name such as ``user[email]`` into ``user_email``."""

    return _ID_UNSAFE_RE.sub("_", str(name).replace("]", ""))


def sanitize_value(value) -> str:
    """Turn a checkbox value into a fragment usable inside an ``id``."""

    value = _VALUE_SPACES_RE.sub("_", str(value))
    return _VALUE_UNSAFE_RE.sub("", value).lower()


class Host(abc.ABC):
    """Operations the shoelace core consumes from the templating host."""

    @abc.abstractmethod
    def field_value(self, obj, field_name):
        """Return the current value of ``field_name`` on ``obj`` or ``MISSING``."""

    @abc.abstractmethod
    def field_errors(self, obj, field_name) -> list[str]:
        """Return the validation messages attached to ``field_name``."""

    @abc.abstractmethod
    def field_label(self, obj, field_name) -> str:
        """Return the human label for ``field_name``."""

    @abc.abstractmethod
    def name_and_id(self, object_name, field_name, value=MISSING) -> tuple[str, str]:
        """Return the canonical ``name`` and ``id`` attributes for a field."""

    @abc.abstractmethod
    def content_tag(self, tag_name, content, attrs):
        """Return ``<tag_name attrs>content</tag_name>`` as safe markup."""

    @abc.abstractmethod
    def render_form(self, content, attrs):
        """Return the host's ``<form>`` element wrapping ``content``."""

    def field_choices(self, obj, field_name):
        """Return ``(value, label)`` choices known for the field, or ``MISSING``."""

        return MISSING


class DjangoHost(Host):
    """Host backed by Django forms, ``flatatt`` and ``format_html``.

    The bound object may be a Django form, a model instance, a mapping or any
    plain object.  Forms are asked through their bound fields so submitted
    data and ``initial`` values are honoured; anything else is read with
    ``getattr``.  Errors are read from an ``errors`` mapping when the object
    has one (``form.errors`` for forms).
    """

    auto_id = "id_%s"

    def field_value(self, obj, field_name):
        if obj is None:
            return MISSING
        if isinstance(obj, BaseForm):
            if field_name in obj.fields:
                return obj[field_name].value()
            obj = getattr(obj, "instance", None)
            if obj is None:
                return MISSING
        if isinstance(obj, Mapping):
            return obj.get(field_name, MISSING)
        return getattr(obj, field_name, MISSING)

    def field_errors(self, obj, field_name):
        errors = getattr(obj, "errors", None)
        if errors is None or not hasattr(errors, "get"):
            return []
        return [str(message) for message in errors.get(field_name) or []]

    def field_label(self, obj, field_name):
        if isinstance(obj, BaseForm) and field_name in obj.fields:
            return obj[field_name].label
        return pretty_name(field_name)

    def field_choices(self, obj, field_name):
        if isinstance(obj, BaseForm) and field_name in obj.fields:
            form_field = obj.fields[field_name]
            # NullBooleanField keeps its choices on the widget only.
            choices = getattr(form_field, "choices", None)
            if choices is None:
                choices = getattr(form_field.widget, "choices", None)
            if choices is not None:
                return list(choices)
        return MISSING

    def name_and_id(self, object_name, field_name, value=MISSING):
        # Same "<prefix>-<field>" scheme as BaseForm.add_prefix.
        name = f"{object_name}-{field_name}" if object_name else str(field_name)
        tag_id = self.auto_id % sanitize_to_id(name)
        if value is not MISSING:
            tag_id = f"{tag_id}_{sanitize_value(value)}"
        return name, tag_id

    def content_tag(self, tag_name, content, attrs):
        if content is None:
            content = ""
        return format_html("<{}{}>{}</{}>", tag_name, flatatt(attrs), content, tag_name)

    def render_form(self, content, attrs):
        return self.content_tag("form", content, attrs)


REQUIRED_HOST_METHODS = (
    "field_value",
    "field_errors",
    "field_label",
    "name_and_id",
    "content_tag",
    "render_form",
)


def get_host(host=None) -> Host:
    """Return ``host`` or an instance of the class named by ``SHOELACE_HOST``."""

    if host is None:
        path = get_setting("HOST")
        try:
            host_class = import_string(path)
        except ImportError as exc:
            raise ImproperlyConfigured(f"SHOELACE_HOST '{path}' could not be imported.") from exc
        host = host_class()

    missing = [name for name in REQUIRED_HOST_METHODS if not callable(getattr(host, name, None))]
    if missing:
        raise ImproperlyConfigured(
            f"{type(host).__name__} does not provide {', '.join(missing)}."
        )
    return host
