"""Shoelace elements that are not bound to a form object."""

from __future__ import annotations

from functools import partial

from .attributes import normalize_attrs
from .conf import get_setting
from .host import get_host, sanitize_to_id

FIELD_TAG_TYPES = {
    "email": "email",
    "number": "number",
    "password": "password",
    "search": "search",
    "telephone": "tel",
    "phone": "tel",
    "url": "url",
}


def sl_button_tag(content="", host=None, **attrs):
    """``<sl-button>`` with arbitrary attributes."""

    return get_host(host).content_tag("sl-button", content, normalize_attrs(attrs))


def sl_button_to(name, href=None, content=None, host=None, **attrs):
    """``<sl-button href=...>``.

    ``sl_button_to("Next", "/next")`` and ``sl_button_to("/next",
    content="Next")`` render the same button; ``sl_button_to("Next")`` has no
    ``href``.
    """

    if content is not None:
        href = name
    else:
        content = name
    attrs = normalize_attrs(attrs)
    if href is not None:
        attrs["href"] = href
    return get_host(host).content_tag("sl-button", content, attrs)


def sl_icon_tag(name, host=None, **attrs):
    return get_host(host).content_tag("sl-icon", "", {"name": name, **normalize_attrs(attrs)})


def _set_default_disable_with(value, tag_options):
    disable_with = tag_options.pop("data-disable-with", None)
    # data={"disable_with": False} arrives JSON encoded.
    if disable_with is False or disable_with == "false":
        return
    if disable_with is None and get_setting("SUBMIT_DISABLE_WITH"):
        disable_with = value
    if disable_with is not None:
        tag_options["data-disable-with"] = disable_with


def sl_submit_tag(value=None, host=None, **options):
    """A submit button captioned ``value``, flagged with ``submit``.

    The button carries ``data-disable-with`` (the caption by default) so it
    is disabled while the form submits.  Pass ``data={"disable_with": False}``
    or set ``SHOELACE_SUBMIT_DISABLE_WITH = False`` to leave it out.
    """

    tag_options = {"submit": True, "type": get_setting("SUBMIT_TYPE")}
    tag_options.update(normalize_attrs(options))
    if value is None:
        value = get_setting("SUBMIT_LABEL")
    _set_default_disable_with(value, tag_options)
    return get_host(host).content_tag("sl-button", value, tag_options)


def sl_text_field_tag(name, value=None, content=None, host=None, **options):
    """A standalone ``sl-input``; use it for small inputs such as a search box."""

    attrs = {"type": "text", "name": name, "id": sanitize_to_id(name), "value": value}
    attrs.update(normalize_attrs(options))
    return get_host(host).content_tag("sl-input", content or "", attrs)


def sl_field_tag(kind, name, value=None, content=None, host=None, **options):
    options["type"] = FIELD_TAG_TYPES[kind]
    return sl_text_field_tag(name, value, content=content, host=host, **options)


sl_email_field_tag = partial(sl_field_tag, "email")
sl_number_field_tag = partial(sl_field_tag, "number")
sl_password_field_tag = partial(sl_field_tag, "password")
sl_search_field_tag = partial(sl_field_tag, "search")
sl_telephone_field_tag = partial(sl_field_tag, "telephone")
sl_phone_field_tag = partial(sl_field_tag, "phone")
sl_url_field_tag = partial(sl_field_tag, "url")
