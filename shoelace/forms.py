"""``<sl-form>`` entry points.

Django renders the ``<form>`` element; :func:`wrap_form` then swaps only its
opening and closing tags for ``<sl-form``/``</sl-form>``.  The fields inside
were already rendered as shoelace elements by the builder.
"""

from __future__ import annotations

import logging

from django.utils.html import format_html
from django.utils.safestring import SafeData, mark_safe

from .attributes import normalize_attrs
from .builder import BindingContext, ShoelaceFormBuilder
from .conf import get_setting
from .exceptions import FormShapeError
from .host import get_host

logger = logging.getLogger(__name__)

HOST_OPENING_TAG = "<form"
HOST_CLOSING_TAG = "</form>"
OPENING_SL_FORM_TAG = "<sl-form"
CLOSING_SL_FORM_TAG = "</sl-form>"

# Characters that may follow the tag name in an opening tag.
_TAG_BOUNDARY = (">", " ", "\t", "\n", "\r", "/")


def wrap_form(content):
    """Replace the outer ``<form``/``</form>`` of ``content``.

    Everything between the two tags is kept byte for byte.  Raises
    :class:`FormShapeError` when ``content`` is not a single ``<form>``
    element as rendered by the host.
    """

    opening, closing = len(HOST_OPENING_TAG), len(HOST_CLOSING_TAG)
    if (
        len(content) <= opening + closing
        or not content.startswith(HOST_OPENING_TAG)
        or content[opening] not in _TAG_BOUNDARY
        or not content.endswith(HOST_CLOSING_TAG)
    ):
        raise FormShapeError(
            f"Expected markup starting with {HOST_OPENING_TAG!r} and ending with "
            f"{HOST_CLOSING_TAG!r}, got {content[:20]!r}...{content[-20:]!r}"
        )

    wrapped = f"{OPENING_SL_FORM_TAG}{content[opening:-closing]}{CLOSING_SL_FORM_TAG}"
    return mark_safe(wrapped) if isinstance(content, SafeData) else wrapped


def _form_attrs(attrs, remote):
    attrs = normalize_attrs(attrs)
    attrs.setdefault("method", "post")
    if remote is None:
        remote = get_setting("FORM_REMOTE")
    if remote:
        attrs.setdefault("data-remote", "true")
    return attrs


def _csrf_input(csrf_token, attrs):
    if not csrf_token or csrf_token == "NOTPROVIDED" or str(attrs.get("method")).lower() == "get":
        return ""
    return format_html('<input type="hidden" name="csrfmiddlewaretoken" value="{}">', csrf_token)


def _render(host, body, attrs, csrf_token):
    content = format_html("{}{}", _csrf_input(csrf_token, attrs), body)
    return wrap_form(host.render_form(content, attrs))


def sl_form_for(obj, body, *, object_name=None, host=None, csrf_token=None, remote=None, **attrs):
    """Render an ``<sl-form>`` bound to ``obj``.

    ``body`` is called with a :class:`ShoelaceFormBuilder` and returns the
    form's inner markup (or is the markup itself).  Forms default to
    ``data-remote="true"``; pass ``remote=False`` to drop it.
    """

    context = BindingContext.for_object(obj, object_name, host)
    builder = ShoelaceFormBuilder(context)
    inner = body(builder) if callable(body) else body
    logger.debug(f"Wrapping sl-form for '{context.object_name or type(obj).__name__}'")
    return _render(context.host, inner, _form_attrs(attrs, remote), csrf_token)


def sl_form_with(body, *, model=None, scope=None, host=None, csrf_token=None, remote=False, **attrs):
    """Like :func:`sl_form_for` with an optional model and no remote default."""

    return sl_form_for(
        model, body, object_name=scope, host=host, csrf_token=csrf_token, remote=remote, **attrs
    )


def sl_form_tag(body, *, host=None, csrf_token=None, remote=None, **attrs):
    """An ``<sl-form>`` without a bound object; ``body`` takes no builder."""

    host = get_host(host)
    inner = body() if callable(body) else body
    return _render(host, inner, _form_attrs(attrs, remote), csrf_token)
