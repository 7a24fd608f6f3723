"""Attribute resolution for shoelace elements.

Every field adapter funnels the caller's options through
:func:`resolve_attributes`, which fills in the bound value, ``size``,
``type``, ``invalid`` and the name/id pair.  Explicit options always win over
computed defaults.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from django.core.serializers.json import DjangoJSONEncoder

from .exceptions import InvalidOptionError
from .host import MISSING

# Attributes emitted bare (present/absent); their values must be real booleans.
BOOLEAN_ATTRIBUTES = frozenset({
    "autofocus",
    "checked",
    "circle",
    "clearable",
    "disabled",
    "filled",
    "hoist",
    "invalid",
    "loading",
    "multiple",
    "open",
    "outline",
    "pill",
    "readonly",
    "required",
    "submit",
    "toggle-password",
})

NESTED_PREFIXES = ("data", "aria")

RECOGNIZED_OPTIONS = ("value", "size", "maxlength", "type", "invalid", "name", "id")


def normalize_key(key) -> str:
    """``"help_text"`` -> ``"help-text"``, ``"class_"`` -> ``"class"``."""

    return str(key).rstrip("_").lower().replace("_", "-")


def _nested_value(value):
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, cls=DjangoJSONEncoder)


def normalize_attrs(attrs: Mapping | None) -> dict[str, Any]:
    """Return a copy of ``attrs`` with normalized keys.

    ``data`` and ``aria`` mappings are flattened into ``data-*``/``aria-*``
    attributes, non-string values inside them are JSON encoded.  Boolean-only
    attributes are checked here so a bad value fails before anything renders.
    """

    normalized: dict[str, Any] = {}
    for key, value in (attrs or {}).items():
        key = normalize_key(key)
        if key in NESTED_PREFIXES and isinstance(value, Mapping):
            for sub_key, sub_value in value.items():
                normalized[f"{key}-{normalize_key(sub_key)}"] = _nested_value(sub_value)
            continue
        if key in BOOLEAN_ATTRIBUTES and value is not None and not isinstance(value, bool):
            raise InvalidOptionError(f"'{key}' only accepts True or False, got {value!r}.")
        normalized[key] = value
    return normalized


def is_blank(value) -> bool:
    if value is None or value is MISSING:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return not value
    return False


@dataclass
class FieldOptions:
    """Caller options for one field, split into the recognized and the rest.

    Recognized options left as ``MISSING`` were not supplied, which is
    different from an explicit ``None`` (``invalid=None`` suppresses the
    computed ``invalid`` flag, for instance).
    """

    value: Any = MISSING
    size: Any = MISSING
    maxlength: Any = None
    type: Any = MISSING
    invalid: Any = MISSING
    name: Any = MISSING
    id: Any = MISSING
    attrs: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, options: Mapping | None) -> "FieldOptions":
        attrs = normalize_attrs(options)
        known = {key: attrs.pop(key) for key in RECOGNIZED_OPTIONS if key in attrs}
        return cls(attrs=attrs, **known)


def _stringify(value):
    return value if isinstance(value, str) else str(value)


def resolve_attributes(
    options: FieldOptions,
    context,
    field_name,
    *,
    type_tag=None,
    sizing=True,
    validity=True,
    binds_value=True,
    discriminator=MISSING,
) -> dict[str, Any]:
    """Compute the attribute set for ``field_name``.

    ``context`` is the :class:`~shoelace.builder.BindingContext` of the form.
    ``sizing``, ``validity`` and ``binds_value`` switch off the ``size``,
    ``invalid`` and ``value`` defaults for kinds that do not use them;
    explicit options are still honoured.  ``discriminator`` is the value a
    multi-valued checkbox folds into its ``id``.
    """

    resolved = dict(options.attrs)

    value = options.value
    if value is MISSING and binds_value:
        value = context.value(field_name)
    if not is_blank(value):
        resolved["value"] = _stringify(value)

    size = options.size
    if size is MISSING and sizing:
        size = options.maxlength
    if size is not MISSING:
        resolved["size"] = size
    if options.maxlength is not None:
        resolved["maxlength"] = options.maxlength

    field_type = type_tag if options.type is MISSING else options.type
    if field_type is not None:
        resolved["type"] = field_type

    invalid = options.invalid
    if invalid is MISSING and validity:
        invalid = True if context.errors_for(field_name) else None
    if invalid is not MISSING:
        resolved["invalid"] = invalid

    name, tag_id = context.name_and_id(field_name, discriminator)
    resolved["name"] = name if options.name is MISSING else options.name
    resolved["id"] = tag_id if options.id is MISSING else options.id

    return {key: value for key, value in resolved.items() if value is not None}
