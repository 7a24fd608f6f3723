"""Settings for the shoelace helpers.

Every value can be overridden from the Django settings module by prefixing
its name with ``SHOELACE_``; e.g. ``SHOELACE_COLOR_DEFAULT = "#000000"``.
Values are read on each access so ``override_settings`` works in tests.
"""

from django.conf import settings

DEFAULTS = {
    "HOST": "shoelace.host.DjangoHost",
    "FORM_REMOTE": True,
    "COLOR_DEFAULT": "#ffffff",
    "TEXTAREA_RESIZE": "auto",
    "SUBMIT_TYPE": "primary",
    "SUBMIT_LABEL": "Save changes",
    "SUBMIT_DISABLE_WITH": True,
    "BUILDER_NAME": "f",
}


def get_setting(name):
    return getattr(settings, f"SHOELACE_{name}", DEFAULTS[name])
