"""Errors raised while turning form fields into shoelace markup."""


class ShoelaceError(Exception):
    """Base class for every error raised by the shoelace helpers."""


class InvalidOptionError(ShoelaceError, TypeError):
    """An option received a value of the wrong type, e.g. ``invalid="yes"``."""


class UnsupportedCollectionError(ShoelaceError, TypeError):
    """A choices container is neither markup nor an iterable of choices."""


class UnknownFieldKind(ShoelaceError, KeyError):
    """The field dispatcher was asked for a kind missing from ``FIELD_KINDS``."""


class FormShapeError(ShoelaceError, ValueError):
    """The rendered form does not start with ``<form`` and end with ``</form>``."""
