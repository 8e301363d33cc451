"""Error types raised by the NEH engine and the instance loader."""

from __future__ import annotations


class NEHError(ValueError):
    """Base class for precondition violations detected by :func:`pfsp_neh.neh.solve`."""


class InvalidInstance(NEHError):
    """Instance dimensions are degenerate or a job has the wrong number of machines."""


class EmptyOrMismatchedInput(NEHError):
    """The number of jobs supplied differs from the declared ``number_jobs``."""


class InstanceFormatError(ValueError):
    """An instance file could not be parsed."""


__all__ = ["NEHError", "InvalidInstance", "EmptyOrMismatchedInput", "InstanceFormatError"]
