# -*- coding: utf-8 -*-
"""
landsurf Exception Hierarchy - Domain-specific exceptions for terrain analysis.

Every landsurf exception subclasses both ``LandsurfError`` and the matching
built-in exception, so callers can catch library failures as a family or
keep catching ``ValueError``/``RuntimeError`` as before.

An empty basin aggregation is not an exception: ``Basin.aggregate`` returns
the field's nodata sentinel and ``is_empty`` tests for it.

Author
------
landsurf contributors

License
-------
MIT License
Copyright (c) 2026 landsurf contributors
See LICENSE file for full text.

Created
-------
2026-10-17

Modified
--------
2026-10-17
"""


class LandsurfError(Exception):
    """Base exception for all landsurf errors."""


class ValidationError(LandsurfError, ValueError):
    """Invalid input data, parameters, or configuration.

    Raised for out-of-range parameters, odd spectrum dimensions, bad
    frequency bounds, unknown configuration keys, and similar input
    failures.
    """


class ProcessorError(LandsurfError, RuntimeError):
    """Non-recoverable failure while running an algorithm."""


class DependencyError(LandsurfError, ImportError):
    """Missing optional dependency required for a specific module.

    Raised when GeoTIFF I/O is requested but rasterio is not installed.
    """


class InvalidJunctionError(LandsurfError, KeyError):
    """Junction identifier is not present in the flow topology."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ''


class DimensionMismatchError(ValidationError):
    """A field grid does not match the shape of the topology grid."""


class SingularFitError(ProcessorError):
    """Planar least-squares fit has no unique solution."""


class InvalidDirectionError(LandsurfError, AssertionError):
    """FFT direction flag is not the one the operation requires."""


class InvalidFilterTypeError(ValidationError):
    """Spectral filter type is not recognized."""


class MissingPrerequisiteError(ProcessorError):
    """A derived basin attribute was requested before its inputs were set."""
