# -*- coding: utf-8 -*-
"""
Grid Processing Base Classes - Abstract interfaces for grid processors.

``GridProcessor`` is the common base for everything that runs over a
``Grid``: it warns once per class when no ``@processor_version`` is
declared, collects ``Annotated`` tunable parameters, resolves per-call
overrides and forwards progress to an optional callback.
``GridTransform`` adds the abstract ``apply(grid) -> Grid`` contract.

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

# Standard library
import logging
import warnings
from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple, TYPE_CHECKING

# landsurf internal
from landsurf.processing.params import ParamSpec, collect_param_specs, make_init

if TYPE_CHECKING:
    from landsurf.raster.grid import Grid

logger = logging.getLogger(__name__)


class GridProcessor(ABC):
    """
    Common base class for grid processors.

    Subclasses declare tunable parameters as ``typing.Annotated`` fields
    using ``Range`` and ``Desc``. ``__init_subclass__``
    collects them into ``__param_specs__`` and generates a keyword-only
    ``__init__`` unless the subclass defines one. ``_resolve_params``
    merges instance values with the keyword arguments of a single call.
    """

    _version_warned_classes: set = set()

    __param_specs__: Tuple[ParamSpec, ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls.__param_specs__ = collect_param_specs(cls)
        if cls.__param_specs__ and '__init__' not in cls.__dict__:
            cls.__init__ = make_init(cls.__param_specs__)

    def __new__(cls, *args: Any, **kwargs: Any) -> 'GridProcessor':
        if cls not in GridProcessor._version_warned_classes:
            GridProcessor._version_warned_classes.add(cls)
            if not getattr(cls, '__processor_version__', None):
                warnings.warn(
                    f"{cls.__qualname__} does not declare a processor version. "
                    f"Use @processor_version('x.y.z') to declare one.",
                    UserWarning,
                    stacklevel=2,
                )
        logger.debug("Instantiating %s", cls.__qualname__)
        return super().__new__(cls)

    def _resolve_params(self, kwargs: Dict[str, Any]) -> Dict[str, Any]:
        """Merge instance parameter values with per-call *kwargs*.

        Keys in *kwargs* that are not declared parameters (for example
        ``progress_callback``) are ignored.

        Returns
        -------
        Dict[str, Any]
            ``{name: value}`` for every declared parameter, validated.
        """
        resolved = {}
        for spec in type(self).__param_specs__:
            value = kwargs[spec.name] if spec.name in kwargs else getattr(self, spec.name)
            spec.validate(value)
            resolved[spec.name] = value
        return resolved

    def _report_progress(self, kwargs: Dict[str, Any], fraction: float) -> None:
        """Call ``kwargs['progress_callback']`` with *fraction* if given."""
        cb = kwargs.get('progress_callback')
        if cb is not None:
            cb(float(fraction))


class GridTransform(GridProcessor):
    """Abstract base class for processors that map a grid to a grid."""

    @abstractmethod
    def apply(self, source: 'Grid', **kwargs: Any) -> 'Grid':
        """
        Apply the transform to *source*.

        Parameters
        ----------
        source : Grid
            Input grid. Nodata cells keep the sentinel in the output.

        Returns
        -------
        Grid
            Transformed grid with the same georeferencing.
        """
        ...
