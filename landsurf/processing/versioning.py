# -*- coding: utf-8 -*-
"""
Processor Versioning - Version and capability decorators for grid processors.

``@processor_version`` stamps ``__processor_version__`` on a processor
class and ``@processor_tags`` stamps ``__processor_tags__`` with its
category and description. The CLI logs both when a processor runs.

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
import importlib.metadata
from typing import Optional, Type, TypeVar

# landsurf internal
from landsurf.vocabulary import ProcessorCategory

T = TypeVar('T')


def processor_version(version: Optional[str] = None):
    """Class decorator that stamps a semantic version on a processor.

    When *version* is omitted the installed ``landsurf`` distribution
    version is used, or ``'unknown'`` in an uninstalled checkout.

    Examples
    --------
    >>> @processor_version('1.0.0')
    ... class Identity(GridTransform):
    ...     def apply(self, source, **kwargs):
    ...         return source
    >>> Identity.__processor_version__
    '1.0.0'
    """
    def decorator(cls: Type[T]) -> Type[T]:
        if version:
            cls.__processor_version__ = version
        else:
            try:
                cls.__processor_version__ = importlib.metadata.version('landsurf')
            except importlib.metadata.PackageNotFoundError:
                cls.__processor_version__ = "unknown"
        return cls
    return decorator


def processor_tags(category: Optional[ProcessorCategory] = None,
                   description: Optional[str] = None):
    """Class decorator for processor capability metadata.

    Raises
    ------
    TypeError
        If *category* is not a ``ProcessorCategory`` member.
    """
    if category is not None and not isinstance(category, ProcessorCategory):
        raise TypeError(
            f"category must be a ProcessorCategory member, got {category!r}"
        )

    def decorator(cls: Type[T]) -> Type[T]:
        cls.__processor_tags__ = {
            'category': category,
            'description': description,
        }
        return cls
    return decorator
