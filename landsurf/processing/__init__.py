# -*- coding: utf-8 -*-
"""
Processing framework - Base classes, tunable parameters and versioning.

Author
------
landsurf contributors

License
-------
MIT License
Copyright (c) 2026 landsurf contributors
See LICENSE file for full text.
"""

from landsurf.processing.base import GridProcessor, GridTransform
from landsurf.processing.params import Desc, ParamSpec, Range
from landsurf.processing.versioning import processor_tags, processor_version

__all__ = [
    'GridProcessor',
    'GridTransform',
    'Desc',
    'ParamSpec',
    'Range',
    'processor_tags',
    'processor_version',
]
