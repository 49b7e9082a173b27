# -*- coding: utf-8 -*-
"""
Basin - Drainage basin delineation and terrain statistics.

Author
------
landsurf contributors

License
-------
MIT License
Copyright (c) 2026 landsurf contributors
See LICENSE file for full text.
"""

from landsurf.basin.basin import DEFAULT_CRITICAL_SLOPE, Basin

__all__ = ['DEFAULT_CRITICAL_SLOPE', 'Basin']
