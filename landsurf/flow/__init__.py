# -*- coding: utf-8 -*-
"""
Flow - Flow-routing topology over elevation grids.

Author
------
landsurf contributors

License
-------
MIT License
Copyright (c) 2026 landsurf contributors
See LICENSE file for full text.
"""

from landsurf.flow.topology import NO_RECEIVER, D8FlowTopology, FlowTopology

__all__ = ['NO_RECEIVER', 'D8FlowTopology', 'FlowTopology']
