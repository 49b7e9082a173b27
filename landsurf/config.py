# -*- coding: utf-8 -*-
"""
Run Configuration - YAML defaults for batch spectral and basin runs.

Example::

    spectral:
      log_bin_width: 0.1
      filter_type: lowpass
      f_low: 0.01
      f_high: 0.02
    basin:
      critical_slope: 0.4
      junctions:
        - {id: 1, row: 120, col: 48, order: 3}
      grids:
        slope: slope.tif
        stream_network: channels.tif

Relative grid paths resolve against the configuration file's directory.
Unknown keys are rejected.

Dependencies
------------
pyyaml

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
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

# Third-party
import yaml

# landsurf internal
from landsurf.basin.basin import DEFAULT_CRITICAL_SLOPE
from landsurf.exceptions import ValidationError
from landsurf.spectral import transforms as tx

logger = logging.getLogger(__name__)

# Field grids a basin run may load, named as ``Basin.set_all_parameters``
# keywords.
BASIN_GRIDS = (
    'slope', 'elevation', 'aspect', 'relief', 'plan_curvature',
    'profile_curvature', 'total_curvature', 'cht', 'hillslope_length',
    'dinf_area', 'stream_network',
)


def _checked(section: str, raw: Optional[Mapping[str, Any]],
             allowed: Tuple[str, ...]) -> Dict[str, Any]:
    if raw is not None and not isinstance(raw, Mapping):
        raise ValidationError(
            f"'{section}' must be a mapping, got {type(raw).__name__}"
        )
    raw = dict(raw or {})
    unknown = set(raw) - set(allowed)
    if unknown:
        raise ValidationError(
            f"Unknown key(s) in '{section}': {', '.join(sorted(unknown))}"
        )
    return raw


@dataclass
class SpectralConfig:
    log_bin_width: float = 0.1
    filter_type: str = 'lowpass'
    f_low: float = 0.0
    f_high: float = 0.0
    wiener_fit_low: float = tx.WIENER_FIT_LOW
    wiener_fit_high: float = tx.WIENER_FIT_HIGH
    wiener_noise_threshold: float = tx.WIENER_NOISE_THRESHOLD


@dataclass
class BasinConfig:
    """Basin run settings.

    ``junctions`` maps junction id to ``(row, col, stream_order)``;
    ``grids`` maps a ``BASIN_GRIDS`` name to a raster path.
    """

    junctions: Dict[int, Tuple[int, int, int]] = field(default_factory=dict)
    grids: Dict[str, Path] = field(default_factory=dict)
    critical_slope: float = DEFAULT_CRITICAL_SLOPE
    log_bin_width: float = 0.1
    spline_resolution: int = 10000
    bin_threshold: float = 0.05


@dataclass
class RunConfig:
    spectral: SpectralConfig = field(default_factory=SpectralConfig)
    basin: BasinConfig = field(default_factory=BasinConfig)

    @classmethod
    def from_dict(cls, raw: Optional[Mapping[str, Any]],
                  base_dir: Optional[Path] = None) -> 'RunConfig':
        """Build a configuration from parsed YAML.

        Raises
        ------
        ValidationError
            On unknown keys or malformed junction entries.
        """
        raw = _checked('root', raw, ('spectral', 'basin'))
        spectral = SpectralConfig(**_checked(
            'spectral', raw.get('spectral'),
            tuple(f.name for f in fields(SpectralConfig))))

        basin_raw = _checked('basin', raw.get('basin'),
                             tuple(f.name for f in fields(BasinConfig)))
        junctions = _parse_junctions(basin_raw.pop('junctions', None) or [])
        grids = _parse_grids(basin_raw.pop('grids', None), base_dir)
        basin = BasinConfig(junctions=junctions, grids=grids, **basin_raw)
        return cls(spectral=spectral, basin=basin)


def _parse_junctions(entries: List[Mapping[str, Any]]) -> Dict[int, Tuple[int, int, int]]:
    junctions = {}
    for entry in entries:
        entry = _checked('junctions', entry, ('id', 'row', 'col', 'order'))
        try:
            jid = int(entry['id'])
            junctions[jid] = (int(entry['row']), int(entry['col']),
                              int(entry.get('order', 1)))
        except KeyError as e:
            raise ValidationError(
                f"Junction entry {entry} is missing {e.args[0]!r}"
            ) from None
        except (TypeError, ValueError):
            raise ValidationError(
                f"Junction entry {entry} must hold integer id, row, col "
                f"and order"
            ) from None
    return junctions


def _parse_grids(raw: Optional[Mapping[str, Any]],
                 base_dir: Optional[Path]) -> Dict[str, Path]:
    grids = {}
    for name, value in _checked('grids', raw, BASIN_GRIDS).items():
        path = Path(value)
        if base_dir is not None and not path.is_absolute():
            path = base_dir / path
        grids[name] = path
    return grids


def load_config(path: Union[str, Path, None]) -> RunConfig:
    """Load a ``RunConfig`` from a YAML file; defaults when *path* is None."""
    if path is None:
        return RunConfig()
    path = Path(path)
    with open(path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValidationError(f"Malformed YAML in {path}: {e}") from e
    logger.debug("Loaded configuration from %s", path)
    return RunConfig.from_dict(raw, base_dir=path.parent)
