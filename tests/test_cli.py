# -*- coding: utf-8 -*-
"""
Command Line Tests - spectral, filter and basins subcommands end to end.

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

import csv

import pytest
import numpy as np

from landsurf import cli
from landsurf.raster.grid import Grid
from landsurf.raster.io import read_grid, write_grid

NODATA = -9999.0


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, 'configure_logging', lambda *a, **k: None)


@pytest.fixture
def dem_path(noisy_plane, tmp_path):
    return write_grid(noisy_plane, tmp_path / 'dem.npy')


class TestParser:
    """Test argument parsing."""

    def test_subcommand_required(self):
        """Test running without a subcommand exits with usage."""
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([])

    def test_config_after_subcommand(self, tmp_path):
        """Test --config is accepted on each subcommand."""
        args = cli.build_parser().parse_args(
            ['basins', 'dem.npy', '--config', 'run.yaml', '--out', 'b.csv'])
        assert str(args.config) == 'run.yaml'

    def test_filter_choices(self):
        """Test an unknown filter type is rejected by the parser."""
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(
                ['filter', 'dem.npy', '--type', 'notch', '--out', 'o.npy'])


class TestSpectralCommand:
    """Test the spectral subcommand."""

    def test_writes_report(self, dem_path, tmp_path):
        """Test the PSD grid and both tables are written."""
        prefix = tmp_path / 'out' / 'dem'
        assert cli.main(['spectral', str(dem_path), '--out', str(prefix)]) == 0
        assert (tmp_path / 'out' / 'dem_P_DFT.npy').exists()
        assert (tmp_path / 'out' / 'dem_radialPSD.txt').exists()
        assert (tmp_path / 'out' / 'dem_radialPSD_binned.txt').exists()

    def test_missing_dem_fails(self, tmp_path):
        """Test a missing input returns a non-zero status."""
        assert cli.main(['spectral', str(tmp_path / 'x.npy'),
                         '--out', str(tmp_path / 'o')]) == 1


class TestFilterCommand:
    """Test the filter subcommand."""

    def test_identity_lowpass(self, dem_path, noisy_plane, tmp_path):
        """Test a lowpass above Nyquist writes the input back."""
        out = tmp_path / 'smooth.npy'
        status = cli.main(['filter', str(dem_path), '--type', 'lowpass',
                           '--f-low', '1.0', '--f-high', '1.0',
                           '--out', str(out)])
        assert status == 0
        np.testing.assert_allclose(read_grid(out).data, noisy_plane.data,
                                   atol=1e-8)

    def test_bad_band_fails(self, dem_path, tmp_path):
        """Test reversed bounds fail with status 1."""
        status = cli.main(['filter', str(dem_path), '--type', 'lowpass',
                           '--f-low', '0.3', '--f-high', '0.1',
                           '--out', str(tmp_path / 'o.npy')])
        assert status == 1

    def test_config_supplies_defaults(self, dem_path, noisy_plane, tmp_path):
        """Test filter settings come from --config when not given."""
        config = tmp_path / 'run.yaml'
        config.write_text("spectral:\n  filter_type: highpass\n"
                          "  f_low: 10.0\n  f_high: 10.0\n")
        out = tmp_path / 'trend.npy'
        assert cli.main(['filter', str(dem_path), '--config', str(config),
                         '--out', str(out)]) == 0
        assert not np.allclose(read_grid(out).data, noisy_plane.data)


class TestBasinsCommand:
    """Test the basins subcommand."""

    @pytest.fixture
    def tilted_path(self, tilted_dem, tmp_path):
        return write_grid(tilted_dem, tmp_path / 'tilted.npy')

    def test_basin_table(self, tilted_path, tmp_path):
        """Test one row per valid junction, skipping invalid ones."""
        config = tmp_path / 'run.yaml'
        config.write_text(
            "basin:\n"
            "  junctions:\n"
            "    - {id: 1, row: 3, col: 0, order: 1}\n"
            "    - {id: 2, row: 40, col: 40}\n"
        )
        out = tmp_path / 'basins.csv'
        assert cli.main(['basins', str(tilted_path), '--config', str(config),
                         '--out', str(out)]) == 0
        with open(out, newline='') as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 1
        assert rows[0]['junction'] == '1'
        assert rows[0]['n_cells'] == '16'
        assert float(rows[0]['elevation_mean']) == pytest.approx(3.0)
        assert rows[0]['estar'] == ''

    def test_no_junctions(self, tilted_path, tmp_path):
        """Test an empty junction list writes a header-only table."""
        out = tmp_path / 'basins.csv'
        assert cli.main(['basins', str(tilted_path), '--out', str(out)]) == 0
        assert out.read_text().strip() == 'junction'

    def test_grid_shape_mismatch_fails(self, tilted_path, tmp_path):
        """Test a field grid of the wrong shape fails the run."""
        slope = write_grid(Grid(np.zeros((2, 2)), nodata=NODATA),
                           tmp_path / 'slope.npy')
        config = tmp_path / 'run.yaml'
        config.write_text(
            "basin:\n"
            "  junctions:\n"
            "    - {id: 1, row: 3, col: 0}\n"
            f"  grids:\n    slope: {slope.name}\n"
        )
        assert cli.main(['basins', str(tilted_path), '--config', str(config),
                         '--out', str(tmp_path / 'b.csv')]) == 1

    def test_non_integer_junction_fails(self, tilted_path, tmp_path):
        """Test a junction id that is not an integer returns 1."""
        config = tmp_path / 'run.yaml'
        config.write_text(
            "basin:\n"
            "  junctions:\n"
            "    - {id: a1, row: 1, col: 1}\n"
        )
        assert cli.main(['basins', str(tilted_path), '--config', str(config),
                         '--out', str(tmp_path / 'b.csv')]) == 1

    def test_malformed_yaml_fails(self, tilted_path, tmp_path):
        """Test an unparseable configuration file returns 1."""
        config = tmp_path / 'run.yaml'
        config.write_text("basin: {junctions: [\n")
        assert cli.main(['basins', str(tilted_path), '--config', str(config),
                         '--out', str(tmp_path / 'b.csv')]) == 1
