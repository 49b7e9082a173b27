# -*- coding: utf-8 -*-
"""
Processing Framework Tests - Annotated parameters, versioning, tags, processors.

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

import inspect
import warnings
from typing import Annotated

import pytest
import numpy as np

from landsurf.exceptions import InvalidFilterTypeError, ValidationError
from landsurf.processing import (
    Desc,
    GridTransform,
    ParamSpec,
    Range,
    processor_tags,
    processor_version,
)
from landsurf.spectral import SpectralAnalysis, SpectralFilter
from landsurf.vocabulary import ProcessorCategory


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

@processor_version('0.1.0')
class _Scale(GridTransform):
    """Multiply a grid by a factor."""

    factor: Annotated[float, Range(min=0.0, max=10.0), Desc('Multiplier')] = 1.0
    label: Annotated[str, Desc('Free text')] = 'scale'

    def apply(self, source, **kwargs):
        params = self._resolve_params(kwargs)
        self._report_progress(kwargs, 1.0)
        return source.like(source.data * params['factor'])


@processor_version('0.1.0')
class _Required(GridTransform):
    """Processor with a required parameter."""

    size: Annotated[int, Range(min=1), Desc('Window size')]

    def apply(self, source, **kwargs):
        return source


# ---------------------------------------------------------------------------
# Parameter declarations
# ---------------------------------------------------------------------------

class TestParamSpecs:
    """Test collection of Annotated parameter declarations."""

    def test_specs_collected(self):
        """Test names, types, defaults and bounds are recorded."""
        specs = {s.name: s for s in _Scale.__param_specs__}
        assert list(specs) == ['factor', 'label']
        assert specs['factor'].param_type is float
        assert specs['factor'].default == 1.0
        assert specs['factor'].min_value == 0.0
        assert specs['factor'].max_value == 10.0
        assert specs['factor'].description == 'Multiplier'
        assert not specs['factor'].required

    def test_required_spec(self):
        """Test a field without default is required."""
        spec = _Required.__param_specs__[0]
        assert spec.required
        assert spec.default is None

    def test_generated_signature(self):
        """Test the generated __init__ is keyword-only with defaults."""
        sig = inspect.signature(_Scale.__init__)
        assert sig.parameters['factor'].kind is inspect.Parameter.KEYWORD_ONLY
        assert sig.parameters['factor'].default == 1.0


class TestValidation:
    """Test constructor validation."""

    def test_defaults_applied(self):
        """Test omitted parameters take their defaults."""
        proc = _Scale()
        assert proc.factor == 1.0
        assert proc.label == 'scale'

    def test_int_accepted_for_float(self):
        """Test an int is accepted for a float parameter."""
        assert _Scale(factor=2).factor == 2

    def test_bool_rejected_for_float(self):
        """Test bool is not accepted as a number."""
        with pytest.raises(TypeError):
            _Scale(factor=True)

    def test_wrong_type(self):
        """Test a string for a float parameter raises TypeError."""
        with pytest.raises(TypeError, match="factor"):
            _Scale(factor='big')

    @pytest.mark.parametrize("value", [-0.5, 10.5])
    def test_out_of_range(self, value):
        """Test values outside the Range raise ValidationError."""
        with pytest.raises(ValidationError, match="factor"):
            _Scale(factor=value)

    def test_unexpected_keyword(self):
        """Test unknown keywords raise TypeError."""
        with pytest.raises(TypeError, match="unexpected"):
            _Scale(size=3)

    def test_missing_required(self):
        """Test a required parameter must be given."""
        with pytest.raises(TypeError, match="size"):
            _Required()
        assert _Required(size=3).size == 3

    def test_param_spec_validate_direct(self):
        """Test ParamSpec.validate on its own."""
        spec = ParamSpec('n', int, 1, False, min_value=0)
        spec.validate(5)
        with pytest.raises(ValidationError):
            spec.validate(-1)


class TestCallOverrides:
    """Test per-call parameter overrides and progress reporting."""

    def test_override_does_not_mutate(self, index_field):
        """Test a call-time override leaves the instance unchanged."""
        proc = _Scale(factor=2.0)
        out = proc.apply(index_field, factor=3.0)
        assert out.data[0, 1] == 3.0
        assert proc.factor == 2.0

    def test_override_validated(self, index_field):
        """Test call-time overrides are validated."""
        with pytest.raises(ValidationError):
            _Scale().apply(index_field, factor=-1.0)

    def test_progress_callback(self, index_field):
        """Test the progress callback receives fractions."""
        seen = []
        _Scale().apply(index_field, progress_callback=seen.append)
        assert seen == [1.0]


# ---------------------------------------------------------------------------
# Versioning and tags
# ---------------------------------------------------------------------------

class TestVersioning:
    """Test processor_version and processor_tags."""

    def test_version_stamped(self):
        """Test the declared version is stored on the class."""
        assert _Scale.__processor_version__ == '0.1.0'

    def test_missing_version_warns_once(self):
        """Test an unversioned processor warns on first instantiation."""
        class Unversioned(GridTransform):
            def apply(self, source, **kwargs):
                return source

        with pytest.warns(UserWarning, match="processor version"):
            Unversioned()
        with warnings.catch_warnings():
            warnings.simplefilter('error')
            Unversioned()

    def test_tags(self):
        """Test tags record category and description."""
        @processor_tags(category=ProcessorCategory.FILTERS, description='x')
        class Tagged:
            pass

        assert Tagged.__processor_tags__ == {
            'category': ProcessorCategory.FILTERS, 'description': 'x'}

    def test_bad_category(self):
        """Test a non-enum category is rejected."""
        with pytest.raises(TypeError, match="ProcessorCategory"):
            processor_tags(category='filters')


# ---------------------------------------------------------------------------
# Spectral processors
# ---------------------------------------------------------------------------

class TestSpectralProcessors:
    """Test the spectral processors built on the framework."""

    def test_filter_metadata(self):
        """Test SpectralFilter carries version and FFT tag."""
        assert SpectralFilter.__processor_version__ == '1.0.0'
        assert SpectralFilter.__processor_tags__['category'] is ProcessorCategory.FFT
        assert SpectralAnalysis.__processor_tags__['category'] is ProcessorCategory.ANALYZE

    def test_filter_rejects_unknown_type(self):
        """Test an unknown filter type fails at construction."""
        with pytest.raises(InvalidFilterTypeError):
            SpectralFilter(filter_type='notch')

    def test_filter_rejects_negative_frequency(self):
        """Test the Range on frequency bounds."""
        with pytest.raises(ValidationError):
            SpectralFilter(f_low=-0.1)

    def test_filter_apply_matches_surface(self, noisy_plane):
        """Test the processor output equals an identity lowpass."""
        out = SpectralFilter(filter_type='lowpass', f_low=1.0,
                             f_high=1.0).apply(noisy_plane)
        np.testing.assert_allclose(out.data, noisy_plane.data, atol=1e-8)

    def test_filter_call_override(self, noisy_plane):
        """Test the filter type can be overridden per call."""
        seen = []
        proc = SpectralFilter(filter_type='lowpass', f_low=1.0, f_high=1.0)
        out = proc.apply(noisy_plane, filter_type='highpass', f_low=10.0,
                         f_high=10.0, progress_callback=seen.append)
        assert seen == [0.0, 1.0]
        assert not np.allclose(out.data, noisy_plane.data)

    def test_analysis_bin_width_range(self):
        """Test the bin width bounds."""
        with pytest.raises(ValidationError):
            SpectralAnalysis(log_bin_width=0.0)
        with pytest.raises(ValidationError):
            SpectralAnalysis(log_bin_width=5.0)

    def test_analysis_report(self, noisy_plane):
        """Test SpectralAnalysis returns a report."""
        report = SpectralAnalysis(log_bin_width=0.2).analyze(noisy_plane)
        assert report.psd_grid.shape == (64, 64)
        assert len(report.binned) > 0
