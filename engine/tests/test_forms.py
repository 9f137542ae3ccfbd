"""
Tests for form definitions and calculation dispatch.

Every catalog slug must have exactly one designated form, and `calculate`
must validate raw form submissions (strings, possibly blank) before the
math runs.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from engine.catalog import CALCULATORS
from engine.forms import _FORMS, calculate, get_form, list_forms, parse_params


class TestRegistry:

    def test_every_calculator_has_one_form(self):
        form_slugs = [f.slug for f in _FORMS]
        for calc in CALCULATORS:
            assert form_slugs.count(calc.slug) == 1, f"{calc.slug} needs exactly one form"

    def test_no_orphan_forms(self):
        catalog_slugs = {c.slug for c in CALCULATORS}
        assert {f.slug for f in _FORMS} == catalog_slugs

    def test_list_forms_in_catalog_order(self):
        assert [f.slug for f in list_forms()] == [c.slug for c in CALCULATORS]

    def test_field_keys_unique_per_form(self):
        for form in _FORMS:
            keys = form.field_keys()
            assert len(keys) == len(set(keys)), f"duplicate field key in {form.slug}"

    def test_select_defaults_are_options(self):
        for form in _FORMS:
            for field in form.fields:
                if field.type == 'select':
                    assert field.default in field.options, f"{form.slug}.{field.key}"

    def test_unknown_slug(self):
        with pytest.raises(KeyError):
            get_form('warp-drive')


class TestParseParams:

    def test_blank_required_field(self):
        form = get_form('energy-consumption')
        with pytest.raises(ValueError, match='Wattage is required.'):
            parse_params(form, {'wattage': '', 'hours_per_day': '5', 'cost_per_kwh': '0.17'})

    def test_missing_required_field(self):
        form = get_form('energy-consumption')
        with pytest.raises(ValueError, match='Hours per day is required.'):
            parse_params(form, {'wattage': '100', 'cost_per_kwh': '0.17'})

    def test_blank_optional_uses_fallback(self):
        form = get_form('flooring-area')
        parsed = parse_params(form, {
            'room_width': '10', 'room_length': '12', 'waste_factor': '10', 'box_coverage': '',
        })
        assert parsed['box_coverage'] == 0.0

    def test_strings_coerced_to_float(self):
        form = get_form('energy-consumption')
        parsed = parse_params(form, {'wattage': ' 150 ', 'hours_per_day': 24, 'cost_per_kwh': '0.17'})
        assert parsed == {'wattage': 150.0, 'hours_per_day': 24.0, 'cost_per_kwh': 0.17}

    def test_bad_number(self):
        form = get_form('energy-consumption')
        with pytest.raises(ValueError, match='Wattage must be a number.'):
            parse_params(form, {'wattage': 'lots', 'hours_per_day': '5', 'cost_per_kwh': '0.17'})

    @pytest.mark.parametrize('raw', ['inf', '-inf', 'nan', '1e999', float('inf'), float('nan')])
    def test_non_finite_number_rejected(self, raw):
        form = get_form('energy-consumption')
        with pytest.raises(ValueError, match='Wattage must be a number.'):
            parse_params(form, {'wattage': raw, 'hours_per_day': '5', 'cost_per_kwh': '0.17'})

    def test_boolean_is_not_a_number(self):
        form = get_form('energy-consumption')
        with pytest.raises(ValueError):
            parse_params(form, {'wattage': True, 'hours_per_day': '5', 'cost_per_kwh': '0.17'})

    def test_bad_select_option(self):
        form = get_form('furnace-cost')
        with pytest.raises(ValueError, match='Choose one of'):
            parse_params(form, {'home_size': '1500', 'furnace_type': 'wood', 'efficiency': 'standard'})

    def test_boolean_field_from_form_value(self):
        form = get_form('paint-coverage')
        parsed = parse_params(form, {
            'room_length': '12', 'room_width': '10', 'wall_height': '8',
            'coats': '2', 'include_ceiling': 'on',
        })
        assert parsed['include_ceiling'] is True
        assert parsed['num_windows'] == 0.0

    def test_unknown_keys_ignored(self):
        form = get_form('energy-consumption')
        parsed = parse_params(form, {
            'wattage': '100', 'hours_per_day': '5', 'cost_per_kwh': '0.17', 'colour': 'blue',
        })
        assert 'colour' not in parsed


class TestCalculate:

    def test_raw_submission(self):
        result = calculate('btu-calculator', {
            'room_area': '200', 'ceiling_height': '8',
            'insulation': 'average', 'sun_exposure': 'shady',
        })
        assert result['summary'] == '16000 BTU/hr'

    def test_metric_supported(self):
        result = calculate('btu-calculator', {
            'room_area': '20', 'ceiling_height': '2.5',
            'insulation': 'average', 'sun_exposure': 'shady',
        }, 'metric')
        assert result['summary'].endswith(' Watts')

    def test_metric_not_supported(self):
        with pytest.raises(ValueError, match='only supports imperial units'):
            calculate('duct-size', {'air_flow': '400', 'friction_loss': '0.1'}, 'metric')

    def test_unknown_unit_system(self):
        with pytest.raises(ValueError, match='Unknown unit system'):
            calculate('duct-size', {'air_flow': '400', 'friction_loss': '0.1'}, 'cubits')

    def test_unknown_slug(self):
        with pytest.raises(KeyError):
            calculate('warp-drive', {})

    def test_defaults_run_where_complete(self):
        """Forms whose every required field has a default compute straight away."""
        for form in _FORMS:
            if any(f.required and f.default is None for f in form.fields):
                continue
            params = {f.key: f.default for f in form.fields}
            result = calculate(form.slug, params)
            assert result['summary'], form.slug
