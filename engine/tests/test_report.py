"""Tests for calculation report building and CSV/JSON export."""

import csv
import io
import json
import pytest
import sys
import os
from datetime import datetime, timezone

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from engine.forms import calculate, get_form, parse_params
from engine.report import DISCLAIMER, build_report, export_csv, export_json


PAINT_PARAMS = {
    'room_length': '12', 'room_width': '10', 'wall_height': '8', 'coats': '2',
    'num_windows': '1', 'num_doors': '1', 'include_ceiling': False,
}
GENERATED = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _paint_report(units='imperial'):
    inputs = parse_params(get_form('paint-coverage'), PAINT_PARAMS)
    results = calculate('paint-coverage', PAINT_PARAMS, units)
    return build_report('paint-coverage', inputs, results, units, generated_at=GENERATED)


class TestBuildReport:

    def test_header(self):
        report = _paint_report()
        assert report['title'] == 'Paint Coverage Calculator'
        assert report['generated_at'] == '2024-05-01T12:00:00+00:00'
        assert report['summary'] == '1.81 gallons'
        assert report['disclaimer'] == DISCLAIMER

    def test_inputs_labelled_with_units(self):
        report = _paint_report()
        rows = {row['key']: row['value'] for row in report['inputs']}
        assert rows['Room length'] == '12.00 ft'
        assert rows['Include ceiling'] == 'No'

    def test_metric_units_in_labels(self):
        report = _paint_report('metric')
        rows = {row['key']: row['value'] for row in report['inputs']}
        assert rows['Room length'] == '12.00 m'

    def test_summary_not_repeated_in_results(self):
        report = _paint_report()
        assert all(row['key'] != 'Summary' for row in report['results'])

    def test_nested_results_excluded(self):
        params = {
            'old_seer': '10', 'new_seer': '16', 'cooling_btu': '36000', 'hours_per_day': '8',
            'days_per_year': '120', 'cost_per_kwh': '0.17', 'unit_cost': '',
        }
        results = calculate('seer-savings-calculator', params)
        inputs = parse_params(get_form('seer-savings-calculator'), params)
        report = build_report('seer-savings-calculator', inputs, results)
        keys = [row['key'] for row in report['results']]
        assert 'Annual savings' in keys
        assert 'Cumulative savings' not in keys

    def test_unknown_slug(self):
        with pytest.raises(KeyError):
            build_report('warp-drive', {}, {})


class TestExport:

    def test_csv(self):
        content = export_csv(_paint_report())
        rows = list(csv.reader(io.StringIO(content)))
        assert rows[0] == ['Paint Coverage Calculator']
        assert ['Input', 'Value'] in rows
        assert ['Summary', '1.81 gallons'] in rows
        assert rows[-1] == [DISCLAIMER]

    def test_json(self):
        data = json.loads(export_json(_paint_report()))
        assert data['generated_by'] == 'HomeCalc Pro'
        assert data['slug'] == 'paint-coverage'
        assert data['units'] == 'imperial'
        assert isinstance(data['inputs'], list)
