"""
Calculation report generation.

Builds a downloadable record of one calculation: calculator title, the
inputs as submitted (with units), the results and a standard disclaimer.
Exported as CSV for spreadsheets or JSON for archiving.
"""

import csv
import io
import json
from datetime import datetime, timezone
from typing import Dict, List, Optional

from engine.catalog import get_calculator
from engine.forms import get_form
from engine.units import METRIC

DISCLAIMER = (
    'This estimate is for informational purposes only. Actual quantities and '
    'costs vary with site conditions, local codes and supplier pricing. '
    'Consult a qualified professional before starting your project.'
)


def _format_value(value) -> str:
    if isinstance(value, bool):
        return 'Yes' if value else 'No'
    if isinstance(value, float):
        return f'{value:,.2f}'
    if value is None:
        return ''
    return str(value)


def _result_label(key: str) -> str:
    return key.replace('_', ' ').capitalize()


def build_report(slug: str, inputs: Dict, results: Dict, units: str = 'imperial',
                 generated_at: Optional[datetime] = None) -> Dict:
    """
    Assemble a report for a completed calculation.

    Inputs are listed in form order with the unit label for the chosen unit
    system. Nested results (e.g. yearly series) are left out of the table.
    """
    calculator = get_calculator(slug)
    if calculator is None:
        raise KeyError(f"Unknown calculator '{slug}'")
    form = get_form(slug)

    input_rows: List[Dict[str, str]] = []
    for form_field in form.fields:
        if form_field.key not in inputs:
            continue
        unit = form_field.metric_unit if units == METRIC and form_field.metric_unit else form_field.unit
        value = _format_value(inputs[form_field.key])
        if unit and value:
            value = f'{value} {unit}'
        input_rows.append({'key': form_field.label, 'value': value})

    result_rows = [
        {'key': _result_label(key), 'value': _format_value(value)}
        for key, value in results.items()
        if key != 'summary' and not isinstance(value, (list, dict))
    ]

    generated_at = generated_at or datetime.now(timezone.utc)
    return {
        'title': calculator.name,
        'slug': slug,
        'units': units,
        'generated_at': generated_at.isoformat(),
        'summary': results.get('summary', ''),
        'inputs': input_rows,
        'results': result_rows,
        'disclaimer': DISCLAIMER,
    }


def export_csv(report: Dict) -> str:
    """Export a report as CSV string."""
    output = io.StringIO()
    writer = csv.writer(output)

    writer.writerow([report['title']])
    writer.writerow(['Generated', report['generated_at']])
    writer.writerow([])

    writer.writerow(['Input', 'Value'])
    for row in report['inputs']:
        writer.writerow([row['key'], row['value']])
    writer.writerow([])

    writer.writerow(['Result', 'Value'])
    for row in report['results']:
        writer.writerow([row['key'], row['value']])
    writer.writerow(['Summary', report['summary']])
    writer.writerow([])

    writer.writerow([report['disclaimer']])
    return output.getvalue()


def export_json(report: Dict) -> str:
    """Export a report as JSON string."""
    export_data = dict(report)
    export_data['generated_by'] = 'HomeCalc Pro'
    return json.dumps(export_data, indent=2)
