"""
Calculator form definitions and calculation dispatch.

Each calculator slug has exactly one designated form: the list of fields a
client renders, their defaults and units, and the function that turns the
submitted values into an estimate. Submitted values arrive the way an HTML
form sends them (strings, possibly blank) or as JSON numbers/booleans;
`calculate` validates and coerces them before dispatching.
"""

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from engine import energy, finance, gardening, home_improvement, hvac
from engine.catalog import CALCULATORS
from engine.units import IMPERIAL, METRIC, UNIT_SYSTEMS


FieldValue = Union[str, int, float, bool, None]

CLIMATE_ZONES = ('1', '2', '3', '4', '5', '6', '7', '8')
INSULATION_LEVELS = ('good', 'average', 'poor')


@dataclass(frozen=True)
class FormField:
    """One input on a calculator form."""
    key: str
    label: str
    type: str = 'number'            # 'number', 'select' or 'boolean'
    required: bool = True
    default: FieldValue = None      # value the form is pre-filled with
    fallback: FieldValue = 0.0      # value used when an optional field is left blank
    options: Tuple[str, ...] = ()
    unit: Optional[str] = None
    metric_unit: Optional[str] = None


@dataclass
class FormDefinition:
    """The designated form of one calculator."""
    slug: str
    fields: List[FormField]
    calculate: Callable[[Dict, str], Dict]
    supports_metric: bool = False

    def field_keys(self) -> List[str]:
        return [f.key for f in self.fields]


def _number(key, label, unit=None, metric_unit=None, default=None, required=True, fallback=0.0):
    return FormField(key=key, label=label, type='number', required=required,
                     default=default, fallback=fallback, unit=unit, metric_unit=metric_unit)


def _select(key, label, options, default):
    return FormField(key=key, label=label, type='select', default=default,
                     fallback=default, options=tuple(options))


def _boolean(key, label, default=False):
    return FormField(key=key, label=label, type='boolean', required=False,
                     default=default, fallback=default)


_FORMS: List[FormDefinition] = [
    # --- HVAC ---
    FormDefinition('hvac-load', [
        _number('total_area', 'Total area', 'sq ft', 'sq m'),
        _select('climate_zone', 'Climate zone', CLIMATE_ZONES, '5'),
        _number('windows_area', 'Windows area', 'sq ft', 'sq m'),
        _number('number_of_occupants', 'Number of occupants', default='2'),
        _select('insulation_quality', 'Insulation quality', INSULATION_LEVELS, 'average'),
    ], hvac.hvac_load, supports_metric=True),
    FormDefinition('btu-calculator', [
        _number('room_area', 'Room area', 'sq ft', 'sq m'),
        _number('ceiling_height', 'Ceiling height', 'ft', 'm'),
        _select('insulation', 'Insulation', INSULATION_LEVELS, 'average'),
        _select('sun_exposure', 'Sun exposure', ('shady', 'sunny'), 'shady'),
    ], hvac.btu_calculator, supports_metric=True),
    FormDefinition('duct-size', [
        _number('air_flow', 'Air Flow (CFM)', 'CFM'),
        _number('friction_loss', 'Friction loss', 'in. w.c./100 ft', default='0.1'),
    ], hvac.duct_size),
    FormDefinition('seer-savings-calculator', [
        _number('old_seer', 'Old SEER rating', default='10'),
        _number('new_seer', 'New SEER rating', default='16'),
        _number('cooling_btu', 'Cooling capacity', 'BTU/hr', default='36000'),
        _number('hours_per_day', 'Hours per day', 'hours', default='8'),
        _number('days_per_year', 'Days per year', 'days', default='120'),
        _number('cost_per_kwh', 'Cost per kWh', '$/kWh', default='0.17'),
        _number('unit_cost', 'New unit cost', '$', required=False),
    ], hvac.seer_savings),
    FormDefinition('mini-split-cost', [
        _number('zones', 'Number of zones', default='1'),
        _number('btu_rating', 'BTU rating', 'BTU/hr', 'W', default='12000'),
        _number('seer_rating', 'SEER rating', default='20'),
    ], hvac.mini_split_cost, supports_metric=True),
    FormDefinition('furnace-cost', [
        _number('home_size', 'Home size', 'sq ft', 'sq m'),
        _select('furnace_type', 'Furnace type', ('gas', 'electric', 'oil'), 'gas'),
        _select('efficiency', 'Efficiency', ('standard', 'high'), 'standard'),
    ], hvac.furnace_cost, supports_metric=True),
    FormDefinition('heat-pump-cost', [
        _number('home_size', 'Home size', 'sq ft', 'sq m', default='2000'),
        _number('seer_rating', 'SEER rating', default='16'),
        _number('unit_size', 'Unit size', 'tons', 'kW', default='3'),
    ], hvac.heat_pump_cost, supports_metric=True),
    FormDefinition('thermostat-savings', [
        _number('annual_heating_cost', 'Annual heating cost', '$', default='1000'),
        _number('heating_setback_temp', 'Heating setback', '°F', default='7'),
        _number('heating_setback_hours', 'Heating setback hours', 'hours', default='8'),
        _number('annual_cooling_cost', 'Annual cooling cost', '$', default='500'),
        _number('cooling_setup_temp', 'Cooling setup', '°F', default='4'),
        _number('cooling_setup_hours', 'Cooling setup hours', 'hours', default='8'),
    ], hvac.thermostat_savings),
    FormDefinition('attic-insulation', [
        _number('attic_area', 'Attic area', 'sq ft', 'sq m'),
        _select('climate_zone', 'Climate zone', CLIMATE_ZONES, '5'),
        _number('existing_insulation', 'Existing insulation depth', 'in', 'cm', default='0'),
        _select('insulation_type', 'Insulation type',
                ('loose-fill-fiberglass', 'loose-fill-cellulose'), 'loose-fill-fiberglass'),
    ], hvac.attic_insulation, supports_metric=True),
    FormDefinition('ventilation-fan-cfm', [
        _select('room_type', 'Room type', ('bathroom', 'kitchen', 'whole-house'), 'bathroom'),
        _number('room_area', 'Room area', 'sq ft'),
        _number('ceiling_height', 'Ceiling height', 'ft', default='8'),
        _number('occupants', 'Occupants', default='2', required=False),
    ], hvac.ventilation_fan_cfm),
    FormDefinition('dehumidifier-size', [
        _number('room_area', 'Room area', 'sq ft', default='1500'),
        _select('initial_humidity', 'Room condition',
                ('moderately-damp', 'very-damp', 'wet', 'extremely-wet'), 'very-damp'),
        _number('desired_humidity', 'Desired humidity', '%', default='50', required=False),
    ], hvac.dehumidifier_size),

    # --- Home Improvement ---
    FormDefinition('paint-coverage', [
        _number('room_length', 'Room length', 'ft', 'm'),
        _number('room_width', 'Room width', 'ft', 'm'),
        _number('wall_height', 'Wall height', 'ft', 'm', default='8'),
        _number('coats', 'Number of coats', default='2'),
        _number('num_windows', 'Number of windows', default='0', required=False),
        _number('num_doors', 'Number of doors', default='0', required=False),
        _boolean('include_ceiling', 'Include ceiling'),
    ], home_improvement.paint_coverage, supports_metric=True),
    FormDefinition('flooring-area', [
        _number('room_width', 'Room width', 'ft'),
        _number('room_length', 'Room length', 'ft'),
        _number('waste_factor', 'Waste factor', '%', default='10'),
        _number('box_coverage', 'Coverage per box', 'sq ft', required=False),
    ], home_improvement.flooring_area),
    FormDefinition('wallpaper', [
        _number('room_perimeter', 'Room perimeter', 'ft', 'm'),
        _number('wall_height', 'Wall height', 'ft', 'm', default='8'),
        _number('roll_width', 'Roll width', 'in', 'cm', default='20.5'),
        _number('roll_length', 'Roll length', 'ft', 'm', default='33'),
        _number('pattern_repeat', 'Pattern repeat', 'in', 'cm', default='0', required=False),
        _number('waste_factor', 'Waste factor', '%', default='15'),
    ], home_improvement.wallpaper, supports_metric=True),
    FormDefinition('kitchen-remodel-cost', [
        _number('kitchen_size', 'Kitchen size', 'sq ft', 'sq m'),
        _select('cabinets', 'Cabinets', ('stock', 'semi-custom', 'custom'), 'semi-custom'),
        _select('countertops', 'Countertops',
                ('laminate', 'solid-surface', 'granite-quartz'), 'granite-quartz'),
        _select('appliances', 'Appliances', ('basic', 'mid-range', 'high-end'), 'mid-range'),
    ], home_improvement.kitchen_remodel_cost, supports_metric=True),
    FormDefinition('decking-calculator', [
        _number('deck_width', 'Deck width', 'ft', 'm'),
        _number('deck_length', 'Deck length', 'ft', 'm'),
        _number('board_width', 'Board width', 'in', 'cm', default='5.5'),
        _number('board_length', 'Board length', 'ft', 'm', default='12'),
        _number('joist_spacing', 'Joist spacing', 'in', 'cm', default='16'),
        _number('waste_factor', 'Waste factor', '%', default='10'),
    ], home_improvement.decking, supports_metric=True),
    FormDefinition('concrete-slab-calculator', [
        _number('length', 'Length', 'ft'),
        _number('width', 'Width', 'ft'),
        _number('thickness', 'Thickness', 'in', default='4'),
        _number('waste_factor', 'Waste factor', '%', default='10'),
    ], home_improvement.concrete_slab),
    FormDefinition('roofing-materials', [
        _number('roof_area', 'Roof area', 'sq ft'),
        _select('roof_pitch', 'Roof pitch', tuple(home_improvement.PITCH_MULTIPLIER), '6/12'),
        _number('waste_factor', 'Waste factor', '%', default='15'),
        _number('material_cost', 'Material cost per square', '$', required=False),
    ], home_improvement.roofing_materials),
    FormDefinition('tile-calculator', [
        _number('area_to_tile', 'Area', 'sq ft'),
        _number('tile_width', 'Tile width', 'in', default='12'),
        _number('tile_length', 'Tile length', 'in', default='12'),
        _number('waste_factor', 'Waste factor', '%', default='10'),
        _number('grout_width', 'Grout width', 'in', default='0.125', required=False),
    ], home_improvement.tile),
    FormDefinition('drywall-calculator', [
        _number('wall_area', 'Wall area', 'sq ft'),
        _number('ceiling_area', 'Ceiling area', 'sq ft', default='0', required=False),
        _select('sheet_size', 'Sheet size', ('4x8', '4x12'), '4x8'),
    ], home_improvement.drywall),
    FormDefinition('fence-materials', [
        _select('fence_type', 'Fence type', ('panel', 'picket'), 'panel'),
        _number('fence_length', 'Fence length', 'ft'),
        _number('post_spacing', 'Post spacing', 'ft', default='8'),
        _number('panel_width', 'Panel/Picket width', 'ft (panel) / in (picket)', default='8'),
        _number('picket_spacing', 'Picket spacing', 'in', default='2', required=False),
    ], home_improvement.fence),
    FormDefinition('driveway-materials', [
        _number('length', 'Length', 'ft'),
        _number('width', 'Width', 'ft'),
        _number('thickness', 'Thickness', 'in', default='4'),
        _select('material', 'Material', ('asphalt', 'concrete', 'pavers'), 'concrete'),
    ], home_improvement.driveway),

    # --- Gardening ---
    FormDefinition('soil-volume', [
        _number('length', 'Length', 'ft'),
        _number('width', 'Width', 'ft'),
        _number('depth', 'Depth', 'in', default='6'),
        _number('bag_size', 'Bag size', 'cu ft', required=False),
    ], gardening.soil_volume),
    FormDefinition('fertilizer-needs', [
        _number('garden_area', 'Garden area', 'sq ft'),
        _number('application_rate', 'Application rate', 'lbs N per 1,000 sq ft', default='1'),
        _number('nitrogen_ratio', 'Nitrogen (N)', '%', default='10'),
        _number('phosphorus_ratio', 'Phosphorus (P)', '%', default='10'),
        _number('potassium_ratio', 'Potassium (K)', '%', default='10'),
    ], gardening.fertilizer_needs),

    # --- Other ---
    FormDefinition('mortgage-calculator', [
        _number('loan_amount', 'Loan amount', '$', default='300000'),
        _number('interest_rate', 'Interest rate', '%', default='6.5'),
        _number('loan_term', 'Loan term', 'years', default='30'),
        _number('property_tax', 'Annual property tax', '$', required=False),
        _number('home_insurance', 'Annual home insurance', '$', required=False),
        _number('pmi', 'Monthly PMI', '$', required=False),
    ], finance.mortgage),
    FormDefinition('energy-consumption', [
        _number('wattage', 'Wattage', 'W'),
        _number('hours_per_day', 'Hours per day', 'hours'),
        _number('cost_per_kwh', 'Cost per kWh', '$/kWh', default='0.17'),
    ], energy.appliance_energy_cost),
    FormDefinition('energy-savings-calculator', [
        _number('cost_per_kwh', 'Cost per kWh', '$/kWh', default='0.17'),
        _number('current_wattage', 'Current appliance wattage', 'W'),
        _number('current_hours', 'Current appliance hours per day', 'hours'),
        _number('new_wattage', 'New appliance wattage', 'W'),
        _number('new_hours', 'New appliance hours per day', 'hours'),
    ], energy.energy_savings),
    FormDefinition('savings-calculator', [
        _number('initial_deposit', 'Initial deposit', '$', default='1000'),
        _number('monthly_contribution', 'Monthly contribution', '$', default='100'),
        _number('interest_rate', 'Interest rate', '%', default='7'),
        _number('years', 'Investment period', 'years', default='10'),
    ], finance.savings),
    FormDefinition('car-loan-calculator', [
        _number('vehicle_price', 'Vehicle price', '$', default='35000'),
        _number('down_payment', 'Down payment', '$', default='5000', required=False),
        _number('trade_in_value', 'Trade-in value', '$', default='0', required=False),
        _number('interest_rate', 'Interest rate', '%', default='7.5'),
        _number('loan_term', 'Loan term', 'years', default='5'),
        _number('sales_tax_rate', 'Sales tax rate', '%', required=False),
        _number('other_fees', 'Other fees', '$', required=False),
    ], finance.car_loan),
    FormDefinition('water-heater-energy-cost', [
        _number('hot_water_usage', 'Hot water usage', 'gallons/day', default='60'),
        _number('energy_rate', 'Energy rate', '$/kWh', default='0.17'),
        _number('groundwater_temp', 'Groundwater temperature', '°F', default='50'),
        _number('set_temp', 'Water heater set temperature', '°F', default='120'),
        _number('tank_cost', 'Tank heater cost', '$', default='1500', required=False),
        _number('tankless_cost', 'Tankless heater cost', '$', default='3000', required=False),
    ], energy.water_heater_cost),
    FormDefinition('solar-savings', [
        _number('avg_bill', 'Average monthly bill', '$', default='150'),
        _number('sunlight_hours', 'Peak sunlight hours per day', 'hours', default='4.5'),
        _number('install_cost', 'Installation cost', '$', default='20000'),
        _number('energy_rate', 'Energy rate', '$/kWh', default='0.17'),
        _number('incentives', 'Incentives and tax credits', '$', default='6000', required=False),
    ], energy.solar_savings),
]

_FORMS_BY_SLUG: Dict[str, FormDefinition] = {f.slug: f for f in _FORMS}


def get_form(slug: str) -> FormDefinition:
    """Get the designated form for a calculator slug."""
    if slug not in _FORMS_BY_SLUG:
        raise KeyError(f"Unknown calculator '{slug}'")
    return _FORMS_BY_SLUG[slug]


def list_forms() -> List[FormDefinition]:
    """All form definitions, in catalog order."""
    order = {c.slug: i for i, c in enumerate(CALCULATORS)}
    return sorted(_FORMS, key=lambda f: order[f.slug])


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _coerce(form_field: FormField, value: Any) -> Any:
    """Convert a submitted value to the field's type, raising ValueError on bad input."""
    if form_field.type == 'number':
        if isinstance(value, bool):
            raise ValueError(f'{form_field.label} must be a number.')
        try:
            number = float(value) if isinstance(value, (int, float)) else float(str(value).strip())
        except (OverflowError, ValueError):
            raise ValueError(f'{form_field.label} must be a number.')
        if not math.isfinite(number):
            raise ValueError(f'{form_field.label} must be a number.')
        return number

    if form_field.type == 'select':
        choice = str(value).strip()
        if choice not in form_field.options:
            raise ValueError(
                f"Invalid {form_field.label.lower()} '{choice}'. "
                f"Choose one of: {', '.join(form_field.options)}"
            )
        return choice

    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ('true', '1', 'yes', 'on'):
        return True
    if text in ('false', '0', 'no', 'off'):
        return False
    raise ValueError(f'{form_field.label} must be true or false.')


def parse_params(form: FormDefinition, params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate submitted values against a form and fill blanks.

    Unknown keys are ignored. A blank required field raises
    ValueError('<Label> is required.'); a blank optional field takes its
    fallback value.
    """
    parsed = {}
    for form_field in form.fields:
        value = params.get(form_field.key)
        if _is_blank(value):
            if form_field.required:
                raise ValueError(f'{form_field.label} is required.')
            parsed[form_field.key] = form_field.fallback
            continue
        parsed[form_field.key] = _coerce(form_field, value)
    return parsed


def calculate(slug: str, params: Dict[str, Any], units: str = IMPERIAL) -> Dict:
    """
    Run a calculator on submitted form values.

    Args:
        slug: Calculator slug from the catalog.
        params: Field key → submitted value (strings, numbers or booleans).
        units: 'imperial' or 'metric'.

    Returns:
        Result dict from the calculator; always includes 'summary'.

    Raises:
        KeyError: Unknown slug.
        ValueError: Invalid unit system or field values.
    """
    form = get_form(slug)
    if units not in UNIT_SYSTEMS:
        raise ValueError(f"Unknown unit system '{units}'. Use 'imperial' or 'metric'.")
    if units == METRIC and not form.supports_metric:
        raise ValueError('This calculator only supports imperial units.')

    parsed = parse_params(form, params)
    return form.calculate(parsed, units)
