"""
HVAC sizing and cost calculators.

Rules of thumb used by residential contractors for quick estimates:
room cooling load by volume, a simplified Manual J whole-house load,
the Ductulator approximation for round duct diameter, SEER upgrade savings,
equipment installation cost ranges, thermostat setback savings, attic
insulation top-up by DOE climate zone, ventilation airflow and dehumidifier
capacity.

Every function takes the parsed form parameters and the unit system and
returns a dict of results including a 'summary' string. Invalid inputs raise
ValueError with a message suitable for showing to the user.
"""

import math
from typing import Dict

from engine.units import (
    BTU_PER_TON,
    IMPERIAL,
    METRIC,
    KW_PER_TON,
    btu_to_watts,
    cm_to_in,
    m_to_ft,
    sqm_to_sqft,
    watts_to_btu,
)


INSULATION_MULTIPLIER = {'poor': 1.2, 'average': 1.0, 'good': 0.8}

# BTU/hr per sq ft by DOE climate zone
CLIMATE_FACTORS = {
    'cooling': {'1': 40, '2': 35, '3': 30, '4': 25, '5': 20, '6': 20, '7': 15, '8': 15},
    'heating': {'1': 15, '2': 20, '3': 25, '4': 30, '5': 40, '6': 45, '7': 50, '8': 55},
}
BTU_PER_OCCUPANT = 400
BTU_PER_WINDOW_SQFT = 45

# DOE recommended attic R-value by climate zone
R_VALUES_BY_ZONE = {'1': 30, '2': 38, '3': 38, '4': 49, '5': 49, '6': 60, '7': 60, '8': 60}
EXISTING_R_PER_INCH = 2.5

INSULATION_DATA = {
    'loose-fill-fiberglass': {
        'name': 'Loose-Fill Fiberglass',
        'r_value_per_inch': 2.5,
        'sqft_per_inch_per_bag': 100,
    },
    'loose-fill-cellulose': {
        'name': 'Loose-Fill Cellulose',
        'r_value_per_inch': 3.7,
        'sqft_per_inch_per_bag': 55,
    },
}

FURNACE_BASE_COST = {'gas': 2000, 'electric': 1500, 'oil': 2500}

# DOE 2019 dehumidifier capacity (pints/day) by dampness and area bucket (sq ft)
PINT_CAPACITY_2019 = {
    'moderately-damp': {500: 20, 1000: 25, 1500: 30, 2000: 35, 2500: 40},
    'very-damp': {500: 25, 1000: 30, 1500: 35, 2000: 40, 2500: 45},
    'wet': {500: 30, 1000: 35, 1500: 40, 2000: 45, 2500: 50},
    'extremely-wet': {500: 35, 1000: 40, 1500: 45, 2000: 50, 2500: 55},
}
# Pre-2019 ratings were measured at 80°F/60% RH and read about 1/0.6 higher
OLD_RATING_RATIO = 0.6


def btu_calculator(params: Dict, units: str = IMPERIAL) -> Dict:
    """Room AC size: 10 BTU/hr per cubic foot, adjusted for insulation and sun."""
    area = params['room_area']
    height = params['ceiling_height']
    if units == METRIC:
        area = sqm_to_sqft(area)
        height = m_to_ft(height)

    if area <= 0 or height <= 0:
        raise ValueError('Room area and ceiling height must be positive.')

    btu = area * height * 10
    btu *= INSULATION_MULTIPLIER[params['insulation']]
    if params['sun_exposure'] == 'sunny':
        btu *= 1.1

    if units == IMPERIAL:
        btu_hr = math.ceil(btu)
        return {'btu_per_hour': btu_hr, 'summary': f'{btu_hr} BTU/hr'}

    watts = math.ceil(btu_to_watts(btu))
    return {'watts': watts, 'summary': f'{watts} Watts'}


def hvac_load(params: Dict, units: str = IMPERIAL) -> Dict:
    """Whole-house heating and cooling load (simplified Manual J)."""
    area = params['total_area']
    windows = params['windows_area']
    zone = params['climate_zone']
    occupants = int(params['number_of_occupants'])
    if units == METRIC:
        area = sqm_to_sqft(area)
        windows = sqm_to_sqft(windows)

    if area <= 0 or windows < 0 or occupants <= 0:
        raise ValueError('Area and occupants must be positive and window area cannot be negative.')

    multiplier = INSULATION_MULTIPLIER[params['insulation_quality']]
    occupant_load = occupants * BTU_PER_OCCUPANT
    window_load = windows * BTU_PER_WINDOW_SQFT

    cooling = (area * CLIMATE_FACTORS['cooling'][zone] + window_load) * multiplier + occupant_load
    heating = area * CLIMATE_FACTORS['heating'][zone] * multiplier

    if units == IMPERIAL:
        tons = cooling / BTU_PER_TON
        return {
            'cooling_btu': cooling,
            'heating_btu': heating,
            'cooling_tons': round(tons, 1),
            'summary': f'Cooling: {cooling:.0f} BTU/hr ({tons:.1f} tons) | Heating: {heating:.0f} BTU/hr',
        }

    cooling_w = btu_to_watts(cooling)
    heating_w = btu_to_watts(heating)
    return {
        'cooling_watts': cooling_w,
        'heating_watts': heating_w,
        'summary': f'Cooling: {cooling_w:.0f} W | Heating: {heating_w:.0f} W',
    }


def duct_size(params: Dict, units: str = IMPERIAL) -> Dict:
    """Round metal duct diameter from airflow and friction rate (Ductulator fit)."""
    cfm = params['air_flow']
    friction = params['friction_loss']
    if cfm <= 0 or friction <= 0:
        raise ValueError('Air flow and friction loss must be positive.')

    diameter = 1.3 * ((cfm ** 0.9) / friction) ** 0.2
    return {
        'diameter_in': round(diameter, 1),
        'summary': f'Recommended: {diameter:.1f}-inch round duct',
    }


def seer_savings(params: Dict, units: str = IMPERIAL) -> Dict:
    """Annual savings and payback from replacing an AC with a higher SEER unit."""
    old_seer = params['old_seer']
    new_seer = params['new_seer']
    cooling_btu = params['cooling_btu']
    hours_per_day = params['hours_per_day']
    days_per_year = params['days_per_year']
    cost_per_kwh = params['cost_per_kwh']
    unit_cost = params['unit_cost']

    if min(old_seer, new_seer, cooling_btu, hours_per_day, days_per_year, cost_per_kwh) <= 0:
        raise ValueError('All ratings, hours and energy cost must be positive.')

    total_hours = hours_per_day * days_per_year
    old_kwh = (cooling_btu / old_seer) * total_hours / 1000
    new_kwh = (cooling_btu / new_seer) * total_hours / 1000
    old_cost = old_kwh * cost_per_kwh
    new_cost = new_kwh * cost_per_kwh
    savings = old_cost - new_cost

    payback_years = None
    if unit_cost > 0 and savings > 0:
        payback_years = round(unit_cost / savings, 1)

    cumulative = [
        {'year': year, 'savings': round(savings * year)}
        for year in range(1, 11)
    ]

    summary = f'${savings:.2f} per year'
    if payback_years is not None:
        summary += f', payback in {payback_years:.1f} years'

    return {
        'annual_savings': savings,
        'old_cost': old_cost,
        'new_cost': new_cost,
        'payback_years': payback_years,
        'cumulative_savings': cumulative,
        'summary': summary,
    }


def mini_split_cost(params: Dict, units: str = IMPERIAL) -> Dict:
    """Installed cost range for a ductless mini-split system."""
    zones = int(params['zones'])
    btu = int(params['btu_rating'])
    seer = int(params['seer_rating'])
    if units == METRIC:
        btu = watts_to_btu(btu)

    if zones <= 0 or btu <= 0 or seer <= 0:
        raise ValueError('Zones, capacity and SEER must be positive.')

    cost_per_zone = 1500
    if btu > 12000:
        cost_per_zone += (btu - 12000) * 0.1
    if seer > 20:
        cost_per_zone += (seer - 20) * 50
    total = cost_per_zone * zones + 750 * zones  # labor per zone

    low, high = total, total * 1.4
    return {
        'low_estimate': low,
        'high_estimate': high,
        'summary': f'~${low:.0f} - ${high:.0f}',
    }


def furnace_cost(params: Dict, units: str = IMPERIAL) -> Dict:
    """Installed cost range for a new furnace scaled from a 1500 sq ft home."""
    home_size = params['home_size']
    if units == METRIC:
        home_size = sqm_to_sqft(home_size)
    if home_size <= 0:
        raise ValueError('Home size must be positive.')

    base = FURNACE_BASE_COST[params['furnace_type']]
    if params['efficiency'] == 'high':
        base *= 1.5

    total = base * (home_size / 1500) + 1000  # labor
    low, high = total, total * 1.5
    return {
        'low_estimate': low,
        'high_estimate': high,
        'summary': f'~${low:.0f} - ${high:.0f}',
    }


def heat_pump_cost(params: Dict, units: str = IMPERIAL) -> Dict:
    """Installed cost range for a heat pump by tonnage and SEER."""
    tons = params['unit_size']
    seer = params['seer_rating']
    home_size = params['home_size']
    if units == METRIC:
        home_size = sqm_to_sqft(home_size)
        tons = tons / KW_PER_TON

    if tons <= 0 or seer <= 0 or home_size <= 0:
        raise ValueError('Home size, unit size and SEER must be positive.')

    base = 2000 * tons
    if seer > 16:
        base += (seer - 16) * 500
    total = base + 2500  # labor and materials

    low, high = total * 0.8, total * 1.2
    return {
        'low_estimate': low,
        'high_estimate': high,
        'summary': f'${low:.0f} - ${high:.0f}',
    }


def thermostat_savings(params: Dict, units: str = IMPERIAL) -> Dict:
    """Setback savings: roughly 1% per degree for each 8-hour period."""
    heating_factor = params['heating_setback_temp'] * (params['heating_setback_hours'] / 8) / 100
    cooling_factor = params['cooling_setup_temp'] * (params['cooling_setup_hours'] / 8) / 100

    heating_savings = params['annual_heating_cost'] * heating_factor
    cooling_savings = params['annual_cooling_cost'] * cooling_factor
    total = heating_savings + cooling_savings

    if total < 0:
        raise ValueError('Costs, temperatures and hours cannot be negative.')

    return {
        'heating_savings': heating_savings,
        'cooling_savings': cooling_savings,
        'annual_savings': total,
        'summary': f'~${total:.2f} per year',
    }


def attic_insulation(params: Dict, units: str = IMPERIAL) -> Dict:
    """Additional loose-fill depth and bag count to reach the zone's target R-value."""
    area = params['attic_area']
    existing_depth = params['existing_insulation']
    if units == METRIC:
        area = sqm_to_sqft(area)
        existing_depth = cm_to_in(existing_depth)

    if area <= 0:
        raise ValueError('Please enter a valid area.')
    if existing_depth < 0:
        raise ValueError('Existing insulation depth cannot be negative.')

    target_r = R_VALUES_BY_ZONE[params['climate_zone']]
    current_r = existing_depth * EXISTING_R_PER_INCH

    if current_r >= target_r:
        return {
            'sufficient': True,
            'target_r_value': target_r,
            'current_r_value': current_r,
            'summary': f'Existing insulation (R-{current_r:.0f}) already meets the recommended R-{target_r}.',
        }

    material = INSULATION_DATA[params['insulation_type']]
    needed_inches = (target_r - current_r) / material['r_value_per_inch']
    bags = math.ceil(area * needed_inches / material['sqft_per_inch_per_bag'])

    return {
        'sufficient': False,
        'target_r_value': target_r,
        'current_r_value': current_r,
        'needed_inches': needed_inches,
        'bags_needed': bags,
        'insulation_type_name': material['name'],
        'summary': f'Add {needed_inches:.1f} inches of {material["name"]} ({bags} bags) to reach R-{target_r}',
    }


def ventilation_fan_cfm(params: Dict, units: str = IMPERIAL) -> Dict:
    """Required exhaust airflow for a bathroom, kitchen or whole house."""
    area = params['room_area']
    height = params['ceiling_height']
    occupants = int(params['occupants'])
    if area <= 0 or height <= 0:
        raise ValueError('Please enter positive values for area and height.')

    room_type = params['room_type']
    if room_type == 'bathroom':
        # 1 CFM per sq ft, 50 CFM minimum
        cfm = max(50, area)
    elif room_type == 'kitchen':
        # 15 air changes per hour
        cfm = (area * height * 15) / 60
    else:
        # ASHRAE 62.2-2016
        if occupants <= 0:
            raise ValueError('Please enter the number of occupants for whole-house calculation.')
        cfm = (area * 0.03) + (occupants * 7.5)

    cfm = math.ceil(cfm)
    return {'cfm': cfm, 'summary': f'{cfm} CFM'}


def dehumidifier_size(params: Dict, units: str = IMPERIAL) -> Dict:
    """Dehumidifier capacity from the 2019 DOE table, plus the pre-2019 equivalent."""
    area = params['room_area']
    if area <= 0:
        raise ValueError('Please enter a positive value for the room area.')

    table = PINT_CAPACITY_2019[params['initial_humidity']]
    bucket = min(table, key=lambda size: abs(size - area))
    new_pints = table[bucket]
    old_pints = round(new_pints / OLD_RATING_RATIO)

    return {
        'new_pints': new_pints,
        'old_pints': old_pints,
        'summary': f'{new_pints} pints/day (2019 DOE standard), about {old_pints} pints/day on older ratings',
    }
