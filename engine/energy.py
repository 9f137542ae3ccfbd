"""
Household energy cost calculators.

Appliance running cost, appliance upgrade savings, tank vs. tankless water
heater running cost, and rooftop solar sizing and payback.
"""

from typing import Dict

from engine.units import BTU_PER_KWH, IMPERIAL


WATER_LB_PER_GALLON = 8.33
TANK_EFFICIENCY = 0.90
TANKLESS_EFFICIENCY = 0.98

SOLAR_SYSTEM_FACTOR = 0.85
SOLAR_OFFSET = 0.95
SOLAR_LIFETIME_YEARS = 25
CO2_TONNES_PER_MWH = 0.37
LB_PER_TONNE = 2204.62
CO2_LB_PER_TREE_YEAR = 48


def appliance_energy_cost(params: Dict, units: str = IMPERIAL) -> Dict:
    """Annual cost of running one appliance."""
    wattage = params['wattage']
    hours = params['hours_per_day']
    rate = params['cost_per_kwh']
    if wattage <= 0 or hours <= 0 or rate <= 0:
        raise ValueError('Wattage, hours and cost per kWh must be positive.')

    daily_kwh = wattage * hours / 1000
    annual_cost = daily_kwh * 365 * rate
    return {
        'daily_kwh': daily_kwh,
        'annual_kwh': daily_kwh * 365,
        'annual_cost': annual_cost,
        'summary': f'${annual_cost:.2f} per year',
    }


def energy_savings(params: Dict, units: str = IMPERIAL) -> Dict:
    """Annual cost of a current vs. replacement appliance and the difference."""
    rate = params['cost_per_kwh']
    values = (
        rate,
        params['current_wattage'], params['current_hours'],
        params['new_wattage'], params['new_hours'],
    )
    if any(v < 0 for v in values):
        raise ValueError('Values cannot be negative.')

    current = params['current_wattage'] / 1000 * params['current_hours'] * 365 * rate
    new = params['new_wattage'] / 1000 * params['new_hours'] * 365 * rate
    savings = current - new
    return {
        'current_cost': current,
        'new_cost': new,
        'annual_savings': savings,
        'summary': f'${savings:.2f} saved per year',
    }


def water_heater_cost(params: Dict, units: str = IMPERIAL) -> Dict:
    """Electric tank vs. tankless running cost and tankless payback."""
    usage = params['hot_water_usage']
    rate = params['energy_rate']
    temp_in = params['groundwater_temp']
    temp_out = params['set_temp']
    if min(usage, rate, temp_in, temp_out) <= 0:
        raise ValueError('Please enter valid positive numbers.')

    kwh_per_day = usage * WATER_LB_PER_GALLON * (temp_out - temp_in) / BTU_PER_KWH
    tank = kwh_per_day / TANK_EFFICIENCY * 365 * rate
    tankless = kwh_per_day / TANKLESS_EFFICIENCY * 365 * rate
    savings = tank - tankless

    payback_years = None
    extra_cost = params['tankless_cost'] - params['tank_cost']
    if extra_cost > 0 and savings > 0:
        payback_years = round(extra_cost / savings, 1)

    summary = f'Tank ${tank:.2f}/yr vs tankless ${tankless:.2f}/yr'
    if payback_years is not None:
        summary += f', payback in {payback_years:.1f} years'
    return {
        'tank_cost': tank,
        'tankless_cost': tankless,
        'annual_savings': savings,
        'payback_years': payback_years,
        'summary': summary,
    }


def solar_savings(params: Dict, units: str = IMPERIAL) -> Dict:
    """System size, savings, payback and lifetime CO2 offset for rooftop solar."""
    bill = params['avg_bill']
    sun_hours = params['sunlight_hours']
    cost = params['install_cost']
    rate = params['energy_rate']
    incentives = params['incentives']
    if min(bill, sun_hours, cost, rate, incentives) < 0:
        raise ValueError('Please enter valid numbers.')
    if rate == 0 or sun_hours == 0 or bill == 0:
        raise ValueError('Bill, sunlight hours and energy rate must be positive.')

    annual_usage = bill * 12 / rate
    system_kw = annual_usage / (sun_hours * 365) / SOLAR_SYSTEM_FACTOR
    annual_production = system_kw * sun_hours * 365 * SOLAR_SYSTEM_FACTOR
    saved_kwh = min(annual_usage * SOLAR_OFFSET, annual_production)
    annual_savings = saved_kwh * rate

    net_cost = cost - incentives
    payback = net_cost / annual_savings
    lifetime_savings = annual_savings * SOLAR_LIFETIME_YEARS - net_cost

    lifetime_mwh = annual_production * SOLAR_LIFETIME_YEARS / 1000
    co2_tonnes = lifetime_mwh * CO2_TONNES_PER_MWH
    trees = round(co2_tonnes * LB_PER_TONNE / CO2_LB_PER_TREE_YEAR)

    return {
        'system_size_kw': system_kw,
        'annual_savings': annual_savings,
        'payback_years': payback,
        'lifetime_savings': lifetime_savings,
        'co2_tonnes': round(co2_tonnes, 2),
        'trees_equivalent': trees,
        'summary': (
            f'{system_kw:.1f} kW system saves ${annual_savings:,.2f}/yr, '
            f'payback in {payback:.1f} years'
        ),
    }
