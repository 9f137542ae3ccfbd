"""Garden bed soil volume and fertilizer quantity calculators."""

import math
from typing import Dict

from engine.units import IMPERIAL


def soil_volume(params: Dict, units: str = IMPERIAL) -> Dict:
    """Soil or mulch for a rectangular bed; depth is in inches."""
    length = params['length']
    width = params['width']
    depth = params['depth']
    bag_size = params['bag_size']
    if length <= 0 or width <= 0 or depth <= 0:
        raise ValueError('Bed length, width and depth must be positive.')

    cubic_feet = length * width * (depth / 12)
    cubic_yards = cubic_feet / 27
    bags = math.ceil(cubic_feet / bag_size) if bag_size > 0 else None

    summary = f'{cubic_feet:.2f} cu ft ({cubic_yards:.2f} cu yd)'
    if bags is not None:
        summary += f', {bags} bags'
    return {
        'cubic_feet': cubic_feet,
        'cubic_yards': cubic_yards,
        'bags_needed': bags,
        'summary': summary,
    }


def fertilizer_needs(params: Dict, units: str = IMPERIAL) -> Dict:
    """
    Pounds of fertilizer to deliver the target nitrogen rate.

    The application rate is pounds of actual nitrogen per 1,000 sq ft; the
    bag's N percentage determines how much product carries that nitrogen.
    """
    area = params['garden_area']
    rate = params['application_rate']
    n = params['nitrogen_ratio']
    p = params['phosphorus_ratio']
    k = params['potassium_ratio']
    if area <= 0 or n <= 0:
        raise ValueError('Garden area and nitrogen percentage must be positive.')

    nitrogen_lbs = (area / 1000) * rate
    amount = nitrogen_lbs / (n / 100)
    grade = f'{n:g}-{p:g}-{k:g}'
    return {
        'nitrogen_lbs': nitrogen_lbs,
        'fertilizer_lbs': amount,
        'grade': grade,
        'summary': f'{amount:.2f} lbs of {grade} fertilizer',
    }
