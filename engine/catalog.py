"""
Calculator catalog.

The static list of every calculator the site offers, in display order.
Descriptors are immutable and enumerated at import time; the form registry
and the AI prompts are both built from this list.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


CATEGORIES = ('HVAC', 'Home Improvement', 'Gardening', 'Other')


@dataclass(frozen=True)
class Calculator:
    """Descriptor for one calculator page."""
    slug: str
    name: str
    description: str
    icon: str      # lucide icon name used by the frontend
    category: str


CALCULATORS: Tuple[Calculator, ...] = (
    # HVAC
    Calculator('hvac-load', 'HVAC Load Calculator',
               'Determine the total heating and cooling load for a building (Manual J).',
               'building-2', 'HVAC'),
    Calculator('btu-calculator', 'AC Size (BTU) Calculator',
               'Estimate the required BTU for cooling a room.',
               'thermometer-sun', 'HVAC'),
    Calculator('duct-size', 'Duct Size Calculator',
               'Calculate the appropriate size for residential HVAC ductwork.',
               'air-vent', 'HVAC'),
    Calculator('seer-savings-calculator', 'SEER Savings Calculator',
               'Estimate savings and payback period by upgrading to a more efficient AC unit.',
               'trending-up', 'HVAC'),
    Calculator('mini-split-cost', 'Mini-Split Cost Estimator',
               'Estimate the cost to install a ductless mini-split system.',
               'fan', 'HVAC'),
    Calculator('furnace-cost', 'Furnace Cost Estimator',
               'Estimate the cost of installing a new furnace.',
               'heater', 'HVAC'),
    Calculator('heat-pump-cost', 'Heat Pump Cost Estimator',
               'Estimate the cost of installing a new heat pump.',
               'snowflake', 'HVAC'),
    Calculator('thermostat-savings', 'Thermostat Savings Calculator',
               'Estimate savings from setting back your programmable thermostat.',
               'gauge', 'HVAC'),
    Calculator('attic-insulation', 'Attic Insulation Calculator',
               'Determine the R-value and amount of insulation needed for your attic.',
               'layers-3', 'HVAC'),
    Calculator('ventilation-fan-cfm', 'Ventilation Fan CFM Calculator',
               'Calculate required airflow (CFM) for kitchens and bathrooms.',
               'wind', 'HVAC'),
    Calculator('dehumidifier-size', 'Dehumidifier Size Calculator',
               'Determine the appropriate dehumidifier size for a room or basement.',
               'droplets', 'HVAC'),

    # Home Improvement
    Calculator('paint-coverage', 'Paint Coverage Calculator',
               'Calculate how many gallons of paint you need for your project.',
               'paintbrush', 'Home Improvement'),
    Calculator('flooring-area', 'Flooring Calculator',
               'Calculate the square footage and waste for your flooring project.',
               'square', 'Home Improvement'),
    Calculator('wallpaper', 'Wallpaper Calculator',
               'Estimate the number of wallpaper rolls needed for a room.',
               'wallpaper', 'Home Improvement'),
    Calculator('kitchen-remodel-cost', 'Kitchen Remodel Estimator',
               'Get a ballpark estimate for your kitchen renovation project.',
               'cooking-pot', 'Home Improvement'),
    Calculator('decking-calculator', 'Decking Materials Calculator',
               'Calculate materials needed for building a deck.',
               'construction', 'Home Improvement'),
    Calculator('concrete-slab-calculator', 'Concrete Slab Calculator',
               'Estimate the amount of concrete needed for a slab.',
               'layers', 'Home Improvement'),
    Calculator('roofing-materials', 'Roofing Materials Calculator',
               'Estimate shingles or tiles needed, considering roof pitch.',
               'triangle', 'Home Improvement'),
    Calculator('tile-calculator', 'Tile Calculator',
               'Calculate tiles needed for flooring or walls, including waste.',
               'grid-3x3', 'Home Improvement'),
    Calculator('drywall-calculator', 'Drywall Calculator',
               'Estimate drywall sheets, screws, and joint compound needed.',
               'rectangle-horizontal', 'Home Improvement'),
    Calculator('fence-materials', 'Fence Materials Calculator',
               'Estimate posts, rails, and panels needed for your fence project.',
               'fence', 'Home Improvement'),
    Calculator('driveway-materials', 'Driveway Materials Calculator',
               'Estimate materials for asphalt, concrete, or paver driveways.',
               'car', 'Home Improvement'),

    # Gardening
    Calculator('soil-volume', 'Soil & Mulch Calculator',
               'Calculate the volume of soil or mulch needed for a garden bed.',
               'shovel', 'Gardening'),
    Calculator('fertilizer-needs', 'Fertilizer Needs Calculator',
               'Determine the amount of fertilizer for your garden area.',
               'sprout', 'Gardening'),

    # Other
    Calculator('mortgage-calculator', 'Mortgage Calculator',
               'Estimate your monthly mortgage payments including taxes and insurance.',
               'home', 'Other'),
    Calculator('energy-consumption', 'Appliance Energy Cost',
               'Calculate the energy usage and cost of a single appliance.',
               'plug-zap', 'Other'),
    Calculator('energy-savings-calculator', 'Energy Savings Calculator',
               'Compare annual costs of two appliances to see potential savings from an upgrade.',
               'lightbulb', 'Other'),
    Calculator('savings-calculator', 'Savings Calculator',
               'Estimate the future value of your savings or investments.',
               'circle-dollar-sign', 'Other'),
    Calculator('car-loan-calculator', 'Car Loan Calculator',
               'Calculate your monthly car loan payment.',
               'car', 'Other'),
    Calculator('water-heater-energy-cost', 'Water Heater Energy Cost Calculator',
               'Compare energy costs of tank vs. tankless water heaters.',
               'bath', 'Other'),
    Calculator('solar-savings', 'Solar Savings Calculator',
               'Estimate energy bill savings and ROI for solar panel installation.',
               'sun', 'Other'),
)

_BY_SLUG: Dict[str, Calculator] = {c.slug: c for c in CALCULATORS}
_BY_NAME: Dict[str, Calculator] = {c.name: c for c in CALCULATORS}


def get_calculator(slug: str) -> Optional[Calculator]:
    """Look up a calculator by its URL slug."""
    return _BY_SLUG.get(slug)


def get_calculator_by_name(name: str) -> Optional[Calculator]:
    """Look up a calculator by its exact display name."""
    return _BY_NAME.get(name)


def search_calculators(query: Optional[str] = None, category: Optional[str] = None) -> List[Calculator]:
    """
    Filter the catalog the way the directory page does.

    Args:
        query: Case-insensitive substring matched against name or description.
        category: One of CATEGORIES, or None / 'All' for every category.

    Returns:
        Matching calculators in catalog order.
    """
    if category and category != 'All' and category not in CATEGORIES:
        raise ValueError(f"Unknown category '{category}'. Available: {', '.join(CATEGORIES)}")

    term = (query or '').strip().lower()
    results = []
    for calc in CALCULATORS:
        if category and category != 'All' and calc.category != category:
            continue
        if term and term not in calc.name.lower() and term not in calc.description.lower():
            continue
        results.append(calc)
    return results


def group_by_category(calculators: List[Calculator]) -> List[Tuple[str, List[Calculator]]]:
    """Group calculators by category in CATEGORIES order, skipping empty groups."""
    groups = []
    for category in CATEGORIES:
        members = [c for c in calculators if c.category == category]
        if members:
            groups.append((category, members))
    return groups
