"""Unit conversion factors shared by the calculators with a metric toggle.

All calculator math runs in imperial units; metric inputs are converted on the
way in and, where the result is shown in metric, on the way out.
"""

SQFT_PER_SQM = 10.764
FT_PER_M = 3.28084
CM_PER_IN = 2.54
BTU_PER_WATT = 3.41      # BTU/hr per watt
KW_PER_TON = 3.517       # cooling kW per refrigeration ton
BTU_PER_KWH = 3412
BTU_PER_TON = 12000

IMPERIAL = 'imperial'
METRIC = 'metric'
UNIT_SYSTEMS = (IMPERIAL, METRIC)


def sqm_to_sqft(value: float) -> float:
    return value * SQFT_PER_SQM


def m_to_ft(value: float) -> float:
    return value * FT_PER_M


def cm_to_in(value: float) -> float:
    return value / CM_PER_IN


def watts_to_btu(value: float) -> float:
    return value * BTU_PER_WATT


def btu_to_watts(value: float) -> float:
    return value / BTU_PER_WATT
