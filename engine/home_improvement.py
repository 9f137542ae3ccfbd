"""
Home improvement material and cost estimators.

Paint, flooring, wallpaper, kitchen remodel, decking, concrete, roofing,
tile, drywall, fencing and driveway calculators. Quantities that are bought
in whole units (boxes, boards, bags, rolls, sheets) are always rounded up.
"""

import math
from typing import Dict

from engine.units import IMPERIAL, METRIC, SQFT_PER_SQM, cm_to_in, m_to_ft, sqm_to_sqft


SQFT_PER_GALLON = 350
SQM_PER_LITER = 9.8
WINDOW_SQFT = 15
DOOR_SQFT = 21

KITCHEN_COST_FACTORS = {
    'cabinets': {'stock': 50, 'semi-custom': 125, 'custom': 250},
    'countertops': {'laminate': 20, 'solid-surface': 50, 'granite-quartz': 100},
    'appliances': {'basic': 20, 'mid-range': 50, 'high-end': 100},
    'base': 50,  # labor, plumbing, electrical, flooring per sq ft
}

DECK_BOARD_GAP_IN = 0.125

CONCRETE_BAG_CUFT = 0.6  # yield of an 80 lb bag

# Slope factor by pitch (rise/12)
PITCH_MULTIPLIER = {
    '1/12': 1.003, '2/12': 1.014, '3/12': 1.031, '4/12': 1.054,
    '5/12': 1.083, '6/12': 1.118, '7/12': 1.158, '8/12': 1.202,
    '9/12': 1.250, '10/12': 1.302, '11/12': 1.357, '12/12': 1.414,
}
BUNDLES_PER_SQUARE = 3

DRYWALL_SHEET_SQFT = {'4x8': 32, '4x12': 48}
DRYWALL_WASTE = 1.1

DRIVEWAY_BASE_DEPTH_FT = 6 / 12
ASPHALT_LB_PER_CUFT = 145
PAVER_SQFT = (4 * 8) / 144
PAVER_WASTE = 1.05


def paint_coverage(params: Dict, units: str = IMPERIAL) -> Dict:
    """Paint needed for four walls, less windows and doors, optionally the ceiling."""
    length = params['room_length']
    width = params['room_width']
    height = params['wall_height']
    coats = int(params['coats'])
    windows = int(params['num_windows'])
    doors = int(params['num_doors'])
    if units == METRIC:
        length = m_to_ft(length)
        width = m_to_ft(width)
        height = m_to_ft(height)

    if length <= 0 or width <= 0 or height <= 0 or coats <= 0:
        raise ValueError('Room dimensions and number of coats must be positive.')

    paintable = 2 * (length + width) * height - (windows * WINDOW_SQFT + doors * DOOR_SQFT)
    if params['include_ceiling']:
        paintable += length * width

    if units == IMPERIAL:
        gallons = paintable * coats / SQFT_PER_GALLON
        return {
            'paintable_area_sqft': paintable,
            'gallons': gallons,
            'summary': f'{gallons:.2f} gallons',
        }

    liters = (paintable / SQFT_PER_SQM) * coats / SQM_PER_LITER
    return {
        'paintable_area_sqm': paintable / SQFT_PER_SQM,
        'liters': liters,
        'summary': f'{liters:.2f} liters',
    }


def flooring_area(params: Dict, units: str = IMPERIAL) -> Dict:
    """Floor area with waste, and boxes when the per-box coverage is known."""
    width = params['room_width']
    length = params['room_length']
    waste = params['waste_factor']
    coverage = params['box_coverage']
    if width <= 0 or length <= 0 or waste < 0:
        raise ValueError('Room dimensions must be positive and waste cannot be negative.')

    total = width * length * (1 + waste / 100)
    boxes = math.ceil(total / coverage) if coverage > 0 else None

    summary = f'{total:.2f} sq ft'
    if boxes is not None:
        summary += f' ({boxes} boxes)'
    return {'total_area': total, 'boxes_needed': boxes, 'summary': summary}


def wallpaper(params: Dict, units: str = IMPERIAL) -> Dict:
    """Rolls of wallpaper, accounting for pattern repeat and waste."""
    perimeter = params['room_perimeter']
    height = params['wall_height']
    roll_width = params['roll_width']
    roll_length = params['roll_length']
    repeat = params['pattern_repeat']
    waste = params['waste_factor']
    if units == METRIC:
        perimeter = m_to_ft(perimeter)
        height = m_to_ft(height)
        roll_width = cm_to_in(roll_width)
        roll_length = m_to_ft(roll_length)
        repeat = cm_to_in(repeat)

    if perimeter <= 0 or height <= 0 or roll_width <= 0 or roll_length <= 0 or waste < 0:
        raise ValueError('Room and roll dimensions must be positive and waste cannot be negative.')

    strips_needed = math.ceil(perimeter * 12 / roll_width)
    height_in = height * 12
    strip_length = math.ceil(height_in / repeat) * repeat if repeat > 0 else height_in
    strips_per_roll = math.floor(roll_length * 12 / strip_length)
    if strips_per_roll <= 0:
        raise ValueError('Roll is shorter than one wall-height strip.')

    rolls = math.ceil(math.ceil(strips_needed / strips_per_roll) * (1 + waste / 100))
    return {
        'strips_needed': strips_needed,
        'strips_per_roll': strips_per_roll,
        'rolls': rolls,
        'summary': f'{rolls} rolls',
    }


def kitchen_remodel_cost(params: Dict, units: str = IMPERIAL) -> Dict:
    """Ballpark remodel range from per-square-foot finish level factors."""
    size = params['kitchen_size']
    if units == METRIC:
        size = sqm_to_sqft(size)
    if size <= 0:
        raise ValueError('Kitchen size must be positive.')

    per_sqft = (
        KITCHEN_COST_FACTORS['base']
        + KITCHEN_COST_FACTORS['cabinets'][params['cabinets']]
        + KITCHEN_COST_FACTORS['countertops'][params['countertops']]
        + KITCHEN_COST_FACTORS['appliances'][params['appliances']]
    )
    estimate = size * per_sqft
    low, high = estimate * 0.8, estimate * 1.2
    return {
        'cost_per_sqft': per_sqft,
        'low_estimate': low,
        'high_estimate': high,
        'summary': f'${low:,.0f} - ${high:,.0f}',
    }


def decking(params: Dict, units: str = IMPERIAL) -> Dict:
    """Deck boards and joists for a rectangular deck."""
    width = params['deck_width']
    length = params['deck_length']
    board_w = params['board_width']
    board_l = params['board_length']
    joist_spacing = params['joist_spacing']
    waste = params['waste_factor']
    if units == METRIC:
        width = m_to_ft(width)
        length = m_to_ft(length)
        board_w = cm_to_in(board_w)
        board_l = m_to_ft(board_l)
        joist_spacing = cm_to_in(joist_spacing)

    if min(width, length, board_w, board_l, joist_spacing) <= 0 or waste < 0:
        raise ValueError('Deck and board dimensions must be positive and waste cannot be negative.')

    rows = math.ceil(width * 12 / (board_w + DECK_BOARD_GAP_IN))
    linear_feet = rows * length * (1 + waste / 100)
    boards = math.ceil(linear_feet / board_l)
    joists = math.ceil(length * 12 / joist_spacing) + 1

    return {
        'boards_to_buy': boards,
        'joists_needed': joists,
        'summary': f'{boards} deck boards, {joists} joists',
    }


def concrete_slab(params: Dict, units: str = IMPERIAL) -> Dict:
    """Concrete volume for a slab, in cubic yards and 80 lb bags."""
    length = params['length']
    width = params['width']
    thickness = params['thickness']
    waste = params['waste_factor']
    if length <= 0 or width <= 0 or thickness <= 0 or waste < 0:
        raise ValueError('Slab dimensions must be positive and waste cannot be negative.')

    cubic_feet = length * width * (thickness / 12) * (1 + waste / 100)
    cubic_yards = cubic_feet / 27
    bags = math.ceil(cubic_feet / CONCRETE_BAG_CUFT)
    return {
        'cubic_yards': cubic_yards,
        'bags_needed': bags,
        'summary': f'{cubic_yards:.2f} cubic yards ({bags} x 80 lb bags)',
    }


def roofing_materials(params: Dict, units: str = IMPERIAL) -> Dict:
    """Roofing squares and shingle bundles from footprint area and pitch."""
    area = params['roof_area']
    waste = params['waste_factor'] / 100
    cost_per_square = params['material_cost']
    if area <= 0:
        raise ValueError('Please enter a positive value for roof area.')

    actual_area = area * PITCH_MULTIPLIER[params['roof_pitch']]
    squares = actual_area * (1 + waste) / 100
    bundles = math.ceil(squares * BUNDLES_PER_SQUARE)
    total_cost = squares * cost_per_square if cost_per_square > 0 else None

    summary = f'{squares:.2f} squares ({bundles} bundles)'
    if total_cost is not None:
        summary += f', ${total_cost:,.2f}'
    return {
        'squares': squares,
        'bundles': bundles,
        'total_cost': total_cost,
        'summary': summary,
    }


def tile(params: Dict, units: str = IMPERIAL) -> Dict:
    """Tile count including grout joints and waste."""
    area_sq_in = params['area_to_tile'] * 144
    tile_w = params['tile_width']
    tile_l = params['tile_length']
    grout = params['grout_width']
    waste = params['waste_factor'] / 100
    if area_sq_in <= 0 or tile_w <= 0 or tile_l <= 0:
        raise ValueError('Please enter positive values.')

    per_tile = (tile_w + grout) * (tile_l + grout)
    tiles = math.ceil(area_sq_in / per_tile * (1 + waste))
    coverage = tiles * tile_w * tile_l / 144
    return {
        'tiles_needed': tiles,
        'total_area': coverage,
        'summary': f'{tiles} tiles ({coverage:.2f} sq ft)',
    }


def drywall(params: Dict, units: str = IMPERIAL) -> Dict:
    """Drywall sheets, screws (lb) and joint compound buckets."""
    walls = params['wall_area']
    ceiling = params['ceiling_area']
    if walls < 0 or ceiling < 0:
        raise ValueError('Please enter non-negative values.')

    total = (walls + ceiling) * DRYWALL_WASTE
    sheets = math.ceil(total / DRYWALL_SHEET_SQFT[params['sheet_size']])
    screws = math.ceil(total / 300)     # 1 lb per 300 sq ft
    compound = math.ceil(total / 450)   # one 4.5 gal bucket per 450 sq ft
    return {
        'sheets': sheets,
        'screws_lb': screws,
        'compound_buckets': compound,
        'summary': f'{sheets} sheets, {screws} lb screws, {compound} buckets of compound',
    }


def fence(params: Dict, units: str = IMPERIAL) -> Dict:
    """Posts, rails and panels or pickets for a straight fence run."""
    length = params['fence_length']
    post_gap = params['post_spacing']
    if length <= 0 or post_gap <= 0:
        raise ValueError('Please enter positive values.')

    sections = math.ceil(length / post_gap)
    posts = sections + 1
    rails = sections * 2

    panels = None
    pickets = None
    width = params['panel_width']
    if params['fence_type'] == 'panel':
        if width > 0:
            panels = math.ceil(length / width)
    elif width > 0:
        pickets = math.ceil(length * 12 / (width + params['picket_spacing']))

    parts = [f'{posts} posts', f'{rails} rails']
    if panels is not None:
        parts.append(f'{panels} panels')
    if pickets is not None:
        parts.append(f'{pickets} pickets')
    return {
        'posts': posts,
        'rails': rails,
        'panels': panels,
        'pickets': pickets,
        'summary': ', '.join(parts),
    }


def driveway(params: Dict, units: str = IMPERIAL) -> Dict:
    """Gravel base plus surface material for a driveway."""
    length = params['length']
    width = params['width']
    thickness = params['thickness']
    if length <= 0 or width <= 0 or thickness <= 0:
        raise ValueError('Please enter positive values.')

    area = length * width
    base_volume = area * DRIVEWAY_BASE_DEPTH_FT / 27

    material = params['material']
    if material == 'concrete':
        amount = area * (thickness / 12) / 27
        description = f'{amount:.2f} cubic yards of concrete'
    elif material == 'asphalt':
        amount = area * (thickness / 12) * ASPHALT_LB_PER_CUFT / 2000
        description = f'{amount:.2f} tons of asphalt'
    else:
        amount = math.ceil(area / PAVER_SQFT * PAVER_WASTE)
        description = f'{amount} pavers (4"x8")'

    return {
        'base_volume_cubic_yards': base_volume,
        'material_amount': amount,
        'material_description': description,
        'summary': f'{description} on {base_volume:.2f} cubic yards of gravel base',
    }
