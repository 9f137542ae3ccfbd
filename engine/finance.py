"""
Home finance calculators: mortgage payment, savings growth, car loan.

Loans use the standard amortization formula with monthly compounding:

    M = P · r(1+r)^n / ((1+r)^n − 1)

with a straight-line fallback when the rate is zero.
"""

from typing import Dict

from engine.units import IMPERIAL


def amortized_payment(principal: float, annual_rate_pct: float, months: float) -> float:
    """Monthly payment for a fully amortizing loan."""
    if months <= 0:
        raise ValueError('Loan term must be positive.')
    if annual_rate_pct == 0:
        return principal / months
    r = annual_rate_pct / 100 / 12
    growth = (1 + r) ** months
    return principal * r * growth / (growth - 1)


def mortgage(params: Dict, units: str = IMPERIAL) -> Dict:
    """Monthly PITI payment: principal and interest, tax, insurance and PMI."""
    principal = params['loan_amount']
    rate = params['interest_rate']
    months = params['loan_term'] * 12
    if principal <= 0 or rate < 0 or months <= 0:
        raise ValueError('Loan amount and term must be positive and the rate cannot be negative.')

    p_and_i = amortized_payment(principal, rate, months)
    tax = params['property_tax'] / 12
    insurance = params['home_insurance'] / 12
    pmi = params['pmi']
    total = p_and_i + tax + insurance + pmi

    return {
        'principal_and_interest': p_and_i,
        'tax': tax,
        'insurance': insurance,
        'pmi': pmi,
        'total': total,
        'summary': f'${total:,.2f} per month',
    }


def savings(params: Dict, units: str = IMPERIAL) -> Dict:
    """Future value of an initial deposit plus monthly contributions."""
    deposit = params['initial_deposit']
    contribution = params['monthly_contribution']
    r = params['interest_rate'] / 100 / 12
    months = params['years'] * 12
    if deposit < 0 or contribution < 0 or r < 0 or months <= 0:
        raise ValueError('Amounts and rate cannot be negative and the period must be positive.')

    contributions = deposit + contribution * months
    if r == 0:
        future_value = contributions
    else:
        growth = (1 + r) ** months
        future_value = deposit * growth + contribution * ((growth - 1) / r)

    return {
        'future_value': future_value,
        'total_contributions': contributions,
        'total_interest': future_value - contributions,
        'summary': f'${future_value:,.2f}',
    }


def car_loan(params: Dict, units: str = IMPERIAL) -> Dict:
    """Monthly car payment after tax, fees, down payment and trade-in."""
    price = params['vehicle_price']
    rate = params['interest_rate']
    months = params['loan_term'] * 12
    tax_rate = params['sales_tax_rate'] / 100

    vehicle_cost = price * (1 + tax_rate) + params['other_fees']
    principal = vehicle_cost - params['down_payment'] - params['trade_in_value']
    if principal <= 0 or rate < 0 or months <= 0:
        raise ValueError('Loan amount and term must be positive and the rate cannot be negative.')

    payment = amortized_payment(principal, rate, months)
    interest = 0.0 if rate == 0 else payment * months - principal

    return {
        'monthly_payment': payment,
        'total_loan_amount': principal,
        'total_interest': interest,
        'total_cost': vehicle_cost + interest,
        'summary': f'${payment:,.2f} per month',
    }
