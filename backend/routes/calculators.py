"""Calculator routes: directory, forms, calculation and report export."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response

from backend.models import (
    CalculateRequest,
    CalculateResponse,
    CalculatorFormResponse,
    CalculatorGroup,
    CalculatorInfo,
    CalculatorListResponse,
    FormFieldModel,
    ReportFormat,
)
from engine.catalog import get_calculator, group_by_category, search_calculators
from engine.forms import calculate, get_form, parse_params
from engine.report import build_report, export_csv, export_json

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_FOUND = "Calculator not found"


def _run(slug: str, request: CalculateRequest) -> dict:
    """Run the engine, mapping its errors to HTTP status codes."""
    try:
        return calculate(slug, request.parameters, request.units.value)
    except KeyError:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/calculators", response_model=CalculatorListResponse)
async def list_calculators(
    q: Optional[str] = Query(None, description="Search name and description"),
    category: Optional[str] = Query(None, description="Category filter, or 'All'"),
):
    """List calculators, optionally filtered by search text and category."""
    try:
        calculators = search_calculators(q, category)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    groups = [
        CalculatorGroup(
            category=name,
            calculators=[CalculatorInfo.from_calculator(c) for c in members],
        )
        for name, members in group_by_category(calculators)
    ]
    return CalculatorListResponse(
        calculators=[CalculatorInfo.from_calculator(c) for c in calculators],
        groups=groups,
        total=len(calculators),
    )


@router.get("/calculators/{slug}", response_model=CalculatorFormResponse)
async def get_calculator_form(slug: str):
    """Get a calculator's descriptor and the fields of its form."""
    calc = get_calculator(slug)
    if calc is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    form = get_form(slug)

    fields = [
        FormFieldModel(
            key=f.key,
            label=f.label,
            type=f.type,
            required=f.required,
            default=f.default,
            options=list(f.options),
            unit=f.unit,
            metric_unit=f.metric_unit,
        )
        for f in form.fields
    ]
    return CalculatorFormResponse(
        calculator=CalculatorInfo.from_calculator(calc),
        fields=fields,
        supports_metric=form.supports_metric,
    )


@router.post("/calculators/{slug}/calculate", response_model=CalculateResponse)
async def run_calculator(slug: str, request: CalculateRequest):
    """Validate the submitted form values and compute the estimate."""
    results = _run(slug, request)
    logger.info("Calculated %s (%s)", slug, request.units.value)
    return CalculateResponse(
        slug=slug,
        units=request.units,
        summary=results.get("summary", ""),
        results=results,
    )


@router.post("/calculators/{slug}/report")
async def download_report(
    slug: str,
    request: CalculateRequest,
    format: ReportFormat = Query(ReportFormat.CSV),
):
    """Compute the estimate and return it as a downloadable CSV or JSON report."""
    results = _run(slug, request)
    inputs = parse_params(get_form(slug), request.parameters)
    report = build_report(slug, inputs, results, request.units.value)

    if format == ReportFormat.JSON:
        content, media_type = export_json(report), "application/json"
    else:
        content, media_type = export_csv(report), "text/csv"

    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f"attachment; filename={slug}-report.{format.value}"},
    )
