"""Pydantic models for HomeCalc Pro API requests and responses."""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, Field


# --- Enums ---

class UnitSystem(str, Enum):
    IMPERIAL = "imperial"
    METRIC = "metric"


class ReportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"


ParamValue = Union[bool, float, str]


# --- Calculator catalog ---

class CalculatorInfo(BaseModel):
    slug: str
    name: str
    description: str
    icon: str
    category: str

    @classmethod
    def from_calculator(cls, calc) -> "CalculatorInfo":
        """Build the API descriptor for an engine catalog entry."""
        return cls(
            slug=calc.slug,
            name=calc.name,
            description=calc.description,
            icon=calc.icon,
            category=calc.category,
        )


class CalculatorGroup(BaseModel):
    category: str
    calculators: list[CalculatorInfo]


class CalculatorListResponse(BaseModel):
    calculators: list[CalculatorInfo]
    groups: list[CalculatorGroup]
    total: int


class FormFieldModel(BaseModel):
    key: str
    label: str
    type: Literal["number", "select", "boolean"]
    required: bool
    default: Optional[ParamValue] = None
    options: list[str] = []
    unit: Optional[str] = None
    metric_unit: Optional[str] = None


class CalculatorFormResponse(BaseModel):
    """A calculator's descriptor and its designated form."""
    calculator: CalculatorInfo
    fields: list[FormFieldModel]
    supports_metric: bool = False


class CalculateRequest(BaseModel):
    parameters: dict[str, Optional[ParamValue]] = Field(default_factory=dict)
    units: UnitSystem = UnitSystem.IMPERIAL


class CalculateResponse(BaseModel):
    slug: str
    units: UnitSystem
    summary: str
    results: dict[str, Any]


# --- AI flows ---

class AiAssistRequest(BaseModel):
    calculator_type: str = Field(
        ..., min_length=1, max_length=200,
        description='Calculator being used, e.g. "AC Size (BTU) Calculator"',
    )
    parameters: dict[str, Optional[ParamValue]] = Field(
        ..., description="Field values entered so far; empty strings are fields left blank",
    )
    units: Optional[UnitSystem] = None


class AiAssistResponse(BaseModel):
    auto_calculated_values: Optional[dict[str, Union[float, str]]] = Field(
        None, description="Suggested values for blank fields, keyed by parameter name",
    )
    hints_and_next_steps: Optional[str] = Field(
        None, description="Advice for finding the missing information",
    )


class RecommendRequest(BaseModel):
    past_activity: str = Field(..., min_length=1, max_length=5000)


class RecommendResponse(BaseModel):
    recommendations: list[str] = []
    calculators: list[CalculatorInfo] = []


class ChatTurn(BaseModel):
    role: Literal["user", "model"]
    content: str = Field(..., max_length=10000)


class ChatbotRequest(BaseModel):
    query: str = Field(..., min_length=1, max_length=5000)
    history: list[ChatTurn] = Field(default_factory=list)
    user_location: Optional[str] = Field(
        None, max_length=200, description="City and state, e.g. 'Austin, TX'",
    )


class ProviderModel(BaseModel):
    name: str
    rating: float
    user_ratings_total: int
    vicinity: str


class ChatbotResponse(BaseModel):
    answer: str
    link: Optional[str] = None
    providers: list[ProviderModel] = []


class ProviderSearchResponse(BaseModel):
    query: str
    location: str
    providers: list[ProviderModel]
    total: int
