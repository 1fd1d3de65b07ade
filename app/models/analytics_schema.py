"""
Pydantic schemas for proposal analytics responses

Defines response models for:
- Win-probability report
- Company completeness report
- Error handling
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from enum import Enum


# ===================== ENUMS =====================

class ConfidenceLevelEnum(str, Enum):
    """Estimate reliability"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ImpactEnum(str, Enum):
    """Factor impact"""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class PriorityEnum(str, Enum):
    """Recommendation priority"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# ===================== REPORT SCHEMAS =====================

class FactorSchema(BaseModel):
    """Single contributing factor"""
    factor: str
    value: str = Field(..., description="Formatted value, e.g. '42.5%'")
    impact: ImpactEnum


class DataPointsSchema(BaseModel):
    """Volumes the estimate was built from"""
    total_proposals: int = Field(..., ge=0)
    won_proposals: int = Field(..., ge=0)
    submitted_proposals: int = Field(..., ge=0, description="Resolved: submitted, won or lost")
    recent_proposals: int = Field(..., ge=0, description="Resolved within the trailing 3 months")


class BestPracticeSchema(BaseModel):
    """Improvement suggestion"""
    category: str
    suggestion: str
    priority: PriorityEnum


class AnalyticsReportResponse(BaseModel):
    """Proposal win-probability report"""
    success_rate: int = Field(..., ge=0, le=100)
    confidence_level: ConfidenceLevelEnum
    factors: List[FactorSchema]
    data_points: DataPointsSchema
    best_practices: List[BestPracticeSchema]
    generated_at: str = Field(..., description="ISO-8601 timestamp")
    error: Optional[str] = Field(None, description="Set when the analysis degraded")


# ===================== COMPLETENESS SCHEMAS =====================

class CompanyCompletenessSchema(BaseModel):
    """Identity fields status"""
    completed: bool
    missing_fields: List[str]


class CategoryCompletenessSchema(BaseModel):
    """Owned-collection status"""
    completed: bool
    count: int = Field(..., ge=0)


class IncompleteItemSchema(BaseModel):
    """Category still to fill in"""
    key: str
    label: str
    priority: int = Field(..., ge=1)


class CompletenessResponse(BaseModel):
    """Company profile completeness"""
    success: bool
    overall: int = Field(..., ge=0, le=100)
    company: CompanyCompletenessSchema
    team_members: CategoryCompletenessSchema
    projects: CategoryCompletenessSchema
    awards: CategoryCompletenessSchema
    incomplete_items: List[IncompleteItemSchema]


class ErrorResponse(BaseModel):
    """Error response"""
    detail: str
