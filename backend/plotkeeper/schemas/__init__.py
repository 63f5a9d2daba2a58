"""Pydantic schemas for API request/response validation."""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from plotkeeper.models import FieldType, RowStatus
from plotkeeper.models._common import DEFAULT_CATEGORY_COLOR

HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def _clean_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    if not cleaned:
        raise ValueError("name must not be empty")
    return cleaned


def _clean_color(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if not HEX_COLOR.match(value):
        raise ValueError("color must be a hex string like #22c55e")
    return value


def _not_null(value: Any, info: ValidationInfo) -> Any:
    # Update bodies may omit a field, but these columns cannot be cleared.
    if value is None:
        raise ValueError(f"{info.field_name} cannot be null")
    return value


# ═══════════════════════════════════════════════════════════════
# Categories (shared by plot and row categories)
# ═══════════════════════════════════════════════════════════════

class CategoryCreate(BaseModel):
    name: str
    description: Optional[str] = None
    color: str = DEFAULT_CATEGORY_COLOR

    @field_validator("name")
    @classmethod
    def validate_name(cls, value):
        return _clean_name(value)

    @field_validator("color")
    @classmethod
    def validate_color(cls, value):
        return _clean_color(value)


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None

    @field_validator("name", "color")
    @classmethod
    def validate_not_null(cls, value, info: ValidationInfo):
        return _not_null(value, info)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value):
        return _clean_name(value)

    @field_validator("color")
    @classmethod
    def validate_color(cls, value):
        return _clean_color(value)


class CategoryOut(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    color: str
    created_at: datetime

    model_config = {"from_attributes": True}


# ═══════════════════════════════════════════════════════════════
# Plots
# ═══════════════════════════════════════════════════════════════

class PlotCreate(BaseModel):
    name: str
    description: Optional[str] = None
    category_id: Optional[UUID] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value):
        return _clean_name(value)


class PlotUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    category_id: Optional[UUID] = None

    @field_validator("name")
    @classmethod
    def validate_not_null(cls, value, info: ValidationInfo):
        return _not_null(value, info)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value):
        return _clean_name(value)


class PlotOut(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    category_id: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime
    category: Optional[CategoryOut] = None

    model_config = {"from_attributes": True}


class PlotSummary(PlotOut):
    """Plot with the number of rows planted in it."""
    row_count: int = 0


# ═══════════════════════════════════════════════════════════════
# Custom row fields
# ═══════════════════════════════════════════════════════════════

class FieldDefinitionCreate(BaseModel):
    name: str
    field_type: FieldType
    options: Optional[List[str]] = None
    is_required: bool = False
    display_order: Optional[int] = Field(default=None, ge=0)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value):
        return _clean_name(value)


class FieldDefinitionUpdate(BaseModel):
    name: Optional[str] = None
    field_type: Optional[FieldType] = None
    options: Optional[List[str]] = None
    is_required: Optional[bool] = None
    display_order: Optional[int] = Field(default=None, ge=0)

    @field_validator("name", "field_type", "is_required", "display_order")
    @classmethod
    def validate_not_null(cls, value, info: ValidationInfo):
        return _not_null(value, info)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value):
        return _clean_name(value)


class FieldDefinitionOut(BaseModel):
    id: UUID
    name: str
    field_type: FieldType
    options: Optional[List[str]] = None
    is_required: bool
    display_order: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class FieldMoveRequest(BaseModel):
    direction: Literal["up", "down"]


class CustomFieldInput(BaseModel):
    field_id: UUID
    value: Any = None


class FieldValueOut(BaseModel):
    id: UUID
    row_id: UUID
    field_id: UUID
    value: Any = None
    created_at: datetime
    updated_at: datetime
    field_definition: FieldDefinitionOut

    model_config = {"from_attributes": True}


# ═══════════════════════════════════════════════════════════════
# Rows
# ═══════════════════════════════════════════════════════════════

class RowCreate(BaseModel):
    plot_id: Optional[UUID] = None
    name: str
    variety: Optional[str] = None
    planted_date: Optional[date] = None
    expected_harvest: Optional[date] = None
    notes: Optional[str] = None
    position: Optional[int] = Field(default=None, ge=0)
    status: RowStatus = RowStatus.PLANNED
    custom_fields: Optional[List[CustomFieldInput]] = None
    categories: Optional[List[UUID]] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value):
        return _clean_name(value)


class RowUpdate(BaseModel):
    plot_id: Optional[UUID] = None
    name: Optional[str] = None
    variety: Optional[str] = None
    planted_date: Optional[date] = None
    expected_harvest: Optional[date] = None
    notes: Optional[str] = None
    position: Optional[int] = Field(default=None, ge=0)
    status: Optional[RowStatus] = None
    custom_fields: Optional[List[CustomFieldInput]] = None
    categories: Optional[List[UUID]] = None

    @field_validator("name", "position", "status")
    @classmethod
    def validate_not_null(cls, value, info: ValidationInfo):
        return _not_null(value, info)

    @field_validator("name")
    @classmethod
    def validate_name(cls, value):
        return _clean_name(value)


class RowStatusUpdate(BaseModel):
    status: RowStatus


class RowPosition(BaseModel):
    id: UUID
    position: int = Field(ge=0)


class RowPositionsUpdate(BaseModel):
    plot_id: UUID
    positions: List[RowPosition]


class RowCategoriesUpdate(BaseModel):
    category_ids: List[UUID]


class RowFieldValuesUpdate(BaseModel):
    values: List[CustomFieldInput]


class RowOut(BaseModel):
    id: UUID
    plot_id: Optional[UUID] = None
    name: str
    variety: Optional[str] = None
    planted_date: Optional[date] = None
    expected_harvest: Optional[date] = None
    notes: Optional[str] = None
    position: int
    status: RowStatus
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RowDetail(RowOut):
    """Row joined with its plot, assigned categories and custom field values."""
    plot: Optional[PlotOut] = None
    categories: List[CategoryOut] = []
    custom_fields: List[FieldValueOut] = []


# ═══════════════════════════════════════════════════════════════
# Dashboard
# ═══════════════════════════════════════════════════════════════

class DashboardStats(BaseModel):
    total_plots: int
    total_rows: int
    planted_this_month: int
    plot_categories_in_use: int


class HealthResponse(BaseModel):
    status: Literal["healthy", "degraded"]
    db: Literal["ok", "error"]
