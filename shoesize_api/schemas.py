from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, confloat, field_validator

from .converter import Category, SizeUnit, as_category, as_unit


PositiveSize = confloat(gt=0, allow_inf_nan=False)


class ConvertQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    value: PositiveSize = Field(..., description="Size or foot length in the source unit")
    from_unit: SizeUnit = Field(..., alias="from", description="eu, us, uk, cm or in")
    to_unit: SizeUnit = Field(..., alias="to", description="eu, us, uk, cm or in")
    category: Category = Field(Category.MEN, description="men, women or kids")

    @field_validator("from_unit", "to_unit", mode="before")
    @classmethod
    def coerce_unit(cls, v):
        return as_unit(v)

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v):
        return as_category(v)


class ConvertResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    value: float
    from_unit: SizeUnit = Field(..., alias="from")
    to_unit: SizeUnit = Field(..., alias="to")
    category: Category
    result: float


class ConvertAllQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    value: PositiveSize = Field(..., description="Size or foot length in the source unit")
    from_unit: SizeUnit = Field(..., alias="from", description="eu, us, uk, cm or in")
    category: Category = Field(Category.MEN, description="men, women or kids")

    @field_validator("from_unit", mode="before")
    @classmethod
    def coerce_unit(cls, v):
        return as_unit(v)

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, v):
        return as_category(v)


class ConvertAllResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_unit: SizeUnit = Field(..., alias="from")
    category: Category
    sizes: Dict[SizeUnit, float]


class UnitInfo(BaseModel):
    unit: SizeUnit
    step: float


class UnitsResponse(BaseModel):
    units: List[UnitInfo]
    categories: List[Category]


class ChartResponse(BaseModel):
    category: Category
    rows: List[Dict[SizeUnit, float]]
