from typing import List

from pydantic import BaseModel, ConfigDict


class SeriesPointRead(BaseModel):
    year: str
    value: float

    model_config = ConfigDict(from_attributes=True)


class ErrorRead(BaseModel):
    error: str


class CompanyRead(BaseModel):
    ticker: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class MetricRead(BaseModel):
    name: str
    description: str = ""

    model_config = ConfigDict(from_attributes=True)


class UniverseRead(BaseModel):
    """Companies and metrics the dashboard offers."""

    companies: List[CompanyRead]
    metrics: List[MetricRead]
