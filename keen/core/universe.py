"""The fixed enumeration of companies and metrics offered to users."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from keen.core.config import Config
from keen.core.errors import ConfigError
from keen.core.normalize import keys_match


@dataclass(frozen=True)
class Company:
    ticker: str
    name: str


@dataclass(frozen=True)
class Metric:
    name: str
    description: str = ""


@dataclass(frozen=True)
class Universe:
    companies: Tuple[Company, ...]
    metrics: Tuple[Metric, ...]

    def __post_init__(self) -> None:
        if not self.companies or not self.metrics:
            raise ConfigError("Universe needs at least one company and one metric", section="universe")

    @property
    def tickers(self) -> List[str]:
        return [c.ticker for c in self.companies]

    @property
    def metric_names(self) -> List[str]:
        return [m.name for m in self.metrics]

    def company_name(self, ticker: str) -> Optional[str]:
        for company in self.companies:
            if keys_match(company.ticker, ticker):
                return company.name
        return None

    def metric_description(self, name: str) -> Optional[str]:
        for metric in self.metrics:
            if keys_match(metric.name, name):
                return metric.description
        return None

    def to_dict(self) -> Dict[str, list]:
        return {
            "companies": [{"ticker": c.ticker, "name": c.name} for c in self.companies],
            "metrics": [{"name": m.name, "description": m.description} for m in self.metrics],
        }

    @classmethod
    def from_config(cls) -> "Universe":
        companies = tuple(
            Company(ticker=str(item["ticker"]), name=str(item.get("name") or item["ticker"]))
            for item in Config.get("universe", "companies", default=[])
        )
        metrics = tuple(
            Metric(name=str(item["name"]), description=str(item.get("description") or ""))
            for item in Config.get("universe", "metrics", default=[])
        )
        return cls(companies=companies, metrics=metrics)


__all__ = ["Company", "Metric", "Universe"]
