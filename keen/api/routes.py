from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from keen.api.schemas import ErrorRead, SeriesPointRead, UniverseRead
from keen.api.settings import ApiSettings, get_api_settings
from keen.core.row_source import FileRowSource
from keen.core.series import series_to_payload
from keen.core.series_engine import SeriesQueryEngine
from keen.core.universe import Universe
from keen.utils.logger import get_logger, log_execution_time

log = get_logger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorRead, "description": "Missing company or metric"},
    404: {"model": ErrorRead, "description": "Empty dataset or no matching row"},
    409: {"model": ErrorRead, "description": "Duplicate rows rejected"},
    500: {"model": ErrorRead, "description": "Data file could not be read"},
}


def get_engine(settings: ApiSettings = Depends(get_api_settings)) -> SeriesQueryEngine:
    return SeriesQueryEngine(FileRowSource(settings.data_file))


def get_universe() -> Universe:
    return Universe.from_config()


@router.get("/data", response_model=List[SeriesPointRead], responses=ERROR_RESPONSES)
@log_execution_time
async def get_series(
    company: Optional[str] = Query(None, description="Ticker, matched case-insensitively"),
    metric: Optional[str] = Query(None, description="Field name, matched case-insensitively"),
    engine: SeriesQueryEngine = Depends(get_engine),
):
    """
    Year-ordered series for one company and metric.
    """
    series = await engine.aquery(company, metric)
    log.debug(f"Serving {len(series)} points for {company}/{metric}")
    return series_to_payload(series)


@router.get("/universe", response_model=UniverseRead)
async def get_universe_route(universe: Universe = Depends(get_universe)):
    return universe.to_dict()
