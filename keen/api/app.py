from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from keen import __version__
from keen.api.routes import router
from keen.api.settings import get_api_settings
from keen.core.errors import KeenError, ReadFailure
from keen.utils.logger import get_logger, setup_logging

setup_logging()
log = get_logger(__name__)

settings = get_api_settings()

app = FastAPI(
    title="Keen Analytics API",
    description="Multi-year company financial series for charting",
    version=__version__,
)
limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KeenError)
async def keen_error_handler(request: Request, exc: KeenError):
    if isinstance(exc, ReadFailure) or exc.status_code >= 500:
        log.error(f"{request.url.path} failed: {exc.as_dict()}")
    else:
        log.info(f"{request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


app.include_router(router, prefix="/api", tags=["Series"])


@app.get("/")
async def root():
    return {
        "message": "Welcome to Keen Analytics API",
        "docs": "/docs",
        "version": __version__,
    }


@app.get("/health")
def health():
    return {"status": "ok", "env": settings.env}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
