import logging
import time
from typing import Any, Dict

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRouter

from .cache import get as cache_get, set as cache_set
from .config import settings
from .converter import Category, SizeUnit, as_category, convert
from .errors import ConversionError
from .limiter import rate_limit
from .logging_setup import configure_logging
from .schemas import (
    ChartResponse,
    ConvertAllQuery,
    ConvertAllResponse,
    ConvertQuery,
    ConvertResponse,
    UnitInfo,
    UnitsResponse,
)
from .security import create_jwt, verify_jwt_token
from .sizing import CHART_EU_MAX, CHART_EU_MIN, CHART_EU_STEP, convert_all, size_chart, unit_step


configure_logging()
logger = logging.getLogger("api")

app = FastAPI(title="Shoe Size Converter API", version="1.0.0")

# CORS (optional local dev)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

router = APIRouter(prefix=settings.API_PREFIX, tags=["v1"])


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(ConversionError)
async def conversion_exception_handler(request: Request, exc: ConversionError):
    logger.info("conversion_rejected", extra={"path": str(request.url.path), "error": str(exc)})
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    resp = None
    try:
        resp = await call_next(request)
        return resp
    finally:
        duration_ms = int((time.time() - start) * 1000)
        logger.info(
            "request",
            extra={
                "path": str(request.url.path),
                "method": request.method,
                "status": getattr(resp, "status_code", 0),
                "duration_ms": duration_ms,
            },
        )


@router.get("/health", summary="Liveness/Readiness probe")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@router.post("/auth/token")
def issue_token() -> Dict[str, str]:
    token = create_jwt("local-user")
    return {"token": token}


@router.get("/units", response_model=UnitsResponse)
def units() -> Dict[str, Any]:
    return {
        "units": [UnitInfo(unit=u, step=unit_step(u)) for u in SizeUnit],
        "categories": list(Category),
    }


@router.post("/convert", response_model=ConvertResponse, dependencies=[Depends(verify_jwt_token)])
def convert_size(request: Request, q: ConvertQuery):
    rate_limit(request)
    cache_key = ("convert", float(q.value), q.from_unit, q.to_unit, q.category)
    cached = cache_get(cache_key)
    if cached:
        return cached

    try:
        result = convert(q.value, q.from_unit, q.to_unit, q.category)
    except ConversionError:
        raise
    except Exception as e:
        logger.exception("conversion_error", extra={"error": str(e)})
        raise HTTPException(status_code=500, detail="Conversion failed")

    out = {
        "value": q.value,
        "from": q.from_unit.value,
        "to": q.to_unit.value,
        "category": q.category.value,
        "result": result,
    }
    cache_set(cache_key, out)
    return out


@router.post("/convert/all", response_model=ConvertAllResponse, dependencies=[Depends(verify_jwt_token)])
def convert_all_sizes(request: Request, q: ConvertAllQuery):
    rate_limit(request)
    cache_key = ("convert_all", float(q.value), q.from_unit, q.category)
    cached = cache_get(cache_key)
    if cached:
        return cached

    try:
        sizes = convert_all(q.value, q.from_unit, q.category)
    except ConversionError:
        raise
    except Exception as e:
        logger.exception("conversion_error", extra={"error": str(e)})
        raise HTTPException(status_code=500, detail="Conversion failed")

    out = {
        "from": q.from_unit.value,
        "category": q.category.value,
        "sizes": {unit.value: v for unit, v in sizes.items()},
    }
    cache_set(cache_key, out)
    return out


@router.get("/chart", response_model=ChartResponse, dependencies=[Depends(verify_jwt_token)])
def chart(
    request: Request,
    category: str = Query(Category.MEN.value, description="men, women or kids"),
    start: float = Query(CHART_EU_MIN, gt=0, description="First EU size"),
    stop: float = Query(CHART_EU_MAX, gt=0, description="Last EU size, inclusive"),
    step: float = Query(CHART_EU_STEP, gt=0),
):
    rate_limit(request)
    cat = as_category(category)
    try:
        rows = size_chart(cat, start=start, stop=stop, step=step)
    except ConversionError:
        raise
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return {
        "category": cat.value,
        "rows": [{unit.value: v for unit, v in row.items()} for row in rows],
    }


app.include_router(router)
