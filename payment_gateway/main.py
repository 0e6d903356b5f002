import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Query
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from payment_gateway.config import LOG_LEVEL, SERVICE_NAME
from payment_gateway.pipeline import build_pipeline
from payment_gateway.repo import get_transaction, list_transactions, transaction_stats
from payment_gateway.schemas import ChargeRequest

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

app = FastAPI(title="Mini Payment Gateway")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# one pipeline (and one ledger) per process
pipeline = build_pipeline()
store = pipeline.store


@app.on_event("startup")
async def on_startup():
    logger.info("[startup] %s ready (explainer=%s)", SERVICE_NAME, type(pipeline.explainer).__name__)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    response = await call_next(request)
    logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
    return response


# -------- Error mapping --------

def _field_path(loc) -> str:
    return ".".join(str(p) for p in loc if p not in ("body", "query", "path"))


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    details = [{"field": _field_path(e.get("loc", ())), "message": e.get("msg", "")} for e in exc.errors()]
    return JSONResponse({"error": "Validation failed", "details": details}, status_code=400)


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(
            {"error": "Not found", "message": f"Route {request.method} {request.url.path} not found"},
            status_code=404,
        )
    return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code)


@app.exception_handler(Exception)
async def internal_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        {"error": "Internal server error", "message": "An unexpected error occurred"},
        status_code=500,
    )


@app.get("/health")
async def health():
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": SERVICE_NAME,
    }


@app.post("/charge")
async def charge(payload: ChargeRequest):
    try:
        result = await pipeline.process_charge(payload)
    except Exception:
        logger.exception("Error processing charge")
        return JSONResponse(
            {"error": "Internal server error", "message": "Failed to process payment"},
            status_code=500,
        )
    return JSONResponse(result)


# -------- Reporting endpoints --------

def _as_utc(dt: Optional[datetime]) -> Optional[datetime]:
    if dt is not None and dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


@app.get("/transactions")
async def api_transactions(
    status: Optional[str] = None,
    email: Optional[str] = None,
    startDate: Optional[datetime] = Query(None),
    endDate: Optional[datetime] = Query(None),
    limit: int = Query(50, ge=1),
    offset: int = Query(0, ge=0),
):
    return JSONResponse(list_transactions(
        store,
        status=status,
        email=email,
        start=_as_utc(startDate),
        end=_as_utc(endDate),
        limit=limit,
        offset=offset,
    ))


@app.get("/transactions/stats/summary")
async def api_transaction_stats():
    return JSONResponse(transaction_stats(store))


@app.get("/transactions/{txn_id}")
async def api_transaction(txn_id: str):
    r = get_transaction(store, txn_id)
    if not r:
        return JSONResponse(
            {"error": "Transaction not found", "message": f"No transaction found with ID: {txn_id}"},
            status_code=404,
        )
    return JSONResponse(r)
