"""
FastAPI 애플리케이션

라우터 등록, 예외 → HTTP 응답 매핑 및 앱 설정.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config.loader import get_settings
from core.constants import APP_VERSION
from core.ledger.errors import (
    InvalidArgumentError,
    LedgerError,
    NotFoundError,
    StorageFailureError,
)
from core.logging import setup_logging

# 로깅 설정 (콘솔 + 파일)
setup_logging("web")

from web.routes import customers, health, movements

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """앱 생명주기 관리"""
    from adapters.db.sqlite_adapter import SQLiteAdapter
    from core.ledger.schema import init_ledger_schema

    settings = get_settings()

    # 시작 시 - DB 스키마 자동 초기화 (전략 불일치면 기동 실패)
    async with SQLiteAdapter(settings.db_path) as db:
        await init_ledger_schema(db, settings.balance_strategy)

    logger.info(
        f"Web 시작: db={settings.db_path} balance_strategy={settings.balance_strategy.value}"
    )

    yield

    logger.info("Web 종료")


app = FastAPI(
    title="Customer Ledger API",
    description="고객 외상/결제 원장 API",
    version=APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().web.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =========================================================================
# 예외 핸들러
# =========================================================================

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(InvalidArgumentError)
async def invalid_argument_handler(request: Request, exc: InvalidArgumentError) -> JSONResponse:
    """입력값 오류 / 결제 한도 초과 → 400"""
    return _error(400, exc.message)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """고객/movement 없음 → 404"""
    return _error(404, str(exc))


@app.exception_handler(StorageFailureError)
async def storage_failure_handler(request: Request, exc: StorageFailureError) -> JSONResponse:
    """DB 실패 → 500 (상세는 로그에만)"""
    return _error(500, "Storage error")


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    """기타 원장 오류 → 500"""
    logger.error(f"처리되지 않은 원장 오류: {exc}")
    return _error(500, "Internal server error")


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """요청 형식 오류 (잘못된 ID 등) → 400"""
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p not in ("body", "path", "query"))
        message = f"Invalid {field or 'request'}: {first.get('msg', 'invalid value')}"
    else:
        message = "Invalid request"
    return _error(400, message)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """예상하지 못한 오류 → 500"""
    logger.exception(f"처리되지 않은 오류: {request.method} {request.url.path}")
    return _error(500, "Internal server error")


# =========================================================================
# API 라우터 등록
# =========================================================================

app.include_router(health.router)
app.include_router(customers.router)
app.include_router(movements.router)


@app.get("/", include_in_schema=False)
async def home() -> dict:
    """루트"""
    return {"ok": True, "message": "Customer Ledger API"}
