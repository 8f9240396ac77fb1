import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from structify import config
from structify.api.routes import router
from structify.errors import (
    ConfigurationError,
    InputValidationError,
    RetryBudgetExhaustedError,
    UnsupportedTypeError,
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Structify",
    version="0.1.0",
)

# Middleware FIRST
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes AFTER middleware
app.include_router(router)


# ============================================================
# ERROR MAPPING
# ============================================================

@app.exception_handler(InputValidationError)
async def input_validation_handler(request: Request, exc: InputValidationError):
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "errors": exc.errors},
    )


@app.exception_handler(UnsupportedTypeError)
async def unsupported_type_handler(request: Request, exc: UnsupportedTypeError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(RetryBudgetExhaustedError)
async def retry_exhausted_handler(request: Request, exc: RetryBudgetExhaustedError):
    return JSONResponse(
        status_code=502,
        content={
            "detail": str(exc),
            "attempts": exc.attempts,
            "last_error": type(exc.last_error).__name__,
        },
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error("Service misconfigured: %s", exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})
