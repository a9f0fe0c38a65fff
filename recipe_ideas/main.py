# Recipe Ideas API Main Entry Point
import logging
import sys
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import ActionError, ValidationFailedError
from .settings import settings
from .routers.ready import router as ready_router
from .routers.sessions import router as sessions_router
from .routers.recipes import router as recipes_router

# Configure structured logging
logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger("recipe_ideas")

app = FastAPI(title="Recipe Ideas API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(exc: ActionError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.to_dict()},
    )


@app.exception_handler(ActionError)
async def action_error_handler(request: Request, exc: ActionError):
    logger.info(f"{request.url.path} failed: {exc.code} {exc.message}")
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return _error_response(ValidationFailedError.from_errors(exc.errors()))


app.include_router(ready_router, prefix="/api", tags=["ready"])
app.include_router(sessions_router, prefix="/api", tags=["sessions"])
app.include_router(recipes_router, prefix="/api", tags=["recipes"])
