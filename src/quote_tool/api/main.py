from contextlib import asynccontextmanager
from typing import Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import BaseModel, Field

from ..config.logging_config import setup_logging
from ..config.settings import get_settings
from ..data.build_catalog import load_default_catalog
from ..db.database import create_db_engine, init_db
from ..errors import CatalogError
from .responses import error_response, validation_error_response
from .state import engine
from .submissions_api import router as submissions_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level)
    db_engine = create_db_engine(settings.database_url)
    init_db(db_engine)
    logger.info(f"Quote Tool API started ({settings.environment}), database {db_engine.url.render_as_string()}")
    yield
    db_engine.dispose()


app = FastAPI(
    title="Quote Tool API",
    description="Backend API for the project pricing calculator and contact form",
    version="1.0.0",
    lifespan=lifespan,
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(submissions_router)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected {request.method} {request.url.path}: {len(exc.errors())} validation error(s)")
    return validation_error_response(exc.errors())


class CalcRequest(BaseModel):
    selections: Dict[int, List[str]] = Field(default_factory=dict)


@app.get("/")
async def root():
    return {"status": "online", "message": "Quote Tool API Active"}


@app.get("/catalog")
async def get_catalog():
    catalog = engine.catalog
    return {
        "steps": [
            {
                "index": index,
                "id": step.id,
                "title": step.title,
                "description": step.description,
                "multiSelect": step.multi_select,
                "isTimeline": step.is_timeline,
                "options": [
                    {
                        "id": opt.id,
                        "name": opt.name,
                        "basePrice": opt.base_price,
                        "description": opt.description,
                        "multiplier": float(opt.multiplier) if opt.multiplier is not None else None,
                    }
                    for opt in step.options
                ],
            }
            for index, step in enumerate(catalog.steps)
        ]
    }


@app.post("/calculate")
async def calculate_estimate(req: CalcRequest):
    return engine.quote(req.selections).to_dict()


@app.post("/system/reload-catalog")
def reload_catalog():
    try:
        catalog = load_default_catalog()
    except CatalogError as e:
        logger.error(f"Catalog reload failed, keeping current catalog: {e}")
        return error_response(f"Catalog reload failed: {e}")

    engine.reload_catalog(catalog)
    return {
        "success": True,
        "steps": len(catalog),
        "options": catalog.option_count,
    }


@app.get("/system/status")
async def get_status():
    settings = get_settings()
    has_report = settings.build_report.exists()
    catalog = engine.catalog
    return {
        "engine_active": True,
        "steps_count": len(catalog),
        "options_count": catalog.option_count,
        "timeline_step_index": catalog.timeline_index,
        "notifications_enabled": settings.notifications_enabled,
        "catalog_last_build": settings.build_report.stat().st_mtime if has_report else None,
    }
