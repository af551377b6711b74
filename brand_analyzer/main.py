import logging
from contextlib import asynccontextmanager
from typing import List, Optional
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from brand_analyzer.config import Settings, settings as default_settings
from brand_analyzer.db.repo import WebsiteRepository
from brand_analyzer.db.session import Database
from brand_analyzer.exceptions import AnalyzerError
from brand_analyzer.logging_conf import configure_logging
from brand_analyzer.models.schemas import (
    AnalyzeRequest,
    ErrorResponse,
    RecordListResponse,
    RecordResponse,
    WebsiteUpdate,
)
from brand_analyzer.services.analyzer import WebsiteAnalyzer
from brand_analyzer.services.enhancer import GeminiEnhancer
from brand_analyzer.services.fetcher import Fetcher
from brand_analyzer.services.records import RecordService

logger = logging.getLogger(__name__)

WELCOME_TEXT = "Welcome to the Brand Analyzer API!"


# --- dependencies ---

def get_settings(request: Request) -> Settings:
    return request.app.state.settings

def get_database(request: Request) -> Database:
    return request.app.state.database

def get_repository(db: Database = Depends(get_database)) -> WebsiteRepository:
    return WebsiteRepository(db)

async def get_fetcher(settings: Settings = Depends(get_settings)):
    fetcher = Fetcher(timeout=settings.FETCH_TIMEOUT_SECS, user_agent=settings.USER_AGENT)
    try:
        yield fetcher
    finally:
        await fetcher.close()

def get_enhancer(settings: Settings = Depends(get_settings)) -> GeminiEnhancer:
    return GeminiEnhancer.from_settings(settings)

def get_analyzer(fetcher: Fetcher = Depends(get_fetcher),
                 enhancer: GeminiEnhancer = Depends(get_enhancer),
                 repository: WebsiteRepository = Depends(get_repository)) -> WebsiteAnalyzer:
    return WebsiteAnalyzer(fetcher, enhancer, repository)

def get_record_service(repository: WebsiteRepository = Depends(get_repository)) -> RecordService:
    return RecordService(repository)


# --- routes ---

ERROR_RESPONSES = {code: {"model": ErrorResponse} for code in (400, 404, 500, 504)}

router = APIRouter(prefix="/api/analyze", tags=["websites"], responses=ERROR_RESPONSES)

@router.get("/", response_model=RecordListResponse)
def list_websites(service: RecordService = Depends(get_record_service)):
    return RecordListResponse(
        message="Successfully retrieved all website records.",
        data=service.list_records(),
    )

@router.post("/", response_model=RecordResponse, status_code=201)
async def analyze_website(req: Optional[AnalyzeRequest] = None, analyzer: WebsiteAnalyzer = Depends(get_analyzer)):
    record = await analyzer.analyze(req.url if req else None)
    return RecordResponse(message="Website analysis successful and data stored.", data=record)

@router.put("/{record_id}", response_model=RecordResponse)
def update_website(record_id: int, body: WebsiteUpdate,
                   service: RecordService = Depends(get_record_service)):
    record = service.update_record(record_id, body.brand_name, body.description)
    return RecordResponse(message="Website record updated successfully.", data=record)

@router.delete("/{record_id}", response_model=RecordResponse)
def delete_website(record_id: int, service: RecordService = Depends(get_record_service)):
    record = service.delete_record(record_id)
    return RecordResponse(message="Website record deleted successfully.", data=record)


# --- error rendering ---

async def analyzer_error_handler(request: Request, exc: AnalyzerError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors: List[dict] = exc.errors()
    if errors:
        loc = ".".join(str(p) for p in errors[0].get("loc", ()) if p != "body")
        message = f"Invalid request: {loc or 'body'} {errors[0].get('msg', '')}".strip()
    else:
        message = "Invalid request."
    return JSONResponse(status_code=400, content={"error": message})

async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error."})


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.LOG_LEVEL)
        owned = database is None
        # missing or unreachable database aborts startup
        db = database or Database.from_settings(settings)
        db.create_all()
        app.state.settings = settings
        app.state.database = db
        if not settings.GEMINI_API_KEY:
            logger.info("GEMINI_API_KEY not set, description enhancement disabled")
        logger.info("%s started", settings.APP_NAME)
        try:
            yield
        finally:
            if owned:
                db.dispose()
            logger.info("%s stopped", settings.APP_NAME)

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.add_exception_handler(AnalyzerError, analyzer_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/", response_class=PlainTextResponse)
    def welcome():
        return WELCOME_TEXT

    app.include_router(router)
    return app


app = create_app()


def run():
    import uvicorn

    uvicorn.run("brand_analyzer.main:app", host="0.0.0.0", port=default_settings.PORT)
