from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import structlog
from strayspot.core.config import get_settings
from strayspot.core.errors import EngineError
from strayspot.core.logging import configure_logging
from strayspot.routes.health import router as health_router
from strayspot.routes.adopters import router as adopters_router
from strayspot.routes.orgs import router as orgs_router
from strayspot.routes.pets import router as pets_router
from strayspot.routes.adoption_applications import router as adoption_applications_router
from strayspot.routes.admin import router as admin_router

settings = get_settings()
configure_logging(settings.environment, settings.log_level)
log = structlog.get_logger(__name__)

app = FastAPI(title="StraySpot adoption engine")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_origin_regex=r"^http://(localhost|127\.0\.0\.1)(:\d+)?$",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(EngineError)
async def engine_error_handler(request: Request, exc: EngineError):
    log.info(
        "request_rejected",
        path=request.url.path,
        method=request.method,
        code=exc.code,
        detail=exc.message,
    )
    body = {"detail": exc.message, "code": exc.code}
    application_id = getattr(exc, "application_id", None)
    if application_id is not None:
        body["application_id"] = application_id
    return JSONResponse(status_code=exc.status_code, content=body)


app.include_router(health_router)
app.include_router(adopters_router)
app.include_router(orgs_router)
app.include_router(pets_router)
app.include_router(adoption_applications_router)
app.include_router(admin_router)
