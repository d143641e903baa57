import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import load_config
from app.core.errors import ReflectionError
from app.observability.logger import init_sentry
from app.routes.briefing import router as briefing_router
from app.routes.calendar import router as calendar_router
from app.routes.meetings import router as meetings_router
from app.routes.profile import router as profile_router
from app.routes.settings import router as settings_router
from app.routes.templates import router as templates_router

load_dotenv()

logger = logging.getLogger("reflection")
logging.basicConfig(level=logging.INFO)

config = load_config()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    init_sentry()
    logger.info(f"Meeting reflection service started (project={config.project_id}, store={config.store_backend}, mail={config.mail_driver})")
    yield
    logger.info("Meeting reflection service stopped")


app = FastAPI(title="Meeting Reflection", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


@app.exception_handler(ReflectionError)
async def reflection_error_handler(request: Request, exc: ReflectionError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# Routes
app.include_router(briefing_router, tags=["briefing"])
app.include_router(meetings_router, prefix="/meetings", tags=["meetings"])
app.include_router(templates_router, prefix="/templates", tags=["templates"])
app.include_router(settings_router, prefix="/settings", tags=["settings"])
app.include_router(calendar_router, prefix="/calendar", tags=["calendar"])
app.include_router(profile_router, prefix="/profile", tags=["profile"])


@app.get("/")
def health():
    return {"status": "ok"}
