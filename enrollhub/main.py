import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from enrollhub.core.config import get_settings
from enrollhub.core.database import init_db
from enrollhub.core.errors import AuthError, EnrollHubError
from enrollhub.routers.courses import router as courses_router
from enrollhub.routers.groups import router as groups_router
from enrollhub.routers.join import router as join_router
from enrollhub.routers.students import router as students_router
from enrollhub.schemas.envelope import failure

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("enrollhub")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(title="EnrollHub", lifespan=lifespan)

# Enable CORS for the dashboard dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
logger.info(f"CORS enabled for: {settings.cors_origins}")


@app.exception_handler(EnrollHubError)
async def enrollhub_error_handler(request: Request, exc: EnrollHubError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    headers = {"WWW-Authenticate": "Basic"} if isinstance(exc, AuthError) else None
    return failure(exc.message, exc.status_code, headers=headers)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return failure(str(exc.detail), exc.status_code, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Malformed JSON or a body that is not an object
    return failure("Invalid request body", 400)


app.include_router(courses_router, prefix="/api", tags=["Courses"])
app.include_router(students_router, prefix="/api", tags=["Students"])
app.include_router(groups_router, prefix="/api", tags=["Groups"])
app.include_router(join_router, prefix="/api", tags=["Join"])


@app.get("/ping")
async def ping():
    return {"message": "EnrollHub backend is alive!"}


def run():
    import uvicorn

    uvicorn.run("enrollhub.main:app", host="0.0.0.0", port=8000)
