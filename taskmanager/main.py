from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import auth, health, reviews, tasks
from .config import Settings
from .errors import TaskManagerError, UnexpectedError
from .models import Review, Task, User
from .repositories import InMemoryRepository, SqlRepository
from .schemas import error_envelope
from .services.reviews import ReviewStore
from .services.seed import DEMO_EMAIL, DEMO_PASSWORD, DEMO_USERNAME, seed_demo_data
from .services.session import Authenticator
from .services.tasks import TaskStore

logger = logging.getLogger(__name__)


def _build_repositories(settings: Settings):
    if settings.storage_backend == "sql":
        from .database import create_db_and_tables, get_engine

        engine = get_engine(settings.database_url)
        create_db_and_tables(engine)
        return (
            SqlRepository(User, engine),
            SqlRepository(Task, engine),
            SqlRepository(Review, engine),
        )
    if settings.storage_backend != "memory":
        raise ValueError(f"Unknown STORAGE_BACKEND: {settings.storage_backend}")
    return InMemoryRepository(), InMemoryRepository(), InMemoryRepository()


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(TaskManagerError)
    async def task_manager_error_handler(request: Request, exc: TaskManagerError):
        return error_envelope(exc.message, exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        detail = errors[0].get("msg", "Invalid request body") if errors else "Invalid request body"
        return error_envelope(f"Invalid request: {detail}", 400)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return error_envelope("Endpoint not found", 404)
        return error_envelope(str(exc.detail), exc.status_code)

    # runs inside CORSMiddleware so 500 envelopes still carry CORS headers
    @app.middleware("http")
    async def unexpected_error_middleware(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception:
            logger.exception(f"Unhandled error on {request.method} {request.url.path}")
            return error_envelope(UnexpectedError().message, 500)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Assemble the API: storage, stores, routers and error handlers."""
    settings = settings or Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Task Manager API",
        description="Task Manager API with Authentication",
        version=settings.version,
    )

    # before CORS: the last middleware added is the outermost
    _register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    users, task_records, review_records = _build_repositories(settings)
    authenticator = Authenticator(
        users,
        secret_key=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expire_hours=settings.token_expire_hours,
    )
    task_store = TaskStore(task_records)
    review_store = ReviewStore(review_records, task_store)

    app.state.settings = settings
    app.state.authenticator = authenticator
    app.state.task_store = task_store
    app.state.review_store = review_store

    if settings.seed_demo_data:
        seed_demo_data(authenticator, task_store, review_store)

    # Mount routers
    app.include_router(auth.router, prefix="/api", tags=["auth"])
    app.include_router(tasks.router, prefix="/api", tags=["tasks"])
    app.include_router(reviews.router, prefix="/api", tags=["reviews"])
    app.include_router(health.router, prefix="/api", tags=["health"])

    @app.get("/")
    async def read_root():
        directory = {
            "message": "Task Manager API with Authentication",
            "version": settings.version,
            "endpoints": {
                "authentication": {
                    "POST /api/auth/register": "Register a new user",
                    "POST /api/auth/login": "Login user",
                },
                "tasks": {
                    "GET /api/tasks": "Get user tasks (protected)",
                    "GET /api/tasks/:id": "Get a specific task (protected)",
                    "POST /api/tasks": "Create a new task (protected)",
                    "PUT /api/tasks/:id": "Update a task (protected)",
                    "DELETE /api/tasks/:id": "Delete a task (protected)",
                    "DELETE /api/tasks": "Delete all user tasks (protected)",
                },
                "reviews": {
                    "GET /api/reviews/:taskId": "Get reviews for a task",
                    "POST /api/reviews": "Create a review (protected)",
                },
                "system": {
                    "GET /api/health": "Health check",
                },
            },
        }
        if settings.seed_demo_data:
            directory["demo"] = {
                "username": DEMO_USERNAME,
                "email": DEMO_EMAIL,
                "password": DEMO_PASSWORD,
            }
        return directory

    logger.info(f"Task Manager API ready (storage={settings.storage_backend}, auth={settings.auth_enabled})")
    return app


app = create_app()
