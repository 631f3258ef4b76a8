import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from topthought.db.couchdb import ensure_database
from topthought.errors import register_exception_handlers
from topthought.repos.admin_repo import CouchAdminRepo
from topthought.routers import ai, auth, health, posts
from topthought.routers.health import SERVICE_NAME, SERVICE_VERSION
from topthought.services.auth_service import AuthService
from topthought.settings import settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def prepare_store() -> None:
    """Make sure the database exists and the admin account is seeded."""
    couch_db = ensure_database()
    AuthService(CouchAdminRepo(couch_db), settings).ensure_admin()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.JWT_SECRET:
        raise RuntimeError("JWT_SECRET must be set; bearer tokens cannot be signed")
    prepare_store()
    logger.info(f"Connected to CouchDB database {settings.COUCHDB_DATABASE}")
    yield
    logger.info(f"{SERVICE_NAME} shutting down")


app = FastAPI(title=SERVICE_NAME, version=SERVICE_VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)

app.include_router(auth.router)
app.include_router(posts.router)
app.include_router(health.router)
app.include_router(ai.router)


@app.get("/")
async def root():
    return {"message": f"{SERVICE_NAME} is running"}
