import logging
import os
from contextlib import asynccontextmanager

import firebase_admin
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from firebase_admin import credentials
from starlette.middleware.cors import CORSMiddleware

from context import RequestContextMiddleware, RequestIdFilter
from routes.posts import router as posts_router
from services.engagement import EngagementService
from services.firestore import FirestoreDB
from services.memory import InMemoryDB
from services.posts import PostStore
from services.profiles import ProfileService
from utils.exceptions import FeedError, StorageError

load_dotenv()

# ─── logging ────────────────────────────────────────────────
logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper(),
                    format="%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s")
for handler in logging.getLogger().handlers:
    handler.addFilter(RequestIdFilter())

logger = logging.getLogger(__name__)

POSTS_BACKEND = os.getenv("POSTS_BACKEND", "firestore")
FIREBASE_CREDENTIALS = os.getenv("FIREBASE_CREDENTIALS", "./firebase.json")
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")]


def create_database():
    """Build the storage backend selected by POSTS_BACKEND"""
    if POSTS_BACKEND == "memory":
        logger.warning("Using in-memory post storage; data is lost on restart")
        return InMemoryDB()
    if POSTS_BACKEND != "firestore":
        raise RuntimeError(f"Unknown POSTS_BACKEND: {POSTS_BACKEND}")

    # Initialize Firebase Admin SDK
    cred = credentials.Certificate(FIREBASE_CREDENTIALS)
    firebase_app = firebase_admin.initialize_app(cred)
    return FirestoreDB(firebase_app)


def init_services(app: FastAPI, db) -> None:
    """Wire the feed services on top of a storage backend"""
    post_store = PostStore(db)
    app.state.db = db
    app.state.post_store = post_store
    app.state.engagement_service = EngagementService(post_store)
    app.state.profile_service = ProfileService(db)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_services(app, create_database())
    logger.info("Post feed started with %s backend", POSTS_BACKEND)
    yield


app = FastAPI(lifespan=lifespan)

# middleware to set request context
app.add_middleware(RequestContextMiddleware)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FeedError)
async def feed_error_handler(request: Request, exc: FeedError):
    if isinstance(exc, StorageError):
        return JSONResponse(status_code=exc.status_code, content={"msg": "Server Error"})
    return JSONResponse(status_code=exc.status_code, content={"msg": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"msg": error["msg"], "param": str(error["loc"][-1]) if error.get("loc") else None}
        for error in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"errors": errors})


# Include routers
app.include_router(posts_router, prefix="/api/posts", tags=["posts"])
