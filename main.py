import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo import MongoClient
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings
from database import Store
from errors import ApiError
from routes import admin, api, get_store, pages

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, client: Optional[MongoClient] = None) -> FastAPI:
    """
    Build the API. `client` replaces the MongoDB client built from settings,
    which is how tests run against an in-memory database.
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(api_app: FastAPI):
        if client is not None:
            store = Store(client, settings.database_name)
        else:
            store = Store.connect(settings.database_url, settings.database_name)
        store.open(settings.session_ttl_seconds)
        api_app.state.store = store
        yield
        store.close()

    app = FastAPI(title="Comfort Hotel - Booking Management", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"{request.method} {request.url.path}")
        return await call_next(request)

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def body_error_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Rejected request body on {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid request body", "code": "invalid_body"})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and request.url.path.startswith("/api"):
            return JSONResponse(status_code=404, content={"error": "API route not found", "code": "not_found"})
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail, "code": "http_error"})

    @app.get("/")
    def read_root():
        return {"message": "Comfort Hotel booking API"}

    @app.get("/api/info")
    def info():
        return {
            "project": "Comfort Hotel",
            "description": "Booking management backend with MongoDB",
        }

    @app.get("/test")
    def test_database(request: Request):
        response = {
            "backend": "✅ Running",
            "database": "❌ Not Available",
            "database_url": "✅ Set" if settings.database_url else "❌ Not Set",
            "database_name": settings.database_name,
            "connection_status": "Not Connected",
            "collections": [],
        }
        store = get_store(request)
        try:
            response["collections"] = store.collection_names()[:10]
            response["database"] = "✅ Connected & Working"
            response["connection_status"] = "Connected"
        except ApiError:
            response["database"] = "⚠️  Connected but Error"
        return response

    app.include_router(api)
    app.include_router(admin)
    app.include_router(pages)
    return app


logging.basicConfig(
    level=Settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host="0.0.0.0", port=port)
