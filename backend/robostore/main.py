import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from robostore.api.products import products_router
from robostore.core.config import settings
from robostore.core.db import Base, engine
from robostore.core.errors import CatalogError
from robostore.core.log import setup_logging
from robostore.services.media_store import MediaStore, build_media_store

# Import models so Base.metadata knows them
import robostore.models  # noqa

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    if app.state.media_store is None:
        # missing Cloudinary credentials stop the server here
        app.state.media_store = build_media_store(settings)
    logger.info("Robotics Store API ready")
    yield


def create_app(media_store: MediaStore | None = None) -> FastAPI:
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Robotics Store API", version="1.0.0", lifespan=lifespan)
    app.state.media_store = media_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(products_router)

    @app.get("/")
    def home():
        return {
            "success": True,
            "message": "Robotics Store API",
            "version": app.version,
            "endpoints": {
                "products": {
                    "getAll": "GET /api/products",
                    "getOne": "GET /api/products/:id",
                    "create": "POST /api/products",
                    "update": "PUT /api/products/:id",
                    "delete": "DELETE /api/products/:id",
                }
            },
        }

    @app.get("/health")
    def health():
        return {"status": "ok"}

    # -------------------------
    # Error handlers
    # -------------------------

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        else:
            logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = []
        for err in exc.errors():
            # drop the "body" / "query" prefix FastAPI puts in front of the field name
            field = ".".join(str(part) for part in err["loc"][1:]) or "request"
            errors.append(f"{field}: {err['msg']}")
        logger.info("%s %s rejected: %s", request.method, request.url.path, "; ".join(errors))
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": "Validation Error", "errors": errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and exc.detail == "Not Found":
            message = f"Route {request.url.path} not found"
        else:
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def server_error_handler(request: Request, exc: Exception):
        logger.exception("Server error on %s %s", request.method, request.url.path)
        content = {"success": False, "message": "Internal server error"}
        if settings.is_development:
            content["error"] = str(exc)
        return JSONResponse(status_code=500, content=content)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("robostore.main:app", host="0.0.0.0", port=settings.PORT, log_level="info")
