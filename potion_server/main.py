# potion_server/main.py

import logging
from contextlib import asynccontextmanager
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.openapi.utils import get_openapi
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from potion_server.api import analytics, auth, potions
from potion_server.config import Settings, load_settings
from potion_server.core.deps import SESSION_SCHEME, session_cookie_scheme
from potion_server.core.errors import ApiError
from potion_server.core.sanitize import SanitizeQueryMiddleware
from potion_server.database import create_db_engine, init_db, make_session_factory


logger = logging.getLogger("potion_server.main")


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# -------------------------------
# Error Handlers
# -------------------------------

async def handle_api_error(request: Request, exc: ApiError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def handle_request_validation(request: Request, exc: RequestValidationError):
    errors = [
        {"field": str(err["loc"][-1]) if err.get("loc") else None, "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"errors": errors})


# -------------------------------
# OpenAPI
# -------------------------------

def document_session_cookie(app: FastAPI):
    """
    Publishes the session cookie as the `cookieAuth` security scheme,
    under whatever cookie name this app was configured with.
    """
    scheme = app.state.session_cookie

    def openapi():
        if app.openapi_schema is None:
            schema = get_openapi(
                title=app.title,
                version=app.version,
                description=app.description,
                routes=app.routes,
            )
            components = schema.setdefault("components", {})
            components.setdefault("securitySchemes", {})[SESSION_SCHEME] = scheme.model.model_dump(
                mode="json", by_alias=True, exclude_none=True
            )
            app.openapi_schema = schema
        return app.openapi_schema

    app.openapi = openapi


# -------------------------------
# Application Factory
# -------------------------------

def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Builds the API around one Settings instance. The settings, engine and
    session factory live on app.state for the dependencies to pick up.
    """
    settings = settings or load_settings()
    engine = create_db_engine(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(engine)
        logger.info("Server running on http://localhost:%s", settings.port)
        logger.info("API docs available at http://localhost:%s/api-docs", settings.port)
        yield
        engine.dispose()

    app = FastAPI(
        title="Potion API",
        version="1.0.0",
        description="CRUD and analytics over potions, with cookie-based sessions.",
        docs_url="/api-docs",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)
    app.state.session_cookie = session_cookie_scheme(settings)
    document_session_cookie(app)

    # Starlette runs the last-added middleware first.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SanitizeQueryMiddleware)

    app.add_exception_handler(ApiError, handle_api_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)

    app.include_router(analytics.router, prefix="/potions/analytics")
    app.include_router(potions.router, prefix="/potions")
    app.include_router(auth.router, prefix="/auth")
    return app


def run():
    settings = load_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
