import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from burmafoodie.config import VERSION, Settings, settings
from burmafoodie.routers import health, recipe
from burmafoodie.services.recipe import RecipeRequestHandler

logger = logging.getLogger("burmafoodie")


def _error_body(message: str) -> dict:
    # Same shape as the model's own error variant so clients switch on one tag
    return {"responseType": "error", "error": message}


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("Rejected request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content=_error_body("Invalid request body."),
    )


API_DESCRIPTION = """
# BurmaFoodie API

Burmese recipe assistant backed by Claude.

## Endpoint

`POST /api/v1/recipe` with `{"prompt": "...", "imageBase64": "data:image/jpeg;base64,...", "language": "en"}`.
`imageBase64` and `language` are optional.

## Reply

One JSON object tagged by `responseType`:

| responseType | Fields |
|--------------|--------|
| `recipe` | `dishName`, `ingredients[{name, amount}]`, `instructions[]`, `calories` |
| `ingredientSuggestion` | `heading`, `suggestions[{dishName, description}]` |
| `greeting` | `text` |
| `clarification` | `text` |
| `error` | `error` |

Failures (400, 405, 500) use the `error` shape too.
"""


def create_app(
    app_settings: Settings | None = None,
    recipe_handler: RecipeRequestHandler | None = None,
) -> FastAPI:
    app_settings = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logging.basicConfig(
            level=getattr(logging, app_settings.log_level.upper(), logging.INFO),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
        logger.info("BurmaFoodie API starting up (model=%s)", app_settings.claude_model)
        if not app_settings.anthropic_api_key:
            logger.warning("ANTHROPIC_API_KEY is not set; recipe requests will fail")
        yield
        logger.info("BurmaFoodie API shutting down")

    app = FastAPI(
        title="BurmaFoodie API",
        description=API_DESCRIPTION,
        version=VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {"name": "health", "description": "Server state"},
            {"name": "recipe", "description": "Recipe chat with BurmaFoodie AI"},
        ],
    )

    app.state.settings = app_settings
    app.state.recipe_handler = recipe_handler or RecipeRequestHandler(app_settings)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(app_settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if app_settings.prometheus_enabled:
        from burmafoodie.middleware.metrics import setup_metrics

        setup_metrics(app)

    app.include_router(health.router, prefix="/api/v1", tags=["health"])
    app.include_router(recipe.router, prefix="/api/v1", tags=["recipe"])

    return app


app = create_app()
