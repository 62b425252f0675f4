import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.openapi.docs import get_redoc_html, get_swagger_ui_html
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse

from caderninho.core.settings import settings
from caderninho.auth.jwt import require_auth
from caderninho.db import init_db

from caderninho.api.auth import router as auth_router
from caderninho.api.users import router as users_router
from caderninho.api.cards import router as cards_router
from caderninho.api.establishments import router as establishments_router
from caderninho.api.expenses import router as expenses_router
from caderninho.api.installments import router as installments_router
from caderninho.api.monthly_entries import router as monthly_entries_router
from caderninho.api.monthly_spending_limits import router as monthly_spending_limits_router
from caderninho.api.monthly_statement import router as monthly_statement_router

VERSION = "1.0.0"

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

DOCS_PROTECTED = settings.AUTH_ENABLED and (settings.ENV == "prod" or settings.AUTH_PROTECT_DOCS)

DOC_DEPS = [Depends(require_auth)] if DOCS_PROTECTED else []
PROTECTED_DEPS = [Depends(require_auth)] if settings.AUTH_ENABLED else []


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("%s iniciada (env=%s, auth=%s)", settings.APP_NAME, settings.ENV, settings.AUTH_ENABLED)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=VERSION,
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
    lifespan=lifespan,
)

# Auth router sempre exposto (login precisa existir)
app.include_router(auth_router)

# Routers protegidos quando AUTH_ENABLED=true
app.include_router(users_router, dependencies=PROTECTED_DEPS)
app.include_router(cards_router, dependencies=PROTECTED_DEPS)
app.include_router(establishments_router, dependencies=PROTECTED_DEPS)
app.include_router(expenses_router, dependencies=PROTECTED_DEPS)
app.include_router(installments_router, dependencies=PROTECTED_DEPS)
app.include_router(monthly_entries_router, dependencies=PROTECTED_DEPS)
app.include_router(monthly_spending_limits_router, dependencies=PROTECTED_DEPS)
app.include_router(monthly_statement_router, dependencies=PROTECTED_DEPS)


@app.get("/health")
def health():
    return {
        "ok": True,
        "service": "caderninho",
        "env": settings.ENV,
        "version": VERSION,
        "auth_enabled": settings.AUTH_ENABLED,
        "docs_protected": DOCS_PROTECTED,
    }


# Docs/OpenAPI: sempre existem; quando DOCS_PROTECTED=true exigem JWT
@app.get("/openapi.json", include_in_schema=False, dependencies=DOC_DEPS)
def openapi_json():
    schema = get_openapi(title=app.title, version=app.version, routes=app.routes)
    return JSONResponse(schema)


@app.get("/docs", include_in_schema=False, dependencies=DOC_DEPS)
def swagger_docs():
    return get_swagger_ui_html(openapi_url="/openapi.json", title=f"{app.title} - Docs")


@app.get("/redoc", include_in_schema=False, dependencies=DOC_DEPS)
def redoc_docs():
    return get_redoc_html(openapi_url="/openapi.json", title=f"{app.title} - ReDoc")
