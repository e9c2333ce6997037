from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from giftai.api.routes import router as api_router
from giftai.config import get_settings
from giftai.errors import GiftAIError, InternalError
from giftai.logging import configure_logging, get_logger
from giftai.services.auth.supabase_auth import SupabaseAuthClient
from giftai.services.llm.dspy_client import GiftLLM
from giftai.storage.db import create_db_and_tables

app = FastAPI(title="GiftAI API")
logger = get_logger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GiftAIError)
def handle_gift_error(request: Request, exc: GiftAIError) -> JSONResponse:
    logger.warning(
        "request.failed path=%s status=%s error=%s message=%s",
        request.url.path,
        exc.status_code,
        type(exc).__name__,
        exc.message,
    )
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()) if p != 'body')}: {err.get('msg')}"
        for err in exc.errors()
    )
    logger.info("request.invalid path=%s problems=%s", request.url.path, problems)
    return JSONResponse({"error": f"Invalid request: {problems}"}, status_code=400)


@app.exception_handler(Exception)
def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request.unhandled path=%s error=%s", request.url.path, exc)
    err = InternalError()
    return JSONResponse({"error": err.message}, status_code=err.status_code)


@app.on_event("startup")
def on_startup() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("startup: configuring services env=%s model=%s", settings.env, settings.llm_model_id)
    if not settings.llm_api_key:
        logger.error("startup: model API key missing; gift endpoints will return 500")
    if not settings.auth_configured:
        logger.error("startup: auth provider URL/key missing; auth endpoints will return 500")
    app.state.gift_llm = GiftLLM(settings)
    app.state.auth_client = SupabaseAuthClient(settings)
    create_db_and_tables()


app.include_router(api_router)
