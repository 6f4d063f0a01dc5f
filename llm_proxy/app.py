# ============================================================
# LLM Proxy FastAPI App
# ------------------------------------------------------------
# This app wires everything together:
#   - Immutable settings read once at start-up
#   - Endpoint policies (generate/endpoints.yaml)
#   - One upstream call per request via http, openai or echo clients
# ============================================================

import logging
import secrets
import time
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, FastAPI, File, Query, Request, UploadFile
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# --- Local imports ---
from llm_proxy import __version__
from llm_proxy.errors import InternalError, ProxyError, Unauthorized
from llm_proxy.settings import Settings, settings
from llm_proxy.generate import CompletionGenerator, GenerationResult
from llm_proxy.generate.clients import build_model_client

logger = logging.getLogger(__name__)

router = APIRouter()

# ------------------------------------------------------------
# 🔧 Dependencies
# ------------------------------------------------------------
def get_generator(request: Request) -> CompletionGenerator:
    return request.app.state.generator


def require_secret(request: Request) -> None:
    cfg: Settings = request.app.state.settings
    if not cfg.PROXY_SECRET:
        return
    provided = request.headers.get(cfg.PROXY_SECRET_HEADER) or ""
    if not secrets.compare_digest(provided.encode(), cfg.PROXY_SECRET.encode()):
        raise Unauthorized("Unauthorized")


def _reply(gen: CompletionGenerator, endpoint: str, result: GenerationResult) -> Any:
    """Structured results go out as-is; text results under the policy's response key."""
    if result.is_structured:
        return JSONResponse(content=result.value())
    key = gen.policy(endpoint).response_key or "text"
    return {key: result.value()}

# ------------------------------------------------------------
# 💬 Generation routes
# ------------------------------------------------------------
@router.post("/chat", dependencies=[Depends(require_secret)])
def chat(
    body: Optional[Dict[str, Any]] = Body(None),
    passthrough: bool = Query(False, description="Return the upstream completion JSON verbatim"),
    gen: CompletionGenerator = Depends(get_generator),
):
    if passthrough:
        return JSONResponse(content=gen.complete_raw("chat", body))
    return _reply(gen, "chat", gen.generate("chat", body))


@router.post("/mcq", dependencies=[Depends(require_secret)])
def mcq(body: Optional[Dict[str, Any]] = Body(None), gen: CompletionGenerator = Depends(get_generator)):
    return _reply(gen, "mcq", gen.generate("mcq", body))


@router.post("/summarize", dependencies=[Depends(require_secret)])
def summarize(body: Optional[Dict[str, Any]] = Body(None), gen: CompletionGenerator = Depends(get_generator)):
    return _reply(gen, "summarize", gen.generate("summarize", body))


@router.post("/video-explainer", dependencies=[Depends(require_secret)])
def video_explainer(body: Optional[Dict[str, Any]] = Body(None), gen: CompletionGenerator = Depends(get_generator)):
    return _reply(gen, "video-explainer", gen.generate("video-explainer", body))


@router.post("/concept-map", dependencies=[Depends(require_secret)])
def concept_map(body: Optional[Dict[str, Any]] = Body(None), gen: CompletionGenerator = Depends(get_generator)):
    return _reply(gen, "concept-map", gen.generate("concept-map", body))

# ------------------------------------------------------------
# 🎙️ Transcription
# ------------------------------------------------------------
@router.post("/voice", dependencies=[Depends(require_secret)])
def voice(file: Optional[UploadFile] = File(None), gen: CompletionGenerator = Depends(get_generator)):
    if file is None:
        return {"transcript": gen.transcribe(None, None)}
    try:
        transcript = gen.transcribe(file.file, file.filename)
    finally:
        file.file.close()
    return {"transcript": transcript}

# ------------------------------------------------------------
# 🧭 Health checks
# ------------------------------------------------------------
@router.get("/health")
def health():
    return {"ok": True, "ts": int(time.time() * 1000)}


@router.get("/")
def hello(request: Request):
    cfg: Settings = request.app.state.settings
    return {"message": f"{cfg.app_name} running.", "env": cfg.ENV, "version": __version__}

# ------------------------------------------------------------
# ⚠️ Error rendering
# ------------------------------------------------------------
async def proxy_error_handler(request: Request, exc: ProxyError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    error = InternalError(str(exc) or exc.__class__.__name__)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request body",
            "details": jsonable_encoder([{"loc": e["loc"], "msg": e["msg"]} for e in exc.errors()]),
        },
    )

# ------------------------------------------------------------
# 🚀 FastAPI init
# ------------------------------------------------------------
def create_app(cfg: Optional[Settings] = None, model_client=None) -> FastAPI:
    cfg = cfg if cfg is not None else settings
    logging.basicConfig(
        level=cfg.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if model_client is None:
        model_client = build_model_client(cfg)
    logger.info(
        "Starting %s (env=%s, client=%s, base_url=%s, default_model=%s)",
        cfg.app_name, cfg.ENV, type(model_client).__name__, cfg.UPSTREAM_BASE_URL, cfg.DEFAULT_MODEL,
    )

    app = FastAPI(title=cfg.app_name, version=__version__)
    app.state.settings = cfg
    app.state.generator = CompletionGenerator(model_client=model_client, cfg=cfg)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ProxyError, proxy_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
    app.include_router(router)
    return app


app = create_app()
