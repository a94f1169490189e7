from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.routes import router as v1_router
from app.core.logging import logger, setup_logging
from app.core.settings import settings
from app.infra.providers.gemini import GeminiClient
from app.infra.session_store import get_active_call_ids

setup_logging()

app = FastAPI(
    title="ABC General Insurance Agent Assist",
    version="0.1.0",
    description="Call simulation with LLM-generated summaries, claims and quotes",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router)


@app.get("/health")
async def health():
    return {"ok": True, "active_calls": len(get_active_call_ids())}


@app.on_event("startup")
async def _create_llm_client():
    # A missing API key raises ConfigurationError here and aborts startup.
    app.state.llm_client = GeminiClient.from_settings(settings)
    logger.info("LLM client ready (model=%s)", settings.llm_model)
