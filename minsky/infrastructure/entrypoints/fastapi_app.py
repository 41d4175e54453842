"""
FastAPI entry point.

create_app() is the application factory; called without arguments it is the
Composition Root for the server, wiring every adapter from the environment.
Tests pass a pre-built RunAgentUseCase instead.

Run locally:
    uvicorn minsky.infrastructure.entrypoints.fastapi_app:create_app --factory --port 8000
"""

import json
import logging
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from minsky.application.use_cases.run_agent import RunAgentUseCase
from minsky.domain.errors import MinskyError
from minsky.infrastructure.config import Settings
from minsky.infrastructure.entrypoints.composition import build_run_agent_use_case
from minsky.infrastructure.observability.logging import configure_logging

logger = logging.getLogger(__name__)


class QueryRequest(BaseModel):
    prompt: str = Field(min_length=1)
    session_id: Optional[str] = None
    user_id: Optional[str] = None


def create_app(run_use_case: Optional[RunAgentUseCase] = None) -> FastAPI:
    if run_use_case is None:
        load_dotenv()
        settings = Settings.from_env()
        configure_logging(settings.log_level)
        run_use_case = build_run_agent_use_case(settings)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        run_use_case.close()

    app = FastAPI(title="Minsky Research Agent API", lifespan=lifespan)

    @app.post("/query")
    async def query_agent(body: QueryRequest):
        """Stream the agent's turns as Server-Sent Events."""
        if not body.prompt.strip():
            raise HTTPException(status_code=422, detail="prompt must not be blank")

        async def event_stream():
            try:
                async for event in run_use_case.execute(
                    query=body.prompt,
                    user_id=body.user_id,
                    session_id=body.session_id,
                ):
                    yield f"data: {json.dumps(event)}\n\n"
            except MinskyError as exc:
                logger.error("Agent run failed: %s", exc)
                error = {"node": "error", "content": str(exc), "type": "error"}
                yield f"data: {json.dumps(error)}\n\n"
            yield "data: [DONE]\n\n"

        return StreamingResponse(event_stream(), media_type="text/event-stream")

    @app.get("/sessions/{session_id}/messages")
    async def session_messages(session_id: str):
        """Replay every turn stored for a session, status turns included."""
        return {"session_id": session_id, "messages": run_use_case.history(session_id)}

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app
