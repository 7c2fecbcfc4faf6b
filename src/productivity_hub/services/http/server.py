from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ...api import api_state, call_api, get_api_functions
from ...bootstrap import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(_: FastAPI) -> AsyncIterator[None]:
    yield
    api_state.shutdown()


app = FastAPI(title="Productivity Hub Local API", version="0.1.0", lifespan=_lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ApiCallRequest(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


@app.get("/api/functions")
async def list_api_functions() -> JSONResponse:
    return JSONResponse({"functions": [func.describe() for func in get_api_functions()]})


@app.post("/api/functions/{function_name}")
def invoke_api_function(function_name: str, request: ApiCallRequest) -> JSONResponse:
    try:
        result = call_api(function_name, **request.arguments)
    except KeyError as exc:
        logger.warning("API function not found: %s", function_name)
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except (TypeError, ValueError) as exc:
        logger.exception("API function %s failed", function_name)
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    logger.debug("API function %s executed successfully", function_name)
    return JSONResponse({"name": function_name, "result": result})


@app.get("/api/maps-key")
def maps_key() -> Dict[str, str]:
    """Server-held Maps embed key; empty when not configured."""

    return {"apiKey": api_state.context.settings.maps.api_key or ""}


def run_local_server(host: str = "127.0.0.1", port: int = 8000) -> None:
    import asyncio

    from hypercorn.asyncio import serve
    from hypercorn.config import Config

    configure_logging()
    config = Config()
    config.bind = [f"{host}:{port}"]
    logger.info("Serving Productivity Hub API on %s:%s", host, port)
    asyncio.run(serve(app, config))
