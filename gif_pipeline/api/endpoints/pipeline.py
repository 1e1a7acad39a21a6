"""
Endpoints for triggering the pipeline stages over HTTP.
"""

import json
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from gif_pipeline.dependencies import PipelineDependencies, get_dependencies
from gif_pipeline.handlers import fetch_trending_async, generate_thumbnails_async

router = APIRouter()


@router.post("/fetch")
async def fetch_trending(
    dependencies: PipelineDependencies = Depends(get_dependencies),
) -> JSONResponse:
    """
    Store the current trending GIFs.
    Responds with the envelope's status code and decoded body.
    """
    envelope = await fetch_trending_async(dependencies=dependencies)
    return JSONResponse(status_code=envelope["statusCode"], content=_decode_body(envelope))


@router.post("/thumbnails")
async def generate_thumbnails(
    event: Optional[Dict[str, Any]] = Body(default=None),
    dependencies: PipelineDependencies = Depends(get_dependencies),
) -> JSONResponse:
    """
    Create thumbnails for the originals named in a storage event.
    """
    result = await generate_thumbnails_async(event, dependencies=dependencies)
    if isinstance(result, dict):
        return JSONResponse(status_code=result["statusCode"], content=_decode_body(result))
    return JSONResponse(status_code=200, content=result)


def _decode_body(envelope: Dict[str, Any]) -> Any:
    return json.loads(envelope["body"])
