"""
Google Cloud Function for generating thumbnails from stored originals.
Triggered once per object finalized in the bucket.
"""

import json
from typing import Any, Dict, List, Union

from gif_pipeline.core.logging import logger
from gif_pipeline.handlers import generate_thumbnails as run_thumbnailer


def generate_thumbnails(event: Dict[str, Any], context: Any = None) -> Union[List[Any], Dict[str, Any]]:
    """
    Cloud Function entry point for thumbnail generation.

    Args:
        event: Storage notification, a single object or a ``Records`` batch
        context: Cloud Function context (optional)

    Returns:
        One outcome per notified object, or an error envelope
    """
    return run_thumbnailer(event, context)


# HTTP entry point for direct invocation
def generate_thumbnails_http(request):
    """
    HTTP entry point for direct Cloud Function invocation.

    Args:
        request: HTTP request object

    Returns:
        HTTP response with processing results
    """
    request_json = request.get_json(silent=True)

    if not request_json:
        return {"error": "No JSON data in request"}, 400

    result = run_thumbnailer(request_json)
    if isinstance(result, dict):
        logger.error("Thumbnail generation failed for HTTP request")
        return json.loads(result["body"]), result["statusCode"]

    return {"results": result}, 200
