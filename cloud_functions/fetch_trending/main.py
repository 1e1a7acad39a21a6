"""
Google Cloud Function for storing the current trending GIFs.
Triggered on a schedule; the trigger payload is ignored.
"""

import json
from typing import Any, Dict

from gif_pipeline.handlers import fetch_trending as run_fetcher


def fetch_trending(event: Any = None, context: Any = None) -> Dict[str, Any]:
    """
    Cloud Function entry point for the trending GIF fetch.

    Returns:
        ``{statusCode, body}`` envelope with the per-GIF results
    """
    return run_fetcher(event, context)


# HTTP entry point for direct invocation
def fetch_trending_http(request):
    """
    HTTP entry point for direct Cloud Function invocation.

    Returns:
        Decoded response body and status code
    """
    envelope = run_fetcher(request.get_json(silent=True))
    return json.loads(envelope["body"]), envelope["statusCode"]
