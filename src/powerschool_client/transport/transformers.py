"""Response transform pipeline.

Every response body runs through :func:`parse_json_body` first, then
through any caller-supplied transformers in the order given. Each stage
receives the previous stage's output.
"""

import json
import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

logger = logging.getLogger(__name__)

ResponseTransformer = Callable[[Any], Any]


def parse_json_body(body: Any) -> Any:
    """Parse a string body as JSON; pass anything else through.

    Empty or non-JSON strings are returned unchanged.
    """
    if not isinstance(body, str):
        return body
    if not body.strip():
        return body
    try:
        return json.loads(body)
    except ValueError:
        logger.debug("Response body is not JSON, passing it through as text")
        return body


def build_pipeline(transformers: Iterable[ResponseTransformer] | None = None) -> tuple[ResponseTransformer, ...]:
    """Prefix the caller's transformers with the mandatory JSON stage."""
    return (parse_json_body, *(transformers or ()))


def apply_pipeline(body: Any, pipeline: Sequence[ResponseTransformer]) -> Any:
    for transform in pipeline:
        body = transform(body)
    return body
