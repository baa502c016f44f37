"""Request body parsing shared by the message and user routers."""

from logging import getLogger
from typing import Optional, TypeVar
from fastapi import Request
from pydantic import BaseModel, ValidationError

logger = getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


async def read_body(request: Request, model: type[ModelT]) -> Optional[ModelT]:
    """
    Parse the JSON body into `model`.

    Returns None when the body is not JSON or does not validate. Routes answer
    that with a plain-text 400 instead of FastAPI's JSON validation error.
    """
    try:
        payload = await request.json()
    except ValueError:
        logger.info(f"[BODY] Non-JSON body on {request.url.path}")
        return None
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        logger.info(f"[BODY] Rejected body on {request.url.path}: {e.error_count()} error(s)")
        return None
