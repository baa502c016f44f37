"""
Users API Router - account lifecycle endpoints.

Every success body is the safe projection {"username", "dateJoined"}.
Invalid bodies get a plain-text 400; service errors get {"error": ...} with a
status chosen per endpoint.
"""

from datetime import datetime, timezone
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from dishka.integrations.fastapi import FromDishka, inject
from chatroom.application.common.results import ServiceError, ServiceResult
from chatroom.application.dto.user import CredentialsRequest, SafeUserDTO
from chatroom.application.services.user_service import UserService
from chatroom.domain.entities.user import SafeUser, UserCredentials
from chatroom.presentation.api.body import read_body

INVALID_BODY = "Invalid user body"


def _respond(result: ServiceResult[SafeUser], error_status: int) -> JSONResponse:
    if isinstance(result, ServiceError):
        return JSONResponse(status_code=error_status, content=result.to_dict())
    return JSONResponse(
        status_code=status.HTTP_200_OK, content=SafeUserDTO.from_entity(result).to_wire()
    )


def _invalid_body() -> PlainTextResponse:
    return PlainTextResponse(INVALID_BODY, status_code=status.HTTP_400_BAD_REQUEST)


# ==================== ROUTER ====================

router = APIRouter(tags=["users"])


# ==================== ENDPOINTS ====================


@router.post("/signup")
@inject
async def signup(request: Request, user_service: FromDishka[UserService]):
    """Create an account. dateJoined is stamped here, not by the client."""
    body = await read_body(request, CredentialsRequest)
    if body is None:
        return _invalid_body()

    result = await user_service.register_user(
        body.username, body.password, datetime.now(timezone.utc)
    )
    return _respond(result, status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.post("/login")
@inject
async def login(request: Request, user_service: FromDishka[UserService]):
    body = await read_body(request, CredentialsRequest)
    if body is None:
        return _invalid_body()

    result = await user_service.login_user(
        UserCredentials(username=body.username, password=body.password)
    )
    return _respond(result, status.HTTP_401_UNAUTHORIZED)


@router.get("/getUser/{username}")
@inject
async def get_user(username: str, user_service: FromDishka[UserService]):
    result = await user_service.get_user_by_username(username)
    return _respond(result, status.HTTP_404_NOT_FOUND)


@router.delete("/deleteUser/{username}")
@inject
async def delete_user(username: str, user_service: FromDishka[UserService]):
    """Delete permanently and return the removed account's safe projection."""
    result = await user_service.delete_user_by_username(username)
    return _respond(result, status.HTTP_404_NOT_FOUND)


@router.patch("/resetPassword")
@inject
async def reset_password(request: Request, user_service: FromDishka[UserService]):
    """
    Replace a user's password.

    Request: {"username": "alice", "password": "<new password>"}
    """
    body = await read_body(request, CredentialsRequest)
    if body is None:
        return _invalid_body()

    result = await user_service.reset_password(body.username, body.password)
    return _respond(result, status.HTTP_404_NOT_FOUND)
