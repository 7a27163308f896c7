"""
UserHub Backend - User Route Handlers
======================================

What:  The five /users endpoints.
How:   Each handler takes a UserService (bound to the request's session),
       makes exactly one service call and returns its result. Errors are
       raised as application exceptions and rendered by the global handlers.

    GET    /users        → 200 [User]
    GET    /users/{id}   → 200 User    | 404
    POST   /users        → 201 User    | 400
    PUT    /users/{id}   → 200 User    | 404 | 400   (PATCH is an alias)
    DELETE /users/{id}   → 204         | 404

Create and update bodies may be JSON or an HTML form
(application/x-www-form-urlencoded or multipart/form-data). Both are read
into the same field mapping and validated by the same pydantic models, so a
form's "41" for age is cast exactly like JSON's 41.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import ValidationError as PydanticValidationError

from userhub.exceptions import ValidationError
from userhub.schemas.user import (
    ErrorResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
    describe_validation_errors,
)
from userhub.services.user_service import UserService, get_user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def _request_body_doc(model) -> Dict[str, Any]:
    """OpenAPI requestBody for handlers that read the body themselves."""
    schema = model.model_json_schema()
    content_types = ("application/json",) + FORM_CONTENT_TYPES
    return {"requestBody": {"content": {ct: {"schema": schema} for ct in content_types}}}


async def read_user_fields(request: Request) -> Dict[str, Any]:
    """
    FastAPI dependency: the request body as a plain field mapping.

    Form bodies keep their text values (file parts are ignored); anything
    else is parsed as JSON and must be an object. An empty body is an empty
    mapping.

    Raises:
        ValidationError: Body is not valid JSON, or not a JSON object (→ 400)
    """
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(FORM_CONTENT_TYPES):
        async with request.form() as form:
            return {key: value for key, value in form.items() if isinstance(value, str)}

    if not await request.body():
        return {}
    try:
        data = await request.json()
    except ValueError:
        raise ValidationError(message="Request body is not valid JSON")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError(message="Request body must be a JSON object")
    return data


@router.get(
    "",
    response_model=List[UserResponse],
    responses={500: {"description": "Storage error", "model": ErrorResponse}},
    summary="List all users",
)
async def list_users(
    service: UserService = Depends(get_user_service),
) -> List[UserResponse]:
    return await service.list_users()


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    responses={
        404: {"description": "User not found", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Get a single user by ID",
)
async def get_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return await service.get_user(user_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=UserResponse,
    responses={400: {"description": "Missing or invalid field", "model": ErrorResponse}},
    summary="Create a user",
    description="Requires name, age and email. Email must be unique.",
    openapi_extra=_request_body_doc(UserCreate),
)
async def create_user(
    fields: Dict[str, Any] = Depends(read_user_fields),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    try:
        payload = UserCreate.model_validate(fields)
    except PydanticValidationError as e:
        raise ValidationError(message=describe_validation_errors(e.errors()))
    return await service.create_user(payload)


_UPDATE_ROUTE = dict(
    response_model=UserResponse,
    responses={
        400: {"description": "Invalid field", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
    },
    description=(
        "Only the fields present in the body are changed. "
        "Unknown ids return 404 before the body is validated."
    ),
    openapi_extra=_request_body_doc(UserUpdate),
)


@router.patch("/{user_id}", summary="Partially update a user (PATCH)", **_UPDATE_ROUTE)
@router.put("/{user_id}", summary="Partially update a user", **_UPDATE_ROUTE)
async def update_user(
    user_id: str,
    # Raw mapping: validation happens in the service, after the id lookup
    fields: Dict[str, Any] = Depends(read_user_fields),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return await service.update_user(user_id, fields)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
    summary="Delete a user",
)
async def delete_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
) -> Response:
    await service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
