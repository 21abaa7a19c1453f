"""
API v1 routes.

Defines REST endpoints for the user registration API.
Handlers are plain functions: the adapters block on I/O, so FastAPI runs
them in its threadpool.
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status

from src.api.dependencies import get_registration_service, get_user_repository
from src.api.models import ErrorResponse, RegisterRequest, RegisterResponse, UserResponse
from src.domain.exceptions import DUPLICATE_USER_MESSAGE
from src.domain.models import RegistrationInput
from src.domain.ports import UserRepository
from src.domain.registration import UserRegistrationService

router = APIRouter(tags=["v1"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": RegisterResponse, "description": "Registration failed"},
        409: {"model": RegisterResponse, "description": "Email already registered"},
    },
    summary="Register a new user",
    description="Create a user account and send a welcome email.",
)
def register(
    request_data: RegisterRequest,
    response: Response,
    service: UserRegistrationService = Depends(get_registration_service),
) -> RegisterResponse:
    """
    Register a new user.

    - **email**: Email address (unique)
    - **name**: Display name
    - **password**: Password (minimum 6 characters)

    The body always carries the registration result; the status code is
    201 on success, 409 for a duplicate email, 400 for any other failure.
    """
    result = service.register_user(
        RegistrationInput(
            email=request_data.email,
            name=request_data.name,
            password=request_data.password,
        )
    )

    if not result.success:
        if result.error == DUPLICATE_USER_MESSAGE:
            response.status_code = status.HTTP_409_CONFLICT
        else:
            response.status_code = status.HTTP_400_BAD_REQUEST

    return RegisterResponse(success=result.success, user_id=result.user_id, error=result.error)


@router.get(
    "/users",
    response_model=list[UserResponse],
    summary="List users, newest first",
)
def list_users(
    repository: UserRepository = Depends(get_user_repository),
) -> list[UserResponse]:
    return [
        UserResponse(
            id=user.id,
            email=user.email,
            name=user.name,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        for user in repository.get_all_users()
    ]


@router.delete(
    "/users/{email}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
    summary="Delete a user by email",
)
def delete_user(
    email: str,
    repository: UserRepository = Depends(get_user_repository),
) -> Response:
    if not repository.delete_user(email):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
