from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status

from shopapi.schemas import UserPayload, UserRead
from shopapi.services.errors import EmailAlreadyRegisteredError, ResourceNotFoundError
from shopapi.services.user_service import UserService

router = APIRouter(prefix="/api/users", tags=["users"])


def _get_user_service(request: Request) -> UserService:
    svc = getattr(getattr(request.app, "state", None), "user_service", None)
    if not svc:
        raise RuntimeError("UserService not configured")
    return svc


@router.get("/health")
def health(request: Request):
    return {"status": "UP", "service": request.app.state.service_name}


@router.get("", response_model=list[UserRead])
def list_users(svc: UserService = Depends(_get_user_service)):
    return [UserRead.from_entity(u) for u in svc.list_users()]


@router.get("/{user_id}", response_model=UserRead)
def get_user(user_id: int, svc: UserService = Depends(_get_user_service)):
    try:
        return UserRead.from_entity(svc.get_user(user_id))
    except ResourceNotFoundError:
        return Response(status_code=status.HTTP_404_NOT_FOUND)


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(payload: UserPayload, svc: UserService = Depends(_get_user_service)):
    try:
        return UserRead.from_entity(svc.create_user(payload.to_entity()))
    except EmailAlreadyRegisteredError:
        return Response(status_code=status.HTTP_409_CONFLICT)


@router.put("/{user_id}", response_model=UserRead)
def update_user(user_id: int, payload: UserPayload, svc: UserService = Depends(_get_user_service)):
    try:
        return UserRead.from_entity(svc.update_user(user_id, payload.to_entity()))
    except ResourceNotFoundError:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    except EmailAlreadyRegisteredError:
        return Response(status_code=status.HTTP_409_CONFLICT)


@router.delete("/{user_id}")
def delete_user(user_id: int, svc: UserService = Depends(_get_user_service)):
    try:
        svc.delete_user(user_id)
    except ResourceNotFoundError:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_200_OK)
