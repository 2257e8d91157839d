from typing import List
from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.orm import Session

from ..core.auth import CurrentUser, get_current_user
from ..core.database import get_db
from ..schemas.common import MAX_DB_ID
from ..schemas.user import UserCreate, UserOut, UserUpdate
from ..services import users as user_service

router = APIRouter()


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(user_in: UserCreate, db: Session = Depends(get_db)):
    return user_service.create_user(
        db,
        first_name=user_in.first_name,
        last_name=user_in.last_name,
        email=user_in.email,
        password=user_in.password,
    )


@router.get("", response_model=List[UserOut])
def list_users(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return user_service.list_users(db)


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: int = Path(..., ge=1, le=MAX_DB_ID),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return user_service.get_user(db, user_id)


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_update: UserUpdate,
    user_id: int = Path(..., ge=1, le=MAX_DB_ID),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return user_service.update_user(db, current_user, user_id, user_update.model_dump(exclude_unset=True))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int = Path(..., ge=1, le=MAX_DB_ID),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    user_service.delete_user(db, current_user, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
