from typing import List
from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.orm import Session

from ..core.auth import CurrentUser, get_current_user
from ..core.database import get_db
from ..schemas.common import MAX_DB_ID
from ..schemas.task_status import TaskStatusCreate, TaskStatusResponse, TaskStatusUpdate
from ..services import task_statuses as status_service

router = APIRouter()


@router.get("", response_model=List[TaskStatusResponse])
def list_task_statuses(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return status_service.list_task_statuses(db)


@router.get("/{status_id}", response_model=TaskStatusResponse)
def get_task_status(
    status_id: int = Path(..., ge=1, le=MAX_DB_ID),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return status_service.get_task_status(db, status_id)


@router.post("", response_model=TaskStatusResponse, status_code=status.HTTP_201_CREATED)
def create_task_status(
    status_in: TaskStatusCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return status_service.create_task_status(db, current_user, status_in.name, status_in.slug)


@router.put("/{status_id}", response_model=TaskStatusResponse)
def update_task_status(
    status_in: TaskStatusUpdate,
    status_id: int = Path(..., ge=1, le=MAX_DB_ID),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return status_service.update_task_status(db, current_user, status_id, status_in.name, status_in.slug)


@router.delete("/{status_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task_status(
    status_id: int = Path(..., ge=1, le=MAX_DB_ID),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    status_service.delete_task_status(db, current_user, status_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
