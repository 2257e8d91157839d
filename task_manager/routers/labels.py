from typing import List
from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.orm import Session

from ..core.auth import CurrentUser, get_current_user
from ..core.database import get_db
from ..schemas.common import MAX_DB_ID
from ..schemas.label import LabelCreate, LabelResponse, LabelUpdate
from ..services import labels as label_service

router = APIRouter()


@router.get("", response_model=List[LabelResponse])
def list_labels(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return label_service.list_labels(db)


@router.get("/{label_id}", response_model=LabelResponse)
def get_label(
    label_id: int = Path(..., ge=1, le=MAX_DB_ID),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return label_service.get_label(db, label_id)


@router.post("", response_model=LabelResponse, status_code=status.HTTP_201_CREATED)
def create_label(
    label_in: LabelCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return label_service.create_label(db, current_user, label_in.name)


@router.put("/{label_id}", response_model=LabelResponse)
def update_label(
    label_in: LabelUpdate,
    label_id: int = Path(..., ge=1, le=MAX_DB_ID),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return label_service.update_label(db, current_user, label_id, label_in.name)


@router.delete("/{label_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_label(
    label_id: int = Path(..., ge=1, le=MAX_DB_ID),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    label_service.delete_label(db, current_user, label_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
