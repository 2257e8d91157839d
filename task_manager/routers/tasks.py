from datetime import datetime
from typing import Callable, Optional
from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.orm import Session

from ..core.auth import CurrentUser, get_current_user
from ..core.config import get_settings
from ..core.database import get_db
from ..core.security import utc_now
from ..schemas.task import TaskCreate, TaskList, TaskResponse, TaskUpdate
from ..schemas.common import MAX_DB_ID
from ..services import tasks as task_service
from ..services.filters import TaskFilter

router = APIRouter()
settings = get_settings()


def get_clock() -> Callable[[], datetime]:
    """Clock used to stamp new tasks"""
    return utc_now


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    current_user: CurrentUser = Depends(get_current_user),
    clock: Callable[[], datetime] = Depends(get_clock),
    db: Session = Depends(get_db)
):
    """Create a new task"""
    task = task_service.create_task(
        db,
        current_user,
        title=task_data.title,
        status_id=task_data.status_id,
        description=task_data.description,
        assignee_id=task_data.assignee_id,
        label_ids=task_data.label_ids,
        index=task_data.index,
        clock=clock,
    )
    return TaskResponse.model_validate(task)


@router.get("", response_model=TaskList)
def get_tasks(
    skip: int = Query(0, ge=0, description="Number of tasks to skip"),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Number of tasks to return"),
    assignee_id: Optional[int] = Query(None, ge=1, le=MAX_DB_ID, description="Filter by assignee"),
    status_id: Optional[int] = Query(None, ge=1, le=MAX_DB_ID, description="Filter by status ID"),
    status_slug: Optional[str] = Query(None, alias="status", description="Filter by status slug"),
    label_id: Optional[int] = Query(None, ge=1, le=MAX_DB_ID, description="Filter by label"),
    title_cont: Optional[str] = Query(None, max_length=200, description="Case-insensitive title substring"),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get tasks with filtering and pagination"""
    task_filter = TaskFilter(
        assignee_id=assignee_id,
        status_id=status_id,
        status_slug=status_slug,
        label_id=label_id,
        title_cont=title_cont,
    )
    tasks, total = task_service.list_tasks(db, task_filter, skip=skip, limit=limit)

    return TaskList(
        tasks=[TaskResponse.model_validate(task) for task in tasks],
        total=total,
        skip=skip,
        limit=limit,
        has_next=(skip + limit) < total,
    )


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int = Path(..., ge=1, le=MAX_DB_ID),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a specific task by ID"""
    return TaskResponse.model_validate(task_service.get_task(db, task_id))


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_update: TaskUpdate,
    task_id: int = Path(..., ge=1, le=MAX_DB_ID),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update a task with the fields present in the request body"""
    task = task_service.update_task(db, current_user, task_id, task_update.model_dump(exclude_unset=True))
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int = Path(..., ge=1, le=MAX_DB_ID),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a task"""
    task_service.delete_task(db, current_user, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
