# interfaces/api.py
import logging
from functools import lru_cache
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from application.use_cases import TaskUseCases
from config import get_settings
from infrastructure.database import Database
from schemas.task import MessageResponse, TaskCreate, TaskResponse, TaskUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])

NOT_FOUND = {404: {"model": MessageResponse, "description": "Task not found"}}


@lru_cache()
def get_task_use_cases() -> TaskUseCases:
    settings = get_settings()
    logger.info(f"Opening task database at {settings.database_path}")
    return TaskUseCases(Database(settings.database_path, timeout=settings.database_timeout))


def parse_status_filter(value: Optional[str]) -> Optional[bool]:
    """Only the literal string "true" selects completed tasks; any other value selects open ones."""
    if value is None:
        return None
    return value == "true"


@router.get("", response_model=List[TaskResponse], summary="List all tasks")
def get_all_tasks(
    status_filter: Optional[str] = Query(
        None, alias="status", description="Filter tasks by status (true or false)"
    ),
    use_cases: TaskUseCases = Depends(get_task_use_cases),
):
    tasks = use_cases.get_all_tasks(parse_status_filter(status_filter))
    return [TaskResponse.from_task(task) for task in tasks]


@router.get("/{task_id}", response_model=TaskResponse, responses=NOT_FOUND, summary="Get a task by id")
def get_task(task_id: int, use_cases: TaskUseCases = Depends(get_task_use_cases)):
    return TaskResponse.from_task(use_cases.get_task(task_id))


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Validation error"}},
    summary="Create a task",
)
def create_task(task: TaskCreate, use_cases: TaskUseCases = Depends(get_task_use_cases)):
    created_task = use_cases.create_task(task.title, task.description, task.status)
    return TaskResponse.from_task(created_task)


@router.put("/{task_id}", response_model=TaskResponse, responses=NOT_FOUND, summary="Update an existing task")
def update_task(task_id: int, task: TaskUpdate, use_cases: TaskUseCases = Depends(get_task_use_cases)):
    updated_task = use_cases.update_task(task_id, task.model_dump(exclude_unset=True))
    return TaskResponse.from_task(updated_task)


@router.delete("/{task_id}", response_model=MessageResponse, responses=NOT_FOUND, summary="Delete a task")
def delete_task(task_id: int, use_cases: TaskUseCases = Depends(get_task_use_cases)):
    use_cases.delete_task(task_id)
    return {"message": "Task deleted successfully"}
