import logging
from typing import Any, Dict, List, Optional

from domain.entities import Task
from domain.errors import NotFoundError
from infrastructure.database import Database

logger = logging.getLogger(__name__)


class TaskUseCases:
    def __init__(self, db: Database):
        self.db = db

    def create_task(self, title: str, description: str, status: bool = False) -> Task:
        task = self.db.create_task(Task(title=title, description=description, status=status))
        logger.info(f"Created task {task.id}")
        return task

    def get_task(self, task_id: int) -> Task:
        task = self.db.get_task_by_id(task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task

    def get_all_tasks(self, status: Optional[bool] = None) -> List[Task]:
        return self.db.get_all_tasks(status)

    def update_task(self, task_id: int, changes: Dict[str, Any]) -> Task:
        updated_task = self.db.update_task(task_id, changes)
        if updated_task is None:
            raise NotFoundError(task_id)
        logger.info(f"Updated task {task_id}: {sorted(changes)}")
        return updated_task

    def delete_task(self, task_id: int) -> None:
        if not self.db.delete_task(task_id):
            raise NotFoundError(task_id)
        logger.info(f"Deleted task {task_id}")
