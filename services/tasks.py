"""Task store service: owns task persistence behind a small CRUD interface.

Functions (TaskStore methods):
- create(data) -> Task (id assigned here, status defaults to "pending")
- list() -> List[Task]
- get(task_id) -> Optional[Task]
- update(task_id, data) -> Optional[Task] (only non-empty fields overwrite)
- delete(task_id) -> bool
"""
from __future__ import annotations
import threading
from contextlib import contextmanager
from typing import Iterator, List, Optional
from sqlalchemy.orm import Session, sessionmaker
from models.task import Task
from schemas.task import TaskCreate, TaskUpdate

DEFAULT_STATUS = "pending"


class TaskStore:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory
        # Serializes writers; SQLite would otherwise surface "database is locked"
        self._lock = threading.Lock()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    def create(self, data: TaskCreate) -> Task:
        task = Task(
            title=data.title,
            description=data.description,
            status=data.status or DEFAULT_STATUS,
        )
        with self._lock, self._session() as db:
            db.add(task)
            db.commit()
            db.refresh(task)
        return task

    def list(self) -> List[Task]:
        with self._session() as db:
            return db.query(Task).order_by(Task.id.asc()).all()

    def get(self, task_id: int) -> Optional[Task]:
        with self._session() as db:
            return db.get(Task, task_id)

    def update(self, task_id: int, data: TaskUpdate) -> Optional[Task]:
        with self._lock, self._session() as db:
            task = db.get(Task, task_id)
            if task is None:
                return None
            if data.title:
                task.title = data.title
            if data.description:
                task.description = data.description
            if data.status:
                task.status = data.status
            db.commit()
            db.refresh(task)
            return task

    def delete(self, task_id: int) -> bool:
        with self._lock, self._session() as db:
            task = db.get(Task, task_id)
            if task is None:
                return False
            db.delete(task)
            db.commit()
            return True
