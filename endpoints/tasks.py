from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from schemas.task import TaskCreate, TaskOut, TaskUpdate
from services.tasks import TaskStore
from typing import List
import re

router = APIRouter(prefix="/tasks", tags=["tasks"])

def get_task_store(request: Request) -> TaskStore:
    return request.app.state.task_store

TASK_ID_PATTERN = re.compile(r"-?[0-9]+")
# Ids are stored as signed 64-bit integers
TASK_ID_MIN, TASK_ID_MAX = -(2**63), 2**63 - 1

def _parse_task_id(raw: str) -> int:
    # Parsed by hand so a bad id is a 400 like the other client errors, not a 422
    if TASK_ID_PATTERN.fullmatch(raw):
        task_id = int(raw)
        if TASK_ID_MIN <= task_id <= TASK_ID_MAX:
            return task_id
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid task ID")

@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(payload: TaskCreate, store: TaskStore = Depends(get_task_store)):
    """Create a new task"""
    return store.create(payload)

@router.get("", response_model=List[TaskOut])
def list_tasks(store: TaskStore = Depends(get_task_store)):
    return store.list()

@router.get("/{task_id}", response_model=TaskOut)
def get_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    task = store.get(_parse_task_id(task_id))
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task

@router.put("/{task_id}", response_model=TaskOut)
def update_task(task_id: str, payload: TaskUpdate, store: TaskStore = Depends(get_task_store)):
    """Update an existing task; empty fields are left as they are"""
    task = store.update(_parse_task_id(task_id), payload)
    if task is None:
        raise HTTPException(status_code=404, detail="Task not found")
    return task

@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: str, store: TaskStore = Depends(get_task_store)):
    if not store.delete(_parse_task_id(task_id)):
        raise HTTPException(status_code=404, detail="Task not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
