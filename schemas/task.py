from pydantic import BaseModel, ConfigDict

class TaskBase(BaseModel):
    title: str = ""
    description: str = ""
    status: str = ""  # "pending" or "completed"

class TaskCreate(TaskBase):
    pass

class TaskUpdate(TaskBase):
    """Partial update: empty fields leave the stored value untouched."""

class TaskOut(TaskBase):
    id: int

    model_config = ConfigDict(from_attributes=True)
