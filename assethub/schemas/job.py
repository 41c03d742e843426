from pydantic import BaseModel


class JobResultResponse(BaseModel):
    bucket: str
    key: str
    exit_code: int
    duration_seconds: float


class TaskStatusResponse(BaseModel):
    task_id: str
    status: str
