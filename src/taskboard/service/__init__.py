from .outcomes import ErrorKind, Failure, Outcome, Success
from .tasks import TaskService

__all__ = ["ErrorKind", "Failure", "Outcome", "Success", "TaskService"]
