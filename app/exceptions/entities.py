"""Entity-specific exceptions."""

from .base import BaseAppException


class ProjectNotFoundError(BaseAppException):
    """Raised when a project is not found."""

    def __init__(self, message: str = "Project not found"):
        super().__init__(message=message, status_code=404, error_code="PROJECT_NOT_FOUND")


class LabelNotFoundError(BaseAppException):
    """Raised when a label is not found."""

    def __init__(self, message: str = "Label not found"):
        super().__init__(message=message, status_code=404, error_code="LABEL_NOT_FOUND")


class TaskNotFoundError(BaseAppException):
    """Raised when a task is not found."""

    def __init__(self, message: str = "Task not found"):
        super().__init__(message=message, status_code=404, error_code="TASK_NOT_FOUND")


class SubtaskNotFoundError(BaseAppException):
    """Raised when a subtask is not found."""

    def __init__(self, message: str = "Subtask not found"):
        super().__init__(message=message, status_code=404, error_code="SUBTASK_NOT_FOUND")


class CommentNotFoundError(BaseAppException):
    """Raised when a comment is not found."""

    def __init__(self, message: str = "Comment not found"):
        super().__init__(message=message, status_code=404, error_code="COMMENT_NOT_FOUND")


class InvalidLabelProjectError(BaseAppException):
    """Raised when a label references a project that does not exist."""

    def __init__(self, message: str = "Project not found"):
        super().__init__(message=message, status_code=400, error_code="INVALID_LABEL_PROJECT")
