class TaskMasterError(Exception):
    """Base exception for task master domain errors."""

    pass


class TaskNotFoundError(TaskMasterError):
    """Raised when a named task is not in the store."""

    def __init__(self, name: str):
        super().__init__(f'Task "{name}" does not exist')
        self.name = name


class TaskExistsError(TaskMasterError):
    """Raised when creating a task whose name is already taken."""

    def __init__(self, name: str):
        super().__init__(f'Task "{name}" already exists')
        self.name = name


class NoTaskSelectedError(TaskMasterError):
    """Raised when the selector is cancelled or has nothing to offer."""

    def __init__(self, action: str):
        super().__init__(f"No task selected to {action}")
        self.action = action


class NoTaskNameError(TaskMasterError):
    """Raised when a new task is requested without a name."""

    def __init__(self):
        super().__init__("No task name provided")


class InvalidTaskNameError(TaskMasterError):
    """Raised for names that would escape the scripts directory."""

    pass


class ProcessError(TaskMasterError):
    """Raised when an external program is missing or fails."""

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode


class GitError(TaskMasterError):
    """Base exception for quick git failures."""

    pass


class CurrentBranchError(GitError):
    """Raised when `git branch` output has no current branch marker."""

    def __init__(self):
        super().__init__("Could not find current branch")


class ProtectedBranchError(GitError):
    """Raised when asked to delete main or master."""

    def __init__(self, branch: str):
        super().__init__("Cannot delete main branches")
        self.branch = branch
