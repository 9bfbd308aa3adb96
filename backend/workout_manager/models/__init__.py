from .user import User
from .training import Exercise, Training, PULL_UP, PUSH_UP

__all__ = ["User", "Exercise", "Training", "PULL_UP", "PUSH_UP"]
