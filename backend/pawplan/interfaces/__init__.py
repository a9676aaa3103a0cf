"""Abstract interfaces for infrastructure abstraction."""

from pawplan.interfaces.auth_provider import IAuthProvider, User
from pawplan.interfaces.pet_repository import IPetRepository
from pawplan.interfaces.training_task_repository import ITrainingTaskRepository

__all__ = [
    "IAuthProvider",
    "IPetRepository",
    "ITrainingTaskRepository",
    "User",
]
