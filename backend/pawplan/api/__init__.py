"""API routers."""

from pawplan.api import pets, realtime, training_plans

__all__ = [
    "pets",
    "realtime",
    "training_plans",
]
