"""WanderAI travel planner backend."""

__version__ = "1.0.0"
