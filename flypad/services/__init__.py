"""Service-layer components for flypad."""

from .orchestrator import FetchOrchestrator
from .reducer import StateReducer
from .runtime import FlypadRuntime
from .user_store import UserIdStore

__all__ = ["FetchOrchestrator", "FlypadRuntime", "StateReducer", "UserIdStore"]
