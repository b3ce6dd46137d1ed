# Lab workflow services

from .repository import LabRepository
from .workflow import LabWorkflow
from .trace import LabQueryService
from .context import LabContext, create_lab_context

__all__ = [
    "LabRepository",
    "LabWorkflow",
    "LabQueryService",
    "LabContext",
    "create_lab_context",
]
