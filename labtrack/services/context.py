"""
Wiring of the store, workflow engine and query layer
"""

import logging
from dataclasses import dataclass

from ..core.database import create_database_engine, create_session_factory, create_tables
from .repository import LabRepository
from .trace import LabQueryService
from .workflow import LabWorkflow

logger = logging.getLogger(__name__)


@dataclass
class LabContext:
    """One lab workflow session: a fresh store and the services over it"""
    repository: LabRepository
    workflow: LabWorkflow
    queries: LabQueryService
    
    def close(self):
        self.repository.close()


def create_lab_context(database_url: str = None, echo: bool = None) -> LabContext:
    """Create an empty in-memory store and the services bound to it"""
    engine = create_database_engine(database_url, echo)
    create_tables(engine)
    
    session = create_session_factory(engine)()
    repository = LabRepository(session)
    
    logger.info("Lab workflow store initialized")
    return LabContext(
        repository=repository,
        workflow=LabWorkflow(repository),
        queries=LabQueryService(repository)
    )
