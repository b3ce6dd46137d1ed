"""
Repository store for the lab workflow tracker

Holds every entity keyed by id and hands out ids. Ids come from one counter
per entity kind owned by the repository, start at 1 and are never reused,
even when the operation that drew them fails.
"""

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import DatabaseException, LISException
from ..models import Patient, LabTest, TestOrder, TestOrderItem, Sample, TestResult, Invoice

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Kinds stored and listed directly; order items live under their order
TOP_LEVEL_KINDS = (Patient, LabTest, TestOrder, Sample, TestResult, Invoice)
ID_KINDS = TOP_LEVEL_KINDS + (TestOrderItem,)


class LabRepository:
    """In-memory store of lab workflow entities"""
    
    def __init__(self, session: Session):
        self.session = session
        self._counters: Dict[type, int] = {kind: 0 for kind in ID_KINDS}
    
    def next_id(self, kind: Type) -> int:
        """Allocate the next identifier for an entity kind"""
        if kind not in self._counters:
            raise DatabaseException(f"No id counter for {kind.__name__}")
        self._counters[kind] += 1
        return self._counters[kind]
    
    def put(self, entity) -> None:
        """Store a top-level entity"""
        kind = type(entity)
        self._check_top_level(kind)
        if entity.id is None:
            raise DatabaseException(f"{kind.__name__} has no id; allocate one with next_id()")
        
        self.session.add(entity)
        try:
            self.session.flush()
        except SQLAlchemyError as e:
            raise DatabaseException(f"Failed to store {kind.__name__} {entity.id}: {str(e)}")
        
        logger.debug(f"Stored {entity!r}")
    
    def get(self, kind: Type[T], entity_id: int) -> Optional[T]:
        """Look up a top-level entity by id"""
        self._check_top_level(kind)
        return self.session.get(kind, entity_id)
    
    def all_of(self, kind: Type[T]) -> List[T]:
        """All stored entities of a kind, in insertion order"""
        self._check_top_level(kind)
        return list(self.session.scalars(select(kind).order_by(kind.id)))
    
    def invoices_for_order(self, order_id: int) -> List[Invoice]:
        """Invoices issued for an order"""
        query = select(Invoice).where(Invoice.order_id == order_id).order_by(Invoice.id)
        return list(self.session.scalars(query))
    
    def count(self, kind: Type) -> int:
        """Number of stored entities of a kind"""
        return len(self.all_of(kind))
    
    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Run one workflow operation as a unit.
        
        Commits when the block finishes, rolls back when it raises. LIS
        exceptions pass through; database failures are reported as a
        DatabaseException.
        """
        try:
            yield self.session
            self.session.commit()
        except LISException:
            self.session.rollback()
            raise
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Transaction rolled back: {str(e)}")
            raise DatabaseException(f"Database error: {str(e)}")
        except Exception:
            self.session.rollback()
            raise
    
    def close(self):
        self.session.close()
    
    @staticmethod
    def _check_top_level(kind: Type):
        if kind not in TOP_LEVEL_KINDS:
            raise DatabaseException(f"{kind.__name__} is not stored at top level")
