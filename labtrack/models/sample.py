"""
Sample model for the lab workflow tracker
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from ..core.database import Base


class Sample(Base):
    """Sample/Specimen collected for a single order item"""
    
    __tablename__ = "samples"
    
    id = Column(Integer, primary_key=True, autoincrement=False)
    
    # At most one sample per order item
    item_id = Column(Integer, ForeignKey("test_order_items.id"), nullable=False, unique=True, index=True)
    
    sample_type = Column(String(50), nullable=False)  # Blood, Urine, etc.
    collected_at = Column(DateTime, default=datetime.now, nullable=False)
    
    # Relationships
    item = relationship("TestOrderItem", back_populates="sample")
    
    def __repr__(self):
        return f"<Sample(id={self.id}, type='{self.sample_type}', collected_at='{self.collected_at}', item_id={self.item_id})>"
    
    @property
    def age_in_hours(self) -> Optional[float]:
        """Calculate sample age in hours since collection"""
        if not self.collected_at:
            return None
        return (datetime.now() - self.collected_at).total_seconds() / 3600
