"""
Patient model for the lab workflow tracker
"""

from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from ..core.database import Base


class Patient(Base):
    """Patient information model"""
    
    __tablename__ = "patients"
    
    # Primary key, assigned by the repository's id allocator
    id = Column(Integer, primary_key=True, autoincrement=False)
    
    # Personal information
    name = Column(String(200), nullable=False)
    date_of_birth = Column(String(50))  # Opaque text, not validated
    phone = Column(String(50))
    
    # Audit fields
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    
    # Relationships
    test_orders = relationship("TestOrder", back_populates="patient", order_by="TestOrder.id")
    
    def __repr__(self):
        return f"<Patient(id={self.id}, name='{self.name}', dob='{self.date_of_birth}', phone='{self.phone}')>"
    
    @property
    def order_count(self) -> int:
        """Number of test orders placed for the patient"""
        return len(self.test_orders)
