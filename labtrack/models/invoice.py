"""
Invoice models for the lab workflow tracker

Invoice lines copy the test code, name and price at issue time so later
catalog changes never alter an issued invoice.
"""

from datetime import datetime
from typing import List

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from ..core.database import Base


class Invoice(Base):
    """Invoice issued for a whole test order"""
    
    __tablename__ = "invoices"
    
    id = Column(Integer, primary_key=True, autoincrement=False)
    
    # One invoice per order
    order_id = Column(Integer, ForeignKey("test_orders.id"), nullable=False, unique=True, index=True)
    
    issued_at = Column(DateTime, default=datetime.now, nullable=False)
    total_amount = Column(Float, nullable=False, default=0.0)
    
    # Relationships
    order = relationship("TestOrder", back_populates="invoice")
    lines = relationship("InvoiceLine", back_populates="invoice", order_by="InvoiceLine.id",
                         cascade="all, delete-orphan")
    
    def __repr__(self):
        return f"<Invoice(id={self.id}, order_id={self.order_id}, total={self.total_amount}, items={self.item_count})>"
    
    @property
    def billed_items(self) -> List["TestOrderItem"]:
        """Order items covered by this invoice, in billing order"""
        return [line.item for line in self.lines]
    
    @property
    def item_count(self) -> int:
        return len(self.lines)


class InvoiceLine(Base):
    """Snapshot of one billed order item"""
    
    __tablename__ = "invoice_lines"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("test_order_items.id"), nullable=False)
    
    test_code = Column(String(20), nullable=False)
    test_name = Column(String(200), nullable=False)
    price = Column(Float, nullable=False)
    
    # Relationships
    invoice = relationship("Invoice", back_populates="lines")
    item = relationship("TestOrderItem")
    
    def __repr__(self):
        return f"<InvoiceLine(item_id={self.item_id}, test='{self.test_name}', price={self.price})>"
