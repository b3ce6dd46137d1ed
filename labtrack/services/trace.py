"""
Query layer for the lab workflow tracker

Read-only listings and the composite order trace. Nothing here mutates the
store.
"""

import logging
from typing import List, Optional

from ..api.schemas import OrderItemTrace, OrderTrace, InvoiceResponse, TestOrderSummary
from ..core.exceptions import NotFoundException
from ..models import Patient, LabTest, TestOrder, Invoice
from .repository import LabRepository

logger = logging.getLogger(__name__)


class LabQueryService:
    """Listings and order traces"""
    
    def __init__(self, repository: LabRepository):
        self.repository = repository
    
    def list_patients(self) -> List[Patient]:
        return self.repository.all_of(Patient)
    
    def list_lab_tests(self) -> List[LabTest]:
        return self.repository.all_of(LabTest)
    
    def list_orders(self) -> List[TestOrder]:
        return self.repository.all_of(TestOrder)
    
    def get_patient(self, patient_id: int) -> Optional[Patient]:
        return self.repository.get(Patient, patient_id)
    
    def get_lab_test(self, lab_test_id: int) -> Optional[LabTest]:
        return self.repository.get(LabTest, lab_test_id)
    
    def invoices_for_order(self, order_id: int) -> List[Invoice]:
        return self.repository.invoices_for_order(order_id)
    
    def trace_order(self, order_id: int) -> OrderTrace:
        """Assemble an order with its items, samples, results and invoice"""
        order = self.repository.get(TestOrder, order_id)
        if order is None:
            raise NotFoundException("TestOrder", order_id)
        
        summary = TestOrderSummary(
            id=order.id,
            patient_id=order.patient_id,
            patient_name=order.patient.name,
            created_at=order.created_at,
            invoiced=order.invoiced,
            item_count=len(order.items)
        )
        items = [OrderItemTrace.model_validate(item) for item in order.items]
        
        invoices = self.repository.invoices_for_order(order.id)
        invoice = InvoiceResponse.model_validate(invoices[0]) if invoices else None
        
        logger.debug(f"Traced order {order_id}: {len(items)} item(s), invoiced={summary.invoiced}")
        return OrderTrace(order=summary, items=items, invoice=invoice)
