"""
Workflow engine for the lab workflow tracker

Enforces the business rules of the order-item lifecycle:

- an order needs a registered patient and at least one catalog test
- a sample can be collected once per item
- a result can be recorded once per item, and only after its sample
- an order is invoiced once, for all of its items

Every operation checks all of its preconditions before touching the store and
runs inside a single repository transaction.
"""

import logging
from datetime import datetime
from typing import Iterable

from ..core.exceptions import (
    NotFoundException, EmptyOrderException, AlreadyCollectedException,
    SampleMissingException, AlreadyRecordedException, AlreadyInvoicedException
)
from ..models import (
    Patient, LabTest, TestOrder, TestOrderItem, Sample, TestResult, Invoice, InvoiceLine,
    ItemStatus, can_transition
)
from .repository import LabRepository

logger = logging.getLogger(__name__)


class LabWorkflow:
    """State machine and business rules for lab orders"""
    
    def __init__(self, repository: LabRepository):
        self.repository = repository
    
    def register_patient(self, name: str, date_of_birth: str, phone: str) -> Patient:
        """Register a new patient"""
        with self.repository.transaction():
            patient = Patient(
                id=self.repository.next_id(Patient),
                name=name,
                date_of_birth=date_of_birth,
                phone=phone,
                created_at=datetime.now()
            )
            self.repository.put(patient)
        
        logger.info(f"Registered patient {patient.id}: {patient.name}")
        return patient
    
    def register_lab_test(self, code: str, name: str, price: float) -> LabTest:
        """Add a test to the catalog"""
        with self.repository.transaction():
            lab_test = LabTest(
                id=self.repository.next_id(LabTest),
                code=code,
                name=name,
                price=price
            )
            self.repository.put(lab_test)
        
        logger.info(f"Added lab test {lab_test.id}: {lab_test.code} ({lab_test.price})")
        return lab_test
    
    def create_order(self, patient_id: int, lab_test_ids: Iterable[int],
                     skip_unknown_tests: bool = False) -> TestOrder:
        """
        Place a test order with one item per lab test id, in the given order.
        
        Unknown lab test ids raise NotFoundException, or are skipped when
        ``skip_unknown_tests`` is set. An order that would end up with no
        items raises EmptyOrderException and nothing is stored.
        """
        with self.repository.transaction():
            patient = self._require(Patient, patient_id)
            
            lab_tests = []
            for lab_test_id in lab_test_ids:
                lab_test = self.repository.get(LabTest, lab_test_id)
                if lab_test is None:
                    if not skip_unknown_tests:
                        raise NotFoundException("LabTest", lab_test_id)
                    logger.warning(f"Skipping unknown lab test {lab_test_id} for patient {patient_id}")
                    continue
                lab_tests.append(lab_test)
            
            if not lab_tests:
                logger.warning(f"Rejected empty order for patient {patient_id}")
                raise EmptyOrderException(f"Order for patient {patient_id} has no valid lab tests")
            
            order = TestOrder(
                id=self.repository.next_id(TestOrder),
                patient=patient,
                created_at=datetime.now(),
                invoiced=False
            )
            for lab_test in lab_tests:
                TestOrderItem(
                    id=self.repository.next_id(TestOrderItem),
                    lab_test=lab_test,
                    order=order
                )
            self.repository.put(order)
        
        logger.info(f"Created order {order.id} for patient {patient.id} with {len(order.items)} item(s)")
        return order
    
    def collect_sample(self, order_id: int, item_id: int, sample_type: str) -> Sample:
        """Collect the sample for an order item"""
        with self.repository.transaction():
            item = self._require_item(order_id, item_id)
            
            if not can_transition(item.status, ItemStatus.SAMPLE_COLLECTED):
                logger.warning(f"Sample already collected for order {order_id} item {item_id}")
                raise AlreadyCollectedException(
                    f"Sample already collected for item {item_id}: {item.sample!r}"
                )
            
            sample = Sample(
                id=self.repository.next_id(Sample),
                sample_type=sample_type,
                collected_at=datetime.now(),
                item=item
            )
            self.repository.put(sample)
        
        logger.info(f"Collected {sample.sample_type} sample {sample.id} for order {order_id} item {item_id}")
        return sample
    
    def record_result(self, order_id: int, item_id: int, value: str, unit: str,
                      observation: str) -> TestResult:
        """Record the result for an order item whose sample has been collected"""
        with self.repository.transaction():
            item = self._require_item(order_id, item_id)
            
            status = item.status
            if status == ItemStatus.ORDERED:
                logger.warning(f"Result for order {order_id} item {item_id} rejected: no sample")
                raise SampleMissingException(
                    f"Cannot record result for item {item_id}: sample not collected"
                )
            if not can_transition(status, ItemStatus.RESULT_RECORDED):
                logger.warning(f"Result already recorded for order {order_id} item {item_id}")
                raise AlreadyRecordedException(
                    f"Result already recorded for item {item_id}: {item.result!r}"
                )
            
            result = TestResult(
                id=self.repository.next_id(TestResult),
                value=value,
                unit=unit,
                observation=observation,
                recorded_at=datetime.now(),
                item=item,
                sample=item.sample
            )
            self.repository.put(result)
        
        logger.info(f"Recorded result {result.id} for order {order_id} item {item_id}: {value} {unit}")
        return result
    
    def generate_invoice(self, order_id: int) -> Invoice:
        """
        Invoice every item of an order, whatever its status.
        
        An order is invoiced once; asking again raises
        AlreadyInvoicedException carrying the existing invoice.
        """
        with self.repository.transaction():
            order = self._require(TestOrder, order_id)
            
            if order.invoiced:
                existing = self.repository.invoices_for_order(order.id)
                logger.info(f"Order {order_id} already invoiced")
                raise AlreadyInvoicedException(
                    f"Order {order_id} already invoiced",
                    invoice=existing[0] if existing else None
                )
            
            invoice = Invoice(
                id=self.repository.next_id(Invoice),
                order=order,
                issued_at=datetime.now()
            )
            for item in order.items:
                invoice.lines.append(InvoiceLine(
                    item=item,
                    test_code=item.lab_test.code,
                    test_name=item.lab_test.name,
                    price=item.lab_test.price
                ))
            invoice.total_amount = sum(line.price for line in invoice.lines)
            order.invoiced = True
            self.repository.put(invoice)
        
        logger.info(f"Issued invoice {invoice.id} for order {order_id}: total {invoice.total_amount}")
        return invoice
    
    def _require(self, kind, entity_id: int):
        entity = self.repository.get(kind, entity_id)
        if entity is None:
            raise NotFoundException(kind.__name__, entity_id)
        return entity
    
    def _require_item(self, order_id: int, item_id: int) -> TestOrderItem:
        order = self._require(TestOrder, order_id)
        item = order.find_item(item_id)
        if item is None:
            raise NotFoundException(
                "TestOrderItem", item_id,
                f"TestOrderItem {item_id} not found in order {order_id}"
            )
        return item
