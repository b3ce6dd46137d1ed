# Database models

from .patient import Patient
from .lab_test import LabTest
from .test_order import TestOrder, TestOrderItem, ItemStatus, ALLOWED_TRANSITIONS, can_transition
from .sample import Sample
from .test_result import TestResult
from .invoice import Invoice, InvoiceLine

__all__ = [
    # Models
    "Patient",
    "LabTest",
    "TestOrder",
    "TestOrderItem",
    "Sample",
    "TestResult",
    "Invoice",
    "InvoiceLine",
    
    # Lifecycle
    "ItemStatus",
    "ALLOWED_TRANSITIONS",
    "can_transition",
]
