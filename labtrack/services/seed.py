"""
Startup catalog and demo data
"""

import logging
from typing import Dict

from .workflow import LabWorkflow

logger = logging.getLogger(__name__)

# (code, name, price)
DEMO_LAB_TESTS = [
    ("CBC", "Complete Blood Count", 300.0),
    ("RBS", "Random Blood Sugar", 150.0),
    ("LFT", "Liver Function Test", 500.0),
    ("LIPID", "Lipid Profile", 800.0),
]

DEMO_PATIENT = ("John Doe", "1990-01-01", "9876543210")

# Codes ordered for the demo patient
DEMO_ORDER_CODES = ("CBC", "RBS")


def seed_demo_data(workflow: LabWorkflow) -> Dict[str, object]:
    """Load the lab test catalog, one demo patient and one demo order"""
    lab_tests = {
        code: workflow.register_lab_test(code, name, price)
        for code, name, price in DEMO_LAB_TESTS
    }
    patient = workflow.register_patient(*DEMO_PATIENT)
    order = workflow.create_order(
        patient.id,
        [lab_tests[code].id for code in DEMO_ORDER_CODES]
    )
    
    logger.info(f"Seeded {len(lab_tests)} lab tests, patient {patient.id} and order {order.id}")
    return {"lab_tests": lab_tests, "patient": patient, "order": order}
