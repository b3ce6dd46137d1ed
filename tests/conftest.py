"""
Pytest configuration and fixtures for lab workflow tests
"""

import pytest

from labtrack.services import create_lab_context


@pytest.fixture
def lab_context():
    """A fresh, empty in-memory store with its services"""
    ctx = create_lab_context("sqlite://", echo=False)
    try:
        yield ctx
    finally:
        ctx.close()


@pytest.fixture
def repository(lab_context):
    return lab_context.repository


@pytest.fixture
def workflow(lab_context):
    return lab_context.workflow


@pytest.fixture
def queries(lab_context):
    return lab_context.queries


@pytest.fixture
def catalog(workflow):
    """Lab test catalog keyed by code"""
    return {
        "CBC": workflow.register_lab_test("CBC", "Complete Blood Count", 300.0),
        "RBS": workflow.register_lab_test("RBS", "Random Blood Sugar", 150.0),
        "LFT": workflow.register_lab_test("LFT", "Liver Function Test", 500.0),
        "LIPID": workflow.register_lab_test("LIPID", "Lipid Profile", 800.0),
    }


@pytest.fixture
def sample_patient(workflow):
    """Create a sample patient for testing"""
    return workflow.register_patient("John Doe", "1990-01-01", "9876543210")


@pytest.fixture
def sample_order(workflow, catalog, sample_patient):
    """An order for CBC and RBS with nothing collected yet"""
    return workflow.create_order(sample_patient.id, [catalog["CBC"].id, catalog["RBS"].id])


@pytest.fixture
def patient_data():
    """Factory for patient registration data"""
    def generate(**overrides):
        data = {
            "name": "Jane Smith",
            "date_of_birth": "1975-06-22",
            "phone": "555-0456",
        }
        data.update(overrides)
        return data
    return generate
