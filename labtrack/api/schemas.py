"""
Pydantic schemas for the lab workflow trace views
Defines the read-only shapes the query layer hands to the driver
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ..models import ItemStatus


# Base schemas with common fields
class BaseSchema(BaseModel):
    """Base schema with common configuration"""
    
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)


class PatientResponse(BaseSchema):
    """Schema for patient views"""
    id: int
    name: str = Field(..., description="Patient name")
    date_of_birth: Optional[str] = Field(None, description="Date of birth as entered")
    phone: Optional[str] = Field(None, description="Patient phone number")
    created_at: datetime


class LabTestResponse(BaseSchema):
    """Schema for catalog entries"""
    id: int
    code: str = Field(..., description="Test code")
    name: str = Field(..., description="Test name")
    price: float = Field(..., ge=0, description="Catalog price")


class SampleResponse(BaseSchema):
    """Schema for a collected sample"""
    id: int
    sample_type: str = Field(..., description="Type of sample")
    collected_at: datetime
    item_id: int


class TestResultResponse(BaseSchema):
    """Schema for a recorded result"""
    id: int
    value: str = Field(..., description="Result value, numeric or text")
    unit: Optional[str] = None
    observation: Optional[str] = None
    recorded_at: datetime
    item_id: int
    sample_id: int


class InvoiceLineResponse(BaseSchema):
    """Schema for one billed item"""
    item_id: int
    test_code: str
    test_name: str
    price: float


class InvoiceResponse(BaseSchema):
    """Schema for an issued invoice"""
    id: int
    order_id: int
    issued_at: datetime
    total_amount: float
    lines: List[InvoiceLineResponse] = []


class TestOrderSummary(BaseSchema):
    """Order header shown at the top of a trace"""
    id: int
    patient_id: int
    patient_name: str
    created_at: datetime
    invoiced: bool
    item_count: int


class OrderItemTrace(BaseSchema):
    """One order item with its sample and result, None when absent"""
    id: int
    lab_test: LabTestResponse
    status: ItemStatus
    sample: Optional[SampleResponse] = None
    result: Optional[TestResultResponse] = None
    
    @computed_field
    @property
    def sample_collected(self) -> bool:
        return self.sample is not None
    
    @computed_field
    @property
    def result_recorded(self) -> bool:
        return self.result is not None


class OrderTrace(BaseSchema):
    """Order -> items -> sample -> result, plus the invoice if issued"""
    order: TestOrderSummary
    items: List[OrderItemTrace]
    invoice: Optional[InvoiceResponse] = None
    
    @computed_field
    @property
    def invoiced(self) -> bool:
        return self.invoice is not None
