"""
Custom exceptions for the laboratory workflow tracker

Every rejected operation raises one of these; ``error_code`` is the label the
driver shows to the user.
"""


class LISException(Exception):
    """Base exception for all lab workflow errors"""
    
    error_code = "LIS_ERROR"
    
    def __init__(self, message: str, error_code: str = None):
        self.message = message
        if error_code is not None:
            self.error_code = error_code
        super().__init__(self.message)


class DatabaseException(LISException):
    """Repository store failures"""
    error_code = "DATABASE_ERROR"


class ValidationException(LISException):
    """Data validation exceptions"""
    error_code = "VALIDATION_ERROR"


class NotFoundException(LISException):
    """Referenced patient, lab test, order or order item does not exist"""
    
    error_code = "NOT_FOUND"
    
    def __init__(self, kind: str, entity_id: int, message: str = None):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(message or f"{kind} {entity_id} not found")


class TestOrderException(LISException):
    """Test order processing exceptions"""
    pass


class EmptyOrderException(TestOrderException):
    """An order was requested with no valid items"""
    error_code = "EMPTY_ORDER"


class SampleCollectionException(LISException):
    """Sample collection exceptions"""
    pass


class AlreadyCollectedException(SampleCollectionException):
    """A sample was already collected for the order item"""
    error_code = "ALREADY_COLLECTED"


class ResultProcessingException(LISException):
    """Test result processing exceptions"""
    pass


class SampleMissingException(ResultProcessingException):
    """A result was recorded before the sample was collected"""
    error_code = "SAMPLE_MISSING"


class AlreadyRecordedException(ResultProcessingException):
    """A result was already recorded for the order item"""
    error_code = "ALREADY_RECORDED"


class InvoiceException(LISException):
    """Invoicing exceptions"""
    pass


class AlreadyInvoicedException(InvoiceException):
    """
    The order has been invoiced before.
    
    Informational rather than fatal: ``invoice`` is the invoice that already
    exists for the order.
    """
    
    error_code = "ALREADY_INVOICED"
    
    def __init__(self, message: str, invoice=None):
        self.invoice = invoice
        super().__init__(message)
