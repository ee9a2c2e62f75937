from .auth import User
from .inventory import Product
from .job_cards import JobCard, JobCardPart
from .invoices import Invoice, InvoiceItem
from .audit import ActivityLog
from .documents import DocumentSequence

__all__ = [
    'User',
    'Product',
    'JobCard', 'JobCardPart',
    'Invoice', 'InvoiceItem',
    'ActivityLog',
    'DocumentSequence',
]
