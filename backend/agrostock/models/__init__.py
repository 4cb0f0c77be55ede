from .inventory import Product, Supplier, Warehouse, StockEntry
from .sales import Sale
from .audit import AuditLogEntry
from .auth import User
from . import immutability  # noqa: F401  registers ORM listeners

__all__ = [
    'Product', 'Supplier', 'Warehouse', 'StockEntry',
    'Sale',
    'AuditLogEntry',
    'User',
]
