from .base import MemorySink, ProductRecord, RecordSink
from .product_cards import ProductExtractor

__all__ = ["MemorySink", "ProductRecord", "RecordSink", "ProductExtractor"]
