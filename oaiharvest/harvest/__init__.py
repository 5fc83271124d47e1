from .client import Client
from .endpoint import Endpoint
from .records import harvest_records, normalize_record

__all__ = ["Client", "Endpoint", "harvest_records", "normalize_record"]
