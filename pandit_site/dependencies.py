from functools import lru_cache

from pandit_site.config import get_settings
from pandit_site.services.auth import OwnerOracle
from pandit_site.services.records import RecordStore


@lru_cache
def get_record_store() -> RecordStore:
    return RecordStore(get_settings())


@lru_cache
def get_owner_oracle() -> OwnerOracle:
    return OwnerOracle(get_settings())
