"""
SQLAlchemy Models Package

- Catalog: Property, Attachment
- Lookups: PropertyType, Status, ListingType
- System: GeneralInfo, User
"""

# Catalog
from properlia.models.attachment import Attachment
from properlia.models.property import Property

# Lookups
from properlia.models.property_type import PropertyType
from properlia.models.status import Status
from properlia.models.listing_type import ListingType

# System
from properlia.models.general_info import GeneralInfo
from properlia.models.user import User

__all__ = [
    'Attachment',
    'Property',
    'PropertyType',
    'Status',
    'ListingType',
    'GeneralInfo',
    'User',
]
