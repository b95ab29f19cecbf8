from properlia.models.listing_type import ListingType
from properlia.routes.reference import reference_blueprint

bp = reference_blueprint('listing_types', ListingType, 'listing_type')
