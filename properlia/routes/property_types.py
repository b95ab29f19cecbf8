from properlia.models.property_type import PropertyType
from properlia.routes.reference import reference_blueprint

bp = reference_blueprint('property_types', PropertyType, 'property_type')
