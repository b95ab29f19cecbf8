from properlia.models.status import Status
from properlia.routes.reference import reference_blueprint

bp = reference_blueprint('statuses', Status, 'status')
