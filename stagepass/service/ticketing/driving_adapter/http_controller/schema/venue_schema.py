from datetime import datetime
from typing import Optional

from pydantic import Field

from stagepass.service.ticketing.driving_adapter.http_controller.schema.base_schema import (
    CamelModel,
)


class VenueCreateRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1, max_length=500)

    model_config = CamelModel.model_config | {
        'json_schema_extra': {'example': {'name': 'Blue Note', 'address': '131 W 3rd St, New York'}}
    }


class VenueResponse(CamelModel):
    id: int
    name: str
    address: str
    created_at: Optional[datetime] = None
