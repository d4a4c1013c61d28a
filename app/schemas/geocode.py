from typing import Any, Dict

from pydantic import BaseModel


class GeocodeResponse(BaseModel):
    success: bool = True
    # First Nominatim match, passed back unchanged as ``nominatim_data``
    result: Dict[str, Any]
