from pydantic import BaseModel, Field

from everestctl.core.config import EVEREST_REQUEST_TIMEOUT, EVEREST_URL


class EverestConfig(BaseModel):
    # URL of the Everest API
    endpoint: str = EVEREST_URL
    timeout: float = Field(default=EVEREST_REQUEST_TIMEOUT, gt=0)
