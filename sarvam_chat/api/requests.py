from typing import Any, Optional

from pydantic import BaseModel, StrictStr


class ChatIn(BaseModel):
    message: Optional[StrictStr] = None
    # malformed values fall back to defaults in the service
    language: Any = None
    history: Any = None
