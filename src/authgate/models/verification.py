"""
Verification view state.
"""

from enum import Enum
from pydantic import BaseModel, ConfigDict


class VerificationStatus(str, Enum):
    VERIFYING = "verifying"
    SUCCESS = "success"
    ERROR = "error"


class VerificationState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: VerificationStatus = VerificationStatus.VERIFYING
    message: str = ""

    @property
    def terminal(self) -> bool:
        return self.status is not VerificationStatus.VERIFYING
