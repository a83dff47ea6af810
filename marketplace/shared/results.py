"""Tagged result objects returned by the service layer.

Services catch data-layer failures, log them, and hand callers an
`ActionResult` instead of raising, so callers branch on `ok` / `kind`
rather than on exception types or message text.
"""

from enum import Enum
from typing import Any, Optional

from fastapi import HTTPException
from pydantic import BaseModel


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    DATA_LAYER = "data_layer"
    VALIDATION = "validation"


class ActionResult(BaseModel):
    ok: bool
    data: Any = None
    error: Optional[str] = None
    kind: Optional[ErrorKind] = None

    @classmethod
    def success(cls, data: Any = None) -> "ActionResult":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: str, kind: ErrorKind) -> "ActionResult":
        return cls(ok=False, error=error, kind=kind)


# HTTP status used by routers when a failed result has to become an HTTPException
STATUS_FOR_KIND = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 422,
    ErrorKind.DATA_LAYER: 500,
}


def unwrap(result: ActionResult) -> Any:
    """Data of a successful result, or the matching HTTPException"""
    if not result.ok:
        raise HTTPException(status_code=STATUS_FOR_KIND.get(result.kind, 500), detail=result.error)
    return result.data
