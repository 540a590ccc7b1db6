"""Translate service outcomes into HTTP responses."""

from fastapi import HTTPException

from hirely.schemas.common import FeatureResult, OperationResult

_FEATURE_STATUS = {"validation": 400, "provider": 502, "shape": 502}


def feature_value(result: FeatureResult):
    """Return the value of a successful feature call or raise the matching HTTP error."""
    if result.ok:
        return result.value
    raise HTTPException(status_code=_FEATURE_STATUS.get(result.error_kind, 502), detail=result.error)


def record_value(result: OperationResult):
    if result.success:
        return result.data
    if result.error and result.error.endswith("not found"):
        raise HTTPException(status_code=404, detail=result.error)
    raise HTTPException(status_code=500, detail=result.error or "Storage error")
