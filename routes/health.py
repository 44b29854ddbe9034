import redis
from fastapi import APIRouter

from routes.preflight_workflow import r as workflow_store
from services.feature_flags import is_workflow_enabled
from utils.metrics import snapshot

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health():
    if not is_workflow_enabled():
        return {"status": "OK", "workflow_store": "disabled"}
    try:
        workflow_store.ping()
    except redis.RedisError:
        return {"status": "DEGRADED", "workflow_store": "unavailable"}
    return {"status": "OK", "workflow_store": "connected"}


@router.get("/metrics")
# User value: exposes in-process counters so operators can watch validation volume and outcomes.
def metrics():
    return snapshot()
