from typing import List

from fastapi import APIRouter, Depends, Query

from panel.core.exceptions import NotFoundError
from panel.modules.auth.deps import get_current_admin, get_current_user, get_storage
from panel.modules.server_stats import schemas
from panel.modules.users.models import User
from panel.storage.base import Storage
from panel.system.monitor import get_system_stats

router = APIRouter(prefix="/api/server-stats", tags=["Server Stats"])


# 1. SAMPLE TERAKHIR
@router.get("", response_model=schemas.ServerStatsResponse)
def latest_stats(storage: Storage = Depends(get_storage), current_user: User = Depends(get_current_user)):
    stats = storage.get_latest_server_stats()
    if stats is None:
        raise NotFoundError("No server stats recorded yet")
    return stats


# 2. HISTORY (terbaru dulu)
@router.get("/history", response_model=List[schemas.ServerStatsResponse])
def stats_history(limit: int = Query(24, ge=1, le=1000), storage: Storage = Depends(get_storage),
                  current_user: User = Depends(get_current_user)):
    return storage.get_server_stats_history(limit)


# 3. SNAPSHOT HOST REAL-TIME (tidak disimpan)
@router.get("/live")
def live_stats(current_admin: User = Depends(get_current_admin)):
    return {"status": "success", "data": get_system_stats()}


@router.post("", response_model=schemas.ServerStatsResponse, status_code=201)
def record_stats(payload: schemas.ServerStatsCreate, storage: Storage = Depends(get_storage),
                 current_admin: User = Depends(get_current_admin)):
    return storage.server_stats.create(payload.model_dump())
