from typing import List

from fastapi import APIRouter, Depends, Query

from panel.core.exceptions import NotFoundError
from panel.modules.auth.deps import get_current_admin, get_current_user, get_hub, get_storage
from panel.modules.notifications.service import notify
from panel.modules.security import schemas
from panel.modules.users.models import User
from panel.storage.base import Storage
from panel.system import scanner

router = APIRouter(prefix="/api/security", tags=["Security"])


@router.get("/scans/latest", response_model=schemas.SecurityScanResponse)
def latest_scan(storage: Storage = Depends(get_storage), current_user: User = Depends(get_current_user)):
    scan = storage.get_latest_security_scan()
    if scan is None:
        raise NotFoundError("No security scan has run yet")
    return scan


@router.get("/scans", response_model=List[schemas.SecurityScanResponse])
def list_scans(limit: int = Query(20, ge=1, le=200), storage: Storage = Depends(get_storage),
               current_user: User = Depends(get_current_user)):
    return storage.security_scans.list(newest_first=True, limit=limit)


# Scan manual (Admin Only), hasilnya di-broadcast
@router.post("/scans", response_model=schemas.SecurityScanResponse, status_code=201)
async def start_scan(payload: schemas.SecurityScanCreate, storage: Storage = Depends(get_storage),
                     hub=Depends(get_hub), current_admin: User = Depends(get_current_admin)):
    scan = scanner.run_security_scan(storage, payload.scan_type, initiated_by=current_admin.id)
    await notify(storage, hub, **scanner.summary(scan))
    return scan
