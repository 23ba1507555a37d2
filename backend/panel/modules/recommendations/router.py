from typing import List

from fastapi import APIRouter, Depends

from panel.core.exceptions import NotFoundError
from panel.core.schemas import MessageResponse
from panel.modules.auth.deps import get_current_user, get_storage, is_admin
from panel.modules.recommendations import schemas
from panel.modules.recommendations.service import refresh_recommendations
from panel.modules.users.models import User
from panel.storage.base import Storage

router = APIRouter(prefix="/api/recommendations", tags=["Recommendations"])


def _get_visible(storage: Storage, rec_id: int, user: User):
    row = storage.recommendations.get(rec_id)
    if row is None or (not is_admin(user) and row.user_id != user.id):
        raise NotFoundError("Recommendation not found")
    return row


@router.get("", response_model=List[schemas.RecommendationResponse])
def list_recommendations(status: str = "open", storage: Storage = Depends(get_storage),
                         current_user: User = Depends(get_current_user)):
    filters = {"status": status} if status != "all" else {}
    # Rekomendasi server-wide hanya untuk admin
    if not is_admin(current_user):
        filters["user_id"] = current_user.id
    return storage.recommendations.list(filters, newest_first=True)


@router.post("/refresh", response_model=MessageResponse)
def refresh(storage: Storage = Depends(get_storage), current_user: User = Depends(get_current_user)):
    scope = None if is_admin(current_user) else current_user.id
    created = refresh_recommendations(storage, scope)
    return {"message": f"{created} new recommendation(s)"}


@router.put("/{rec_id}", response_model=schemas.RecommendationResponse)
def update_recommendation(rec_id: int, payload: schemas.RecommendationUpdate, storage: Storage = Depends(get_storage),
                          current_user: User = Depends(get_current_user)):
    _get_visible(storage, rec_id, current_user)
    return storage.recommendations.update(rec_id, {"status": payload.status})
