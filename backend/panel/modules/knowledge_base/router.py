from typing import List, Optional

from fastapi import APIRouter, Depends

from panel.core.exceptions import NotFoundError
from panel.core.schemas import MessageResponse, patch_dict
from panel.modules.auth.deps import get_current_admin, get_current_user, get_storage, is_admin
from panel.modules.knowledge_base import schemas
from panel.modules.users.models import User
from panel.storage.base import Storage

router = APIRouter(prefix="/api/knowledge-base", tags=["Knowledge Base"])


def _get_article(storage: Storage, article_id: int, user: User):
    article = storage.knowledge_base.get(article_id)
    # Draft hanya kelihatan oleh admin
    if article is None or (not article.is_published and not is_admin(user)):
        raise NotFoundError("Article not found")
    return article


def _join_tags(tags: List[str]) -> str:
    return ",".join(tag.strip() for tag in tags if tag.strip())


@router.get("", response_model=List[schemas.ArticleResponse])
def list_articles(category: Optional[str] = None, q: Optional[str] = None, storage: Storage = Depends(get_storage),
                  current_user: User = Depends(get_current_user)):
    filters = {}
    if category:
        filters["category"] = category
    if not is_admin(current_user):
        filters["is_published"] = True

    articles = storage.knowledge_base.list(filters)
    if q:
        needle = q.lower()
        articles = [
            a for a in articles
            if needle in a.title.lower() or needle in a.content.lower() or needle in (a.tags or "").lower()
        ]
    return articles


# Tiap dibuka, views +1
@router.get("/{article_id}", response_model=schemas.ArticleResponse)
def read_article(article_id: int, storage: Storage = Depends(get_storage),
                 current_user: User = Depends(get_current_user)):
    article = _get_article(storage, article_id, current_user)
    return storage.knowledge_base.update(article.id, {"views": (article.views or 0) + 1})


@router.post("", response_model=schemas.ArticleResponse, status_code=201)
def create_article(payload: schemas.ArticleCreate, storage: Storage = Depends(get_storage),
                   current_admin: User = Depends(get_current_admin)):
    data = payload.model_dump()
    data.update(tags=_join_tags(payload.tags), author_id=current_admin.id, views=0)
    return storage.knowledge_base.create(data)


@router.put("/{article_id}", response_model=schemas.ArticleResponse)
def update_article(article_id: int, payload: schemas.ArticleUpdate, storage: Storage = Depends(get_storage),
                   current_admin: User = Depends(get_current_admin)):
    _get_article(storage, article_id, current_admin)

    data = patch_dict(payload)
    if "tags" in data:
        data["tags"] = _join_tags(data["tags"])
    return storage.knowledge_base.update(article_id, data)


@router.delete("/{article_id}", response_model=MessageResponse)
def delete_article(article_id: int, storage: Storage = Depends(get_storage),
                   current_admin: User = Depends(get_current_admin)):
    _get_article(storage, article_id, current_admin)
    storage.knowledge_base.delete(article_id)
    return {"message": "Article deleted"}
