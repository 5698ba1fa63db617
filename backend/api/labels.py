"""Label vocabulary API endpoints: categories, sectors and custodies."""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from api.helpers import get_current_user_id
from database import get_db
from schemas import LabelCreate, LabelResponse
from services.label_service import LabelService, category_labels, custody_labels, sector_labels


def build_label_router(prefix: str, tag: str, service: LabelService) -> APIRouter:
    """Create list/create/rename/delete routes for one vocabulary."""
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.get("", response_model=list[LabelResponse])
    def list_labels(
        db: Session = Depends(get_db),
        user_id: str = Depends(get_current_user_id),
    ):
        """The user's labels plus the shared defaults."""
        return service.list_for_user(db, user_id)

    @router.post("", response_model=LabelResponse, status_code=201)
    def create_label(
        data: LabelCreate,
        db: Session = Depends(get_db),
        user_id: str = Depends(get_current_user_id),
    ):
        return service.create(db, user_id, data.name)

    @router.patch("/{label_id}", response_model=LabelResponse)
    def rename_label(
        label_id: str,
        data: LabelCreate,
        db: Session = Depends(get_db),
        user_id: str = Depends(get_current_user_id),
    ):
        return service.rename(db, user_id, label_id, data.name)

    @router.delete("/{label_id}", status_code=204)
    def delete_label(
        label_id: str,
        db: Session = Depends(get_db),
        user_id: str = Depends(get_current_user_id),
    ):
        """Delete a label; 409 while any holding uses it."""
        service.delete(db, user_id, label_id)
        return Response(status_code=204)

    return router


categories_router = build_label_router("/api/categories", "categories", category_labels)
sectors_router = build_label_router("/api/sectors", "sectors", sector_labels)
custodies_router = build_label_router("/api/custodies", "custodies", custody_labels)
