"""
Test categories: public reads, admin writes. Names are unique.
"""
import logging
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from quizora.database import get_db
from quizora.models.category import TestCategory
from quizora.models.quiz import Quiz
from quizora.models.user import User
from quizora.schemas.category import CategoryCreate, CategoryUpdate, CategoryResponse
from quizora.schemas.common import MessageResponse
from quizora.api.deps import require_admin

router = APIRouter(prefix="/categories", tags=["categories"])
logger = logging.getLogger(__name__)


def _get_or_404(db: Session, category_id: UUID) -> TestCategory:
    category = db.query(TestCategory).filter(TestCategory.id == category_id).first()
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category


def _ensure_name_free(db: Session, name: str, exclude_id: UUID | None = None) -> None:
    q = db.query(TestCategory).filter(TestCategory.name == name)
    if exclude_id is not None:
        q = q.filter(TestCategory.id != exclude_id)
    if q.first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category already exists")


@router.get("", response_model=list[CategoryResponse])
def list_categories(db: Session = Depends(get_db)):
    return db.query(TestCategory).order_by(TestCategory.name).all()


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(category_id: UUID, db: Session = Depends(get_db)):
    return _get_or_404(db, category_id)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(data: CategoryCreate, _: User = Depends(require_admin), db: Session = Depends(get_db)):
    _ensure_name_free(db, data.name)
    category = TestCategory(name=data.name, description=data.description)
    db.add(category)
    db.commit()
    db.refresh(category)
    logger.info("Category created id=%s name=%s", category.id, category.name)
    return category


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: UUID,
    data: CategoryUpdate,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    category = _get_or_404(db, category_id)
    fields = data.model_dump(exclude_unset=True)
    if fields.get("name") is not None and fields["name"] != category.name:
        _ensure_name_free(db, fields["name"], exclude_id=category.id)
    for key, value in fields.items():
        if key == "name" and value is None:
            continue
        setattr(category, key, value)
    db.commit()
    db.refresh(category)
    return category


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(category_id: UUID, _: User = Depends(require_admin), db: Session = Depends(get_db)):
    category = _get_or_404(db, category_id)
    if db.query(Quiz.id).filter(Quiz.category_id == category.id).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Category has quizzes; delete or move them first",
        )
    db.delete(category)
    db.commit()
    logger.info("Category deleted id=%s", category_id)
    return MessageResponse(message="Category removed")
