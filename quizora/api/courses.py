"""
Courses: public reads, admin writes.
"""
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from quizora.database import get_db
from quizora.models.course import Course
from quizora.models.user import User
from quizora.schemas.course import CourseCreate, CourseUpdate, CourseResponse
from quizora.schemas.common import MessageResponse
from quizora.api.deps import require_admin

router = APIRouter(prefix="/courses", tags=["courses"])


def _get_or_404(db: Session, course_id: UUID) -> Course:
    course = db.query(Course).filter(Course.id == course_id).first()
    if not course:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    return course


@router.get("", response_model=list[CourseResponse])
def list_courses(db: Session = Depends(get_db)):
    return db.query(Course).order_by(Course.created_at.desc()).all()


@router.get("/{course_id}", response_model=CourseResponse)
def get_course(course_id: UUID, db: Session = Depends(get_db)):
    return _get_or_404(db, course_id)


@router.post("", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
def create_course(data: CourseCreate, _: User = Depends(require_admin), db: Session = Depends(get_db)):
    course = Course(**data.model_dump())
    db.add(course)
    db.commit()
    db.refresh(course)
    return course


@router.put("/{course_id}", response_model=CourseResponse)
def update_course(
    course_id: UUID,
    data: CourseUpdate,
    _: User = Depends(require_admin),
    db: Session = Depends(get_db),
):
    course = _get_or_404(db, course_id)
    for key, value in data.model_dump(exclude_unset=True).items():
        if key == "title" and value is None:
            continue
        setattr(course, key, value)
    db.commit()
    db.refresh(course)
    return course


@router.delete("/{course_id}", response_model=MessageResponse)
def delete_course(course_id: UUID, _: User = Depends(require_admin), db: Session = Depends(get_db)):
    course = _get_or_404(db, course_id)
    db.delete(course)
    db.commit()
    return MessageResponse(message="Course removed")
