from fastapi import APIRouter, Depends, status

from ..dependencies.auth import get_current_user
from ..dependencies.stores import get_review_store
from ..schemas import ReviewCreate, ReviewOut, envelope
from ..services.reviews import ReviewStore
from ..services.session import TokenData

router = APIRouter()


@router.get("/reviews/{task_id}")
def get_reviews(task_id: str, store: ReviewStore = Depends(get_review_store)):
    """Get all reviews for a task. Public."""
    reviews = [ReviewOut.model_validate(review) for review in store.list_for_task(task_id)]
    return envelope(data=reviews, count=len(reviews))


@router.post("/reviews")
def create_review(
    payload: ReviewCreate,
    user: TokenData = Depends(get_current_user),
    store: ReviewStore = Depends(get_review_store),
):
    review = store.create(user.user_id, payload.task_id, payload.rating, payload.comment)
    return envelope(
        data=ReviewOut.model_validate(review),
        message="Review created successfully",
        status_code=status.HTTP_201_CREATED,
    )
