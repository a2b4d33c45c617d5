"""API router for the reviews feature.

Endpoints:
    GET  /reviews              - Paginated list (offset), filter by service or rating
    GET  /reviews/{review_id}  - Single review
    POST /reviews              - Review a completed booking
"""

from __future__ import annotations

from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, status

from booking_service.core.dependencies import (  # noqa: TC001
    PaginationParamsDep,
    PaginationServiceDep,
)
from booking_service.core.exceptions import NotFoundException
from booking_service.core.pagination import OffsetPage
from booking_service.features.reviews.pagination import REVIEWS_PAGINATION
from booking_service.features.reviews.repository import ReviewRepositoryDep  # noqa: TC001
from booking_service.features.reviews.schemas import ReviewCreate, ReviewListItem, ReviewResponse
from booking_service.features.reviews.service import ReviewServiceDep  # noqa: TC001

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get(
    "",
    response_model=OffsetPage[ReviewListItem],
    response_model_exclude_unset=True,
    summary="List reviews",
)
async def list_reviews(params: PaginationParamsDep, pagination: PaginationServiceDep):
    return await pagination.paginate(REVIEWS_PAGINATION, params)


@router.get("/{review_id}", response_model=ReviewResponse, summary="Get a review")
async def get_review(review_id: UUID, reviews: ReviewRepositoryDep):
    review = await reviews.find_one_by_id(review_id)
    if review is None:
        raise NotFoundException(f"Review {review_id} not found", extra={"review_id": str(review_id)})
    return review


@router.post(
    "",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Review a completed booking",
)
async def create_review(request: Request, payload: ReviewCreate, reviews: ReviewServiceDep):
    return await reviews.create_review(
        payload,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
