from fastapi import APIRouter

from finance_tracker.domain.validation import PREDEFINED_CATEGORIES

router = APIRouter(tags=["categories"])


@router.get("/categories")
async def get_categories() -> list[str]:
    return list(PREDEFINED_CATEGORIES)
