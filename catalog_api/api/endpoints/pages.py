from fastapi import APIRouter

from catalog_api.api.deps import SessionFactory
from catalog_api.core.exceptions import NotFoundError
from catalog_api.schemas.base import DataResponse
from catalog_api.schemas.page import PageData
from catalog_api.services.page_resolution_service import MAX_DEPTH, PageResolutionService


router = APIRouter(tags=["Pages"])


@router.get("/{page_path:path}", response_model=DataResponse[PageData])
async def resolve_page(page_path: str, session_factory: SessionFactory):
    """
    Resolve a public page URL: /{navbar}[/{category}[/{subcategory}[/{product}]]].

    Returns the entities the page renders together with their sibling lists.
    A path segment that does not match yields 404.
    """
    slugs = [segment for segment in page_path.split("/") if segment]
    if not 1 <= len(slugs) <= MAX_DEPTH:
        raise NotFoundError("Page not found")

    page = await PageResolutionService(session_factory).resolve(slugs)
    if not page.found:
        raise NotFoundError(page.error)

    return DataResponse[PageData](data=PageData.model_validate(page))
