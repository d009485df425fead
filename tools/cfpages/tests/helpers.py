from typing import Any, Dict, List, Optional

from ..interfaces.page import Page, Resource, ResourceMetadata


def make_resource(guid: str, name: Optional[str] = None, **entity: Any) -> Resource:
    if name is not None:
        entity["name"] = name
    return Resource(
        metadata=ResourceMetadata(id=guid, url=f"/v2/apps/{guid}", created_at="2016-01-01T00:00:00Z"),
        entity=entity,
    )


def resource_payload(guid: str, **entity: Any) -> Dict[str, Any]:
    return {
        "metadata": {
            "guid": guid,
            "url": f"/v2/apps/{guid}",
            "created_at": "2016-01-01T00:00:00Z",
            "updated_at": None,
        },
        "entity": entity,
    }


def list_payload(guids: List[str], total_pages: int, total_results: Optional[int] = None) -> Dict[str, Any]:
    return {
        "total_results": len(guids) if total_results is None else total_results,
        "total_pages": total_pages,
        "prev_url": None,
        "next_url": None,
        "resources": [resource_payload(guid, name=f"name-{guid}") for guid in guids],
    }


class FakeCollection:
    """
    Page fetcher over a fixed list of page sizes.

    Records every page number it is asked for and can fail on a chosen page.
    """

    def __init__(self, page_sizes: List[int], fail_on_page: Optional[int] = None,
                 error: Optional[Exception] = None, total_pages: Optional[int] = None):
        self.pages: List[List[Resource]] = []
        counter = 0
        for size in page_sizes:
            page = []
            for _ in range(size):
                counter += 1
                page.append(make_resource(f"guid-{counter}", name=f"app-{counter}"))
            self.pages.append(page)
        self.total_pages = len(page_sizes) if total_pages is None else total_pages
        self.fail_on_page = fail_on_page
        self.error = error or RuntimeError("fetch failed")
        self.requested: List[int] = []

    @property
    def all_resources(self) -> List[Resource]:
        return [r for page in self.pages for r in page]

    async def __call__(self, page: int) -> Page:
        self.requested.append(page)
        if page == self.fail_on_page:
            raise self.error
        resources = self.pages[page - 1] if page <= len(self.pages) else []
        return Page(
            page=page,
            total_pages=self.total_pages,
            total_results=len(self.all_resources),
            resources=tuple(resources),
        )
