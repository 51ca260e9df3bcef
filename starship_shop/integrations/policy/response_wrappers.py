from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from starship_shop.error_handler import NetworkError
from starship_shop.integrations.contracts.catalog import item_from_raw
from starship_shop.integrations.contracts.interfaces import CatalogItem, CatalogPage


class IntegrationResponseError(NetworkError):
    """The catalog answered, but not with the expected shape."""


class CatalogPageResponseModel(BaseModel):
    results: List[Dict[str, Any]] = Field(default_factory=list)
    count: int = Field(default=0, ge=0)
    next: Optional[str] = None
    previous: Optional[str] = None


class CatalogSearchResponseModel(BaseModel):
    results: List[Dict[str, Any]] = Field(default_factory=list)


def normalize_catalog_page(raw: Dict[str, Any], *, page: int = 1) -> CatalogPage:
    model = _build_model(CatalogPageResponseModel, _require_mapping(raw), raw)
    items = _items_from_results(model.results, raw)
    return CatalogPage(
        results=items,
        page=page,
        count=model.count or len(items),
        next=model.next or None,
        previous=model.previous or None,
    )


def normalize_search_response(raw: Dict[str, Any]) -> List[CatalogItem]:
    model = _build_model(CatalogSearchResponseModel, _require_mapping(raw), raw)
    return _items_from_results(model.results, raw)


def _items_from_results(results: List[Dict[str, Any]], raw: Any) -> List[CatalogItem]:
    items: List[CatalogItem] = []
    for entry in results:
        if not _first_non_empty(entry, "name", default=""):
            raise IntegrationResponseError("Catalog entry without a name.", payload={"entry": entry})
        items.append(item_from_raw(entry))
    return items


def _require_mapping(raw: Any) -> Dict[str, Any]:
    if not isinstance(raw, dict):
        raise IntegrationResponseError(
            f"Expected a JSON object from the catalog, got {type(raw).__name__}.",
            payload={"raw": raw},
        )
    return raw


def _first_non_empty(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        value = data.get(key)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    if default is not None:
        return default
    raise IntegrationResponseError(f"Missing required field. Checked keys: {', '.join(keys)}", payload=data)


def _build_model(model_type, payload: Dict[str, Any], raw: Any):
    try:
        return model_type(**payload)
    except ValidationError as exc:
        raise IntegrationResponseError(f"Response validation failed: {exc}", payload={"raw": raw}) from exc
