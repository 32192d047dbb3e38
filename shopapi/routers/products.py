from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status

from shopapi.schemas import ProductPayload, ProductRead
from shopapi.services.errors import ResourceNotFoundError
from shopapi.services.product_service import ProductService

router = APIRouter(prefix="/api/products", tags=["products"])


def _get_product_service(request: Request) -> ProductService:
    svc = getattr(getattr(request.app, "state", None), "product_service", None)
    if not svc:
        raise RuntimeError("ProductService not configured")
    return svc


@router.get("/health")
def health(request: Request):
    return {"status": "UP", "service": request.app.state.service_name}


@router.get("", response_model=list[ProductRead])
def list_products(svc: ProductService = Depends(_get_product_service)):
    return [ProductRead.from_entity(p) for p in svc.list_products()]


@router.get("/search", response_model=list[ProductRead])
def search_products(name: str, svc: ProductService = Depends(_get_product_service)):
    return [ProductRead.from_entity(p) for p in svc.search_products(name)]


@router.get("/{product_id}", response_model=ProductRead)
def get_product(product_id: int, svc: ProductService = Depends(_get_product_service)):
    try:
        return ProductRead.from_entity(svc.get_product(product_id))
    except ResourceNotFoundError:
        return Response(status_code=status.HTTP_404_NOT_FOUND)


@router.post("", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductPayload, svc: ProductService = Depends(_get_product_service)):
    return ProductRead.from_entity(svc.create_product(payload.to_entity()))


@router.put("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: int,
    payload: ProductPayload,
    svc: ProductService = Depends(_get_product_service),
):
    try:
        return ProductRead.from_entity(svc.update_product(product_id, payload.to_entity()))
    except ResourceNotFoundError:
        return Response(status_code=status.HTTP_404_NOT_FOUND)


@router.delete("/{product_id}")
def delete_product(product_id: int, svc: ProductService = Depends(_get_product_service)):
    try:
        svc.delete_product(product_id)
    except ResourceNotFoundError:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_200_OK)
