# product_api/api/product.py

from typing import List

from fastapi import APIRouter, Depends, Query, Request, Response, status
from dependency_injector.wiring import inject, Provide

from product_api.core.container import Container
from product_api.schemas.product import ProductCreate, ProductOut
from product_api.services.product import ProductService
from product_api.services.sorting import SortField

router = APIRouter(prefix="/product", tags=["product"])


@router.post(
    "",
    response_model=ProductOut,
    status_code=status.HTTP_201_CREATED,
    summary="Добавить товар",
    responses={
        400: {"description": "Ошибки валидации {поле: сообщение}"},
        500: {"description": "Внутренняя ошибка"},
    },
)
@inject
async def add_product(
    payload: ProductCreate,
    request: Request,
    response: Response,
    svc: ProductService = Depends(Provide[Container.product_service]),
):
    """
    POST /product
    {"name": "...", "stock": 10, "price": 12.50}

    201 + созданный товар с id, в Location — ссылка на GET /product/{id}.
    """
    created = await svc.create_product(payload)
    response.headers["Location"] = str(request.url_for("get_product_by_id", product_id=created.id))
    return created


@router.get("", response_model=List[ProductOut], summary="Список товаров с сортировкой")
@inject
async def get_products(
    order_by: str = Query("id", alias="orderBy", description="id | name | price"),
    ascending: bool = Query(True),
    svc: ProductService = Depends(Provide[Container.product_service]),
):
    # незнакомый orderBy не ошибка — сортируем по id
    return await svc.list_products(SortField.parse(order_by), ascending)


@router.get("/search/{name}", response_model=List[ProductOut], summary="Поиск по подстроке в имени")
@inject
async def get_product_by_name(
    name: str,
    svc: ProductService = Depends(Provide[Container.product_service]),
):
    return await svc.search_products(name)


@router.get(
    "/{product_id}",
    response_model=ProductOut,
    name="get_product_by_id",
    summary="Товар по id",
    responses={404: {"description": "Не найден, пустое тело"}},
)
@inject
async def get_product_by_id(
    product_id: int,
    svc: ProductService = Depends(Provide[Container.product_service]),
):
    return await svc.get_product(product_id)


@router.put(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Обновить товар",
    responses={
        400: {"description": "Ошибки валидации {поле: сообщение}"},
        404: {"description": "Не найден, пустое тело"},
    },
)
@inject
async def update_product(
    product_id: int,
    payload: ProductCreate,
    svc: ProductService = Depends(Provide[Container.product_service]),
):
    await svc.update_product(product_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Удалить товар",
    responses={404: {"description": "Не найден, пустое тело"}},
)
@inject
async def delete_product(
    product_id: int,
    svc: ProductService = Depends(Provide[Container.product_service]),
):
    await svc.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
