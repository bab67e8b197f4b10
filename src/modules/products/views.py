"""Product API views.

Exposes the ``ProductService`` over HTTP with a DRF ViewSet.  Views only
extract and validate parameters; every error propagates to the exception
handler in ``modules.core.exceptions``.
"""

from __future__ import annotations

from typing import Any, Type, TypeVar

from django.conf import settings
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import ParseError
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import RequestValidationFailed
from modules.core.validation import messages_from, to_int
from modules.products.dtos import CreateProductDTO, PaginationQueryDTO, UpdateStockDTO
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import (
    ConstraintErrorSerializer,
    CreateProductRequestSerializer,
    ErrorSerializer,
    ProductListItemSerializer,
    ProductPageSerializer,
    ProductSerializer,
    SuccessSerializer,
    UpdateStockRequestSerializer,
)
from modules.products.services import ProductService

DTO = TypeVar("DTO", bound=BaseModel)

INVALID_ID_MESSAGE = "Validation failed (numeric string is expected)"


def validate_input(dto_class: Type[DTO], data: Any) -> DTO:
    """Build ``dto_class`` from raw request data or raise a 400."""
    try:
        return dto_class.model_validate(data)
    except PydanticValidationError as exc:
        raise RequestValidationFailed(messages_from(exc)) from exc


@extend_schema_view(
    list=extend_schema(
        summary="List products",
        parameters=[
            OpenApiParameter("limit", int, description="Page size (default 10)."),
            OpenApiParameter("offset", int, description="Rows to skip (default 0)."),
            OpenApiParameter("page", int, description="Page number echoed back (default 1)."),
        ],
        responses={200: ProductPageSerializer, 400: ErrorSerializer},
    ),
    create=extend_schema(
        summary="Create a product",
        request=CreateProductRequestSerializer,
        responses={
            201: ProductSerializer,
            400: ErrorSerializer,
            409: ConstraintErrorSerializer,
        },
    ),
    update_stock=extend_schema(
        summary="Update the stock of a product",
        request=UpdateStockRequestSerializer,
        responses={200: SuccessSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
    ),
    destroy=extend_schema(
        summary="Delete a product",
        parameters=[OpenApiParameter("id", int, OpenApiParameter.PATH)],
        responses={200: SuccessSerializer, 400: ErrorSerializer, 404: ErrorSerializer},
    ),
)
class ProductViewSet(GenericViewSet):
    """ViewSet for the ``/products`` resource.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).  All ORM
    access goes through the service/repository layer.
    """

    serializer_class = ProductSerializer
    lookup_field = "id"
    lookup_value_regex = "[^/]+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    def list(self, request: Request) -> Response:
        """GET /products?limit=&offset=&page="""
        query = validate_input(
            PaginationQueryDTO,
            {"limit": settings.DEFAULT_PAGE_SIZE, **request.query_params.dict()},
        )
        page = self._service.list_products(query.limit, query.offset, query.page)
        rows = ProductListItemSerializer(page.data, many=True).data
        return Response(page.as_payload(rows))

    def create(self, request: Request) -> Response:
        """POST /products"""
        dto = validate_input(CreateProductDTO, request.data)
        product = self._service.create_product(dto)
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["patch"], url_path="stock")
    def update_stock(self, request: Request) -> Response:
        """PATCH /products/stock"""
        dto = validate_input(UpdateStockDTO, request.data)
        return Response(self._service.update_stock(dto))

    def destroy(self, request: Request, id: str | None = None) -> Response:
        """DELETE /products/{id}"""
        product_id = to_int(id)
        if product_id is None:
            raise ParseError(INVALID_ID_MESSAGE)
        return Response(self._service.delete_product(product_id))
