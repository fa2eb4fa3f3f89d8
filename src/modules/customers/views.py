"""Customer API views.

Exposes the ``CustomerService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into the standard error
body (``status`` / ``message`` / ``internalCode``) — the view never
swallows generic exceptions.
"""

from __future__ import annotations

from collections.abc import Mapping

from drf_spectacular.utils import OpenApiResponse, extend_schema
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.reverse import reverse
from rest_framework.views import APIView
from rest_framework.viewsets import GenericViewSet

from modules.core.authentication import issue_access_token
from modules.core.exceptions import ErrorCode, error_response
from modules.customers.dtos import CustomerRequestDTO, LoginDTO
from modules.customers.exceptions import (
    CustomerAccessDenied,
    CustomerNotFound,
    InvalidCredentials,
    InvalidCustomerRequest,
)
from modules.customers.filters import CustomerFilter
from modules.customers.models import Customer
from modules.customers.repositories.django_repository import CustomerDjangoRepository
from modules.customers.serializers import (
    CustomerProfileSerializer,
    CustomerRequestSerializer,
    CustomerSerializer,
    LoginSerializer,
    TokenSerializer,
)
from modules.customers.services import CustomerService
from modules.customers.validators import FieldViolation


def _payload(request: Request) -> Mapping:
    return request.data if isinstance(request.data, Mapping) else {}


def _violations_from_pydantic(exc: PydanticValidationError) -> list[FieldViolation]:
    return [
        FieldViolation(str(err["loc"][0]) if err["loc"] else "", err["msg"])
        for err in exc.errors()
    ]


def _invalid(violations: list[FieldViolation]) -> Response:
    return error_response(
        ErrorCode.INVALID_REQUEST,
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        errors=[v.as_dict() for v in violations],
    )


def _denied() -> Response:
    return error_response(ErrorCode.ACCESS_DENIED, status.HTTP_403_FORBIDDEN)


def _not_found(customer_id: str) -> Response:
    return error_response(
        ErrorCode.CUSTOMER_NOT_FOUND, status.HTTP_404_NOT_FOUND, customer_id
    )


class CustomerViewSet(GenericViewSet):
    """ViewSet for Customer CRUD operations.

    Uses ``CustomerService`` with ``CustomerDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet`` — all ORM access goes through
    the service/repository layer.
    """

    queryset = Customer.objects.all()
    serializer_class = CustomerSerializer
    filterset_class = CustomerFilter
    pagination_class = None

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = CustomerService(repository=CustomerDjangoRepository())

    def _request_dto(self, request: Request) -> CustomerRequestDTO:
        try:
            return CustomerRequestDTO.from_payload(_payload(request))
        except PydanticValidationError as exc:
            raise InvalidCustomerRequest(_violations_from_pydantic(exc)) from exc

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/customers/?name=&status="""
        filterset = CustomerFilter(request.query_params)
        if not filterset.is_valid():
            return _invalid(
                [
                    FieldViolation(field, str(message))
                    for field, messages in filterset.errors.items()
                    for message in messages
                ]
            )
        params = filterset.form.cleaned_data
        try:
            customers = self._service.list_customers(
                request.user, name=params.get("name"), status=params.get("status")
            )
        except CustomerAccessDenied:
            return _denied()
        return Response(CustomerSerializer(customers, many=True).data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/customers/{pk}/"""
        try:
            customer = self._service.get_customer(pk, request.user)
        except CustomerAccessDenied:
            return _denied()
        except CustomerNotFound:
            return _not_found(pk)
        return Response(CustomerSerializer(customer).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    @extend_schema(
        request=CustomerRequestSerializer,
        responses={201: OpenApiResponse(description="Customer created")},
    )
    def create(self, request: Request) -> Response:
        """POST /api/v1/customers/"""
        try:
            dto = self._request_dto(request)
            customer = self._service.create_customer(dto, request.user)
        except InvalidCustomerRequest as exc:
            return _invalid(exc.violations)
        except CustomerAccessDenied:
            return _denied()

        location = reverse("customer-detail", args=[customer.id], request=request)
        return Response(status=status.HTTP_201_CREATED, headers={"Location": location})

    @extend_schema(
        request=CustomerRequestSerializer,
        responses={204: OpenApiResponse(description="Customer updated")},
    )
    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/customers/{pk}/"""
        try:
            dto = self._request_dto(request)
            self._service.update_customer(pk, dto, request.user)
        except InvalidCustomerRequest as exc:
            return _invalid(exc.violations)
        except CustomerAccessDenied:
            return _denied()
        except CustomerNotFound:
            return _not_found(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/customers/{pk}/"""
        try:
            self._service.delete_customer(pk, request.user)
        except CustomerAccessDenied:
            return _denied()
        except CustomerNotFound:
            return _not_found(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)


class LoginView(APIView):
    """Exchange email + password for an access token."""

    authentication_classes: list = []
    permission_classes = [AllowAny]

    @extend_schema(request=LoginSerializer, responses={200: TokenSerializer})
    def post(self, request: Request) -> Response:
        """POST /api/v1/auth/login/"""
        try:
            dto = LoginDTO(**{k: _payload(request).get(k) for k in ("email", "password")})
        except PydanticValidationError as exc:
            return _invalid(_violations_from_pydantic(exc))

        service = CustomerService(repository=CustomerDjangoRepository())
        try:
            customer = service.authenticate(dto)
        except InvalidCredentials:
            return error_response(ErrorCode.UNAUTHORIZED, status.HTTP_401_UNAUTHORIZED)

        return Response({"access": str(issue_access_token(customer))})


class MeView(APIView):
    """The authenticated customer's own record."""

    @extend_schema(responses={200: CustomerProfileSerializer})
    def get(self, request: Request) -> Response:
        """GET /api/v1/auth/me/"""
        service = CustomerService(repository=CustomerDjangoRepository())
        try:
            customer = service.get_customer(request.user.customer_id, request.user)
        except CustomerNotFound:
            return _not_found(request.user.customer_id)
        return Response(CustomerProfileSerializer(customer).data)
