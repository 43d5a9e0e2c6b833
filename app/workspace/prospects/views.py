# app/workspace/prospects/views.py
import logging
import uuid

from django.core.paginator import Paginator
from django.db import transaction
from django.db.models import Q
from django.http import Http404
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated

from drf_spectacular.utils import extend_schema, OpenApiParameter

from app.platform.flac.engine import PartnerSharingEngine
from app.platform.rbac.mixins import PartnerScopeMixin
from app.platform.rbac.permissions import IsPartner
from app.utils.exception_handler import format_validation_error
from app.utils.response import api_response

from .models import Buyer, Seller
from .serializers import BuyerSerializer, PartnerProfileSerializer, SellerSerializer

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 10
MAX_PER_PAGE = 100
PORTAL_PER_PAGE = 15
DASHBOARD_FEED_SIZE = 20
DEFAULT_SORT = ("-pinned", "-created_at")

LIST_PARAMETERS = [
    OpenApiParameter("search", str, description="Public id or registered name"),
    OpenApiParameter("country", int, many=True, description="HQ country id (repeatable)"),
    OpenApiParameter("status", str, description="Company overview status"),
    OpenApiParameter("show_only_pinned", str, description="1 to list pinned records only"),
    OpenApiParameter("sort", str, description="created_at | <public id> | pinned, '-' prefix for descending"),
    OpenApiParameter("page", int),
    OpenApiParameter("per_page", int),
]


def _int_param(value, default, minimum=1, maximum=None):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    number = max(number, minimum)
    if maximum is not None:
        number = min(number, maximum)
    return number


def _is_uuid(value) -> bool:
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


# ------------------------------------------------------------------
# Listings: query building shared by the prospect, portal and dashboard views
# ------------------------------------------------------------------
class ProspectListing(PartnerScopeMixin):
    """
    List/retrieve plumbing for one entity type.

    Partner-class requests are row-scoped by ``partner_scope`` and then
    projected through the sharing engine; everyone else gets full records.
    """
    entity_type = None
    model = None
    serializer_class = None
    public_id_field = None
    detail_relations = ()
    label = None
    feed_type = None

    def __init__(self, engine=None):
        self.engine = engine or PartnerSharingEngine()

    def full_queryset(self):
        return self.model.objects.select_related(
            "company_overview__hq_country", *self.detail_relations
        ).prefetch_related("deals")

    def partner_scope(self, request, qs):
        """Row-level filter for partner requesters. Independent of projection."""
        return qs

    def apply_filters(self, request, qs):
        params = request.query_params

        search = (params.get("search") or "").strip()
        if search:
            qs = qs.filter(
                Q(**{f"{self.public_id_field}__icontains": search})
                | Q(company_overview__reg_name__icontains=search)
            )

        countries = [c for c in params.getlist("country") if str(c).isdigit()]
        if countries:
            qs = qs.filter(company_overview__hq_country__in=countries)

        status_q = params.get("status")
        if status_q:
            qs = qs.filter(company_overview__status=status_q)

        if params.get("show_only_pinned") in ("1", "true"):
            qs = qs.filter(pinned=True)

        return qs

    def apply_sort(self, request, qs):
        allowed = {"created_at", "pinned", self.public_id_field}
        ordering = []
        for key in (request.query_params.get("sort") or "").split(","):
            key = key.strip()
            if key.lstrip("-") in allowed:
                ordering.append(key)
        return qs.order_by(*(ordering or DEFAULT_SORT))

    def paginate(self, request, qs, default_per_page=DEFAULT_PER_PAGE):
        per_page = _int_param(request.query_params.get("per_page"), default_per_page, maximum=MAX_PER_PAGE)
        return Paginator(qs, per_page).get_page(request.query_params.get("page", 1))

    def list_response(self, request, default_per_page=DEFAULT_PER_PAGE):
        partner = self.is_partner_request(request)
        qs = self.model.objects.all() if partner else self.full_queryset()
        qs = self.apply_sort(request, self.apply_filters(request, qs))

        resolved = plan = None
        if partner:
            qs, resolved, plan = self.engine.project(self.partner_scope(request, qs), self.entity_type)

        page = self.paginate(request, qs, default_per_page)
        assembler = self.engine.assembler
        records = assembler.serialize(self.serializer_class, page.object_list, plan)
        payload = assembler.assemble_page(records, resolved, page)
        return api_response(200, "success", payload["data"], meta=payload["meta"])

    def retrieve_response(self, request, pk):
        partner = self.is_partner_request(request)
        not_found = f"{self.label} not found or access denied." if partner else f"{self.label} not found."
        if not _is_uuid(pk):
            raise Http404(not_found)

        resolved = plan = None
        if partner:
            qs = self.partner_scope(request, self.model.objects.filter(pk=pk))
            qs, resolved, plan = self.engine.project(qs, self.entity_type)
        else:
            qs = self.full_queryset().filter(pk=pk)

        record = qs.first()
        if record is None:
            raise Http404(not_found)

        assembler = self.engine.assembler
        data = assembler.serialize(self.serializer_class, record, plan, many=False)
        payload = assembler.assemble(data, resolved)
        return api_response(200, "success", payload["data"], meta=payload["meta"])

    def feed(self, request, limit=DASHBOARD_FEED_SIZE):
        """Most recent records for the dashboard, registered name masked for partners."""
        show_name = True
        if self.is_partner_request(request):
            show_name = self.engine.allowed_fields(self.entity_type).allows("company_overview.reg_name")

        qs = self.model.objects.select_related("company_overview").order_by("-created_at")[:limit]
        items = []
        for record in qs:
            overview = record.company_overview
            public_id = getattr(record, self.public_id_field)
            if show_name:
                reg_name = overview.reg_name if overview else None
            else:
                reg_name = public_id or "Restricted"
            items.append({
                "id": str(record.id),
                "reg_name": reg_name,
                "status": overview.status if overview else None,
                "type": self.feed_type,
                "created_at": record.created_at,
            })
        return items


class BuyerListing(ProspectListing):
    """Partners only see buyers introduced through their own partnership."""
    entity_type = "buyer"
    model = Buyer
    serializer_class = BuyerSerializer
    public_id_field = "buyer_id"
    detail_relations = ("target_preference", "financial_details", "partnership_details", "teaser_center")
    label = "Buyer"
    feed_type = 2

    def partner_scope(self, request, qs):
        profile = self.get_partner_profile(request)
        if profile is None:
            return qs.none()
        return qs.filter(partnership_details__partner=profile)


class SellerListing(ProspectListing):
    entity_type = "seller"
    model = Seller
    serializer_class = SellerSerializer
    public_id_field = "seller_id"
    detail_relations = ("financial_details", "partnership_details", "teaser_center")
    label = "Seller"
    feed_type = 1


# ------------------------------------------------------------------
class ProspectExceptionMixin:

    def _handle_exception(self, exc: Exception, where: str = ""):
        if isinstance(exc, ValidationError):
            return api_response(
                status_code=status.HTTP_400_BAD_REQUEST,
                status="failure",
                data={},
                error_code="VALIDATION_ERROR",
                error_message=format_validation_error(exc.detail),
            )
        if isinstance(exc, Http404):
            return api_response(
                status_code=status.HTTP_404_NOT_FOUND,
                status="failure",
                data={},
                error_code="NOT_FOUND",
                error_message=str(exc) or "Not found.",
            )
        logger.exception("%s: %s", where, str(exc))
        return api_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            status="failure",
            data={},
            error_code="SERVER_ERROR",
            error_message=str(exc),
        )


# ------------------------------------------------------------------
class BuyerViewSet(ProspectExceptionMixin, viewsets.ViewSet):
    """
    Buyers (investors): list and retrieve.
    """
    permission_classes = [IsAuthenticated]
    listing_class = BuyerListing

    @extend_schema(tags=["Prospects / Buyers"], summary="List buyers", parameters=LIST_PARAMETERS)
    def list(self, request):
        try:
            return self.listing_class().list_response(request)
        except Exception as exc:
            return self._handle_exception(exc, "BuyerViewSet.list")

    @extend_schema(tags=["Prospects / Buyers"], summary="Retrieve a buyer")
    def retrieve(self, request, pk=None):
        try:
            return self.listing_class().retrieve_response(request, pk)
        except Exception as exc:
            return self._handle_exception(exc, "BuyerViewSet.retrieve")


class SellerViewSet(ProspectExceptionMixin, viewsets.ViewSet):
    """
    Sellers (targets): list and retrieve. Partners see every seller, limited
    to the fields shared with them.
    """
    permission_classes = [IsAuthenticated]
    listing_class = SellerListing

    @extend_schema(tags=["Prospects / Sellers"], summary="List sellers", parameters=LIST_PARAMETERS)
    def list(self, request):
        try:
            return self.listing_class().list_response(request)
        except Exception as exc:
            return self._handle_exception(exc, "SellerViewSet.list")

    @extend_schema(tags=["Prospects / Sellers"], summary="Retrieve a seller")
    def retrieve(self, request, pk=None):
        try:
            return self.listing_class().retrieve_response(request, pk)
        except Exception as exc:
            return self._handle_exception(exc, "SellerViewSet.retrieve")


# ------------------------------------------------------------------
class PartnerPortalViewSet(ProspectExceptionMixin, PartnerScopeMixin, viewsets.ViewSet):
    """
    Partner portal: shared investors and targets, counts and the partner's
    own profile.
    """
    permission_classes = [IsAuthenticated, IsPartner]

    @extend_schema(tags=["Partner Portal"], summary="Shared investor and target counts")
    @action(detail=False, methods=["get"])
    def stats(self, request):
        try:
            buyers = BuyerListing()
            data = {
                "shared_investors": buyers.partner_scope(request, Buyer.objects.all()).count(),
                "shared_targets": Seller.objects.count(),
            }
            return api_response(200, "success", data)
        except Exception as exc:
            return self._handle_exception(exc, "PartnerPortalViewSet.stats")

    @extend_schema(tags=["Partner Portal"], summary="Investors shared with the partner", parameters=LIST_PARAMETERS)
    @action(detail=False, methods=["get"])
    def investors(self, request):
        try:
            return BuyerListing().list_response(request, default_per_page=PORTAL_PER_PAGE)
        except Exception as exc:
            return self._handle_exception(exc, "PartnerPortalViewSet.investors")

    @extend_schema(tags=["Partner Portal"], summary="Targets shared with the partner", parameters=LIST_PARAMETERS)
    @action(detail=False, methods=["get"])
    def targets(self, request):
        try:
            return SellerListing().list_response(request, default_per_page=PORTAL_PER_PAGE)
        except Exception as exc:
            return self._handle_exception(exc, "PartnerPortalViewSet.targets")

    @extend_schema(tags=["Partner Portal"], summary="Get or update the partner profile", request=PartnerProfileSerializer)
    @action(detail=False, methods=["get", "patch"])
    def profile(self, request):
        try:
            partner = self.get_partner_profile(request)
            if partner is None:
                raise Http404("Partner profile not found.")

            if request.method == "GET":
                return api_response(200, "success", PartnerProfileSerializer(partner).data)

            with transaction.atomic():
                serializer = PartnerProfileSerializer(partner, data=request.data, partial=True)
                serializer.is_valid(raise_exception=True)
                serializer.save()
            logger.info("Partner %s updated profile fields: %s", partner.partner_id, ", ".join(sorted(serializer.validated_data)))
            return api_response(200, "success", serializer.data)
        except Exception as exc:
            return self._handle_exception(exc, "PartnerPortalViewSet.profile")


# ------------------------------------------------------------------
class DashboardViewSet(ProspectExceptionMixin, viewsets.ViewSet):
    """
    Dashboard feed of the most recent buyers and sellers.
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Dashboard"], summary="Most recent buyers and sellers")
    @action(detail=False, methods=["get"], url_path="seller-buyer-data")
    def seller_buyer_data(self, request):
        try:
            engine = PartnerSharingEngine()
            combined = SellerListing(engine).feed(request) + BuyerListing(engine).feed(request)
            combined.sort(key=lambda item: item["created_at"], reverse=True)
            data = []
            for item in combined[:DASHBOARD_FEED_SIZE]:
                item.pop("created_at")
                data.append(item)
            return api_response(200, "success", data)
        except Exception as exc:
            return self._handle_exception(exc, "DashboardViewSet.seller_buyer_data")
