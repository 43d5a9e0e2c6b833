# app/workspace/industries/views.py
import logging

from django.db import transaction
from django.http import Http404
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema

from app.core.services.audit import record_audit
from app.platform.rbac.permissions import IsAdminRole
from app.utils.exception_handler import format_validation_error
from app.utils.response import api_response

from . import services
from .models import Industry
from .serializers import (
    IndustrySerializer,
    MergeIndustrySerializer,
    PromoteIndustrySerializer,
    RenameAdhocIndustrySerializer,
)

logger = logging.getLogger(__name__)


class IndustryViewSet(viewsets.ViewSet):
    """
    Canonical industries and reconciliation of ad-hoc industry tags on
    prospect records. Administrators only.
    """
    permission_classes = [IsAuthenticated, IsAdminRole]

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
                error_message=str(exc) or "Industry not found.",
            )
        logger.exception("%s: %s", where, str(exc))
        return api_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            status="failure",
            data={},
            error_code="SERVER_ERROR",
            error_message=str(exc),
        )

    def get_object(self, pk):
        try:
            return Industry.objects.get(pk=int(pk))
        except (TypeError, ValueError, Industry.DoesNotExist):
            raise Http404("Industry not found.")

    def _audit(self, request, action_name, description, **metadata):
        record_audit(action=action_name, description=description, metadata=metadata, request=request)

    # ---------------------------------------------------------
    # Canonical industries
    # ---------------------------------------------------------
    @extend_schema(tags=["Industries"], summary="List industries with usage counts")
    def list(self, request):
        try:
            industries = list(Industry.objects.all())
            counts = services.usage_counts(industry.id for industry in industries)
            data = []
            for industry, row in zip(industries, IndustrySerializer(industries, many=True).data):
                data.append({**row, "usage_count": counts.get(industry.id, 0)})
            return api_response(200, "success", data)
        except Exception as exc:
            return self._handle_exception(exc, "IndustryViewSet.list")

    @extend_schema(tags=["Industries"], summary="Create an industry", request=IndustrySerializer)
    def create(self, request):
        try:
            serializer = IndustrySerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            with transaction.atomic():
                industry = serializer.save()
                self._audit(request, "industry.created", f"Created industry {industry.name}", industry_id=industry.id)
            return api_response(201, "success", IndustrySerializer(industry).data)
        except Exception as exc:
            return self._handle_exception(exc, "IndustryViewSet.create")

    @extend_schema(tags=["Industries"], summary="Update an industry", request=IndustrySerializer)
    def partial_update(self, request, pk=None):
        try:
            industry = self.get_object(pk)
            old_name = industry.name
            serializer = IndustrySerializer(industry, data=request.data, partial=True)
            serializer.is_valid(raise_exception=True)

            records_updated = 0
            with transaction.atomic():
                industry = serializer.save()
                if industry.name != old_name:
                    records_updated = services.cascade_rename(industry)
                self._audit(
                    request, "industry.updated", f"Updated industry {old_name}",
                    industry_id=industry.id, old_name=old_name, new_name=industry.name,
                    records_updated=records_updated,
                )
            return api_response(200, "success", {
                **IndustrySerializer(industry).data,
                "records_updated": records_updated,
            })
        except Exception as exc:
            return self._handle_exception(exc, "IndustryViewSet.partial_update")

    @extend_schema(tags=["Industries"], summary="Delete an unused industry")
    def destroy(self, request, pk=None):
        try:
            industry = self.get_object(pk)
            usage = services.usage_counts([industry.id])[industry.id]
            if usage:
                return api_response(
                    status_code=status.HTTP_409_CONFLICT,
                    status="failure",
                    data={"usage_count": usage},
                    error_code="INDUSTRY_IN_USE",
                    error_message=(
                        f"Cannot delete: this industry is used by {usage} prospect(s). "
                        "Remove it from all prospects first, or deactivate it instead."
                    ),
                )
            with transaction.atomic():
                self._audit(request, "industry.deleted", f"Deleted industry {industry.name}", industry_id=industry.id)
                industry.delete()
            return api_response(200, "success", {"message": "Industry deleted successfully."})
        except Exception as exc:
            return self._handle_exception(exc, "IndustryViewSet.destroy")

    # ---------------------------------------------------------
    # Ad-hoc tags
    # ---------------------------------------------------------
    @extend_schema(tags=["Industries"], summary="Ad-hoc industry tags with merge suggestions")
    @action(detail=False, methods=["get"], url_path="adhoc")
    def adhoc(self, request):
        try:
            return api_response(200, "success", services.find_adhoc())
        except Exception as exc:
            return self._handle_exception(exc, "IndustryViewSet.adhoc")

    @extend_schema(tags=["Industries"], summary="Promote an ad-hoc tag to a canonical industry", request=PromoteIndustrySerializer)
    @action(detail=False, methods=["post"], url_path="promote")
    def promote(self, request):
        try:
            serializer = PromoteIndustrySerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            name = serializer.validated_data["name"]

            with transaction.atomic():
                industry, outcome, updated = services.promote(name)
                self._audit(
                    request, f"industry.{outcome}", f"Ad-hoc industry {name} {outcome}",
                    industry_id=industry.id, adhoc_name=name, records_updated=updated,
                )
            return api_response(200, "success", {
                "industry": IndustrySerializer(industry).data,
                "action": outcome,
                "records_updated": updated,
            })
        except Exception as exc:
            return self._handle_exception(exc, "IndustryViewSet.promote")

    @extend_schema(tags=["Industries"], summary="Merge an ad-hoc tag into a canonical industry", request=MergeIndustrySerializer)
    @action(detail=False, methods=["post"], url_path="merge")
    def merge(self, request):
        try:
            serializer = MergeIndustrySerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            name = serializer.validated_data["adhoc_name"]
            target = serializer.validated_data["target_industry_id"]

            with transaction.atomic():
                updated = services.replace_adhoc(name, target)
                self._audit(
                    request, "industry.merged", f"Merged {name} into {target.name}",
                    industry_id=target.id, adhoc_name=name, records_updated=updated,
                )
            return api_response(200, "success", {
                "target_industry": IndustrySerializer(target).data,
                "records_updated": updated,
            })
        except Exception as exc:
            return self._handle_exception(exc, "IndustryViewSet.merge")

    @extend_schema(tags=["Industries"], summary="Rename an ad-hoc tag everywhere", request=RenameAdhocIndustrySerializer)
    @action(detail=False, methods=["post"], url_path="rename-adhoc")
    def rename_adhoc(self, request):
        try:
            serializer = RenameAdhocIndustrySerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            old_name = serializer.validated_data["old_name"]
            new_name = serializer.validated_data["new_name"]

            if old_name.lower() == new_name.lower():
                return api_response(200, "success", {"records_updated": 0})

            with transaction.atomic():
                updated = services.rename_adhoc(old_name, new_name)
                self._audit(
                    request, "industry.adhoc_renamed", f"Renamed ad-hoc industry {old_name} to {new_name}",
                    old_name=old_name, new_name=new_name, records_updated=updated,
                )
            return api_response(200, "success", {"records_updated": updated})
        except Exception as exc:
            return self._handle_exception(exc, "IndustryViewSet.rename_adhoc")
