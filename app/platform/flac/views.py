# app/platform/flac/views.py
import logging

from django.db import transaction
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema

from app.core.services.audit import record_audit
from app.platform.rbac.permissions import IsAdminRole
from app.utils.exception_handler import format_validation_error
from app.utils.response import api_response

from .descriptors import registered_descriptors
from .engine import PartnerSharingEngine
from .models import PartnerSetting
from .serializers import (
    PartnerSettingsUpdateSerializer,
    sharing_entity_type,
)

logger = logging.getLogger(__name__)


class PartnerSettingViewSet(viewsets.ViewSet):
    """
    Partner sharing configuration, administrators only.
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
        logger.exception("%s: %s", where, str(exc))
        return api_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            status="failure",
            data={},
            error_code="SERVER_ERROR",
            error_message=str(exc),
        )

    def get_engine(self):
        return PartnerSharingEngine()

    @extend_schema(tags=["Partner Settings"], summary="List all partner settings")
    def list(self, request):
        try:
            return api_response(200, "success", self.get_engine().store.all())
        except Exception as exc:
            return self._handle_exception(exc, "PartnerSettingViewSet.list")

    @extend_schema(
        tags=["Partner Settings"],
        summary="Create or update partner settings",
        request=PartnerSettingsUpdateSerializer,
    )
    def create(self, request):
        try:
            serializer = PartnerSettingsUpdateSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            engine = self.get_engine()
            saved = {}
            unknown_fields = {}
            # all keys or none
            with transaction.atomic():
                for key, value in serializer.validated_data["settings"].items():
                    entity_type = sharing_entity_type(key)
                    if entity_type is None:
                        setting, _ = PartnerSetting.objects.update_or_create(
                            setting_key=key, defaults={"setting_value": value}
                        )
                    else:
                        setting = engine.store.put(entity_type, value)
                        unknown = engine.unknown_fields(entity_type, value)
                        if unknown:
                            unknown_fields[setting.setting_key] = unknown

                    saved[setting.setting_key] = setting.setting_value
                    record_audit(
                        obj=setting,
                        action="partner_setting.updated",
                        description=f"Updated partner setting {setting.setting_key}",
                        metadata={"setting_key": setting.setting_key, "unknown_fields": unknown_fields.get(setting.setting_key, [])},
                        request=request,
                    )

            logger.info("Partner settings updated by %s: %s", request.user, ", ".join(sorted(saved)))
            return api_response(200, "success", {
                "settings": saved,
                "unknown_fields": unknown_fields,
            })
        except Exception as exc:
            return self._handle_exception(exc, "PartnerSettingViewSet.create")

    @extend_schema(tags=["Partner Settings"], summary="List shareable fields per entity type")
    @action(detail=False, methods=["get"], url_path="fields")
    def fields(self, request):
        try:
            data = {
                descriptor.entity_type: descriptor.shareable_fields()
                for descriptor in registered_descriptors()
            }
            return api_response(200, "success", data)
        except Exception as exc:
            return self._handle_exception(exc, "PartnerSettingViewSet.fields")
