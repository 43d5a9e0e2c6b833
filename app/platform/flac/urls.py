from rest_framework.routers import DefaultRouter

from .views import PartnerSettingViewSet

router = DefaultRouter()
router.register(r"partner-settings", PartnerSettingViewSet, basename="partner-settings")

urlpatterns = router.urls
