# prospects/urls.py
from rest_framework import routers
from django.urls import path, include
from .views import BuyerViewSet, SellerViewSet, PartnerPortalViewSet, DashboardViewSet

router = routers.DefaultRouter()
router.register(r"buyers", BuyerViewSet, basename="buyers")
router.register(r"sellers", SellerViewSet, basename="sellers")
router.register(r"partner-portal", PartnerPortalViewSet, basename="partner-portal")
router.register(r"dashboard", DashboardViewSet, basename="dashboard")

urlpatterns = [
    path("", include(router.urls)),
]
