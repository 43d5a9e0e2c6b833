import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from app.platform.accounts.models import User
from app.platform.flac.store import SharingConfigStore
from app.workspace.prospects.models import (
    Buyer,
    BuyerCompanyOverview,
    BuyerFinancialDetails,
    BuyerPartnershipDetails,
    Country,
    Deal,
    Partner,
    Seller,
    SellerCompanyOverview,
    SellerFinancialDetails,
)


@pytest.fixture(autouse=True)
def clear_cache():
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def login(api_client):
    def _login(user):
        api_client.force_authenticate(user=user)
        return api_client
    return _login


@pytest.fixture
def admin_user(db):
    return User.objects.create_user(email="admin@ventureflow.test", password="secret", role=User.Role.ADMIN)


@pytest.fixture
def staff_user(db):
    return User.objects.create_user(email="staff@ventureflow.test", password="secret", role=User.Role.STAFF)


@pytest.fixture
def partner_user(db):
    return User.objects.create_user(email="partner@acme.test", password="secret", role=User.Role.PARTNER)


@pytest.fixture
def partner(partner_user):
    return Partner.objects.create(
        partner_id="1X-P001",
        user=partner_user,
        company_name="Acme Partners",
        contact_email="partner@acme.test",
    )


@pytest.fixture
def other_partner(db):
    return Partner.objects.create(partner_id="1X-P002", company_name="Other Partners")


@pytest.fixture
def japan(db):
    return Country.objects.create(name="Japan", alpha_2_code="JP", alpha_3_code="JPN")


@pytest.fixture
def make_buyer(db):
    def _make(buyer_id, reg_name="Hidden Holdings", partner=None, pinned=False, country=None, status="active"):
        overview = BuyerCompanyOverview.objects.create(
            reg_name=reg_name,
            hq_country=country,
            status=status,
            email="contact@hidden.test",
            niche_industry=["Fintech"],
        )
        financial = BuyerFinancialDetails.objects.create(default_currency="USD")
        partnership = BuyerPartnershipDetails.objects.create(partner=partner, partnership_affiliation=partner is not None)
        buyer = Buyer.objects.create(
            buyer_id=buyer_id,
            pinned=pinned,
            company_overview=overview,
            financial_details=financial,
            partnership_details=partnership,
        )
        Deal.objects.create(buyer=buyer, name=f"{buyer_id} deal", stage_code="K", progress_percent=40)
        return buyer
    return _make


@pytest.fixture
def make_seller(db):
    def _make(seller_id, reg_name="Quiet Manufacturing", pinned=False, country=None, status="active"):
        overview = SellerCompanyOverview.objects.create(reg_name=reg_name, hq_country=country, status=status)
        financial = SellerFinancialDetails.objects.create(default_currency="JPY", ebitda_value="1200000")
        seller = Seller.objects.create(
            seller_id=seller_id,
            pinned=pinned,
            company_overview=overview,
            financial_details=financial,
        )
        Deal.objects.create(seller=seller, name=f"{seller_id} deal", stage_code="N", progress_percent=10, pipeline_type="seller")
        return seller
    return _make


@pytest.fixture
def sharing_config(db):
    def _set(entity_type, config):
        return SharingConfigStore().put(entity_type, config)
    return _set
