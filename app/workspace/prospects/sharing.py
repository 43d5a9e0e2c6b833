"""Buyer and seller descriptors for the partner sharing engine."""
from app.platform.flac.descriptors import (
    EntityDescriptor,
    RelationDescriptor,
    register_descriptor,
)

from .models import (
    Buyer,
    BuyerCompanyOverview,
    BuyerFinancialDetails,
    BuyerPartnershipDetails,
    BuyerTargetPreference,
    BuyerTeaserCenter,
    Deal,
    Seller,
    SellerCompanyOverview,
    SellerFinancialDetails,
    SellerPartnershipDetails,
    SellerTeaserCenter,
)

DEAL_FIELDS = ("id", "stage_code", "progress_percent", "created_at")


def _relation(key, attr, model, **kwargs):
    return RelationDescriptor(key=key, attr=attr, model=model, fk_field=attr, **kwargs)


def _company_overview(model):
    # the country record is always joined so the flag and name can be rendered
    return _relation(
        "companyOverview", "company_overview", model,
        required_fields=frozenset({"hq_country"}),
        nested=("hq_country",),
    )


def _deals(owner_fk):
    return RelationDescriptor(
        key="deals",
        attr="deals",
        model=Deal,
        fixed_fields=frozenset({*DEAL_FIELDS, owner_fk}),
    )


BUYER_DESCRIPTOR = EntityDescriptor(
    entity_type="buyer",
    model=Buyer,
    public_id_field="buyer_id",
    relations=(
        _company_overview(BuyerCompanyOverview),
        _relation("targetPreference", "target_preference", BuyerTargetPreference),
        _relation("financialDetails", "financial_details", BuyerFinancialDetails),
        _relation("partnershipDetails", "partnership_details", BuyerPartnershipDetails),
        _relation("teaserCenter", "teaser_center", BuyerTeaserCenter),
        _deals("buyer"),
    ),
)

SELLER_DESCRIPTOR = EntityDescriptor(
    entity_type="seller",
    model=Seller,
    public_id_field="seller_id",
    relations=(
        _company_overview(SellerCompanyOverview),
        _relation("financialDetails", "financial_details", SellerFinancialDetails),
        _relation("partnershipDetails", "partnership_details", SellerPartnershipDetails),
        _relation("teaserCenter", "teaser_center", SellerTeaserCenter),
        _deals("seller"),
    ),
)


def register_sharing_descriptors():
    register_descriptor(BUYER_DESCRIPTOR)
    register_descriptor(SELLER_DESCRIPTOR)
