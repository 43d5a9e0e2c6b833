# app/workspace/prospects/serializers.py
from rest_framework import serializers

from app.platform.flac.serializers import ProjectedFieldsMixin

from .models import (
    Buyer,
    BuyerCompanyOverview,
    BuyerFinancialDetails,
    BuyerPartnershipDetails,
    BuyerTargetPreference,
    BuyerTeaserCenter,
    Country,
    Deal,
    Partner,
    Seller,
    SellerCompanyOverview,
    SellerFinancialDetails,
    SellerPartnershipDetails,
    SellerTeaserCenter,
)


# ---------------------------------------------------------
# Reference Serializers
# ---------------------------------------------------------
class CountrySerializer(serializers.ModelSerializer):
    svg_icon_url = serializers.CharField(read_only=True)

    class Meta:
        model = Country
        fields = ("id", "name", "alpha_2_code", "alpha_3_code", "svg_icon_url")


class DealSummarySerializer(ProjectedFieldsMixin, serializers.ModelSerializer):
    projection_key = "deals"

    class Meta:
        model = Deal
        fields = (
            "id", "buyer", "seller", "name", "stage_code", "pipeline_type",
            "progress_percent", "priority", "status", "created_at",
        )


# ---------------------------------------------------------
# Buyer Serializers
# ---------------------------------------------------------
class BuyerCompanyOverviewSerializer(ProjectedFieldsMixin, serializers.ModelSerializer):
    projection_key = "companyOverview"
    hq_country = CountrySerializer(read_only=True)

    class Meta:
        model = BuyerCompanyOverview
        fields = "__all__"


class BuyerTargetPreferenceSerializer(ProjectedFieldsMixin, serializers.ModelSerializer):
    projection_key = "targetPreference"

    class Meta:
        model = BuyerTargetPreference
        fields = "__all__"


class BuyerFinancialDetailsSerializer(ProjectedFieldsMixin, serializers.ModelSerializer):
    projection_key = "financialDetails"

    class Meta:
        model = BuyerFinancialDetails
        fields = "__all__"


class BuyerPartnershipDetailsSerializer(ProjectedFieldsMixin, serializers.ModelSerializer):
    projection_key = "partnershipDetails"

    class Meta:
        model = BuyerPartnershipDetails
        fields = "__all__"


class BuyerTeaserCenterSerializer(ProjectedFieldsMixin, serializers.ModelSerializer):
    projection_key = "teaserCenter"

    class Meta:
        model = BuyerTeaserCenter
        fields = "__all__"


class BuyerSerializer(ProjectedFieldsMixin, serializers.ModelSerializer):
    company_overview = BuyerCompanyOverviewSerializer(read_only=True)
    target_preference = BuyerTargetPreferenceSerializer(read_only=True)
    financial_details = BuyerFinancialDetailsSerializer(read_only=True)
    partnership_details = BuyerPartnershipDetailsSerializer(read_only=True)
    teaser_center = BuyerTeaserCenterSerializer(read_only=True)
    deals = DealSummarySerializer(many=True, read_only=True)

    class Meta:
        model = Buyer
        fields = "__all__"


# ---------------------------------------------------------
# Seller Serializers
# ---------------------------------------------------------
class SellerCompanyOverviewSerializer(ProjectedFieldsMixin, serializers.ModelSerializer):
    projection_key = "companyOverview"
    hq_country = CountrySerializer(read_only=True)

    class Meta:
        model = SellerCompanyOverview
        fields = "__all__"


class SellerFinancialDetailsSerializer(ProjectedFieldsMixin, serializers.ModelSerializer):
    projection_key = "financialDetails"

    class Meta:
        model = SellerFinancialDetails
        fields = "__all__"


class SellerPartnershipDetailsSerializer(ProjectedFieldsMixin, serializers.ModelSerializer):
    projection_key = "partnershipDetails"

    class Meta:
        model = SellerPartnershipDetails
        fields = "__all__"


class SellerTeaserCenterSerializer(ProjectedFieldsMixin, serializers.ModelSerializer):
    projection_key = "teaserCenter"

    class Meta:
        model = SellerTeaserCenter
        fields = "__all__"


class SellerSerializer(ProjectedFieldsMixin, serializers.ModelSerializer):
    company_overview = SellerCompanyOverviewSerializer(read_only=True)
    financial_details = SellerFinancialDetailsSerializer(read_only=True)
    partnership_details = SellerPartnershipDetailsSerializer(read_only=True)
    teaser_center = SellerTeaserCenterSerializer(read_only=True)
    deals = DealSummarySerializer(many=True, read_only=True)

    class Meta:
        model = Seller
        fields = "__all__"


# ---------------------------------------------------------
# Partner Profile
# ---------------------------------------------------------
class PartnerProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = Partner
        fields = (
            "id", "partner_id", "company_name", "company_address",
            "contact_person", "contact_email", "contact_phone", "status",
        )
        read_only_fields = ("id", "partner_id", "status")
