from django.conf import settings
from django.db import models

from app.core.models import CoreBaseModel


# =========================================================
#  REFERENCE DATA
# =========================================================
class Country(models.Model):
    name = models.CharField(max_length=128)
    alpha_2_code = models.CharField(max_length=2, blank=True, default="")
    alpha_3_code = models.CharField(max_length=3, blank=True, default="")
    numeric_code = models.CharField(max_length=3, blank=True, default="")
    svg_icon = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        db_table = "countries"
        ordering = ["name"]
        verbose_name_plural = "countries"

    def __str__(self):
        return self.name

    @property
    def svg_icon_url(self):
        if not self.alpha_2_code:
            return None
        return f"https://flagcdn.com/{self.alpha_2_code.lower()}.svg"


# =========================================================
#  PARTNER MODEL
# =========================================================
class Partner(CoreBaseModel):
    partner_id = models.CharField(max_length=32, unique=True)

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name="partner_profile",
    )

    company_name = models.CharField(max_length=255, blank=True, default="")
    company_address = models.TextField(blank=True, default="")
    contact_person = models.CharField(max_length=255, blank=True, default="")
    contact_email = models.EmailField(blank=True, default="")
    contact_phone = models.CharField(max_length=50, blank=True, default="")

    status = models.CharField(max_length=32, default="active")

    class Meta:
        db_table = "partners"
        ordering = ["partner_id"]

    def __str__(self):
        return self.partner_id


# =========================================================
#  BUYER (INVESTOR) DETAIL RECORDS
# =========================================================
class BuyerCompanyOverview(CoreBaseModel):
    reg_name = models.CharField(max_length=255, blank=True, default="")
    hq_country = models.ForeignKey(
        Country,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        db_column="hq_country",
        related_name="+",
    )
    company_type = models.CharField(max_length=64, blank=True, default="")
    year_founded = models.PositiveIntegerField(null=True, blank=True)
    industry_ops = models.JSONField(default=list, blank=True)
    main_industry_operations = models.JSONField(default=list, blank=True)
    niche_industry = models.JSONField(default=list, blank=True)
    company_industry = models.JSONField(default=list, blank=True)
    emp_count = models.CharField(max_length=64, blank=True, default="")
    reason_ma = models.TextField(blank=True, default="")
    txn_timeline = models.CharField(max_length=64, blank=True, default="")
    status = models.CharField(max_length=32, default="active")
    details = models.TextField(blank=True, default="")
    email = models.EmailField(blank=True, default="")
    phone = models.CharField(max_length=50, blank=True, default="")
    hq_address = models.JSONField(default=list, blank=True)
    website = models.TextField(blank=True, default="")
    rank = models.CharField(max_length=8, blank=True, default="")
    contacts = models.JSONField(default=list, blank=True)
    investment_budget = models.JSONField(default=dict, blank=True)
    investment_condition = models.TextField(blank=True, default="")
    target_countries = models.JSONField(default=list, blank=True)
    investor_profile_link = models.TextField(blank=True, default="")
    introduced_projects = models.JSONField(default=list, blank=True)
    financial_advisor = models.JSONField(default=list, blank=True)
    internal_pic = models.JSONField(default=list, blank=True)
    channel = models.CharField(max_length=64, blank=True, default="")

    class Meta:
        db_table = "buyers_company_overviews"

    def __str__(self):
        return self.reg_name or str(self.id)


class BuyerTargetPreference(CoreBaseModel):
    b_ind_prefs = models.JSONField(default=list, blank=True)
    n_ind_prefs = models.JSONField(default=list, blank=True)
    target_countries = models.JSONField(default=list, blank=True)
    main_market = models.JSONField(default=list, blank=True)
    emp_count_range = models.CharField(max_length=64, blank=True, default="")
    mgmt_retention = models.CharField(max_length=64, blank=True, default="")
    years_in_biz = models.CharField(max_length=64, blank=True, default="")
    timeline = models.CharField(max_length=64, blank=True, default="")
    company_type = models.CharField(max_length=64, blank=True, default="")
    cert = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        db_table = "buyers_target_preferences"


class BuyerFinancialDetails(CoreBaseModel):
    default_currency = models.CharField(max_length=8, blank=True, default="")
    annual_revenue = models.JSONField(default=dict, blank=True)
    operating_profit = models.JSONField(default=dict, blank=True)
    investment_budget = models.JSONField(default=dict, blank=True)
    expected_ebitda = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "buyers_financial_details"


class BuyerPartnershipDetails(CoreBaseModel):
    partnership_affiliation = models.BooleanField(default=False)
    partner = models.ForeignKey(
        Partner,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        db_column="partner",
        related_name="buyer_partnerships",
    )
    referral_bonus_criteria = models.CharField(max_length=255, blank=True, default="")
    referral_bonus_amount = models.CharField(max_length=64, blank=True, default="")
    mou_status = models.CharField(max_length=64, blank=True, default="")
    specific_remarks = models.TextField(blank=True, default="")

    class Meta:
        db_table = "buyers_partnership_details"


class BuyerTeaserCenter(CoreBaseModel):
    teaser_heading = models.CharField(max_length=255, blank=True, default="")
    target_countries = models.JSONField(default=list, blank=True)
    emp_count_range = models.CharField(max_length=64, blank=True, default="")
    expected_ebitda = models.CharField(max_length=64, blank=True, default="")
    acquire_pct = models.CharField(max_length=64, blank=True, default="")
    valuation_range = models.CharField(max_length=64, blank=True, default="")
    investment_amount = models.CharField(max_length=64, blank=True, default="")
    growth_rate_yoy = models.CharField(max_length=64, blank=True, default="")
    has_teaser_description = models.BooleanField(default=False)
    has_teaser_name = models.BooleanField(default=False)
    has_industry = models.BooleanField(default=False)

    class Meta:
        db_table = "buyers_teaser_centers"


# =========================================================
#  BUYER (INVESTOR) MODEL
# =========================================================
class Buyer(CoreBaseModel):
    buyer_id = models.CharField(max_length=32, unique=True)
    pinned = models.BooleanField(default=False)
    status = models.CharField(max_length=32, default="active")

    company_overview = models.OneToOneField(
        BuyerCompanyOverview, null=True, blank=True,
        on_delete=models.SET_NULL, related_name="buyer",
    )
    target_preference = models.OneToOneField(
        BuyerTargetPreference, null=True, blank=True,
        on_delete=models.SET_NULL, related_name="buyer",
    )
    financial_details = models.OneToOneField(
        BuyerFinancialDetails, null=True, blank=True,
        on_delete=models.SET_NULL, db_column="financial_detail_id", related_name="buyer",
    )
    partnership_details = models.OneToOneField(
        BuyerPartnershipDetails, null=True, blank=True,
        on_delete=models.SET_NULL, db_column="partnership_detail_id", related_name="buyer",
    )
    teaser_center = models.OneToOneField(
        BuyerTeaserCenter, null=True, blank=True,
        on_delete=models.SET_NULL, related_name="buyer",
    )

    class Meta:
        db_table = "buyers"
        ordering = ["-pinned", "-created_at"]

    def __str__(self):
        return self.buyer_id


# =========================================================
#  SELLER (TARGET) DETAIL RECORDS
# =========================================================
class SellerCompanyOverview(CoreBaseModel):
    reg_name = models.CharField(max_length=255, blank=True, default="")
    hq_country = models.ForeignKey(
        Country,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        db_column="hq_country",
        related_name="+",
    )
    company_type = models.CharField(max_length=64, blank=True, default="")
    year_founded = models.PositiveIntegerField(null=True, blank=True)
    industry_ops = models.JSONField(default=list, blank=True)
    niche_industry = models.JSONField(default=list, blank=True)
    emp_count = models.CharField(max_length=64, blank=True, default="")
    reason_ma = models.TextField(blank=True, default="")
    txn_timeline = models.CharField(max_length=64, blank=True, default="")
    status = models.CharField(max_length=32, default="active")
    details = models.TextField(blank=True, default="")
    email = models.EmailField(blank=True, default="")
    phone = models.CharField(max_length=50, blank=True, default="")
    hq_address = models.JSONField(default=list, blank=True)
    website = models.TextField(blank=True, default="")
    teaser_link = models.TextField(blank=True, default="")
    rank = models.CharField(max_length=8, blank=True, default="")
    contacts = models.JSONField(default=list, blank=True)
    introduced_projects = models.JSONField(default=list, blank=True)
    internal_pic = models.JSONField(default=list, blank=True)

    class Meta:
        db_table = "sellers_company_overviews"

    def __str__(self):
        return self.reg_name or str(self.id)


class SellerFinancialDetails(CoreBaseModel):
    default_currency = models.CharField(max_length=8, blank=True, default="")
    valuation_method = models.CharField(max_length=64, blank=True, default="")
    monthly_revenue = models.JSONField(default=dict, blank=True)
    annual_revenue = models.JSONField(default=dict, blank=True)
    operating_profit = models.JSONField(default=dict, blank=True)
    expected_investment_amount = models.JSONField(default=dict, blank=True)
    maximum_investor_shareholding_percentage = models.CharField(max_length=32, blank=True, default="")
    ebitda_value = models.CharField(max_length=64, blank=True, default="")
    ebitda_times = models.CharField(max_length=32, blank=True, default="")
    ebitda_details = models.JSONField(default=list, blank=True)
    investment_condition = models.TextField(blank=True, default="")

    class Meta:
        db_table = "sellers_financial_details"


class SellerPartnershipDetails(CoreBaseModel):
    partnership_affiliation = models.BooleanField(default=False)
    partner = models.ForeignKey(
        Partner,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        db_column="partner",
        related_name="seller_partnerships",
    )
    referral_bonus_criteria = models.CharField(max_length=255, blank=True, default="")
    referral_bonus_amount = models.CharField(max_length=64, blank=True, default="")
    mou_status = models.CharField(max_length=64, blank=True, default="")
    specific_remarks = models.TextField(blank=True, default="")

    class Meta:
        db_table = "sellers_partnership_details"


class SellerTeaserCenter(CoreBaseModel):
    teaser_name = models.CharField(max_length=255, blank=True, default="")
    teaser_link = models.TextField(blank=True, default="")
    teaser_description = models.TextField(blank=True, default="")
    has_teaser_name = models.BooleanField(default=False)
    has_industry = models.BooleanField(default=False)
    has_origin_country = models.BooleanField(default=False)
    has_ebitda_range = models.BooleanField(default=False)
    has_asking_price = models.BooleanField(default=False)
    has_teaser_description = models.BooleanField(default=False)
    teaser_params = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "sellers_teaser_centers"


# =========================================================
#  SELLER (TARGET) MODEL
# =========================================================
class Seller(CoreBaseModel):
    seller_id = models.CharField(max_length=32, unique=True)
    pinned = models.BooleanField(default=False)
    status = models.CharField(max_length=32, default="active")

    company_overview = models.OneToOneField(
        SellerCompanyOverview, null=True, blank=True,
        on_delete=models.SET_NULL, related_name="seller",
    )
    financial_details = models.OneToOneField(
        SellerFinancialDetails, null=True, blank=True,
        on_delete=models.SET_NULL, db_column="financial_detail_id", related_name="seller",
    )
    partnership_details = models.OneToOneField(
        SellerPartnershipDetails, null=True, blank=True,
        on_delete=models.SET_NULL, db_column="partnership_detail_id", related_name="seller",
    )
    teaser_center = models.OneToOneField(
        SellerTeaserCenter, null=True, blank=True,
        on_delete=models.SET_NULL, related_name="seller",
    )

    class Meta:
        db_table = "sellers"
        ordering = ["-pinned", "-created_at"]

    def __str__(self):
        return self.seller_id


# =========================================================
#  DEAL MODEL
# =========================================================
class Deal(CoreBaseModel):
    buyer = models.ForeignKey(
        Buyer, null=True, blank=True,
        on_delete=models.CASCADE, related_name="deals",
    )
    seller = models.ForeignKey(
        Seller, null=True, blank=True,
        on_delete=models.CASCADE, related_name="deals",
    )

    name = models.CharField(max_length=255, blank=True, default="")
    stage_code = models.CharField(max_length=16, blank=True, default="")
    pipeline_type = models.CharField(max_length=16, default="buyer")
    progress_percent = models.PositiveSmallIntegerField(default=0)
    ticket_size = models.DecimalField(max_digits=18, decimal_places=2, null=True, blank=True)
    estimated_ev_value = models.DecimalField(max_digits=18, decimal_places=2, null=True, blank=True)
    estimated_ev_currency = models.CharField(max_length=8, blank=True, default="")
    priority = models.CharField(max_length=16, default="medium")
    status = models.CharField(max_length=32, default="active")

    class Meta:
        db_table = "deals"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["buyer"]),
            models.Index(fields=["seller"]),
        ]

    def __str__(self):
        return self.name or str(self.id)
