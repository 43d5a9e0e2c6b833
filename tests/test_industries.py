import pytest

from app.core.models import AuditLog
from app.workspace.industries.models import Industry
from app.workspace.industries.services import find_adhoc, is_adhoc
from app.workspace.industries.similarity import suggest
from app.workspace.prospects.models import (
    BuyerCompanyOverview,
    BuyerTargetPreference,
    SellerCompanyOverview,
)

INDUSTRIES_URL = "/api/v1/industries/"
ADHOC_ID = 1717000000001


@pytest.fixture
def logistics(db):
    return Industry.objects.create(name="Logistics")


@pytest.fixture
def tagged(logistics):
    seller_overview = SellerCompanyOverview.objects.create(
        reg_name="Quiet Manufacturing",
        industry_ops=[
            {"id": logistics.id, "name": "Logistics"},
            {"id": ADHOC_ID, "name": "Agri Tech", "status": "new"},
        ],
    )
    buyer_overview = BuyerCompanyOverview.objects.create(
        reg_name="Secret Co",
        main_industry_operations=[{"id": ADHOC_ID + 1, "name": "agri tech "}],
        company_industry=[{"id": 7, "name": "Legacy Tag"}],
    )
    preference = BuyerTargetPreference.objects.create(
        b_ind_prefs=[
            {"id": ADHOC_ID + 2, "name": "Agri Tech", "status": "new"},
            {"id": 99, "name": "Fintech", "status": "new"},
        ],
    )
    return seller_overview, buyer_overview, preference


# ---------------------------------------------------------
# Similarity
# ---------------------------------------------------------
def test_exact_normalized_match_is_the_only_suggestion():
    industries = [Industry(id=1, name="Food & Beverage"), Industry(id=2, name="Food Processing")]

    assert suggest("food and beverage", industries) == [{"id": 1, "name": "Food & Beverage", "score": 100}]


def test_reordered_words_rank_first():
    industries = [
        Industry(id=1, name="Transportation and Logistics"),
        Industry(id=2, name="Healthcare"),
        Industry(id=3, name="Mining"),
    ]

    suggestions = suggest("Logistics & Transportation", industries)

    assert suggestions[0]["id"] == 1
    assert len(suggestions) <= 3
    assert all(40 <= s["score"] <= 100 for s in suggestions)


def test_blank_name_has_no_suggestions():
    assert suggest("  ", [Industry(id=1, name="Logistics")]) == []


# ---------------------------------------------------------
# Scanning
# ---------------------------------------------------------
def test_adhoc_detection():
    canonical = {5}

    assert is_adhoc({"id": ADHOC_ID, "name": "Agri Tech"}, canonical)
    assert is_adhoc({"id": 42, "name": "Agri Tech", "status": "new"}, canonical)
    assert not is_adhoc({"id": 42, "name": "Legacy Tag"}, canonical)
    assert not is_adhoc({"id": 5, "name": "Logistics", "status": "new"}, canonical)
    assert not is_adhoc({"name": "No Id", "status": "new"}, canonical)


def test_find_adhoc_counts_names_across_tables(tagged):
    result = find_adhoc()

    assert [(entry["name"], entry["count"]) for entry in result] == [
        ("Agri Tech", 2),
        ("agri tech", 1),
        ("Fintech", 1),
    ]
    assert all(isinstance(entry["suggestions"], list) for entry in result)


# ---------------------------------------------------------
# Endpoints
# ---------------------------------------------------------
def test_industries_are_admin_only(login, staff_user, db):
    response = login(staff_user).get(INDUSTRIES_URL)

    assert response.status_code == 403
    assert response.json()["errorCode"] == "PERMISSION_DENIED"


def test_list_includes_usage_counts(login, admin_user, tagged, logistics):
    Industry.objects.create(name="Unused")

    body = login(admin_user).get(INDUSTRIES_URL).json()

    counts = {row["name"]: row["usage_count"] for row in body["data"]}
    assert counts == {"Logistics": 1, "Unused": 0}


def test_adhoc_endpoint(login, admin_user, tagged):
    body = login(admin_user).get(f"{INDUSTRIES_URL}adhoc/").json()

    assert body["data"][0]["name"] == "Agri Tech"
    assert body["data"][0]["count"] == 2


def test_promote_creates_industry_and_rewrites_tags(login, admin_user, tagged):
    seller_overview, buyer_overview, preference = tagged

    response = login(admin_user).post(f"{INDUSTRIES_URL}promote/", {"name": " Agri Tech "}, format="json")
    body = response.json()

    assert response.status_code == 200
    assert body["data"]["action"] == "promoted"
    assert body["data"]["records_updated"] == 3
    industry = Industry.objects.get(name="Agri Tech")
    preference.refresh_from_db()
    assert preference.b_ind_prefs == [
        {"id": industry.id, "name": "Agri Tech"},
        {"id": 99, "name": "Fintech", "status": "new"},
    ]
    buyer_overview.refresh_from_db()
    assert buyer_overview.main_industry_operations == [{"id": industry.id, "name": "Agri Tech"}]
    assert buyer_overview.company_industry == [{"id": 7, "name": "Legacy Tag"}]
    assert AuditLog.objects.filter(action="industry.promoted").exists()


def test_promote_existing_name_merges(login, admin_user, tagged):
    fintech = Industry.objects.create(name="FinTech")
    preference = tagged[2]

    body = login(admin_user).post(f"{INDUSTRIES_URL}promote/", {"name": "fintech"}, format="json").json()

    assert body["data"]["action"] == "merged"
    assert body["data"]["industry"]["id"] == fintech.id
    assert Industry.objects.filter(name__iexact="fintech").count() == 1
    preference.refresh_from_db()
    assert {"id": fintech.id, "name": "FinTech"} in preference.b_ind_prefs


def test_merge_rewrites_and_dedupes(login, admin_user, tagged, logistics):
    seller_overview = tagged[0]

    body = login(admin_user).post(
        f"{INDUSTRIES_URL}merge/",
        {"adhoc_name": "agri tech", "target_industry_id": logistics.id},
        format="json",
    ).json()

    assert body["data"]["records_updated"] == 3
    seller_overview.refresh_from_db()
    assert seller_overview.industry_ops == [{"id": logistics.id, "name": "Logistics"}]


def test_merge_requires_existing_target(login, admin_user, tagged):
    response = login(admin_user).post(
        f"{INDUSTRIES_URL}merge/",
        {"adhoc_name": "Agri Tech", "target_industry_id": 987654},
        format="json",
    )

    assert response.status_code == 400
    assert response.json()["errorCode"] == "VALIDATION_ERROR"


def test_rename_adhoc_keeps_ids(login, admin_user, tagged):
    buyer_overview = tagged[1]

    body = login(admin_user).post(
        f"{INDUSTRIES_URL}rename-adhoc/",
        {"old_name": "Agri Tech", "new_name": "AgriTech"},
        format="json",
    ).json()

    assert body["data"]["records_updated"] == 3
    assert not Industry.objects.filter(name="AgriTech").exists()
    buyer_overview.refresh_from_db()
    assert buyer_overview.main_industry_operations == [{"id": ADHOC_ID + 1, "name": "AgriTech"}]


def test_rename_adhoc_to_same_name_is_a_no_op(login, admin_user, tagged):
    body = login(admin_user).post(
        f"{INDUSTRIES_URL}rename-adhoc/",
        {"old_name": "Agri Tech", "new_name": "agri tech"},
        format="json",
    ).json()

    assert body["data"]["records_updated"] == 0


def test_renaming_an_industry_cascades_to_tags(login, admin_user, tagged, logistics):
    seller_overview = tagged[0]

    body = login(admin_user).patch(
        f"{INDUSTRIES_URL}{logistics.id}/", {"name": "Logistics & Freight"}, format="json"
    ).json()

    assert body["data"]["name"] == "Logistics & Freight"
    assert body["data"]["records_updated"] == 1
    seller_overview.refresh_from_db()
    assert seller_overview.industry_ops[0] == {"id": logistics.id, "name": "Logistics & Freight"}


def test_industry_in_use_cannot_be_deleted(login, admin_user, tagged, logistics):
    response = login(admin_user).delete(f"{INDUSTRIES_URL}{logistics.id}/")

    assert response.status_code == 409
    assert response.json()["errorCode"] == "INDUSTRY_IN_USE"
    assert Industry.objects.filter(pk=logistics.pk).exists()


def test_unused_industry_is_deleted(login, admin_user, db):
    unused = Industry.objects.create(name="Unused")

    response = login(admin_user).delete(f"{INDUSTRIES_URL}{unused.id}/")

    assert response.status_code == 200
    assert not Industry.objects.filter(pk=unused.pk).exists()


def test_missing_industry_is_not_found(login, admin_user, db):
    response = login(admin_user).patch(f"{INDUSTRIES_URL}424242/", {"name": "Ghost"}, format="json")

    assert response.status_code == 404
    assert response.json()["errorCode"] == "NOT_FOUND"
