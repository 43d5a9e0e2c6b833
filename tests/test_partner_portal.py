import pytest

pytestmark = pytest.mark.django_db

PORTAL_URL = "/api/v1/partner-portal/"
DASHBOARD_URL = "/api/v1/dashboard/seller-buyer-data/"


def test_portal_is_partner_only(login, staff_user):
    response = login(staff_user).get(f"{PORTAL_URL}stats/")

    assert response.status_code == 403
    assert response.json()["errorCode"] == "PERMISSION_DENIED"


def test_stats_count_shared_records(login, partner_user, partner, other_partner, make_buyer, make_seller):
    make_buyer("1X-B001", partner=partner)
    make_buyer("1X-B002", partner=other_partner)
    make_seller("1X-S001")
    make_seller("1X-S002")

    body = login(partner_user).get(f"{PORTAL_URL}stats/").json()

    assert body["data"] == {"shared_investors": 1, "shared_targets": 2}


def test_investors_are_projected_and_paged_by_fifteen(login, partner_user, partner, make_buyer, sharing_config):
    for number in range(1, 18):
        make_buyer(f"1X-B{number:03d}", partner=partner)
    sharing_config("buyer", {"buyer_id": True})

    body = login(partner_user).get(f"{PORTAL_URL}investors/").json()

    assert len(body["data"]) == 15
    assert body["meta"]["per_page"] == 15
    assert body["meta"]["last_page"] == 2
    assert "buyer_id" in body["data"][0]
    assert "company_overview" not in body["data"][0]


def test_targets_search(login, partner_user, partner, make_seller, sharing_config):
    make_seller("1X-S001", reg_name="Quiet Manufacturing")
    make_seller("1X-S002", reg_name="Loud Logistics")
    sharing_config("seller", {"seller_id": True, "company_overview.reg_name": True})

    body = login(partner_user).get(f"{PORTAL_URL}targets/", {"search": "logistics"}).json()

    assert [r["seller_id"] for r in body["data"]] == ["1X-S002"]
    assert body["data"][0]["company_overview"]["reg_name"] == "Loud Logistics"


def test_profile_get_and_patch(login, partner_user, partner):
    client = login(partner_user)

    profile = client.get(f"{PORTAL_URL}profile/").json()["data"]
    assert profile["partner_id"] == "1X-P001"
    assert profile["company_name"] == "Acme Partners"

    response = client.patch(
        f"{PORTAL_URL}profile/",
        {"company_name": "Acme Capital", "contact_phone": "+81 3 0000 0000", "partner_id": "HIJACK", "status": "vip"},
        format="json",
    )

    assert response.status_code == 200
    partner.refresh_from_db()
    assert partner.company_name == "Acme Capital"
    assert partner.contact_phone == "+81 3 0000 0000"
    assert partner.partner_id == "1X-P001"
    assert partner.status == "active"


def test_profile_patch_validates(login, partner_user, partner):
    response = login(partner_user).patch(f"{PORTAL_URL}profile/", {"contact_email": "not-an-email"}, format="json")

    assert response.status_code == 400
    assert response.json()["errorCode"] == "VALIDATION_ERROR"


def test_profile_missing_for_partner_without_record(login, partner_user):
    response = login(partner_user).get(f"{PORTAL_URL}profile/")

    assert response.status_code == 404
    assert response.json()["errorMessage"] == "Partner profile not found."


def test_dashboard_masks_names_for_partners(login, partner_user, partner, make_buyer, make_seller):
    make_seller("1X-S001", reg_name="Quiet Manufacturing")
    make_buyer("1X-B001", reg_name="Secret Co")

    body = login(partner_user).get(DASHBOARD_URL).json()

    assert {item["reg_name"] for item in body["data"]} == {"1X-S001", "1X-B001"}
    assert {item["type"] for item in body["data"]} == {1, 2}
    assert "created_at" not in body["data"][0]


def test_dashboard_shows_names_when_shared(login, partner_user, partner, make_buyer, make_seller, sharing_config):
    make_seller("1X-S001", reg_name="Quiet Manufacturing")
    make_buyer("1X-B001", reg_name="Secret Co")
    sharing_config("buyer", {"company_overview.reg_name": True})
    sharing_config("seller", {"company_overview.reg_name": "true"})

    body = login(partner_user).get(DASHBOARD_URL).json()
    names = {item["type"]: item["reg_name"] for item in body["data"]}

    assert names == {2: "Secret Co", 1: "1X-S001"}


def test_dashboard_for_staff_is_unmasked_and_newest_first(login, staff_user, make_buyer, make_seller):
    make_buyer("1X-B001", reg_name="Secret Co")
    make_seller("1X-S001", reg_name="Quiet Manufacturing")

    body = login(staff_user).get(DASHBOARD_URL).json()

    assert [item["reg_name"] for item in body["data"]] == ["Quiet Manufacturing", "Secret Co"]
    assert body["data"][0]["status"] == "active"
