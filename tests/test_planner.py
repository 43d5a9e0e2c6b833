import logging

import pytest

from app.platform.flac.descriptors import UnknownEntityType, get_descriptor
from app.platform.flac.planner import ProjectionPlanner
from app.platform.flac.resolver import FieldSetResolver

STRUCTURAL = {"id", "pinned", "created_at", "status", "updated_at"}


@pytest.fixture
def plan_for():
    resolver = FieldSetResolver()
    planner = ProjectionPlanner()

    def _plan(entity_type, config):
        resolved = resolver.resolve(config, entity_type)
        return resolved, planner.plan(resolved, entity_type)
    return _plan


def test_empty_configuration_selects_structural_columns_but_emits_only_id(plan_for):
    _, plan = plan_for("buyer", None)

    assert plan.root == STRUCTURAL
    assert plan.relationships == {}
    assert plan.visible_fields() == {"id"}


def test_company_overview_always_carries_country(plan_for):
    _, plan = plan_for("buyer", {"buyer_id": True, "company_overview.reg_name": True})

    assert plan.root == STRUCTURAL | {"buyer_id", "company_overview"}
    assert plan.relationships["companyOverview"] == {"id", "reg_name", "hq_country"}
    assert plan.nested["companyOverview"] == ("hq_country",)
    assert plan.attrs["companyOverview"] == "company_overview"


def test_unconfigured_relations_are_not_planned(plan_for):
    _, plan = plan_for("seller", {"seller_id": True})

    assert "financialDetails" not in plan.relationships
    assert "financial_details" not in plan.root
    assert "company_overview" not in plan.root


def test_seller_deals_use_seller_foreign_key(plan_for):
    _, plan = plan_for("target", {"deals.stage_code": True})

    assert plan.entity_type == "seller"
    assert plan.relationships["deals"] == {"id", "seller", "stage_code", "progress_percent", "created_at"}


def test_plan_covers_every_allowed_field(plan_for):
    config = {
        "buyer_id": True,
        "company_overview.reg_name": True,
        "company_overview.niche_tags": True,
        "financial_details.default_currency": True,
        "partnership_details.partner": True,
    }
    resolved, plan = plan_for("buyer", config)

    assert resolved.root <= plan.root
    for key, attributes in resolved.relationships.items():
        assert attributes <= plan.relationships[key]


def test_foreign_key_attnames_are_accepted(plan_for):
    _, plan = plan_for("buyer", {"company_overview.hq_country_id": True})

    assert plan.relationships["companyOverview"] == {"id", "hq_country"}


def test_unknown_names_are_dropped_and_logged(plan_for, caplog):
    with caplog.at_level(logging.WARNING, logger="app.platform.flac.planner"):
        _, plan = plan_for("buyer", {
            "favourite_colour": True,
            "company_overview.shoe_size": True,
            "ghost_relation.name": True,
            "buyer_id": True,
        })

    assert "favourite_colour" not in plan.root
    assert "buyer_id" in plan.root
    assert plan.relationships["companyOverview"] == {"id", "hq_country"}
    assert "ghostRelation" not in plan.relationships
    assert "company_overview.shoe_size" not in caplog.text
    assert "companyOverview.shoe_size" in caplog.text
    assert "favourite_colour" in caplog.text
    assert "ghostRelation.name" in caplog.text


def test_deals_are_not_loaded_without_a_deal_key(plan_for):
    _, plan = plan_for("buyer", {"buyer_id": True, "company_overview.reg_name": True})

    assert "deals" not in plan.relationships
    assert "deals" not in plan.visible_fields()


def test_deal_keys_load_the_fixed_projection_only(plan_for):
    _, plan = plan_for("buyer", {"deals.name": True, "deals.ticket_size": True})

    assert plan.relationships["deals"] == {"id", "buyer", "stage_code", "progress_percent", "created_at"}


def test_unknown_fields_reports_without_planning():
    resolved = FieldSetResolver().resolve({"buyer_id": True, "deals.name": True, "nope": True})

    assert ProjectionPlanner().unknown_fields(resolved, "investor") == ["deals.name", "nope"]


def test_visible_fields_for_root_and_relations(plan_for):
    _, plan = plan_for("buyer", {"company_overview.reg_name": True})

    assert plan.visible_fields() == {"id", "company_overview"}
    assert plan.visible_fields("companyOverview") == {"id", "reg_name", "hq_country"}
    assert plan.visible_fields("teaserCenter") == frozenset()


def test_unknown_entity_type_is_rejected():
    with pytest.raises(UnknownEntityType):
        get_descriptor("partner")

    with pytest.raises(ValueError):
        ProjectionPlanner().plan(FieldSetResolver().resolve({}), "employee")


def test_shareable_fields_list_configurable_keys():
    fields = get_descriptor("buyer").shareable_fields()

    assert "buyer_id" in fields
    assert "company_overview.reg_name" in fields
    assert "target_preference.b_ind_prefs" in fields
    assert "pinned" not in fields
    assert "company_overview" not in fields
    assert "deals.stage_code" in fields
    assert "deals.ticket_size" not in fields
    assert "deals.id" not in fields


def test_relation_only_configuration_keeps_root_to_identifier(plan_for):
    resolved, plan = plan_for("seller", {"financial_details.ebitda_value": True})

    assert resolved.root == {"id"}
    assert "financial_details" in plan.root
    assert plan.relationships["financialDetails"] == {"id", "ebitda_value"}
    assert plan.visible_fields() == {"id", "financial_details"}


def test_relation_foreign_keys_are_not_root_fields(plan_for, caplog):
    config = {"seller_id": True, "financial_details": True, "company_overview_id": True}

    with caplog.at_level(logging.WARNING, logger="app.platform.flac.planner"):
        resolved, plan = plan_for("seller", config)

    assert "financialDetails" not in plan.relationships
    assert "financial_details" not in plan.root
    assert "company_overview" not in plan.root
    assert plan.visible_fields() == {"id", "seller_id"}
    assert ProjectionPlanner().unknown_fields(resolved, "seller") == ["company_overview_id", "financial_details"]
    assert "financial_details" in caplog.text
