import logging

import pytest

from app.platform.flac.engine import PartnerSharingEngine
from app.platform.flac.resolver import FieldSetResolver, ResolvedFieldSet, to_camel


@pytest.fixture
def resolver():
    return FieldSetResolver()


def test_root_and_relation_fields_are_split(resolver):
    resolved = resolver.resolve({
        "buyer_id": True,
        "company_overview.reg_name": True,
        "company_overview.hq_country": True,
        "financial_details.ebitda_value": False,
    }, "buyer")

    assert resolved.root == {"id", "buyer_id"}
    assert dict(resolved.relationships) == {"companyOverview": {"id", "reg_name", "hq_country"}}


@pytest.mark.parametrize("value", ["true", 1, "1", "yes", None, [True], {"on": True}])
def test_only_literal_true_enables_a_field(resolver, value):
    resolved = resolver.resolve({"buyer_id": value, "company_overview.reg_name": value})

    assert resolved.root == {"id"}
    assert dict(resolved.relationships) == {}


@pytest.mark.parametrize("raw", [None, [], "buyer_id", 42, ["buyer_id"]])
def test_non_mapping_configuration_yields_identifier_only(resolver, raw, caplog):
    with caplog.at_level(logging.INFO, logger="app.platform.flac.resolver"):
        resolved = resolver.resolve(raw, "buyer")

    assert resolved.root == {"id"}
    assert dict(resolved.relationships) == {}
    assert "No partner sharing settings for type: buyer" in caplog.text


def test_empty_mapping_yields_identifier_only(resolver):
    resolved = resolver.resolve({}, "seller")

    assert resolved.as_dict() == {"root": ["id"], "relationships": {}}


def test_relation_keys_are_camel_cased(resolver):
    resolved = resolver.resolve({
        "target_preference.b_ind_prefs": True,
        "teaser_center.teaser_heading": True,
    })

    assert set(resolved.relationships) == {"targetPreference", "teaserCenter"}
    assert resolved.relationships["targetPreference"] == {"id", "b_ind_prefs"}


def test_niche_tags_alias_maps_to_niche_industry(resolver):
    resolved = resolver.resolve({"company_overview.niche_tags": True, "niche_tags": True})

    assert resolved.relationships["companyOverview"] == {"id", "niche_industry"}
    assert "niche_industry" in resolved.root
    assert "niche_tags" not in resolved.root


def test_extra_segments_are_ignored(resolver):
    resolved = resolver.resolve({"company_overview.hq_country.name": True})

    assert resolved.relationships["companyOverview"] == {"id", "hq_country"}


def test_identifier_is_always_in_root(resolver):
    resolved = resolver.resolve({"seller_id": True, "id": False})

    assert "id" in resolved.root


def test_custom_aliases_replace_defaults():
    resolver = FieldSetResolver(aliases={"ebitda": "ebitda_value"})
    resolved = resolver.resolve({"financial_details.ebitda": True, "financial_details.niche_tags": True})

    assert resolved.relationships["financialDetails"] == {"id", "ebitda_value", "niche_tags"}


def test_as_dict_is_sorted_and_json_friendly(resolver):
    resolved = resolver.resolve({
        "seller_id": True,
        "company_overview.status": True,
        "company_overview.hq_country": True,
        "financial_details.ebitda_value": True,
    })

    assert resolved.as_dict() == {
        "root": ["id", "seller_id"],
        "relationships": {
            "companyOverview": ["hq_country", "id", "status"],
            "financialDetails": ["ebitda_value", "id"],
        },
    }


def test_allows_uses_configuration_spelling():
    resolved = ResolvedFieldSet(
        root=frozenset({"id", "buyer_id"}),
        relationships={"companyOverview": frozenset({"id", "reg_name"})},
    )

    assert resolved.allows("buyer_id")
    assert resolved.allows("company_overview.reg_name")
    assert resolved.allows("companyOverview.reg_name")
    assert not resolved.allows("company_overview.email")
    assert not resolved.allows("financial_details.id")


@pytest.mark.parametrize("value, expected", [
    ("company_overview", "companyOverview"),
    ("financial_details", "financialDetails"),
    ("companyOverview", "companyOverview"),
    ("deals", "deals"),
    ("", ""),
])
def test_to_camel(value, expected):
    assert to_camel(value) == expected


def test_resolving_the_same_configuration_is_deterministic(resolver):
    config = {"buyer_id": True, "company_overview.reg_name": True, "teaser_center.teaser_heading": True}

    assert resolver.resolve(config, "buyer") == resolver.resolve(dict(config), "buyer")


@pytest.mark.django_db
def test_cached_and_uncached_reads_resolve_equally(sharing_config):
    sharing_config("buyer", {"buyer_id": True, "company_overview.niche_tags": True})
    engine = PartnerSharingEngine()

    first = engine.allowed_fields("buyer")
    second = engine.allowed_fields("investor")

    assert first == second
    assert first.as_dict() == second.as_dict()
