"""Tests for the exhibitor classification rules engine."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from nrfdesk.classification import rules as rules_module
from nrfdesk.classification.rules import (
    DEFAULT_RULES,
    ClassificationEngine,
    TaggingRules,
    categorize,
    classify,
    combine_text,
    detect_country_marker,
    score_candidate,
)
from nrfdesk.core.types import CategoryTag
from nrfdesk.exhibitors.models import ComputedFields, ExhibitorRecord


@pytest.fixture()
def engine() -> ClassificationEngine:
    return ClassificationEngine()


class TestCountryMarker:
    def test_country_name(self, engine: ClassificationEngine) -> None:
        assert engine.detect_country_marker("12 avenue Foch FRANCE")

    def test_city_name(self, engine: ClassificationEngine) -> None:
        assert engine.detect_country_marker("Based in Lyon")

    def test_language_adjective(self, engine: ClassificationEngine) -> None:
        assert engine.detect_country_marker("A French maker of socks")

    def test_accented_marker(self, engine: ClassificationEngine) -> None:
        assert engine.detect_country_marker("Savoir-faire FRANÇAIS")

    def test_no_marker(self, engine: ClassificationEngine) -> None:
        assert not engine.detect_country_marker("Berlin GERMANY industrial tools")

    def test_empty_and_missing(self, engine: ClassificationEngine) -> None:
        assert not engine.detect_country_marker("")
        assert not engine.detect_country_marker(None)


class TestCategorize:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Sustainable footwear", CategoryTag.FASHION_BRAND_RETAIL),
            ("Omnichannel webshop builder", CategoryTag.MARKETPLACE_ECOMMERCE),
            ("Scandinavian furniture", CategoryTag.HOME_INTERIOR),
            ("Card processing and checkout", CategoryTag.PAYMENTS_POS),
            ("3PL warehouse operator", CategoryTag.LOGISTICS_FULFILLMENT),
            ("CRM software", CategoryTag.RETAIL_TECH_SAAS),
            ("RFID tags and barcode scanners", CategoryTag.INSTORE_HARDWARE_SIGNAGE),
        ],
    )
    def test_each_category(self, engine: ClassificationEngine, text: str, expected: CategoryTag) -> None:
        assert engine.categorize("Exhibitor", text) == expected

    def test_case_insensitive(self, engine: ClassificationEngine) -> None:
        assert engine.categorize("KIOSK WORLD") == CategoryTag.INSTORE_HARDWARE_SIGNAGE

    def test_no_match_is_other(self, engine: ClassificationEngine) -> None:
        assert engine.categorize("Generic Hardware Co", "industrial tools") == CategoryTag.OTHER

    def test_all_empty_is_other(self, engine: ClassificationEngine) -> None:
        assert engine.categorize(None, None, None, None) == CategoryTag.OTHER
        assert engine.categorize("", "", "", "") == CategoryTag.OTHER

    def test_earlier_category_wins(self, engine: ClassificationEngine) -> None:
        # "fashion" is a fashion_brand_retail keyword, "software" a retail_tech_saas one
        text = "fashion software"
        assert engine.categorize(text) == CategoryTag.FASHION_BRAND_RETAIL

    def test_fields_are_combined(self, engine: ClassificationEngine) -> None:
        result = engine.categorize("Nordic Co", None, "", "Global fulfilment services")
        assert result == CategoryTag.LOGISTICS_FULFILLMENT

    def test_category_order(self, engine: ClassificationEngine) -> None:
        assert engine.category_order == list(CategoryTag)


class TestScoreCandidate:
    def test_country_marker_short_circuits(self, engine: ClassificationEngine) -> None:
        assert engine.score_candidate(CategoryTag.OTHER, True, "Generic Hardware Co")

    def test_keyword_signal(self, engine: ClassificationEngine) -> None:
        # payments_pos is not a candidate category, but "retail" is a keyword
        assert engine.score_candidate(
            CategoryTag.PAYMENTS_POS, False, "PayCo", "POS terminals for retail"
        )

    def test_category_signal(self, engine: ClassificationEngine) -> None:
        assert engine.score_candidate(CategoryTag.HOME_INTERIOR, False, "Casa", "sofas")

    def test_no_signal(self, engine: ClassificationEngine) -> None:
        assert not engine.score_candidate(
            CategoryTag.LOGISTICS_FULFILLMENT, False, "ShipIt", "parcel carrier"
        )


class TestClassify:
    def test_french_apparel_example(self, engine: ClassificationEngine) -> None:
        record = ExhibitorRecord(
            name="Acme Apparel SARL",
            country=None,
            address="10 Rue de Paris FRANCE",
            company_info="clothing manufacturer",
        )
        assert engine.classify(record) == ComputedFields(
            is_france=True,
            category_tag=CategoryTag.FASHION_BRAND_RETAIL,
            pants_candidate=True,
        )

    def test_german_hardware_example(self, engine: ClassificationEngine) -> None:
        record = ExhibitorRecord(
            name="Generic Hardware Co",
            country="Germany",
            address="Berlin GERMANY",
            company_info="industrial tools",
        )
        result = engine.classify(record)
        assert result.is_france is False
        assert result.category_tag == CategoryTag.OTHER
        assert result.pants_candidate is False

    def test_deterministic(self, engine: ClassificationEngine) -> None:
        record = ExhibitorRecord(
            name="Maison Lille",
            company_info="Home decor and analytics",
            activities="marketplace",
        )
        assert engine.classify(record) == engine.classify(record)

    def test_france_implies_candidate(self, engine: ClassificationEngine) -> None:
        for text in ("Paris", "Toulouse office", "french", "Nantes logistics"):
            result = engine.classify(ExhibitorRecord(name="X", address=text))
            assert result.is_france
            assert result.pants_candidate

    def test_country_marker_ignores_activities(self, engine: ClassificationEngine) -> None:
        # Only country, address and company_info feed country detection
        record = ExhibitorRecord(name="Bolt", activities="Shipping to France")
        assert engine.classify(record).is_france is False

    def test_name_only_record(self, engine: ClassificationEngine) -> None:
        result = engine.classify(ExhibitorRecord(name="Zeta"))
        assert result.category_tag == CategoryTag.OTHER
        assert result.pants_candidate is False


class TestModuleFunctions:
    def test_classify_uses_default_rules(self) -> None:
        record = ExhibitorRecord(name="Bordeaux Boutique")
        result = classify(record)
        assert result.is_france is False  # name is not part of country detection
        assert result.category_tag == CategoryTag.FASHION_BRAND_RETAIL
        assert result.pants_candidate is True

    def test_helpers(self) -> None:
        assert detect_country_marker("marseille")
        assert categorize("Signage Pro") == CategoryTag.INSTORE_HARDWARE_SIGNAGE
        assert not score_candidate(CategoryTag.OTHER, False, "Nothing")

    def test_default_engine_rules(self) -> None:
        assert rules_module.default_engine.rules is DEFAULT_RULES

    def test_combine_text_skips_empty(self) -> None:
        assert combine_text("A", None, "", "B c") == "a b c"


class TestRulesConfig:
    def test_custom_rules(self) -> None:
        rules = TaggingRules(
            country_markers=["spain"],
            categories=[
                {"tag": "logistics_fulfillment", "patterns": ["parcel"]},
                {"tag": "fashion_brand_retail", "patterns": ["parcel|socks"]},
            ],
            candidate_keywords=["socks"],
            candidate_categories=["logistics_fulfillment"],
        )
        engine = ClassificationEngine(rules)
        result = engine.classify(ExhibitorRecord(name="Parcel Socks", country="Madrid SPAIN"))
        assert result.is_france is True  # the marker list is "spain" here
        assert result.category_tag == CategoryTag.LOGISTICS_FULFILLMENT
        assert result.pants_candidate is True

    def test_other_cannot_have_patterns(self) -> None:
        with pytest.raises(ValueError):
            TaggingRules(
                country_markers=[],
                categories=[{"tag": "other", "patterns": ["x"]}],
                candidate_keywords=[],
                candidate_categories=[],
            )

    def test_invalid_pattern_is_skipped(self) -> None:
        rules = TaggingRules(
            country_markers=[],
            categories=[
                {"tag": "payments_pos", "patterns": ["(unclosed", "terminal"]},
            ],
            candidate_keywords=[],
            candidate_categories=[],
        )
        engine = ClassificationEngine(rules)
        assert engine.categorize("Terminal Corp") == CategoryTag.PAYMENTS_POS
        assert engine.categorize("(unclosed") == CategoryTag.OTHER

    def test_from_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "rules.yml"
        path.write_text(
            yaml.dump(
                {
                    "country_markers": ["belgique"],
                    "categories": [{"tag": "home_interior", "patterns": ["lamp"]}],
                    "candidate_keywords": [],
                    "candidate_categories": ["home_interior"],
                }
            )
        )
        engine = ClassificationEngine.from_yaml(path)
        result = engine.classify(ExhibitorRecord(name="Lamp Studio", address="Bruxelles BELGIQUE"))
        assert result == ComputedFields(
            is_france=True,
            category_tag=CategoryTag.HOME_INTERIOR,
            pants_candidate=True,
        )


class TestShippedConfig:
    """The YAML copy of the rules must match the built-in defaults."""

    def test_config_matches_defaults(self) -> None:
        config_path = Path(__file__).resolve().parents[1] / "config" / "tagging_rules.yml"
        if not config_path.exists():
            pytest.skip("config/tagging_rules.yml not found")

        engine = ClassificationEngine.from_yaml(config_path)
        assert engine.rules == DEFAULT_RULES
