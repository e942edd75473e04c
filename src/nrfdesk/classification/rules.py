"""Keyword rules engine for exhibitor tagging.

Derives three flags from an exhibitor's free text: whether it is based in
France, a single category tag, and whether it is a lead candidate for the
wholesale apparel outreach. The built-in rule tables can be replaced by a
YAML file with the same shape as ``TaggingRules``.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from nrfdesk.core.types import CategoryTag
from nrfdesk.exhibitors.models import ComputedFields, ExhibitorRecord

logger = logging.getLogger(__name__)


class CategoryRule(BaseModel):
    """Regex patterns that put a record into one category."""

    tag: CategoryTag
    patterns: list[str] = Field(default_factory=list)


class TaggingRules(BaseModel):
    """The complete set of tagging tables.

    ``categories`` is evaluated in list order and the first rule with a
    matching pattern wins.
    """

    country_markers: list[str]
    categories: list[CategoryRule]
    candidate_keywords: list[str]
    candidate_categories: list[CategoryTag]

    @field_validator("categories")
    @classmethod
    def _no_explicit_other(cls, value: list[CategoryRule]) -> list[CategoryRule]:
        if any(rule.tag == CategoryTag.OTHER for rule in value):
            raise ValueError("'other' is the fallback tag and cannot have patterns")
        return value


DEFAULT_RULES = TaggingRules(
    country_markers=[
        "france",
        "paris",
        "lyon",
        "marseille",
        "bordeaux",
        "lille",
        "toulouse",
        "nantes",
        "french",
        "français",
    ],
    categories=[
        CategoryRule(
            tag=CategoryTag.FASHION_BRAND_RETAIL,
            patterns=[r"apparel|clothing|fashion|brand|retail|boutique|shoes|footwear|textile"],
        ),
        CategoryRule(
            tag=CategoryTag.MARKETPLACE_ECOMMERCE,
            patterns=[r"marketplace|e-?commerce|webshop|platform|omni(channel)?"],
        ),
        CategoryRule(
            tag=CategoryTag.HOME_INTERIOR,
            patterns=[r"home|interior|furniture|decor(ation)?|homeware(s)?"],
        ),
        CategoryRule(
            tag=CategoryTag.PAYMENTS_POS,
            patterns=[r"payment(s)?|pos|terminal|checkout|acquirer|card processing"],
        ),
        CategoryRule(
            tag=CategoryTag.LOGISTICS_FULFILLMENT,
            patterns=[r"logistic(s)?|fulfil(l)?ment|warehouse|3pl|shipping|carrier"],
        ),
        CategoryRule(
            tag=CategoryTag.RETAIL_TECH_SAAS,
            patterns=[
                r"saas|software|crm|cdp|analytics?|ai|vision|inventory|pricing|planogram|plm"
            ],
        ),
        CategoryRule(
            tag=CategoryTag.INSTORE_HARDWARE_SIGNAGE,
            patterns=[
                r"kiosk|signage|digital signage|display|scanner|rfid|handheld|pda|barcode"
            ],
        ),
    ],
    candidate_keywords=[
        "apparel",
        "clothing",
        "fashion",
        "retail",
        "marketplace",
        "boutique",
        "shoes",
        "footwear",
    ],
    candidate_categories=[
        CategoryTag.FASHION_BRAND_RETAIL,
        CategoryTag.MARKETPLACE_ECOMMERCE,
        CategoryTag.HOME_INTERIOR,
    ],
)


def combine_text(*parts: Any) -> str:
    """Join the non-empty string parts with spaces and case-fold the result."""
    return " ".join(part for part in parts if isinstance(part, str) and part).casefold()


class ClassificationEngine:
    """Applies ``TaggingRules`` to exhibitor text.

    Stateless after construction; safe to share between requests.
    """

    def __init__(self, rules: TaggingRules | None = None) -> None:
        self._rules = rules or DEFAULT_RULES
        self._country_markers = [m.casefold() for m in self._rules.country_markers if m]
        self._candidate_keywords = [k.casefold() for k in self._rules.candidate_keywords if k]
        self._candidate_categories = frozenset(self._rules.candidate_categories)
        self._categories: list[tuple[CategoryTag, list[re.Pattern]]] = []
        for rule in self._rules.categories:
            compiled = [
                p for p in (self._compile_pattern(raw, rule.tag) for raw in rule.patterns) if p
            ]
            self._categories.append((rule.tag, compiled))

    @classmethod
    def from_yaml(cls, path: str | Path) -> ClassificationEngine:
        """Build an engine from a YAML rules file."""
        with open(path, encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        return cls(TaggingRules.model_validate(data))

    @staticmethod
    def _compile_pattern(pattern: str, tag: CategoryTag) -> re.Pattern | None:
        try:
            return re.compile(pattern, re.IGNORECASE)
        except re.error as exc:
            logger.warning("Invalid pattern for category %s: %r (%s)", tag, pattern, exc)
            return None

    @property
    def rules(self) -> TaggingRules:
        return self._rules

    @property
    def category_order(self) -> list[CategoryTag]:
        """Tags in the order they are tried, ending with ``other``."""
        return [tag for tag, _ in self._categories] + [CategoryTag.OTHER]

    def detect_country_marker(self, text: str | None) -> bool:
        """Return True when any country marker occurs in ``text``."""
        if not text or not isinstance(text, str):
            return False
        folded = text.casefold()
        return any(marker in folded for marker in self._country_markers)

    def categorize(
        self,
        name: str | None,
        company_info: str | None = None,
        activities: str | None = None,
        target_markets: str | None = None,
    ) -> CategoryTag:
        """Return the first category whose patterns match the combined text."""
        text = combine_text(name, company_info, activities, target_markets)
        if not text:
            return CategoryTag.OTHER
        for tag, patterns in self._categories:
            if any(p.search(text) for p in patterns):
                return tag
        return CategoryTag.OTHER

    def score_candidate(
        self,
        category: CategoryTag,
        is_country_marker: bool,
        name: str | None,
        company_info: str | None = None,
        activities: str | None = None,
        target_markets: str | None = None,
    ) -> bool:
        """Decide whether a record is a lead candidate.

        Any one of three signals qualifies: a country marker, a candidate
        keyword in the text, or membership of a candidate category.
        """
        if is_country_marker:
            return True
        text = combine_text(name, company_info, activities, target_markets)
        if any(keyword in text for keyword in self._candidate_keywords):
            return True
        return category in self._candidate_categories

    def classify(self, record: ExhibitorRecord) -> ComputedFields:
        """Compute all three flags for an exhibitor record."""
        is_france = self.detect_country_marker(
            combine_text(record.country, record.address, record.company_info)
        )
        category = self.categorize(
            record.name, record.company_info, record.activities, record.target_markets
        )
        candidate = self.score_candidate(
            category,
            is_france,
            record.name,
            record.company_info,
            record.activities,
            record.target_markets,
        )
        return ComputedFields(
            is_france=is_france,
            category_tag=category,
            pants_candidate=candidate,
        )


# Module-level convenience: the built-in rules never change at runtime
default_engine = ClassificationEngine()


def detect_country_marker(text: str | None) -> bool:
    return default_engine.detect_country_marker(text)


def categorize(
    name: str | None,
    company_info: str | None = None,
    activities: str | None = None,
    target_markets: str | None = None,
) -> CategoryTag:
    return default_engine.categorize(name, company_info, activities, target_markets)


def score_candidate(
    category: CategoryTag,
    is_country_marker: bool,
    name: str | None,
    company_info: str | None = None,
    activities: str | None = None,
    target_markets: str | None = None,
) -> bool:
    return default_engine.score_candidate(
        category, is_country_marker, name, company_info, activities, target_markets
    )


def classify(record: ExhibitorRecord) -> ComputedFields:
    """Classify a record with the built-in rules."""
    return default_engine.classify(record)
