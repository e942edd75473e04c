"""Core type definitions shared across nrf-desk modules."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class CategoryTag(StrEnum):
    """Exhibitor category buckets, in matching priority order.

    Declaration order is significant: the classification engine returns the
    first tag whose patterns match, so reordering members changes results.
    """

    FASHION_BRAND_RETAIL = "fashion_brand_retail"
    MARKETPLACE_ECOMMERCE = "marketplace_ecommerce"
    HOME_INTERIOR = "home_interior"
    PAYMENTS_POS = "payments_pos"
    LOGISTICS_FULFILLMENT = "logistics_fulfillment"
    RETAIL_TECH_SAAS = "retail_tech_saas"
    INSTORE_HARDWARE_SIGNAGE = "instore_hardware_signage"
    OTHER = "other"


class AuthFailure(StrEnum):
    """Internal authentication failure kinds.

    Only ``REJECTED`` is ever visible outside the credential resolver; the
    others exist for logging.
    """

    NOT_FOUND = "not_found"
    MISMATCH = "mismatch"
    SOURCE_UNAVAILABLE = "source_unavailable"
    REJECTED = "rejected"


class FacetCount(BaseModel):
    """A value and how many records carry it."""

    value: str
    count: int
