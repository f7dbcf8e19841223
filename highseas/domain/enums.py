"""
highseas.domain.enums - Enumerations for Airtable single-select fields.

The mapper does not validate incoming values against these; they exist so
filter formulas and callers compare against named constants.
"""

from enum import Enum


class ShipType(str, Enum):
    PROJECT = "project"
    UPDATE  = "update"


class ShipStatus(str, Enum):
    SHIPPED = "shipped"
    STAGED  = "staged"
    DELETED = "deleted"


class OrderStatus(str, Enum):
    """Only REJECTED matters here; the shop owns the rest of the workflow."""
    REJECTED = "REJECTED"


class YswsType(str, Enum):
    """You-Ship-We-Ship program a ship was submitted to."""
    NONE          = "none"
    ONBOARD       = "onboard"
    BLOT          = "blot"
    SPRIG         = "sprig"
    BIN           = "bin"
    HACKPAD       = "hackpad"
    LLM           = "llm"
    BOBA          = "boba"
    CASCADE       = "cascade"
    RETROSPECT    = "retrospect"
    HACKCRAFT     = "hackcraft"
    CIDER         = "cider"
    BROWSER_BUDDY = "browser buddy"
    CARGO_CULT    = "cargo-cult"
    FRAPS         = "fraps"
    RICEATHON     = "riceathon"
    COUNTERSPELL  = "counterspell"
    ANCHOR        = "anchor"
    DESSERT       = "dessert"
    ASYLUM        = "asylum"
