"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class GuestCategory(StrEnum):
    PAST_PRESIDENT = "歷屆會長"
    PAST_CHAIRMAN = "歷屆主席"
    HQ_GUEST = "總會貴賓"
    GOV_OFFICIAL = "政府貴賓"
    VISITING_CHAPTER = "友會來訪"
    MEMBER_YB = "會友 (YB)"
    MEMBER_OB = "特友會 (OB)"
    OTHER = "其他貴賓"


class DrawMode(StrEnum):
    """Which guests a lottery draw may pick from."""

    DEFAULT = "default"
    ALL = "all"
    WINNERS_ONLY = "winners_only"
