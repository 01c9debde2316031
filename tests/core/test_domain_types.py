"""Domain Types — enum values and the receipt item → fund bucket mapping."""

import pytest

from zakat_ledger.core.domain_types import (
    FUND_BUCKETS, FundType, Role, SourceFundType, ZakatType, bucket_for,
)


def test_fund_buckets_display_order():
    assert [b.value for b in FUND_BUCKETS] == ["zakat_fitrah", "zakat_maal", "infaq", "sadaqah"]


def test_bucket_for_each_item_kind():
    assert bucket_for(FundType.ZAKAT, ZakatType.FITRAH) == SourceFundType.ZAKAT_FITRAH
    assert bucket_for("zakat", "maal") == SourceFundType.ZAKAT_MAAL
    assert bucket_for("infaq", None) == SourceFundType.INFAQ
    assert bucket_for("sadaqah", None) == SourceFundType.SADAQAH


def test_zakat_without_type_has_no_bucket():
    with pytest.raises(ValueError):
        bucket_for("zakat", None)


def test_enums_serialize_as_strings():
    assert Role.VIEWER == "viewer"
    assert f"{SourceFundType.INFAQ.value}" == "infaq"
