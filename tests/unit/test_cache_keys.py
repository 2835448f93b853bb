"""Cache key builders: prefixes, hashing and separator validation."""

import pytest

from campus_cms.infrastructure.cache import keys


def test_hashed_key_ignores_param_order() -> None:
    a = keys.hashed_key("news:list:", {"page": 1, "limit": 10})
    b = keys.hashed_key("news:list:", {"limit": 10, "page": 1})
    assert a == b
    assert a.startswith("news:list:")


def test_hashed_key_differs_per_param_set() -> None:
    assert keys.complaints_list_key(1, 10, "open") != keys.complaints_list_key(1, 10, None)
    assert keys.complaints_list_key(1, 10, None) != keys.complaints_list_key(2, 10, None)


def test_every_news_list_variant_sits_under_an_invalidated_prefix() -> None:
    """Each parameterized news key starts with one of the prefixes writes invalidate."""
    variants = [
        keys.news_list_key(1, 10, "", ""),
        keys.news_admin_list_key(1, 10, "exam", "news", 2024),
        keys.news_latest_key(5),
        keys.news_announcements_key("announcement"),
        keys.news_agenda_key("agenda"),
    ]
    for key in variants:
        assert any(key.startswith(p) for p in keys.NEWS_QUERY_PREFIXES), key


def test_complaint_and_visitor_keys_use_their_prefixes() -> None:
    assert keys.complaints_list_key(1, 10, "open").startswith(keys.COMPLAINTS_LIST_PREFIX)
    assert keys.visitors_list_key({"page": 1}).startswith(keys.VISITORS_LIST_PREFIX)


def test_slug_key_rejects_separator() -> None:
    with pytest.raises(ValueError):
        keys.news_slug_key("a:b")


def test_fixed_keys_are_distinct() -> None:
    fixed = {
        keys.academic_calendar_key(),
        keys.accreditation_list_key(),
        keys.organization_chart_key(),
        keys.admission_waves_key(),
        keys.scholarships_key(),
        keys.dashboard_news_total_key(),
        keys.dashboard_visitors_today_key(),
    }
    assert len(fixed) == 7
