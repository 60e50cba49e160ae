"""
Tests for document expiry classification
"""
from datetime import date, timedelta
from osgb_analytics.analytics.expiry import NO_EXPIRY, classify_expiry


def test_expiring_in_fifteen_days(now):
    """Inside the 30 day warning window"""
    info = classify_expiry(now + timedelta(days=15), now)
    assert info.is_expiring_soon
    assert not info.is_expired
    assert info.days_until_expiry == 15


def test_plain_date_rounds_partial_days_up(now):
    """A date is local midnight; 14.5 days left counts as 15"""
    info = classify_expiry(date(2024, 1, 25), now)
    assert info.days_until_expiry == 15
    assert info.is_expiring_soon


def test_expired_five_days_ago(now):
    """Past expiry is expired and not expiring soon"""
    info = classify_expiry(now - timedelta(days=5), now)
    assert info.is_expired
    assert not info.is_expiring_soon
    assert info.days_until_expiry == -5


def test_expiry_exactly_now(now):
    """Zero days left is neither expired nor expiring soon"""
    info = classify_expiry(now, now)
    assert info.days_until_expiry == 0
    assert not info.is_expired
    assert not info.is_expiring_soon


def test_window_edges(now):
    """30 days is still soon, 31 is not"""
    assert classify_expiry(now + timedelta(days=30), now).is_expiring_soon
    assert not classify_expiry(now + timedelta(days=31), now).is_expiring_soon
    assert classify_expiry(now + timedelta(days=31), now, warning_days=60).is_expiring_soon


def test_no_expiry_date(now):
    """Documents without an expiry date are never flagged"""
    assert classify_expiry(None, now) == NO_EXPIRY
    assert NO_EXPIRY.days_until_expiry is None
