"""
Тесты для группировки заявок по датам.
"""

from datetime import date

from app.services.request_grouping import group_by_date, parse_date

TODAY = date(2026, 10, 19)


def test_group_order_today_yesterday_then_dates(make_request):
    """Тест: Порядок групп не зависит от порядка заявок."""
    requests = [
        make_request(id="1", created_at="01.01.2024"),
        make_request(id="2", created_at="18.10.2026"),
        make_request(id="3", created_at="19.10.2026"),
    ]

    groups = group_by_date(requests, TODAY)

    assert [group.key for group in groups] == ["TODAY", "YESTERDAY", "01.01.2024"]
    assert [group.label for group in groups] == ["СЕГОДНЯ", "ВЧЕРА", "01.01.2024"]


def test_older_dates_are_descending(make_request):
    requests = [
        make_request(id="1", created_at="05.03.2025"),
        make_request(id="2", created_at="10.10.2026"),
        make_request(id="3", created_at="31.12.2025"),
    ]

    groups = group_by_date(requests, TODAY)

    assert [group.key for group in groups] == ["10.10.2026", "31.12.2025", "05.03.2025"]


def test_items_keep_incoming_order(make_request):
    requests = [
        make_request(id="b", created_at="19.10.2026"),
        make_request(id="x", created_at="01.01.2024"),
        make_request(id="a", created_at="19.10.2026"),
    ]

    groups = group_by_date(requests, TODAY)

    assert [req.id for req in groups[0].requests] == ["b", "a"]


def test_yesterday_across_month_boundary(make_request):
    requests = [make_request(id="1", created_at="30.09.2026")]

    groups = group_by_date(requests, date(2026, 10, 1))

    assert groups[0].key == "YESTERDAY"


def test_malformed_dates_go_last(make_request):
    requests = [
        make_request(id="1", created_at="??"),
        make_request(id="2", created_at="01.01.2024"),
        make_request(id="3", created_at="2026-10-19"),
    ]

    groups = group_by_date(requests, TODAY)

    assert [group.key for group in groups] == ["01.01.2024", "??", "2026-10-19"]


def test_empty_input():
    assert group_by_date([], TODAY) == []


def test_parse_date():
    assert parse_date("07.03.2025") == date(2025, 3, 7)
    assert parse_date("31.02.2025") is None
    assert parse_date("") is None
