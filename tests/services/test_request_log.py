"""
Тесты для журнала заявок.
"""

from app.services.request_log import RequestLog


def test_insert_newest_prepends_and_keeps_original(make_request):
    first = make_request(id="1")
    second = make_request(id="2")
    log = RequestLog([first])

    new_log = log.insert_newest(second)

    assert list(new_log) == [second, first]
    assert list(log) == [first]
    assert len(new_log) == 2


def test_insert_duplicate_id_is_ignored(make_request):
    log = RequestLog([make_request(id="1")])

    new_log = log.insert_newest(make_request(id="1", title="Другая"))

    assert new_log is log
    assert len(new_log) == 1


def test_empty_log():
    log = RequestLog()
    assert len(log) == 0
    assert log.requests == ()
    assert not log.contains("1")
