from domain.models import course_from_dict
from utils.pagination import paginated_from_props, parse_links


RAW_LINKS = [
    {"url": None, "label": "&laquo; Previous", "active": False},
    {"url": "http://portal.test/guidance/question-bank?page=1", "label": "1", "active": True},
    {"url": "http://portal.test/guidance/question-bank?page=2&per_page=20", "label": "2", "active": False},
    {"url": "http://portal.test/guidance/question-bank?page=2", "label": "Next &raquo;", "active": False},
]


def test_parse_links_unescapes_labels_and_reads_page():
    links = parse_links(RAW_LINKS)
    assert [link.label for link in links] == ["« Previous", "1", "2", "Next »"]
    assert [link.page for link in links] == [None, 1, 2, 2]
    assert links[1].active


def test_paginated_from_paginator_dict():
    value = {
        "data": [{"id": 1, "course_code": "BSIT", "course_name": "IT"}],
        "links": RAW_LINKS,
        "total": 21,
        "current_page": 1,
        "last_page": 2,
        "per_page": 20,
    }
    page = paginated_from_props(value, course_from_dict)
    assert page.items[0].course_code == "BSIT"
    assert (page.total, page.last_page, page.per_page) == (21, 2, 20)
    assert len(page.links) == 4


def test_paginated_from_plain_list_and_none():
    page = paginated_from_props([{"a": 1}, {"a": 2}], per_page=10)
    assert page.total == 2
    assert page.per_page == 10
    assert page.links == []
    assert paginated_from_props(None).items == []
