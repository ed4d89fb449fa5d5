from __future__ import annotations

from leadcapture.config import (
    DEFAULT_COMPANY_KEYWORDS,
    DEFAULT_LOCATION_KEYWORDS,
    DEFAULT_URL_TLDS,
)
from leadcapture.pipeline.lines import (
    classify_city,
    classify_company,
    classify_lines,
    classify_name,
    split_lines,
)


def test_split_lines_trims_and_drops_blanks() -> None:
    assert split_lines("  Jane Doe \n\n\t\nAcme Inc\r\n") == ["Jane Doe", "Acme Inc"]
    assert split_lines("") == []


def test_name_is_first_qualifying_line() -> None:
    lines = ["x" * 60, "jane@acme.com", "+1 206 555 1212", "42", "Jane Doe"]
    match = classify_name(lines, DEFAULT_URL_TLDS)
    assert match.index == 4
    assert match.value == "Jane Doe"


def test_name_absent_for_numeric_lines() -> None:
    assert classify_name(["12345", "67890"], DEFAULT_URL_TLDS) is None


def test_company_skips_name_line() -> None:
    lines = ["Acme Group", "Jane Doe"]
    assignment = classify_lines(lines, DEFAULT_COMPANY_KEYWORDS, DEFAULT_LOCATION_KEYWORDS, DEFAULT_URL_TLDS)
    assert assignment.name.value == "Acme Group"
    assert assignment.company is None


def test_company_ignores_domains_with_keywords() -> None:
    lines = ["Jane Doe", "www.acme-tech.com", "Acme Tech Solutions"]
    match = classify_company(lines, DEFAULT_COMPANY_KEYWORDS, DEFAULT_URL_TLDS, exclude=(0,))
    assert match.value == "Acme Tech Solutions"


def test_company_keywords_are_configurable() -> None:
    lines = ["张伟", "上海科技有限公司"]
    assert classify_company(lines, DEFAULT_COMPANY_KEYWORDS, DEFAULT_URL_TLDS, exclude=(0,)) is None
    match = classify_company(lines, DEFAULT_COMPANY_KEYWORDS + ("有限公司",), DEFAULT_URL_TLDS, exclude=(0,))
    assert match.index == 1


def test_city_strips_location_tokens() -> None:
    match = classify_city(["Shanghai City"], DEFAULT_LOCATION_KEYWORDS, DEFAULT_URL_TLDS)
    assert match.value == "Shanghai"
    assert match.line == "Shanghai City"


def test_city_rejects_short_remainder_and_continues() -> None:
    lines = ["Bob Lee", "Ye City", "Springfield"]
    match = classify_city(lines, DEFAULT_LOCATION_KEYWORDS, DEFAULT_URL_TLDS, exclude=(0,))
    assert match.index == 2
    assert match.value == "Springfield"


def test_city_shape_fallback_bounds() -> None:
    assert classify_city(["Ab"], DEFAULT_LOCATION_KEYWORDS, DEFAULT_URL_TLDS) is None
    assert classify_city(["Long " * 10], DEFAULT_LOCATION_KEYWORDS, DEFAULT_URL_TLDS) is None
    assert classify_city(["lowercase town"], DEFAULT_LOCATION_KEYWORDS, DEFAULT_URL_TLDS) is None


def test_city_keyword_line_has_no_length_bound() -> None:
    line = "Unit 5, 1888 Some Very Long Road Name, Pudong District"
    match = classify_city([line], DEFAULT_LOCATION_KEYWORDS, DEFAULT_URL_TLDS)
    assert match.value == "Unit 5, 1888 Some Very Long Road Name, Pudong"


def test_assignment_lines_are_exclusive() -> None:
    lines = ["Acme Trading Co.", "Acme Trading Co.", "Shanghai City"]
    assignment = classify_lines(lines, DEFAULT_COMPANY_KEYWORDS, DEFAULT_LOCATION_KEYWORDS, DEFAULT_URL_TLDS)
    assert assignment.name.index == 0
    assert assignment.company.index == 1
    assert assignment.city.index == 2
    assert len(set(assignment.claimed())) == 3
