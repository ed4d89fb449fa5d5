from __future__ import annotations

from leadcapture.pipeline.normalize import keyword_pattern, normalize_url, strip_location_tokens
from leadcapture.pipeline.rules import (
    is_well_formed_url,
    validate_email,
    validate_name_line,
    validate_phone,
    validate_url,
)


def test_email_normalization() -> None:
    result = validate_email(" Jane@Example.COM ")
    assert result.is_valid
    assert result.normalized == "jane@example.com"


def test_invalid_email() -> None:
    assert not validate_email("bob@localhost").is_valid
    assert not validate_email("bob@.com").is_valid
    assert not validate_email("@acme.com").is_valid


def test_phone_validation() -> None:
    assert validate_phone("+61 454 534 34").is_valid
    assert not validate_phone("555-01").is_valid
    assert not validate_phone("1234 5678 9012 3456").is_valid


def test_url_validation() -> None:
    ok = validate_url("WWW.Acme.com/;")
    assert ok.is_valid
    assert ok.normalized == "https://www.acme.com/"
    assert not validate_url("https://-").is_valid
    assert not is_well_formed_url("ftp://acme.com")
    assert not is_well_formed_url("https://acme .com")


def test_normalize_url_keeps_existing_scheme() -> None:
    assert normalize_url("http://Acme.com,") == "http://acme.com"


def test_name_line_validation() -> None:
    assert validate_name_line("Jo").is_valid
    assert not validate_name_line("J").is_valid
    assert not validate_name_line("x" * 51).is_valid
    assert not validate_name_line("12345").is_valid


def test_keyword_pattern_respects_word_edges() -> None:
    pattern = keyword_pattern(["inc", "co.", "市"])
    assert pattern.search("Acme Inc")
    assert pattern.search("Acme Trading Co.")
    assert pattern.search("上海市")
    assert not pattern.search("Incredible Coffee")


def test_strip_location_tokens() -> None:
    pattern = keyword_pattern(["city", "district", "市", "区"])
    assert strip_location_tokens("Shanghai City", pattern) == "Shanghai"
    assert strip_location_tokens("Kowloon District, Hong Kong", pattern) == "Kowloon, Hong Kong"
    assert strip_location_tokens("上海市浦东新区", pattern) == "上海浦东新"
