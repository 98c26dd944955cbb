"""Tests for contact token recognition and validity checks."""

from __future__ import annotations

from resume_ats.utils.contact import find_contact_tokens, is_location, is_valid_email, is_valid_phone


def test_contact_line_tokens_in_order() -> None:
    line = "jane.doe@gmail.com | +1 (555) 123-4567 | https://www.linkedin.com/in/jane-doe/ | github.com/janedoe"
    tokens = find_contact_tokens(line)
    assert [token.kind for token in tokens] == ["email", "phone", "linkedin_url", "github_url"]
    values = {token.kind: token.value for token in tokens}
    assert values["linkedin_url"] == "https://linkedin.com/in/jane-doe"
    assert values["github_url"] == "https://github.com/janedoe"
    assert values["phone"] == "+1 (555) 123-4567"


def test_other_urls_are_portfolio_links() -> None:
    tokens = find_contact_tokens("Portfolio: www.janedoe.dev")
    assert [(token.kind, token.value) for token in tokens] == [("portfolio_url", "https://www.janedoe.dev")]


def test_date_ranges_are_not_phone_numbers() -> None:
    assert find_contact_tokens("Engineer 2019 - 2021") == []
    assert find_contact_tokens("06/2016 - 12/2019") == []


def test_email_validity() -> None:
    assert is_valid_email("jane.doe@gmail.com")
    assert not is_valid_email("jane.doe@")
    assert not is_valid_email("not an email")


def test_phone_validity() -> None:
    assert is_valid_phone("555-0100")
    assert is_valid_phone("+44 20 7946 0958")
    assert not is_valid_phone("123")
    assert not is_valid_phone("call me maybe 5550100")


def test_location_shapes() -> None:
    assert is_location("Austin, TX")
    assert is_location("New York, NY 10001")
    assert is_location("Berlin, Germany")
    assert is_location("Remote")
    assert not is_location("Software Engineer, Acme Corp")
    assert not is_location("Python")
