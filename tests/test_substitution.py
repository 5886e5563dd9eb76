"""Tests for placeholder substitution in policy templates."""
import datetime
from types import SimpleNamespace

import pytest

from app.policy.substitution import (
    CATALOG,
    Placeholder,
    add_one_year,
    build_substitution_map,
    format_long_date,
    order_by_specificity,
    substitute,
)

TODAY = datetime.date(2026, 10, 18)


def _profile(**overrides):
    values = {
        "name": "Acme Corp",
        "industry": "Healthcare",
        "ciso_name": "Dana Lee",
        "dpo_name": "Sam Ortiz",
        "headquarters": "Berlin, Germany",
        "main_service_region": None,
        "region": "EU",
        "primary_contact_email": "security@acme.test",
        "legal_entity_name": "Acme Corporation GmbH",
        "policy_language": "en",
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def _empty_profile(name="Acme Corp"):
    return SimpleNamespace(name=name)


def test_company_name_variants_all_resolve():
    content = (
        "{{CLIENT_NAME}} / {{COMPANY_NAME}} / [COMPANY NAME] / [CLIENT NAME] / "
        "Company's Name / [Company Name] / [Organization Name]"
    )
    result = substitute(content, _profile(), today=TODAY)
    assert result == " / ".join(["Acme Corp"] * 7)


def test_matching_is_case_insensitive_and_global():
    content = "{{client_name}} and {{Client_Name}} and [company name]"
    assert substitute(content, _profile(), today=TODAY) == "Acme Corp and Acme Corp and Acme Corp"


def test_end_to_end_example_with_missing_industry():
    profile = SimpleNamespace(name="Acme Corp", industry=None)
    result = substitute("Hello {{CLIENT_NAME}}, welcome to [Industry].", profile, today=TODAY)
    assert result == "Hello Acme Corp, welcome to [Industry]."


@pytest.mark.parametrize("token", ["{{INDUSTRY}}", "[INDUSTRY]", "[Industry]"])
def test_missing_industry_falls_back_to_placeholder(token):
    assert substitute(token, _profile(industry=None), today=TODAY) == "[Industry]"


@pytest.mark.parametrize(
    "token, expected",
    [
        ("[CISO Name]", "[CISO Name]"),
        ("[DPO Name]", "[DPO Name]"),
        ("{{HEADQUARTERS}}", "[Headquarters Location]"),
        ("[Location]", "[Location]"),
        ("[Region]", "[Region]"),
        ("{{CONTACT_EMAIL}}", "[Contact Email]"),
        ("[Legal Entity Name]", "Acme Corp"),
    ],
)
def test_fallbacks_for_empty_profile(token, expected):
    assert substitute(token, _empty_profile(), today=TODAY) == expected


def test_blank_strings_count_as_missing():
    assert substitute("[CISO Name]", _profile(ciso_name="   "), today=TODAY) == "[CISO Name]"


def test_missing_company_name_uses_label_fallback():
    assert substitute("{{CLIENT_NAME}}", _empty_profile(name=None), today=TODAY) == "[Missing Company Name]"


def test_region_prefers_main_service_region():
    profile = _profile(main_service_region="eu-central-1", region="EU")
    assert substitute("{{REGION}}", profile, today=TODAY) == "eu-central-1"
    assert substitute("{{REGION}}", _profile(main_service_region=None), today=TODAY) == "EU"


def test_legal_entity_prefers_legal_name_then_display_name():
    assert substitute("{{LEGAL_ENTITY_NAME}}", _profile(), today=TODAY) == "Acme Corporation GmbH"
    assert substitute("{{LEGAL_ENTITY_NAME}}", _profile(legal_entity_name=None), today=TODAY) == "Acme Corp"


def test_approved_by_phrase_resolves_as_one_unit():
    assert substitute("Approved By: [CISO Name]", _profile(), today=TODAY) == "Approved By: Dana Lee"
    assert (
        substitute("Approved By: [CISO Name]", _profile(ciso_name=None), today=TODAY)
        == "Approved By: [CISO Name]"
    )


def test_dates_and_version():
    content = (
        "Effective Date: [Date]\n"
        "Review Date: [Date + 1 Year]\n"
        "{{EFFECTIVE_DATE}} | {{REVIEW_DATE}} | [Review Date] | {{VERSION}} | [Version]"
    )
    result = substitute(content, _profile(), today=TODAY)
    assert result == (
        "Effective Date: October 18, 2026\n"
        "Review Date: October 18, 2027\n"
        "October 18, 2026 | October 18, 2027 | October 18, 2027 | 1.0 | 1.0"
    )


def test_plus_sign_is_matched_literally():
    # "[Date + 1 Year]" must not be read as a regex quantifier.
    assert substitute("[Date  1 Year]", _profile(), today=TODAY) == "[Date  1 Year]"
    assert substitute("[Date + 1 Year]", _profile(), today=TODAY) == "October 18, 2027"


def test_review_date_is_one_calendar_year_later():
    for day in [datetime.date(2026, 1, 31), datetime.date(2027, 3, 1), datetime.date(2028, 2, 29)]:
        review = add_one_year(day)
        assert (review - day).days in (365, 366)
        effective_text = substitute("[Effective Date]", _profile(), today=day)
        review_text = substitute("[Review Date]", _profile(), today=day)
        assert effective_text == format_long_date(day)
        assert review_text == format_long_date(review)


def test_leap_day_rolls_to_march_first():
    assert add_one_year(datetime.date(2028, 2, 29)) == datetime.date(2029, 3, 1)


def test_format_long_date():
    assert format_long_date(datetime.date(2026, 1, 5)) == "January 5, 2026"


@pytest.mark.parametrize(
    "content",
    [
        "Policy for {{CLIENT_NAME}} ([Industry]) approved.\nApproved By: [CISO Name]",
        "Effective Date: [Date]\nReview Date: [Date + 1 Year]\nVersion [Version]",
        "[Headquarters] [Location] {{REGION}} [Contact Email] [DPO Name] [Legal Entity Name]",
        "Nothing to replace here.",
    ],
)
@pytest.mark.parametrize("profile", [_profile(), _empty_profile()])
def test_substitution_is_idempotent(content, profile):
    once = substitute(content, profile, today=TODAY)
    assert substitute(once, profile, today=TODAY) == once


def test_token_inside_a_client_value_needs_a_second_call():
    profile = _profile(industry="{{CLIENT_NAME}} services")
    once = substitute("Sector: [Industry]", profile, today=TODAY)
    assert once == "Sector: {{CLIENT_NAME}} services"
    assert substitute(once, profile, today=TODAY) == "Sector: Acme Corp services"


def test_unknown_text_and_empty_content_pass_through():
    assert substitute("[Unknown Token] {{NOPE}}", _profile(), today=TODAY) == "[Unknown Token] {{NOPE}}"
    assert substitute("", _profile(), today=TODAY) == ""
    assert substitute(None, _profile(), today=TODAY) == ""


def test_replacement_values_are_inserted_literally():
    profile = _profile(name=r"Acme \1 & Co $0")
    assert substitute("{{CLIENT_NAME}}", profile, today=TODAY) == r"Acme \1 & Co $0"


def test_no_pattern_runs_after_a_pattern_that_contains_it():
    for earlier_index, earlier in enumerate(CATALOG):
        for later in CATALOG[earlier_index + 1:]:
            assert not later.contains(earlier), f"{later.pattern!r} runs after {earlier.pattern!r}"


def test_order_by_specificity_moves_phrases_first():
    generic = Placeholder("[CISO Name]", "ciso_name")
    phrase = Placeholder("Approved By: [CISO Name]", "ciso_name", prefix="Approved By: ")
    unrelated = Placeholder("{{VERSION}}", "version")
    assert order_by_specificity([generic, unrelated, phrase]) == (unrelated, phrase, generic)


def test_order_by_specificity_keeps_case_variants_in_declaration_order():
    upper = Placeholder("[CISO NAME]", "ciso_name")
    title = Placeholder("[CISO Name]", "ciso_name")
    assert order_by_specificity([upper, title]) == (upper, title)


def test_substitution_map_is_ordered_like_catalog():
    pairs = build_substitution_map(_profile(), today=TODAY)
    assert [placeholder for placeholder, _ in pairs] == list(CATALOG)
    values = {placeholder.pattern: value for placeholder, value in pairs}
    assert values["Approved By: [CISO Name]"] == "Approved By: Dana Lee"
    assert values["{{VERSION}}"] == "1.0"
