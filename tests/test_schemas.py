from datetime import datetime, timezone

import pytest

from app.core.errors import ValidationError
from app.models import BlogType, PropertyType, ReferralSource
from app.schemas.common import ListQuery, parse_model
from app.schemas.content import BlogIn, VideoIn
from app.schemas.leads import CareerApplicationFilter, CareerApplicationIn, EnquiryIn, EnquiryUpdate, PageTrackIn
from app.schemas.property import BuilderIn, PropertyIn, parse_launch_date
from tests.factories import blog_payload, career_payload, property_payload


def error_of(model, data):
    with pytest.raises(ValidationError) as exc:
        parse_model(model, data)
    return exc.value.message


@pytest.mark.parametrize(
    "value, expected",
    [
        ("25-12-2025 10:30", datetime(2025, 12, 25, 10, 30, tzinfo=timezone.utc)),
        ("2025-12-25 10:30:15", datetime(2025, 12, 25, 10, 30, 15, tzinfo=timezone.utc)),
        ("2025-12-25T10:30", datetime(2025, 12, 25, 10, 30, tzinfo=timezone.utc)),
        ("2025-12-25T10:30:00Z", datetime(2025, 12, 25, 10, 30, tzinfo=timezone.utc)),
    ],
)
def test_launch_date_formats(value, expected):
    assert parse_launch_date(value) == expected


def test_launch_date_blank_is_none():
    assert parse_launch_date("") is None


def test_property_rejects_bad_launch_date():
    assert error_of(PropertyIn, property_payload(projectLaunchDate="next spring")) == "Invalid project launch date format"


def test_property_type_is_case_insensitive():
    data = parse_model(PropertyIn, property_payload(type="Residential"))
    assert data.type is PropertyType.residential


def test_property_invalid_type_and_status():
    assert error_of(PropertyIn, property_payload(type="castle")) == "Invalid property type"
    assert error_of(PropertyIn, property_payload(status="gone")) == "Invalid property status"


def test_property_slug_must_be_url_friendly():
    assert error_of(PropertyIn, property_payload(slug="Not A Slug")) == "Slug must be URL-friendly (lowercase, hyphens only)"


def test_property_other_configuration_uses_custom_type():
    data = parse_model(
        PropertyIn,
        property_payload(configurations=[{"configType": "other", "customConfigType": "Duplex", "price": ""}]),
    )
    assert data.configurations[0].config_type == "Duplex"
    assert data.configurations[0].price is None


def test_property_configurations_absent_is_none():
    assert parse_model(PropertyIn, property_payload()).configurations is None


def test_builder_name_is_trimmed_and_required():
    assert parse_model(BuilderIn, {"name": "  Acme  "}).name == "Acme"
    assert error_of(BuilderIn, {"name": "   "}) == "Builder name is required"


def test_blog_type_defaults_to_text():
    assert parse_model(BlogIn, blog_payload()).type is BlogType.TEXT


def test_video_blog_requires_url():
    assert error_of(BlogIn, blog_payload(type="video")) == "Video URL is required for video blogs"


def test_blog_content_minimum_length_reports_field():
    assert error_of(BlogIn, blog_payload(content="too short")).startswith("content:")


def test_video_link_must_be_supported_provider():
    data = {"title": "Site tour", "videoLink": "https://example.com/watch/1"}
    assert error_of(VideoIn, data) == "Video link must be a valid YouTube or Vimeo URL"
    data["videoLink"] = "https://youtu.be/abc123"
    assert parse_model(VideoIn, data).order == 0


def test_video_order_non_negative():
    data = {"title": "Site tour", "videoLink": "https://vimeo.com/123", "order": -1}
    assert error_of(VideoIn, data) == "Order must be non-negative"


def test_enquiry_phone_rules():
    base = {"name": "Ravi", "email": "ravi@example.com", "message": "Please call me back"}
    assert parse_model(EnquiryIn, {**base, "phone": ""}).phone is None
    assert parse_model(EnquiryIn, base).type == "contact"
    assert error_of(EnquiryIn, {**base, "phone": "5123456789"}) == "Invalid phone number (10 digits starting with 6-9)"


def test_enquiry_update_cannot_clear_required_field():
    assert error_of(EnquiryUpdate, {"name": None}) == "name cannot be empty"
    assert parse_model(EnquiryUpdate, {"type": "site-visit"}).model_fields_set == {"type"}


def test_career_application_normalizes_email_and_source():
    data = parse_model(CareerApplicationIn, career_payload())
    assert data.email == "asha@example.com"
    assert data.referral_source is ReferralSource.WEBSITE


def test_career_application_other_requires_detail():
    message = error_of(CareerApplicationIn, career_payload(referralSource="OTHER"))
    assert message == "Please specify how you came to know about us"


def test_career_application_resume_link():
    assert error_of(CareerApplicationIn, career_payload(resumeLink="not a url")) == (
        "Please provide a valid URL for your resume"
    )
    assert error_of(CareerApplicationIn, career_payload(resumeLink="https://evil.com/drive.google.com")) == (
        "Please provide a valid cloud storage link (Google Drive, Dropbox, etc.)"
    )
    assert parse_model(CareerApplicationIn, career_payload(resumeLink="https://www.dropbox.com/s/x")).resume_link


def test_career_filter_rejects_unknown_source():
    assert error_of(CareerApplicationFilter, {"referralSource": "tv"}) == "Invalid referral source"


def test_page_track_name_required():
    assert error_of(PageTrackIn, {"pageName": "  "}) == "Page name is required"
    assert error_of(PageTrackIn, {"pageName": "x" * 101}) == "Page name is too long"


def test_list_query_blank_values_fall_back_to_defaults():
    query = parse_model(ListQuery, {"page": "", "limit": "", "search": " "})
    assert (query.page, query.limit, query.search) == (1, 25, None)


def test_list_query_limit_bounds():
    assert error_of(ListQuery, {"limit": "500"}).startswith("limit:")
