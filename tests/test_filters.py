import pytest

from app.schemas.common import parse_model
from app.schemas.content import BlogFilter, BlogIn
from app.schemas.property import PropertyFilter, PropertyIn
from app.services import content as content_service
from app.services import properties as property_service
from tests.factories import blog_payload, property_payload


async def seed_properties(session):
    listings = [
        property_payload(name="Skyline Residency", builder="Acme Developers"),
        property_payload(name="Green Acres", type="plot", builder="Terra Homes", location="Mysuru"),
        property_payload(name="Tech Park One", type="commercial", status="sold", builder="ACME Commercial"),
        property_payload(name="Hundred Percent Plots", type="plot", builder="Terra Homes", description="100% clear title"),
    ]
    for payload in listings:
        await property_service.create_property(session, parse_model(PropertyIn, payload))


async def names(session, **query):
    items, total = await property_service.search_properties(session, parse_model(PropertyFilter, query))
    assert total == len(items)
    return sorted(item.name for item in items)


@pytest.mark.asyncio
async def test_no_filters_returns_everything(session):
    await seed_properties(session)
    assert len(await names(session)) == 4


@pytest.mark.asyncio
async def test_filters_are_combined(session):
    await seed_properties(session)
    assert await names(session, type="plot", builder="terra") == ["Green Acres", "Hundred Percent Plots"]
    assert await names(session, type="plot", search="mysuru") == ["Green Acres"]
    assert await names(session, status="sold") == ["Tech Park One"]


@pytest.mark.asyncio
async def test_builder_filter_is_case_insensitive_substring(session):
    await seed_properties(session)
    assert await names(session, builder="acme") == ["Skyline Residency", "Tech Park One"]


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(session):
    await seed_properties(session)
    assert await names(session, search="100%") == ["Hundred Percent Plots"]
    assert await names(session, search="_") == []


@pytest.mark.asyncio
async def test_pagination_counts_all_matches(session):
    await seed_properties(session)
    items, total = await property_service.search_properties(session, parse_model(PropertyFilter, {"limit": "3"}))
    assert len(items) == 3
    assert total == 4
    items, total = await property_service.search_properties(
        session, parse_model(PropertyFilter, {"limit": "3", "page": "2"})
    )
    assert len(items) == 1


@pytest.mark.asyncio
async def test_blog_published_filter(session):
    await content_service.create_blog(session, parse_model(BlogIn, blog_payload(title="Live post")))
    await content_service.create_blog(session, parse_model(BlogIn, blog_payload(title="Draft post", published=False)))

    drafts, _ = await content_service.search_blogs(session, parse_model(BlogFilter, {"published": "false"}))
    everything, total = await content_service.search_blogs(session, parse_model(BlogFilter, {}))

    assert [blog.title for blog in drafts] == ["Draft post"]
    assert total == 2
