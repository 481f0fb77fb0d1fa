from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ValidationError, unexpected_failure
from app.db import get_session
from app.dependencies.auth import get_current_admin
from app.dependencies.query import query_model
from app.schemas.common import Envelope, MessageEnvelope, Page
from app.schemas.content import BlogFilter, BlogIn, BlogOut, VideoFilter, VideoIn, VideoOut
from app.schemas.leads import (
    CareerApplicationFilter,
    CareerApplicationOut,
    EmailSubscriptionFilter,
    EmailSubscriptionOut,
    EnquiryFilter,
    EnquiryOut,
    EnquiryUpdate,
    PageStatOut,
    TACRegistrationFilter,
    TACRegistrationOut,
)
from app.schemas.property import BuilderIn, BuilderOut, PropertyFilter, PropertyIn, PropertyOut, PropertyRef
from app.services import content as content_service
from app.services import leads as lead_service
from app.services import properties as property_service
from app.services import stats as stats_service
from app.services import uploads as upload_service
from app.utils.pagination import paginated

# Every route below is admin-only
router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(get_current_admin)])


# ----------------------- Properties -----------------------
@router.get("/properties", response_model=Envelope[Page[PropertyOut]])
async def list_properties(
    filters: PropertyFilter = Depends(query_model(PropertyFilter)),
    db: AsyncSession = Depends(get_session),
):
    with unexpected_failure("Failed to fetch properties"):
        items, total = await property_service.search_properties(db, filters)
    return {"success": True, "data": paginated(items, filters.page, filters.limit, total)}


@router.post("/properties", response_model=Envelope[PropertyOut])
async def create_property(data: PropertyIn, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to create property"):
        item = await property_service.create_property(db, data)
    return {"success": True, "data": item, "message": "Property created successfully"}


@router.get("/properties/{property_id}", response_model=Envelope[PropertyOut])
async def get_property(property_id: UUID, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to fetch property", property_id=str(property_id)):
        item = await property_service.get_property(db, property_id)
    return {"success": True, "data": item}


@router.put("/properties/{property_id}", response_model=Envelope[PropertyOut])
async def update_property(property_id: UUID, data: PropertyIn, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to update property", property_id=str(property_id)):
        item = await property_service.update_property(db, property_id, data)
    return {"success": True, "data": item, "message": "Property updated successfully"}


@router.delete("/properties/{property_id}", response_model=MessageEnvelope)
async def delete_property(property_id: UUID, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to delete property", property_id=str(property_id)):
        await property_service.delete_property(db, property_id)
    return {"success": True, "message": "Property deleted successfully"}


# ----------------------- Builders -----------------------
@router.get("/builders", response_model=Envelope[List[BuilderOut]])
async def list_builders(db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to fetch builders"):
        builders = await property_service.list_builders(db)
    return {"success": True, "data": builders}


@router.post("/builders", response_model=Envelope[BuilderOut])
async def save_builder(data: BuilderIn, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to save builder"):
        builder = await property_service.save_builder(db, data)
    return {"success": True, "data": builder, "message": "Builder saved successfully"}


# ----------------------- Blogs -----------------------
@router.get("/blogs", response_model=Envelope[Page[BlogOut]])
async def list_blogs(
    filters: BlogFilter = Depends(query_model(BlogFilter)),
    db: AsyncSession = Depends(get_session),
):
    with unexpected_failure("Failed to fetch blogs"):
        items, total = await content_service.search_blogs(db, filters)
    return {"success": True, "data": paginated(items, filters.page, filters.limit, total)}


@router.post("/blogs", response_model=Envelope[BlogOut])
async def create_blog(data: BlogIn, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to create blog"):
        blog = await content_service.create_blog(db, data)
    return {"success": True, "data": blog, "message": "Blog created successfully"}


@router.get("/blogs/{blog_id}", response_model=Envelope[BlogOut])
async def get_blog(blog_id: UUID, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to fetch blog", blog_id=str(blog_id)):
        blog = await content_service.get_blog(db, blog_id)
    return {"success": True, "data": blog}


@router.put("/blogs/{blog_id}", response_model=Envelope[BlogOut])
async def update_blog(blog_id: UUID, data: BlogIn, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to update blog", blog_id=str(blog_id)):
        blog = await content_service.update_blog(db, blog_id, data)
    return {"success": True, "data": blog, "message": "Blog updated successfully"}


@router.delete("/blogs/{blog_id}", response_model=MessageEnvelope)
async def delete_blog(blog_id: UUID, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to delete blog", blog_id=str(blog_id)):
        await content_service.delete_blog(db, blog_id)
    return {"success": True, "message": "Blog deleted successfully"}


# ----------------------- Videos -----------------------
@router.get("/videos", response_model=Envelope[Page[VideoOut]])
async def list_videos(
    filters: VideoFilter = Depends(query_model(VideoFilter)),
    db: AsyncSession = Depends(get_session),
):
    with unexpected_failure("Failed to fetch videos"):
        items, total = await content_service.search_videos(db, filters)
    return {"success": True, "data": paginated(items, filters.page, filters.limit, total)}


@router.post("/videos", response_model=Envelope[VideoOut])
async def create_video(data: VideoIn, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to create video"):
        video = await content_service.create_video(db, data)
    return {"success": True, "data": video, "message": "Video created successfully"}


@router.get("/videos/{video_id}", response_model=Envelope[VideoOut])
async def get_video(video_id: UUID, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to fetch video", video_id=str(video_id)):
        video = await content_service.get_video(db, video_id)
    return {"success": True, "data": video}


@router.put("/videos/{video_id}", response_model=Envelope[VideoOut])
async def update_video(video_id: UUID, data: VideoIn, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to update video", video_id=str(video_id)):
        video = await content_service.update_video(db, video_id, data)
    return {"success": True, "data": video, "message": "Video updated successfully"}


@router.delete("/videos/{video_id}", response_model=MessageEnvelope)
async def delete_video(video_id: UUID, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to delete video", video_id=str(video_id)):
        await content_service.delete_video(db, video_id)
    return {"success": True, "message": "Video deleted successfully"}


# ----------------------- Enquiries -----------------------
async def _with_property(db: AsyncSession, enquiries) -> List[EnquiryOut]:
    names = await property_service.names_by_id(db, [e.property_id for e in enquiries if e.property_id])
    results = []
    for enquiry in enquiries:
        out = EnquiryOut.model_validate(enquiry)
        if enquiry.property_id in names:
            out.property = PropertyRef(id=enquiry.property_id, name=names[enquiry.property_id])
        results.append(out)
    return results


@router.get("/enquiries", response_model=Envelope[Page[EnquiryOut]])
async def list_enquiries(
    filters: EnquiryFilter = Depends(query_model(EnquiryFilter)),
    db: AsyncSession = Depends(get_session),
):
    with unexpected_failure("Failed to fetch enquiries"):
        items, total = await lead_service.search_enquiries(db, filters)
        items = await _with_property(db, items)
    return {"success": True, "data": paginated(items, filters.page, filters.limit, total)}


@router.get("/enquiries/{enquiry_id}", response_model=Envelope[EnquiryOut])
async def get_enquiry(enquiry_id: UUID, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to fetch enquiry", enquiry_id=str(enquiry_id)):
        enquiry = await lead_service.get_enquiry(db, enquiry_id)
        (item,) = await _with_property(db, [enquiry])
    return {"success": True, "data": item}


@router.patch("/enquiries/{enquiry_id}", response_model=Envelope[EnquiryOut])
async def update_enquiry(enquiry_id: UUID, data: EnquiryUpdate, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to update enquiry", enquiry_id=str(enquiry_id)):
        enquiry = await lead_service.update_enquiry(db, enquiry_id, data)
    return {"success": True, "data": enquiry, "message": "Enquiry updated successfully"}


@router.delete("/enquiries/{enquiry_id}", response_model=MessageEnvelope)
async def delete_enquiry(enquiry_id: UUID, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to delete enquiry", enquiry_id=str(enquiry_id)):
        await lead_service.delete_enquiry(db, enquiry_id)
    return {"success": True, "message": "Enquiry deleted successfully"}


# ----------------------- Career applications -----------------------
@router.get("/career", response_model=Envelope[Page[CareerApplicationOut]])
async def list_career_applications(
    filters: CareerApplicationFilter = Depends(query_model(CareerApplicationFilter)),
    db: AsyncSession = Depends(get_session),
):
    with unexpected_failure("Failed to fetch career applications"):
        items, total = await lead_service.search_career_applications(db, filters)
    return {"success": True, "data": paginated(items, filters.page, filters.limit, total)}


@router.get("/career/{application_id}", response_model=Envelope[CareerApplicationOut])
async def get_career_application(application_id: UUID, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to fetch career application", application_id=str(application_id)):
        application = await lead_service.get_career_application(db, application_id)
    return {"success": True, "data": application}


@router.delete("/career/{application_id}", response_model=MessageEnvelope)
async def delete_career_application(application_id: UUID, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to delete career application", application_id=str(application_id)):
        await lead_service.delete_career_application(db, application_id)
    return {"success": True, "message": "Career application deleted successfully"}


# ----------------------- TAC registrations -----------------------
@router.get("/tac-registrations", response_model=Envelope[Page[TACRegistrationOut]])
async def list_tac_registrations(
    filters: TACRegistrationFilter = Depends(query_model(TACRegistrationFilter)),
    db: AsyncSession = Depends(get_session),
):
    with unexpected_failure("Failed to fetch registrations"):
        items, total = await lead_service.search_tac_registrations(db, filters)
    return {"success": True, "data": paginated(items, filters.page, filters.limit, total)}


@router.get("/tac-registrations/{registration_id}", response_model=Envelope[TACRegistrationOut])
async def get_tac_registration(registration_id: UUID, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to fetch registration", registration_id=str(registration_id)):
        registration = await lead_service.get_tac_registration(db, registration_id)
    return {"success": True, "data": registration}


@router.delete("/tac-registrations/{registration_id}", response_model=MessageEnvelope)
async def delete_tac_registration(registration_id: UUID, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to delete registration", registration_id=str(registration_id)):
        await lead_service.delete_tac_registration(db, registration_id)
    return {"success": True, "message": "Registration deleted successfully"}


# ----------------------- Email subscriptions -----------------------
@router.get("/email-subscriptions", response_model=Envelope[Page[EmailSubscriptionOut]])
async def list_subscriptions(
    filters: EmailSubscriptionFilter = Depends(query_model(EmailSubscriptionFilter)),
    db: AsyncSession = Depends(get_session),
):
    with unexpected_failure("Failed to fetch subscriptions"):
        items, total = await lead_service.search_subscriptions(db, filters)
    return {"success": True, "data": paginated(items, filters.page, filters.limit, total)}


@router.delete("/email-subscriptions/{subscription_id}", response_model=MessageEnvelope)
async def delete_subscription(subscription_id: UUID, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to delete subscription", subscription_id=str(subscription_id)):
        await lead_service.delete_subscription(db, subscription_id)
    return {"success": True, "message": "Subscription deleted successfully"}


# ----------------------- Stats -----------------------
@router.get("/stats", response_model=Envelope[List[PageStatOut]])
async def list_stats(db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to fetch stats"):
        stats = await stats_service.list_page_stats(db)
    return {"success": True, "data": stats}


# ----------------------- Upload -----------------------
@router.post("/upload", response_model=Envelope[dict])
async def upload_image(
    file: Optional[UploadFile] = File(None),
    slug: Optional[str] = Form(None),
    image_type: Optional[str] = Form(None, alias="imageType"),
    index: Optional[str] = Form(None),
):
    if file is None:
        raise ValidationError("No file provided")
    content = await upload_service.read_image(file)
    file_name = upload_service.build_file_name(file.content_type, slug=slug, image_type=image_type, index=index)
    with unexpected_failure("Failed to upload file", file_name=file_name):
        stored = await upload_service.store_image(content, file_name)
    return {"success": True, "data": stored, "message": "File uploaded successfully"}
