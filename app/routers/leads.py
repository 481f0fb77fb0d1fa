from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import unexpected_failure
from app.db import get_session
from app.dependencies.rate_limit import rate_limited
from app.schemas.common import Envelope
from app.schemas.leads import (
    CareerApplicationIn,
    CareerApplicationOut,
    EmailSubscriptionIn,
    EmailSubscriptionOut,
    EnquiryIn,
    EnquiryOut,
    PageStatOut,
    PageTrackIn,
    TACRegistrationIn,
    TACRegistrationOut,
)
from app.services import leads as lead_service
from app.services import stats as stats_service

router = APIRouter(prefix="/api", tags=["leads"])


@router.post("/enquiries", response_model=Envelope[EnquiryOut], dependencies=[rate_limited(times=5, seconds=60)])
async def submit_enquiry(data: EnquiryIn, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to submit enquiry"):
        enquiry = await lead_service.create_enquiry(db, data)
    return {"success": True, "data": enquiry, "message": "Enquiry submitted successfully"}


@router.post("/career", response_model=Envelope[CareerApplicationOut], dependencies=[rate_limited(times=5, seconds=60)])
async def submit_career_application(data: CareerApplicationIn, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to submit application"):
        application = await lead_service.create_career_application(db, data)
    return {"success": True, "data": application, "message": "Application submitted successfully"}


@router.post(
    "/tac-registration",
    response_model=Envelope[TACRegistrationOut],
    dependencies=[rate_limited(times=5, seconds=60)],
)
async def submit_tac_registration(data: TACRegistrationIn, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to submit registration"):
        registration = await lead_service.create_tac_registration(db, data)
    return {"success": True, "data": registration, "message": "Registration submitted successfully"}


@router.post(
    "/email-subscription",
    response_model=Envelope[EmailSubscriptionOut],
    dependencies=[rate_limited(times=5, seconds=60)],
)
async def subscribe(data: EmailSubscriptionIn, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to subscribe. Please try again."):
        subscription, created = await lead_service.subscribe_email(db, data)
    message = "Successfully subscribed to updates" if created else "Email already subscribed"
    return {"success": True, "data": subscription, "message": message}


@router.post("/stats/track", response_model=Envelope[PageStatOut], dependencies=[rate_limited(times=60, seconds=60)])
async def track_page(data: PageTrackIn, db: AsyncSession = Depends(get_session)):
    with unexpected_failure("Failed to track page stat", page_name=data.page_name):
        stat = await stats_service.track_page(db, data.page_name)
    return {"success": True, "data": stat}
