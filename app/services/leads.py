from typing import List, Tuple
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from app.models import CareerApplication, EmailSubscription, Enquiry, TACRegistration
from app.schemas.leads import (
    CareerApplicationFilter,
    CareerApplicationIn,
    EmailSubscriptionFilter,
    EmailSubscriptionIn,
    EnquiryFilter,
    EnquiryIn,
    EnquiryUpdate,
    TACRegistrationFilter,
    TACRegistrationIn,
)
from app.services.crud import commit_or_conflict, delete_or_404, get_or_404, list_page
from app.services.filters import career_conditions, enquiry_conditions, subscription_conditions, tac_conditions

logger = get_logger()

ENQUIRY_NOT_FOUND = "Enquiry not found"
CAREER_NOT_FOUND = "Career application not found"
TAC_NOT_FOUND = "TAC registration not found"
SUBSCRIPTION_NOT_FOUND = "Subscription not found"


async def create_enquiry(db: AsyncSession, data: EnquiryIn) -> Enquiry:
    enquiry = Enquiry(**data.model_dump())
    db.add(enquiry)
    await db.commit()
    await db.refresh(enquiry)
    logger.info("Enquiry received", enquiry_id=str(enquiry.id), type=enquiry.type)
    return enquiry


async def search_enquiries(db: AsyncSession, filters: EnquiryFilter) -> Tuple[List[Enquiry], int]:
    return await list_page(
        db, Enquiry, enquiry_conditions(filters), filters.page, filters.limit,
        order_by=[Enquiry.created_at.desc(), Enquiry.id],
    )


async def get_enquiry(db: AsyncSession, enquiry_id: UUID) -> Enquiry:
    return await get_or_404(db, Enquiry, enquiry_id, ENQUIRY_NOT_FOUND)


async def update_enquiry(db: AsyncSession, enquiry_id: UUID, data: EnquiryUpdate) -> Enquiry:
    enquiry = await get_enquiry(db, enquiry_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(enquiry, field, value)
    await db.commit()
    await db.refresh(enquiry)
    logger.info("Enquiry updated", enquiry_id=str(enquiry_id))
    return enquiry


async def delete_enquiry(db: AsyncSession, enquiry_id: UUID) -> None:
    await delete_or_404(db, Enquiry, enquiry_id, ENQUIRY_NOT_FOUND)
    logger.info("Enquiry deleted", enquiry_id=str(enquiry_id))


async def create_career_application(db: AsyncSession, data: CareerApplicationIn) -> CareerApplication:
    application = CareerApplication(**data.model_dump())
    db.add(application)
    # One application per email, enforced by the unique index on email
    await commit_or_conflict(db, "An application with this email already exists", application)
    logger.info("Career application received", application_id=str(application.id))
    return application


async def search_career_applications(
    db: AsyncSession, filters: CareerApplicationFilter
) -> Tuple[List[CareerApplication], int]:
    return await list_page(
        db, CareerApplication, career_conditions(filters), filters.page, filters.limit,
        order_by=[CareerApplication.created_at.desc(), CareerApplication.id],
    )


async def get_career_application(db: AsyncSession, application_id: UUID) -> CareerApplication:
    return await get_or_404(db, CareerApplication, application_id, CAREER_NOT_FOUND)


async def delete_career_application(db: AsyncSession, application_id: UUID) -> None:
    await delete_or_404(db, CareerApplication, application_id, CAREER_NOT_FOUND)
    logger.info("Career application deleted", application_id=str(application_id))


async def create_tac_registration(db: AsyncSession, data: TACRegistrationIn) -> TACRegistration:
    registration = TACRegistration(**data.model_dump())
    db.add(registration)
    await db.commit()
    await db.refresh(registration)
    logger.info("TAC registration received", registration_id=str(registration.id))
    return registration


async def search_tac_registrations(
    db: AsyncSession, filters: TACRegistrationFilter
) -> Tuple[List[TACRegistration], int]:
    return await list_page(
        db, TACRegistration, tac_conditions(filters), filters.page, filters.limit,
        order_by=[TACRegistration.created_at.desc(), TACRegistration.id],
    )


async def get_tac_registration(db: AsyncSession, registration_id: UUID) -> TACRegistration:
    return await get_or_404(db, TACRegistration, registration_id, TAC_NOT_FOUND)


async def delete_tac_registration(db: AsyncSession, registration_id: UUID) -> None:
    await delete_or_404(db, TACRegistration, registration_id, TAC_NOT_FOUND)
    logger.info("TAC registration deleted", registration_id=str(registration_id))


async def subscribe_email(db: AsyncSession, data: EmailSubscriptionIn) -> Tuple[EmailSubscription, bool]:
    """Insert the subscription; an existing address is returned unchanged.

    Returns the record and whether it was newly created.
    """
    subscription = EmailSubscription(email=data.email)
    db.add(subscription)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        existing = await db.scalar(select(EmailSubscription).where(EmailSubscription.email == data.email))
        if existing is None:
            raise
        logger.info("Email already subscribed", subscription_id=str(existing.id))
        return existing, False
    await db.refresh(subscription)
    logger.info("Email subscribed", subscription_id=str(subscription.id))
    return subscription, True


async def search_subscriptions(
    db: AsyncSession, filters: EmailSubscriptionFilter
) -> Tuple[List[EmailSubscription], int]:
    return await list_page(
        db, EmailSubscription, subscription_conditions(filters), filters.page, filters.limit,
        order_by=[EmailSubscription.created_at.desc(), EmailSubscription.id],
    )


async def delete_subscription(db: AsyncSession, subscription_id: UUID) -> None:
    await delete_or_404(db, EmailSubscription, subscription_id, SUBSCRIPTION_NOT_FOUND)
    logger.info("Subscription deleted", subscription_id=str(subscription_id))
