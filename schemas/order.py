from typing import List, Optional
from datetime import datetime

from fastapi import Query
from pydantic import BaseModel

from models.Order import EmailDomainStatus, SocialVerificationStatus


class SocialVerificationUpdateRequest(BaseModel):
    status: SocialVerificationStatus


class EmailDomainUpdateRequest(BaseModel):
    status: EmailDomainStatus


class OrderVerificationResponse(BaseModel):
    id: str
    social_handle: Optional[str] = None
    social_verification_status: str
    social_verified_at: Optional[datetime] = None
    social_verified_by: Optional[str] = None
    email: Optional[str] = None
    email_domain: Optional[str] = None
    email_domain_status: str


class OrderVerificationResponseSchema(BaseModel):
    order: OrderVerificationResponse


class RefundUpdateRequest(BaseModel):
    processed: bool
    notes: Optional[str] = None


class RefundStatusResponse(BaseModel):
    id: str
    refund_processed: bool
    refund_processed_at: Optional[datetime] = None
    refund_notes: Optional[str] = None


class RefundUpdateResponse(BaseModel):
    success: bool = True
    order: RefundStatusResponse
    message: str


class OrderQueueItem(BaseModel):
    """Order row shared by the social review and refund queues"""

    id: str
    event_id: str
    event_title: str
    email: Optional[str] = None
    whatsapp_number: Optional[str] = None
    total_amount_cents: int
    currency: str
    social_handle: Optional[str] = None
    created_at: Optional[datetime] = None


class SocialReviewItem(OrderQueueItem):
    social_verification_status: str
    attendee_names: List[str] = []


class SocialReviewListResponse(BaseModel):
    orders: List[SocialReviewItem]


class RefundItem(OrderQueueItem):
    refund_reason: Optional[str] = None
    refund_requested_at: Optional[datetime] = None
    refund_processed: bool = False
    refund_processed_at: Optional[datetime] = None
    refund_notes: Optional[str] = None


class RefundListResponse(BaseModel):
    orders: List[RefundItem]


class SocialReviewQuery(BaseModel):
    status: Optional[SocialVerificationStatus] = Query(
        None, description="Only orders with this review status"
    )


class RefundQuery(BaseModel):
    processed: Optional[bool] = Query(
        None, description="Only processed or only open refunds"
    )
