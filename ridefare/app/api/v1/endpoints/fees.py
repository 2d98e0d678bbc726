"""
Service Fee API Endpoints.
"""

from datetime import datetime, timezone
from fastapi import APIRouter

from ridefare.app.domain.billing.balance import MINIMUM_NET_WITHDRAWAL
from ridefare.app.domain.billing.dunning import run_dunning, DunningReport
from ridefare.app.domain.billing.service_fee import compute_service_fee, minimum_gross_for_net
from ridefare.app.schemas.billing import ServiceFeeRequest, ServiceFeeResponse, DunningRequest

router = APIRouter(prefix="/fees", tags=["Fees"])


@router.post("/service-fee", response_model=ServiceFeeResponse)
async def compute_fee(request: ServiceFeeRequest):
    """
    Compute the fee charged against a gross amount, and the smallest
    withdrawal that still leaves the minimum net.
    """
    return ServiceFeeResponse(
        breakdown=compute_service_fee(request.fee_type, request.fee_value, request.gross_amount),
        minimum_gross_for_net=minimum_gross_for_net(
            request.fee_type, request.fee_value, MINIMUM_NET_WITHDRAWAL
        ),
    )


@router.post("/dunning", response_model=DunningReport)
async def dunning(request: DunningRequest):
    """
    Expire overdue fees and count the reminders due.
    """
    return run_dunning(request.fees, request.now or datetime.now(timezone.utc))
