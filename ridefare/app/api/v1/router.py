"""
API v1 Router.

Aggregates all v1 API endpoints.
"""

from fastapi import APIRouter
from ridefare.app.api.v1.endpoints import quotes, fees, balances, subscriptions, admin_billing

router = APIRouter()

# Passenger quotes
router.include_router(quotes.router)

# Driver fees, balances and subscriptions
router.include_router(fees.router)
router.include_router(balances.router)
router.include_router(subscriptions.router)

# Admin pricing, availability and request workflow
router.include_router(admin_billing.router)
