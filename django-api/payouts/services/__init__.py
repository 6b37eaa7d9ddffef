from payouts.services.payout_service import PayoutService

__all__ = ["PayoutService"]
