from enum import StrEnum


class PaymentOrderStatus(StrEnum):
    CREATED = 'created'
    ATTEMPTED = 'attempted'
    PAID = 'paid'
    FAILED = 'failed'
    REFUNDED = 'refunded'

    @classmethod
    def claimable(cls) -> tuple['PaymentOrderStatus', ...]:
        """States a payment confirmation may move to PAID"""
        return (cls.CREATED, cls.ATTEMPTED, cls.FAILED)

    @classmethod
    def holding(cls) -> tuple['PaymentOrderStatus', ...]:
        """States that keep snapshotted cart items reserved past their own expiry"""
        return (cls.CREATED, cls.ATTEMPTED)
