"""
Razorpay Gateway Adapter

Orders API and refunds over HTTPS with basic auth (key id / key secret).
Signatures are HMAC-SHA256 hex digests:
- checkout callback: HMAC(key_secret, "<order_id>|<payment_id>")
- webhook: HMAC(webhook_secret, raw request body)
"""

import hashlib
import hmac
from typing import Any, Optional

import httpx
import orjson

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import PaymentGatewayError
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.dto.gateway_result import GatewayOrder, GatewayRefund
from src.service.ticketing.app.interface.i_payment_gateway import IPaymentGateway


def _hmac_sha256_hex(secret: str, message: bytes) -> str:
    return hmac.new(secret.encode('utf-8'), message, hashlib.sha256).hexdigest()


class RazorpayGatewayImpl(IPaymentGateway):
    def __init__(
        self,
        *,
        key_id: Optional[str] = None,
        key_secret: Optional[str] = None,
        webhook_secret: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._key_id = key_id or settings.RAZORPAY_KEY_ID
        self._key_secret = key_secret or settings.RAZORPAY_KEY_SECRET.get_secret_value()
        self._webhook_secret = (
            webhook_secret or settings.RAZORPAY_WEBHOOK_SECRET.get_secret_value()
        )
        self._base_url = (base_url or settings.RAZORPAY_BASE_URL).rstrip('/')
        self._timeout = timeout or settings.RAZORPAY_TIMEOUT_SECONDS

    @property
    def key_id(self) -> str:
        return self._key_id

    async def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        async with httpx.AsyncClient(
            base_url=self._base_url,
            auth=(self._key_id, self._key_secret),
            timeout=self._timeout,
        ) as client:
            try:
                response = await client.post(
                    path,
                    content=orjson.dumps(payload),
                    headers={'Content-Type': 'application/json'},
                )
            except httpx.HTTPError as e:
                Logger.base.error(f'💥 [RAZORPAY] {path} unreachable: {e}')
                raise PaymentGatewayError('Payment gateway unavailable') from e

        body = orjson.loads(response.content) if response.content else {}
        if response.is_error:
            description = (body.get('error') or {}).get('description') or response.reason_phrase
            Logger.base.error(f'💥 [RAZORPAY] {path} -> {response.status_code}: {description}')
            raise PaymentGatewayError(description)
        return body

    @Logger.io
    async def create_order(
        self,
        *,
        amount: int,
        currency: str,
        receipt: str,
        notes: Optional[dict[str, Any]] = None,
    ) -> GatewayOrder:
        body = await self._post(
            '/orders',
            {'amount': amount, 'currency': currency, 'receipt': receipt, 'notes': notes or {}},
        )
        Logger.base.info(f'💳 [RAZORPAY] Order {body["id"]} created for {amount} {currency}')
        return GatewayOrder(
            id=body['id'],
            amount=int(body.get('amount', amount)),
            currency=body.get('currency', currency),
            receipt=body.get('receipt', receipt),
            status=body.get('status', 'created'),
            raw=body,
        )

    @Logger.io
    async def refund(
        self,
        *,
        gateway_payment_id: str,
        amount: Optional[int] = None,
        notes: Optional[dict[str, Any]] = None,
    ) -> GatewayRefund:
        payload: dict[str, Any] = {'notes': notes or {}}
        if amount is not None:
            payload['amount'] = amount
        body = await self._post(f'/payments/{gateway_payment_id}/refund', payload)
        Logger.base.info(f'💸 [RAZORPAY] Refund {body["id"]} for payment {gateway_payment_id}')
        return GatewayRefund(
            id=body['id'],
            payment_id=body.get('payment_id', gateway_payment_id),
            amount=int(body.get('amount') or amount or 0),
            status=body.get('status', 'pending'),
            speed=body.get('speed_processed'),
            raw=body,
        )

    def verify_payment_signature(
        self, *, gateway_order_id: str, gateway_payment_id: str, signature: str
    ) -> bool:
        expected = _hmac_sha256_hex(
            self._key_secret, f'{gateway_order_id}|{gateway_payment_id}'.encode('utf-8')
        )
        return bool(signature) and hmac.compare_digest(expected, signature)

    def verify_webhook_signature(self, *, body: bytes, signature: str) -> bool:
        expected = _hmac_sha256_hex(self._webhook_secret, body)
        return bool(signature) and hmac.compare_digest(expected, signature)
