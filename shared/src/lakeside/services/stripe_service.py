"""Stripe payment service for payment intents.

Provides integration with Stripe using the StripeClient pattern. The secret
key comes from the environment or, failing that, from SSM Parameter Store.
"""

import logging

import stripe
from stripe import StripeClient

from lakeside.models import PaymentNotConfigured

from .ssm_service import SSMService, SSMServiceError

logger = logging.getLogger(__name__)


class StripeServiceError(Exception):
    """Raised when a Stripe operation fails."""

    def __init__(self, message: str, stripe_error_code: str | None = None) -> None:
        """Initialize with message and optional Stripe error code.

        Args:
            message: Human-readable error message.
            stripe_error_code: Stripe-specific error code if available.
        """
        super().__init__(message)
        self.stripe_error_code = stripe_error_code


class StripeService:
    """Service for Stripe payment operations.

    Usage:
        stripe_svc = StripeService(secret_key="sk_test_...")
        intent = stripe_svc.create_payment_intent(
            amount_cents=129400,
            currency="nzd",
            metadata={"accommodationId": "cottage"},
        )
    """

    def __init__(
        self,
        secret_key: str | None = None,
        *,
        secret_key_parameter: str | None = None,
        ssm: SSMService | None = None,
    ) -> None:
        """Initialize Stripe service.

        Args:
            secret_key: Stripe secret key (sk_...)
            secret_key_parameter: SSM parameter path holding the key, used
                when secret_key is not given
            ssm: SSM service used to read secret_key_parameter
        """
        self._secret_key = secret_key
        self._secret_key_parameter = secret_key_parameter
        self._ssm = ssm
        self._client: StripeClient | None = None

    @property
    def is_configured(self) -> bool:
        """Whether a secret key source is available."""
        return bool(self._secret_key or self._secret_key_parameter)

    def _get_client(self) -> StripeClient:
        """Get or create the Stripe client (lazy initialization).

        Returns:
            Initialized StripeClient instance.

        Raises:
            PaymentNotConfigured: If no key source is configured.
            StripeServiceError: If the key cannot be retrieved from SSM.
        """
        if self._client is not None:
            return self._client

        if not self.is_configured:
            raise PaymentNotConfigured()

        secret_key = self._secret_key
        if not secret_key:
            ssm = self._ssm or SSMService()
            try:
                secret_key = ssm.get_parameter(self._secret_key_parameter)
            except SSMServiceError as e:
                raise StripeServiceError(f"Failed to initialize Stripe client: {e}") from e

        self._client = StripeClient(secret_key)
        logger.info("Stripe client initialized")
        return self._client

    def create_payment_intent(
        self,
        *,
        amount_cents: int,
        currency: str,
        metadata: dict[str, str] | None = None,
    ) -> dict:
        """Create a Stripe PaymentIntent.

        Args:
            amount_cents: Amount in the smallest currency unit.
            currency: ISO currency code (e.g. "nzd").
            metadata: Booking context stored on the intent.

        Returns:
            Dict with intent details:
                - payment_intent_id: Stripe PaymentIntent ID
                - client_secret: Secret the browser uses to confirm payment

        Raises:
            PaymentNotConfigured: If Stripe is not configured.
            StripeServiceError: If intent creation fails.
        """
        client = self._get_client()

        try:
            logger.info(
                "Creating Stripe payment intent, amount %d %s",
                amount_cents,
                currency,
            )

            intent = client.payment_intents.create(
                params={
                    "amount": amount_cents,
                    "currency": currency.lower(),
                    "metadata": metadata or {},
                }
            )

            logger.info("Payment intent created: %s", intent.id)

            return {
                "payment_intent_id": intent.id,
                "client_secret": intent.client_secret,
            }

        except stripe.StripeError as e:
            error_code = getattr(e, "code", None)
            logger.error(
                "Stripe payment intent creation failed: %s (code: %s)",
                str(e),
                error_code,
            )
            raise StripeServiceError(
                f"Failed to create payment intent: {e}",
                stripe_error_code=error_code,
            ) from e
