"""AWS SSM Parameter Store access for deployment secrets.

The Stripe secret key lives here in deployed environments, so that it never
appears in Lambda environment variables.
"""

import logging
import threading

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)

# ClientError codes with a more helpful message than the AWS default
_CLIENT_ERROR_MESSAGES = {
    "ParameterNotFound": "SSM parameter not found: {name}",
    "AccessDeniedException": (
        "Access denied to SSM parameter: {name}. "
        "The execution role needs ssm:GetParameter and kms:Decrypt."
    ),
}


class SSMServiceError(Exception):
    """Raised when SSM parameter retrieval fails."""


class SSMService:
    """Reads SecureString parameters, decrypted, with a per-instance cache.

    Usage:
        ssm = SSMService()
        stripe_key = ssm.get_parameter("/lakeside/dev/stripe/secret_key")
    """

    def __init__(self, client: object | None = None) -> None:
        """Initialize the service.

        Args:
            client: Optional boto3 SSM client (created lazily when omitted)
        """
        self._client = client
        self._values: dict[str, str] = {}
        self._lock = threading.Lock()

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client("ssm")
        return self._client

    def get_parameter(self, name: str, *, use_cache: bool = True) -> str:
        """Get a decrypted parameter value.

        Args:
            name: Full parameter path
            use_cache: Return a previously fetched value without calling AWS

        Returns:
            The parameter value

        Raises:
            SSMServiceError: If the parameter cannot be read
        """
        if use_cache:
            with self._lock:
                cached = self._values.get(name)
            if cached is not None:
                return cached

        logger.info("Fetching SSM parameter: %s", name)
        try:
            response = self.client.get_parameter(Name=name, WithDecryption=True)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            template = _CLIENT_ERROR_MESSAGES.get(code, "Failed to read SSM parameter {name}: {error}")
            raise SSMServiceError(template.format(name=name, error=e)) from e
        except BotoCoreError as e:
            raise SSMServiceError(f"Failed to read SSM parameter {name}: {e}") from e

        value = response["Parameter"]["Value"]
        with self._lock:
            self._values[name] = value
        return value

    def clear_cache(self) -> None:
        """Forget fetched values, e.g. after a key rotation."""
        with self._lock:
            self._values.clear()
