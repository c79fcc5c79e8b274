"""SSM Parameter Store secret provider.

Each call is a single decrypted ``GetParameter`` request. Nothing is cached:
a warm Lambda container re-reads its secrets on every invocation.
"""

from typing import Any

import boto3
import structlog
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from linegpt.config import AWS_REGION, SSM_TIMEOUT_SECONDS
from linegpt.utils.exceptions import SecretFetchError

logger = structlog.get_logger()


def fetch_parameter(name: str, ssm_client: Any) -> str:
    """Fetch and decrypt one parameter.

    Args:
        name: Parameter name.
        ssm_client: boto3 SSM client (or a stand-in exposing get_parameter).

    Returns:
        The decrypted parameter value.

    Raises:
        SecretFetchError: If the parameter store call fails. The error's
            ``value`` holds the failure sentinel.
    """
    try:
        response = ssm_client.get_parameter(Name=name, WithDecryption=True)
    except ClientError as e:
        error_code = e.response.get("Error", {}).get("Code")
        logger.error("Parameter fetch failed", parameter=name, error_code=error_code)
        raise SecretFetchError(name, original_error=str(e)) from e
    except BotoCoreError as e:
        logger.error("Parameter fetch failed", parameter=name, error=str(e))
        raise SecretFetchError(name, original_error=str(e)) from e

    return response["Parameter"]["Value"]


class ParameterStore:
    """Secret provider backed by SSM Parameter Store."""

    def __init__(self, ssm_client: Any | None = None, region: str | None = None):
        """Initialize the provider.

        Args:
            ssm_client: Optional SSM client (for testing).
            region: AWS region. Falls back to AWS_REGION.
        """
        self.region = region or AWS_REGION
        self._client = ssm_client

    @property
    def client(self) -> Any:
        """Get the SSM client (lazy initialization)."""
        if self._client is None:
            self._client = boto3.client(
                "ssm",
                region_name=self.region,
                config=Config(
                    connect_timeout=SSM_TIMEOUT_SECONDS,
                    read_timeout=SSM_TIMEOUT_SECONDS,
                    retries={"total_max_attempts": 1},
                ),
            )
        return self._client

    def fetch(self, name: str) -> str:
        """Fetch a decrypted secret by name.

        Raises:
            SecretFetchError: If the parameter cannot be read.
        """
        return fetch_parameter(name, self.client)
