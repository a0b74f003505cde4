"""
Provider configuration.

Builds the AWS session and SSM client every lifecycle operation is given, and
checks the region and account before anything touches Parameter Store.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from botocore.exceptions import BotoCoreError
from pydantic import BaseModel, ConfigDict

from ..exceptions import ValidationError
from ..remote.interface import ParameterStoreClient

logger = logging.getLogger(__name__)

DEFAULT_PARTITION = "aws"
DEFAULT_SESSION_NAME = "parameter-sync"


@dataclass
class ProviderClient:
    """Account details and parameter store client shared by all operations."""
    account_id: str
    region: str
    partition: str
    ssm: ParameterStoreClient


def validate_account_id(account_id: str, allowed_account_ids: List[str],
                        forbidden_account_ids: List[str]) -> None:
    """Check an account against the allowed and forbidden lists.

    Raises:
        ValidationError: If the account is forbidden or not allowed
    """
    if allowed_account_ids and account_id not in allowed_account_ids:
        raise ValidationError(f"AWS account ID not allowed: {account_id}", field="allowed_account_ids")
    if account_id in (forbidden_account_ids or []):
        raise ValidationError(f"AWS account ID not allowed: {account_id}", field="forbidden_account_ids")


def validate_region(session, region: Optional[str]) -> None:
    """Check that region is a known SSM region in any partition.

    Raises:
        ValidationError: If region is missing or unknown
    """
    if not region:
        raise ValidationError("No AWS region configured", field="region")
    regions = set()
    for partition in session.get_available_partitions():
        regions.update(session.get_available_regions("ssm", partition_name=partition))
    if region not in regions:
        raise ValidationError(f"Invalid AWS Region: {region}", field="region")


class ProviderConfig(BaseModel):
    """AWS provider settings from the `provider` section of parameter-sync.yaml."""
    model_config = ConfigDict(extra="forbid")

    region: Optional[str] = None
    profile: Optional[str] = None
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    token: Optional[str] = None
    max_retries: Optional[int] = None
    ssm_endpoint: Optional[str] = None
    allowed_account_ids: List[str] = []
    forbidden_account_ids: List[str] = []
    assume_role_arn: Optional[str] = None
    assume_role_external_id: Optional[str] = None
    assume_role_session_name: Optional[str] = None
    assume_role_policy: Optional[str] = None
    insecure: bool = False
    skip_credentials_validation: bool = False
    skip_region_validation: bool = False
    skip_requesting_account_id: bool = False

    @classmethod
    def from_mapping(cls, data: Optional[Dict[str, Any]]) -> "ProviderConfig":
        """Build from a config mapping, filling region and profile from the environment."""
        data = dict(data or {})
        if not data.get("region"):
            data["region"] = os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION")
        if not data.get("profile") and os.getenv("AWS_PROFILE"):
            data["profile"] = os.getenv("AWS_PROFILE")
        return cls(**data)

    def _session(self):
        import boto3
        return boto3.session.Session(
            aws_access_key_id=self.access_key,
            aws_secret_access_key=self.secret_key,
            aws_session_token=self.token,
            profile_name=self.profile,
            region_name=self.region,
        )

    def _assume_role(self, session, botocore_config):
        """Swap the session for one holding the assumed role's temporary credentials."""
        import boto3

        request = {
            "RoleArn": self.assume_role_arn,
            "RoleSessionName": self.assume_role_session_name or DEFAULT_SESSION_NAME,
        }
        if self.assume_role_external_id:
            request["ExternalId"] = self.assume_role_external_id
        if self.assume_role_policy:
            request["Policy"] = self.assume_role_policy

        logger.info(f"Assuming role {self.assume_role_arn} (session name: {request['RoleSessionName']})")
        credentials = session.client("sts", config=botocore_config).assume_role(**request)["Credentials"]
        return boto3.session.Session(
            aws_access_key_id=credentials["AccessKeyId"],
            aws_secret_access_key=credentials["SecretAccessKey"],
            aws_session_token=credentials["SessionToken"],
            region_name=self.region,
        )

    def _partition_for_region(self, session) -> str:
        if not self.region:
            return DEFAULT_PARTITION
        try:
            return session.get_partition_for_region(self.region)
        except BotoCoreError as e:
            logger.warning(f"No partition known for region {self.region!r}, using {DEFAULT_PARTITION!r}: {e}")
            return DEFAULT_PARTITION

    def _botocore_config(self):
        from botocore.config import Config
        if self.max_retries is None:
            return None
        return Config(retries={"max_attempts": self.max_retries})

    def client(self) -> ProviderClient:
        """Configure and return a fully initialized ProviderClient.

        Raises:
            ValidationError: If the region or account is rejected
        """
        from ..remote.ssm_client import SSMParameterStoreClient
        from ..resource.arn import parse_arn

        session = self._session()
        if not self.skip_region_validation:
            validate_region(session, self.region)

        logger.info("Building AWS auth structure")
        botocore_config = self._botocore_config()
        if self.assume_role_arn:
            session = self._assume_role(session, botocore_config)

        if not self.skip_credentials_validation and session.get_credentials() is None:
            raise ValidationError("No valid credential sources found for AWS provider", field="profile")

        if self.skip_requesting_account_id:
            account_id = ""
            partition = self._partition_for_region(session)
        else:
            identity = session.client("sts", config=botocore_config).get_caller_identity()
            account_id = identity["Account"]
            partition = parse_arn(identity["Arn"]).partition

        if not account_id:
            logger.warning("AWS account ID not found for provider; parameter ARNs will have no account")

        validate_account_id(account_id, self.allowed_account_ids, self.forbidden_account_ids)

        ssm = session.client("ssm", endpoint_url=self.ssm_endpoint or None, verify=not self.insecure,
                             config=botocore_config)
        return ProviderClient(
            account_id=account_id,
            region=self.region,
            partition=partition,
            ssm=SSMParameterStoreClient(ssm, region=self.region),
        )
