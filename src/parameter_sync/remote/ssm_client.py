"""
AWS SSM Parameter Store implementation.

Provides parameter store access using a boto3 `ssm` client.
"""

import logging
from typing import List, Optional

from botocore.exceptions import ClientError

from .interface import ParameterStoreClient
from .models import Parameter, ParameterMetadata, SECURE_STRING
from ..exceptions import ParameterNotFoundException

logger = logging.getLogger(__name__)

PARAMETER_NOT_FOUND = "ParameterNotFound"


def is_parameter_not_found(error: ClientError) -> bool:
    """Check whether a boto3 error reports a missing parameter."""
    return error.response.get("Error", {}).get("Code") == PARAMETER_NOT_FOUND


def _metadata_from_response(detail: dict) -> ParameterMetadata:
    return ParameterMetadata(
        name=detail["Name"],
        type=detail.get("Type", SECURE_STRING),
        key_id=detail.get("KeyId"),
        description=detail.get("Description"),
        last_modified=detail.get("LastModifiedDate"),
        version=detail.get("Version"),
    )


class SSMParameterStoreClient(ParameterStoreClient):
    """SSM Parameter Store client."""

    def __init__(self, client=None, region: Optional[str] = None):
        """Initialize with a boto3 ssm client.

        Args:
            client: boto3 `ssm` client; created lazily from the default session when None
            region: Region for the lazily created client
        """
        self._client = client
        self._region = region

    @property
    def client_type(self) -> str:
        return "ssm"

    @property
    def client(self):
        """Lazy-load the boto3 ssm client."""
        if self._client is None:
            import boto3
            self._client = boto3.client("ssm", region_name=self._region)
            logger.debug(f"SSM client initialized for region: {self._region or 'default'}")
        return self._client

    def get(self, name: str, with_decryption: bool = False) -> Parameter:
        logger.debug(f"Reading SSM Parameter: {name} (decrypt: {with_decryption})")
        try:
            response = self.client.get_parameter(Name=name, WithDecryption=with_decryption)
        except ClientError as e:
            if is_parameter_not_found(e):
                raise ParameterNotFoundException(f"SSM Parameter {name!r} not found", parameter_name=name) from e
            raise

        param = response["Parameter"]
        return Parameter(
            name=param["Name"],
            type=param.get("Type", SECURE_STRING),
            # Without decryption SecureString values come back as ciphertext
            value=param.get("Value") if with_decryption else None,
            version=param.get("Version"),
            last_modified=param.get("LastModifiedDate"),
        )

    def describe(self, name: str) -> ParameterMetadata:
        logger.debug(f"Reading Metadata of SSM Parameter: {name}")
        response = self.client.describe_parameters(
            ParameterFilters=[
                {"Key": "Name", "Option": "Equals", "Values": [name]},
            ]
        )
        parameters = (response or {}).get("Parameters") or []
        if not parameters or not parameters[0]:
            raise ParameterNotFoundException(f"SSM Parameter {name!r} not found", parameter_name=name)
        return _metadata_from_response(parameters[0])

    def put(self, name: str, value: str, type: str = SECURE_STRING, key_id: Optional[str] = None,
            description: Optional[str] = None, overwrite: bool = True) -> None:
        request = {
            "Name": name,
            "Type": type,
            "Value": value,
            "Overwrite": overwrite,
        }
        if description is not None:
            request["Description"] = description
        if key_id:
            logger.debug(f"Setting key_id for SSM Parameter {name}: {key_id}")
            request["KeyId"] = key_id

        logger.info(f"Putting SSM Parameter: {name}")
        self.client.put_parameter(**request)

    def delete(self, name: str) -> None:
        logger.info(f"Deleting SSM Parameter: {name}")
        try:
            self.client.delete_parameter(Name=name)
        except ClientError as e:
            if is_parameter_not_found(e):
                raise ParameterNotFoundException(f"SSM Parameter {name!r} not found", parameter_name=name) from e
            raise

    def list_parameters(self, path_prefix: Optional[str] = None) -> List[ParameterMetadata]:
        kwargs = {}
        if path_prefix:
            kwargs["ParameterFilters"] = [
                {"Key": "Path", "Option": "Recursive", "Values": [path_prefix]},
            ]

        paginator = self.client.get_paginator("describe_parameters")
        parameters = []
        for page in paginator.paginate(**kwargs):
            for detail in page.get("Parameters", []):
                parameters.append(_metadata_from_response(detail))

        logger.debug(f"Listed {len(parameters)} parameters from SSM")
        return parameters
