"""
Read-only lookup of an existing SSM parameter.

Like reading a parameter with the AWS console or CLI, except that Parameter
Store is told not to decrypt the value and the value is never returned.
"""

import logging

from .arn import compose_parameter_arn
from .models import ParameterInfo
from ..config.provider import ProviderClient

logger = logging.getLogger(__name__)


class ParameterDataSource:
    """Looks up parameter name, type and ARN."""

    def __init__(self, provider: ProviderClient):
        self.provider = provider

    def read(self, parameter_name: str) -> ParameterInfo:
        """Read a parameter's details.

        Raises:
            ParameterNotFoundException: If the parameter does not exist
        """
        logger.debug(f"Reading SSM Parameter: {parameter_name}")
        param = self.provider.ssm.get(parameter_name, with_decryption=False)
        return ParameterInfo(
            id=param.name,
            parameter_name=param.name,
            type=param.type,
            arn=compose_parameter_arn(
                self.provider.partition, self.provider.region, self.provider.account_id, param.name
            ),
        )
