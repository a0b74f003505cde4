"""ARN helpers."""

from typing import NamedTuple


class Arn(NamedTuple):
    partition: str
    service: str
    region: str
    account_id: str
    resource: str

    def __str__(self) -> str:
        return f"arn:{self.partition}:{self.service}:{self.region}:{self.account_id}:{self.resource}"


def parse_arn(arn: str) -> Arn:
    """Split an ARN string into its parts.

    Raises:
        ValueError: If arn is not of the form arn:partition:service:region:account:resource
    """
    parts = arn.split(":", 5)
    if len(parts) != 6 or parts[0] != "arn":
        raise ValueError(f"Invalid ARN: {arn!r}")
    return Arn(*parts[1:])


def compose_parameter_arn(partition: str, region: str, account_id: str, name: str) -> str:
    """Build the ARN of an SSM parameter.

    Parameter names may be given with or without their leading slash; the ARN
    resource is always `parameter/<name without one leading slash>`.
    """
    resource = f"parameter/{name[1:] if name.startswith('/') else name}"
    return str(Arn(partition, "ssm", region, account_id, resource))
