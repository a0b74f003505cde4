"""
The `parameter_from_pass` resource and the parameter data source.
"""

from .arn import Arn, compose_parameter_arn, parse_arn
from .models import BindingState, ParameterInfo, SecretBinding
from .lifecycle import ParameterFromPassResource
from .data_source import ParameterDataSource

__all__ = [
    # Models
    'BindingState',
    'ParameterInfo',
    'SecretBinding',

    # Operations
    'ParameterFromPassResource',
    'ParameterDataSource',

    # ARNs
    'Arn',
    'compose_parameter_arn',
    'parse_arn',
]
