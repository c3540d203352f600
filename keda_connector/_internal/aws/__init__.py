"""AWS access configuration for connectors."""

from keda_connector._internal.aws.config import get_aws_config
from keda_connector._internal.aws.models import AwsConfig

__all__ = ["AwsConfig", "get_aws_config"]
