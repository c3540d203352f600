"""Resolve AWS access configuration from environment variables."""

import os
from collections.abc import Mapping

from keda_connector._internal.aws.models import AwsConfig
from keda_connector.exceptions import MissingRegionError, NoCredentialSourceError

ENV_REGION = "AWS_REGION"
ENV_ENDPOINT = "AWS_ENDPOINT"
ENV_ACCESS_KEY_ID = "AWS_ACCESS_KEY_ID"
ENV_SECRET_ACCESS_KEY = "AWS_SECRET_ACCESS_KEY"
ENV_CRED_PATH = "AWS_CRED_PATH"
ENV_CRED_PROFILE = "AWS_CRED_PROFILE"


def get_aws_config(environ: Mapping[str, str] | None = None) -> AwsConfig:
    """Get the configuration required to connect to AWS.

    Credential sources are checked in priority order; the first one present wins:
        1. AWS_ENDPOINT
        2. AWS_ACCESS_KEY_ID and AWS_SECRET_ACCESS_KEY
        3. AWS_CRED_PATH and AWS_CRED_PROFILE

    Args:
        environ: Mapping to read from. Defaults to os.environ.

    Returns:
        Frozen AwsConfig for the chosen credential source.

    Raises:
        MissingRegionError: AWS_REGION is missing or empty.
        NoCredentialSourceError: None of the credential sources is set.
    """
    env = os.environ if environ is None else environ

    region = env.get(ENV_REGION)
    if not region:
        raise MissingRegionError()

    if env.get(ENV_ENDPOINT):
        return AwsConfig(
            region=region,
            credential_source="endpoint",
            endpoint=env[ENV_ENDPOINT],
        )

    if env.get(ENV_ACCESS_KEY_ID) and env.get(ENV_SECRET_ACCESS_KEY):
        return AwsConfig(
            region=region,
            credential_source="static",
            access_key_id=env[ENV_ACCESS_KEY_ID],
            secret_access_key=env[ENV_SECRET_ACCESS_KEY],
        )

    if env.get(ENV_CRED_PATH) and env.get(ENV_CRED_PROFILE):
        return AwsConfig(
            region=region,
            credential_source="shared_file",
            credentials_path=env[ENV_CRED_PATH],
            profile=env[ENV_CRED_PROFILE],
        )

    raise NoCredentialSourceError()
