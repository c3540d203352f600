"""Pydantic model for AWS access configuration."""

from collections.abc import Mapping
from typing import Any, Literal

import boto3
import botocore.session
from botocore.config import Config
from pydantic import BaseModel, Field

CredentialSource = Literal["endpoint", "static", "shared_file"]

DEFAULT_CLIENT_CONFIG = Config(retries={"max_attempts": 5, "mode": "standard"})


class AwsConfig(BaseModel):
    """Region plus the single credential source chosen from the environment.

    Exactly one branch is populated, in priority order:
        endpoint: Explicit endpoint override (e.g. localstack), no credentials
        static: Access key id and secret access key
        shared_file: Shared credentials file path and profile name
    """

    region: str = Field(min_length=1)
    credential_source: CredentialSource
    endpoint: str | None = None
    access_key_id: str | None = None
    secret_access_key: str | None = Field(default=None, repr=False)
    credentials_path: str | None = None
    profile: str | None = None

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "AwsConfig":
        """Resolve AWS configuration from environment variables.

        See `get_aws_config` for the variables read and the errors raised.
        """
        from keda_connector._internal.aws.config import get_aws_config

        return get_aws_config(environ)

    def create_session(self) -> boto3.Session:
        """Create a boto3 session for the configured credential source."""
        if self.credential_source == "static":
            return boto3.Session(
                aws_access_key_id=self.access_key_id,
                aws_secret_access_key=self.secret_access_key,
                region_name=self.region,
            )
        if self.credential_source == "shared_file":
            core_session = botocore.session.Session()
            core_session.set_config_variable("credentials_file", self.credentials_path)
            core_session.set_config_variable("profile", self.profile)
            return boto3.Session(botocore_session=core_session, region_name=self.region)
        return boto3.Session(region_name=self.region)

    def client(self, service_name: str, **kwargs: Any) -> Any:
        """Create a boto3 client, applying the endpoint override when set."""
        if self.endpoint is not None:
            kwargs.setdefault("endpoint_url", self.endpoint)
        kwargs.setdefault("config", DEFAULT_CLIENT_CONFIG)
        return self.create_session().client(service_name, **kwargs)
