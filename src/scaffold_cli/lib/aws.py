"""AWS session and client management.

AwsContext is created once at CLI entry and passed to all operations.
Uses cached_property for lazy client initialization.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING

import boto3
from botocore.config import Config

from scaffold_cli.models import (
    CallerIdentity,
    Credentials,
    EnvironmentCredentials,
    ProfileCredentials,
    StaticKeyCredentials,
)

if TYPE_CHECKING:
    from mypy_boto3_dynamodb import DynamoDBClient
    from mypy_boto3_iam import IAMClient
    from mypy_boto3_s3 import S3Client
    from mypy_boto3_sts import STSClient

CLIENT_CONFIG = Config(
    connect_timeout=10,
    read_timeout=60,
    retries={"max_attempts": 5, "mode": "standard"},
)

_KEY_VARS = ("AWS_ACCESS_KEY_ID", "AWS_SECRET_ACCESS_KEY", "AWS_SESSION_TOKEN")


@dataclass
class AwsContext:
    """AWS session and clients. Created once at CLI entry.

    Clients are lazily initialized on first access via cached_property.

    Example:
        ctx = AwsContext(region="us-east-1", credentials=ProfileCredentials("dev"))
        ctx.s3.head_bucket(...)
        ctx.subprocess_env()  # environment for terraform
    """

    region: str
    credentials: Credentials = field(default_factory=EnvironmentCredentials)

    @cached_property
    def session(self) -> boto3.Session:
        """Boto3 session configured with region and the resolved credentials."""
        match self.credentials:
            case ProfileCredentials(name):
                return boto3.Session(region_name=self.region, profile_name=name)
            case StaticKeyCredentials(access_key_id, secret_access_key, session_token):
                return boto3.Session(
                    region_name=self.region,
                    aws_access_key_id=access_key_id,
                    aws_secret_access_key=secret_access_key,
                    aws_session_token=session_token,
                )
            case _:
                return boto3.Session(region_name=self.region)

    @cached_property
    def s3(self) -> S3Client:
        """S3 client."""
        return self.session.client("s3", config=CLIENT_CONFIG)

    @cached_property
    def dynamodb(self) -> DynamoDBClient:
        """DynamoDB client."""
        return self.session.client("dynamodb", config=CLIENT_CONFIG)

    @cached_property
    def iam(self) -> IAMClient:
        """IAM client."""
        return self.session.client("iam", config=CLIENT_CONFIG)

    @cached_property
    def sts(self) -> STSClient:
        """STS client."""
        return self.session.client("sts", config=CLIENT_CONFIG)

    @cached_property
    def caller_identity(self) -> CallerIdentity:
        """Identity for the current session (one STS call, cached)."""
        response = self.sts.get_caller_identity()
        return CallerIdentity(account_id=response["Account"], arn=response["Arn"])

    @property
    def account_id(self) -> str:
        """AWS account ID for the current session."""
        return self.caller_identity.account_id

    def subprocess_env(self, base: Mapping[str, str] | None = None) -> dict[str, str]:
        """Environment for child processes (terraform) carrying these credentials."""
        env = dict(os.environ if base is None else base)
        match self.credentials:
            case ProfileCredentials(name):
                for var in _KEY_VARS:
                    env.pop(var, None)
                env["AWS_PROFILE"] = name
            case StaticKeyCredentials(access_key_id, secret_access_key, session_token):
                env.pop("AWS_PROFILE", None)
                env["AWS_ACCESS_KEY_ID"] = access_key_id
                env["AWS_SECRET_ACCESS_KEY"] = secret_access_key
                if session_token:
                    env["AWS_SESSION_TOKEN"] = session_token
                else:
                    env.pop("AWS_SESSION_TOKEN", None)
            case _:
                pass
        env["AWS_REGION"] = self.region
        env["AWS_DEFAULT_REGION"] = self.region
        return env
