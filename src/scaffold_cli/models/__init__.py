"""Scaffold data models.

Pure data structures with JSON serialization. No storage coupling.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any, Self

STATE_VERSION = "1"


class Arn(str):
    """AWS ARN - a string subclass with parsed component access."""

    def __new__(cls, value: str) -> Self:
        parts = value.split(":")
        if len(parts) < 6 or parts[0] != "arn":
            raise ValueError(f"Invalid ARN: {value}")
        return super().__new__(cls, value)

    @classmethod
    def for_role(cls, account_id: str, role_name: str, partition: str = "aws") -> Self:
        return cls(f"arn:{partition}:iam::{account_id}:role/{role_name}")

    @property
    def service(self) -> str:
        return self.split(":")[2]

    @property
    def account(self) -> str:
        return self.split(":")[4]

    @property
    def resource(self) -> str:
        return ":".join(self.split(":")[5:])

    @property
    def resource_id(self) -> str:
        res = self.resource
        if "/" in res:
            return "/".join(res.split("/")[1:])
        return res


@dataclass(frozen=True, slots=True)
class RepositoryIdentity:
    """GitHub organization and repository, parsed from the origin remote."""

    org: str
    repo: str

    @property
    def slug(self) -> str:
        return f"{self.org}/{self.repo}"


@dataclass(frozen=True, slots=True)
class EnvironmentCredentials:
    """Credentials already present in the process environment."""


@dataclass(frozen=True, slots=True)
class ProfileCredentials:
    """A named AWS CLI profile."""

    name: str = "default"


@dataclass(frozen=True, slots=True)
class StaticKeyCredentials:
    """Access keys entered interactively. Held in memory only."""

    access_key_id: str
    secret_access_key: str = field(repr=False)
    session_token: str | None = field(default=None, repr=False)


type Credentials = EnvironmentCredentials | ProfileCredentials | StaticKeyCredentials


@dataclass(frozen=True, slots=True)
class CallerIdentity:
    """Result of STS GetCallerIdentity."""

    account_id: str
    arn: str


@dataclass(frozen=True, slots=True)
class ResourceNames:
    """Names of the shared state backend resources."""

    bucket: str
    lock_table: str
    role: str


@dataclass(frozen=True)
class Environment:
    """A deployment environment: one workflow, one state key, one watch dir."""

    name: str
    watch_dir: str
    branch: str = "main"

    @property
    def state_key(self) -> str:
        """Object key of this environment's Terraform state in the bucket."""
        return f"{self.name}/terraform.tfstate"


@dataclass
class StateDocument:
    """Contents of .scaffold/config.json.

    Single source of truth for every command after 'init'. The
    environments list is ordered and keyed by name.
    """

    repo: str
    aws_region: str
    s3_bucket: str
    dynamodb_table: str
    iam_role: str
    environments: list[Environment] = field(default_factory=list)
    version: str = STATE_VERSION

    def get_environment(self, name: str) -> Environment | None:
        return next((e for e in self.environments if e.name == name), None)

    def add_environment(self, env: Environment) -> None:
        """Insert or replace an environment. Replaced entries move to the end."""
        self.environments = [e for e in self.environments if e.name != env.name]
        self.environments.append(env)

    def remove_environment(self, name: str) -> bool:
        """Remove an environment by name. Returns False if it was not present."""
        before = len(self.environments)
        self.environments = [e for e in self.environments if e.name != name]
        return len(self.environments) != before

    def to_json(self) -> str:
        data = asdict(self)
        # Keep the on-disk key order stable: version first, environments last
        ordered = {"version": data.pop("version"), **data}
        ordered["environments"] = ordered.pop("environments")
        return json.dumps(ordered, indent=2) + "\n"

    @classmethod
    def from_json(cls, data: str) -> Self:
        raw = json.loads(data)
        if not isinstance(raw, dict):
            raise ValueError("state document must be a JSON object")
        return _from_dict(cls, raw)


def _from_dict(cls: type, data: Any) -> Any:
    """Reconstruct a typed dataclass from a dict. Handles nested lists."""
    from dataclasses import fields, is_dataclass
    from typing import get_args, get_origin, get_type_hints

    if data is None:
        return None

    if is_dataclass(cls):
        hints = get_type_hints(cls)
        kwargs = {}
        for f in fields(cls):
            if f.name in data:
                kwargs[f.name] = _from_dict(hints[f.name], data[f.name])
        return cls(**kwargs)

    if get_origin(cls) is list:
        (item_type,) = get_args(cls)
        return [_from_dict(item_type, v) for v in data]

    return data
