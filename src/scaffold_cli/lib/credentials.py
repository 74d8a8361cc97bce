"""AWS credential resolution.

Priority:
1. AWS_ACCESS_KEY_ID + AWS_SECRET_ACCESS_KEY in the environment - no prompt
2. Interactive choice: named CLI profile, or access keys held in memory
"""

import logging
from collections.abc import Mapping

from botocore.exceptions import BotoCoreError, ClientError

from scaffold_cli.lib import console
from scaffold_cli.lib.aws import AwsContext
from scaffold_cli.lib.errors import CredentialVerificationError, InvalidCredentialChoiceError
from scaffold_cli.lib.prompt import Prompter
from scaffold_cli.lib.result import Err, Ok, Result
from scaffold_cli.models import (
    CallerIdentity,
    Credentials,
    EnvironmentCredentials,
    ProfileCredentials,
    StaticKeyCredentials,
)

logger = logging.getLogger(__name__)

CHOICE_PROFILE = "1"
CHOICE_KEYS = "2"
DEFAULT_PROFILE = "default"


def from_environment(environ: Mapping[str, str]) -> bool:
    """True if static credentials are already exported."""
    return bool(environ.get("AWS_ACCESS_KEY_ID")) and bool(environ.get("AWS_SECRET_ACCESS_KEY"))


def resolve_credentials(
    prompter: Prompter,
    environ: Mapping[str, str],
) -> Result[Credentials, InvalidCredentialChoiceError]:
    """Pick the credential mode, prompting only when the environment has none."""
    if from_environment(environ):
        console.info("Using AWS credentials from environment variables.")
        return Ok(EnvironmentCredentials())

    console.line()
    console.line("AWS Credentials:")
    console.line("[1] Use existing AWS CLI profile")
    console.line("[2] Enter access key/secret (stored in memory only)")
    choice = prompter.ask("Choice", default=CHOICE_PROFILE).strip()

    if choice == CHOICE_PROFILE:
        name = prompter.ask("Profile", default=DEFAULT_PROFILE).strip() or DEFAULT_PROFILE
        return Ok(ProfileCredentials(name))
    if choice == CHOICE_KEYS:
        access_key = prompter.ask("AWS Access Key ID").strip()
        secret_key = prompter.ask("AWS Secret Access Key", hide_input=True).strip()
        token = prompter.ask("AWS Session Token (leave blank if none)", default="").strip()
        return Ok(StaticKeyCredentials(access_key, secret_key, token or None))
    return Err(InvalidCredentialChoiceError(choice))


def verify_credentials(ctx: AwsContext) -> Result[CallerIdentity, CredentialVerificationError]:
    """Call STS GetCallerIdentity. The identity stays cached on ctx."""
    try:
        identity = ctx.caller_identity
    except (ClientError, BotoCoreError) as e:
        logger.debug("GetCallerIdentity failed: %s", e)
        return Err(CredentialVerificationError(str(e)))
    return Ok(identity)
