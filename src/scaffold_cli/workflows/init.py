"""Init workflow - provision the platform and generate pipelines for each environment."""

from dataclasses import dataclass
from pathlib import Path

from scaffold_cli.lib import console, naming, paths, templates
from scaffold_cli.lib import state as state_module
from scaffold_cli.lib.aws import AwsContext
from scaffold_cli.lib.errors import InitError, TerraformCommandError
from scaffold_cli.lib.result import Err, Ok, Result
from scaffold_cli.lib.terraform import Terraform, TerraformFactory
from scaffold_cli.models import Arn, Environment, RepositoryIdentity, ResourceNames, StateDocument
from scaffold_cli.operations.backend import reconcile_bucket, reconcile_lock_table
from scaffold_cli.operations.pipeline import generate_backend_stub, generate_workflow
from scaffold_cli.operations.reconcile import ReconcileOutcome
from scaffold_cli.operations.role import RoleResult, reconcile_role


@dataclass(frozen=True)
class InitConfig:
    """Configuration for init workflow."""

    region: str
    environments: tuple[Environment, ...]
    use_inline_policies: bool = True
    shared_role: bool = False


@dataclass(frozen=True)
class ProvisionedEnvironment:
    environment: Environment
    role_name: str
    role_arn: Arn
    workflow_path: Path
    providers_path: Path | None


@dataclass(frozen=True)
class InitSummary:
    names: ResourceNames
    document: StateDocument
    environments: tuple[ProvisionedEnvironment, ...]


def _prepare(tf: Terraform) -> Result[None, TerraformCommandError]:
    result = tf.init(backend=False)
    if not result.ok:
        return Err(TerraformCommandError("init", tf.working_dir, result.output))
    return Ok(None)


def _report_existing(label: str, name: str, imported: bool) -> None:
    if imported:
        console.warn(f"{label} {name} already exists - imported.")
    else:
        console.warn(f"{label} {name} already exists - already in Terraform state.")


def _report(label: str, outcome: ReconcileOutcome) -> None:
    if outcome.existed:
        _report_existing(label, outcome.name, outcome.imported)
    console.ok(f"{label}: {outcome.name}")


def _load_or_create(
    root: Path, identity: RepositoryIdentity, region: str, names: ResourceNames
) -> Result[StateDocument, InitError]:
    match state_module.load(root):
        case Err() as e:
            return e
        case Ok(None):
            return Ok(
                StateDocument(
                    repo=identity.slug,
                    aws_region=region,
                    s3_bucket=names.bucket,
                    dynamodb_table=names.lock_table,
                    iam_role=names.role,
                )
            )
        case Ok(existing):
            # Re-running init keeps earlier environments and refreshes the rest
            existing.repo = identity.slug
            existing.aws_region = region
            existing.s3_bucket = names.bucket
            existing.dynamodb_table = names.lock_table
            existing.iam_role = names.role
            return Ok(existing)


def init(
    ctx: AwsContext,
    root: Path,
    identity: RepositoryIdentity,
    config: InitConfig,
    terraform_factory: TerraformFactory,
) -> Result[InitSummary, InitError]:
    """Provision shared backend resources, roles and pipeline files.

    1. Reconcile the state bucket and lock table (backend module)
    2. Write the state store
    3. For each environment: reconcile its role, write its workflow and
       backend stub, record it in the state store

    Safe to re-run: existing resources are imported, never recreated.
    """
    names = naming.resource_names(identity)
    work_dir = paths.terraform_work_dir(identity.org, identity.repo)

    # Step 1: Shared backend
    backend_tf = terraform_factory(
        templates.prepare_module(templates.BACKEND_MODULE, work_dir / "backend")
    )
    match _prepare(backend_tf):
        case Err() as e:
            return e
        case Ok(_):
            pass

    match reconcile_bucket(ctx, backend_tf, names):
        case Err() as e:
            return e
        case Ok(outcome):
            _report("S3 bucket", outcome)

    match reconcile_lock_table(ctx, backend_tf, names):
        case Err() as e:
            return e
        case Ok(outcome):
            _report("DynamoDB table", outcome)

    # Step 2: State store
    match _load_or_create(root, identity, ctx.region, names):
        case Err() as e:
            return e
        case Ok(document):
            pass

    match state_module.save(root, document):
        case Err() as e:
            return e
        case Ok(_):
            pass

    # Step 3: Per-environment role and pipeline
    role_map = naming.role_names_for(
        identity, [env.name for env in config.environments], config.shared_role
    )
    roles: dict[str, RoleResult] = {}
    provisioned: list[ProvisionedEnvironment] = []

    for env in config.environments:
        role_name = role_map[env.name]

        if role_name not in roles:
            role_tf = terraform_factory(
                templates.prepare_module(templates.IAM_MODULE, work_dir / f"iam-{role_name}")
            )
            match _prepare(role_tf):
                case Err() as e:
                    return e
                case Ok(_):
                    pass

            match reconcile_role(
                ctx, role_tf, identity, names, role_name, config.use_inline_policies
            ):
                case Err() as e:
                    return e
                case Ok(role):
                    roles[role_name] = role
                    if role.existed:
                        _report_existing("IAM role", role_name, role.imported)
                    console.ok(f"IAM role: {role_name}")

        role = roles[role_name]
        workflow = generate_workflow(root, document, env, role.arn)
        console.ok(f"Workflow: {workflow.relative_to(root)}")

        stub = generate_backend_stub(root, env.watch_dir, document.aws_region)
        if stub is None:
            existing = paths.providers_path(root, env.watch_dir).relative_to(root)
            console.warn(f"{existing} already exists - skipping.")
        else:
            console.ok(f"providers.tf: {stub.relative_to(root)}")

        document.add_environment(env)
        match state_module.save(root, document):
            case Err() as e:
                return e
            case Ok(_):
                pass

        provisioned.append(
            ProvisionedEnvironment(
                environment=env,
                role_name=role_name,
                role_arn=role.arn,
                workflow_path=workflow,
                providers_path=stub,
            )
        )

    console.ok(f"Config: {paths.config_path(root).relative_to(root)}")
    return Ok(InitSummary(names=names, document=document, environments=tuple(provisioned)))
