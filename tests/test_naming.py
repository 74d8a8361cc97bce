"""Tests for lib/naming.py - deterministic resource names."""

from scaffold_cli.lib import naming
from scaffold_cli.models import RepositoryIdentity

WIDGETS = RepositoryIdentity("acme", "widgets")


class TestResourceHash:
    def test_pinned_value(self) -> None:
        # sha256("acme/widgets") = d782c874402305a0...
        assert naming.resource_hash("acme", "widgets") == "d782c874"

    def test_stable_across_calls(self) -> None:
        assert naming.resource_hash("acme", "widgets") == naming.resource_hash("acme", "widgets")

    def test_length_and_alphabet(self) -> None:
        value = naming.resource_hash("some-org", "some-repo")
        assert len(value) == naming.HASH_LENGTH
        assert all(c in "0123456789abcdef" for c in value)

    def test_same_repo_name_in_different_orgs(self) -> None:
        assert naming.resource_hash("acme", "widgets") != naming.resource_hash("globex", "widgets")

    def test_different_repos_in_same_org(self) -> None:
        assert naming.resource_hash("acme", "widgets") != naming.resource_hash("acme", "gadgets")
        assert naming.resource_hash("acme", "gadgets") == "9c24358f"


class TestNames:
    def test_backend_names(self) -> None:
        names = naming.resource_names(WIDGETS)

        assert names.bucket == "tf-state-widgets-d782c874"
        assert names.lock_table == "tf-lock-widgets-d782c874"
        assert names.role == "github-actions-widgets"

    def test_role_name_with_environment(self) -> None:
        assert naming.role_name(WIDGETS, "staging") == "github-actions-widgets-staging"

    def test_role_name_without_environment(self) -> None:
        assert naming.role_name(WIDGETS) == "github-actions-widgets"


class TestRoleNamesFor:
    def test_single_environment_uses_base_role(self) -> None:
        assert naming.role_names_for(WIDGETS, ["prod"], shared_role=False) == {
            "prod": "github-actions-widgets"
        }

    def test_multiple_environments_get_suffixed_roles(self) -> None:
        assert naming.role_names_for(WIDGETS, ["staging", "production"], shared_role=False) == {
            "staging": "github-actions-widgets-staging",
            "production": "github-actions-widgets-production",
        }

    def test_shared_role_uses_base_role_everywhere(self) -> None:
        roles = naming.role_names_for(WIDGETS, ["staging", "production"], shared_role=True)
        assert set(roles.values()) == {"github-actions-widgets"}
