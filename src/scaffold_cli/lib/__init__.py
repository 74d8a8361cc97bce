"""Low-level helpers: AWS, git, Terraform, state and templates."""
