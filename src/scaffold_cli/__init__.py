"""Scaffold - bootstrap Terraform CI/CD pipelines on AWS."""

__version__ = "0.1.0"
