"""
Cloud resource providers for the state backend.
"""

from .aws import AwsResourceProvider

__all__ = ["AwsResourceProvider"]
