"""
AWS resources backing stack state: S3 buckets and KMS keys.
"""

import logging
from typing import Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..core.resolver import Candidate
from ..errors import ProviderFailure

logger = logging.getLogger(__name__)

# us-east-1 rejects an explicit LocationConstraint
_NO_LOCATION_CONSTRAINT = "us-east-1"

_ALIAS_PREFIX = "alias/"


class AwsResourceProvider:
    """
    Lists and creates the buckets and keys pocketrocket needs.

    Every botocore error is wrapped in ProviderFailure naming the step
    that failed. Nothing is retried or rolled back.
    """

    def __init__(self, session: boto3.session.Session):
        self.session = session
        self._s3 = session.client("s3")
        self._kms = session.client("kms")

    @classmethod
    def connect(
        cls,
        profile: Optional[str] = None,
        region: Optional[str] = None,
    ) -> "AwsResourceProvider":
        """
        Build a provider from the default credential chain.

        Raises:
            ProviderFailure: If the session or clients cannot be created
        """
        try:
            session = boto3.Session(profile_name=profile, region_name=region)
            provider = cls(session)
        except (BotoCoreError, ClientError) as e:
            raise ProviderFailure("bootstrap aws client", e) from e
        logger.info(f"AWS client ready (region: {session.region_name or 'default'})")
        return provider

    def list_storage(self) -> List[Candidate]:
        """List existing S3 buckets."""
        try:
            response = self._s3.list_buckets()
        except (BotoCoreError, ClientError) as e:
            raise ProviderFailure("list s3 buckets", e) from e
        return [Candidate(identifier=bucket["Name"]) for bucket in response.get("Buckets", [])]

    def create_storage(self, name: str, location: Optional[str] = None) -> str:
        """
        Create an S3 bucket.

        Returns:
            The bucket location as reported by S3; may start with "/"
        """
        params = {"Bucket": name}
        if location and location != _NO_LOCATION_CONSTRAINT:
            params["CreateBucketConfiguration"] = {"LocationConstraint": location}

        try:
            response = self._s3.create_bucket(**params)
        except (BotoCoreError, ClientError) as e:
            raise ProviderFailure(f"create s3 bucket '{name}'", e) from e

        location_value = response.get("Location") or name
        # Outside us-east-1 S3 reports the bucket URL instead of "/name"
        if "://" in location_value:
            location_value = name
        logger.info(f"Created s3 bucket {name} in {location or _NO_LOCATION_CONSTRAINT}")
        return location_value

    def list_keys(self) -> List[Candidate]:
        """List KMS keys, labelled with their alias where one exists."""
        try:
            aliases = self._key_aliases()
            candidates = []
            paginator = self._kms.get_paginator("list_keys")
            for page in paginator.paginate():
                for key in page.get("Keys", []):
                    key_id = key["KeyId"]
                    candidates.append(Candidate(identifier=key_id, label=aliases.get(key_id)))
        except (BotoCoreError, ClientError) as e:
            raise ProviderFailure("list kms keys", e) from e
        return candidates

    def _key_aliases(self) -> Dict[str, str]:
        aliases: Dict[str, str] = {}
        paginator = self._kms.get_paginator("list_aliases")
        for page in paginator.paginate():
            for alias in page.get("Aliases", []):
                key_id = alias.get("TargetKeyId")
                # first alias per key wins
                if key_id and key_id not in aliases:
                    aliases[key_id] = alias["AliasName"]
        return aliases

    def create_key(self, name: str, description: str = "") -> str:
        """
        Create a symmetric KMS key and, when named, an alias for it.

        Returns:
            The new key id
        """
        try:
            response = self._kms.create_key(Description=description)
            key_id = response["KeyMetadata"]["KeyId"]
            if name:
                alias = name if name.startswith(_ALIAS_PREFIX) else _ALIAS_PREFIX + name
                self._kms.create_alias(AliasName=alias, TargetKeyId=key_id)
        except (BotoCoreError, ClientError) as e:
            raise ProviderFailure(f"create kms key '{name}'", e) from e
        logger.info(f"Created kms key {key_id}")
        return key_id
