"""
cloud_inventory/drivers/aws/credentials.py - AWS credential chain

Resolution order, first complete source wins:

1. static   credentials.access_key_id + credentials.secret_access_key
            (+ credentials.session_token)
2. profile  credentials.profile in the shared config/credentials files
3. ambient  boto3 default chain (environment, shared config, container
            and instance metadata)

Each resolver returns a boto3 Session, or None when its inputs are absent.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import boto3
from botocore.exceptions import ProfileNotFound

from ...auth.chain import CredentialChain, CredentialResolver, CredentialSource

logger = logging.getLogger(__name__)


def _static_session(credentials: Mapping[str, Any]) -> boto3.Session | None:
    access_key = credentials.get("access_key_id")
    secret_key = credentials.get("secret_access_key")
    if not access_key or not secret_key:
        return None
    return boto3.Session(
        aws_access_key_id=access_key,
        aws_secret_access_key=secret_key,
        aws_session_token=credentials.get("session_token") or None,
    )


def _profile_session(credentials: Mapping[str, Any]) -> boto3.Session | None:
    profile = credentials.get("profile")
    if not profile:
        return None
    try:
        session = boto3.Session(profile_name=profile)
    except ProfileNotFound:
        logger.debug(f"AWS profile not found: {profile}")
        return None
    if session.get_credentials() is None:
        return None
    return session


def _ambient_session(credentials: Mapping[str, Any]) -> boto3.Session | None:
    session = boto3.Session()
    if session.get_credentials() is None:
        return None
    return session


def build_credential_chain() -> CredentialChain[boto3.Session]:
    return CredentialChain(
        "aws",
        [
            CredentialResolver(
                CredentialSource.STATIC,
                ("credentials.access_key_id", "credentials.secret_access_key"),
                _static_session,
            ),
            CredentialResolver(CredentialSource.PROFILE, ("credentials.profile",), _profile_session),
            CredentialResolver(
                CredentialSource.AMBIENT,
                ("environment (AWS_ACCESS_KEY_ID)", "shared config (default profile)", "instance metadata"),
                _ambient_session,
            ),
        ],
    )
