"""
cloud_inventory/drivers/oci/credentials.py - OCI credential chain

Resolution order, first complete source wins:

1. static   credentials.user + fingerprint + tenancy + (private_key | key_file) + region
2. profile  credentials.config_file and/or credentials.profile (oci.config.from_file)
3. ambient  resource principal when OCI_RESOURCE_PRINCIPAL_VERSION is set,
            instance principal when credentials.instance_principal is true,
            else the DEFAULT profile of ~/.oci/config
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import oci
from oci.exceptions import ConfigFileNotFound, ProfileNotFound

from ...auth.chain import CredentialChain, CredentialResolver, CredentialSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OciAuth:
    """What an OCI SDK client needs: a config dict and an optional signer

    Attributes:
        config: oci config dict (at least ``region`` when a signer is set)
        signer: request signer, None to let the SDK sign from ``config``
        tenancy_id: tenancy OCID when the source knows it
        region: home region of the credentials
    """

    config: dict[str, Any] = field(default_factory=dict)
    signer: Any = None
    tenancy_id: str | None = None
    region: str | None = None

    def client_kwargs(self, region: str | None) -> dict[str, Any]:
        config = dict(self.config)
        if region:
            config["region"] = region
        kwargs: dict[str, Any] = {"config": config}
        if self.signer is not None:
            kwargs["signer"] = self.signer
        return kwargs


def _from_config_file(file_location: str, profile_name: str) -> OciAuth | None:
    try:
        config = oci.config.from_file(file_location=file_location, profile_name=profile_name)
    except (ConfigFileNotFound, ProfileNotFound) as e:
        logger.debug(f"OCI config not usable ({file_location} [{profile_name}]): {e}")
        return None
    return OciAuth(config=config, tenancy_id=config.get("tenancy"), region=config.get("region"))


def _static_auth(credentials: Mapping[str, Any]) -> OciAuth | None:
    user = credentials.get("user")
    fingerprint = credentials.get("fingerprint")
    tenancy = credentials.get("tenancy")
    region = credentials.get("region")
    private_key = credentials.get("private_key")
    key_file = credentials.get("key_file")
    if not (user and fingerprint and tenancy and region and (private_key or key_file)):
        return None

    signer = oci.signer.Signer(
        tenancy=tenancy,
        user=user,
        fingerprint=fingerprint,
        private_key_file_location=key_file,
        pass_phrase=credentials.get("pass_phrase"),
        private_key_content=private_key,
    )
    config = {"user": user, "fingerprint": fingerprint, "tenancy": tenancy, "region": region}
    return OciAuth(config=config, signer=signer, tenancy_id=tenancy, region=region)


def _profile_auth(credentials: Mapping[str, Any]) -> OciAuth | None:
    config_file = credentials.get("config_file")
    profile = credentials.get("profile")
    if not config_file and not profile:
        return None
    return _from_config_file(config_file or oci.config.DEFAULT_LOCATION, profile or oci.config.DEFAULT_PROFILE)


def _principal_auth(signer: Any, credentials: Mapping[str, Any]) -> OciAuth:
    region = getattr(signer, "region", None) or credentials.get("region")
    tenancy_id = getattr(signer, "tenancy_id", None) or credentials.get("tenancy")
    return OciAuth(config={"region": region} if region else {}, signer=signer, tenancy_id=tenancy_id, region=region)


def _ambient_auth(credentials: Mapping[str, Any]) -> OciAuth | None:
    if os.environ.get("OCI_RESOURCE_PRINCIPAL_VERSION"):
        logger.debug("Using OCI resource principal")
        return _principal_auth(oci.auth.signers.get_resource_principals_signer(), credentials)
    if credentials.get("instance_principal"):
        logger.debug("Using OCI instance principal")
        return _principal_auth(oci.auth.signers.InstancePrincipalsSecurityTokenSigner(), credentials)
    return _from_config_file(oci.config.DEFAULT_LOCATION, oci.config.DEFAULT_PROFILE)


def build_credential_chain() -> CredentialChain[OciAuth]:
    return CredentialChain(
        "oci",
        [
            CredentialResolver(
                CredentialSource.STATIC,
                (
                    "credentials.user",
                    "credentials.fingerprint",
                    "credentials.tenancy",
                    "credentials.private_key|key_file",
                    "credentials.region",
                ),
                _static_auth,
            ),
            CredentialResolver(
                CredentialSource.PROFILE,
                ("credentials.config_file", "credentials.profile"),
                _profile_auth,
            ),
            CredentialResolver(
                CredentialSource.AMBIENT,
                ("OCI_RESOURCE_PRINCIPAL_VERSION", "credentials.instance_principal", "~/.oci/config [DEFAULT]"),
                _ambient_auth,
            ),
        ],
    )
