"""
core/resources/security.py - Security / Identity 리소스

IAM User/Role/Policy, KMS Key, ACM Certificate, Secrets Manager Secret,
Cognito User Pool.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .base import Column, Resource
from .helpers import describe_or_none, format_date, format_time, paginate

if TYPE_CHECKING:
    from core.client import AWSClient

# ACM 인증서 유형 표시명
CERT_TYPES = {
    "AMAZON_ISSUED": "Amazon",
    "IMPORTED": "Imported",
    "PRIVATE": "Private",
}

COGNITO_MAX_RESULTS = 60


# =============================================================================
# IAM
# =============================================================================


@dataclass
class IAMUser:
    user_name: str
    user_id: str
    created: str
    arn: str


class IAMUsers(Resource[IAMUser]):
    key = "iam-users"
    name = "IAM Users"
    COLUMNS = (
        Column("User Name", 30),
        Column("User ID", 25),
        Column("Created", 20),
        Column("ARN", 60),
    )

    def _collect(self, client: AWSClient) -> list[IAMUser]:
        users = paginate(client.service("iam"), "iam", "list_users", "Users")
        return [
            IAMUser(
                user_name=u.get("UserName", ""),
                user_id=u.get("UserId", ""),
                created=format_time(u.get("CreateDate")),
                arn=u.get("Arn", ""),
            )
            for u in users
        ]

    def _row(self, item: IAMUser) -> tuple:
        return (item.user_name, item.user_id, item.created, item.arn)

    def _item_id(self, item: IAMUser) -> str:
        return item.user_name


@dataclass
class IAMRole:
    role_name: str
    role_id: str
    created: str
    arn: str


class IAMRoles(Resource[IAMRole]):
    key = "iam-roles"
    name = "IAM Roles"
    COLUMNS = (
        Column("Role Name", 40),
        Column("Role ID", 25),
        Column("Created", 20),
        Column("ARN", 60),
    )

    def _collect(self, client: AWSClient) -> list[IAMRole]:
        roles = paginate(client.service("iam"), "iam", "list_roles", "Roles")
        return [
            IAMRole(
                role_name=r.get("RoleName", ""),
                role_id=r.get("RoleId", ""),
                created=format_time(r.get("CreateDate")),
                arn=r.get("Arn", ""),
            )
            for r in roles
        ]

    def _row(self, item: IAMRole) -> tuple:
        return (item.role_name, item.role_id, item.created, item.arn)

    def _item_id(self, item: IAMRole) -> str:
        return item.role_name


@dataclass
class IAMPolicy:
    policy_name: str
    policy_id: str
    attachments: int
    created: str
    arn: str


class IAMPolicies(Resource[IAMPolicy]):
    """고객 관리형(Local) 정책만 표시"""

    key = "iam-policies"
    name = "IAM Policies"
    COLUMNS = (
        Column("Policy Name", 40),
        Column("Policy ID", 25),
        Column("Attachments", 12),
        Column("Created", 20),
        Column("ARN", 60),
    )

    def _collect(self, client: AWSClient) -> list[IAMPolicy]:
        policies = paginate(client.service("iam"), "iam", "list_policies", "Policies", Scope="Local")
        return [
            IAMPolicy(
                policy_name=p.get("PolicyName", ""),
                policy_id=p.get("PolicyId", ""),
                attachments=p.get("AttachmentCount", 0),
                created=format_time(p.get("CreateDate")),
                arn=p.get("Arn", ""),
            )
            for p in policies
        ]

    def _row(self, item: IAMPolicy) -> tuple:
        return (item.policy_name, item.policy_id, item.attachments, item.created, item.arn)

    def _item_id(self, item: IAMPolicy) -> str:
        return item.arn


# =============================================================================
# KMS
# =============================================================================


@dataclass
class KMSKey:
    key_id: str
    alias: str = ""
    description: str = ""
    state: str = ""
    usage: str = ""
    spec: str = ""


class KMSKeys(Resource[KMSKey]):
    key = "kms"
    name = "KMS Keys"
    COLUMNS = (
        Column("Key ID", 40),
        Column("Alias", 30),
        Column("Description", 30),
        Column("State", 12),
        Column("Usage", 18),
        Column("Spec", 15),
    )

    def _collect(self, client: AWSClient) -> list[KMSKey]:
        kms = client.service("kms")
        aliases = {
            a["TargetKeyId"]: a["AliasName"]
            for a in paginate(kms, "kms", "list_aliases", "Aliases")
            if a.get("TargetKeyId") and a.get("AliasName")
        }

        keys = []
        for entry in paginate(kms, "kms", "list_keys", "Keys"):
            key_id = entry.get("KeyId", "")
            detail = describe_or_none("kms", "describe_key", kms.describe_key, KeyId=key_id)
            metadata = (detail or {}).get("KeyMetadata", {})
            keys.append(
                KMSKey(
                    key_id=key_id,
                    alias=aliases.get(key_id, ""),
                    description=metadata.get("Description", ""),
                    state=metadata.get("KeyState", ""),
                    usage=metadata.get("KeyUsage", ""),
                    spec=metadata.get("KeySpec", ""),
                )
            )
        return keys

    def _row(self, item: KMSKey) -> tuple:
        return (item.key_id, item.alias, item.description, item.state, item.usage, item.spec)

    def _item_id(self, item: KMSKey) -> str:
        return item.key_id


# =============================================================================
# ACM
# =============================================================================


@dataclass
class Certificate:
    arn: str
    domain_name: str
    status: str = ""
    cert_type: str = ""
    in_use: str = ""
    not_before: str = ""
    not_after: str = ""
    renewal: str = ""


def format_cert_type(cert_type: str) -> str:
    if not cert_type:
        return ""
    return CERT_TYPES.get(cert_type, cert_type.replace("_", " "))


class ACMCertificates(Resource[Certificate]):
    key = "acm"
    name = "ACM Certificates"
    COLUMNS = (
        Column("Domain Name", 40),
        Column("Status", 15),
        Column("Type", 15),
        Column("In Use", 8),
        Column("Not Before", 12),
        Column("Not After", 12),
        Column("Renewal", 15),
    )

    def _collect(self, client: AWSClient) -> list[Certificate]:
        acm = client.service("acm")
        certs = []
        for summary in paginate(acm, "acm", "list_certificates", "CertificateSummaryList"):
            arn = summary.get("CertificateArn", "")
            cert = Certificate(arn=arn, domain_name=summary.get("DomainName", ""))
            detail = describe_or_none("acm", "describe_certificate", acm.describe_certificate, CertificateArn=arn)
            if detail is not None:
                info = detail.get("Certificate", {})
                cert.status = info.get("Status", "")
                cert.cert_type = format_cert_type(info.get("Type", ""))
                cert.in_use = str(len(info.get("InUseBy", [])))
                cert.not_before = format_date(info.get("NotBefore"))
                cert.not_after = format_date(info.get("NotAfter"))
                cert.renewal = info.get("RenewalEligibility", "")
            certs.append(cert)
        return certs

    def _row(self, item: Certificate) -> tuple:
        return (
            item.domain_name,
            item.status,
            item.cert_type,
            item.in_use,
            item.not_before,
            item.not_after,
            item.renewal,
        )

    def _item_id(self, item: Certificate) -> str:
        return item.arn


# =============================================================================
# Secrets Manager
# =============================================================================


@dataclass
class Secret:
    arn: str
    name: str
    description: str
    rotation: bool
    last_accessed: str
    last_changed: str
    created: str


class Secrets(Resource[Secret]):
    key = "secrets"
    name = "Secrets Manager"
    COLUMNS = (
        Column("Name", 40),
        Column("Description", 35),
        Column("Rotation", 10),
        Column("Last Accessed", 20),
        Column("Last Changed", 20),
        Column("Created", 20),
    )

    def _collect(self, client: AWSClient) -> list[Secret]:
        secrets = paginate(client.service("secretsmanager"), "secretsmanager", "list_secrets", "SecretList")
        return [
            Secret(
                arn=s.get("ARN", ""),
                name=s.get("Name", ""),
                description=s.get("Description", ""),
                rotation=bool(s.get("RotationEnabled")),
                last_accessed=format_time(s.get("LastAccessedDate")),
                last_changed=format_time(s.get("LastChangedDate")),
                created=format_time(s.get("CreatedDate")),
            )
            for s in secrets
        ]

    def _row(self, item: Secret) -> tuple:
        return (
            item.name,
            item.description,
            item.rotation,
            item.last_accessed,
            item.last_changed,
            item.created,
        )

    def _item_id(self, item: Secret) -> str:
        return item.arn


# =============================================================================
# Cognito
# =============================================================================


@dataclass
class UserPool:
    pool_id: str
    name: str
    status: str = ""
    mfa: str = ""
    users: str = ""
    created: str = ""
    modified: str = ""


class CognitoUserPools(Resource[UserPool]):
    key = "cognito"
    name = "Cognito User Pools"
    COLUMNS = (
        Column("ID", 30),
        Column("Name", 30),
        Column("Status", 12),
        Column("MFA", 12),
        Column("Users", 10),
        Column("Created", 20),
        Column("Modified", 20),
    )

    def _collect(self, client: AWSClient) -> list[UserPool]:
        cognito = client.service("cognito-idp")
        pools = []
        for p in paginate(cognito, "cognito-idp", "list_user_pools", "UserPools", MaxResults=COGNITO_MAX_RESULTS):
            pool = UserPool(
                pool_id=p.get("Id", ""),
                name=p.get("Name", ""),
                status=p.get("Status", ""),
                created=format_time(p.get("CreationDate")),
                modified=format_time(p.get("LastModifiedDate")),
            )
            detail = describe_or_none(
                "cognito-idp", "describe_user_pool", cognito.describe_user_pool, UserPoolId=pool.pool_id
            )
            if detail is not None:
                info = detail.get("UserPool", {})
                pool.mfa = info.get("MfaConfiguration", "")
                pool.users = str(info.get("EstimatedNumberOfUsers", ""))
            pools.append(pool)
        return pools

    def _row(self, item: UserPool) -> tuple:
        return (item.pool_id, item.name, item.status, item.mfa, item.users, item.created, item.modified)

    def _item_id(self, item: UserPool) -> str:
        return item.pool_id
