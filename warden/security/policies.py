"""
XACML policy data checks.

The stored document must be a ``Policy`` or ``PolicySet`` element (any
namespace) whose identifier, version and kind agree with the policy record.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass

from warden.exceptions import InvalidPolicyDataError, PolicyDataMismatchError
from warden.models.security import PolicyType

ROOT_ELEMENTS = {
    "Policy": (PolicyType.XACML_POLICY, "PolicyId"),
    "PolicySet": (PolicyType.XACML_POLICY_SET, "PolicySetId"),
}


@dataclass(frozen=True)
class PolicyDataAttributes:
    policy_id: str | None
    version: str | None
    type: PolicyType


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def parse_policy_data(data: str) -> PolicyDataAttributes:
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise InvalidPolicyDataError(str(e)) from e

    element = _local_name(root.tag)
    if element not in ROOT_ELEMENTS:
        raise InvalidPolicyDataError(
            f"unexpected root element ({element}), expected Policy or PolicySet"
        )

    policy_type, id_attribute = ROOT_ELEMENTS[element]
    return PolicyDataAttributes(
        policy_id=root.get(id_attribute),
        version=root.get("Version"),
        type=policy_type,
    )


def validate_policy_data(policy_id: str, version: str, policy_type: PolicyType, data: str) -> None:
    attributes = parse_policy_data(data)

    if attributes.type != policy_type:
        raise PolicyDataMismatchError("type", policy_type.code, attributes.type.code)
    if attributes.policy_id != policy_id:
        raise PolicyDataMismatchError("ID", policy_id, attributes.policy_id)
    if attributes.version != version:
        raise PolicyDataMismatchError("version", version, attributes.version)
