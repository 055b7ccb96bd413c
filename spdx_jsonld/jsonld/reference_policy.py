"""
Reference Policy

Decides how a node-valued property value is written: as a reference to a
top-level element, as a reference to a top-level creation info, as a compact
license expression string, or inlined as a nested object.
"""

from enum import Enum
from typing import Collection

from spdx_jsonld.model.spdx_constants import CORE_CREATION_INFO


class ReferencePolicy(Enum):
    ELEMENT_REFERENCE = "element_reference"
    CREATION_INFO_REFERENCE = "creation_info_reference"
    LICENSE_EXPRESSION = "license_expression"
    INLINE = "inline"


def decide_reference_policy(type_name: str,
                            element_types: Collection[str],
                            any_license_info_types: Collection[str],
                            pretty: bool) -> ReferencePolicy:
    """
    Choose the policy for a value of the given type.

    Args:
        type_name: Type of the referenced node, e.g. ``Core.Person``
        element_types: Types that are Element subclasses
        any_license_info_types: Types that are AnyLicenseInfo subclasses
        pretty: Whether compact license expressions are enabled

    Returns:
        The first applicable policy, checked in declaration order
    """
    if type_name in element_types:
        return ReferencePolicy.ELEMENT_REFERENCE
    if type_name == CORE_CREATION_INFO:
        return ReferencePolicy.CREATION_INFO_REFERENCE
    if pretty and type_name in any_license_info_types:
        return ReferencePolicy.LICENSE_EXPRESSION
    return ReferencePolicy.INLINE
