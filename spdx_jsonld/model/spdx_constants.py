"""
SPDX Constants

Namespaces, type names and property names referenced directly by the codec.
Everything else about the SPDX model is read from the versioned schema and
context resources.
"""

LATEST_SPEC_VERSION = "3.0.1"

SPDX_TERMS_NAMESPACE_PATTERN = "https://spdx.org/rdf/{version}/terms/"
CONTEXT_URI_PATTERN = "https://spdx.org/rdf/{version}/spdx-context.jsonld"

LISTED_LICENSE_NAMESPACE = "https://spdx.org/licenses/"
GENERATED_SERIALIZED_ID_PREFIX = "https://generated-prefix/"
DOCUMENT_URI_PREFIX = "urn:spdx-document:"
CREATION_INFO_ID_PREFIX = "_:creationInfo_"
BLANK_NODE_PREFIX = "_:"
ANON_ID_PREFIX = "__anon__"

# JSON field names with structural meaning
JSON_ID = "@id"
JSON_SPDX_ID = "spdxId"
JSON_TYPE = "type"
JSON_CONTEXT = "@context"
JSON_GRAPH = "@graph"

NON_PROPERTY_FIELDS = frozenset([JSON_ID, JSON_SPDX_ID, JSON_TYPE, JSON_CONTEXT])

# Type names (Profile.ClassName)
CORE_ELEMENT = "Core.Element"
CORE_CREATION_INFO = "Core.CreationInfo"
CORE_SPDX_DOCUMENT = "Core.SpdxDocument"
CORE_EXTERNAL_MAP = "Core.ExternalMap"
EXPANDED_LISTED_LICENSE = "ExpandedLicensing.ListedLicense"
EXPANDED_LISTED_LICENSE_EXCEPTION = "ExpandedLicensing.ListedLicenseException"
EXPANDED_CUSTOM_LICENSE = "ExpandedLicensing.CustomLicense"
EXPANDED_CONJUNCTIVE_LICENSE_SET = "ExpandedLicensing.ConjunctiveLicenseSet"
EXPANDED_DISJUNCTIVE_LICENSE_SET = "ExpandedLicensing.DisjunctiveLicenseSet"
EXPANDED_OR_LATER_OPERATOR = "ExpandedLicensing.OrLaterOperator"
EXPANDED_WITH_ADDITION_OPERATOR = "ExpandedLicensing.WithAdditionOperator"
SIMPLE_LICENSE_EXPRESSION = "SimpleLicensing.LicenseExpression"

# Schema class names used as subclass roots
ELEMENT_CLASS = "Element"
ANY_LICENSE_INFO_CLASS = "simplelicensing_AnyLicenseInfo"
ANY_CLASS_DEF = "AnyClass"

# Wire field names used by the codec
PROP_CREATION_INFO = "creationInfo"
PROP_SPEC_VERSION = "specVersion"
PROP_ELEMENT = "element"
PROP_ROOT_ELEMENT = "rootElement"
PROP_NAMESPACE_MAP = "namespaceMap"
PROP_IMPORT = "import"
PROP_EXTERNAL_SPDX_ID = "externalSpdxId"
PROP_LICENSE_EXPRESSION = "simplelicensing_licenseExpression"
PROP_MEMBER = "expandedlicensing_member"
PROP_SUBJECT_LICENSE = "expandedlicensing_subjectLicense"
PROP_SUBJECT_EXTENDABLE_LICENSE = "expandedlicensing_subjectExtendableLicense"
PROP_SUBJECT_ADDITION = "expandedlicensing_subjectAddition"

# Individuals that stay plain URI values rather than external elements
WELL_KNOWN_INDIVIDUAL_SUFFIXES = (
    "Core/NoneElement",
    "Core/NoAssertionElement",
    "Core/SpdxOrganization",
    "ExpandedLicensing/NoAssertionLicense",
    "ExpandedLicensing/NoneLicense",
)


def context_uri(spec_version: str) -> str:
    """Return the published context URL for a spec version."""
    return CONTEXT_URI_PATTERN.format(version=spec_version)


def terms_namespace(spec_version: str) -> str:
    """Return the SPDX terms namespace for a spec version."""
    return SPDX_TERMS_NAMESPACE_PATTERN.format(version=spec_version)


def is_blank_id(node_id: str) -> bool:
    return node_id.startswith(BLANK_NODE_PREFIX)


def is_well_known_individual(uri: str) -> bool:
    """True for individuals such as NoneElement that are never external elements."""
    return uri.startswith("https://spdx.org/rdf/") and uri.endswith(WELL_KNOWN_INDIVIDUAL_SUFFIXES)
