"""
Type Name Codec

Pure, table-driven conversion between object-model type names
(``Profile.ClassName``) and their JSON-LD wire form (``ClassName`` for the
Core profile, ``profile_ClassName`` otherwise). Class and property names that
collide with reserved words are aliased in both directions.
"""

from typing import Optional

from spdx_jsonld.model.typed_node import PropertyDescriptor

CORE_PROFILE = "Core"

PROFILES = (
    "Core",
    "Software",
    "Security",
    "SimpleLicensing",
    "ExpandedLicensing",
    "Dataset",
    "AI",
    "Build",
    "Lite",
    "Extension",
)

# Wire prefix (lowercase profile) -> profile name
WIRE_PREFIX_TO_PROFILE = {profile.lower(): profile for profile in PROFILES}

# Wire name -> model name
RESERVED_WORDS = {
    "Package": "SpdxPackage",
    "package": "spdxPackage",
    "File": "SpdxFile",
    "file": "spdxFile",
}

# Model name -> wire name
REVERSE_RESERVED_WORDS = {model: wire for wire, model in RESERVED_WORDS.items()}


def to_model_name(wire_name: str) -> str:
    return RESERVED_WORDS.get(wire_name, wire_name)


def to_wire_name(model_name: str) -> str:
    return REVERSE_RESERVED_WORDS.get(model_name, model_name)


def to_wire_type(type_name: str) -> str:
    """
    Convert a model type name into its wire form.

    Args:
        type_name: Type in ``Profile.ClassName`` form, e.g. ``Software.SpdxPackage``

    Returns:
        Wire type, e.g. ``software_Package``; ``Core`` types drop the prefix
    """
    profile, sep, class_name = type_name.partition(".")
    if not sep:
        return to_wire_name(type_name)
    wire_class = to_wire_name(class_name)
    if profile == CORE_PROFILE:
        return wire_class
    return f"{profile.lower()}_{wire_class}"


def from_wire_type(wire_type: str) -> Optional[str]:
    """
    Convert a wire type into a model type name.

    Args:
        wire_type: Type as it appears in JSON, e.g. ``software_Package``

    Returns:
        Model type, e.g. ``Software.SpdxPackage``, or None when the prefix
        does not name a known profile
    """
    if not wire_type:
        return None
    prefix, sep, class_name = wire_type.partition("_")
    if not sep:
        return f"{CORE_PROFILE}.{to_model_name(wire_type)}"
    profile = WIRE_PREFIX_TO_PROFILE.get(prefix)
    if profile is None or not class_name:
        return None
    return f"{profile}.{to_model_name(class_name)}"


def class_uri_to_type(class_uri: str) -> str:
    """
    Convert a class URI such as ``https://spdx.org/rdf/3.0.1/terms/Software/Package``
    into ``Software.SpdxPackage``.
    """
    head, _, class_name = class_uri.rpartition("/")
    profile = head.rsplit("/", 1)[-1]
    return f"{profile}.{to_model_name(class_name)}"


def property_to_field_name(descriptor: PropertyDescriptor) -> str:
    """
    Wire field name for a property: the bare name for Core properties,
    ``lowercase(profile)_name`` otherwise.
    """
    wire_name = to_wire_name(descriptor.name)
    profile = descriptor.profile
    if profile == CORE_PROFILE:
        return wire_name
    return f"{profile.lower()}_{wire_name}"
