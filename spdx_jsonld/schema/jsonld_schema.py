"""
SPDX JSON-LD Schema Service

Wraps the JSON Schema and JSON-LD context published for one SPDX spec version
and answers the structural questions the serializer and deserializer need:
class hierarchy, property typing, enumeration vocabularies and property
descriptors. Validation is delegated to the jsonschema library.
"""

import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, List, Any, Optional, Set, Union

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError
from rdflib.namespace import XSD

from spdx_jsonld.model import spdx_constants as sc
from spdx_jsonld.model.type_names import class_uri_to_type
from spdx_jsonld.model.typed_node import PropertyDescriptor
from spdx_jsonld.utils.exceptions import SchemaUnavailableError

logger = logging.getLogger(__name__)

RESOURCE_DIR = Path(__file__).parent / "resources"

SCHEMA_FILE_PATTERN = "schema-v{version}.json"
CONTEXT_FILE_PATTERN = "spdx-context-v{version}.jsonld"

DEFS_REF_PREFIX = "#/$defs/"
PROPS_SUFFIX = "_props"
XSD_NS = "http://www.w3.org/2001/XMLSchema#"

BOOLEAN_TYPES = frozenset(str(t) for t in (XSD.boolean,))
INTEGER_TYPES = frozenset(str(t) for t in (
    XSD.integer, XSD.nonPositiveInteger, XSD.nonNegativeInteger,
    XSD.positiveInteger, XSD.negativeInteger, XSD.long,
))
DOUBLE_TYPES = frozenset(str(t) for t in (XSD.decimal, XSD.float, XSD.double))
STRING_TYPES = frozenset(str(t) for t in (
    XSD.duration, XSD.dateTimeStamp, XSD.dateTime, XSD.time, XSD.date,
    XSD.string, XSD.normalizedString, XSD.token, XSD.language, XSD.anyURI,
)) | frozenset([XSD_NS + "dateType"])


class ScalarType(Enum):
    """Classification of a property's declared JSON-LD @type."""
    BOOLEAN = "boolean"
    INTEGER = "integer"
    DOUBLE = "double"
    STRING = "string"
    REFERENCE = "@id"
    VOCAB = "@vocab"


def classify_type_uri(type_uri: Optional[str]) -> Optional[ScalarType]:
    """Map a context @type value onto a ScalarType, or None if unrecognized."""
    if type_uri is None:
        return None
    if type_uri == "@id":
        return ScalarType.REFERENCE
    if type_uri == "@vocab":
        return ScalarType.VOCAB
    if type_uri in BOOLEAN_TYPES:
        return ScalarType.BOOLEAN
    if type_uri in INTEGER_TYPES:
        return ScalarType.INTEGER
    if type_uri in DOUBLE_TYPES:
        return ScalarType.DOUBLE
    if type_uri in STRING_TYPES:
        return ScalarType.STRING
    return None


@dataclass(frozen=True)
class ClassSchema:
    """A class definition from the schema's $defs, with its definition name."""
    name: str
    definition: Dict[str, Any]


class JsonLDSchema:
    """
    Schema service for a single SPDX spec version.

    Instances are immutable after construction and safe to share between
    threads. Use ``SchemaCache`` rather than constructing directly when the
    same version is needed repeatedly.
    """

    def __init__(self, schema_file_name: str, context_file_name: str,
                 resource_dir: Optional[Union[str, Path]] = None,
                 spec_version: Optional[str] = None):
        """
        Load the schema and context resources.

        Args:
            schema_file_name: JSON Schema file name inside the resource directory
            context_file_name: JSON-LD context file name inside the resource directory
            resource_dir: Directory holding the resources, defaults to the packaged ones
            spec_version: Spec version the resources describe

        Raises:
            SchemaUnavailableError: If either resource is missing or unparsable
        """
        self.resource_dir = Path(resource_dir) if resource_dir else RESOURCE_DIR
        self.spec_version = spec_version or sc.LATEST_SPEC_VERSION

        self.schema: Dict[str, Any] = self._load_json(self.resource_dir / schema_file_name)
        context_document = self._load_json(self.resource_dir / context_file_name)

        contexts = context_document.get("@context") if isinstance(context_document, dict) else None
        if not isinstance(contexts, dict):
            raise SchemaUnavailableError(f"Context resource {context_file_name} has no @context object")
        self.context_document: Dict[str, Any] = context_document
        self.contexts: Dict[str, Any] = contexts

        try:
            Draft202012Validator.check_schema(self.schema)
        except SchemaError as e:
            raise SchemaUnavailableError(f"Invalid JSON schema in {schema_file_name}: {e.message}") from e
        self._validator = Draft202012Validator(self.schema)

        self._defs: Dict[str, Any] = self.schema.get("$defs", {})
        self._classes: List[ClassSchema] = self._resolve_all_classes()

        self.element_types: List[str] = self._collect_subclass_types(sc.ELEMENT_CLASS)
        self.any_license_info_types: List[str] = self._collect_subclass_types(sc.ANY_LICENSE_INFO_CLASS)
        self.all_types: Set[str] = {
            class_uri_to_type(uri) for uri in (self.get_type_uri(c) for c in self._classes) if uri
        }
        self._vocabs: List[str] = sorted(
            v["@context"]["@vocab"] for v in self.contexts.values()
            if isinstance(v, dict) and isinstance(v.get("@context"), dict) and "@vocab" in v["@context"]
        )

        logger.debug(f"Loaded schema {schema_file_name} with {len(self._classes)} classes "
                     f"and {len(self.contexts)} context terms")

    @classmethod
    def for_spec_version(cls, spec_version: str,
                         resource_dir: Optional[Union[str, Path]] = None) -> "JsonLDSchema":
        """
        Load the packaged (or ``resource_dir``) resources for a spec version.

        Raises:
            SchemaUnavailableError: If the version has no resources
        """
        return cls(SCHEMA_FILE_PATTERN.format(version=spec_version),
                   CONTEXT_FILE_PATTERN.format(version=spec_version),
                   resource_dir=resource_dir,
                   spec_version=spec_version)

    @staticmethod
    def _load_json(path: Path) -> Any:
        if not path.is_file():
            raise SchemaUnavailableError(f"Schema resource not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise SchemaUnavailableError(f"Unable to parse schema resource {path}: {e}") from e

    @property
    def context_url(self) -> str:
        return sc.context_uri(self.spec_version)

    # ========================================
    # Class queries
    # ========================================

    def _resolve_ref(self, ref: str) -> Optional[Dict[str, Any]]:
        if not ref.startswith(DEFS_REF_PREFIX):
            return None
        return self._defs.get(ref[len(DEFS_REF_PREFIX):])

    def _resolve_all_classes(self) -> List[ClassSchema]:
        any_class = self._defs.get(sc.ANY_CLASS_DEF)
        if not isinstance(any_class, dict):
            logger.warning("Schema has no AnyClass definition")
            return []
        classes = []
        for member in any_class.get("anyOf", []):
            ref = member.get("$ref", "")
            definition = self._resolve_ref(ref)
            if definition is None:
                logger.warning(f"Unresolvable class reference in AnyClass: {ref}")
                continue
            classes.append(ClassSchema(ref[len(DEFS_REF_PREFIX):], definition))
        return classes

    def _collect_subclass_types(self, super_class: str) -> List[str]:
        types = []
        for class_schema in self._classes:
            if self.is_subclass_of(super_class, class_schema):
                type_uri = self.get_type_uri(class_schema)
                if type_uri:
                    types.append(class_uri_to_type(type_uri))
        return types

    def get_all_classes(self) -> List[ClassSchema]:
        """All class schemas listed in AnyClass, in schema order."""
        return list(self._classes)

    def get_class_schema(self, name: str) -> Optional[ClassSchema]:
        """Class schema by wire class name, e.g. ``software_Package``."""
        for class_schema in self._classes:
            if class_schema.name == name:
                return class_schema
        return None

    def is_subclass_of(self, super_type: str, class_schema: ClassSchema) -> bool:
        """
        True if the class's allOf chain references ``<super_type>_props``.

        A class is a subclass of itself.
        """
        return self._references_props(f"{DEFS_REF_PREFIX}{super_type}{PROPS_SUFFIX}",
                                      class_schema.definition, set())

    def _references_props(self, target_ref: str, definition: Dict[str, Any], visited: Set[str]) -> bool:
        for member in definition.get("allOf", []):
            ref = member.get("$ref")
            if not ref:
                continue
            if ref == target_ref:
                return True
            if ref.endswith(PROPS_SUFFIX) and ref not in visited:
                visited.add(ref)
                resolved = self._resolve_ref(ref)
                if resolved is not None and self._references_props(target_ref, resolved, visited):
                    return True
        return False

    def has_property(self, property_name: str, class_schema: ClassSchema) -> bool:
        """True if the class or any of its nested sub-schemas declares the property."""
        return self._has_property(property_name, class_schema.definition, set())

    def _has_property(self, property_name: str, definition: Any, visited: Set[str]) -> bool:
        if not isinstance(definition, dict):
            return False
        properties = definition.get("properties")
        if isinstance(properties, dict) and property_name in properties:
            return True
        ref = definition.get("$ref")
        if ref and ref not in visited:
            visited.add(ref)
            if self._has_property(property_name, self._resolve_ref(ref), visited):
                return True
        for keyword in ("allOf", "anyOf", "oneOf"):
            for member in definition.get(keyword, []):
                if self._has_property(property_name, member, visited):
                    return True
        return False

    def get_type(self, class_schema: ClassSchema) -> Optional[str]:
        """Wire type constant declared by the class, e.g. ``software_Package``."""
        for member in class_schema.definition.get("allOf", []):
            type_property = member.get("properties", {}).get("type")
            if not isinstance(type_property, dict):
                continue
            one_of = type_property.get("oneOf", [])
            if len(one_of) != 1 or "const" not in one_of[0]:
                logger.warning(f"Class {class_schema.name} does not declare a single type constant")
                return None
            return one_of[0]["const"]
        return None

    def get_type_uri(self, class_schema: ClassSchema) -> Optional[str]:
        """Full class URI for the class's type, looked up in the context."""
        type_name = self.get_type(class_schema)
        if type_name is None:
            return None
        type_uri = self.contexts.get(type_name)
        if not isinstance(type_uri, str):
            logger.warning(f"Context entry for type {type_name} is not a URI string")
            return None
        return type_uri

    # ========================================
    # Property queries
    # ========================================

    def _context_entry(self, field_name: str) -> Optional[Dict[str, Any]]:
        entry = self.contexts.get(field_name)
        return entry if isinstance(entry, dict) else None

    def get_property_type_uri(self, field_name: str) -> Optional[str]:
        """Raw @type of a field's context entry (an XSD URI, '@id' or '@vocab')."""
        entry = self._context_entry(field_name)
        if entry is None:
            return None
        type_uri = entry.get("@type")
        return type_uri if isinstance(type_uri, str) else None

    def get_property_type(self, field_name: str) -> Optional[ScalarType]:
        return classify_type_uri(self.get_property_type_uri(field_name))

    def get_vocab(self, field_name: str) -> Optional[str]:
        """Enumeration vocabulary of a field, from its scoped context."""
        entry = self._context_entry(field_name)
        if entry is None:
            return None
        scoped = entry.get("@context")
        if not isinstance(scoped, dict):
            return None
        vocab = scoped.get("@vocab")
        return vocab if isinstance(vocab, str) else None

    def is_node_valued(self, field_name: str) -> bool:
        return self.get_property_type(field_name) == ScalarType.REFERENCE

    def is_enum(self, field_name: str) -> bool:
        return self.get_property_type(field_name) == ScalarType.VOCAB or self.get_vocab(field_name) is not None

    def is_enum_value(self, uri: str) -> bool:
        """True if the URI is an individual of one of the enumeration vocabularies."""
        for vocab in self._vocabs:
            if uri.startswith(vocab) and "/" not in uri[len(vocab):]:
                return True
        return False

    def get_property_descriptor(self, field_name: str) -> Optional[PropertyDescriptor]:
        """Descriptor built from the field's context @id, split at the last '/'."""
        entry = self._context_entry(field_name)
        if entry is None:
            return None
        property_uri = entry.get("@id")
        if not isinstance(property_uri, str) or "/" not in property_uri:
            return None
        namespace, _, name = property_uri.rpartition("/")
        return PropertyDescriptor(name, namespace + "/")

    # ========================================
    # Validation
    # ========================================

    def validate(self, document: Any) -> bool:
        """
        Validate a parsed JSON document against the schema.

        Returns:
            True if valid; errors are logged, never raised
        """
        errors = sorted(self._validator.iter_errors(document), key=lambda e: [str(p) for p in e.path])
        if not errors:
            return True
        for error in errors[:10]:
            location = "/".join(str(p) for p in error.path) or "<root>"
            logger.warning(f"Schema validation error at {location}: {error.message}")
        return False

    def validate_file(self, path: Union[str, Path]) -> bool:
        """Validate a JSON file; unreadable or unparsable files are reported as invalid."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Unable to read {path} for validation: {e}")
            return False
        return self.validate(document)

    def __str__(self) -> str:
        return f"JsonLDSchema(version={self.spec_version}, classes={len(self._classes)})"
