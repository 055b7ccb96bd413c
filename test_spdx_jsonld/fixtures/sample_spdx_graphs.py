"""Sample SPDX JSON-LD Graph Data for Testing

Provides sample SPDX 3 JSON-LD documents for deserializer, reconstruction
and validation tests.
"""

from typing import Dict, Any

CONTEXT_URL = "https://spdx.org/rdf/3.0.1/spdx-context.jsonld"

AGENT_ID = "http://spdx.example.com/Agent/JoshuaWatt"
DOCUMENT_ID = "https://spdx.org/spdxdocs/spdx-example-444504E0-4F89-41D3-9A0C-0305E82C3301"
BOM_ID = "http://spdx.example.com/BOM/1"
PACKAGE_ID = "http://spdx.example.com/Package/1"
FILE_ID = "http://spdx.example.com/Package/1/File/1"
RELATIONSHIP_ID = "http://spdx.example.com/Relationship/1"
EXTERNAL_ID = "http://external.example.com/doc#elem"


def create_creation_info(blank_id: str = "_:creationinfo", spec_version: str = "3.0.1") -> Dict[str, Any]:
    """Create a top-level creation info entry."""
    return {
        "type": "CreationInfo",
        "@id": blank_id,
        "createdBy": [AGENT_ID],
        "specVersion": spec_version,
        "created": "2024-03-06T00:00:00Z"
    }


def create_sbom_graph() -> Dict[str, Any]:
    """Create a complete document: SpdxDocument, Sbom, package, file and relationship."""
    return {
        "@context": CONTEXT_URL,
        "@graph": [
            create_creation_info(),
            {
                "type": "Person",
                "spdxId": AGENT_ID,
                "name": "Joshua Watt",
                "creationInfo": "_:creationinfo",
                "externalIdentifier": [
                    {
                        "type": "ExternalIdentifier",
                        "externalIdentifierType": "email",
                        "identifier": "JPEWhacker@gmail.com"
                    }
                ]
            },
            {
                "type": "SpdxDocument",
                "spdxId": DOCUMENT_ID,
                "creationInfo": "_:creationinfo",
                "profileConformance": ["core", "software"],
                "rootElement": [BOM_ID]
            },
            {
                "type": "software_Sbom",
                "spdxId": BOM_ID,
                "creationInfo": "_:creationinfo",
                "rootElement": [PACKAGE_ID],
                "element": [PACKAGE_ID, FILE_ID, RELATIONSHIP_ID],
                "software_sbomType": ["build"]
            },
            {
                "type": "software_Package",
                "spdxId": PACKAGE_ID,
                "creationInfo": "_:creationinfo",
                "name": "my-package",
                "software_packageVersion": "1.0",
                "software_downloadLocation": "http://dl.example.com/my-package_1.0.0.tar",
                "builtTime": "2024-03-06T00:00:00Z",
                "originatedBy": [AGENT_ID],
                "software_primaryPurpose": "application",
                "software_copyrightText": "Copyright 2024 Joshua Watt"
            },
            {
                "type": "software_File",
                "spdxId": FILE_ID,
                "creationInfo": "_:creationinfo",
                "name": "./usr/bin/my-program",
                "software_primaryPurpose": "executable"
            },
            {
                "type": "Relationship",
                "spdxId": RELATIONSHIP_ID,
                "creationInfo": "_:creationinfo",
                "from": PACKAGE_ID,
                "to": [FILE_ID],
                "relationshipType": "contains",
                "completeness": "complete"
            }
        ]
    }


def create_external_reference_graph() -> Dict[str, Any]:
    """Create a graph without a document whose relationship points outside it."""
    return {
        "@context": CONTEXT_URL,
        "@graph": [
            create_creation_info(),
            {
                "type": "software_Package",
                "spdxId": PACKAGE_ID,
                "creationInfo": "_:creationinfo",
                "name": "my-package"
            },
            {
                "type": "Relationship",
                "spdxId": RELATIONSHIP_ID,
                "creationInfo": "_:creationinfo",
                "from": PACKAGE_ID,
                "to": [EXTERNAL_ID],
                "relationshipType": "dependsOn"
            }
        ]
    }


def create_single_element_document() -> Dict[str, Any]:
    """Create a document whose root is a single element with inline creation info."""
    return {
        "@context": CONTEXT_URL,
        "type": "Person",
        "spdxId": AGENT_ID,
        "name": "Joshua Watt",
        "creationInfo": {
            "type": "CreationInfo",
            "specVersion": "3.0.1",
            "created": "2024-03-06T00:00:00Z",
            "createdBy": [AGENT_ID]
        }
    }


def create_graph_with_ids(count: int) -> Dict[str, Any]:
    """Create a graph of ``count`` persons sharing one creation info."""
    graph = [create_creation_info()]
    for i in range(count):
        graph.append({
            "type": "Person",
            "spdxId": f"http://spdx.example.com/Agent/{i}",
            "name": f"Agent {i}",
            "creationInfo": "_:creationinfo"
        })
    return {"@context": CONTEXT_URL, "@graph": graph}


def create_typed_values_graph() -> Dict[str, Any]:
    """Create a graph exercising integer, decimal and boolean properties."""
    return {
        "@context": CONTEXT_URL,
        "@graph": [
            create_creation_info(),
            {
                "type": "expandedlicensing_ListedLicense",
                "spdxId": "https://spdx.org/licenses/MIT",
                "creationInfo": "_:creationinfo",
                "name": "MIT License",
                "expandedlicensing_isOsiApproved": "true",
                "expandedlicensing_isFsfLibre": True
            },
            {
                "type": "security_CvssV3VulnAssessmentRelationship",
                "spdxId": "http://spdx.example.com/Assessment/1",
                "creationInfo": "_:creationinfo",
                "from": "http://spdx.example.com/Vulnerability/1",
                "to": [PACKAGE_ID],
                "relationshipType": "hasAssessmentFor",
                "security_score": "7.5",
                "security_severity": "high",
                "security_vectorString": "CVSS:3.1/AV:N/AC:L/PR:N/UI:N/S:U/C:H/I:N/A:N"
            },
            {
                "type": "software_Snippet",
                "spdxId": "http://spdx.example.com/Snippet/1",
                "creationInfo": "_:creationinfo",
                "software_snippetFromFile": FILE_ID,
                "software_lineRange": {
                    "type": "PositiveIntegerRange",
                    "beginIntegerRange": 3,
                    "endIntegerRange": "12"
                }
            }
        ]
    }


AI_PACKAGE_ID = "http://spdx.example.com/AIPackage/1"
DATASET_ID = "http://spdx.example.com/Dataset/1"
BUILD_ID = "http://spdx.example.com/Build/1"


def create_ai_dataset_build_graph() -> Dict[str, Any]:
    """Create a graph using the AI, Dataset and Build profiles."""
    return {
        "@context": CONTEXT_URL,
        "@graph": [
            create_creation_info(),
            {
                "type": "Person",
                "spdxId": AGENT_ID,
                "name": "Joshua Watt",
                "creationInfo": "_:creationinfo"
            },
            {
                "type": "ai_AIPackage",
                "spdxId": AI_PACKAGE_ID,
                "creationInfo": "_:creationinfo",
                "name": "sentiment-model",
                "software_primaryPurpose": "model",
                "software_downloadLocation": "https://models.example.com/sentiment-model.bin",
                "ai_typeOfModel": ["transformer"],
                "ai_autonomyType": "no",
                "ai_safetyRiskAssessment": "low",
                "ai_hyperparameter": [
                    {
                        "type": "DictionaryEntry",
                        "key": "learning_rate",
                        "value": "0.001"
                    }
                ],
                "ai_energyConsumption": {
                    "type": "ai_EnergyConsumption",
                    "ai_trainingEnergyConsumption": [
                        {
                            "type": "ai_EnergyConsumptionDescription",
                            "ai_energyQuantity": 12.5,
                            "ai_energyUnit": "kilowattHour"
                        }
                    ]
                }
            },
            {
                "type": "dataset_DatasetPackage",
                "spdxId": DATASET_ID,
                "creationInfo": "_:creationinfo",
                "name": "review-corpus",
                "software_primaryPurpose": "data",
                "dataset_datasetType": ["text", "categorical"],
                "dataset_datasetSize": 2048,
                "dataset_confidentialityLevel": "clear",
                "dataset_hasSensitivePersonalInformation": "yes"
            },
            {
                "type": "build_Build",
                "spdxId": BUILD_ID,
                "creationInfo": "_:creationinfo",
                "build_buildType": "https://build.example.com/types/make",
                "build_buildStartTime": "2024-03-06T00:00:00Z",
                "build_configSourceDigest": [
                    {
                        "type": "Hash",
                        "algorithm": "sha256",
                        "hashValue": "a0b1c2d3e4f5a6b7c8d9e0f1a2b3c4d5e6f7a8b9c0d1e2f3a4b5c6d7e8f9a0b1"
                    }
                ],
                "build_parameter": [
                    {
                        "type": "DictionaryEntry",
                        "key": "target",
                        "value": "all"
                    }
                ]
            },
            {
                "type": "Relationship",
                "spdxId": RELATIONSHIP_ID,
                "creationInfo": "_:creationinfo",
                "from": AI_PACKAGE_ID,
                "to": [DATASET_ID],
                "relationshipType": "trainedOn"
            }
        ]
    }
