"""JSON Schemas (Draft 4) for Swagger 1.2 resource listings and API declarations.

These follow the published 1.2 schemas closely enough for structural checks.
Cross-document and reference checks live in
:mod:`~swagkit.capabilities.swagger12`.
"""

from __future__ import annotations

from typing import Any

_STRING_ARRAY: dict[str, Any] = {"type": "array", "items": {"type": "string"}}

_DATA_TYPE_PROPERTIES: dict[str, Any] = {
    "type": {"type": "string"},
    "$ref": {"type": "string"},
    "format": {"type": "string"},
    "defaultValue": {"type": ["string", "number", "integer", "boolean"]},
    "enum": {"type": "array", "minItems": 1, "uniqueItems": True},
    "minimum": {"type": ["string", "number"]},
    "maximum": {"type": ["string", "number"]},
    "items": {
        "type": "object",
        "properties": {
            "type": {"type": "string"},
            "$ref": {"type": "string"},
            "format": {"type": "string"},
        },
    },
    "uniqueItems": {"type": "boolean"},
}

_AUTHORIZATIONS: dict[str, Any] = {
    "type": "object",
    "additionalProperties": {
        "type": "array",
        "items": {
            "type": "object",
            "required": ["scope"],
            "properties": {
                "scope": {"type": "string"},
                "description": {"type": "string"},
            },
        },
    },
}

RESOURCE_LISTING_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-04/schema#",
    "type": "object",
    "required": ["swaggerVersion", "apis"],
    "properties": {
        "swaggerVersion": {"enum": ["1.2"]},
        "apiVersion": {"type": "string"},
        "apis": {
            "type": "array",
            "items": {"$ref": "#/definitions/resourceObject"},
        },
        "info": {"$ref": "#/definitions/infoObject"},
        "authorizations": {
            "type": "object",
            "additionalProperties": {"$ref": "#/definitions/authorizationObject"},
        },
    },
    "definitions": {
        "resourceObject": {
            "type": "object",
            "required": ["path"],
            "properties": {
                "path": {"type": "string", "pattern": "^/"},
                "description": {"type": "string"},
            },
            "additionalProperties": False,
        },
        "infoObject": {
            "type": "object",
            "required": ["title", "description"],
            "properties": {
                "title": {"type": "string"},
                "description": {"type": "string"},
                "termsOfServiceUrl": {"type": "string"},
                "contact": {"type": "string"},
                "license": {"type": "string"},
                "licenseUrl": {"type": "string"},
            },
            "additionalProperties": False,
        },
        "authorizationObject": {
            "type": "object",
            "required": ["type"],
            "properties": {
                "type": {"enum": ["basicAuth", "apiKey", "oauth2"]},
                "passAs": {"enum": ["header", "query"]},
                "keyname": {"type": "string"},
                "scopes": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "required": ["scope"],
                        "properties": {
                            "scope": {"type": "string"},
                            "description": {"type": "string"},
                        },
                    },
                },
                "grantTypes": {"type": "object"},
            },
        },
    },
}

API_DECLARATION_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-04/schema#",
    "type": "object",
    "required": ["swaggerVersion", "basePath", "apis"],
    "properties": {
        "swaggerVersion": {"enum": ["1.2"]},
        "apiVersion": {"type": "string"},
        "basePath": {"type": "string", "pattern": "^https?://"},
        "resourcePath": {"type": "string", "pattern": "^/"},
        "apis": {"type": "array", "items": {"$ref": "#/definitions/apiObject"}},
        "models": {
            "type": "object",
            "additionalProperties": {"$ref": "#/definitions/modelObject"},
        },
        "produces": _STRING_ARRAY,
        "consumes": _STRING_ARRAY,
        "authorizations": _AUTHORIZATIONS,
    },
    "definitions": {
        "apiObject": {
            "type": "object",
            "required": ["path", "operations"],
            "properties": {
                "path": {"type": "string", "pattern": "^/"},
                "description": {"type": "string"},
                "operations": {
                    "type": "array",
                    "items": {"$ref": "#/definitions/operationObject"},
                },
            },
            "additionalProperties": False,
        },
        "operationObject": {
            "type": "object",
            "required": ["method", "nickname", "parameters"],
            "properties": dict(
                _DATA_TYPE_PROPERTIES,
                method={"enum": ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]},
                nickname={"type": "string", "pattern": "^[a-zA-Z0-9_]+$"},
                summary={"type": "string", "maxLength": 120},
                notes={"type": "string"},
                parameters={
                    "type": "array",
                    "items": {"$ref": "#/definitions/parameterObject"},
                },
                responseMessages={
                    "type": "array",
                    "items": {"$ref": "#/definitions/responseMessageObject"},
                },
                produces=_STRING_ARRAY,
                consumes=_STRING_ARRAY,
                deprecated={"enum": ["true", "false", True, False]},
                authorizations=_AUTHORIZATIONS,
            ),
        },
        "parameterObject": {
            "type": "object",
            "required": ["paramType", "name"],
            "properties": dict(
                _DATA_TYPE_PROPERTIES,
                paramType={"enum": ["path", "query", "body", "header", "form"]},
                name={"type": "string"},
                description={"type": "string"},
                required={"type": "boolean"},
                allowMultiple={"type": "boolean"},
            ),
        },
        "responseMessageObject": {
            "type": "object",
            "required": ["code", "message"],
            "properties": {
                "code": {"type": "integer", "minimum": 100, "maximum": 599},
                "message": {"type": "string"},
                "responseModel": {"type": "string"},
            },
        },
        "modelObject": {
            "type": "object",
            "required": ["id", "properties"],
            "properties": {
                "id": {"type": "string"},
                "description": {"type": "string"},
                "required": dict(_STRING_ARRAY, uniqueItems=True),
                "properties": {
                    "type": "object",
                    "additionalProperties": {
                        "type": "object",
                        "properties": dict(
                            _DATA_TYPE_PROPERTIES, description={"type": "string"}
                        ),
                    },
                },
                "subTypes": _STRING_ARRAY,
                "discriminator": {"type": "string"},
            },
        },
    },
}
