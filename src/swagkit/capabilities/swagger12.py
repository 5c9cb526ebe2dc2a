"""Swagger 1.2 capability -- validate resource listings and convert them to 2.0.

Validation runs in two passes, like the reference tooling does:

1. **Structure** -- every document is checked against the 1.2 JSON Schemas in
   :mod:`~swagkit.capabilities.schemas12`.
2. **Semantics** -- only when the structure is clean: duplicate paths,
   methods and nicknames, model references, path parameters, and the links
   between the resource listing and its API declarations.

Conversion maps a resource listing and its declarations onto a single
Swagger 2.0 object (:func:`convert_to_v2`).
"""

from __future__ import annotations

import re
from typing import Any, Iterator, Optional, Sequence
from urllib.parse import urlparse

from jsonschema import Draft4Validator

from swagkit.capabilities.base import SpecCapability, issue_from_schema_error
from swagkit.capabilities.schemas12 import (
    API_DECLARATION_SCHEMA,
    RESOURCE_LISTING_SCHEMA,
)
from swagkit.exceptions import ValidationFailedError
from swagkit.models import DocumentResults, ValidationIssue, ValidationResults

PRIMITIVE_TYPES = frozenset(
    {"integer", "number", "string", "boolean", "array", "object", "void", "File"}
)

_PARAMETER_TYPES = frozenset({"string", "number", "integer", "boolean", "array"})
_FORM_PARAMETER_TYPES = _PARAMETER_TYPES | {"file"}

_PATH_TEMPLATE = re.compile(r"\{([^}]+)\}")

_resource_listing_validator = Draft4Validator(RESOURCE_LISTING_SCHEMA)
_api_declaration_validator = Draft4Validator(API_DECLARATION_SCHEMA)

JsonPath = list[Any]


class Swagger12Capability(SpecCapability):
    """Swagger 1.2: resource listing plus API declarations."""

    version = "1.2"
    docs_url = "https://github.com/OAI/OpenAPI-Specification/blob/main/versions/1.2.md"
    schemas_url = "https://github.com/OAI/OpenAPI-Specification/tree/main/schemas/v1.2"

    def validate(
        self,
        resource_listing: dict[str, Any],
        api_declarations: Sequence[Any] = (),
    ) -> ValidationResults:
        """Validate a resource listing together with its API declarations.

        Args:
            resource_listing: The root document.
            api_declarations: The declarations, in command-line order.

        Returns:
            Errors and warnings for the listing and for each declaration.
        """
        results = ValidationResults(
            errors=_schema_issues(_resource_listing_validator, resource_listing),
            api_declarations=[
                DocumentResults(errors=_schema_issues(_api_declaration_validator, d))
                for d in api_declarations
            ],
        )
        if results.error_count:
            return results

        _check_resource_listing(resource_listing, results)
        for declaration, declaration_results in zip(
            api_declarations, results.api_declarations
        ):
            _check_api_declaration(declaration, declaration_results)
        _check_resources(resource_listing, api_declarations, results)
        return results

    def convert(
        self,
        resource_listing: dict[str, Any],
        api_declarations: list[Any],
        skip_validation: bool = False,
    ) -> dict[str, Any]:
        """Convert the 1.2 document set to a Swagger 2.0 object.

        Raises:
            ValidationFailedError: If validation runs and reports errors.
                Warnings alone do not stop the conversion.
        """
        if not skip_validation:
            results = self.validate(resource_listing, api_declarations)
            if results.error_count:
                raise ValidationFailedError(
                    "The Swagger 1.2 documents failed validation", results
                )
        return convert_to_v2(resource_listing, api_declarations)


# ------------------------------------------------------------------ #
# Validation
# ------------------------------------------------------------------ #


def _schema_issues(validator: Draft4Validator, document: Any) -> list[ValidationIssue]:
    return [issue_from_schema_error(e) for e in validator.iter_errors(document)]


def _issue(code: str, message: str, path: JsonPath) -> ValidationIssue:
    return ValidationIssue(code=code, message=message, path=path)


def _check_resource_listing(
    resource_listing: dict[str, Any], results: ValidationResults
) -> None:
    seen: set[str] = set()
    for index, api in enumerate(resource_listing.get("apis", [])):
        path = api["path"]
        if path in seen:
            results.errors.append(
                _issue(
                    "DUPLICATE_RESOURCE_PATH",
                    f"Resource path already defined: {path}",
                    ["apis", index, "path"],
                )
            )
        seen.add(path)


def _check_api_declaration(
    declaration: dict[str, Any], results: DocumentResults
) -> None:
    models: dict[str, Any] = declaration.get("models", {})

    for name, model in models.items():
        if model["id"] != name:
            results.errors.append(
                _issue(
                    "MODEL_ID_MISMATCH",
                    f"Model id does not match model name: {model['id']}",
                    ["models", name, "id"],
                )
            )
        for index, required in enumerate(model.get("required", [])):
            if required not in model["properties"]:
                results.errors.append(
                    _issue(
                        "MISSING_REQUIRED_MODEL_PROPERTY",
                        f"Model requires property but it is not defined: {required}",
                        ["models", name, "required", index],
                    )
                )

    referenced: set[str] = set()
    for model_name, path in _model_references(declaration):
        referenced.add(model_name)
        if model_name not in models:
            results.errors.append(
                _issue(
                    "UNRESOLVABLE_MODEL",
                    f"Model could not be resolved: {model_name}",
                    path,
                )
            )

    for name in models:
        if name not in referenced:
            results.warnings.append(
                _issue("UNUSED_MODEL", f"Model is defined but is not used: {name}", ["models", name])
            )

    _check_apis(declaration, results)


def _check_apis(declaration: dict[str, Any], results: DocumentResults) -> None:
    api_paths: set[str] = set()
    nicknames: set[str] = set()

    for api_index, api in enumerate(declaration["apis"]):
        api_path = api["path"]
        if api_path in api_paths:
            results.errors.append(
                _issue(
                    "DUPLICATE_API_PATH",
                    f"API path (or equivalent) already defined: {api_path}",
                    ["apis", api_index, "path"],
                )
            )
        api_paths.add(api_path)
        template_names = _PATH_TEMPLATE.findall(api_path)

        methods: set[str] = set()
        for op_index, operation in enumerate(api["operations"]):
            op_path: JsonPath = ["apis", api_index, "operations", op_index]
            method = operation["method"]
            if method in methods:
                results.errors.append(
                    _issue(
                        "DUPLICATE_OPERATION_METHOD",
                        f"Operation method already defined: {method}",
                        op_path + ["method"],
                    )
                )
            methods.add(method)

            nickname = operation["nickname"]
            if nickname in nicknames:
                results.errors.append(
                    _issue(
                        "DUPLICATE_OPERATION_NICKNAME",
                        f"Operation nickname already defined: {nickname}",
                        op_path + ["nickname"],
                    )
                )
            nicknames.add(nickname)

            _check_parameters(operation, template_names, op_path, results)


def _check_parameters(
    operation: dict[str, Any],
    template_names: list[str],
    op_path: JsonPath,
    results: DocumentResults,
) -> None:
    declared_path_names: set[str] = set()
    seen: set[tuple[str, str]] = set()

    for index, parameter in enumerate(operation["parameters"]):
        name, param_type = parameter["name"], parameter["paramType"]
        if (name, param_type) in seen:
            results.errors.append(
                _issue(
                    "DUPLICATE_PARAMETER",
                    f"Parameter already defined: {name}",
                    op_path + ["parameters", index, "name"],
                )
            )
        seen.add((name, param_type))

        if param_type != "path":
            continue
        declared_path_names.add(name)
        if name not in template_names:
            results.errors.append(
                _issue(
                    "UNRESOLVABLE_API_PATH_PARAMETER",
                    f"API path parameter could not be resolved: {name}",
                    op_path + ["parameters", index, "name"],
                )
            )

    for name in template_names:
        if name not in declared_path_names:
            results.errors.append(
                _issue(
                    "MISSING_API_PATH_PARAMETER",
                    f"API requires path parameter but it is not defined: {name}",
                    op_path + ["parameters"],
                )
            )


def _check_resources(
    resource_listing: dict[str, Any],
    api_declarations: Sequence[Any],
    results: ValidationResults,
) -> None:
    """Match resource listing paths against declaration resource paths."""
    listed = [api["path"] for api in resource_listing.get("apis", [])]
    declared: set[str] = set()

    for declaration, declaration_results in zip(
        api_declarations, results.api_declarations
    ):
        resource_path = declaration.get("resourcePath")
        if resource_path is None:
            continue
        if resource_path in declared:
            declaration_results.errors.append(
                _issue(
                    "DUPLICATE_RESOURCEPATH",
                    f"API Declaration resourcePath already defined: {resource_path}",
                    ["resourcePath"],
                )
            )
        elif resource_path not in listed:
            declaration_results.errors.append(
                _issue(
                    "UNRESOLVABLE_RESOURCEPATH",
                    f"Resource path is not defined in the resource listing: {resource_path}",
                    ["resourcePath"],
                )
            )
        declared.add(resource_path)

    for index, path in enumerate(listed):
        if path not in declared:
            results.warnings.append(
                _issue(
                    "UNUSED_RESOURCE",
                    f"Resource is defined but is not used: {path}",
                    ["apis", index, "path"],
                )
            )


def _type_references(data_type: dict[str, Any], path: JsonPath) -> Iterator[tuple[str, JsonPath]]:
    """Yield model names referenced by a 1.2 data type (``type``, ``$ref``, ``items``)."""
    ref = data_type.get("$ref")
    if isinstance(ref, str):
        yield ref, path + ["$ref"]
    type_ = data_type.get("type")
    if isinstance(type_, str) and type_ not in PRIMITIVE_TYPES:
        yield type_, path + ["type"]
    items = data_type.get("items")
    if isinstance(items, dict):
        yield from _type_references(items, path + ["items"])


def _model_references(declaration: dict[str, Any]) -> Iterator[tuple[str, JsonPath]]:
    for name, model in declaration.get("models", {}).items():
        model_path: JsonPath = ["models", name]
        for prop_name, prop in model["properties"].items():
            yield from _type_references(prop, model_path + ["properties", prop_name])
        for index, sub_type in enumerate(model.get("subTypes", [])):
            yield sub_type, model_path + ["subTypes", index]

    for api_index, api in enumerate(declaration["apis"]):
        for op_index, operation in enumerate(api["operations"]):
            op_path: JsonPath = ["apis", api_index, "operations", op_index]
            yield from _type_references(operation, op_path)
            for index, parameter in enumerate(operation["parameters"]):
                yield from _type_references(parameter, op_path + ["parameters", index])
            for index, message in enumerate(operation.get("responseMessages", [])):
                model = message.get("responseModel")
                if model is not None and model not in PRIMITIVE_TYPES:
                    yield model, op_path + ["responseMessages", index, "responseModel"]


# ------------------------------------------------------------------ #
# Conversion
# ------------------------------------------------------------------ #


def convert_to_v2(
    resource_listing: dict[str, Any], api_declarations: Sequence[Any]
) -> dict[str, Any]:
    """Build a Swagger 2.0 object from a 1.2 resource listing and its declarations.

    The input is not assumed to be valid: missing or mistyped fields are
    skipped rather than raising, so ``convert --no-validation`` produces
    output for documents that fail validation.

    Args:
        resource_listing: The 1.2 root document.
        api_declarations: The 1.2 declarations, in order. Entries that are
            not objects are ignored.

    Returns:
        The Swagger 2.0 object.
    """
    declarations = [d for d in api_declarations if isinstance(d, dict)]
    swagger: dict[str, Any] = {
        "swagger": "2.0",
        "info": _info(resource_listing, declarations),
    }

    base_path = ""
    base_url = next(
        (d["basePath"] for d in declarations if isinstance(d.get("basePath"), str)),
        None,
    )
    if base_url:
        parsed = urlparse(base_url)
        if parsed.netloc:
            swagger["host"] = parsed.netloc
        base_path = parsed.path.rstrip("/")
        swagger["basePath"] = base_path or "/"
        if parsed.scheme:
            swagger["schemes"] = [parsed.scheme]

    tags = _tags(resource_listing)
    if tags:
        swagger["tags"] = tags

    paths: dict[str, Any] = {}
    definitions: dict[str, Any] = {}
    for declaration in declarations:
        prefix = _path_prefix(declaration.get("basePath"), base_path)
        tag = str(declaration.get("resourcePath") or "").strip("/")
        for api in _dicts(declaration.get("apis")):
            api_path = prefix + str(api.get("path") or "/")
            if not api_path.startswith("/"):
                api_path = "/" + api_path
            path_item = paths.setdefault(api_path, {})
            for operation in _dicts(api.get("operations")):
                method = str(operation.get("method") or "get").lower()
                path_item[method] = _operation(operation, declaration, tag)
        models = declaration.get("models")
        if isinstance(models, dict):
            for name, model in models.items():
                if isinstance(model, dict):
                    definitions[name] = _model_schema(model)
    swagger["paths"] = paths

    if definitions:
        _apply_sub_types(declarations, definitions)
        swagger["definitions"] = definitions

    security_definitions = _security_definitions(resource_listing.get("authorizations"))
    if security_definitions:
        swagger["securityDefinitions"] = security_definitions

    return swagger


def _dicts(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _path_prefix(declaration_base: Any, base_path: str) -> str:
    """Path segment a declaration's basePath adds on top of the global basePath."""
    if not isinstance(declaration_base, str):
        return ""
    path = urlparse(declaration_base).path.rstrip("/")
    if path.startswith(base_path):
        return path[len(base_path):]
    return ""


def _info(resource_listing: dict[str, Any], declarations: list[dict[str, Any]]) -> dict[str, Any]:
    source = resource_listing.get("info")
    source = source if isinstance(source, dict) else {}

    version = resource_listing.get("apiVersion") or next(
        (d["apiVersion"] for d in declarations if d.get("apiVersion")), "1.0.0"
    )
    info: dict[str, Any] = {
        "title": source.get("title") or "Title was not specified",
        "version": str(version),
    }
    if source.get("description"):
        info["description"] = source["description"]
    if source.get("termsOfServiceUrl"):
        info["termsOfService"] = source["termsOfServiceUrl"]
    if source.get("contact"):
        info["contact"] = {"email": source["contact"]}
    if source.get("license") or source.get("licenseUrl"):
        license_info = {"name": source.get("license") or source["licenseUrl"]}
        if source.get("licenseUrl"):
            license_info["url"] = source["licenseUrl"]
        info["license"] = license_info
    return info


def _tags(resource_listing: dict[str, Any]) -> list[dict[str, Any]]:
    tags = []
    for api in _dicts(resource_listing.get("apis")):
        name = str(api.get("path") or "").strip("/")
        if not name:
            continue
        tag = {"name": name}
        if api.get("description"):
            tag["description"] = api["description"]
        tags.append(tag)
    return tags


def _operation(
    operation: dict[str, Any], declaration: dict[str, Any], tag: str
) -> dict[str, Any]:
    result: dict[str, Any] = {}
    if tag:
        result["tags"] = [tag]
    if operation.get("summary"):
        result["summary"] = operation["summary"]
    if operation.get("notes"):
        result["description"] = operation["notes"]
    if operation.get("nickname"):
        result["operationId"] = operation["nickname"]

    for key in ("produces", "consumes"):
        values = operation.get(key) or declaration.get(key)
        if isinstance(values, list) and values:
            result[key] = values

    parameters = [_parameter(p) for p in _dicts(operation.get("parameters"))]
    if parameters:
        result["parameters"] = parameters

    result["responses"] = _responses(operation)

    if operation.get("deprecated") in (True, "true"):
        result["deprecated"] = True

    security = _security(operation.get("authorizations") or declaration.get("authorizations"))
    if security:
        result["security"] = security
    return result


def _parameter(parameter: dict[str, Any]) -> dict[str, Any]:
    param_type = parameter.get("paramType")
    location = "formData" if param_type == "form" else param_type
    result: dict[str, Any] = {"name": parameter.get("name"), "in": location}
    if parameter.get("description"):
        result["description"] = parameter["description"]

    if location == "body":
        result["required"] = bool(parameter.get("required", False))
        result["schema"] = _schema(parameter) or {"type": "string"}
        return result

    if location == "path":
        result["required"] = True
    elif "required" in parameter:
        result["required"] = bool(parameter["required"])

    primitive = _schema(parameter)
    allowed = _FORM_PARAMETER_TYPES if location == "formData" else _PARAMETER_TYPES
    if primitive.get("type") not in allowed:
        primitive = {"type": "string"}

    if parameter.get("allowMultiple") and primitive.get("type") != "array":
        default = primitive.pop("default", None)
        result.update({"type": "array", "items": primitive, "collectionFormat": "csv"})
        if default is not None:
            result["default"] = [default]
    else:
        result.update(primitive)
    return result


def _responses(operation: dict[str, Any]) -> dict[str, Any]:
    responses: dict[str, Any] = {}
    for message in _dicts(operation.get("responseMessages")):
        response: dict[str, Any] = {"description": str(message.get("message") or "")}
        model = message.get("responseModel")
        if isinstance(model, str) and model != "void":
            response["schema"] = _schema({"type": model})
        responses[str(message.get("code"))] = response

    success = _schema(operation)
    if success.get("type") != "void" and success:
        response = responses.setdefault("200", {"description": "Success"})
        response.setdefault("schema", success)
    elif not responses:
        responses["200"] = {"description": "No response was specified"}
    return responses


def _schema(data_type: dict[str, Any]) -> dict[str, Any]:
    """Translate a 1.2 data type (``type``/``format``/``$ref``/``items``) to a 2.0 schema."""
    ref = data_type.get("$ref")
    if isinstance(ref, str):
        return {"$ref": f"#/definitions/{ref}"}

    type_ = data_type.get("type")
    if not isinstance(type_, str):
        return {}
    if type_ == "void":
        return {"type": "void"}
    if type_ == "File":
        return {"type": "file"}
    if type_ not in PRIMITIVE_TYPES:
        return {"$ref": f"#/definitions/{type_}"}

    schema: dict[str, Any] = {"type": type_}
    if type_ == "array":
        items = data_type.get("items")
        schema["items"] = (_schema(items) if isinstance(items, dict) else {}) or {"type": "string"}
        if data_type.get("uniqueItems"):
            schema["uniqueItems"] = True
        return schema

    if data_type.get("format"):
        schema["format"] = data_type["format"]
    if isinstance(data_type.get("enum"), list):
        schema["enum"] = [_coerce(v, type_) for v in data_type["enum"]]
    if data_type.get("defaultValue") is not None:
        schema["default"] = _coerce(data_type["defaultValue"], type_)
    for key in ("minimum", "maximum"):
        if data_type.get(key) is not None:
            schema[key] = _coerce(data_type[key], "number")
    return schema


def _coerce(value: Any, type_: str) -> Any:
    """Turn 1.2 string-encoded values into the JSON type their schema declares."""
    if not isinstance(value, str):
        return value
    try:
        if type_ == "integer":
            return int(value)
        if type_ == "number":
            number = float(value)
            return int(number) if number.is_integer() else number
    except ValueError:
        return value
    if type_ == "boolean" and value.lower() in ("true", "false"):
        return value.lower() == "true"
    return value


def _model_schema(model: dict[str, Any]) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": "object"}
    if model.get("description"):
        schema["description"] = model["description"]
    if isinstance(model.get("required"), list) and model["required"]:
        schema["required"] = list(model["required"])
    if model.get("discriminator"):
        schema["discriminator"] = model["discriminator"]

    properties: dict[str, Any] = {}
    raw_properties = model.get("properties")
    if isinstance(raw_properties, dict):
        for name, prop in raw_properties.items():
            if not isinstance(prop, dict):
                continue
            prop_schema = _schema(prop) or {"type": "string"}
            if prop.get("description") and "$ref" not in prop_schema:
                prop_schema["description"] = prop["description"]
            properties[name] = prop_schema
    schema["properties"] = properties
    return schema


def _apply_sub_types(
    declarations: list[dict[str, Any]], definitions: dict[str, Any]
) -> None:
    """Rewrite 1.2 ``subTypes`` as ``allOf`` inheritance on each subtype."""
    for declaration in declarations:
        models = declaration.get("models")
        if not isinstance(models, dict):
            continue
        for name, model in models.items():
            if not isinstance(model, dict) or not isinstance(model.get("subTypes"), list):
                continue
            for sub_type in model["subTypes"]:
                if sub_type in definitions:
                    definitions[sub_type] = {
                        "allOf": [{"$ref": f"#/definitions/{name}"}, definitions[sub_type]]
                    }


def _security(authorizations: Any) -> list[dict[str, list[str]]]:
    if not isinstance(authorizations, dict):
        return []
    security = []
    for name, scopes in authorizations.items():
        names = [s["scope"] for s in _dicts(scopes) if isinstance(s.get("scope"), str)]
        security.append({name: names})
    return security


def _security_definitions(authorizations: Any) -> dict[str, Any]:
    if not isinstance(authorizations, dict):
        return {}
    definitions: dict[str, Any] = {}
    for name, auth in authorizations.items():
        if not isinstance(auth, dict):
            continue
        definition = _security_definition(auth)
        if definition is not None:
            definitions[name] = definition
    return definitions


def _security_definition(auth: dict[str, Any]) -> Optional[dict[str, Any]]:
    auth_type = auth.get("type")
    if auth_type == "basicAuth":
        return {"type": "basic"}
    if auth_type == "apiKey":
        return {
            "type": "apiKey",
            "in": auth.get("passAs") or "header",
            "name": auth.get("keyname") or "api_key",
        }
    if auth_type != "oauth2":
        return None

    scopes = {
        s["scope"]: str(s.get("description") or "")
        for s in _dicts(auth.get("scopes"))
        if isinstance(s.get("scope"), str)
    }
    grant_types = auth.get("grantTypes")
    grant_types = grant_types if isinstance(grant_types, dict) else {}

    implicit = grant_types.get("implicit")
    if isinstance(implicit, dict):
        endpoint = implicit.get("loginEndpoint") or {}
        return {
            "type": "oauth2",
            "flow": "implicit",
            "authorizationUrl": endpoint.get("url", ""),
            "scopes": scopes,
        }

    code = grant_types.get("authorization_code")
    if isinstance(code, dict):
        request_endpoint = code.get("tokenRequestEndpoint") or {}
        token_endpoint = code.get("tokenEndpoint") or {}
        return {
            "type": "oauth2",
            "flow": "accessCode",
            "authorizationUrl": request_endpoint.get("url", ""),
            "tokenUrl": token_endpoint.get("url", ""),
            "scopes": scopes,
        }
    return None
