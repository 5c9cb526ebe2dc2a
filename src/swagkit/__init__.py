"""swagkit -- Validate Swagger documents and convert Swagger 1.2 to 2.0.

This package is the command-line front end for working with Swagger API
descriptions in either schema generation: the legacy 1.2 layout (a resource
listing plus API declarations) or the current 2.0 layout (one self-contained
Swagger object). Documents may be local files or remote URLs, in JSON or
YAML.

Typical workflow::

    swagkit validate petstore.yaml
    swagkit convert api-docs.json pet.json store.json --yaml > swagger.yaml

Modules:
    app: Typer application and CLI entry point.
    router: Dispatches commands to the version-specific capability.
    acquisition: Fetch, parse, and classify the requested documents.
    capabilities: Version-keyed validate/convert implementations.
    models: Pydantic models shared across the entire package.
    config: Configuration precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.3.0"
