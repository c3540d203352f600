"""Internal modules for the KEDA connector SDK.

Import the public names from `keda_connector` instead of these modules.

Modules:
    invoke - Connector metadata and retrying function invocation
    aws - AWS access configuration
    http - Shared HTTP client configuration
    observability - Structured logging setup
"""
