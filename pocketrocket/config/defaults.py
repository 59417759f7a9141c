"""
Default settings for pocketrocket.

These are the default values used when no user configuration exists.
"""

# Baseline region for new state buckets when the operator leaves it blank
DEFAULT_REGION = "eu-central-1"

DEFAULT_SETTINGS = {
    "version": "1.0.0",

    # Engine binary
    "pulumi_binary": "pulumi",

    # Operator program
    "project": {
        "name": "",
        "runtime": "python",
        "program_dir": ".",
    },

    # State backend
    "backend": {
        "scheme": "s3",
        "default_region": DEFAULT_REGION,
    },

    # Secrets provider for sensitive stack data
    "secrets": {
        "enabled": True,
        "scheme": "awskms",
        "description": "Key used to encrypt sensitive pulumi stack data",
    },

    "stack": {
        "default_name": "prod",
    },

    "output": {
        "color": "always",
    },

    # None means the boto3 default chain decides
    "aws": {
        "profile": None,
        "region": None,
    },

    "logging": {
        "level": "INFO",
        "log_file": True,
    },
}

# Environment variable -> dotted setting key
ENV_OVERRIDES = {
    "POCKETROCKET_PROJECT": "project.name",
    "POCKETROCKET_STACK": "stack.default_name",
    "POCKETROCKET_REGION": "backend.default_region",
    "POCKETROCKET_PROGRAM_DIR": "project.program_dir",
    "POCKETROCKET_PULUMI_BINARY": "pulumi_binary",
    "AWS_PROFILE": "aws.profile",
}
