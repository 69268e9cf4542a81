"""Explanation templates for the failure reasons the checker recognises."""

IMAGE_PULL_SECRET_MISSING = (
    "Error getting secret {secret}: {cause} in namespace {namespace}, please add it"
)

IMAGE_PULL_SECRET_PRESENT = (
    "Secret {secret} is present in namespace {namespace}, this error could be due to "
    "expired or wrong values in the secret"
)

IMAGE_PULL_SECRET_UNSET = (
    "Pod {pod} reports {reason} but has no imagePullSecrets configured, add a registry "
    "secret to the deployment or check the image name"
)

CONFIG_SECRET_REF = (
    'Check if the env block in deployment yaml has correct "secretKeyRef", '
    'also see the "SecretStore" if the secret is from vault'
)

CONFIG_MAP_REF = (
    'Check if the env block in deployment yaml has correct "configMapKeyRef" to the volume mount'
)

CONTAINER_RUNNING = "Container {container} is in running state"

LOG_EVIDENCE_FOUND = "Found {count} log line(s) pointing at the error"

LOG_EVIDENCE_NONE = "No log lines mentioning an error were found"

LOG_STREAM_FAILED = "Could not read container logs: {error}"
