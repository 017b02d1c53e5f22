"""Constants shared by the extensions types, defaults and conversions."""

GROUP_NAME = "extensions"

# Update strategy types
ROLLING_UPDATE_DAEMON_SET_STRATEGY = "RollingUpdate"
ROLLING_UPDATE_DEPLOYMENT_STRATEGY = "RollingUpdate"
RECREATE_DEPLOYMENT_STRATEGY = "Recreate"

# Label keys added to pods so that controllers of different revisions never
# select each other's pods
DEFAULT_DEPLOYMENT_UNIQUE_LABEL_KEY = "pod-template-hash"
DEFAULT_DAEMON_SET_UNIQUE_LABEL_KEY = "daemonset.kubernetes.io/podTemplateHash"

DEFAULT_CPU_UTILIZATION_PERCENTAGE = 80
