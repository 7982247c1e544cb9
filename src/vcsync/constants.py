from __future__ import annotations

# Every key written onto a physical object lives under this prefix.
TENANCY_PREFIX = "tenancy.x-k8s.io/"

LABEL_CLUSTER = TENANCY_PREFIX + "cluster"
LABEL_UID = TENANCY_PREFIX + "uid"
LABEL_OWNER_REFERENCES = TENANCY_PREFIX + "ownerReferences"
LABEL_NAMESPACE = TENANCY_PREFIX + "namespace"
LABEL_VC_NAME = TENANCY_PREFIX + "vcname"
LABEL_VC_NAMESPACE = TENANCY_PREFIX + "vcnamespace"
LABEL_VC_UID = TENANCY_PREFIX + "vcuid"
LABEL_ADMIN_KUBECONFIG = TENANCY_PREFIX + "admin-kubeconfig"

# Bump when the key set changes; readers must tolerate older values.
LABEL_SCHEMA_VERSION = TENANCY_PREFIX + "schema-version"
SCHEMA_VERSION = "v1"

# Secret name and data key holding a tenant's admin kubeconfig.
KUBECONFIG_ADMIN_SECRET_NAME = "admin-kubeconfig"

DEFAULT_NAMESPACE = "default"
KUBERNETES_SERVICE = "kubernetes"
APISERVER_SERVICE = "apiserver-svc"

# Namespace names are DNS-1123 labels.
MAX_NAMESPACE_LENGTH = 63
TRUNCATED_PREFIX_LENGTH = 57
TRUNCATED_DIGEST_LENGTH = 5
CLUSTER_KEY_DIGEST_LENGTH = 6

# Feature gates read by the control-plane service check.
FEATURE_SUPER_CLUSTER_POOLING = "SuperClusterPooling"
FEATURE_SUPER_CLUSTER_SERVICE_NETWORK = "SuperClusterServiceNetwork"
KNOWN_FEATURE_GATES = frozenset({FEATURE_SUPER_CLUSTER_POOLING, FEATURE_SUPER_CLUSTER_SERVICE_NETWORK})

VIRTUAL_CLUSTER_GROUP = "tenancy.x-k8s.io"
VIRTUAL_CLUSTER_VERSION = "v1alpha1"
VIRTUAL_CLUSTER_PLURAL = "virtualclusters"
