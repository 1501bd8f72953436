"""The tags/labels to associate metadata with instances."""

# Tag uniquely identifying all nodes of a tagged group
CLOUDSWEEP_TAG_NODE_TAG = "cloudsweep-node-tag"

# Lifecycle states of a node as reported by the provider
NODE_STATE_PENDING = "pending"
NODE_STATE_RUNNING = "running"
NODE_STATE_SHUTTING_DOWN = "shutting-down"
NODE_STATE_STOPPING = "stopping"
NODE_STATE_STOPPED = "stopped"
NODE_STATE_TERMINATED = "terminated"
NODE_STATE_UNKNOWN = "unknown"

# States from which a node still needs to be destroyed
NODE_STATES_NON_TERMINATED = [
    NODE_STATE_PENDING,
    NODE_STATE_RUNNING,
    NODE_STATE_STOPPING,
    NODE_STATE_STOPPED,
]

# States of a node already terminating which may still hold its resources
NODE_STATES_TERMINATING = [
    NODE_STATE_SHUTTING_DOWN,
]

# Auxiliary resource kinds reported in teardown failures
RESOURCE_KIND_NODE = "node"
RESOURCE_KIND_KEY_PAIR = "key-pair"
RESOURCE_KIND_SECURITY_GROUP = "security-group"
