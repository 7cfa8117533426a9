"""
Project constants definitions
"""

# ============================================================
# Inventory Location
# ============================================================

LOCAL_RESOURCE_FILE = "machlist-resources.toml"
USER_RESOURCE_DIR = ".machlist"
USER_RESOURCE_FILE = "resources.toml"

ENV_RESOURCE_FILE = "MACHLIST_RESOURCES"
ENV_TARGET = "MACHLIST_TARGET"

# ============================================================
# Resolution
# ============================================================

DEFAULT_TARGET_ENV = "alpha"
USERNAME_ENV_PREFIX = "env:"

# ============================================================
# SSH / SCP
# ============================================================

SSH_PROGRAM = "ssh"
SCP_PROGRAM = "scp"
SSH_DIR = ".ssh"
KNOWN_HOSTS_PREFIX = "known_hosts_machlist_"
MAX_SSH_VERBOSITY = 3

DEFAULT_COPY_DESTINATION = "./"

MIN_PORT = 1
MAX_PORT = 65535
