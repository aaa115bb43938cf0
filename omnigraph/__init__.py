"""OmniGraph - validated omnichain application topology.

Declares which contract deployments exist on which chains and which
directed messaging paths between them are enabled, each carrying the
enforced execution options applied to its messages.
"""

__version__ = "0.1.0"
