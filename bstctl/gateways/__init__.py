"""Device gateway implementations.

Importing this package triggers gateway registration via @register_gateway.
"""

import bstctl.gateways.simulated  # noqa: F401
import bstctl.gateways.sonic  # noqa: F401
