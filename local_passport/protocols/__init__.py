"""
Protocols - Authentication strategies built on the user and passport stores.
"""

from local_passport.protocols.local import LocalProtocol, Flash

__all__ = ["LocalProtocol", "Flash"]
